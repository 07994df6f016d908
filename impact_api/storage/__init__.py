from .errors import ConfigurationError, MalformedDocument, StorageUnavailable, StoreBusy
from .story_store import StoryStore

__all__ = [
    "ConfigurationError",
    "MalformedDocument",
    "StorageUnavailable",
    "StoreBusy",
    "StoryStore",
]
