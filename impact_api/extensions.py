# impact_api/extensions.py
from flask import current_app
from flask_cors import CORS

from .storage import StoryStore

STORE_EXTENSION_KEY = "story_store"

# CORS is a real Flask extension (keeps init_app)
cors = CORS()


def init_store(app, store: StoryStore | None = None) -> StoryStore:
    """Attach the single StoryStore for this app, building it from config if needed."""
    if store is None:
        store = StoryStore(
            app.config.get("STORIES_FILE"),
            logger=app.logger,
            strict=app.config.get("STORE_STRICT", False),
            lock_timeout=app.config.get("STORE_LOCK_TIMEOUT"),
        )
    app.extensions[STORE_EXTENSION_KEY] = store
    return store


def get_store() -> StoryStore:
    return current_app.extensions[STORE_EXTENSION_KEY]
