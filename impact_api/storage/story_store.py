from contextlib import contextmanager
from pathlib import Path
import json
import logging
import math
import os
import stat
import tempfile
import threading
from typing import Any, Dict, List, Optional

from ..models import NewStory, Story
from .errors import ConfigurationError, MalformedDocument, StorageUnavailable, StoreBusy

COLLECTION_KEY = "impactStories"
LEGACY_COLLECTION_KEY = "ImpactStories"


class StoryStore:
    """The stories collection as one JSON document on disk.

    Every operation loads the whole document, works on it and (for writes)
    saves it back while holding a single lock, so reads and writes from
    concurrent request threads are fully serialized.

    A document that cannot be parsed is treated as an empty collection
    unless ``strict`` is set. That keeps the API readable after a bad write
    but the next create will overwrite whatever was in the file. Within a
    readable document, missing optional fields take their defaults and only
    records without a usable id or with wrongly typed fields are skipped.
    """

    def __init__(
        self,
        path,
        logger: Optional[logging.Logger] = None,
        strict: bool = False,
        lock_timeout: Optional[float] = None,
    ):
        if path is None or not str(path).strip():
            raise ConfigurationError("stories file path is not configured")
        self.path = Path(path)
        if self.path.is_dir():
            raise ConfigurationError(f"stories file path is a directory: {self.path}")
        if lock_timeout is not None and not (math.isfinite(lock_timeout) and lock_timeout >= 0):
            raise ConfigurationError(f"lock timeout must be a non-negative number of seconds: {lock_timeout!r}")
        self.strict = strict
        self.lock_timeout = lock_timeout
        self.logger = logger or logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._ensure_file()

    def _ensure_file(self):
        with self._locked():
            if self.path.exists():
                return
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                self.logger.error("Failed to create data directory %s: %s", self.path.parent, exc)
                raise StorageUnavailable("could not initialize stories file") from exc
            self._save([])
            self.logger.info("Created new data file at %s", self.path)

    @contextmanager
    def _locked(self):
        timeout = -1 if self.lock_timeout is None else self.lock_timeout
        if not self._lock.acquire(timeout=timeout):
            raise StoreBusy(f"timed out after {self.lock_timeout}s waiting for the stories file")
        try:
            yield
        finally:
            self._lock.release()

    def _parse(self, raw: str) -> List[Story]:
        try:
            doc = json.loads(raw)
        except ValueError as exc:
            raise MalformedDocument(f"invalid JSON: {exc}") from exc
        if not isinstance(doc, dict):
            raise MalformedDocument("document root must be an object")
        records = doc.get(COLLECTION_KEY, doc.get(LEGACY_COLLECTION_KEY))
        if not isinstance(records, list):
            raise MalformedDocument(f"missing '{COLLECTION_KEY}' list")
        stories = []
        for record in records:
            try:
                stories.append(Story.from_dict(record))
            except (KeyError, TypeError, ValueError) as exc:
                if self.strict:
                    raise MalformedDocument(f"bad story record: {exc}") from exc
                self.logger.warning("Skipping unreadable story record in %s: %s", self.path, exc)
        return stories

    def _load(self) -> List[Story]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            self.logger.error("File I/O error reading %s: %s", self.path, exc)
            raise StorageUnavailable("failed to read stories file") from exc
        try:
            return self._parse(raw)
        except MalformedDocument as exc:
            if self.strict:
                raise
            self.logger.warning("Corrupted data file %s, using empty collection: %s", self.path, exc)
            return []

    def _save(self, stories: List[Story]):
        doc: Dict[str, Any] = {COLLECTION_KEY: [s.to_dict() for s in stories]}
        content = json.dumps(doc, indent=2, ensure_ascii=False)
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            # mkstemp creates the file 0600; keep the mode of the file being replaced
            os.chmod(tmp_path, self._file_mode())
            os.replace(tmp_path, self.path)
        except OSError as exc:
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except OSError:
                    pass
            self.logger.error("File I/O error writing %s: %s", self.path, exc)
            raise StorageUnavailable("failed to write stories file") from exc

    def _file_mode(self) -> int:
        try:
            return stat.S_IMODE(self.path.stat().st_mode)
        except FileNotFoundError:
            return 0o644

    def list(self) -> List[Story]:
        with self._locked():
            return self._load()

    def get(self, story_id: int) -> Optional[Story]:
        with self._locked():
            return _find(self._load(), story_id)

    def increment_likes(self, story_id: int) -> Optional[Story]:
        """Add one like to a story; ``None`` if there is no such story."""
        with self._locked():
            stories = self._load()
            story = _find(stories, story_id)
            if story is None:
                return None
            story.likes += 1
            self._save(stories)
        self.logger.info("Incremented likes for story %s to %s", story_id, story.likes)
        return story

    def create(self, new_story: NewStory) -> Story:
        """Append a story with id ``max(ids) + 1`` and zero likes."""
        with self._locked():
            stories = self._load()
            story = Story(
                id=max((s.id for s in stories), default=0) + 1,
                title=new_story.title,
                category=new_story.category,
                summary=new_story.summary,
                description=new_story.description,
                image_url=new_story.image_url,
                is_featured=new_story.is_featured,
                likes=0,
            )
            stories.append(story)
            self._save(stories)
        self.logger.info("Created new story with ID %s", story.id)
        return story


def _find(stories: List[Story], story_id: int) -> Optional[Story]:
    for story in stories:
        if story.id == story_id:
            return story
    return None
