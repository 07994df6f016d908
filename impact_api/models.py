from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

# Older stories files use PascalCase keys.
_LEGACY_KEYS = {
    "id": "Id",
    "title": "Title",
    "category": "Category",
    "summary": "Summary",
    "description": "Description",
    "imageUrl": "ImageUrl",
    "isFeatured": "IsFeatured",
    "likes": "Likes",
}

REQUIRED_TEXT_FIELDS = (
    ("title", "Title"),
    ("category", "Category"),
    ("summary", "Summary"),
    ("description", "Description"),
)


class ValidationError(ValueError):
    """A create request failed shape validation."""


def _field(data: Dict[str, Any], key: str):
    if key in data:
        return data[key]
    legacy = _LEGACY_KEYS.get(key)
    if legacy and legacy in data:
        return data[legacy]
    raise KeyError(key)


def _optional(data: Dict[str, Any], key: str, default):
    try:
        value = _field(data, key)
    except KeyError:
        return default
    return default if value is None else value


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class Story:
    id: int
    title: str
    category: str
    summary: str
    description: str
    image_url: str = ""
    is_featured: bool = False
    likes: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "summary": self.summary,
            "description": self.description,
            "imageUrl": self.image_url,
            "isFeatured": self.is_featured,
            "likes": self.likes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Story":
        """Parse one stored record.

        Missing or null fields other than ``id`` take their defaults: empty
        text, not featured, zero likes. Raises KeyError, TypeError or
        ValueError when the id is missing or invalid, or a field holds a value
        of the wrong type.
        """
        if not isinstance(data, dict):
            raise TypeError("story record must be an object")
        story_id = _field(data, "id")
        if not _is_int(story_id) or story_id < 1:
            raise ValueError(f"invalid story id: {story_id!r}")
        likes = _optional(data, "likes", 0)
        if not _is_int(likes) or likes < 0:
            raise ValueError(f"invalid likes count: {likes!r}")
        texts = {}
        for key in ("title", "category", "summary", "description", "imageUrl"):
            value = _optional(data, key, "")
            if not isinstance(value, str):
                raise TypeError(f"{key} must be a string")
            texts[key] = value
        is_featured = _optional(data, "isFeatured", False)
        if not isinstance(is_featured, bool):
            raise TypeError("isFeatured must be a boolean")
        return cls(
            id=story_id,
            title=texts["title"],
            category=texts["category"],
            summary=texts["summary"],
            description=texts["description"],
            image_url=texts["imageUrl"],
            is_featured=is_featured,
            likes=likes,
        )


@dataclass(frozen=True)
class NewStory:
    """Fields supplied by the client when creating a story."""

    title: str
    category: str
    summary: str
    description: str
    image_url: str = ""
    is_featured: bool = False

    @classmethod
    def from_payload(cls, payload) -> "NewStory":
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        for key, label in REQUIRED_TEXT_FIELDS:
            value = payload.get(key)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{label} must be a string")
            if not value or not value.strip():
                raise ValidationError(f"{label} is required")
        image_url = payload.get("imageUrl")
        if image_url is None:
            image_url = ""
        elif not isinstance(image_url, str):
            raise ValidationError("ImageUrl must be a string")
        is_featured = payload.get("isFeatured", False)
        if is_featured is None:
            is_featured = False
        elif not isinstance(is_featured, bool):
            raise ValidationError("IsFeatured must be a boolean")
        return cls(
            title=payload["title"],
            category=payload["category"],
            summary=payload["summary"],
            description=payload["description"],
            image_url=image_url,
            is_featured=is_featured,
        )
