"""
Shared test fixtures and configuration for Impact Stories API tests.
"""
import json
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from impact_api import create_app
from impact_api.config import TestConfig
from impact_api.models import NewStory
from impact_api.storage import StoryStore


@pytest.fixture
def stories_file(tmp_path: Path) -> Path:
    """Path for a stories document inside a not-yet-existing data directory."""
    return tmp_path / "data" / "stories.json"


@pytest.fixture
def story_store(stories_file: Path) -> StoryStore:
    """Create a StoryStore backed by a temporary file."""
    return StoryStore(stories_file)


@pytest.fixture
def app(story_store: StoryStore) -> Flask:
    """Create a test Flask application wired to the temporary store."""
    app = create_app(TestConfig, store=story_store)
    yield app


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    """Create a Flask test client."""
    return app.test_client()


@pytest.fixture
def sample_story_payload() -> dict:
    """A valid POST /stories body."""
    return {
        "title": "Clean Water for Kibera",
        "category": "Health",
        "summary": "A borehole serving 3,000 residents.",
        "description": "Volunteers and local partners drilled and maintain a community borehole.",
        "imageUrl": "https://example.com/kibera.jpg",
        "isFeatured": True,
    }


@pytest.fixture
def new_story(sample_story_payload: dict) -> NewStory:
    return NewStory.from_payload(sample_story_payload)


@pytest.fixture
def read_document(stories_file: Path):
    """Return a callable that loads the raw stories document from disk."""
    def _read() -> dict:
        with open(stories_file, encoding="utf-8") as f:
            return json.load(f)
    return _read


@pytest.fixture
def make_new_story():
    """Factory for NewStory values with sensible defaults."""
    def _make(title: str = "Story", **overrides) -> NewStory:
        fields = {
            "title": title,
            "category": "Test",
            "summary": "Test summary",
            "description": "Test description",
            "image_url": "https://example.com/image.jpg",
            "is_featured": False,
        }
        fields.update(overrides)
        return NewStory(**fields)
    return _make
