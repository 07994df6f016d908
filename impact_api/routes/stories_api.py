from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from ..extensions import get_store
from ..models import NewStory, ValidationError
from ..storage import MalformedDocument, StorageUnavailable

bp = Blueprint("stories_api", __name__)

NOT_FOUND_MESSAGE = "Story not found"
GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


@bp.get("/stories")
def list_stories():
    return jsonify([s.to_dict() for s in get_store().list()])


@bp.get("/stories/<int:story_id>")
def get_story(story_id: int):
    story = get_store().get(story_id)
    if story is None:
        return jsonify({"message": NOT_FOUND_MESSAGE}), 404
    return jsonify(story.to_dict())


@bp.post("/stories/<int:story_id>/like")
def like_story(story_id: int):
    story = get_store().increment_likes(story_id)
    if story is None:
        return jsonify({"message": NOT_FOUND_MESSAGE}), 404
    return jsonify(story.to_dict())


@bp.post("/stories")
def create_story():
    payload = request.get_json(silent=True)
    try:
        new_story = NewStory.from_payload(payload)
    except ValidationError as e:
        return jsonify({"message": str(e)}), 400
    story = get_store().create(new_story)
    return jsonify(story.to_dict()), 201, {"Location": f"/stories/{story.id}"}


@bp.app_errorhandler(StorageUnavailable)
@bp.app_errorhandler(MalformedDocument)
def storage_failure(e):
    # Paths and OS errors stay in the server log
    current_app.logger.exception("Story store failure on %s %s", request.method, request.path)
    return jsonify({"message": GENERIC_ERROR_MESSAGE}), 500


@bp.app_errorhandler(Exception)
def unexpected_failure(e):
    if isinstance(e, HTTPException):
        return e
    current_app.logger.exception("Unhandled error on %s %s", request.method, request.path)
    return jsonify({"message": GENERIC_ERROR_MESSAGE}), 500
