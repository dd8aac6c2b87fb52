import re

from flask import Blueprint, current_app, jsonify, request

from checklist.errors import StorageError, TaskNotFound
from checklist.utils.store import get_store


tasks_bp = Blueprint("tasks", __name__)

_LEADING_INT = re.compile(r"\s*[+-]?[0-9]+")


def _json_body():
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _parse_id(raw):
    """Leading integer of the path segment, like JavaScript's parseInt: "12abc" is 12.

    A segment with no leading digits matches no task.
    """
    match = _LEADING_INT.match(raw)
    return int(match.group(0)) if match else None


@tasks_bp.get("")
def list_tasks():
    try:
        tasks = get_store().list()
    except StorageError as exc:
        current_app.logger.exception("Error reading tasks: %s", exc)
        return jsonify(error="Failed to read tasks"), 500
    return jsonify([task.to_dict() for task in tasks]), 200


@tasks_bp.post("")
def create_task():
    payload = _json_body()
    # Non-empty text is enforced by the client, not here
    text = payload.get("text")
    if text is None:
        text = ""
    try:
        task = get_store().create(text)
    except StorageError as exc:
        current_app.logger.exception("Error adding task: %s", exc)
        return jsonify(error="Failed to add task"), 500
    return jsonify(task.to_dict()), 200


@tasks_bp.put("/<task_id>")
def update_task(task_id):
    payload = _json_body()
    # Only a JSON true completes a task; "false", 1 and missing all mean False
    completed = payload.get("completed") is True
    parsed = _parse_id(task_id)
    if parsed is None:
        return jsonify(error="Task not found"), 404
    try:
        task = get_store().set_completed(parsed, completed)
    except TaskNotFound:
        return jsonify(error="Task not found"), 404
    except StorageError as exc:
        current_app.logger.exception("Error updating task: %s", exc)
        return jsonify(error="Failed to update task"), 500
    return jsonify(task.to_dict()), 200


@tasks_bp.delete("/<task_id>")
def delete_task(task_id):
    try:
        # A non-numeric id still costs a full cycle and removes nothing
        get_store().delete(_parse_id(task_id))
    except StorageError as exc:
        current_app.logger.exception("Error deleting task: %s", exc)
        return jsonify(error="Failed to delete task"), 500
    return jsonify(success=True), 200
