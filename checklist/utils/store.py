from flask import current_app

from checklist.storage.backends import JsonFileBackend
from checklist.storage.task_store import ID_SCHEMES, TaskStore

EXTENSION_KEY = "task_store"


def build_store(config) -> TaskStore:
    scheme = config.get("TASK_ID_SCHEME", "timestamp")
    if scheme not in ID_SCHEMES:
        raise ValueError(f"Unknown TASK_ID_SCHEME {scheme!r}; expected one of {sorted(ID_SCHEMES)}")
    return TaskStore(
        JsonFileBackend(config["TASKS_FILE"]),
        id_factory=ID_SCHEMES[scheme],
        serialize=bool(config.get("SERIALIZE_STORE", False)),
    )


def init_app(app, store=None):
    """Attach a task store to ``app``; builds a file-backed one from config if none is given."""
    if store is None:
        store = build_store(app.config)
    app.extensions[EXTENSION_KEY] = store
    return store


def get_store() -> TaskStore:
    return current_app.extensions[EXTENSION_KEY]
