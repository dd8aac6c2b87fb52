"""Read-modify-write task store.

Every public operation reads the whole document from the backend, applies a
single change and writes the whole document back. Nothing is cached between
calls. Without ``serialize=True`` two overlapping calls can interleave their
read and write phases and the later write wins (a lost update).
"""
import contextlib
import logging
import threading
import time
from typing import Callable, List, Optional, Sequence

from checklist.errors import StorageReadError, TaskNotFound
from checklist.models.task_model import Task

logger = logging.getLogger(__name__)

IdFactory = Callable[[Sequence[Task]], int]


def _now_ms() -> int:
    return int(time.time() * 1000)


def timestamp_id(existing: Sequence[Task]) -> int:
    """Creation instant in milliseconds.

    Two tasks created within the same millisecond get the same id.
    """
    return _now_ms()


def monotonic_id(existing: Sequence[Task]) -> int:
    """Millisecond timestamp, bumped past the largest id already stored."""
    candidate = _now_ms()
    if existing:
        candidate = max(candidate, max(task.id for task in existing) + 1)
    return candidate


ID_SCHEMES = {
    "timestamp": timestamp_id,
    "monotonic": monotonic_id,
}


class TaskStore:
    def __init__(self, backend, id_factory: IdFactory = timestamp_id, serialize: bool = False):
        self.backend = backend
        self.id_factory = id_factory
        self.serialize = serialize
        self._lock = threading.Lock()

    def _gate(self):
        return self._lock if self.serialize else contextlib.nullcontext()

    def _load(self) -> List[Task]:
        records = self.backend.read()
        try:
            return [Task.from_dict(record) for record in records]
        except (KeyError, TypeError, AttributeError) as exc:
            raise StorageReadError(f"Malformed task record: {exc}") from exc

    def _save(self, tasks: List[Task]) -> None:
        self.backend.write([task.to_dict() for task in tasks])

    def list(self) -> List[Task]:
        with self._gate():
            return self._load()

    def create(self, text: str) -> Task:
        with self._gate():
            tasks = self._load()
            task = Task(id=self.id_factory(tasks), text=text, completed=False)
            tasks.append(task)
            self._save(tasks)
        logger.debug("Created task %s", task.id)
        return task

    def set_completed(self, task_id: int, completed: bool) -> Task:
        with self._gate():
            tasks = self._load()
            task = _find(tasks, task_id)
            if task is None:
                raise TaskNotFound(task_id)
            task.completed = completed
            self._save(tasks)
        logger.debug("Task %s completed=%s", task_id, completed)
        return task

    def delete(self, task_id: int) -> None:
        """Remove ``task_id``; an unknown id still rewrites the list unchanged."""
        with self._gate():
            tasks = self._load()
            remaining = [task for task in tasks if task.id != task_id]
            self._save(remaining)
        if len(remaining) == len(tasks):
            logger.debug("Delete of unknown task %s was a no-op", task_id)


def _find(tasks: List[Task], task_id: int) -> Optional[Task]:
    for task in tasks:
        if task.id == task_id:
            return task
    return None
