"""Display ordering for the task list.

The view is a local copy of the server's list, kept in display order and
updated by create/toggle/delete events instead of re-fetching. Uncompleted
tasks are shown before completed ones.
"""
from typing import Iterable, Iterator, List, Optional

from checklist.models.task_model import Task


def sort_for_display(tasks: Iterable[Task]) -> List[Task]:
    """Uncompleted first; order within each group is kept (sorted() is stable)."""
    return sorted(tasks, key=lambda task: task.completed)


class TaskListView:
    def __init__(self, tasks: Optional[Iterable[Task]] = None):
        self._tasks: List[Task] = []
        if tasks is not None:
            self.load(tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def ids(self) -> List[int]:
        return [task.id for task in self._tasks]

    def load(self, tasks: Iterable[Task]) -> None:
        self._tasks = sort_for_display(tasks)

    def apply_created(self, task: Task) -> None:
        # New tasks always go to the very top, wherever the server put them
        self._tasks.insert(0, task)

    def apply_toggled(self, task_id: int, completed: bool) -> None:
        index = self._index_of(task_id)
        if index is None:
            return
        task = self._tasks.pop(index)
        task.completed = completed
        if completed:
            self._tasks.append(task)
            return
        first_completed = next(
            (i for i, other in enumerate(self._tasks) if other.completed), None
        )
        if first_completed is None:
            self._tasks.append(task)
        else:
            self._tasks.insert(first_completed, task)

    def apply_deleted(self, task_id: int) -> None:
        index = self._index_of(task_id)
        if index is not None:
            del self._tasks[index]

    def _index_of(self, task_id: int) -> Optional[int]:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None
