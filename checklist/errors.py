class ChecklistError(Exception):
    """Base class for errors raised by the checklist package."""


class StorageError(ChecklistError):
    pass


class StorageReadError(StorageError):
    """The backing document is missing, unreadable, or not a JSON array."""


class StorageWriteError(StorageError):
    """The task list could not be serialized or written back."""


class TaskNotFound(ChecklistError):
    def __init__(self, task_id):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
