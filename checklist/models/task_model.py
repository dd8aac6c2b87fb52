from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass
class Task:
    id: int
    text: str
    completed: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        # Extra keys in a persisted record are dropped
        task_id = data["id"]
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise TypeError(f"task id must be an integer, got {task_id!r}")
        return cls(
            id=task_id,
            text=data.get("text", ""),
            completed=bool(data.get("completed", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
