"""
In-memory task store.

One table (``task id -> Task``) guarded by a single reader/writer lock.
Listing takes the read side; every mutation takes the write side. The store
hands out copies only, so callers can't reach into the table.
"""
import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from todolist.store.rwlock import RWLock
from todolist.utils.observability import Logger

logger = Logger(__name__)


@dataclass
class Task:
    """Task record."""
    id: str
    text: str
    created_at: datetime
    completed: bool = False

    @property
    def created_at_unix(self) -> int:
        return int(self.created_at.timestamp())


class TaskStore:
    """
    Thread-safe in-memory task table.

    Text validation is the caller's job; the store accepts any string.

    Usage:
        store = TaskStore()
        task = store.add("Write report")
        store.update(task.id, completed=True)
        store.delete(task.id)
    """

    def __init__(self):
        self._tasks: Dict[str, Task] = {}
        self._lock = RWLock()

    def add(self, text: str) -> Task:
        """
        Insert a new, not yet completed task.

        Args:
            text: Task description

        Returns:
            Copy of the stored task with its generated id and timestamp
        """
        with self._lock.write_lock():
            task = Task(
                id=str(uuid.uuid4()),
                text=text,
                created_at=datetime.now(timezone.utc),
                completed=False,
            )
            self._tasks[task.id] = task
            return replace(task)

    def list(self) -> List[Task]:
        """
        Return copies of all stored tasks.

        The result happens to follow insertion order; callers must not rely on it.
        """
        with self._lock.read_lock():
            return [replace(task) for task in self._tasks.values()]

    def delete(self, task_id: str) -> bool:
        """Remove a task. Returns False if the id is unknown."""
        with self._lock.write_lock():
            return self._tasks.pop(task_id, None) is not None

    def update(self, task_id: str, completed: bool) -> Tuple[Optional[Task], bool]:
        """
        Set the completion flag of a task.

        Returns:
            (updated copy, True), or (None, False) if the id is unknown
        """
        with self._lock.write_lock():
            task = self._tasks.get(task_id)
            if task is None:
                return None, False
            task.completed = completed
            return replace(task), True

    def clear(self) -> None:
        """Drop every task."""
        with self._lock.write_lock():
            count = len(self._tasks)
            self._tasks.clear()
        logger.log_event("task_store_cleared", count=count)

    def __len__(self) -> int:
        with self._lock.read_lock():
            return len(self._tasks)
