"""
Store module - in-memory task table and its lock.
"""
from .rwlock import RWLock
from .task_store import Task, TaskStore

__all__ = [
    "RWLock",
    "Task",
    "TaskStore",
]
