"""
TodoService - the request boundary in front of TaskStore.

Validates requests, calls the store, and turns its results into response
messages or typed errors. Deleting an unknown id is reported through
``success=False``; updating an unknown id raises TaskNotFoundError.
"""
from todolist.exceptions import InvalidArgumentError, TaskNotFoundError
from todolist.rpc.schema import (
    AddTaskRequest,
    AddTaskResponse,
    DeleteTaskRequest,
    DeleteTaskResponse,
    GetTasksRequest,
    GetTasksResponse,
    Task,
    UpdateTaskRequest,
    UpdateTaskResponse,
)
from todolist.store import TaskStore
from todolist.utils.observability import Logger

logger = Logger(__name__)


class TodoService:
    """
    Implementation of the TodoService RPC methods.

    The store is injected so that the app owns exactly one table and tests
    can build as many isolated services as they like.
    """

    def __init__(self, store: TaskStore):
        self.store = store

    def add_task(self, request: AddTaskRequest) -> AddTaskResponse:
        if not request.text:
            raise InvalidArgumentError("task text cannot be empty")

        record = self.store.add(request.text)
        logger.log_event("task_added", task_id=record.id)

        return AddTaskResponse(task=Task.from_record(record), success=True)

    def get_tasks(self, request: GetTasksRequest) -> GetTasksResponse:
        return GetTasksResponse(tasks=[Task.from_record(r) for r in self.store.list()])

    def delete_task(self, request: DeleteTaskRequest) -> DeleteTaskResponse:
        if not request.id:
            raise InvalidArgumentError("task ID cannot be empty")

        success = self.store.delete(request.id)
        logger.log_event("task_deleted", task_id=request.id, found=success)

        return DeleteTaskResponse(success=success)

    def update_task(self, request: UpdateTaskRequest) -> UpdateTaskResponse:
        if not request.id:
            raise InvalidArgumentError("task ID cannot be empty")

        record, success = self.store.update(request.id, request.completed)
        if not success:
            raise TaskNotFoundError(task_id=request.id)

        logger.log_event("task_updated", task_id=record.id, completed=record.completed)
        return UpdateTaskResponse(task=Task.from_record(record), success=True)
