"""
Tests for TodoService request validation and result translation.
"""
import pytest

from todolist.exceptions import InvalidArgumentError, TaskNotFoundError
from todolist.rpc.connect import Code
from todolist.rpc.schema import (
    AddTaskRequest,
    DeleteTaskRequest,
    GetTasksRequest,
    UpdateTaskRequest,
)


class TestAddTask:

    def test_successful_addition(self, service):
        resp = service.add_task(AddTaskRequest(text="Test task"))

        assert resp.success is True
        assert resp.task is not None
        assert resp.task.text == "Test task"
        assert resp.task.id
        assert resp.task.completed is False
        assert resp.task.created_at > 0

    def test_empty_text_fails(self, service, store):
        with pytest.raises(InvalidArgumentError) as exc_info:
            service.add_task(AddTaskRequest(text=""))

        assert exc_info.value.code == Code.INVALID_ARGUMENT
        assert exc_info.value.message == "task text cannot be empty"
        assert len(store) == 0
        assert service.get_tasks(GetTasksRequest()).tasks == []

    def test_logs_added_task(self, service, mocker, mock_logger):
        mocker.patch("todolist.rpc.service.logger", mock_logger)

        resp = service.add_task(AddTaskRequest(text="logged"))

        mock_logger.log_event.assert_called_once_with("task_added", task_id=resp.task.id)


class TestGetTasks:

    def test_empty_list(self, service):
        resp = service.get_tasks(GetTasksRequest())
        assert resp.tasks == []

    def test_after_adding(self, service):
        added = {}
        for text in ("Task 1", "Task 2", "Task 3"):
            task = service.add_task(AddTaskRequest(text=text)).task
            added[task.id] = text

        tasks = service.get_tasks(GetTasksRequest()).tasks

        assert len(tasks) == 3
        assert {t.id: t.text for t in tasks} == added


class TestDeleteTask:

    def test_successful_deletion(self, service):
        task = service.add_task(AddTaskRequest(text="Task to delete")).task

        resp = service.delete_task(DeleteTaskRequest(id=task.id))

        assert resp.success is True
        assert service.get_tasks(GetTasksRequest()).tasks == []

    def test_second_delete_reports_failure(self, service):
        task = service.add_task(AddTaskRequest(text="once")).task
        service.delete_task(DeleteTaskRequest(id=task.id))

        resp = service.delete_task(DeleteTaskRequest(id=task.id))
        assert resp.success is False

    def test_unknown_id_is_not_an_error(self, service):
        resp = service.delete_task(DeleteTaskRequest(id="non-existent-id"))
        assert resp.success is False

    def test_empty_id_fails(self, service):
        with pytest.raises(InvalidArgumentError) as exc_info:
            service.delete_task(DeleteTaskRequest(id=""))

        assert exc_info.value.message == "task ID cannot be empty"


class TestUpdateTask:

    def test_mark_completed(self, service):
        task = service.add_task(AddTaskRequest(text="finish")).task

        resp = service.update_task(UpdateTaskRequest(id=task.id, completed=True))

        assert resp.success is True
        assert resp.task.id == task.id
        assert resp.task.completed is True
        assert service.get_tasks(GetTasksRequest()).tasks[0].completed is True

    def test_unknown_id_fails_with_not_found(self, service):
        task = service.add_task(AddTaskRequest(text="untouched")).task

        with pytest.raises(TaskNotFoundError) as exc_info:
            service.update_task(UpdateTaskRequest(id="missing", completed=True))

        assert exc_info.value.code == Code.NOT_FOUND
        assert exc_info.value.task_id == "missing"
        assert service.get_tasks(GetTasksRequest()).tasks[0].completed is False
        assert service.get_tasks(GetTasksRequest()).tasks[0].id == task.id

    def test_empty_id_fails(self, service):
        with pytest.raises(InvalidArgumentError):
            service.update_task(UpdateTaskRequest(id="", completed=True))
