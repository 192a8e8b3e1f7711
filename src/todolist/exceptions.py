"""
Custom exceptions for the todolist service.

Server-side errors carry the RPC error code they are reported with, so the
transport layer can translate any of them without knowing the concrete type.
"""
from todolist.rpc.connect import Code


class TodoListError(Exception):
    """Base exception for all custom errors."""
    code: Code = Code.INTERNAL

    def __init__(self, message: str = ""):
        self.message = message
        super().__init__(message)


# Request Errors
class InvalidArgumentError(TodoListError):
    """Raised when a required request field is missing or empty."""
    code = Code.INVALID_ARGUMENT


class TaskNotFoundError(TodoListError):
    """Raised when an operation targets a task id that is not stored."""
    code = Code.NOT_FOUND

    def __init__(self, message: str = "task not found", task_id: str = None):
        self.task_id = task_id
        super().__init__(message)


# Configuration Errors
class ConfigurationError(TodoListError):
    """Raised when configuration is invalid or missing."""
    pass


# Client Errors
class RPCError(Exception):
    """
    Raised by TodoClient when the server answers with an error envelope.
    """

    def __init__(self, code: Code, message: str = "", http_status: int = None):
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(f"{code.value}: {message}" if message else code.value)
