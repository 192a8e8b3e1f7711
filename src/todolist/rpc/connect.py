"""
Connect protocol primitives for unary JSON calls.

A unary call is a POST to ``/<package>.<Service>/<Method>`` whose body is the
JSON request message. Failures are answered with a JSON envelope
``{"code": "<code>", "message": "..."}`` and the HTTP status mapped from the
code below.
"""
from enum import Enum
from typing import Any, Dict, Optional

SERVICE_NAME = "todolist.v1.TodoService"
SERVICE_PATH = f"/{SERVICE_NAME}/"

PROTOCOL_VERSION_HEADER = "Connect-Protocol-Version"
TIMEOUT_HEADER = "Connect-Timeout-Ms"
PROTOCOL_VERSION = "1"

JSON_CONTENT_TYPE = "application/json"


class Code(str, Enum):
    """Connect error codes."""
    CANCELED = "canceled"
    UNKNOWN = "unknown"
    INVALID_ARGUMENT = "invalid_argument"
    DEADLINE_EXCEEDED = "deadline_exceeded"
    NOT_FOUND = "not_found"
    ALREADY_EXISTS = "already_exists"
    PERMISSION_DENIED = "permission_denied"
    RESOURCE_EXHAUSTED = "resource_exhausted"
    FAILED_PRECONDITION = "failed_precondition"
    ABORTED = "aborted"
    OUT_OF_RANGE = "out_of_range"
    UNIMPLEMENTED = "unimplemented"
    INTERNAL = "internal"
    UNAVAILABLE = "unavailable"
    DATA_LOSS = "data_loss"
    UNAUTHENTICATED = "unauthenticated"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]

    @classmethod
    def from_http_status(cls, status: int) -> "Code":
        """Fallback when an error response carries no parseable envelope."""
        return _CODE_FOR_STATUS.get(status, cls.UNKNOWN)


_HTTP_STATUS = {
    Code.CANCELED: 499,
    Code.UNKNOWN: 500,
    Code.INVALID_ARGUMENT: 400,
    Code.DEADLINE_EXCEEDED: 504,
    Code.NOT_FOUND: 404,
    Code.ALREADY_EXISTS: 409,
    Code.PERMISSION_DENIED: 403,
    Code.RESOURCE_EXHAUSTED: 429,
    Code.FAILED_PRECONDITION: 400,
    Code.ABORTED: 409,
    Code.OUT_OF_RANGE: 400,
    Code.UNIMPLEMENTED: 501,
    Code.INTERNAL: 500,
    Code.UNAVAILABLE: 503,
    Code.DATA_LOSS: 500,
    Code.UNAUTHENTICATED: 401,
}

# Connect's mapping for HTTP errors that did not come from a Connect server.
_CODE_FOR_STATUS = {
    400: Code.INTERNAL,
    401: Code.UNAUTHENTICATED,
    403: Code.PERMISSION_DENIED,
    404: Code.UNIMPLEMENTED,
    429: Code.UNAVAILABLE,
    502: Code.UNAVAILABLE,
    503: Code.UNAVAILABLE,
    504: Code.UNAVAILABLE,
}


def method_path(method: str) -> str:
    """Route path for a TodoService method, e.g. ``/todolist.v1.TodoService/AddTask``."""
    return f"{SERVICE_PATH}{method}"


def error_envelope(code: Code, message: str = "") -> Dict[str, Any]:
    """Build the JSON body of an error response."""
    body: Dict[str, Any] = {"code": code.value}
    if message:
        body["message"] = message
    return body


def parse_error_envelope(body: Any, http_status: int) -> tuple:
    """
    Decode an error response body into ``(Code, message)``.

    Unknown or missing codes fall back to the HTTP status mapping.
    """
    code: Optional[Code] = None
    message = ""
    if isinstance(body, dict):
        try:
            code = Code(body.get("code"))
        except ValueError:
            code = None
        message = str(body.get("message") or "")
    if code is None:
        code = Code.from_http_status(http_status)
    return code, message
