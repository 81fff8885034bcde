"""Row mutations against the remote datasource."""

from .actions import on_request_success
from .errors import get_error_message, get_load_error_message
from .executor import DEFAULT_SUCCESS_MESSAGES, MutationExecutor

__all__ = [
    "DEFAULT_SUCCESS_MESSAGES",
    "MutationExecutor",
    "get_error_message",
    "get_load_error_message",
    "on_request_success",
]
