"""Custom exception types for the application."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .data_models import FetchResponse


class ApplicationError(Exception):
    """Raised at the call boundary when the fetch service reports a failure."""

    def __init__(self, application_error: int, error_detail: str = "") -> None:
        super().__init__(error_detail)
        self.application_error = application_error
        self.error_detail = error_detail


class UrlFetchError(RuntimeError):
    """Base class for every failure surfaced by the adapter."""


class InvalidArgument(UrlFetchError, ValueError):
    """Raised when a fetch argument is rejected before any service call."""

    def __init__(self, argument: str, message: str) -> None:
        super().__init__(message)
        self.argument = argument


class ServiceError(UrlFetchError):
    """Raised when the fetch service returns an application error."""

    def __init__(self, code: int, label: str, detail: str) -> None:
        super().__init__(f"UrlFetch Exception with Error Code: {label} with message: {detail}")
        self.code = code
        self.label = label
        self.detail = detail


class TruncatedResponse(UrlFetchError):
    """Raised when the response body was truncated and truncation is not allowed."""

    def __init__(self, response: Optional["FetchResponse"] = None) -> None:
        super().__init__("Output was truncated and allow_truncated option is not enabled.")
        self.response = response


class RpcError(UrlFetchError):
    """Raised when the call gateway cannot reach or understand the runtime API."""
