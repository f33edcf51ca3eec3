"""Call gateway used to reach runtime services such as the fetch service."""

from __future__ import annotations

from typing import Optional, Protocol

import requests
from pydantic import BaseModel, ValidationError

from .config import get_settings
from .data_models import FetchRequest, FetchResponse
from .exceptions import ApplicationError, RpcError
from .logging_utils import configure_logging

LOGGER = configure_logging(__name__)


class ApiProxy(Protocol):
    """Synchronous call into a runtime service."""

    def make_sync_call(self, service: str, call: str, request: FetchRequest) -> FetchResponse:
        """Return the service response or raise :class:`ApplicationError`."""
        ...


class _ApplicationErrorBody(BaseModel):
    code: int
    detail: str = ""


class _Reply(BaseModel):
    response: Optional[FetchResponse] = None
    application_error: Optional[_ApplicationErrorBody] = None


class HttpApiProxy:
    """Relay service calls over HTTP using this package's own JSON protocol.

    This is not the runtime's protobuf API; the endpoint must be a relay that
    understands the envelope below. The call is posted as
    ``{"service", "method", "request"}`` and the endpoint answers with either
    ``{"response": ...}`` or ``{"application_error": {"code", "detail"}}``.
    Byte fields travel base64 encoded. Without an injected session each call
    goes through ``requests.post``.
    """

    def __init__(
        self,
        api_url: str | None = None,
        *,
        timeout: float | None = None,
        deadline_slack: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        settings = get_settings()
        self.api_url = api_url or settings.api_url
        self.timeout = timeout if timeout is not None else settings.api_timeout
        self.deadline_slack = deadline_slack if deadline_slack is not None else settings.deadline_slack
        self._session = session

    def _timeout_for(self, request: FetchRequest) -> float:
        if request.deadline is not None:
            return request.deadline + self.deadline_slack
        return self.timeout

    def make_sync_call(self, service: str, call: str, request: FetchRequest) -> FetchResponse:
        envelope = {
            "service": service,
            "method": call,
            "request": request.model_dump(mode="json"),
        }
        timeout = self._timeout_for(request)
        LOGGER.debug("Calling %s.%s via %s (timeout=%.1fs)", service, call, self.api_url, timeout)
        try:
            client = self._session if self._session is not None else requests
            http_response = client.post(self.api_url, json=envelope, timeout=timeout)
            http_response.raise_for_status()
        except requests.RequestException as exc:
            LOGGER.error("API call %s.%s to %s failed: %s", service, call, self.api_url, exc)
            raise RpcError(f"API call {service}.{call} failed: {exc}") from exc

        try:
            reply = _Reply.model_validate_json(http_response.content)
        except ValidationError as exc:
            raise RpcError(f"Malformed reply from API server for {service}.{call}") from exc

        if reply.application_error is not None:
            raise ApplicationError(reply.application_error.code, reply.application_error.detail)
        if reply.response is None:
            raise RpcError(f"API server returned neither a response nor an error for {service}.{call}")
        return reply.response
