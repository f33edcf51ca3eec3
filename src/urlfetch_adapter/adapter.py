"""Translate fetch calls into fetch-service requests and interpret the results."""

from __future__ import annotations

from typing import Final, Mapping

from .api_proxy import ApiProxy, HttpApiProxy
from .config import FETCH_CALL, SERVICE_NAME
from .data_models import (
    ALLOWED_SCHEMES,
    PAYLOAD_METHODS,
    ErrorCode,
    FetchRequest,
    FetchResponse,
    Header,
    RequestMethod,
)
from .exceptions import ApplicationError, InvalidArgument, ServiceError, TruncatedResponse
from .logging_utils import configure_logging

LOGGER = configure_logging(__name__)

# OK never accompanies a raised error; it keeps its label for completeness.
ERROR_LABELS: Final[dict[ErrorCode, str]] = {
    ErrorCode.OK: "Module Return OK",
    ErrorCode.INVALID_URL: "Invalid URL",
    ErrorCode.FETCH_ERROR: "Fetch Error",
    ErrorCode.UNSPECIFIED_ERROR: "Unexpected Error",
    ErrorCode.RESPONSE_TOO_LARGE: "Response Too Large",
    ErrorCode.DEADLINE_EXCEEDED: "Deadline Exceeded",
    ErrorCode.SSL_CERTIFICATE_ERROR: "Ssl Certificate Error",
    ErrorCode.DNS_ERROR: "Dns Error",
    ErrorCode.CLOSED: "Closed Error",
    ErrorCode.INTERNAL_TRANSIENT_ERROR: "Internal Transient Error",
    ErrorCode.TOO_MANY_REDIRECTS: "Too Many Redirects",
    ErrorCode.MALFORMED_REPLY: "Malformed Reply",
    ErrorCode.CONNECTION_ERROR: "Connection Error",
    ErrorCode.PAYLOAD_TOO_LARGE: "Payload Too Large",
}


def error_label(code: int) -> str:
    """Return the human-readable label for a fetch-service error code."""

    try:
        return ERROR_LABELS[ErrorCode(code)]
    except ValueError:
        return str(code)


def service_error_from(error: ApplicationError) -> ServiceError:
    """Convert an application error raised at the call boundary into a :class:`ServiceError`."""

    return ServiceError(error.application_error, error_label(error.application_error), error.error_detail)


def parse_method(method: str) -> RequestMethod:
    """Map an exact, upper-case method name to :class:`RequestMethod`."""

    try:
        return RequestMethod[method]
    except KeyError:
        raise InvalidArgument("method", f"Invalid Request Method Input: {method}") from None


class RequestAdapter:
    """Fetch URLs through the runtime fetch service."""

    def __init__(self, api_proxy: ApiProxy | None = None) -> None:
        self._api_proxy = api_proxy if api_proxy is not None else HttpApiProxy()

    def build_request(
        self,
        url: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        payload: str | bytes = "",
        follow_redirects: bool = True,
        deadline: float = 0.0,
        validate_certificate: bool = False,
    ) -> FetchRequest:
        """Validate the arguments and build the request sent to the service."""

        if not url.startswith(ALLOWED_SCHEMES):
            raise InvalidArgument("scheme", "URL input must use http:// or https://")

        # Certificate validation only applies over TLS.
        if url.startswith("http://"):
            validate_certificate = False

        request_method = parse_method(method)
        fields: dict = {
            "url": url,
            "method": request_method,
            "headers": [Header(key=str(key), value=str(value)) for key, value in (headers or {}).items()],
            "follow_redirects": follow_redirects,
            "must_validate_server_certificate": validate_certificate,
        }
        if payload and request_method in PAYLOAD_METHODS:
            fields["payload"] = payload.encode("utf-8") if isinstance(payload, str) else payload
        if deadline > 0.0:
            fields["deadline"] = deadline

        request = FetchRequest(**fields)
        LOGGER.debug(
            "Built %s request for %s (headers=%s, payload=%s, deadline=%s)",
            request_method.name,
            url,
            len(request.headers),
            "yes" if request.payload is not None else "no",
            request.deadline,
        )
        return request

    def fetch(
        self,
        url: str,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        payload: str | bytes = "",
        allow_truncated: bool = True,
        follow_redirects: bool = True,
        deadline: float = 0.0,
        validate_certificate: bool = False,
    ) -> FetchResponse:
        """Fetch ``url`` and return the service response.

        Raises :class:`InvalidArgument` for a non-HTTP(S) URL or an unknown
        method, :class:`ServiceError` when the service reports an error and
        :class:`TruncatedResponse` when the body was cut short and
        ``allow_truncated`` is false. A single attempt is made.
        """

        request = self.build_request(
            url,
            method=method,
            headers=headers,
            payload=payload,
            follow_redirects=follow_redirects,
            deadline=deadline,
            validate_certificate=validate_certificate,
        )

        LOGGER.info("Fetching %s %s", request.method.name, url)
        try:
            response = self._api_proxy.make_sync_call(SERVICE_NAME, FETCH_CALL, request)
        except ApplicationError as exc:
            error = service_error_from(exc)
            LOGGER.warning("Fetch of %s failed: %s", url, error)
            raise error from exc

        if response.content_was_truncated and not allow_truncated:
            LOGGER.warning("Response from %s was truncated; rejecting.", url)
            raise TruncatedResponse(response)

        LOGGER.info("Fetched %s with status %s (%s bytes)", url, response.status_code, len(response.content))
        return response


def fetch(url: str, method: str = "GET", **kwargs) -> FetchResponse:
    """Fetch ``url`` with a default :class:`RequestAdapter`."""

    return RequestAdapter().fetch(url, method, **kwargs)
