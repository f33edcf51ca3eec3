"""Typed data models exchanged with the fetch service."""

from __future__ import annotations

from enum import IntEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ALLOWED_SCHEMES = ("http://", "https://")


class RequestMethod(IntEnum):
    """HTTP methods understood by the fetch service."""

    GET = 1
    POST = 2
    HEAD = 3
    PUT = 4
    DELETE = 5
    PATCH = 6


# Methods for which a request payload is forwarded.
PAYLOAD_METHODS = frozenset({RequestMethod.POST, RequestMethod.PUT, RequestMethod.PATCH})


class ErrorCode(IntEnum):
    """Application error codes reported by the fetch service."""

    OK = 0
    INVALID_URL = 1
    FETCH_ERROR = 2
    UNSPECIFIED_ERROR = 3
    RESPONSE_TOO_LARGE = 4
    DEADLINE_EXCEEDED = 5
    SSL_CERTIFICATE_ERROR = 6
    DNS_ERROR = 7
    CLOSED = 8
    INTERNAL_TRANSIENT_ERROR = 9
    TOO_MANY_REDIRECTS = 10
    MALFORMED_REPLY = 11
    CONNECTION_ERROR = 12
    PAYLOAD_TOO_LARGE = 13


class Header(BaseModel):
    """A single header key/value pair, kept in wire order."""

    model_config = ConfigDict(frozen=True)

    key: str
    value: str


class FetchRequest(BaseModel):
    """Request message handed to the fetch service."""

    model_config = ConfigDict(ser_json_bytes="base64", val_json_bytes="base64")

    url: str = Field(..., description="Absolute http:// or https:// URL to fetch.")
    method: RequestMethod = Field(RequestMethod.GET, description="HTTP method to use.")
    headers: list[Header] = Field(default_factory=list, description="Outgoing headers in order.")
    payload: Optional[bytes] = Field(None, description="Request body for POST, PUT and PATCH.")
    deadline: Optional[float] = Field(None, gt=0.0, description="Service-side deadline in seconds.")
    follow_redirects: bool = Field(True, description="Whether the service follows redirects.")
    must_validate_server_certificate: bool = Field(
        False, description="Refuse to send unless the server certificate is valid."
    )

    @field_validator("url")
    @classmethod
    def _check_scheme(cls, value: str) -> str:
        if not value.startswith(ALLOWED_SCHEMES):
            raise ValueError("URL input must use http:// or https://")
        return value

    @model_validator(mode="after")
    def _check_invariants(self) -> "FetchRequest":
        if self.payload is not None and self.method not in PAYLOAD_METHODS:
            raise ValueError(f"{self.method.name} requests cannot carry a payload")
        if self.must_validate_server_certificate and self.url.startswith("http://"):
            raise ValueError("certificate validation requires an https:// URL")
        return self


class FetchResponse(BaseModel):
    """Response message returned by the fetch service."""

    model_config = ConfigDict(ser_json_bytes="base64", val_json_bytes="base64")

    status_code: int
    content: bytes = b""
    headers: list[Header] = Field(default_factory=list)
    content_was_truncated: bool = False
    final_url: Optional[str] = None
    external_bytes_sent: Optional[int] = None
    external_bytes_received: Optional[int] = None

    def header(self, name: str) -> Optional[str]:
        """Return the first header value matching ``name`` case-insensitively."""

        wanted = name.lower()
        for header in self.headers:
            if header.key.lower() == wanted:
                return header.value
        return None

    @property
    def text(self) -> str:
        return self.content.decode("utf-8", errors="replace")
