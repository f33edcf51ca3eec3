"""Request-shaping client for the runtime URL fetch service."""

from .adapter import RequestAdapter, fetch
from .api_proxy import ApiProxy, HttpApiProxy
from .data_models import ErrorCode, FetchRequest, FetchResponse, Header, RequestMethod
from .exceptions import (
    ApplicationError,
    InvalidArgument,
    RpcError,
    ServiceError,
    TruncatedResponse,
    UrlFetchError,
)

__all__ = [
    "ApiProxy",
    "ApplicationError",
    "ErrorCode",
    "FetchRequest",
    "FetchResponse",
    "Header",
    "HttpApiProxy",
    "InvalidArgument",
    "RequestAdapter",
    "RequestMethod",
    "RpcError",
    "ServiceError",
    "TruncatedResponse",
    "UrlFetchError",
    "fetch",
]
