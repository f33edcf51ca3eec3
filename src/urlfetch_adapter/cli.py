"""Command-line interface for fetching a URL through the fetch service."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from .adapter import RequestAdapter
from .api_proxy import HttpApiProxy
from .data_models import RequestMethod
from .exceptions import UrlFetchError
from .logging_utils import configure_logging

LOGGER = configure_logging(__name__)


def _parse_header(value: str) -> tuple[str, str]:
    key, sep, header_value = value.partition(":")
    if not sep or not key.strip():
        raise argparse.ArgumentTypeError("Expected a header in KEY:VALUE form")
    return key.strip(), header_value.strip()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Fetch a URL through the runtime fetch service.")
    parser.add_argument("url", help="http:// or https:// URL to fetch")
    parser.add_argument("--method", "-X", default="GET", choices=[m.name for m in RequestMethod],
                        help="HTTP method. Default GET.")
    parser.add_argument("--header", "-H", dest="headers", action="append", type=_parse_header,
                        default=[], help="Request header as KEY:VALUE. May be repeated.")
    parser.add_argument("--payload", "-d", default="",
                        help="Request body, sent only with POST, PUT and PATCH.")
    parser.add_argument("--deadline", type=float, default=0.0,
                        help="Service-side deadline in seconds. 0 uses the service default.")
    parser.add_argument("--no-follow-redirects", dest="follow_redirects", action="store_false",
                        help="Return redirect responses instead of following them.")
    parser.add_argument("--validate-certificate", action="store_true",
                        help="Require a valid server certificate (https:// only).")
    parser.add_argument("--disallow-truncated", dest="allow_truncated", action="store_false",
                        help="Fail when the service truncates the response body.")
    parser.add_argument("--api-url", default=None,
                        help="Override URLFETCH_API_URL for this run.")
    return parser.parse_args(argv)


def run_cli(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    adapter = RequestAdapter(HttpApiProxy(args.api_url))

    try:
        response = adapter.fetch(
            args.url,
            args.method,
            headers=dict(args.headers),
            payload=args.payload,
            allow_truncated=args.allow_truncated,
            follow_redirects=args.follow_redirects,
            deadline=args.deadline,
            validate_certificate=args.validate_certificate,
        )
    except UrlFetchError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"HTTP {response.status_code}")
    for header in response.headers:
        print(f"{header.key}: {header.value}")
    print()
    print(response.text)
    if response.content_was_truncated:
        LOGGER.warning("Response body was truncated by the fetch service.")
    return 0


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
