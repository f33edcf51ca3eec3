"""Tests for the command-line entry point."""

from __future__ import annotations

import argparse

import pytest

import urlfetch_adapter.cli as cli
from urlfetch_adapter.data_models import ErrorCode, FetchRequest, FetchResponse, Header
from urlfetch_adapter.exceptions import ApplicationError


class StubProxy:
    def __init__(self, response: FetchResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.requests: list[FetchRequest] = []

    def make_sync_call(self, service: str, call: str, request: FetchRequest) -> FetchResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response


def _install(monkeypatch: pytest.MonkeyPatch, proxy: StubProxy) -> list[str | None]:
    api_urls: list[str | None] = []

    def factory(api_url: str | None = None) -> StubProxy:
        api_urls.append(api_url)
        return proxy

    monkeypatch.setattr(cli, "HttpApiProxy", factory)
    return api_urls


def test_prints_status_headers_and_body(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    proxy = StubProxy(
        FetchResponse(status_code=200, content=b"hello", headers=[Header(key="Content-Type", value="text/plain")])
    )
    api_urls = _install(monkeypatch, proxy)

    exit_code = cli.run_cli(
        [
            "https://example.com/submit",
            "-X",
            "POST",
            "-H",
            "Content-Type: application/json",
            "-d",
            '{"a": 1}',
            "--deadline",
            "3",
            "--no-follow-redirects",
            "--api-url",
            "http://runtime/rpc",
        ]
    )

    assert exit_code == 0
    out = capsys.readouterr().out
    assert out.startswith("HTTP 200\n")
    assert "Content-Type: text/plain" in out
    assert "hello" in out

    assert api_urls == ["http://runtime/rpc"]
    request = proxy.requests[0]
    assert request.payload == b'{"a": 1}'
    assert request.headers == [Header(key="Content-Type", value="application/json")]
    assert request.deadline == 3.0
    assert request.follow_redirects is False


def test_service_error_returns_non_zero(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _install(monkeypatch, StubProxy(error=ApplicationError(ErrorCode.CONNECTION_ERROR, "reset by peer")))

    assert cli.run_cli(["https://example.com"]) == 1
    err = capsys.readouterr().err
    assert "Connection Error" in err
    assert "reset by peer" in err


def test_truncation_rejected_on_request(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _install(monkeypatch, StubProxy(FetchResponse(status_code=200, content=b"pa", content_was_truncated=True)))

    assert cli.run_cli(["https://example.com", "--disallow-truncated"]) == 1
    assert "truncated" in capsys.readouterr().err


def test_invalid_scheme_returns_non_zero(monkeypatch: pytest.MonkeyPatch) -> None:
    proxy = StubProxy(FetchResponse(status_code=200))
    _install(monkeypatch, proxy)

    assert cli.run_cli(["ftp://example.com"]) == 1
    assert proxy.requests == []


def test_header_argument_requires_separator() -> None:
    with pytest.raises(argparse.ArgumentTypeError):
        cli._parse_header("no-separator")
    assert cli._parse_header("X-Token:  abc ") == ("X-Token", "abc")


def test_failure_message_written_once(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _install(monkeypatch, StubProxy(error=ApplicationError(ErrorCode.CLOSED, "socket closed")))

    assert cli.run_cli(["https://example.com"]) == 1
    err = capsys.readouterr().err
    assert err.count("error: ") == 1
    assert "socket closed" in err
