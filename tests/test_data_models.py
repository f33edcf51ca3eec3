"""Tests for fetch-service data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from urlfetch_adapter.data_models import ErrorCode, FetchRequest, FetchResponse, Header, RequestMethod


def test_error_code_values() -> None:
    assert ErrorCode.OK == 0
    assert ErrorCode.INVALID_URL == 1
    assert ErrorCode.DNS_ERROR == 7
    assert ErrorCode.PAYLOAD_TOO_LARGE == 13


def test_request_method_values() -> None:
    assert [m.name for m in RequestMethod] == ["GET", "POST", "HEAD", "PUT", "DELETE", "PATCH"]
    assert RequestMethod.GET == 1


def test_request_rejects_non_http_url() -> None:
    with pytest.raises(ValidationError):
        FetchRequest(url="ftp://example.com/file")


def test_request_rejects_payload_on_get() -> None:
    with pytest.raises(ValidationError):
        FetchRequest(url="https://example.com", method=RequestMethod.GET, payload=b"data")


def test_request_rejects_certificate_validation_over_http() -> None:
    with pytest.raises(ValidationError):
        FetchRequest(url="http://example.com", must_validate_server_certificate=True)


def test_request_rejects_non_positive_deadline() -> None:
    with pytest.raises(ValidationError):
        FetchRequest(url="https://example.com", deadline=0.0)


def test_request_json_encodes_payload_as_base64() -> None:
    request = FetchRequest(url="https://example.com", method=RequestMethod.POST, payload=b"data")
    dumped = request.model_dump(mode="json")
    assert dumped["payload"] == "ZGF0YQ=="
    assert dumped["method"] == 2


def test_response_header_lookup_is_case_insensitive() -> None:
    response = FetchResponse(
        status_code=200,
        content=b"hello",
        headers=[Header(key="Content-Type", value="text/plain"), Header(key="content-type", value="x")],
    )
    assert response.header("CONTENT-TYPE") == "text/plain"
    assert response.header("X-Missing") is None
    assert response.text == "hello"


def test_response_from_json_decodes_base64_content() -> None:
    response = FetchResponse.model_validate_json(
        '{"status_code": 404, "content": "bm90IGZvdW5k", "content_was_truncated": true}'
    )
    assert response.status_code == 404
    assert response.content == b"not found"
    assert response.content_was_truncated is True
    assert response.headers == []
