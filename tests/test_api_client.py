"""Tests for the request executor."""

import pytest
import requests

from cromwell_api.api_client import APIClient
from cromwell_api.config import ClientConfig, RequestOptions, set_option
from cromwell_api.errors import CromwellAPIError
from conftest import FakeSession, make_response


def test_get_builds_url_from_default_base():
    session = FakeSession(make_response({"ok": True}))
    client = APIClient(session=session)

    result = client.get("api/workflows/v1/backends")

    assert result.content == {"ok": True}
    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "http://localhost:8000/api/workflows/v1/backends"
    assert call["timeout"] == 30
    assert call["headers"]["accept"] == "application/json"


def test_base_url_read_on_every_request():
    session = FakeSession(make_response({}), make_response({}))
    client = APIClient(session=session)

    client.get("/a")
    set_option("cromwell_base", "http://example.com:8111/")
    client.get("/b")

    assert session.calls[0]["url"] == "http://localhost:8000/a"
    assert session.calls[1]["url"] == "http://example.com:8111/b"


def test_explicit_base_url_does_not_touch_config():
    cfg = ClientConfig()
    client = APIClient(cfg, session=FakeSession(), base_url="http://host:1", timeout=5)
    assert client.base_url == "http://host:1"
    assert client.config.timeout == 5
    assert cfg.base_url is None


def test_query_params_forwarded():
    session = FakeSession(make_response({"results": []}))
    APIClient(session=session).get("api/workflows/v1/query", params={"status": "Running"})
    assert session.calls[0]["params"] == {"status": "Running"}


def test_request_options_override_timeout_headers_and_session():
    own = FakeSession()
    other = FakeSession(make_response({}))
    client = APIClient(session=own)

    client.get("x", options=RequestOptions(timeout=2.5, session=other, headers={"X-Trace": "1"}))

    assert own.calls == []
    call = other.calls[0]
    assert call["timeout"] == 2.5
    assert call["headers"] == {"accept": "application/json", "X-Trace": "1"}


def test_post_sends_multipart_files_without_query():
    session = FakeSession(make_response({"id": "1"}))
    files = {"wdlSource": (None, "workflow w {}")}

    APIClient(session=session).post("/api/workflows/v1/batch", files=files)

    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://localhost:8000/api/workflows/v1/batch"
    assert call["files"] == files
    assert "params" not in call


def test_validation_failure_propagates():
    session = FakeSession(make_response({"message": "nope"}, status_code=400))
    with pytest.raises(CromwellAPIError):
        APIClient(session=session).get("x")


def test_ok_statuses_from_config():
    session = FakeSession(make_response({"id": "1"}, status_code=201))
    client = APIClient(ClientConfig(ok_statuses=(200, 201)), session=session)
    assert client.post("x", files={}).content == {"id": "1"}


def test_transport_errors_not_wrapped():
    class BrokenSession(FakeSession):
        def get(self, url, **kwargs):
            raise requests.exceptions.ConnectionError("refused")

    with pytest.raises(requests.exceptions.ConnectionError):
        APIClient(session=BrokenSession()).get("x")


def test_close_only_owned_session(monkeypatch):
    supplied = FakeSession()
    with APIClient(session=supplied):
        pass
    assert supplied.closed is False

    closed = []
    monkeypatch.setattr(requests.Session, "close", lambda self: closed.append(self))
    with APIClient() as client:
        pass
    assert closed == [client.session]
