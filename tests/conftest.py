import json

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from cromwell_api import config


def make_response(body=None, status_code=200, content_type="application/json", text=None):
    resp = requests.Response()
    resp.status_code = status_code
    resp.headers = CaseInsensitiveDict()
    if content_type is not None:
        resp.headers["Content-Type"] = content_type
    if text is None:
        text = json.dumps(body)
    resp._content = text.encode("utf-8")
    resp.encoding = "utf-8"
    return resp


class FakeSession:
    """Records calls and answers with queued responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []
        self.closed = False

    def _answer(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        return self.responses.pop(0)

    def get(self, url, **kwargs):
        return self._answer("GET", url, **kwargs)

    def post(self, url, **kwargs):
        return self._answer("POST", url, **kwargs)

    def close(self):
        self.closed = True


@pytest.fixture(autouse=True)
def clean_base_url(monkeypatch):
    monkeypatch.delenv(config.BASE_URL_ENV, raising=False)
    monkeypatch.setattr(config, "_options", {})
    yield
