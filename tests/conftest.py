"""
Shared fixtures for the passwordless client tests.
"""

import json
from unittest.mock import Mock

import pytest
import requests

import passwordless.config.config as config

TEST_API_SECRET = "testapp:secret:0123456789abcdef"


def build_response(status_code=200, body=None, url="https://api.passwordless.dev/"):
    """Create a real requests.Response carrying the given status and body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    if body is None:
        content = b""
    elif isinstance(body, (bytes, str)):
        content = body.encode("utf-8") if isinstance(body, str) else body
    else:
        content = json.dumps(body).encode("utf-8")
    response._content = content
    response.encoding = "utf-8"
    return response


@pytest.fixture
def make_response():
    """Factory for requests.Response objects."""
    return build_response


@pytest.fixture
def transport():
    """Mock transport answering every request with an empty 200."""
    mock_transport = Mock(spec=requests.Session)
    mock_transport.request.return_value = build_response(200, "")
    return mock_transport


@pytest.fixture
def api_secret():
    return TEST_API_SECRET


@pytest.fixture(autouse=True)
def isolate_settings(monkeypatch, tmp_path):
    """Isolate every test from PASSWORDLESS_* env vars, .env files and cached settings."""
    for name in ("PASSWORDLESS_API_URL", "PASSWORDLESS_API_SECRET"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    original_settings = config._settings
    config._settings = None

    yield

    config._settings = original_settings


@pytest.fixture
def sent_request():
    """Return (method, url, headers, json_body) for a recorded transport call."""

    def extract(mock_transport, index=-1):
        call = mock_transport.request.call_args_list[index]
        method, url = call.args
        headers = call.kwargs["headers"]
        data = call.kwargs.get("data")
        body = json.loads(data.decode("utf-8")) if data is not None else None
        return method, url, headers, body

    return extract
