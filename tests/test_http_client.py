from unittest.mock import MagicMock

import pytest
import requests

from dcas_cli.services.http_client import HTTPClient
from dcas_cli.utils.exceptions import TransportError


def mock_response(status_code, content=b"", text=""):
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.text = text
    return response


def test_post_sends_json():
    session = MagicMock()
    session.request.return_value = mock_response(200, content=b'"X"')

    response = HTTPClient(session).post("http://h/content", b"{}")

    assert response.status_code == 200
    assert response.payload == b'"X"'
    args, kwargs = session.request.call_args
    assert args == ("POST", "http://h/content")
    assert kwargs["data"] == b"{}"
    assert kwargs["headers"] == {"Content-Type": "application/json"}
    assert kwargs["timeout"] == 30.0


def test_get_error_response():
    session = MagicMock()
    session.request.return_value = mock_response(404, text="document not found")

    response = HTTPClient(session).get("http://h/file/file:idx:1")

    assert response.status_code == 404
    assert response.error_msg == "document not found"
    assert response.payload == b""


def test_timeout_from_settings(monkeypatch):
    monkeypatch.setenv("DCAS_HTTP_TIMEOUT", "5")
    session = MagicMock()
    session.request.return_value = mock_response(200)

    HTTPClient(session).get("http://h/content")

    assert session.request.call_args.kwargs["timeout"] == 5.0


def test_network_error():
    session = MagicMock()
    session.request.side_effect = requests.ConnectionError("connection refused")

    with pytest.raises(TransportError) as exc_info:
        HTTPClient(session).get("http://h/content")

    assert exc_info.value.status_code is None
