import json

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from dcas_cli.config.settings import get_settings
from dcas_cli.models.upload import ProtocolVariant, UploadConfig
from dcas_cli.services.http_client import HTTPResponse

UPLOAD_URL = "http://h/content"
INDEX_URL = "http://h/file/file:idx:ABC123"
INDEX_BASE_URL = "http://h/file"


class FakeHTTPClient:
    """
    In-memory stand-in for HTTPClient.

    Routes map (method, url) to a list of responses returned in order; the
    last one is repeated. Every call is recorded in calls.
    """

    def __init__(self, routes=None):
        self.routes = routes or {}
        self.calls = []

    def get(self, url):
        return self._respond("GET", url, None)

    def post(self, url, body):
        return self._respond("POST", url, body)

    def _respond(self, method, url, body):
        self.calls.append((method, url, body))
        responses = self.routes[(method, url)]
        if len(responses) > 1:
            return responses.pop(0)
        return responses[0]

    def posts_to(self, url):
        return [body for method, u, body in self.calls if method == "POST" and u == url]


def ok(payload):
    return HTTPResponse(status_code=200, payload=json.dumps(payload).encode("utf-8"))


def error(status_code, message):
    return HTTPResponse(status_code=status_code, error_msg=message)


def index_doc(mappings=None, base_path="/content"):
    return {"fileIndex": {"basePath": base_path, "mappings": mappings or {}}}


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def signing_key():
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def signing_key_pem(signing_key):
    return signing_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.TraditionalOpenSSL,
        serialization.NoEncryption()
    ).decode("ascii")


@pytest.fixture
def json_file(tmp_path):
    path = tmp_path / "a.json"
    path.write_bytes(b'{"name": "a"}')
    return path


@pytest.fixture
def make_config(json_file):
    def _make(protocol=ProtocolVariant.OTP, files=None, file_index_url=INDEX_URL, **kwargs):
        kwargs.setdefault("no_prompt", True)
        return UploadConfig.from_args(
            protocol=protocol,
            files=files or str(json_file),
            url=UPLOAD_URL,
            file_index_url=file_index_url,
            update_pwd="pwd1",
            next_update_pwd="pwd2",
            **kwargs
        )
    return _make
