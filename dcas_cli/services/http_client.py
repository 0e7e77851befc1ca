import requests
from pydantic import BaseModel
from typing import Optional

from dcas_cli.config.settings import get_settings
from dcas_cli.config.logging_config import logger
from dcas_cli.utils.exceptions import TransportError


class HTTPResponse(BaseModel):
    """Model for a raw HTTP response."""
    status_code: int
    payload: bytes = b""
    error_msg: str = ""


class HTTPClient:
    """Blocking HTTP client for the DCAS and Sidetree endpoints."""

    def __init__(self, session: Optional[requests.Session] = None):
        self.settings = get_settings()
        self.session = session or requests.Session()

    def get(self, url: str) -> HTTPResponse:
        return self._send("GET", url)

    def post(self, url: str, body: bytes) -> HTTPResponse:
        return self._send("POST", url, body)

    def _send(self, method: str, url: str, body: Optional[bytes] = None) -> HTTPResponse:
        headers = {"Content-Type": "application/json"} if body is not None else {}
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self.settings.HTTP_TIMEOUT,
                verify=self.settings.HTTP_VERIFY_TLS
            )
        except requests.RequestException as e:
            raise TransportError(f"error sending {method} request to [{url}]: {e}") from e

        logger.debug(f"{method} {url} returned status code {response.status_code}")

        if response.status_code != requests.codes.ok:
            return HTTPResponse(status_code=response.status_code, error_msg=response.text)

        return HTTPResponse(status_code=response.status_code, payload=response.content)
