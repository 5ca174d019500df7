from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Dict, Any, Union

import requests
from requests.auth import HTTPBasicAuth

from .constants import DEFAULT_API_VERSION, DEFAULT_HTTP_TIMEOUT
from .exceptions import AuthenticationError, TransportError
from .logging import get_logger

logger = get_logger(__name__)


@dataclass
class ClientConfig:
    api_version: str = DEFAULT_API_VERSION
    timeout: int = DEFAULT_HTTP_TIMEOUT
    verify_ssl: Union[bool, str] = True


class TfsHttpClient:
    """
    Thin wrapper over requests.Session for the TFS REST API:
    - basic auth when a username/password is given, ambient identity otherwise
    - api-version added to every request
    - HTTP failures mapped to AuthenticationError / TransportError
    - usable as a context manager
    """
    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config or ClientConfig()

        self.session = session or requests.Session()
        if username is not None or password is not None:
            self.session.auth = HTTPBasicAuth(username or "", password or "")
        self.session.headers.update({"Accept": "application/json"})
        self.session.verify = self.config.verify_ssl

    # --------------------
    # Requests
    # --------------------
    def get_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """GET url and decode the JSON body"""
        query = {"api-version": self.config.api_version}
        if params:
            query.update(params)

        logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, params=query, timeout=self.config.timeout)
        except requests.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        if response.status_code in (401, 403):
            raise AuthenticationError(
                f"Authentication failed for {url} (HTTP {response.status_code})"
            )
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            # Sign-in pages come back as 200 text/html
            raise AuthenticationError(f"Unexpected non-JSON response from {url}") from e

    # --------------------
    # Context manager
    # --------------------
    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> TfsHttpClient:
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
