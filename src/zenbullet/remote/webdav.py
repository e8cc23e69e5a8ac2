# SPDX-License-Identifier: MIT

import logging
from typing import Optional

import requests
from requests.auth import HTTPBasicAuth

from zenbullet.errors import TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class WebDavBlobStore:
    """
    Blob store backed by a WebDAV folder.

    Each key is a file directly under the configured URL. A 404 on read means
    the document does not exist yet; every other failure raises TransportError.
    """

    def __init__(
        self,
        url: str,
        username: str,
        password: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = url.rstrip("/")
        self.timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._session.auth = HTTPBasicAuth(username, password)

    def url_for(self, key: str) -> str:
        return f"{self.base_url}/{key.lstrip('/')}"

    def get(self, key: str) -> Optional[bytes]:
        url = self.url_for(key)
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error("WebDAV download failed: %s", e)
            raise TransportError(f"Could not reach {self.base_url}: {e}") from e

        if response.status_code == 404:
            logger.debug("%s does not exist yet", url)
            return None
        self.__raise_for_status(response, "download")
        return response.content

    def put(self, key: str, data: bytes) -> None:
        url = self.url_for(key)
        try:
            response = self._session.put(
                url,
                data=data,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("WebDAV upload failed: %s", e)
            raise TransportError(f"Could not reach {self.base_url}: {e}") from e
        self.__raise_for_status(response, "upload")

    def check_connection(self) -> bool:
        try:
            response = self._session.request(
                "PROPFIND",
                self.base_url + "/",
                headers={"Depth": "0"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error("WebDAV connection failed: %s", e)
            return False
        return response.status_code < 400

    def __raise_for_status(self, response: requests.Response, operation: str) -> None:
        if response.status_code in (401, 403):
            raise TransportError(
                f"Authentication failed ({response.status_code}) during {operation}"
            )
        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            logger.error("WebDAV %s failed: %s", operation, e)
            raise TransportError(f"WebDAV {operation} failed: {e}") from e
