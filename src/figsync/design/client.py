"""Design source client: fetch a document snapshot by file key over HTTP."""
from __future__ import annotations

import logging
from typing import Any

import httpx

from figsync.config import SyncConfig
from figsync.errors import ConfigurationError, DesignFetchError, NetworkError, error_from_status_code
from figsync.model.node import DesignDocument

logger = logging.getLogger(__name__)


class DesignClient:
    """Thin wrapper around :mod:`httpx` that maps errors into figsync exceptions."""

    def __init__(
        self,
        token: str,
        base_url: str = "https://api.figma.com/v1",
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not token:
            raise ConfigurationError("An API token is required to fetch design documents")
        self._client = httpx.Client(
            base_url=base_url,
            headers={"X-Figma-Token": token},
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: SyncConfig, transport: httpx.BaseTransport | None = None) -> DesignClient:
        return cls(
            token=config.api_token,
            base_url=config.api_base_url,
            timeout=config.timeout,
            transport=transport,
        )

    def get_file_data(self, key: str) -> dict[str, Any]:
        """Return the raw file response for *key*.

        Raises a :class:`DesignFetchError` on non-2xx status or transport failure.
        """
        if not key:
            raise ConfigurationError("A file key is required")
        try:
            resp = self._client.get(f"/files/{key}")
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Timed out fetching {key}: {exc}", cause=exc) from exc
        except httpx.TransportError as exc:
            raise NetworkError(f"Could not fetch {key}: {exc}", cause=exc) from exc

        if resp.status_code >= 300:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            msg = body.get("err") if isinstance(body, dict) and body.get("err") else resp.text
            raise error_from_status_code(resp.status_code, str(msg))

        try:
            body = resp.json()
        except ValueError as exc:
            raise DesignFetchError(f"Malformed response for {key}", cause=exc) from exc
        if not isinstance(body, dict):
            raise DesignFetchError(f"Malformed response for {key}")
        return body

    def get_file(self, key: str) -> DesignDocument:
        document = DesignDocument.from_response(key, self.get_file_data(key))
        logger.info("Fetched %s (%s), last modified %s", key, document.name, document.last_modified)
        return document

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> DesignClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
