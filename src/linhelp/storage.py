"""
Storage backends for lin-help.

A backend loads and saves the whole entries document as raw bytes:
- LocalFileBackend: a JSON file under the data directory
- RemoteObjectBackend: a single object in a bucket, over HTTP

Saves are whole-document overwrites. "No data yet" loads as empty bytes;
any real I/O failure raises StorageError.
"""

import contextlib
import logging
import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

import httpx

from linhelp.config import get_entries_path, get_remote_settings
from linhelp.errors import ConflictError, StorageError

logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    """Durable home of the entries document."""

    @abstractmethod
    def load(self) -> bytes:
        """
        Return the whole persisted document.

        Returns b"" when nothing has been stored yet.
        Raises StorageError if the store can't be read.
        """

    @abstractmethod
    def save(self, data: bytes) -> None:
        """
        Replace the whole persisted document with data.

        Raises StorageError if the write fails.
        """

    @abstractmethod
    def describe(self) -> str:
        """Human-readable location, for logs and messages."""


class LocalFileBackend(StorageBackend):
    """Entries document stored as a file on local disk."""

    def __init__(self, path: Path | None = None):
        self.path = path or get_entries_path()

    def describe(self) -> str:
        return str(self.path)

    def load(self) -> bytes:
        """Read the file, creating it (and its directory) if absent."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.touch(exist_ok=True)
            return self.path.read_bytes()
        except OSError as e:
            raise StorageError(f"unable to read {self.path}: {e}") from e

    def save(self, data: bytes) -> None:
        """
        Write data to a sibling temp file, then swap it into place.

        A failed write leaves the previous document untouched.
        """
        tmp_path = self.path.with_name(f".{self.path.name}.tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())  # Ensure durability
            os.replace(tmp_path, self.path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink(missing_ok=True)
            raise StorageError(f"unable to update {self.path}: {e}") from e

        logger.info(f"saved {len(data)} bytes to {self.path}")


class RemoteObjectBackend(StorageBackend):
    """
    Entries document stored as one object in a remote bucket.

    GET fetches the whole object (404 means no data yet), PUT replaces it.
    With conditional writes on, the ETag seen at load guards the save so a
    concurrent update from another invocation raises ConflictError instead
    of being overwritten.
    """

    def __init__(
        self,
        endpoint: str,
        bucket: str,
        key: str,
        token: str | None = None,
        timeout: float = 30.0,
        conditional: bool = False,
        transport: httpx.BaseTransport | None = None,
    ):
        self.endpoint = endpoint.rstrip("/")
        self.bucket = bucket
        self.key = key.lstrip("/")
        self.token = token
        self.timeout = timeout
        self.conditional = conditional
        self.transport = transport

        self._etag: str | None = None
        self._loaded = False

    @property
    def url(self) -> str:
        return f"{self.endpoint}/{self.bucket}/{self.key}"

    def describe(self) -> str:
        return f"{self.bucket}/{self.key}"

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self.transport)

    def _headers(self) -> dict[str, str]:
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def load(self) -> bytes:
        try:
            with self._client() as client:
                response = client.get(self.url, headers=self._headers())
                if response.status_code == 404:
                    logger.info(f"no object at {self.describe()}, starting empty")
                    self._etag = None
                    self._loaded = True
                    return b""
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise StorageError(f"unable to fetch {self.describe()}: {e}") from e

        self._etag = response.headers.get("ETag")
        self._loaded = True
        return response.content

    def save(self, data: bytes) -> None:
        headers = {**self._headers(), "Content-Type": "application/json"}

        if self.conditional and self._loaded:
            if self._etag:
                headers["If-Match"] = self._etag
            else:
                headers["If-None-Match"] = "*"

        try:
            with self._client() as client:
                response = client.put(self.url, content=data, headers=headers)
                if response.status_code == 412:
                    raise ConflictError(
                        f"{self.describe()} was modified by another invocation, not saved"
                    )
                response.raise_for_status()
        except httpx.HTTPError as e:
            raise StorageError(f"unable to upload {self.describe()}: {e}") from e

        self._etag = response.headers.get("ETag", self._etag)
        logger.info(f"uploaded {len(data)} bytes to {self.describe()}")


def get_backend(
    remote: bool,
    config: dict[str, Any],
    transport: httpx.BaseTransport | None = None,
) -> StorageBackend:
    """Pick the backend for this invocation. Resolved once, before any load."""
    if not remote:
        return LocalFileBackend()

    settings = get_remote_settings(config)
    return RemoteObjectBackend(
        endpoint=settings["endpoint"],
        bucket=settings["bucket"],
        key=settings["key"],
        token=settings["token"],
        timeout=settings["timeout"],
        conditional=settings["conditional"],
        transport=transport,
    )
