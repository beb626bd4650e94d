"""HTTP-backed store client."""

from __future__ import annotations

from typing import Any
import base64
import logging
import uuid

import httpx

from fieldstore.config import FieldStoreConfig
from fieldstore.events import EventLog
from fieldstore.exceptions import FieldStoreException
from fieldstore.modules.hash import HashManager
from fieldstore.modules.transaction import Batch

logger = logging.getLogger(__name__)


class FieldStoreClient:
    """Key/value store client for a server speaking the JSON command API.

    The client is itself a store (``exists``/``get``/``set``/``multi``), so
    hash operations run against the remote server through ``client.hash``.

    Args:
        config: The client configuration
        http_client: Optional custom HTTP client

    Example:
        >>> config = FieldStoreConfig("http://localhost:15500")
        >>> async with FieldStoreClient(config) as client:
        ...     await client.hash.hset("user:1", "name", "Alice")
        ...     name = await client.hash.hget("user:1", "name")
    """

    def __init__(
        self,
        config: FieldStoreConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize a new FieldStoreClient."""
        self._config = config
        self._owns_client = http_client is None

        if http_client is not None:
            self._http_client = http_client
        else:
            headers = {"Accept": "application/json"}

            if config.auth_token:
                headers["Authorization"] = f"Bearer {config.auth_token}"
            elif config.username and config.password:
                credentials = base64.b64encode(
                    f"{config.username}:{config.password}".encode()
                ).decode()
                headers["Authorization"] = f"Basic {credentials}"

            self._http_client = httpx.AsyncClient(
                base_url=config.base_url,
                timeout=config.timeout,
                headers=headers,
            )

        self._events = EventLog()
        self._hash: HashManager | None = None

    @property
    def hash(self) -> HashManager:
        """Get the Hash data structure operations."""
        if self._hash is None:
            self._hash = HashManager(
                self,
                events=self._events,
                serialize_writes=self._config.serialize_writes,
            )
        return self._hash

    @property
    def events(self) -> EventLog:
        """Get the log of hash mutation events."""
        return self._events

    @property
    def config(self) -> FieldStoreConfig:
        """Get the client configuration."""
        return self._config

    async def exists(self, key: str) -> bool:
        response = await self.send_command("kv.exists", {"key": key})
        return bool(response.get("exists", False))

    async def get(self, key: str) -> Any:
        response = await self.send_command("kv.get", {"key": key})
        return response.get("value")

    async def set(self, key: str, value: Any) -> None:
        await self.send_command("kv.set", {"key": key, "value": value})

    def multi(self, target: Any = None) -> Batch:
        """Start a batch whose operations run in order on ``exec``."""
        return Batch(target)

    async def send_command(
        self,
        command: str,
        payload: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a command to the key/value server.

        Args:
            command: The command name (e.g., 'kv.get', 'kv.set')
            payload: The command payload data

        Returns:
            The response payload as a dictionary

        Raises:
            StoreError: If the request or the server operation fails
        """
        try:
            request_payload = {
                "command": command,
                "request_id": str(uuid.uuid4()),
                "payload": payload or {},
            }

            response = await self._http_client.post("/api/v1/command", json=request_payload)

            if not response.text:
                return {}

            try:
                result = response.json()
            except Exception as e:
                raise FieldStoreException.invalid_response(
                    f"Failed to parse JSON response: {e}"
                ) from e

            if isinstance(result, dict) and not result.get("success", True):
                error_msg = result.get("error", "Unknown server error")
                raise FieldStoreException.server_error(str(error_msg))

            if not response.is_success:
                raise FieldStoreException.http_error(
                    f"Request failed with status {response.status_code}",
                    response.status_code,
                )

            return result.get("payload", {}) if isinstance(result, dict) else {}

        except httpx.HTTPError as e:
            logger.warning("%s failed: %s", command, e)
            raise FieldStoreException.network_error(str(e)) from e

    async def __aenter__(self) -> FieldStoreClient:
        """Enter async context manager."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Exit async context manager."""
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client:
            await self._http_client.aclose()
