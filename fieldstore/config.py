"""Configuration for the fieldstore client."""

from __future__ import annotations

from fieldstore.exceptions import FieldStoreException


class FieldStoreConfig:
    """Configuration for the HTTP-backed store client.

    Args:
        base_url: The base URL of the key/value server
        timeout: Request timeout in seconds (default: 30)
        auth_token: Optional API key token (Bearer token)
        username: Optional username for Basic Auth
        password: Optional password for Basic Auth
        serialize_writes: Hold a per-key lock across every hash
            read-modify-write (default: True)

    Example:
        >>> config = FieldStoreConfig("http://localhost:15500", auth_token="my-api-key")
        >>> config = FieldStoreConfig("http://localhost:15500", username="user", password="pass")
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: int = 30,
        auth_token: str | None = None,
        username: str | None = None,
        password: str | None = None,
        serialize_writes: bool = True,
    ) -> None:
        """Initialize a new FieldStoreConfig."""
        if not base_url or not base_url.strip():
            raise FieldStoreException.invalid_config("Base URL cannot be empty")

        if auth_token and (username or password):
            raise FieldStoreException.invalid_config(
                "Cannot use both auth_token and Basic Auth (username/password)"
            )

        if timeout <= 0:
            raise FieldStoreException.invalid_config("Timeout must be positive")

        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._auth_token = auth_token
        self._username = username
        self._password = password
        self._serialize_writes = serialize_writes

    @property
    def base_url(self) -> str:
        """Get the base URL."""
        return self._base_url

    @property
    def timeout(self) -> int:
        """Get the timeout in seconds."""
        return self._timeout

    @property
    def auth_token(self) -> str | None:
        """Get the authentication token (API key)."""
        return self._auth_token

    @property
    def username(self) -> str | None:
        """Get the username for Basic Auth."""
        return self._username

    @property
    def password(self) -> str | None:
        """Get the password for Basic Auth."""
        return self._password

    @property
    def serialize_writes(self) -> bool:
        """Whether hash mutations on one key are serialized."""
        return self._serialize_writes

    @classmethod
    def create(cls, base_url: str) -> FieldStoreConfig:
        """Create a new configuration with the specified base URL.

        Args:
            base_url: The base URL of the key/value server

        Returns:
            A new FieldStoreConfig instance
        """
        return cls(base_url)

    def _copy(self, **overrides: object) -> FieldStoreConfig:
        options: dict[str, object] = {
            "timeout": self._timeout,
            "auth_token": self._auth_token,
            "username": self._username,
            "password": self._password,
            "serialize_writes": self._serialize_writes,
        }
        options.update(overrides)
        return FieldStoreConfig(self._base_url, **options)  # type: ignore[arg-type]

    def with_timeout(self, timeout: int) -> FieldStoreConfig:
        """Create a copy with a different timeout.

        Args:
            timeout: The timeout in seconds

        Returns:
            A new FieldStoreConfig instance with the updated timeout
        """
        return self._copy(timeout=timeout)

    def with_auth_token(self, token: str) -> FieldStoreConfig:
        """Create a copy with an authentication token (API key).

        Any Basic Auth credentials are dropped.
        """
        return self._copy(auth_token=token, username=None, password=None)

    def with_basic_auth(self, username: str, password: str) -> FieldStoreConfig:
        """Create a copy with Basic Auth credentials.

        Any authentication token is dropped.
        """
        return self._copy(auth_token=None, username=username, password=password)

    def with_serialize_writes(self, enabled: bool) -> FieldStoreConfig:
        """Create a copy with per-key write serialization switched on or off."""
        return self._copy(serialize_writes=enabled)
