"""Tests for FieldStoreConfig."""

import pytest

from fieldstore.config import FieldStoreConfig
from fieldstore.exceptions import FieldStoreException


def test_constructor_with_valid_url() -> None:
    """Test constructor with valid URL."""
    config = FieldStoreConfig("http://localhost:15500")

    assert config.base_url == "http://localhost:15500"
    assert config.timeout == 30
    assert config.auth_token is None
    assert config.serialize_writes is True


def test_constructor_removes_trailing_slash() -> None:
    """Test constructor removes trailing slash."""
    config = FieldStoreConfig("http://localhost:15500/")

    assert config.base_url == "http://localhost:15500"


@pytest.mark.parametrize("url", ["", "   "])
def test_constructor_with_empty_url_raises(url: str) -> None:
    """Test constructor with empty URL raises exception."""
    with pytest.raises(FieldStoreException, match="Base URL cannot be empty"):
        FieldStoreConfig(url)


def test_constructor_with_mixed_auth_raises() -> None:
    """Test token and basic auth cannot be combined."""
    with pytest.raises(FieldStoreException, match="Invalid Configuration"):
        FieldStoreConfig("http://localhost:15500", auth_token="t", username="u")


@pytest.mark.parametrize("timeout", [0, -5])
def test_constructor_with_bad_timeout_raises(timeout: int) -> None:
    """Test the timeout must be positive."""
    with pytest.raises(FieldStoreException, match="Timeout must be positive"):
        FieldStoreConfig("http://localhost:15500", timeout=timeout)


def test_with_timeout_returns_new_config() -> None:
    """Test with_timeout returns new config."""
    config = FieldStoreConfig.create("http://localhost:15500")
    new_config = config.with_timeout(60)

    assert config.timeout == 30
    assert new_config.timeout == 60
    assert config is not new_config


def test_with_auth_token_drops_basic_auth() -> None:
    """Test with_auth_token replaces basic auth credentials."""
    config = FieldStoreConfig("http://localhost:15500", username="u", password="p")
    new_config = config.with_auth_token("test-token")

    assert new_config.auth_token == "test-token"
    assert new_config.username is None
    assert new_config.password is None


def test_with_basic_auth_drops_token() -> None:
    """Test with_basic_auth replaces the token."""
    config = FieldStoreConfig("http://localhost:15500", auth_token="t")
    new_config = config.with_basic_auth("user", "pass")

    assert new_config.auth_token is None
    assert new_config.username == "user"
    assert new_config.password == "pass"


def test_chained_with_methods() -> None:
    """Test chaining with methods."""
    config = (
        FieldStoreConfig.create("http://localhost:15500")
        .with_timeout(60)
        .with_auth_token("my-token")
        .with_serialize_writes(False)
    )

    assert config.timeout == 60
    assert config.auth_token == "my-token"
    assert config.serialize_writes is False
