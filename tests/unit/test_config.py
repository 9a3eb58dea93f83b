"""
Unit tests for shared configuration utilities.

Tests environment variable loading, defaults, and validation.
"""

from __future__ import annotations

import pytest

from services.shared.config import (
    DEFAULT_CACHE_SIZE,
    DEFAULT_MAX_REQUEST_BYTES,
    DEFAULT_MAX_ROWS,
    DEFAULT_PORT,
    get_cache_size,
    get_log_level,
    get_max_request_bytes,
    get_max_rows,
    get_port,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ("PORT", "MAX_ROWS", "MAX_REQUEST_BYTES", "CACHE_SIZE", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


class TestGetPort:
    """Tests for get_port function."""

    def test_default(self) -> None:
        assert get_port() == DEFAULT_PORT

    def test_from_env_var(self, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "9001")
        assert get_port() == 9001

    def test_no_default_raises_error(self) -> None:
        with pytest.raises(ValueError, match="PORT environment variable not set"):
            get_port(default=None)

    def test_invalid_value_raises_error(self, monkeypatch) -> None:
        monkeypatch.setenv("PORT", "not-a-number")
        with pytest.raises(ValueError, match="Invalid PORT environment variable"):
            get_port()

    @pytest.mark.parametrize("value", ["0", "70000"])
    def test_out_of_range_raises_error(self, monkeypatch, value: str) -> None:
        monkeypatch.setenv("PORT", value)
        with pytest.raises(ValueError, match="Invalid port number"):
            get_port()


class TestPositiveIntSettings:
    @pytest.mark.parametrize(
        "getter,env_var,default",
        [
            (get_max_rows, "MAX_ROWS", DEFAULT_MAX_ROWS),
            (get_max_request_bytes, "MAX_REQUEST_BYTES", DEFAULT_MAX_REQUEST_BYTES),
            (get_cache_size, "CACHE_SIZE", DEFAULT_CACHE_SIZE),
        ],
    )
    def test_default_and_override(self, monkeypatch, getter, env_var: str, default: int) -> None:
        assert getter() == default
        monkeypatch.setenv(env_var, "42")
        assert getter() == 42

    @pytest.mark.parametrize("getter,env_var", [(get_max_rows, "MAX_ROWS"), (get_cache_size, "CACHE_SIZE")])
    def test_non_integer_rejected(self, monkeypatch, getter, env_var: str) -> None:
        monkeypatch.setenv(env_var, "lots")
        with pytest.raises(ValueError, match=f"Invalid {env_var} environment variable"):
            getter()

    @pytest.mark.parametrize("value", ["0", "-5"])
    def test_non_positive_rejected(self, monkeypatch, value: str) -> None:
        monkeypatch.setenv("MAX_ROWS", value)
        with pytest.raises(ValueError, match="must be positive"):
            get_max_rows()

    def test_max_request_bytes_default_is_100mb(self) -> None:
        assert get_max_request_bytes() == 100 * 1024 * 1024


class TestGetLogLevel:
    def test_default(self) -> None:
        assert get_log_level() == "INFO"

    def test_case_insensitive(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "debug")
        assert get_log_level() == "DEBUG"

    def test_invalid_level(self, monkeypatch) -> None:
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        with pytest.raises(ValueError, match="Invalid LOG_LEVEL"):
            get_log_level()
