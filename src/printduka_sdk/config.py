from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

PREFIX = "PRINTDUKA_"

NumberT = TypeVar("NumberT", int, float)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    retries: int = 3
    retry_backoff_seconds: float = 0.3
    max_connections: int = 20
    verify_ssl: bool = True
    search_debounce_ms: int = 3000
    default_page_size: int = 20
    cache_ttl_seconds: float = 60.0


def _env(name: str) -> str | None:
    value = os.getenv(PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _number(
    name: str,
    cast: Callable[[str], NumberT],
    default: NumberT,
    *,
    minimum: NumberT,
    exclusive: bool = False,
) -> NumberT:
    """Read ``PRINTDUKA_<name>`` and enforce its lower bound."""
    raw = _env(name)
    if raw is None:
        value = default
    else:
        try:
            value = cast(raw)
        except ValueError as exc:
            kind = "an integer" if cast is int else "a number"
            raise ConfigError(f"Invalid {PREFIX}{name}: expected {kind}, got {raw!r}") from exc
    too_small = value <= minimum if exclusive else value < minimum
    if too_small:
        op = ">" if exclusive else ">="
        raise ConfigError(f"Invalid {PREFIX}{name}: expected {op} {minimum}, got {value}")
    return value


def _flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the client config from the environment, after applying ``env_file``.

    ``PRINTDUKA_API_BASE_URL_<ENV>`` wins over ``PRINTDUKA_API_BASE_URL`` so
    one .env file can hold every environment's backend.
    """
    load_dotenv(env_file)

    env_name = _env("ENV") or "dev"
    api_base_url = _env(f"API_BASE_URL_{env_name.upper()}") or _env("API_BASE_URL")
    if not api_base_url:
        raise ConfigError(f"Missing required config values: {PREFIX}API_BASE_URL")

    timeout = _number("TIMEOUT_SECONDS", float, 10.0, minimum=0.0, exclusive=True)
    connect_timeout = _number("CONNECT_TIMEOUT_SECONDS", float, min(timeout, 5.0), minimum=0.0, exclusive=True)

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        connect_timeout_seconds=connect_timeout,
        read_timeout_seconds=_number(
            "READ_TIMEOUT_SECONDS", float, max(timeout, connect_timeout), minimum=0.0, exclusive=True
        ),
        retries=_number("RETRIES", int, 3, minimum=0),
        retry_backoff_seconds=_number("RETRY_BACKOFF_SECONDS", float, 0.3, minimum=0.0),
        max_connections=_number("MAX_CONNECTIONS", int, 20, minimum=1),
        verify_ssl=_flag("VERIFY_SSL", True),
        # Staff list pages wait for 3s of quiet typing before searching.
        search_debounce_ms=_number("SEARCH_DEBOUNCE_MS", int, 3000, minimum=0),
        default_page_size=_number("DEFAULT_PAGE_SIZE", int, 20, minimum=1),
        cache_ttl_seconds=_number("CACHE_TTL_SECONDS", float, 60.0, minimum=0.0),
    )
