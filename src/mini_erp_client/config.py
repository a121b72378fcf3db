from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from dotenv import load_dotenv

ENV_PREFIX = "MINI_ERP_"
DEFAULT_INVOICE_FILENAME = "Lieferschein_Altenburg.pdf"
SUPPORTED_LOCALES = ("en", "de", "ru")

N = TypeVar("N", int, float)


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    connect_timeout_seconds: float = 5.0
    read_timeout_seconds: float = 15.0
    max_connections: int = 10
    verify_ssl: bool = True
    invoice_filename: str = DEFAULT_INVOICE_FILENAME
    locale: str = "en"


def _env(name: str) -> str:
    return (os.getenv(ENV_PREFIX + name) or "").strip()


def _positive(name: str, cast: Callable[[str], N], default: N) -> N:
    raw = _env(name)
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid {ENV_PREFIX}{name}: expected a number, got {raw!r}") from exc
    if value <= 0:
        raise ConfigError(f"Invalid {ENV_PREFIX}{name}: expected a positive value, got {raw!r}")
    return value


def _flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if not raw:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _base_url(env_name: str) -> str:
    url = _env(f"API_BASE_URL_{env_name.upper()}") or _env("API_BASE_URL")
    if not url:
        raise ConfigError(f"Missing {ENV_PREFIX}API_BASE_URL (or {ENV_PREFIX}API_BASE_URL_{env_name.upper()})")
    return url.rstrip("/")


def _invoice_filename() -> str:
    name = _env("INVOICE_FILENAME") or DEFAULT_INVOICE_FILENAME
    if "/" in name or "\\" in name:
        raise ConfigError(f"Invalid {ENV_PREFIX}INVOICE_FILENAME: expected a bare file name, got {name!r}")
    return name


def _locale() -> str:
    locale = _env("LOCALE").lower() or "en"
    if locale not in SUPPORTED_LOCALES:
        raise ConfigError(
            f"Invalid {ENV_PREFIX}LOCALE: expected one of {', '.join(SUPPORTED_LOCALES)}, got {locale!r}"
        )
    return locale


def load_config(env_file: str | None = None) -> ClientConfig:
    """Build the client config from ``MINI_ERP_*`` variables, reading ``env_file`` first if given.

    ``MINI_ERP_TIMEOUT_SECONDS`` is the fallback for the read timeout and caps
    the default connect timeout.
    """
    load_dotenv(env_file)

    env_name = _env("ENV") or "dev"
    timeout = _positive("TIMEOUT_SECONDS", float, 10.0)
    return ClientConfig(
        env_name=env_name,
        api_base_url=_base_url(env_name),
        connect_timeout_seconds=_positive("CONNECT_TIMEOUT_SECONDS", float, min(timeout, 5.0)),
        read_timeout_seconds=_positive("READ_TIMEOUT_SECONDS", float, timeout),
        max_connections=_positive("MAX_CONNECTIONS", int, 10),
        verify_ssl=_flag("VERIFY_SSL", True),
        invoice_filename=_invoice_filename(),
        locale=_locale(),
    )
