# coinbot/config/settings.py
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple


DEFAULT_BASE_URL = "https://api.coincap.io/v2/assets"


def parse_float(value: str | None, default: Optional[float]) -> Optional[float]:
    if value is None or value.strip() == "":
        return default
    return float(value)


def parse_str(value: str | None, default: str) -> str:
    if value is None or value.strip() == "":
        return default
    return value.strip()


def parse_listen_addr(addr: str) -> Tuple[str, int]:
    """
    Supports:
      - ":8080"          -> ("0.0.0.0", 8080)
      - "127.0.0.1:9000" -> ("127.0.0.1", 9000)
      - "[::1]:9000"     -> ("::1", 9000)
      - "[::]:8080"      -> ("::", 8080)

    An empty host listens on every IPv4 interface only; pass "[::]:port"
    to listen on IPv6.
    """
    if ":" not in addr:
        raise ValueError(f"Bad listen address (expected host:port): {addr!r}")

    host, port_text = addr.rsplit(":", 1)
    host = host.strip().strip("[]") or "0.0.0.0"

    try:
        port = int(port_text)
    except ValueError as exc:
        raise ValueError(f"Bad port in listen address: {addr!r}") from exc

    if not 0 <= port <= 65535:
        raise ValueError(f"Port out of range in listen address: {addr!r}")
    return host, port


@dataclass(frozen=True)
class Settings:
    LISTEN_ADDR: str
    COINCAP_BASE_URL: str
    DISPLAY_TIMEZONE: str
    READ_TIMEOUT_S: float
    WRITE_TIMEOUT_S: float
    IDLE_TIMEOUT_S: float
    SHUTDOWN_GRACE_S: float
    UPSTREAM_TIMEOUT_S: Optional[float]
    LOG_LEVEL: str

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            LISTEN_ADDR=parse_str(os.getenv("COINBOT_ADDR"), ":8080"),
            COINCAP_BASE_URL=parse_str(os.getenv("COINBOT_BASE_URL"), DEFAULT_BASE_URL).rstrip("/"),
            DISPLAY_TIMEZONE=parse_str(os.getenv("COINBOT_TIMEZONE"), "Europe/Kyiv"),
            READ_TIMEOUT_S=parse_float(os.getenv("COINBOT_READ_TIMEOUT"), 5.0),
            WRITE_TIMEOUT_S=parse_float(os.getenv("COINBOT_WRITE_TIMEOUT"), 10.0),
            IDLE_TIMEOUT_S=parse_float(os.getenv("COINBOT_IDLE_TIMEOUT"), 60.0),
            SHUTDOWN_GRACE_S=parse_float(os.getenv("COINBOT_SHUTDOWN_GRACE"), 30.0),
            UPSTREAM_TIMEOUT_S=parse_float(os.getenv("COINBOT_UPSTREAM_TIMEOUT"), None),
            LOG_LEVEL=parse_str(os.getenv("COINBOT_LOG_LEVEL"), "INFO").upper(),
        )

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Copy with every non-None override applied (CLI flags beat env)."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "COINCAP_BASE_URL" in changes:
            changes["COINCAP_BASE_URL"] = changes["COINCAP_BASE_URL"].rstrip("/")
        if "LOG_LEVEL" in changes:
            changes["LOG_LEVEL"] = changes["LOG_LEVEL"].upper()
        return replace(self, **changes)

    @property
    def listen_host_port(self) -> Tuple[str, int]:
        return parse_listen_addr(self.LISTEN_ADDR)


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
