from __future__ import annotations

import pytest

from coinbot.config.settings import DEFAULT_BASE_URL, Settings, parse_listen_addr


ENV_VARS = [
    "COINBOT_ADDR",
    "COINBOT_BASE_URL",
    "COINBOT_TIMEZONE",
    "COINBOT_READ_TIMEOUT",
    "COINBOT_WRITE_TIMEOUT",
    "COINBOT_IDLE_TIMEOUT",
    "COINBOT_SHUTDOWN_GRACE",
    "COINBOT_UPSTREAM_TIMEOUT",
    "COINBOT_LOG_LEVEL",
]


@pytest.fixture()
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()
    assert settings.LISTEN_ADDR == ":8080"
    assert settings.COINCAP_BASE_URL == DEFAULT_BASE_URL
    assert settings.DISPLAY_TIMEZONE == "Europe/Kyiv"
    assert settings.READ_TIMEOUT_S == 5.0
    assert settings.WRITE_TIMEOUT_S == 10.0
    assert settings.IDLE_TIMEOUT_S == 60.0
    assert settings.SHUTDOWN_GRACE_S == 30.0
    assert settings.UPSTREAM_TIMEOUT_S is None
    assert settings.LOG_LEVEL == "INFO"


def test_env_overrides(clean_env):
    clean_env.setenv("COINBOT_ADDR", "127.0.0.1:9000")
    clean_env.setenv("COINBOT_BASE_URL", "http://localhost:5000/v2/assets/")
    clean_env.setenv("COINBOT_UPSTREAM_TIMEOUT", "2.5")
    clean_env.setenv("COINBOT_LOG_LEVEL", "debug")

    settings = Settings.from_env()
    assert settings.listen_host_port == ("127.0.0.1", 9000)
    assert settings.COINCAP_BASE_URL == "http://localhost:5000/v2/assets"
    assert settings.UPSTREAM_TIMEOUT_S == 2.5
    assert settings.LOG_LEVEL == "DEBUG"


def test_with_overrides_skips_none(clean_env):
    settings = Settings.from_env().with_overrides(LISTEN_ADDR=None, COINCAP_BASE_URL="http://x/")
    assert settings.LISTEN_ADDR == ":8080"
    assert settings.COINCAP_BASE_URL == "http://x"


@pytest.mark.parametrize(
    "addr,expected",
    [
        (":8080", ("0.0.0.0", 8080)),
        ("127.0.0.1:9000", ("127.0.0.1", 9000)),
        ("[::1]:7777", ("::1", 7777)),
        ("[::]:8080", ("::", 8080)),
        ("localhost:0", ("localhost", 0)),
    ],
)
def test_parse_listen_addr(addr, expected):
    assert parse_listen_addr(addr) == expected


@pytest.mark.parametrize("addr", ["8080", "host:http", ":70000"])
def test_parse_listen_addr_rejects_garbage(addr):
    with pytest.raises(ValueError):
        parse_listen_addr(addr)
