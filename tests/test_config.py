from __future__ import annotations

import pytest

from propr import ConfigurationError
from propr.config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientOptions


def test_defaults() -> None:
    options = ClientOptions(token="abc")

    assert options.base_url == DEFAULT_BASE_URL == "https://cdn.prepr.io"
    assert options.timeout == DEFAULT_TIMEOUT == 4.0
    assert options.user_id is None


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PREPR_TOKEN", "env-token")
    monkeypatch.setenv("PREPR_BASE_URL", "https://graphql.prepr.io")
    monkeypatch.setenv("PREPR_TIMEOUT", "2.5")
    monkeypatch.setenv("PREPR_USER_ID", "visitor-1")

    options = ClientOptions.from_env()

    assert options == ClientOptions(
        token="env-token",
        base_url="https://graphql.prepr.io",
        timeout=2.5,
        user_id="visitor-1",
    )


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PREPR_TOKEN", "env-token")
    for name in ("PREPR_BASE_URL", "PREPR_TIMEOUT", "PREPR_USER_ID"):
        monkeypatch.delenv(name, raising=False)

    options = ClientOptions.from_env()

    assert options.base_url == DEFAULT_BASE_URL
    assert options.timeout == DEFAULT_TIMEOUT
    assert options.user_id is None


def test_from_env_requires_token(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PREPR_TOKEN", raising=False)

    with pytest.raises(ConfigurationError):
        ClientOptions.from_env()


@pytest.mark.parametrize("raw", ["4s", "fast"])
def test_from_env_rejects_malformed_timeout(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("PREPR_TOKEN", "env-token")
    monkeypatch.setenv("PREPR_TIMEOUT", raw)

    with pytest.raises(ConfigurationError) as excinfo:
        ClientOptions.from_env()

    assert excinfo.value.details == {"PREPR_TIMEOUT": raw}


def test_from_env_empty_timeout_uses_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PREPR_TOKEN", "env-token")
    monkeypatch.setenv("PREPR_TIMEOUT", "")

    assert ClientOptions.from_env().timeout == DEFAULT_TIMEOUT
