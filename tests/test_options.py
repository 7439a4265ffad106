from __future__ import annotations

import dataclasses

import pytest

from doctape_auth import (
    DEFAULT_BASE_URL,
    DoctapeConfigError,
    DoctapeOptions,
    DoctapeStrategy,
    options_from_env,
)

REQUIRED = {
    "client_id": "abc",
    "client_secret": "secret",
    "callback_url": "https://www.example.net/auth/doctape/callback",
}


def test_defaults_derive_from_default_base_url() -> None:
    opts = DoctapeOptions(**REQUIRED)
    assert opts.base_url == DEFAULT_BASE_URL == "https://my.doctape.com"
    assert opts.authorization_url == "https://my.doctape.com/oauth2"
    assert opts.token_url == "https://my.doctape.com/oauth2/token"


def test_custom_base_url_is_used_for_derived_urls() -> None:
    opts = DoctapeOptions(**REQUIRED, base_url="https://doctape.internal")
    assert opts.authorization_url == "https://doctape.internal/oauth2"
    assert opts.token_url == "https://doctape.internal/oauth2/token"


def test_explicit_endpoints_are_used_verbatim() -> None:
    opts = DoctapeOptions(
        **REQUIRED,
        base_url="https://doctape.internal",
        authorization_url="https://auth.example.org/authorize",
        token_url="https://auth.example.org/token",
    )
    assert opts.authorization_url == "https://auth.example.org/authorize"
    assert opts.token_url == "https://auth.example.org/token"
    assert opts.base_url == "https://doctape.internal"


def test_options_are_immutable() -> None:
    opts = DoctapeOptions(**REQUIRED)
    with pytest.raises(dataclasses.FrozenInstanceError):
        opts.base_url = "https://elsewhere"  # type: ignore[misc]


@pytest.mark.parametrize("missing", ["client_id", "client_secret", "callback_url"])
def test_missing_required_option_raises(missing: str) -> None:
    kwargs = dict(REQUIRED)
    kwargs[missing] = ""
    with pytest.raises(DoctapeConfigError) as exc_info:
        DoctapeOptions(**kwargs)
    assert missing in str(exc_info.value)


def test_from_mapping_accepts_camel_case_keys() -> None:
    opts = DoctapeOptions.from_mapping(
        {
            "clientID": "123-456-789",
            "clientSecret": "shhh-its-a-secret",
            "callbackURL": "https://www.example.net/auth/doctape/callback",
            "baseURL": "https://doctape.internal",
            "unrelated": True,
        }
    )
    assert opts.client_id == "123-456-789"
    assert opts.token_url == "https://doctape.internal/oauth2/token"


def test_from_mapping_without_credentials_raises() -> None:
    with pytest.raises(DoctapeConfigError):
        DoctapeOptions.from_mapping({"callbackURL": "https://www.example.net/cb"})


def test_strategy_rejects_incomplete_mapping() -> None:
    with pytest.raises(DoctapeConfigError):
        DoctapeStrategy({"clientID": "abc"}, lambda *args: None)


def test_options_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DOCTAPE_CLIENT_ID", "env-id")
    monkeypatch.setenv("DOCTAPE_CLIENT_SECRET", "env-secret")
    monkeypatch.setenv("DOCTAPE_CALLBACK_URL", "https://app.example.net/cb")
    monkeypatch.delenv("DOCTAPE_BASE_URL", raising=False)
    monkeypatch.setenv("DOCTAPE_TOKEN_URL", "https://tokens.example.net/token")
    opts = options_from_env()
    assert opts.client_id == "env-id"
    assert opts.authorization_url == "https://my.doctape.com/oauth2"
    assert opts.token_url == "https://tokens.example.net/token"


def test_options_from_env_missing_values(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("CLIENT_ID", "CLIENT_SECRET", "CALLBACK_URL"):
        monkeypatch.delenv(f"DOCTAPE_{name}", raising=False)
    with pytest.raises(DoctapeConfigError):
        options_from_env()


def test_strategy_without_options_raises() -> None:
    with pytest.raises(DoctapeConfigError):
        DoctapeStrategy(None, lambda *args: None)


def test_from_mapping_none_is_empty() -> None:
    with pytest.raises(DoctapeConfigError) as exc_info:
        DoctapeOptions.from_mapping(None)
    assert "client_id" in str(exc_info.value)
