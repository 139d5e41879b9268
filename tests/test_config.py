"""Tests for Settings."""

from __future__ import annotations

import pytest

from assistants_mcp.config import Settings


def test_defaults() -> None:
    settings = Settings.from_env({})
    assert settings.default_provider is None
    assert settings.page_size == 10
    assert settings.timeout == 30.0
    assert settings.host == "127.0.0.1"
    assert settings.port == 8000
    assert settings.max_request_size == 1024 * 1024
    assert settings.to_registry_config().providers == []


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("ASSISTANTS_MCP_PAGE_SIZE", "25")
    monkeypatch.setenv("ASSISTANTS_MCP_PORT", "9001")
    settings = Settings.from_env()
    assert settings.openai_api_key == "sk-env"
    assert settings.page_size == 25
    assert settings.port == 9001


def test_blank_values_are_ignored() -> None:
    settings = Settings.from_env({"OPENAI_API_KEY": "  ", "ASSISTANTS_MCP_TIMEOUT": ""})
    assert settings.openai_api_key is None
    assert settings.timeout == 30.0


@pytest.mark.parametrize(
    "environ",
    [
        {"ASSISTANTS_MCP_PAGE_SIZE": "0"},
        {"ASSISTANTS_MCP_PORT": "70000"},
        {"ASSISTANTS_MCP_TIMEOUT": "fast"},
    ],
)
def test_invalid_values(environ: dict[str, str]) -> None:
    with pytest.raises(ValueError):
        Settings.from_env(environ)


def test_registry_config_for_openai() -> None:
    settings = Settings.from_env(
        {
            "OPENAI_API_KEY": "sk-test",
            "OPENAI_BASE_URL": "http://localhost:9000/v1",
            "OPENAI_ORGANIZATION": "org-1",
            "ASSISTANTS_MCP_TIMEOUT": "5",
        }
    )
    config = settings.to_registry_config()
    (entry,) = config.providers
    assert entry.name == "openai"
    assert entry.priority == 10
    assert entry.config == {
        "api_key": "sk-test",
        "timeout": 5.0,
        "base_url": "http://localhost:9000/v1",
        "organization": "org-1",
    }
    assert config.default_provider is None


def test_registry_config_with_every_provider() -> None:
    settings = Settings.from_env(
        {
            "OPENAI_API_KEY": "sk-test",
            "ANTHROPIC_API_KEY": "ak-test",
            "GEMINI_API_KEY": "gk-test",
            "ASSISTANTS_MCP_PROVIDER": "anthropic",
        }
    )
    config = settings.to_registry_config()
    assert [entry.name for entry in config.providers] == ["openai", "anthropic", "gemini"]
    assert config.providers[2].config == {"api_key": "gk-test"}
    assert config.default_provider == "anthropic"


def test_settings_are_frozen() -> None:
    with pytest.raises(ValueError):
        Settings(page_size=5).page_size = 6  # type: ignore[misc]
