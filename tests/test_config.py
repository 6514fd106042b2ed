import pytest

from weather_mcp.config import DEFAULT_PORT, load_settings, parse_port

ENV_KEYS = ("PORT", "WEATHER_MCP_SERVER_NAME", "WEATHER_MCP_REGISTER", "WEATHER_MCP_CLAUDE_CONFIG", "WEATHER_MCP_LOG_FILE")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = load_settings()
    assert settings.port is None
    assert parse_port(settings.port) == DEFAULT_PORT
    assert settings.server_name == "weather-mcp"
    assert settings.register is True
    assert settings.claude_config_path is None
    assert settings.log_file is None


def test_from_environment(monkeypatch):
    monkeypatch.setenv("PORT", "4000")
    monkeypatch.setenv("WEATHER_MCP_REGISTER", "no")
    monkeypatch.setenv("WEATHER_MCP_CLAUDE_CONFIG", "/tmp/claude.json")
    settings = load_settings()
    assert parse_port(settings.port) == 4000
    assert settings.register is False
    assert settings.claude_config_path == "/tmp/claude.json"


def test_bad_port_does_not_break_loading(monkeypatch):
    monkeypatch.setenv("PORT", "abc")
    assert load_settings().port == "abc"


@pytest.mark.parametrize("raw", ["abc", "0", "70000"])
def test_invalid_port(raw):
    with pytest.raises(ValueError, match="PORT"):
        parse_port(raw)
