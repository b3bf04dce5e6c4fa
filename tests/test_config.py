from bounty_board_mcp.config import (
    BountyBoardConfig,
    DEFAULT_BASE_URL,
    _load_timeout,
    default_config,
)


def test_load_timeout_invalid_env(monkeypatch):
    monkeypatch.setenv("BOUNTY_BOARD_HTTP_TIMEOUT", "not-a-number")
    assert _load_timeout() == 10.0  # falls back to default on parse error


def test_load_timeout_valid_env(monkeypatch):
    monkeypatch.setenv("BOUNTY_BOARD_HTTP_TIMEOUT", "5.5")
    assert _load_timeout() == 5.5


def test_load_timeout_unset(monkeypatch):
    monkeypatch.delenv("BOUNTY_BOARD_HTTP_TIMEOUT", raising=False)
    assert _load_timeout() == 10.0


def test_default_config_uses_module_defaults():
    assert default_config.base_url == DEFAULT_BASE_URL
    assert isinstance(default_config.timeout, float)


def test_config_overrides():
    cfg = BountyBoardConfig(base_url="http://localhost:9999", timeout=2.0, log_format="plain")
    assert cfg.base_url == "http://localhost:9999"
    assert cfg.timeout == 2.0
    assert cfg.log_format == "plain"
