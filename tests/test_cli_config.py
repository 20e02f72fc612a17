from __future__ import annotations

import pytest

from polkahub.cli.config import load_cli_config
from polkahub.errors import ConfigError


def test_default_registry_base_is_production(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv("POLKAHUB_API_URL", raising=False)
    config = load_cli_config(tmp_path / "missing")
    assert config.registry_base == "https://api.polkahub.org"
    assert config.config_path == tmp_path / "missing"


def test_env_registry_base_overrides_config_file(tmp_path, monkeypatch) -> None:
    config_path = tmp_path / "config"
    config_path.write_text('registry_base = "http://localhost:8080"\n', encoding="utf-8")
    monkeypatch.setenv("POLKAHUB_API_URL", "https://env.registry.example")
    assert load_cli_config(config_path).registry_base == "https://env.registry.example"


def test_file_registry_base_used_when_env_not_set(tmp_path, monkeypatch) -> None:
    config_path = tmp_path / "config"
    config_path.write_text('registry_base = "http://localhost:8080"\ntoken = "t"\n', encoding="utf-8")
    monkeypatch.delenv("POLKAHUB_API_URL", raising=False)
    assert load_cli_config(config_path).registry_base == "http://localhost:8080"


def test_default_path_follows_polkahub_home(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("POLKAHUB_HOME", str(tmp_path))
    assert load_cli_config().config_path == tmp_path / "config"


@pytest.mark.parametrize("content", ['registry_base = ""\n', 'registry_base = "ftp://x"\n', "registry_base = \n"])
def test_invalid_config_raises(tmp_path, monkeypatch, content: str) -> None:
    monkeypatch.delenv("POLKAHUB_API_URL", raising=False)
    config_path = tmp_path / "config"
    config_path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_cli_config(config_path)


def test_corrupt_default_config_falls_back_to_defaults(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv("POLKAHUB_HOME", str(tmp_path))
    monkeypatch.delenv("POLKAHUB_API_URL", raising=False)
    (tmp_path / "config").write_text("token = \n", encoding="utf-8")
    config = load_cli_config()
    assert config.registry_base == "https://api.polkahub.org"
    assert config.config_path == tmp_path / "config"
