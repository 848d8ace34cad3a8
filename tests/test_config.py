from __future__ import annotations

from pathlib import Path

import pytest

from tplsync.config import SerializationMode, SyncConfig
from tplsync.errors import ConfigError
from tplsync.remote import DEFAULT_BASE_URL, OrgTemplate, TemplatePath


def test_build_reports_all_missing_settings() -> None:
    with pytest.raises(ConfigError) as exc:
        SyncConfig.build(token=None, template_id="")
    assert "SG_TOKEN" in str(exc.value)
    assert "SG_TEMPLATE_ID" in str(exc.value)


def test_build_applies_defaults() -> None:
    config = SyncConfig.build(token="tok", template_id="/org/tpl")
    assert config.base_url == DEFAULT_BASE_URL
    assert config.base_path == Path(".sg")
    assert config.mode is SerializationMode.JSON
    assert config.ref == TemplatePath(org="org", name="tpl")


def test_build_rejects_non_positive_timeout() -> None:
    with pytest.raises(ConfigError):
        SyncConfig.build(token="tok", template_id="/org/tpl", timeout=0)


def test_from_env(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SG_TOKEN", "secret-token")
    monkeypatch.setenv("SG_TEMPLATE_ID", "tpl:2")
    monkeypatch.setenv("SG_ORG_ID", "demo-org")
    monkeypatch.setenv("SG_BASE_URL", "https://sg.example.com/")
    monkeypatch.setenv("SG_BASE_PATH", str(tmp_path))
    monkeypatch.setenv("SG_USE_YAML", "true")
    monkeypatch.setenv("SG_TIMEOUT", "5")
    monkeypatch.setenv("DEBUG", "false")

    config = SyncConfig.from_env()
    assert config.token == "secret-token"
    assert config.ref == OrgTemplate(org="demo-org", name="tpl", revision=2)
    assert config.base_url == "https://sg.example.com"
    assert config.base_path == tmp_path
    assert config.mode is SerializationMode.YAML
    assert config.timeout == 5.0
    assert config.debug is False


def test_from_env_rejects_bad_timeout(monkeypatch) -> None:
    monkeypatch.setenv("SG_TOKEN", "t")
    monkeypatch.setenv("SG_TEMPLATE_ID", "/o/t")
    monkeypatch.setenv("SG_TIMEOUT", "soon")
    with pytest.raises(ConfigError):
        SyncConfig.from_env()


@pytest.mark.parametrize(
    "token, template_id, expected",
    [(None, "/org/tpl", "SG_TOKEN"), ("tok", None, "SG_TEMPLATE_ID")],
)
def test_build_names_only_the_missing_setting(token, template_id, expected: str) -> None:
    with pytest.raises(ConfigError) as exc:
        SyncConfig.build(token=token, template_id=template_id)
    assert str(exc.value) == f"Missing required environment variables: {expected}"
