# tests/unit/test_config.py
from __future__ import annotations

import logging

import pytest

from failstack.config import (
    ConfigIssue,
    StackConfig,
    configure,
    get_config,
    load_config,
    set_config,
    validate_config,
)
from failstack.config import loader


@pytest.fixture
def restore_config():
    previous = get_config()
    yield
    set_config(previous)


def test_defaults_without_yaml(tmp_path):
    config = load_config(tmp_path / "missing.yml")

    assert config == StackConfig.default()
    assert config.max_depth == 50
    assert config.capture_enabled is True


def test_yaml_overrides_defaults(tmp_path):
    path = tmp_path / "config.yml"
    path.write_text("stack:\n  max_depth: 10\n", encoding="utf-8")

    config = load_config(path)

    assert config.max_depth == 10
    assert config.capture_enabled is True


def test_default_path(tmp_path, monkeypatch):
    path = tmp_path / "config.yml"
    path.write_text("stack:\n  capture_enabled: false\n", encoding="utf-8")
    monkeypatch.setattr(loader, "DEFAULT_CONFIG_PATH", path)

    assert load_config().capture_enabled is False


def test_invalid_yaml_falls_back(tmp_path, caplog):
    path = tmp_path / "config.yml"
    path.write_text("stack: [unclosed\n", encoding="utf-8")
    caplog.set_level(logging.WARNING, logger="failstack.config.loader")

    assert load_config(path) == StackConfig.default()
    assert "Failed to load config" in caplog.text


def test_invalid_value_falls_back(tmp_path, caplog):
    path = tmp_path / "config.yml"
    path.write_text("stack:\n  max_depth: 0\n", encoding="utf-8")
    caplog.set_level(logging.WARNING, logger="failstack.config.loader")

    assert load_config(path) == StackConfig.default()
    assert "stack.max_depth" in caplog.text


def test_unknown_keys_ignored(tmp_path, caplog):
    path = tmp_path / "config.yml"
    path.write_text("stack:\n  max_depth: 20\n  colour: blue\n", encoding="utf-8")
    caplog.set_level(logging.WARNING, logger="failstack.config.loader")

    assert load_config(path).max_depth == 20
    assert "colour" in caplog.text


def test_validate_config():
    assert validate_config(StackConfig()) == []

    issues = validate_config(StackConfig(max_depth=5000))
    assert [i.level for i in issues] == ["warn"]

    issues = validate_config(StackConfig(max_depth="deep", capture_enabled="yes"))
    assert [i.path for i in issues] == ["stack.max_depth", "stack.capture_enabled"]
    assert all(i.level == "error" for i in issues)


def test_issue_str():
    issue = ConfigIssue(level="error", path="stack.max_depth", message="bad", hint="fix it")

    assert str(issue) == "[error] [stack.max_depth] bad\n   Hint: fix it"


def test_configure_sets_active(tmp_path, restore_config):
    path = tmp_path / "config.yml"
    path.write_text("stack:\n  max_depth: 7\n", encoding="utf-8")

    config = configure(path)

    assert get_config() is config
    assert get_config().max_depth == 7


def test_set_config_returns_previous(restore_config):
    before = get_config()
    replacement = StackConfig(max_depth=3)

    assert set_config(replacement) is before
    assert get_config() is replacement
