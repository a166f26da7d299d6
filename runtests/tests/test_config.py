from __future__ import annotations

import os

from runtests import config


def test_find_project_root_walks_up(project_root):
    nested = project_root / "Documentation" / "Images"
    nested.mkdir(parents=True)
    assert config.find_project_root(nested) == project_root


def test_find_project_root_returns_none_outside_project(tmp_path):
    assert config.find_project_root(tmp_path) is None


def test_find_project_root_prefers_override(monkeypatch, tmp_path):
    monkeypatch.setenv(config.ENV_PROJECT_ROOT, str(tmp_path / "elsewhere"))
    assert config.find_project_root(tmp_path) == tmp_path / "elsewhere"


def test_load_local_env_keeps_exported_values(monkeypatch, project_root):
    monkeypatch.setenv(config.ENV_IMAGE_PREFIX, "exported.example/")
    monkeypatch.setenv(config.ENV_COMPOSE_BIN, "placeholder")
    monkeypatch.delenv(config.ENV_COMPOSE_BIN)
    (project_root / config.LOCAL_ENV_FILE_NAME).write_text(
        "RUNTESTS_IMAGE_PREFIX=file.example/\nRUNTESTS_COMPOSE_BIN=docker compose\n",
        encoding="utf-8",
    )

    assert config.load_local_env(project_root) == project_root / config.LOCAL_ENV_FILE_NAME
    assert os.environ[config.ENV_IMAGE_PREFIX] == "exported.example/"
    assert config.get_compose_bin_override() == ["docker", "compose"]


def test_load_local_env_without_file(project_root):
    assert config.load_local_env(project_root) is None


def test_image_prefix_default_and_override(monkeypatch):
    assert config.get_image_prefix() == "ghcr.io/typo3/"
    monkeypatch.setenv(config.ENV_IMAGE_PREFIX, "registry.local/")
    assert config.get_image_prefix() == "registry.local/"


def test_compose_bin_override_blank_is_ignored(monkeypatch):
    monkeypatch.setenv(config.ENV_COMPOSE_BIN, "   ")
    assert config.get_compose_bin_override() is None
