from __future__ import annotations

from pathlib import Path

import pytest

from runtests import config
from runtests.core import logging

COMPOSE_YAML = """\
services:
  check_rst:
    image: ghcr.io/t3docs/render-documentation:latest
  cgl:
    image: ${IMAGE_PREFIX}core-testing-${DOCKER_PHP_IMAGE}:latest
    command: php-cs-fixer fix ${CGLCHECK_DRY_RUN}
  composer_update:
    image: ${IMAGE_PREFIX}core-testing-${DOCKER_PHP_IMAGE}:latest
  lint:
    image: ${IMAGE_PREFIX}core-testing-${DOCKER_PHP_IMAGE}:latest
  rector:
    image: ${IMAGE_PREFIX}core-testing-${DOCKER_PHP_IMAGE}:latest
"""


@pytest.fixture(autouse=True)
def _isolate_runner(monkeypatch):
    for key in (config.ENV_PROJECT_ROOT, config.ENV_IMAGE_PREFIX, config.ENV_COMPOSE_BIN):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    logging.set_verbose(False)
    logging.set_color(None)
    yield
    logging.set_verbose(False)
    logging.set_color(None)


@pytest.fixture
def project_root(tmp_path) -> Path:
    """A project laid out as <tmp>/My Parent/Doc Project/Build/testing-docker."""
    root = tmp_path / "My Parent" / "Doc Project"
    compose_dir = root / "Build" / "testing-docker"
    compose_dir.mkdir(parents=True)
    (compose_dir / "docker-compose.yml").write_text(COMPOSE_YAML, encoding="utf-8")
    return root
