# Where: runtests/config.py
# What: Runner defaults, environment overrides, and project root discovery.
# Why: Centralize constants and filesystem locations used by every suite.
from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_SUITE = "cgl"
DEFAULT_PHP_VERSION = "8.1"
SUPPORTED_PHP_VERSIONS = ("8.1", "8.2")

DEFAULT_IMAGE_PREFIX = "ghcr.io/typo3/"
IMAGE_NAME_PATTERN = "core-testing-*"

COMPOSE_DIR = Path("Build") / "testing-docker"
COMPOSE_FILE_NAME = "docker-compose.yml"
DESCRIPTOR_FILE_NAME = ".env"
LOCAL_ENV_FILE_NAME = ".runtests.env"

CGL_DRY_RUN_FLAGS = "--dry-run --diff"
NO_PARENT_FOLDER = "no-parent-folder"
PROJECT_NAME_PREFIX = "runtests"

ENV_PROJECT_ROOT = "RUNTESTS_PROJECT_ROOT"
ENV_IMAGE_PREFIX = "RUNTESTS_IMAGE_PREFIX"
ENV_COMPOSE_BIN = "RUNTESTS_COMPOSE_BIN"


def has_compose_manifest(path: Path) -> bool:
    return (path / COMPOSE_DIR / COMPOSE_FILE_NAME).is_file()


def find_project_root(current_path: Path | None = None) -> Path | None:
    """Find the project root by searching for Build/testing-docker/docker-compose.yml."""
    override = os.environ.get(ENV_PROJECT_ROOT, "").strip()
    if override:
        return Path(override).expanduser()

    if current_path is None:
        current_path = Path.cwd()

    for path in [current_path] + list(current_path.parents):
        if has_compose_manifest(path):
            return path

    return None


def load_local_env(project_root: Path) -> Path | None:
    """Load <root>/.runtests.env without clobbering variables already exported."""
    env_file = project_root / LOCAL_ENV_FILE_NAME
    if not env_file.is_file():
        return None
    load_dotenv(env_file, override=False)
    return env_file


def get_image_prefix() -> str:
    # Priority: 1. RUNTESTS_IMAGE_PREFIX env var, 2. default registry prefix
    return os.getenv(ENV_IMAGE_PREFIX, DEFAULT_IMAGE_PREFIX)


def get_compose_bin_override() -> list[str] | None:
    value = os.getenv(ENV_COMPOSE_BIN, "").strip()
    if not value:
        return None
    return value.split()
