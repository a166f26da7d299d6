# Where: runtests/compose.py
# What: docker compose binary detection, command building, and scoped service sessions.
# Why: Every compose suite runs one service and must always tear the project down again.
from __future__ import annotations

import shutil
import subprocess
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import yaml

from runtests import config
from runtests.common import run_command
from runtests.core import logging
from runtests.environment import ProjectLayout
from runtests.exceptions import MissingToolError, ProjectLayoutError

COMPOSE_V1_BIN = "docker-compose"
DOCKER_BIN = "docker"


def resolve_compose_bin() -> list[str]:
    """
    Pick the compose command to use.

    Priority: 1. RUNTESTS_COMPOSE_BIN, 2. docker-compose on PATH,
    3. the docker compose plugin.
    """
    override = config.get_compose_bin_override()
    if override:
        if shutil.which(override[0]) is None:
            raise MissingToolError(
                override[0], hint=f"{config.ENV_COMPOSE_BIN} is set but not executable."
            )
        return override

    if shutil.which(COMPOSE_V1_BIN) is not None:
        return [COMPOSE_V1_BIN]

    if shutil.which(DOCKER_BIN) is not None:
        probe = run_command([DOCKER_BIN, "compose", "version"], quiet=True)
        if probe.returncode == 0:
            return [DOCKER_BIN, "compose"]

    raise MissingToolError(
        "docker and docker compose",
        hint=f"Install docker-compose or the compose plugin, or set {config.ENV_COMPOSE_BIN}.",
    )


def declared_services(compose_file: Path) -> set[str]:
    try:
        with open(compose_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ProjectLayoutError(f"Failed to read {compose_file}: {exc}") from exc
    services = data.get("services") if isinstance(data, dict) else None
    if not isinstance(services, dict):
        return set()
    return {str(name) for name in services}


def ensure_service_declared(compose_file: Path, service: str) -> None:
    services = declared_services(compose_file)
    if service not in services:
        available = ", ".join(sorted(services)) or "none"
        raise ProjectLayoutError(
            f"Service '{service}' is not defined in {compose_file} (available: {available})"
        )


@dataclass(frozen=True)
class ComposeProject:
    compose_bin: tuple[str, ...]
    layout: ProjectLayout

    def command(self, *args: str) -> list[str]:
        return [
            *self.compose_bin,
            "--file",
            str(self.layout.compose_file),
            "--env-file",
            str(self.layout.descriptor_path),
            *args,
        ]

    def run(self, service: str) -> subprocess.CompletedProcess[str]:
        return run_command(self.command("run", service), cwd=self.layout.compose_dir)

    def down(self) -> subprocess.CompletedProcess[str]:
        return run_command(self.command("down"), cwd=self.layout.compose_dir)


@contextmanager
def compose_session(project: ComposeProject) -> Iterator[ComposeProject]:
    """Yield the project and run `down` on every exit path."""
    try:
        yield project
    finally:
        logging.step("Stopping services...")
        result = project.down()
        if result.returncode != 0:
            logging.warning(f"docker compose down exited with {result.returncode}")
