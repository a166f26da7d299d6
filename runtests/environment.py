# Where: runtests/environment.py
# What: Project layout discovery and the docker compose .env descriptor.
# Why: The descriptor is the only contract with the compose services, so it is built in one place.
from __future__ import annotations

import getpass
import os
import re
from dataclasses import dataclass
from pathlib import Path

from runtests import config
from runtests.cli import RunOptions
from runtests.core import logging
from runtests.exceptions import ProjectLayoutError

_WHITESPACE_RE = re.compile(r"\s+")

DESCRIPTOR_KEYS = (
    "COMPOSE_PROJECT_NAME",
    "HOST_UID",
    "ROOT_DIR",
    "HOST_USER",
    "DOCKER_PHP_IMAGE",
    "IMAGE_PREFIX",
    "SCRIPT_VERBOSE",
    "CGLCHECK_DRY_RUN",
)


@dataclass(frozen=True)
class ProjectLayout:
    root: Path
    compose_dir: Path
    compose_file: Path
    descriptor_path: Path

    @classmethod
    def from_root(cls, root: Path) -> ProjectLayout:
        compose_dir = root / config.COMPOSE_DIR
        return cls(
            root=root,
            compose_dir=compose_dir,
            compose_file=compose_dir / config.COMPOSE_FILE_NAME,
            descriptor_path=compose_dir / config.DESCRIPTOR_FILE_NAME,
        )


@dataclass(frozen=True)
class Descriptor:
    project_name: str
    host_uid: int
    root_dir: Path
    host_user: str
    php_image: str
    image_prefix: str
    verbose: bool
    cgl_dry_run: str = ""

    def items(self) -> list[tuple[str, str]]:
        values = (
            self.project_name,
            str(self.host_uid),
            str(self.root_dir),
            self.host_user,
            self.php_image,
            self.image_prefix,
            "1" if self.verbose else "0",
            self.cgl_dry_run,
        )
        return list(zip(DESCRIPTOR_KEYS, values))

    def render(self) -> str:
        return "".join(f"{key}={value}\n" for key, value in self.items())


def discover_layout(current_path: Path | None = None) -> ProjectLayout:
    root = config.find_project_root(current_path)
    if root is None:
        raise ProjectLayoutError(
            f"Could not find {config.COMPOSE_DIR / config.COMPOSE_FILE_NAME} in the current "
            f"directory or any parent. Run from inside the project or set {config.ENV_PROJECT_ROOT}."
        )
    layout = ProjectLayout.from_root(root)
    if not layout.compose_file.is_file():
        raise ProjectLayoutError(f"Missing compose file: {layout.compose_file}")
    return layout


def docker_php_image(php_version: str) -> str:
    """Move "8.1" to "php81", the latter is the docker image name."""
    return "php" + php_version.replace(".", "")


def _slug(name: str) -> str:
    return name.lower().replace(" ", "-")


def derive_project_name(project_dir: Path) -> str:
    parent_name = _slug(project_dir.parent.name) or config.NO_PARENT_FOLDER
    name = f"{config.PROJECT_NAME_PREFIX}-{parent_name}-{_slug(project_dir.name)}"
    return _WHITESPACE_RE.sub("", name.lower())


def resolve_root_dir(compose_dir: Path) -> Path:
    candidate = compose_dir / ".." / ".."
    try:
        return candidate.resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        logging.warning(f"Could not canonicalize {candidate} ({exc}); using it unresolved.")
        return candidate.absolute()


def current_host_uid() -> int:
    getuid = getattr(os, "getuid", None)
    return getuid() if getuid else 0


def current_host_user() -> str:
    user = os.environ.get("USER", "")
    if user:
        return user
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return ""


def build_descriptor(
    layout: ProjectLayout,
    options: RunOptions,
    *,
    image_prefix: str,
    cgl_dry_run: str = "",
) -> Descriptor:
    root_dir = resolve_root_dir(layout.compose_dir)
    return Descriptor(
        project_name=derive_project_name(root_dir),
        host_uid=current_host_uid(),
        root_dir=root_dir,
        host_user=current_host_user(),
        php_image=docker_php_image(options.php_version),
        image_prefix=image_prefix,
        verbose=options.verbose,
        cgl_dry_run=cgl_dry_run,
    )


def write_descriptor(path: Path, descriptor: Descriptor) -> Path:
    """Replace any existing descriptor with a freshly rendered one."""
    path.unlink(missing_ok=True)
    path.write_text(descriptor.render(), encoding="utf-8")
    for key, value in descriptor.items():
        logging.debug(f"{key}={value}")
    return path
