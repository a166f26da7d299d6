# Where: runtests/images.py
# What: Maintenance of the locally cached core-testing images.
# Why: Stale images cause weird test errors; re-pull :latest and drop dangling leftovers.
from __future__ import annotations

from dataclasses import dataclass, field
from fnmatch import fnmatchcase

import docker
from docker.errors import APIError, DockerException

from runtests import config
from runtests.core import logging
from runtests.exceptions import MissingToolError


@dataclass
class ImageMaintenanceResult:
    pulled: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def image_reference(prefix: str) -> str:
    return f"{prefix}{config.IMAGE_NAME_PATTERN}"


def connect():
    try:
        return docker.from_env()
    except DockerException as exc:
        raise MissingToolError("a running Docker Engine", hint=str(exc)) from exc


def latest_repositories(client, reference: str) -> list[str]:
    """Repositories of local images matching <reference>:latest."""
    pattern = f"{reference}:latest"
    repositories: set[str] = set()
    for image in client.images.list(filters={"reference": pattern}):
        for tag in image.tags:
            if fnmatchcase(tag, pattern):
                repositories.add(tag.rsplit(":", 1)[0])
    return sorted(repositories)


def dangling_image_ids(client, reference: str) -> list[str]:
    images = client.images.list(filters={"reference": reference, "dangling": True})
    return [image.id for image in images]


def update_images(prefix: str, client=None) -> ImageMaintenanceResult:
    """
    Pull :latest of every local core-testing image, then remove dangling ones.

    Best effort: a failed pull or removal is reported and skipped.
    """
    if client is None:
        client = connect()
    reference = image_reference(prefix)
    result = ImageMaintenanceResult()

    try:
        repositories = latest_repositories(client, reference)
    except APIError as exc:
        logging.warning(f"Failed to list {reference}:latest images: {exc}")
        repositories = []

    for repository in repositories:
        logging.step(f"Pulling {repository}:latest")
        try:
            client.images.pull(repository, tag="latest")
            result.pulled.append(repository)
        except APIError as exc:
            logging.warning(f"Failed to pull {repository}:latest: {exc}")
            result.failed.append(repository)

    try:
        image_ids = dangling_image_ids(client, reference)
    except APIError as exc:
        logging.warning(f"Failed to list dangling {reference} images: {exc}")
        image_ids = []

    for image_id in image_ids:
        logging.step(f"Removing dangling image {image_id}")
        try:
            client.images.remove(image_id)
            result.removed.append(image_id)
        except APIError as exc:
            logging.warning(f"Failed to remove {image_id}: {exc}")
            result.failed.append(image_id)

    if not result.pulled and not result.removed and not result.failed:
        logging.info(f"No local images match {logging.highlight(reference)}")
    return result
