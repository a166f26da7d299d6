# Where: runtests/suites.py
# What: Suite names and the dispatcher that runs exactly one of them.
# Why: Map each suite to a single compose service run (or image maintenance) with a plain result.
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from runtests import compose, config, environment, images
from runtests.cli import RunOptions
from runtests.common import exit_status
from runtests.core import logging
from runtests.exceptions import UnknownSuiteError


class Suite(str, Enum):
    CHECK_RST = "checkRst"
    CGL = "cgl"
    COMPOSER_UPDATE = "composerUpdate"
    LINT = "lint"
    UPDATE = "update"

    @classmethod
    def parse(cls, name: str) -> Suite:
        try:
            return cls(name)
        except ValueError:
            raise UnknownSuiteError(name) from None


COMPOSE_SERVICES: dict[Suite, str] = {
    Suite.CHECK_RST: "check_rst",
    Suite.CGL: "cgl",
    Suite.COMPOSER_UPDATE: "composer_update",
    Suite.LINT: "lint",
}


@dataclass(frozen=True)
class SuiteResult:
    suite: Suite
    exit_code: int
    command: tuple[str, ...] = ()


def cgl_dry_run_flags(suite: Suite, dry_run: bool) -> str:
    # php-cs-fixer wants --dry-run --diff rather than the runner's -n
    if suite is Suite.CGL and dry_run:
        return config.CGL_DRY_RUN_FLAGS
    return ""


def run_compose_suite(
    suite: Suite,
    options: RunOptions,
    layout: environment.ProjectLayout,
    compose_bin: list[str],
) -> SuiteResult:
    service = COMPOSE_SERVICES[suite]
    compose.ensure_service_declared(layout.compose_file, service)

    descriptor = environment.build_descriptor(
        layout,
        options,
        image_prefix=config.get_image_prefix(),
        cgl_dry_run=cgl_dry_run_flags(suite, options.dry_run),
    )
    environment.write_descriptor(layout.descriptor_path, descriptor)

    project = compose.ComposeProject(compose_bin=tuple(compose_bin), layout=layout)
    logging.step(f"Running {logging.highlight(suite.value)} with {descriptor.php_image}...")
    with compose.compose_session(project):
        completed = project.run(service)
    return SuiteResult(
        suite=suite, exit_code=exit_status(completed.returncode), command=tuple(completed.args)
    )


def run_image_maintenance() -> SuiteResult:
    outcome = images.update_images(config.get_image_prefix())
    logging.success(
        f"Images updated: {len(outcome.pulled)} pulled, {len(outcome.removed)} removed."
    )
    return SuiteResult(suite=Suite.UPDATE, exit_code=0)


def dispatch(options: RunOptions) -> SuiteResult:
    suite = Suite.parse(options.suite)
    if suite is Suite.UPDATE:
        return run_image_maintenance()
    compose_bin = compose.resolve_compose_bin()
    layout = environment.discover_layout()
    return run_compose_suite(suite, options, layout, compose_bin)
