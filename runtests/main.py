#!/usr/bin/env python3
# Where: runtests/main.py
# What: Entry point: parse options, dispatch one suite, exit with its status.
# Why: Single place where runner errors and interrupts turn into exit codes.
from __future__ import annotations

import signal
import sys
from collections.abc import Sequence

from runtests import cli, config, suites
from runtests.core import logging
from runtests.exceptions import RunTestsError

EXIT_SIGINT = 130


class Terminated(RunTestsError):
    """Raised from the SIGTERM handler so teardown still runs."""

    exit_code = 128 + signal.SIGTERM

    def __init__(self):
        super().__init__("Terminated.")


def _raise_terminated(signum, frame):
    raise Terminated()


def _print_usage_to_stderr() -> None:
    print(file=sys.stderr)
    print(cli.format_help(), file=sys.stderr)


def run(argv: Sequence[str]) -> int:
    try:
        options = cli.parse_options(argv)
        if options.show_help:
            print(cli.format_help())
            return 0

        logging.set_verbose(options.verbose)
        if options.ignored_args:
            logging.debug(f"Ignoring positional arguments: {' '.join(options.ignored_args)}")

        root = config.find_project_root()
        if root is not None:
            env_file = config.load_local_env(root)
            if env_file:
                logging.debug(f"Loaded overrides from {env_file}")

        result = suites.dispatch(options)
    except RunTestsError as exc:
        logging.error(str(exc))
        hint = getattr(exc, "hint", "")
        if hint:
            print(f"  {hint}", file=sys.stderr)
        if exc.show_usage:
            _print_usage_to_stderr()
        return exc.exit_code
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        return EXIT_SIGINT

    if result.exit_code != 0:
        logging.error(f"Suite {result.suite.value} failed with exit code {result.exit_code}")
    return result.exit_code


def main() -> int:
    signal.signal(signal.SIGTERM, _raise_terminated)
    return run(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(main())
