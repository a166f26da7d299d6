# Where: runtests/cli.py
# What: Command line option parsing for the test runner.
# Why: Collect every bad flag in one pass and hand a plain options value to the dispatcher.
from __future__ import annotations

import argparse
from collections.abc import Sequence
from dataclasses import dataclass
from typing import NoReturn

from runtests import config
from runtests.core import help_text
from runtests.exceptions import InvalidOptionsError

PROG = "runtests"
HELP_FLAGS = ("-h", "--help")
UPDATE_SUITE = "update"

# Placeholder stored by value options that were given without their argument.
_MISSING = "\0missing"

_VALUE_OPTIONS = (("suite", "-s"), ("php_version", "-p"))
_VALUE_LETTERS = "sp"
_SWITCH_LETTERS = "nuvh"
_SWITCH_LONG_FLAGS = ("--dry-run", "--update-images", "--verbose", "--help")
END_OF_OPTIONS = "--"


@dataclass(frozen=True)
class RunOptions:
    suite: str = config.DEFAULT_SUITE
    php_version: str = config.DEFAULT_PHP_VERSION
    verbose: bool = False
    dry_run: bool = False
    show_help: bool = False
    ignored_args: tuple[str, ...] = ()


class _RunTestsArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise InvalidOptionsError([message])


def build_parser() -> argparse.ArgumentParser:
    parser = _RunTestsArgumentParser(
        prog=PROG,
        description=help_text.DESCRIPTION,
        epilog=help_text.EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-s",
        "--suite",
        dest="suite",
        nargs="?",
        const=_MISSING,
        default=config.DEFAULT_SUITE,
        metavar="SUITE",
        help=help_text.SUITE,
    )
    parser.add_argument(
        "-p",
        "--php",
        dest="php_version",
        nargs="?",
        const=_MISSING,
        default=config.DEFAULT_PHP_VERSION,
        metavar="VERSION",
        help=help_text.PHP,
    )
    parser.add_argument("-n", "--dry-run", action="store_true", help=help_text.DRY_RUN)
    parser.add_argument(
        "-u",
        "--update-images",
        dest="suite",
        action="store_const",
        const=UPDATE_SUITE,
        help=help_text.UPDATE_IMAGES,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help=help_text.VERBOSE)
    parser.add_argument("-h", "--help", dest="show_help", action="store_true", help=help_text.HELP)
    return parser


def format_help() -> str:
    return build_parser().format_help()


def _split_cluster(arg: str) -> list[str]:
    # -nvx -> -n -v -x; a value letter takes the rest of the cluster (-nslint -> -n -slint)
    flags = []
    letters = arg[1:]
    for index, letter in enumerate(letters):
        if letter in _VALUE_LETTERS:
            flags.append(f"-{letters[index:]}")
            break
        flags.append(f"-{letter}")
    return flags


def _expand_argv(argv: list[str]) -> tuple[list[str], list[str], list[str]]:
    """Return (parser args, malformed flags, arguments after --)."""
    expanded: list[str] = []
    malformed: list[str] = []
    for index, arg in enumerate(argv):
        if arg == END_OF_OPTIONS:
            return expanded, malformed, argv[index + 1 :]
        if arg.startswith("--"):
            name, sep, _ = arg.partition("=")
            if sep and name in _SWITCH_LONG_FLAGS:
                malformed.append(arg)
            else:
                expanded.append(arg)
        elif arg.startswith("-") and len(arg) > 2:
            expanded.extend(_split_cluster(arg))
        else:
            expanded.append(arg)
    return expanded, malformed, []


def parse_options(argv: Sequence[str]) -> RunOptions:
    """
    Parse argv into RunOptions.

    Help wins over everything else. Otherwise unknown flags, value flags without
    their argument and unsupported PHP versions are raised together as a single
    InvalidOptionsError.
    """
    expanded, malformed, trailing = _expand_argv(list(argv))
    if any(arg in HELP_FLAGS for arg in expanded):
        return RunOptions(show_help=True)

    args, extras = build_parser().parse_known_args(expanded)
    if args.show_help:
        return RunOptions(show_help=True)

    invalid = [arg for arg in extras if arg.startswith("-") and arg != "-"]
    invalid.extend(malformed)
    ignored = tuple(arg for arg in extras if arg not in invalid) + tuple(trailing)

    for dest, flag in _VALUE_OPTIONS:
        if getattr(args, dest) == _MISSING:
            invalid.append(f"{flag} (missing argument)")

    php_version = args.php_version
    if php_version != _MISSING and php_version not in config.SUPPORTED_PHP_VERSIONS:
        supported = ", ".join(config.SUPPORTED_PHP_VERSIONS)
        invalid.append(f"-p {php_version} (supported: {supported})")

    if invalid:
        raise InvalidOptionsError(invalid)

    return RunOptions(
        suite=args.suite,
        php_version=php_version,
        verbose=args.verbose,
        dry_run=args.dry_run,
        ignored_args=ignored,
    )
