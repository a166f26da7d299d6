# Where: runtests/core/help_text.py
# What: Centralized help text constants for the runner options.
# Why: Keep the long usage prose out of the parser definition.

DESCRIPTION = (
    "Documentation project test runner. Check code styles, lint PHP files and "
    "some other details.\n"
    "\n"
    "Recommended docker version is >=20.10, and a recent docker compose "
    "(docker-compose >=1.21.2 or the compose plugin) is needed.\n"
    "\n"
    "No arguments: run the cgl check with PHP 8.1."
)

SUITE = (
    "Test suite to run: "
    "checkRst (check .rst files for integrity), "
    "cgl (cgl test and fix all php files), "
    "composerUpdate (composer update, handy if host has no PHP), "
    "lint (PHP linting), "
    "update (same as -u). Default: cgl"
)

PHP = "PHP minor version to use: 8.1 (default) or 8.2"

DRY_RUN = "Only report what the cgl suite would change (--dry-run --diff)"

UPDATE_IMAGES = (
    "Update existing <prefix>core-testing-*:latest docker images and remove "
    "obsolete dangling versions of them. Use this if weird test errors occur."
)

VERBOSE = "Enable verbose script output. Shows variables and docker commands."

HELP = "Show this help."

EPILOG = (
    "Examples:\n"
    "    # Run the cgl check using PHP 8.1\n"
    "    runtests\n"
    "\n"
    "    # Report cgl violations without fixing them\n"
    "    runtests -s cgl -n\n"
    "\n"
    "    # Check .rst files\n"
    "    runtests -s checkRst\n"
    "\n"
    "    # Lint PHP files using PHP 8.2\n"
    "    runtests -s lint -p 8.2"
)
