"""
Custom exception classes.

Represent fatal runner errors. Each carries the exit code the process ends with.
"""


class RunTestsError(Exception):
    """Base exception class for the test runner."""

    exit_code = 1
    show_usage = False


class MissingToolError(RunTestsError):
    """Raised when a required external tool is not available."""

    def __init__(self, tool: str, hint: str = ""):
        self.tool = tool
        self.hint = hint
        super().__init__(f"This runner relies on {tool}. Please install it.")


class InvalidOptionsError(RunTestsError):
    """Raised once for every bad flag found on the command line."""

    show_usage = True

    def __init__(self, options: list[str]):
        self.options = list(options)
        super().__init__("Invalid option(s): " + ", ".join(self.options))


class UnknownSuiteError(RunTestsError):
    """Raised when the selected suite name is not recognized."""

    show_usage = True

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid -s option argument {name}")


class ProjectLayoutError(RunTestsError):
    """Raised when the compose directory or a compose service is missing."""

    pass
