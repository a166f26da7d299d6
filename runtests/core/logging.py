import os
import sys

_verbose = False
_color: bool | None = None


# ANSI Escape Codes for Colors
class Color:
    BLUE = "\033[94m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    CYAN = "\033[96m"
    GRAY = "\033[90m"
    BOLD = "\033[1m"
    END = "\033[0m"


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = bool(enabled)


def set_color(enabled: bool | None) -> None:
    """Force color on/off; None restores terminal detection."""
    global _color
    _color = enabled


def _color_enabled() -> bool:
    if _color is not None:
        return _color
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM", "").lower() == "dumb":
        return False
    return sys.stdout.isatty()


def _paint(text: str, *codes: str) -> str:
    if not _color_enabled():
        return text
    return f"{''.join(codes)}{text}{Color.END}"


def info(msg: str):
    print(_paint(f"ℹ {msg}", Color.CYAN))


def success(msg: str):
    print(_paint(f"✅ {msg}", Color.GREEN))


def warning(msg: str):
    print(_paint(f"⚠️ {msg}", Color.YELLOW), file=sys.stderr)


def error(msg: str):
    print(_paint(f"❌ {msg}", Color.RED), file=sys.stderr)


def debug(msg: str):
    if not _verbose:
        return
    print(_paint(f"· {msg}", Color.GRAY))


def highlight(msg: str) -> str:
    return _paint(str(msg), Color.BOLD)


def step(msg: str):
    if _color_enabled():
        print(f"{Color.BLUE}➜ {Color.BOLD}{msg}{Color.END}")
    else:
        print(f"➜ {msg}")
