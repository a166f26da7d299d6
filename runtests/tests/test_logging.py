from __future__ import annotations

from runtests.core import logging


def test_debug_is_silent_unless_verbose(capsys):
    logging.debug("hidden")
    assert capsys.readouterr().out == ""

    logging.set_verbose(True)
    logging.debug("shown")
    assert "shown" in capsys.readouterr().out


def test_errors_and_warnings_go_to_stderr(capsys):
    logging.error("boom")
    logging.warning("careful")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "boom" in captured.err
    assert "careful" in captured.err


def test_no_color_disables_escape_codes(capsys):
    logging.step("Running lint")
    assert capsys.readouterr().out == "➜ Running lint\n"
    assert logging.highlight("x") == "x"


def test_forced_color_wraps_output():
    logging.set_color(True)
    assert logging.highlight("x") == f"{logging.Color.BOLD}x{logging.Color.END}"


def test_dumb_terminal_disables_color(monkeypatch):
    monkeypatch.delenv("NO_COLOR")
    monkeypatch.setenv("TERM", "dumb")
    assert logging.highlight("x") == "x"
