"""Tests for the console and JSON-lines reporters."""

from __future__ import annotations

import io
import json

from tdd.implementations import (
    ConsoleReporter, JsonReporter, STYLE_ERROR, TEXT_RESET,
)
from tdd.interfaces import Outcome, TestReport


def _report(**kwargs):
    defaults = dict(ordinal=1, total=3, name="test_x", description="does x", outcome=Outcome.PASS)
    defaults.update(kwargs)
    return TestReport(**defaults)


class TestConsoleReporter:
    def _render(self, report, color=False):
        buf = io.StringIO()
        ConsoleReporter(stream=buf, color=color).report(report)
        return buf.getvalue()

    def test_pass_line(self):
        assert self._render(_report()) == "okay: test 1/3 (test_x): does x\n"

    def test_fail_lines(self):
        out = self._render(_report(outcome=Outcome.FAIL, failure_message="badness!"))
        assert out == "fail: test 1/3 (test_x): does x\n      badness!\n"

    def test_error_lines(self):
        out = self._render(_report(ordinal=2, outcome=Outcome.ERROR, error_messages=["one", "two"]))
        assert out.splitlines() == [
            "err:  test 2/3 (test_x): does x",
            "      encountered 2 errors.",
            "      1. one",
            "      2. two",
        ]

    def test_bench_line(self):
        out = self._render(_report(name="bench_func", elapsed=(0, 4213)))
        assert out.splitlines()[-1] == "      bench: test (bench_func) took 0s 4213ns"

    def test_color_wraps_status(self):
        out = self._render(_report(outcome=Outcome.FAIL, failure_message="m"), color=True)
        assert out.startswith(STYLE_ERROR + "fail: ")
        assert TEXT_RESET in out

    def test_no_escape_codes_without_color(self):
        out = self._render(_report(outcome=Outcome.FAIL, failure_message="m"))
        assert "\033[" not in out

    def test_aborted(self):
        buf = io.StringIO()
        ConsoleReporter(stream=buf).aborted(2)
        assert buf.getvalue() == "aborted with 2 tests remaining.\n"

    def test_defaults_to_stdout(self, capsys):
        ConsoleReporter().report(_report())
        assert capsys.readouterr().out == "okay: test 1/3 (test_x): does x\n"


class TestJsonReporter:
    def _lines(self, buf):
        return [json.loads(line) for line in buf.getvalue().splitlines()]

    def test_test_event(self):
        buf = io.StringIO()
        JsonReporter(stream=buf).report(_report(outcome=Outcome.ERROR, error_messages=["e"]))
        (event,) = self._lines(buf)
        assert event["type"] == "test"
        assert event["data"]["outcome"] == "error"
        assert event["data"]["error_messages"] == ["e"]
        assert event["data"]["elapsed"] is None

    def test_elapsed_split(self):
        buf = io.StringIO()
        JsonReporter(stream=buf).report(_report(elapsed=(1, 25)))
        (event,) = self._lines(buf)
        assert event["data"]["elapsed"] == {"seconds": 1, "nanoseconds": 25}

    def test_aborted_event(self):
        buf = io.StringIO()
        reporter = JsonReporter(stream=buf)
        reporter.report(_report(outcome=Outcome.FAIL, failure_message="f"))
        reporter.aborted(2)
        events = self._lines(buf)
        assert [e["type"] for e in events] == ["test", "aborted"]
        assert events[1]["data"] == {"remaining": 2}
