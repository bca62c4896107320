"""End-to-end capture scenarios through capturing(), Logger and the dispatcher.

Each test starts from a fresh dispatcher with one capture sink, logs
through the front-end and asserts on what the sink buffered.
"""

from __future__ import annotations

import os

import pytest

from logsink.config import DispatcherConfig
from logsink.events import Count
from logsink.formatter import (
    ApplicationExit,
    ApplicationStarted,
    CrashReport,
    SupervisorBridgeExit,
    SupervisorChildExit,
    SupervisorProgress,
)
from logsink.severity import Severity
from logsink.testing import capturing

# =============================================================================
# Basic capture at info
# =============================================================================


class TestCaptureAtInfo:
    def test_nothing_up_my_sleeve(self):
        with capturing("info") as logs:
            assert logs.pop() is None
            assert logs.count() == 0

    def test_logging_works(self):
        with capturing("info") as logs:
            logs.logger.warning("test message")
            assert logs.count() == 1
            event = logs.pop()
            assert event.level == Severity.WARNING
            level, _, text = event.message.split(" ", 2)
            assert level == "[warning]"
            assert text == "test message"

    def test_logging_with_arguments(self):
        with capturing("info") as logs:
            logs.logger.warning("test message %s", os.getpid())
            text = logs.pop_message().split(" ", 2)[2]
            assert text == f"test message {os.getpid()}"

    def test_logging_from_a_block(self):
        with capturing("info") as logs:
            assert logs.count() == 0
            if True:
                logs.logger.warning("test message 2")
            assert logs.count() == 1

    def test_logging_from_a_comprehension(self):
        with capturing("info") as logs:
            [logs.logger.warning("test message") for _ in range(10)]
            assert logs.count() == 10

    def test_logging_from_a_nested_comprehension(self):
        with capturing("info") as logs:
            [[logs.logger.warning("test message") for _ in range(10)] for _ in range(10)]
            assert logs.count() == 100

    def test_messages_below_threshold_are_ignored(self):
        with capturing("info") as logs:
            logs.logger.debug("this message will be ignored")
            assert logs.count() == 0
            assert logs.count_ignored() == 0

            # Let debug past the dispatcher; the sink still rejects it
            logs.dispatcher.set_min_level("debug")
            logs.logger.debug("this message should be ignored")
            assert logs.count() == 0
            assert logs.count_ignored() == 1

            logs.dispatcher.set_level("capture", "debug")
            logs.logger.debug("this message should be logged")
            assert logs.count() == 1
            assert logs.count_ignored() == 1
            assert logs.get_level() == "debug"

    def test_flush_between_cases(self):
        with capturing("info") as logs:
            logs.logger.error("one")
            logs.logger.debug("two")
            logs.flush()
            assert (logs.count(), logs.count_ignored()) == (0, 0)

    def test_extra_handlers_from_config(self):
        cfg = DispatcherConfig(handlers=[("audit", ["error"])], call_timeout=5.0)
        with capturing("debug", config=cfg) as logs:
            logs.logger.info("hi")
            assert logs.count() == 1
            assert logs.dispatcher.call("audit", Count()) == 0


# =============================================================================
# Crash reports at error
# =============================================================================

CRASH_REASONS = [
    "bad return value: bleh",
    "no case clause matching {} in crash:handle_call/3",
    "no function clause matching crash:function({})",
    "no true branch found while evaluating if expression in crash:handle_call/3",
    "no try clause matching [] in crash:handle_call/3",
    "call to undefined function crash:booger/0 from crash:handle_call/3",
    "bad arithmetic expression in crash:handle_call/3",
    "no match of right hand value {} in crash:handle_call/3",
    "fun called with wrong arity of 1 instead of 3 in crash:handle_call/3",
    "bad argument in crash:handle_call/3",
    "bad argument in call to erlang:iolist_to_binary([[102,111,111],bar]) in crash:handle_call/3",
    "no such process or port in call to gen_event:call(foo, bar, baz)",
    "bad function booger in crash:handle_call/3",
]


class TestCrashReports:
    def test_nothing_up_my_sleeve(self):
        with capturing("error") as logs:
            assert logs.pop() is None
            assert logs.count() == 0

    @pytest.mark.parametrize("reason", CRASH_REASONS)
    def test_crash_line(self, reason):
        pid = "<0.87.0>"
        with capturing("error", origin=pid) as logs:
            logs.logger.report(Severity.ERROR, CrashReport("crash", reason))
            assert logs.pop_message() == (
                f"[error] {pid} gen_server crash terminated with reason: {reason}"
            )

    def test_info_lines_do_not_reach_error_sink(self):
        with capturing("error") as logs:
            logs.logger.info("chatter")
            assert logs.count() == 0


# =============================================================================
# Reports at info
# =============================================================================


class TestReports:
    PID = "<0.50.0>"

    @pytest.mark.parametrize(
        ("level", "report", "expected"),
        [
            (
                "error",
                [("this", "is"), "a", ("silly", "format")],
                "[error] <0.50.0> this: is a silly: format",
            ),
            ("error", "this is less silly", "[error] <0.50.0> this is less silly"),
            (
                "info",
                [("this", "is"), "a", ("silly", "format")],
                "[info] <0.50.0> this: is a silly: format",
            ),
            ("info", "this is less silly", "[info] <0.50.0> this is less silly"),
            (
                "info",
                ApplicationExit("foo", "quittin_time"),
                "[info] <0.50.0> Application foo exited with reason: quittin_time",
            ),
            (
                "error",
                SupervisorChildExit(
                    "steve", "mini_steve", "a", "b", "bleh", "fired", "france", args=("c",)
                ),
                "[error] <0.50.0> Supervisor steve had child mini_steve started with "
                "a:b(c) at bleh exit with reason fired in context france",
            ),
            (
                "error",
                SupervisorBridgeExit("steve", "mini_steve", "bleh", "fired", "france"),
                "[error] <0.50.0> Supervisor steve had child at module mini_steve at "
                "bleh exit with reason fired in context france",
            ),
            (
                "info",
                ApplicationStarted("foo", "nonode@nohost"),
                "[info] <0.50.0> Application foo started on node nonode@nohost",
            ),
            (
                "info",
                SupervisorProgress("foo", "foo", "bar", 1, "baz"),
                "[info] <0.50.0> Supervisor foo started foo:bar/1 at pid baz",
            ),
        ],
    )
    def test_report_line(self, level, report, expected):
        with capturing("info", origin=self.PID) as logs:
            logs.logger.report(level, report)
            assert logs.pop_message() == expected

    def test_error_messages(self):
        with capturing("info", origin=self.PID) as logs:
            logs.logger.error("doom, doom has come upon you all")
            logs.logger.info("doom, doom has come upon you all")
            assert logs.pop_message() == "[error] <0.50.0> doom, doom has come upon you all"
            assert logs.pop_message() == "[info] <0.50.0> doom, doom has come upon you all"
