"""Reference formatter for the line format capture sinks are checked against.

Every line is ``"[<level>] <origin> <text>"``. The text is either a
printf-rendered message or a report rendered with a fixed template:

    CrashReport          gen_server <name> terminated with reason: <reason>
    SupervisorChildExit  Supervisor <sup> had child <child> started with
                         <mod>:<fun>(<args>) at <pid> exit with reason
                         <reason> in context <context>
    SupervisorBridgeExit Supervisor <sup> had child at module <module> at
                         <pid> exit with reason <reason> in context <context>
    SupervisorProgress   Supervisor <sup> started <mod>:<fun>/<arity> at pid <pid>
    ApplicationExit      Application <app> exited with reason: <reason>
    ApplicationStarted   Application <app> started on node <node>

Reasons arrive as already-rendered text. A plain string report is used as
is; a list report renders ``(key, value)`` pairs as ``key: value`` and
joins everything with single spaces. Only a ``list`` is a list report; a
bare tuple is rejected so a lone pair is never mistaken for two items.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from logsink.severity import Severity, parse_level

# =============================================================================
# Report types
# =============================================================================


@dataclass(frozen=True)
class CrashReport:
    """A named server process terminated abnormally."""

    name: str
    reason: str

    def render(self) -> str:
        return f"gen_server {self.name} terminated with reason: {self.reason}"


@dataclass(frozen=True)
class SupervisorChildExit:
    supervisor: str
    child: str
    module: str
    function: str
    pid: str
    reason: str
    context: str
    args: tuple[Any, ...] = field(default=())

    def render(self) -> str:
        arglist = ",".join(str(a) for a in self.args)
        return (
            f"Supervisor {self.supervisor} had child {self.child} started with "
            f"{self.module}:{self.function}({arglist}) at {self.pid} "
            f"exit with reason {self.reason} in context {self.context}"
        )


@dataclass(frozen=True)
class SupervisorBridgeExit:
    """Child exit reported by a bridge, which knows only the child's module."""

    supervisor: str
    module: str
    pid: str
    reason: str
    context: str

    def render(self) -> str:
        return (
            f"Supervisor {self.supervisor} had child at module {self.module} "
            f"at {self.pid} exit with reason {self.reason} in context {self.context}"
        )


@dataclass(frozen=True)
class SupervisorProgress:
    supervisor: str
    module: str
    function: str
    arity: int
    pid: str

    def render(self) -> str:
        return (
            f"Supervisor {self.supervisor} started "
            f"{self.module}:{self.function}/{self.arity} at pid {self.pid}"
        )


@dataclass(frozen=True)
class ApplicationExit:
    app: str
    reason: str

    def render(self) -> str:
        return f"Application {self.app} exited with reason: {self.reason}"


@dataclass(frozen=True)
class ApplicationStarted:
    app: str
    node: str

    def render(self) -> str:
        return f"Application {self.app} started on node {self.node}"


_TEMPLATE_REPORTS = (
    CrashReport,
    SupervisorChildExit,
    SupervisorBridgeExit,
    SupervisorProgress,
    ApplicationExit,
    ApplicationStarted,
)


# =============================================================================
# Rendering
# =============================================================================


def render_text(fmt: str, args: Sequence[Any] = ()) -> str:
    """printf-style substitution. Without args the text is taken verbatim."""
    if not args:
        return fmt
    return fmt % tuple(args)


def render_report(report: Any) -> str:
    """Render a template report, a plain string, or a list of items."""
    if isinstance(report, _TEMPLATE_REPORTS):
        return report.render()
    if isinstance(report, str):
        return report
    if isinstance(report, list):
        return " ".join(_render_item(item) for item in report)
    raise TypeError(f"Cannot render report of type {type(report).__name__}")


def _render_item(item: Any) -> str:
    if isinstance(item, tuple) and len(item) == 2:
        key, value = item
        return f"{key}: {value}"
    return str(item)


def format_line(level: Severity | str, origin: str, text: str) -> str:
    """``"[<level>] <origin> <text>"`` with the lowercase level name."""
    return f"[{parse_level(level).label}] {origin} {text}"
