"""Data models for hellocool."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

NO_OUTPUT = "(no output)"


class CommandStatus(str, enum.Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FailureKind(str, enum.Enum):
    LAUNCH = "launch"
    EXIT = "exit"
    TIMEOUT = "timeout"
    SIGNAL = "signal"


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one process invocation, as seen by a display surface."""

    status: CommandStatus = CommandStatus.IDLE
    text: str = ""
    exit_code: int | None = None
    failure: FailureKind | None = None
    command: str = ""
    elapsed_ms: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.status in (CommandStatus.SUCCEEDED, CommandStatus.FAILED)

    @classmethod
    def running(cls, command: str) -> CommandResult:
        return cls(status=CommandStatus.RUNNING, text="Running...", command=command)

    @classmethod
    def failed(
        cls,
        text: str,
        failure: FailureKind,
        command: str = "",
        exit_code: int | None = None,
        elapsed_ms: int = 0,
    ) -> CommandResult:
        return cls(
            status=CommandStatus.FAILED,
            text=text,
            exit_code=exit_code,
            failure=failure,
            command=command,
            elapsed_ms=elapsed_ms,
        )


@dataclass(frozen=True)
class Preset:
    """A hardcoded command bound to one user action."""

    name: str
    label: str
    executable: str
    arguments: list[str] = field(default_factory=list)

    @property
    def command(self) -> str:
        return format_command(self.executable, self.arguments)


def format_command(executable: str, arguments: list[str] | tuple[str, ...]) -> str:
    """Display string for an invocation. Never passed to a shell."""
    return " ".join([executable, *arguments])
