"""Display surface owning the single command result slot."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence

from hellocool.models import CommandResult, FailureKind, Preset, format_command
from hellocool.services.runner import CommandRunner

logger = logging.getLogger(__name__)

Listener = Callable[[CommandResult], None]


class CommandPanel:
    """Run one command at a time and publish its result.

    All writes to ``result`` happen on the event loop thread: the runner task
    hands its value back through a done-callback rather than touching the
    panel. The trigger stays disabled from the Running update until the
    terminal update is applied.
    """

    def __init__(self, runner: CommandRunner) -> None:
        self.runner = runner
        self.result = CommandResult()
        self._task: asyncio.Task[CommandResult] | None = None
        self._listeners: list[Listener] = []

    @property
    def trigger_enabled(self) -> bool:
        return self._task is None

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def trigger(self, preset: Preset) -> asyncio.Future[CommandResult]:
        return self.trigger_command(preset.executable, preset.arguments)

    def trigger_command(
        self, executable: str, arguments: Sequence[str]
    ) -> asyncio.Future[CommandResult]:
        """Start an invocation; the returned future resolves once the panel holds the outcome."""
        if not self.trigger_enabled:
            raise RuntimeError("A command is already running on this panel.")

        loop = asyncio.get_running_loop()
        settled: asyncio.Future[CommandResult] = loop.create_future()
        command = format_command(executable, list(arguments))

        task = self.runner.run(executable, arguments)
        self._task = task
        self._publish(CommandResult.running(command))

        def _on_done(done: asyncio.Task[CommandResult]) -> None:
            final = self._outcome(done, command)
            self._task = None
            self._publish(final)
            if not settled.done():
                settled.set_result(final)

        task.add_done_callback(_on_done)
        return settled

    def _outcome(self, task: asyncio.Task[CommandResult], command: str) -> CommandResult:
        if task.cancelled():
            return CommandResult.failed("Command was cancelled", FailureKind.LAUNCH, command=command)
        exc = task.exception()
        if exc is not None:
            logger.error("Command runner error for %s", command, exc_info=exc)
            return CommandResult.failed(f"Command failed: {exc}", FailureKind.LAUNCH, command=command)
        return task.result()

    def _publish(self, result: CommandResult) -> None:
        self.result = result
        for listener in self._listeners:
            try:
                listener(result)
            except Exception:
                logger.exception("Result listener failed")
