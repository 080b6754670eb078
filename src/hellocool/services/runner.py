"""External command runner service."""

from __future__ import annotations

import asyncio
import logging
import os
import signal
import time
from collections.abc import Sequence
from pathlib import Path

from hellocool.config import AppConfig
from hellocool.models import NO_OUTPUT, CommandResult, CommandStatus, FailureKind, format_command
from hellocool.utils.system import build_environment

logger = logging.getLogger(__name__)


class CommandRunner:
    """Execute one external program per call, without a shell."""

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    def run(self, executable: str, arguments: Sequence[str]) -> asyncio.Task[CommandResult]:
        """Dispatch an invocation on the running loop and return its task."""
        return asyncio.create_task(self.execute(executable, arguments))

    async def execute(self, executable: str, arguments: Sequence[str]) -> CommandResult:
        """Execute a program and capture its combined stdout/stderr."""
        args = [str(a) for a in arguments]
        command = format_command(executable, args)

        if not Path(executable).is_absolute():
            return CommandResult.failed(
                f"Failed to launch {executable}: executable path must be absolute",
                FailureKind.LAUNCH,
                command=command,
            )

        cwd = str(Path(self.config.runner.cwd).expanduser()) if self.config.runner.cwd else None
        if cwd is not None and not Path(cwd).is_dir():
            return CommandResult.failed(
                f"Failed to launch {executable}: working directory not found: {cwd}",
                FailureKind.LAUNCH,
                command=command,
            )

        env = build_environment(self.config.runner.extra_paths)
        timeout = self.config.runner.timeout or None

        logger.debug("Launching %s", command)
        start = time.monotonic()
        try:
            # exec, not shell: arguments reach the program verbatim
            proc = await asyncio.create_subprocess_exec(
                executable,
                *args,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
                env=env,
                cwd=cwd,
                start_new_session=True,
            )
        except OSError as e:
            reason = e.strerror or (os.strerror(e.errno) if e.errno else str(e))
            logger.warning("Launch failed for %s: %s", executable, reason)
            return CommandResult.failed(
                f"Failed to launch {executable}: {reason}",
                FailureKind.LAUNCH,
                command=command,
                elapsed_ms=_elapsed_ms(start),
            )

        try:
            output_bytes, _ = await asyncio.wait_for(proc.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            # Kill the whole session so grandchildren release the output pipe
            try:
                os.killpg(proc.pid, signal.SIGKILL)
            except ProcessLookupError:
                pass
            await proc.wait()
            logger.warning("Command timed out after %ss: %s", timeout, command)
            return CommandResult.failed(
                f"Command timed out after {timeout}s",
                FailureKind.TIMEOUT,
                command=command,
                elapsed_ms=_elapsed_ms(start),
            )

        returncode = proc.returncode if proc.returncode is not None else 0
        elapsed_ms = _elapsed_ms(start)
        text = (output_bytes or b"").decode("utf-8", errors="replace")
        if not text.strip():
            text = NO_OUTPUT

        if returncode < 0:
            signame = _signal_name(-returncode)
            logger.warning("Command terminated by %s after %dms: %s", signame, elapsed_ms, command)
            return CommandResult.failed(
                f"{text.rstrip()}\n\nTerminated by signal {-returncode} ({signame})",
                FailureKind.SIGNAL,
                command=command,
                elapsed_ms=elapsed_ms,
            )

        logger.info("Command exited with %d in %dms: %s", returncode, elapsed_ms, command)
        if returncode != 0:
            return CommandResult.failed(
                text,
                FailureKind.EXIT,
                command=command,
                exit_code=returncode,
                elapsed_ms=elapsed_ms,
            )
        return CommandResult(
            status=CommandStatus.SUCCEEDED,
            text=text,
            exit_code=returncode,
            command=command,
            elapsed_ms=elapsed_ms,
        )


def _signal_name(signum: int) -> str:
    try:
        return signal.Signals(signum).name
    except ValueError:
        return f"signal {signum}"


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
