"""Tests for the command runner service."""

from __future__ import annotations

import asyncio
import os
import signal
import sys
import time
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from hellocool.models import NO_OUTPUT, CommandStatus, FailureKind
from hellocool.services.runner import CommandRunner

GIT = "/usr/bin/git"


@pytest.fixture
def runner(app_config):
    return CommandRunner(app_config)


class TestCommandRunner:
    @pytest.mark.asyncio
    async def test_execute_success(self, runner):
        result = await runner.execute(sys.executable, ["-c", "import sys; sys.stdout.write('X')"])
        assert result.status is CommandStatus.SUCCEEDED
        assert result.text == "X"
        assert result.exit_code == 0
        assert result.failure is None

    @pytest.mark.asyncio
    async def test_execute_empty_output_uses_placeholder(self, runner):
        result = await runner.execute(sys.executable, ["-c", "pass"])
        assert result.status is CommandStatus.SUCCEEDED
        assert result.text == NO_OUTPUT
        assert result.exit_code == 0

    @pytest.mark.asyncio
    async def test_execute_nonzero_exit(self, runner):
        result = await runner.execute(
            sys.executable, ["-c", "import sys; print('boom'); sys.exit(3)"]
        )
        assert result.status is CommandStatus.FAILED
        assert result.exit_code == 3
        assert result.failure is FailureKind.EXIT
        assert "boom" in result.text

    @pytest.mark.asyncio
    async def test_execute_combines_stdout_and_stderr(self, runner):
        script = "import sys; print('to-out', flush=True); print('to-err', file=sys.stderr)"
        result = await runner.execute(sys.executable, ["-c", script])
        assert "to-out" in result.text
        assert "to-err" in result.text

    @pytest.mark.asyncio
    async def test_arguments_are_not_shell_interpreted(self, runner):
        script = "import sys; sys.stdout.write(sys.argv[1])"
        result = await runner.execute(sys.executable, ["-c", script, "$HOME; echo hi"])
        assert result.text == "$HOME; echo hi"

    @pytest.mark.asyncio
    async def test_execute_missing_executable(self, runner, tmp_path):
        result = await runner.execute(str(tmp_path / "no-such-tool"), [])
        assert result.status is CommandStatus.FAILED
        assert result.exit_code is None
        assert result.failure is FailureKind.LAUNCH
        assert "No such file" in result.text

    @pytest.mark.asyncio
    async def test_execute_not_executable(self, runner, tmp_path):
        script = tmp_path / "plain.txt"
        script.write_text("not a program")
        result = await runner.execute(str(script), [])
        assert result.status is CommandStatus.FAILED
        assert result.exit_code is None
        assert result.failure is FailureKind.LAUNCH
        assert result.text

    @pytest.mark.asyncio
    async def test_execute_relative_path_rejected(self, runner):
        with patch("hellocool.services.runner.asyncio.create_subprocess_exec") as spawn:
            result = await runner.execute("ls", ["-la"])
        spawn.assert_not_called()
        assert result.status is CommandStatus.FAILED
        assert result.exit_code is None
        assert "absolute" in result.text

    @pytest.mark.asyncio
    async def test_child_gets_augmented_path(self, runner, monkeypatch):
        monkeypatch.setenv("PATH", "/inherited/bin")
        script = "import os, sys; sys.stdout.write(os.environ['PATH'])"
        result = await runner.execute(sys.executable, ["-c", script])
        entries = result.text.split(os.pathsep)
        assert entries[0] == "/inherited/bin"
        assert "/usr/local/bin" in entries
        assert "/usr/bin" in entries

    @pytest.mark.asyncio
    async def test_runs_in_configured_cwd(self, runner, tmp_path):
        result = await runner.execute(sys.executable, ["-c", "import os, sys; sys.stdout.write(os.getcwd())"])
        assert Path(result.text).resolve() == tmp_path.resolve()

    @pytest.mark.asyncio
    async def test_execute_timeout(self, app_config):
        app_config.runner.timeout = 5
        runner = CommandRunner(app_config)
        mock_proc = AsyncMock()
        mock_proc.communicate = AsyncMock(side_effect=asyncio.TimeoutError)
        mock_proc.pid = 4242

        with patch("hellocool.services.runner.asyncio.create_subprocess_exec", return_value=mock_proc):
            with patch("hellocool.services.runner.os.killpg") as killpg:
                result = await runner.execute("/bin/sleep", ["100"])
        killpg.assert_called_once_with(4242, signal.SIGKILL)
        mock_proc.wait.assert_awaited_once()
        assert result.status is CommandStatus.FAILED
        assert result.failure is FailureKind.TIMEOUT
        assert result.exit_code is None
        assert "timed out" in result.text.lower()

    @pytest.mark.asyncio
    @pytest.mark.skipif(not Path("/bin/sh").exists(), reason="/bin/sh not available")
    async def test_timeout_kills_grandchildren(self, app_config):
        app_config.runner.timeout = 1
        runner = CommandRunner(app_config)
        start = time.monotonic()
        result = await runner.execute("/bin/sh", ["-c", "sleep 6 & sleep 6; wait"])
        assert time.monotonic() - start < 4
        assert result.failure is FailureKind.TIMEOUT
        assert result.exit_code is None

    @pytest.mark.asyncio
    async def test_killed_by_signal_has_no_exit_code(self, runner):
        script = "import os, signal; print('before', flush=True); os.kill(os.getpid(), signal.SIGKILL)"
        result = await runner.execute(sys.executable, ["-c", script])
        assert result.status is CommandStatus.FAILED
        assert result.exit_code is None
        assert result.failure is FailureKind.SIGNAL
        assert "before" in result.text
        assert "SIGKILL" in result.text

    @pytest.mark.asyncio
    async def test_missing_cwd_reported(self, app_config, tmp_path):
        app_config.runner.cwd = str(tmp_path / "gone")
        runner = CommandRunner(app_config)
        result = await runner.execute(sys.executable, ["-c", "pass"])
        assert result.status is CommandStatus.FAILED
        assert result.failure is FailureKind.LAUNCH
        assert "working directory not found" in result.text
        assert str(tmp_path / "gone") in result.text

    @pytest.mark.asyncio
    async def test_run_returns_task(self, runner):
        task = runner.run(sys.executable, ["-c", "print('hi')"])
        assert isinstance(task, asyncio.Task)
        result = await task
        assert result.text.strip() == "hi"


class TestRealCommands:
    @pytest.mark.asyncio
    @pytest.mark.skipif(not Path("/bin/ls").exists(), reason="/bin/ls not available")
    async def test_ls_root(self, runner):
        result = await runner.execute("/bin/ls", ["-la", "/"])
        assert result.status is CommandStatus.SUCCEEDED
        assert result.exit_code == 0
        assert len(result.text.splitlines()) >= 1

    @pytest.mark.asyncio
    @pytest.mark.skipif(not Path(GIT).exists(), reason="git not available")
    async def test_git_status_outside_repository(self, runner, tmp_path, monkeypatch):
        # Stop git from discovering a repository above tmp_path
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
        result = await runner.execute(GIT, ["status"])
        assert result.status is CommandStatus.FAILED
        assert result.exit_code not in (None, 0)
        assert result.text.strip()
