"""Tests for the process runner result policy."""

import asyncio
import logging
import shutil
from pathlib import Path

import pytest

from webhare_mcp.core.errors import ExecutionError
from webhare_mcp.core.process_runner import ExecutionResult, ProcessRunner

pytestmark = pytest.mark.skipif(shutil.which("sh") is None, reason="requires a POSIX shell")


@pytest.fixture
def runner():
    """Runner logging to a propagating test logger."""
    return ProcessRunner(logger=logging.getLogger("tests.process_runner"))


@pytest.mark.asyncio
async def test_run_returns_trimmed_stdout(runner):
    assert await runner.run("echo hi") == "hi"


@pytest.mark.asyncio
async def test_stderr_on_success_is_only_a_warning(runner, caplog):
    """Diagnostic output does not turn a successful exit into a failure."""
    with caplog.at_level(logging.WARNING, logger="tests.process_runner"):
        output = await runner.run("echo out; echo careful >&2")

    assert output == "out"
    assert any("careful" in r.getMessage() for r in caplog.records)


@pytest.mark.asyncio
async def test_failed_command_with_stdout_is_a_success(runner):
    """Non-zero exit with partial output returns that output."""
    assert await runner.run("echo partial; exit 3") == "partial"


@pytest.mark.asyncio
async def test_failed_command_without_stdout_raises(runner):
    with pytest.raises(ExecutionError) as exc_info:
        await runner.run("echo boom >&2; exit 4")

    error = exc_info.value
    assert error.message.startswith("Command execution failed: ")
    assert error.returncode == 4
    assert error.stderr == "boom"
    assert "boom" in str(error)


@pytest.mark.asyncio
async def test_whitespace_only_stdout_still_counts_as_output(runner):
    """Captured stdout is checked before trimming."""
    assert await runner.run("echo '   '; exit 1") == ""


@pytest.mark.asyncio
async def test_no_stdout_at_all_raises(runner):
    with pytest.raises(ExecutionError):
        await runner.run("printf ''; exit 1")


@pytest.mark.asyncio
async def test_run_in_working_directory(runner, tmp_path):
    output = await runner.run("pwd", cwd=tmp_path)
    assert Path(output).resolve() == tmp_path.resolve()


@pytest.mark.asyncio
async def test_run_args_passes_words_unsplit(runner):
    """Argument vectors are not interpreted by a shell."""
    assert await runner.run_args(["echo", "a  b", "$HOME"]) == "a  b $HOME"


@pytest.mark.asyncio
async def test_run_args_missing_program(runner, tmp_path):
    with pytest.raises(ExecutionError) as exc_info:
        await runner.run_args([str(tmp_path / "no-such-program")])

    assert exc_info.value.returncode is None


@pytest.mark.asyncio
async def test_run_args_empty_vector(runner):
    with pytest.raises(ExecutionError, match="empty argument vector"):
        await runner.run_args([])


@pytest.mark.asyncio
async def test_concurrent_runs_are_independent(runner):
    outputs = await asyncio.gather(
        runner.run("sleep 0.2; echo first"),
        runner.run("echo second"),
        runner.run("sleep 0.1; echo third"),
    )
    assert outputs == ["first", "second", "third"]


def test_normalize_keeps_partial_output_of_failed_run(runner):
    result = ExecutionResult(exited_successfully=False, output="left over", returncode=1)
    assert runner._normalize(result, "tool") == "left over"


def test_normalize_reports_status_and_diagnostics(runner):
    result = ExecutionResult(
        exited_successfully=False,
        output="",
        diagnostics="no such file",
        returncode=127
    )
    with pytest.raises(ExecutionError) as exc_info:
        runner._normalize(result, "tool --flag")

    assert exc_info.value.message == (
        "Command execution failed: 'tool --flag' exited with status 127: no such file"
    )


def test_normalize_treats_blank_stdout_as_captured(runner):
    result = ExecutionResult(exited_successfully=False, output="  \n", returncode=1)
    assert runner._normalize(result, "tool") == ""
