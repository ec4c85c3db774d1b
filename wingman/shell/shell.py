"""The ``shell`` tool: run a command in the workspace."""

from __future__ import annotations

import os
import signal
import subprocess
import sys
import time
from dataclasses import dataclass, field
from typing import Any

from wingman.shell.commands import is_safe_command
from wingman.tool import Environment, Tool, ToolError

DEFAULT_TIMEOUT = 120
MAX_LINES = 2000
MAX_BYTES = 50 * 1024

_DESCRIPTION = (
    "Execute a shell command. The command runs in the working directory. On Unix "
    "systems, uses $SHELL or /bin/sh. On Windows, uses PowerShell. Returns "
    "stdout/stderr combined. If output is truncated, a temp file path is provided to "
    "read the full output."
)


@dataclass
class PreparedCommand:
    """A program, its full argument vector and the directory to run it in."""

    path: str
    args: list[str] = field(default_factory=list)
    cwd: str = ""


def _is_windows() -> bool:
    return sys.platform == "win32"


def build_command(command: str, working_dir: str) -> PreparedCommand:
    """Prepare the platform shell invocation for a command string."""
    if _is_windows():
        args = ["powershell", "-NoProfile", "-NoLogo", "-NonInteractive", "-Command", command]
        return PreparedCommand(path="powershell", args=args, cwd=working_dir)

    shell = os.environ.get("SHELL") or "/bin/sh"
    return PreparedCommand(path=shell, args=[shell, "-c", command], cwd=working_dir)


def truncate_output(output: str, session_dir: str) -> str:
    """Keep the tail of long output, saving the full text under session_dir."""
    encoded = output.encode("utf-8", errors="replace")
    total_lines = output.count("\n") + 1
    total_bytes = len(encoded)

    if total_lines <= MAX_LINES and total_bytes <= MAX_BYTES:
        return output

    temp_file = ""
    if session_dir:
        temp_file = os.path.join(session_dir, f"output-{time.time_ns()}.txt")
        try:
            with open(temp_file, "wb") as handle:
                handle.write(encoded)
        except OSError:
            pass

    truncated = "\n".join(output.split("\n")[-MAX_LINES:])
    truncated_bytes = truncated.encode("utf-8", errors="replace")
    if len(truncated_bytes) > MAX_BYTES:
        truncated = truncated_bytes[-MAX_BYTES:].decode("utf-8", errors="ignore")

    shown_lines = truncated.count("\n") + 1
    shown_bytes = len(truncated.encode("utf-8", errors="replace"))

    summary = (
        f"showing last {shown_lines} of {total_lines} lines "
        f"({shown_bytes} of {total_bytes} bytes)"
    )
    if temp_file:
        notice = f"[Output truncated: {summary}. Full output: {temp_file}]\n\n"
    else:
        notice = f"[Output truncated: {summary}]\n\n"

    return notice + truncated


def _kill_process_group(process: subprocess.Popen) -> None:
    if _is_windows():
        subprocess.run(
            ["taskkill", "/T", "/F", "/PID", str(process.pid)],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
        return
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except (ProcessLookupError, PermissionError):
        process.kill()


def execute_shell(env: Environment, args: dict[str, Any]) -> str:
    """Run ``args["command"]`` in the workspace and return its combined output."""
    command = args.get("command")
    if not isinstance(command, str) or not command:
        raise ToolError("command is required")

    timeout = DEFAULT_TIMEOUT
    value = args.get("timeout")
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        timeout = int(value)

    if env.prompt_user is not None and not is_safe_command(command):
        try:
            approved = env.prompt_user("❯ " + command)
        except Exception as err:
            raise ToolError(f"failed to get user approval: {err}") from err
        if not approved:
            raise ToolError("command execution denied by user")

    prepared = build_command(command, env.working_dir())

    try:
        process = subprocess.Popen(
            prepared.args,
            cwd=prepared.cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            start_new_session=not _is_windows(),
        )
    except OSError as err:
        raise ToolError(f"failed to start command: {err}") from err

    try:
        raw, _ = process.communicate(timeout=max(timeout, 0))
    except subprocess.TimeoutExpired:
        _kill_process_group(process)
        process.communicate()
        raise ToolError(f"command timed out after {timeout} seconds") from None

    result = truncate_output(raw.decode("utf-8", errors="replace"), env.scratch_dir())

    if process.returncode != 0:
        exit_code = process.returncode if process.returncode > 0 else -1
        result += f"\n\nCommand exited with code {exit_code}"

    return result


def shell_tool() -> Tool:
    """Create the ``shell`` tool."""
    return Tool(
        name="shell",
        description=_DESCRIPTION,
        parameters={
            "type": "object",
            "properties": {
                "command": {"type": "string", "description": "The shell command to execute"},
                "timeout": {
                    "type": "integer",
                    "description": f"Timeout in seconds (default: {DEFAULT_TIMEOUT})",
                },
            },
            "required": ["command"],
        },
        execute=execute_shell,
    )


def tools() -> list[Tool]:
    """All shell tools."""
    return [shell_tool()]