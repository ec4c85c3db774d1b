"""The ``read`` tool: show a file with line numbers."""

from __future__ import annotations

from typing import Any

from wingman.fs.utils import (
    DEFAULT_MAX_BYTES,
    DEFAULT_MAX_LINES,
    ensure_path_in_workspace,
    path_error,
    truncate_head,
)
from wingman.tool import Environment, Tool, ToolError

_DESCRIPTION = (
    "Read the contents of a file. For text files, output is truncated to "
    f"{DEFAULT_MAX_LINES} lines or {DEFAULT_MAX_BYTES // 1024}KB "
    "(whichever is hit first). Use offset/limit for large files."
)

_PARAMETERS: dict[str, Any] = {
    "type": "object",
    "properties": {
        "path": {"type": "string", "description": "Path to the file to read"},
        "offset": {"type": "integer", "description": "Line number to start reading from (1-based)"},
        "limit": {"type": "integer", "description": "Maximum number of lines to read"},
    },
    "required": ["path"],
}


def _positive_int(args: dict[str, Any], key: str) -> int | None:
    value = args.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return int(value)
    return None


def _execute(env: Environment, args: dict[str, Any]) -> str:
    path_arg = args.get("path")
    if not isinstance(path_arg, str) or not path_arg:
        raise ToolError("path is required")

    working_dir = env.working_dir()
    normalized = ensure_path_in_workspace(path_arg, working_dir, "read file")

    limit = _positive_int(args, "limit") or 0
    offset_arg = _positive_int(args, "offset")
    offset = offset_arg - 1 if offset_arg else 0

    try:
        content = (env.root / normalized).read_bytes().decode("utf-8", errors="replace")
    except OSError as err:
        raise path_error("read file", path_arg, normalized, working_dir, err) from err

    lines = content.split("\n")
    total = len(lines)

    if offset >= total:
        raise ToolError(f"offset {offset + 1} is beyond end of file ({total} lines)")

    end = offset + limit if limit > 0 and offset + limit < total else total

    selected = "\n".join(
        f"{number:6d}\t{line}"
        for number, line in enumerate(lines[offset:end], start=offset + 1)
    )
    output, by_lines, by_bytes = truncate_head(selected)
    end_line = offset + len(output.split("\n"))

    if by_lines or by_bytes:
        notice = f"\n\n[Lines {offset + 1}-{end_line} of {total}"
        if by_bytes:
            notice += f", {DEFAULT_MAX_BYTES // 1024}KB limit"
        notice += f". Use offset={end_line + 1} to continue]"
        return output + notice

    if end < total:
        return (
            output
            + f"\n\n[Lines {offset + 1}-{end_line} of {total}. Use offset={end_line + 1} to continue]"
        )

    return output


def read_tool() -> Tool:
    """Create the ``read`` tool."""
    return Tool(
        name="read",
        description=_DESCRIPTION,
        parameters=_PARAMETERS,
        execute=_execute,
    )