"""The ``ls`` tool: list a directory."""

from __future__ import annotations

import os
from typing import Any

from wingman.fs.utils import (
    DEFAULT_MAX_BYTES,
    ensure_path_in_workspace,
    path_error,
    truncate_head,
)
from wingman.tool import Environment, Tool, ToolError

DEFAULT_LIST_LIMIT = 500

_DESCRIPTION = (
    "List directory contents. Returns entries sorted alphabetically, with '/' suffix "
    "for directories. Includes dotfiles. Output is truncated to "
    f"{DEFAULT_LIST_LIMIT} entries or {DEFAULT_MAX_BYTES // 1024}KB "
    "(whichever is hit first)."
)

_PARAMETERS: dict[str, Any] = {
    "type": "object",
    "properties": {
        "path": {"type": "string", "description": "Path to the directory to list (defaults to current directory)"},
        "limit": {"type": "integer", "description": "Maximum number of entries to return"},
    },
}


def _positive_int(args: dict[str, Any], key: str) -> int | None:
    value = args.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return int(value)
    return None


def _execute(env: Environment, args: dict[str, Any]) -> str:
    path_arg = args.get("path")
    if not isinstance(path_arg, str) or not path_arg:
        path_arg = "."

    working_dir = env.working_dir()
    normalized = ensure_path_in_workspace(path_arg, working_dir, "list directory")
    limit = _positive_int(args, "limit") or DEFAULT_LIST_LIMIT

    target = env.root / normalized
    try:
        target.stat()
    except OSError as err:
        raise path_error("stat path", path_arg, normalized, working_dir, err) from err
    if not target.is_dir():
        raise ToolError(f"path is not a directory: {path_arg}")

    try:
        with os.scandir(target) as it:
            entries = sorted(
                ((e.name, e.is_dir(follow_symlinks=False)) for e in it),
                key=lambda item: item[0],
            )
    except OSError as err:
        raise path_error("open directory", path_arg, normalized, working_dir, err) from err

    if not entries:
        return "(empty directory)"

    names = [name + "/" if is_dir else name for name, is_dir in entries[:limit]]
    output, _, by_bytes = truncate_head("\n".join(names))

    notices = []
    if len(entries) > limit:
        notices.append(f"{limit} entries limit reached")
    if by_bytes:
        notices.append(f"{DEFAULT_MAX_BYTES // 1024}KB limit reached")
    if notices:
        output += f"\n\n[{'. '.join(notices)}]"

    return output


def ls_tool() -> Tool:
    """Create the ``ls`` tool."""
    return Tool(
        name="ls",
        description=_DESCRIPTION,
        parameters=_PARAMETERS,
        execute=_execute,
    )