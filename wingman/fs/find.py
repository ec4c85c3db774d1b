"""The ``find`` tool: locate files by glob pattern."""

from __future__ import annotations

import os
from typing import Any

from wingman.fs.utils import (
    DEFAULT_MAX_BYTES,
    ensure_path_in_workspace_fs,
    glob_match,
    path_error,
    truncate_head,
    walk_workspace,
)
from wingman.tool import Environment, Tool, ToolError

DEFAULT_FIND_LIMIT = 1000

_DESCRIPTION = (
    "Search for files by glob pattern. Returns matching file paths relative to the "
    "search directory. Respects .gitignore files and common ignore patterns "
    "(node_modules, .git, etc). Output is truncated to "
    f"{DEFAULT_FIND_LIMIT} results or {DEFAULT_MAX_BYTES // 1024}KB "
    "(whichever is hit first)."
)

_PARAMETERS: dict[str, Any] = {
    "type": "object",
    "properties": {
        "pattern": {"type": "string", "description": "Glob pattern to match files (e.g. *.go, **/*.txt)"},
        "path": {"type": "string", "description": "Directory to search in (defaults to current directory)"},
        "limit": {"type": "integer", "description": "Maximum number of results to return"},
    },
    "required": ["pattern"],
}


def _positive_int(args: dict[str, Any], key: str) -> int | None:
    value = args.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return int(value)
    return None


def _execute(env: Environment, args: dict[str, Any]) -> str:
    pattern = args.get("pattern")
    if not isinstance(pattern, str) or not pattern:
        raise ToolError("pattern is required")

    search_dir = args.get("path")
    if not isinstance(search_dir, str) or not search_dir:
        search_dir = "."

    working_dir = env.working_dir()
    search_dir_fs = ensure_path_in_workspace_fs(search_dir, working_dir, "search")
    limit = _positive_int(args, "limit") or DEFAULT_FIND_LIMIT

    target = env.root / search_dir_fs
    try:
        is_dir = target.is_dir() if target.stat() else False
    except OSError as err:
        raise path_error("stat path", search_dir, search_dir_fs, working_dir, err) from err
    if not is_dir:
        raise ToolError(f"path is not a directory: {search_dir}")

    results: list[str] = []
    limit_reached = False
    try:
        for _path, rel_path in walk_workspace(env.root, search_dir_fs):
            if len(results) >= limit:
                limit_reached = True
                break
            try:
                matched = glob_match(pattern, rel_path)
            except ValueError:
                continue
            if matched:
                results.append(rel_path.replace("/", os.sep))
    except OSError as err:
        raise ToolError(f"failed to search directory: {err}") from err

    if not results:
        return "No files found matching pattern"

    output, _, by_bytes = truncate_head("\n".join(results))

    notices = []
    if limit_reached:
        notices.append(
            f"{limit} results limit reached. Use limit={limit * 2} for more, or refine pattern"
        )
    if by_bytes:
        notices.append(f"{DEFAULT_MAX_BYTES // 1024}KB limit reached")
    if notices:
        output += f"\n\n[{'. '.join(notices)}]"

    return output


def find_tool() -> Tool:
    """Create the ``find`` tool."""
    return Tool(
        name="find",
        description=_DESCRIPTION,
        parameters=_PARAMETERS,
        execute=_execute,
    )