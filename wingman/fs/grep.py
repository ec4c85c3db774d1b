"""The ``grep`` tool: search file contents for a pattern."""

from __future__ import annotations

import os
import posixpath
import re
from pathlib import Path
from typing import Any

from wingman.fs.utils import (
    DEFAULT_MAX_BYTES,
    ensure_path_in_workspace_fs,
    glob_match,
    is_binary_file,
    path_error,
    truncate_head,
    walk_workspace,
)
from wingman.tool import Environment, Tool, ToolError

DEFAULT_GREP_LIMIT = 100
MAX_SCAN_BUF_SIZE = 1024 * 1024
MAX_LINE_DISPLAY_LENGTH = 200

_DESCRIPTION = (
    "Search file contents for a pattern (regex or literal). Returns matching lines "
    "with file path and line number. Respects .gitignore. Output truncated to "
    f"{DEFAULT_GREP_LIMIT} matches or {DEFAULT_MAX_BYTES // 1024}KB."
)

_PARAMETERS: dict[str, Any] = {
    "type": "object",
    "properties": {
        "pattern": {"type": "string", "description": "Search pattern (supports regex)"},
        "path": {
            "type": "string",
            "description": "Directory or file to search (defaults to current directory)",
        },
        "glob": {"type": "string", "description": "File pattern to filter (e.g., *.go, *.ts)"},
        "ignoreCase": {
            "type": "boolean",
            "description": "Case-insensitive search (default: false)",
        },
        "literal": {
            "type": "boolean",
            "description": "Treat pattern as a literal string, not a regex (default: false)",
        },
        "context": {
            "type": "integer",
            "description": "Lines of context around matches (default: 0)",
        },
        "limit": {"type": "integer", "description": "Maximum number of matches to return"},
    },
    "required": ["pattern"],
}


def _positive_int(args: dict[str, Any], key: str) -> int | None:
    value = args.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return int(value)
    return None


def _flag(args: dict[str, Any], key: str) -> bool:
    value = args.get(key)
    return isinstance(value, bool) and value


def _safe_glob(pattern: str, name: str) -> bool:
    try:
        return glob_match(pattern, name)
    except ValueError:
        return False


def _read_lines(file_path: Path) -> list[str] | None:
    try:
        data = file_path.read_bytes()
    except OSError:
        return None
    lines = data.decode("utf-8", errors="replace").split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]
    if any(len(line.encode("utf-8")) > MAX_SCAN_BUF_SIZE for line in lines):
        return None
    return lines


def search_file_with_context(
    root: Path | str,
    path: str,
    regex: re.Pattern[str],
    context_lines: int,
    limit: int,
) -> list[str]:
    """Matching lines of one file, formatted as ``path:line:marker content``.

    ``path`` is a slash path relative to ``root``. Matching lines are marked
    with ``>``, context lines with a blank, and gaps with ``--``.
    """
    lines = _read_lines(Path(root) / path)
    if not lines:
        return []

    matched = {index for index, line in enumerate(lines) if regex.search(line)}
    if not matched:
        return []

    display_path = path.replace("/", os.sep)
    results: list[str] = []
    printed: set[int] = set()
    last_printed = -2

    for index in sorted(matched):
        if len(results) >= limit:
            break

        start = max(0, index - context_lines)
        end = min(len(lines) - 1, index + context_lines)

        if last_printed >= 0 and start > last_printed + 1:
            results.append("--")

        for number in range(start, end + 1):
            if number in printed:
                continue
            printed.add(number)

            marker = ">" if number in matched else " "
            content = lines[number]
            if len(content) > MAX_LINE_DISPLAY_LENGTH:
                content = content[: MAX_LINE_DISPLAY_LENGTH - 3] + "..."

            results.append(f"{display_path}:{number + 1}:{marker} {content}")
            last_printed = number

    return results


def _execute(env: Environment, args: dict[str, Any]) -> str:
    pattern = args.get("pattern")
    if not isinstance(pattern, str) or not pattern:
        raise ToolError("pattern is required")

    search_path = args.get("path")
    if not isinstance(search_path, str) or not search_path:
        search_path = "."

    working_dir = env.working_dir()
    search_path_fs = ensure_path_in_workspace_fs(search_path, working_dir, "search")

    glob = args.get("glob")
    if not isinstance(glob, str):
        glob = ""

    context_lines = _positive_int(args, "context") or 0
    limit = _positive_int(args, "limit") or DEFAULT_GREP_LIMIT

    regex_pattern = re.escape(pattern) if _flag(args, "literal") else pattern
    flags = re.IGNORECASE if _flag(args, "ignoreCase") else 0
    try:
        regex = re.compile(regex_pattern, flags)
    except re.error as err:
        raise ToolError(f"invalid regex pattern: {err}") from err

    target = env.root / search_path_fs
    try:
        target.stat()
    except OSError as err:
        raise path_error("stat path", search_path, search_path_fs, working_dir, err) from err

    if not target.is_dir():
        matches = search_file_with_context(env.root, search_path_fs, regex, context_lines, limit)
        return "\n".join(matches) if matches else "No matches found"

    results: list[str] = []
    match_count = 0
    limit_reached = False

    try:
        for path, rel_path in walk_workspace(env.root, search_path_fs):
            if glob and not (
                _safe_glob(glob, posixpath.basename(path)) or _safe_glob(glob, rel_path)
            ):
                continue
            if is_binary_file(path):
                continue

            remaining = limit - match_count
            if remaining <= 0:
                limit_reached = True
                break

            matches = search_file_with_context(env.root, path, regex, context_lines, remaining)
            results.extend(matches)
            match_count += len(matches)
    except OSError as err:
        raise ToolError(f"search failed: {err}") from err

    if not results:
        return "No matches found"

    output, _, by_bytes = truncate_head("\n".join(results))

    notices = []
    if limit_reached or match_count >= limit:
        notices.append(f"{limit} matches limit reached")
    if by_bytes:
        notices.append(f"{DEFAULT_MAX_BYTES // 1024}KB limit reached")
    if notices:
        output += f"\n\n[{'. '.join(notices)}]"

    return output


def grep_tool() -> Tool:
    """Create the ``grep`` tool."""
    return Tool(
        name="grep",
        description=_DESCRIPTION,
        parameters=_PARAMETERS,
        execute=_execute,
    )