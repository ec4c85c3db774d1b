"""The ``write`` tool: create or overwrite a file."""

from __future__ import annotations

import os
from typing import Any

from wingman.fs.utils import ensure_path_in_workspace, path_error
from wingman.tool import Environment, Tool, ToolError

_DESCRIPTION = (
    "Write content to a file. Creates the file if it doesn't exist, overwrites if it "
    "does. Automatically creates parent directories."
)

_PARAMETERS: dict[str, Any] = {
    "type": "object",
    "properties": {
        "path": {"type": "string", "description": "Path to the file to write"},
        "content": {"type": "string", "description": "Content to write to the file"},
    },
    "required": ["path", "content"],
}


def _execute(env: Environment, args: dict[str, Any]) -> str:
    path_arg = args.get("path")
    if not isinstance(path_arg, str) or not path_arg:
        raise ToolError("path is required")

    working_dir = env.working_dir()
    normalized = ensure_path_in_workspace(path_arg, working_dir, "write file")

    content = args.get("content")
    if not isinstance(content, str):
        raise ToolError("content is required")

    directory = os.path.dirname(normalized)
    if directory not in ("", "."):
        try:
            (env.root / directory).mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise path_error("create directory", path_arg, normalized, working_dir, err) from err

    encoded = content.encode("utf-8", errors="surrogateescape")
    try:
        (env.root / normalized).write_bytes(encoded)
    except OSError as err:
        raise path_error("create file", path_arg, normalized, working_dir, err) from err

    result = f"Successfully wrote {len(encoded)} bytes to {path_arg}"

    if env.diagnose_file is not None:
        diagnostics = env.diagnose_file(normalized)
        if diagnostics:
            result += "\n\n" + diagnostics

    return result


def write_tool() -> Tool:
    """Create the ``write`` tool."""
    return Tool(
        name="write",
        description=_DESCRIPTION,
        parameters=_PARAMETERS,
        execute=_execute,
    )