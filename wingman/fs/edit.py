"""The ``edit`` tool: replace one unique piece of text in a file."""

from __future__ import annotations

from typing import Any

from wingman.fs.utils import (
    detect_line_ending,
    ensure_path_in_workspace,
    fuzzy_find_text,
    generate_diff_string,
    normalize_for_fuzzy_match,
    normalize_to_lf,
    path_error,
    restore_line_endings,
    strip_bom,
)
from wingman.tool import Environment, Tool, ToolError

_DESCRIPTION = (
    "Edit a file by replacing exact text. The oldText must match exactly "
    "(including whitespace). Use this for precise, surgical edits."
)

_PARAMETERS: dict[str, Any] = {
    "type": "object",
    "properties": {
        "path": {"type": "string", "description": "Path to the file to edit"},
        "old_text": {"type": "string", "description": "Exact text to find and replace"},
        "new_text": {"type": "string", "description": "Text to replace the old text with"},
    },
    "required": ["path", "old_text", "new_text"],
}


def _execute(env: Environment, args: dict[str, Any]) -> str:
    path_arg = args.get("path")
    if not isinstance(path_arg, str) or not path_arg:
        raise ToolError("path is required")

    working_dir = env.working_dir()
    normalized = ensure_path_in_workspace(path_arg, working_dir, "edit file")

    old_text = args.get("old_text")
    if not isinstance(old_text, str) or not old_text:
        raise ToolError("old_text is required")

    new_text = args.get("new_text")
    if not isinstance(new_text, str):
        raise ToolError("new_text is required")

    target = env.root / normalized
    try:
        raw = target.read_bytes().decode("utf-8", errors="surrogateescape")
    except OSError as err:
        raise path_error("read file", path_arg, normalized, working_dir, err) from err

    bom, content = strip_bom(raw)
    original_ending = detect_line_ending(content)
    normalized_content = normalize_to_lf(content)
    normalized_old = normalize_to_lf(old_text)
    normalized_new = normalize_to_lf(new_text)

    match = fuzzy_find_text(normalized_content, normalized_old)
    if not match.found:
        raise ToolError(
            f"could not find the exact text in {path_arg}. The old text must match "
            "exactly including all whitespace and newlines"
        )

    occurrences = normalize_for_fuzzy_match(normalized_content).count(
        normalize_for_fuzzy_match(normalized_old)
    )
    if occurrences > 1:
        raise ToolError(
            f"found {occurrences} occurrences of the text in {path_arg}. The text must "
            "be unique. Please provide more context to make it unique"
        )

    base = match.content_for_replacement
    end = match.index + match.match_length
    new_content = base[: match.index] + normalized_new + base[end:]

    if base == new_content:
        raise ToolError(
            f"no changes made to {path_arg}. The replacement produced identical content"
        )

    final = bom + restore_line_endings(new_content, original_ending)
    try:
        target.write_bytes(final.encode("utf-8", errors="surrogateescape"))
    except OSError as err:
        raise path_error("write file", path_arg, normalized, working_dir, err) from err

    result = f"Successfully replaced text in {path_arg}.\n\n{generate_diff_string(base, new_content)}"

    if env.diagnose_file is not None:
        diagnostics = env.diagnose_file(normalized)
        if diagnostics:
            result += "\n\n" + diagnostics

    return result


def edit_tool() -> Tool:
    """Create the ``edit`` tool."""
    return Tool(
        name="edit",
        description=_DESCRIPTION,
        parameters=_PARAMETERS,
        execute=_execute,
    )