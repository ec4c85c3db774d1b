"""The set of file-system tools."""

from __future__ import annotations

from wingman.fs.edit import edit_tool
from wingman.fs.find import find_tool
from wingman.fs.grep import grep_tool
from wingman.fs.ls import ls_tool
from wingman.fs.read import read_tool
from wingman.fs.write import write_tool
from wingman.tool import Tool


def tools() -> list[Tool]:
    """All file-system tools, in their presentation order."""
    return [read_tool(), write_tool(), edit_tool(), ls_tool(), find_tool(), grep_tool()]