"""Tool definition and the environment tools run in."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable


class ToolError(Exception):
    """Raised when a tool cannot do what it was asked."""


@dataclass
class Environment:
    """The workspace and callbacks available to tools."""

    root: Path
    scratch: Path | None = None
    date: str = ""
    os: str = ""
    arch: str = ""
    prompt_user: Callable[[str], bool] | None = None
    diagnose_file: Callable[[str], str] | None = None

    def __post_init__(self) -> None:
        self.root = Path(self.root)
        if self.scratch is not None:
            self.scratch = Path(self.scratch)

    def working_dir(self) -> str:
        return str(self.root)

    def scratch_dir(self) -> str:
        return "" if self.scratch is None else str(self.scratch)


@dataclass
class Tool:
    """A named, described operation a model may call."""

    name: str
    description: str
    execute: Callable[[Environment, dict[str, Any]], str]
    parameters: dict[str, Any] = field(default_factory=dict)
    hidden: bool = False

    def __call__(self, env: Environment, args: dict[str, Any]) -> str:
        return self.execute(env, args)