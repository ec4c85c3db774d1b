"""Conversation data exchanged between the agent and a model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class MessageRole(str, Enum):
    """Who authored a message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass
class File:
    """An attached file; ``data`` is a base64 data URL."""

    name: str
    data: str


@dataclass
class ToolCall:
    """A request from the model to run a tool."""

    id: str
    name: str
    args: str


@dataclass
class ToolResult:
    """The outcome of running a tool."""

    id: str
    name: str
    args: str
    content: str


@dataclass
class Content:
    """One part of a message: text, a file, a tool call or a tool result."""

    text: str = ""
    file: File | None = None
    tool_call: ToolCall | None = None
    tool_result: ToolResult | None = None


@dataclass
class Message:
    """A message made of content parts."""

    role: MessageRole
    content: list[Content] = field(default_factory=list)


@dataclass
class Usage:
    """Token counts of a model call."""

    input_tokens: int = 0
    output_tokens: int = 0