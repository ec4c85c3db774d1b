"""Workspace tools for coding agents: file system, web search and shell."""

__version__ = "0.1.0"