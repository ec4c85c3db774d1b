"""Recognition of read-only shell commands that need no user approval."""

from __future__ import annotations

import os

SAFE_COMMANDS = frozenset(
    name.lower()
    for name in (
        # Unix: search & find
        "rg", "grep", "egrep", "fgrep", "find", "fd", "locate", "which", "whereis", "type",
        # Unix: list & view
        "ls", "cat", "head", "tail", "less", "more", "bat", "tree", "file", "stat", "wc",
        # Unix: text processing
        "awk", "sed", "cut", "sort", "uniq", "tr", "diff", "comm", "join", "column",
        "jq", "yq", "xq",
        # Unix: path utilities
        "pwd", "realpath", "dirname", "basename", "readlink",
        # Unix: system info
        "echo", "env", "printenv", "whoami", "hostname", "uname", "date", "uptime",
        "df", "du", "free", "ps", "top", "htop", "id", "groups",
        # Unix: help
        "man", "help",
        # Version info
        "gofmt", "rustc", "javac", "ruby", "php",
        # Windows cmd.exe
        "findstr", "where", "dir", "fc", "comp", "cd", "set", "time", "ver",
        "systeminfo", "tasklist",
        # PowerShell cmdlets
        "Get-Content", "Get-ChildItem", "Get-Location", "Get-Item", "Get-ItemProperty",
        "Get-Process", "Get-Service", "Get-Command", "Get-Help", "Get-Alias",
        "Get-Variable", "Get-Date", "Get-Host", "Get-History", "Get-FileHash", "Get-Acl",
        "Select-String", "Select-Object", "Where-Object", "ForEach-Object",
        "Format-List", "Format-Table", "Format-Wide", "Out-String", "Test-Path",
        "Test-Connection", "Measure-Object", "Measure-Command", "Compare-Object",
        "Sort-Object", "Group-Object", "Resolve-Path", "Split-Path", "Join-Path",
        "ConvertTo-Json", "ConvertFrom-Json",
        # PowerShell aliases
        "gc", "gci", "gl", "gi", "gps", "gsv", "gcm", "gal", "gv", "sls",
        "ft", "fl", "fw", "oh",
    )
)

_PYTHON = ("-V", "--version", "-h", "--help", "-m py_compile", "-c")
_PIP = ("list", "show", "freeze", "check", "config list", "config get", "help", "version", "--version")
_TERRAFORM = (
    "version", "providers", "state list", "state show", "output", "graph", "show",
    "validate", "fmt", "help", "-version", "-help",
)

_SUBCOMMANDS: dict[str, tuple[str, ...]] = {
    "go": ("doc", "env", "fmt", "list", "version", "vet", "help"),
    "git": (
        "status", "log", "diff", "show", "branch", "tag", "remote", "config", "ls-files",
        "ls-tree", "rev-parse", "describe", "shortlog", "blame", "grep", "reflog",
        "stash list", "help", "version",
    ),
    "gh": (
        "status", "repo view", "pr list", "pr view", "pr status", "pr diff", "issue list",
        "issue view", "issue status", "gist list", "gist view", "release list",
        "release view", "run list", "run view", "workflow list", "workflow view", "api",
        "help", "version",
    ),
    "npm": (
        "list", "ls", "ll", "la", "view", "info", "show", "outdated", "search", "help",
        "config list", "config get", "version", "explain", "why", "fund", "audit",
    ),
    "yarn": (
        "list", "info", "why", "outdated", "licenses", "config list", "config get",
        "help", "version", "audit",
    ),
    "pnpm": (
        "list", "ls", "ll", "why", "outdated", "licenses", "config list", "config get",
        "help", "version", "audit",
    ),
    "bun": ("pm ls", "pm cache", "help", "version"),
    "deno": ("info", "doc", "types", "help", "version", "eval"),
    "python": _PYTHON,
    "python3": _PYTHON,
    "pip": _PIP,
    "pip3": _PIP,
    "uv": ("pip list", "pip show", "pip freeze", "pip check", "version", "help"),
    "poetry": (
        "show", "version", "env info", "env list", "config list", "config get", "help",
        "about", "check",
    ),
    "pdm": ("list", "show", "info", "config", "venv list", "help", "version"),
    "cargo": (
        "tree", "metadata", "version", "search", "help", "pkgid", "verify-project",
        "read-manifest", "locate-project", "--version", "-V",
    ),
    "rustup": (
        "show", "check", "component list", "target list", "toolchain list", "help",
        "version", "--version",
    ),
    "gem": (
        "list", "search", "info", "specification", "dependency", "environment", "help",
        "version", "--version",
    ),
    "bundle": (
        "list", "show", "info", "outdated", "check", "version", "config list",
        "config get", "help", "viz",
    ),
    "java": ("-version", "--version", "-help", "--help"),
    "mvn": (
        "dependency:tree", "dependency:list", "dependency:analyze", "help:describe",
        "help:effective-pom", "help:effective-settings",
        "versions:display-dependency-updates", "versions:display-plugin-updates",
        "-v", "-version", "--version", "help",
    ),
    "gradle": (
        "dependencies", "projects", "tasks", "properties", "help", "-v", "-version",
        "--version",
    ),
    "dotnet": (
        "list", "nuget list", "tool list", "workload list", "sdk check", "help",
        "--version", "--info", "--list-sdks", "--list-runtimes",
    ),
    "composer": (
        "show", "info", "search", "outdated", "licenses", "depends", "why", "prohibits",
        "why-not", "config list", "diagnose", "help", "list", "about", "--version", "-V",
    ),
    "node": ("-v", "--version", "-h", "--help", "-e", "--eval", "-p", "--print"),
    "npx": ("which", "--version", "-v"),
    "docker": (
        "version", "--version", "-v", "info", "ps", "container ls", "container list",
        "images", "image ls", "image list", "volume ls", "volume list", "volume inspect",
        "network ls", "network list", "network inspect", "logs", "inspect", "top",
        "stats", "diff", "history", "port", "events", "config ls", "config inspect",
        "secret ls", "secret inspect", "system df", "system info", "context ls",
        "context show", "manifest inspect", "search", "help",
    ),
    "docker-compose": (
        "ps", "config", "images", "logs", "top", "events", "version", "--version", "help",
    ),
    "kubectl": (
        "version", "--version", "get", "describe", "logs", "explain", "api-resources",
        "api-versions", "cluster-info", "top", "config view", "config get-contexts",
        "config current-context", "auth can-i", "auth whoami", "diff", "events", "help",
    ),
    "helm": (
        "version", "--version", "list", "ls", "status", "get", "get all", "get hooks",
        "get manifest", "get notes", "get values", "history", "show", "show all",
        "show chart", "show crds", "show readme", "show values", "search hub",
        "search repo", "repo list", "env", "help",
    ),
    "kustomize": ("build", "cfg", "version", "help"),
    "terraform": _TERRAFORM,
    "tofu": _TERRAFORM,
}

SAFE_SUBCOMMANDS: dict[str, tuple[str, ...]] = {
    name.lower(): tuple(sub.lower() for sub in subs)
    for name, subs in _SUBCOMMANDS.items()
    if subs
}


def _base_name(word: str) -> str:
    trimmed = word.rstrip("/" + os.sep)
    if not trimmed:
        return os.sep
    return os.path.basename(trimmed)


def is_safe_command(command: str) -> bool:
    """True if the command starts with a known read-only command or subcommand."""
    command = command.strip()
    words = command.split()
    if not words:
        return False

    name = _base_name(words[0]).lower()
    if name in SAFE_COMMANDS:
        return True

    subcommands = SAFE_SUBCOMMANDS.get(name)
    if subcommands is None or len(words) < 2:
        return False

    rest = command[len(words[0]):].strip().lower()
    return any(rest.startswith(sub) for sub in subcommands)