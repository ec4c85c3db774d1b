# wingman

A set of workspace tools for coding agents. Each tool is a `wingman.tool.Tool`
with a `name`, a `description`, a JSON-schema style `parameters` map and an
`execute` callable. Calling a tool as `tool(env, args)` runs it inside the
workspace described by a `wingman.tool.Environment` and returns a string.
When a tool cannot do what it was asked, it raises `wingman.tool.ToolError`.

## Tools

File system tools, from `wingman.fs.tools.tools()` in this order:

- `read` – read a file with line numbers; `offset` (1-based) and `limit`
  select lines; output is cut at 2000 lines or 30KB with a notice telling
  how to continue
- `write` – write a file, creating parent directories as needed
- `edit` – replace one unique piece of text (`old_text` → `new_text`);
  when there is no exact match it retries ignoring trailing whitespace and
  folding smart quotes, dashes and special spaces to ASCII; keeps CRLF line
  endings and a leading BOM, refuses ambiguous or no-op edits, and reports
  a line diff
- `ls` – list a directory, sorted, with `/` after directories, dotfiles
  included (default limit 500 entries)
- `find` – find files by glob pattern (`**`, `?`, `[...]` and `{a,b}`
  supported), honouring `.gitignore` files and skipping `.git`,
  `node_modules`, `.svn`, `__pycache__`, `.venv`, `vendor` and symlinks
  (default limit 1000 results)
- `grep` – search file contents by regex or literal text, with `glob`,
  `ignoreCase`, `literal`, `context` and `limit` options; binary files are
  skipped by extension (default limit 100 matches)

Other tools:

- `wingman.search.search_tool()` – `search_online`, a web search through
  DuckDuckGo's HTML page; `wingman.search.parse_results()` extracts
  results from page lines
- `wingman.shell.shell.shell_tool()` – `shell`, runs a command with
  `$SHELL -c` (or `/bin/sh`), or PowerShell on Windows, in the workspace;
  stdout and stderr are combined, the default timeout is 120 seconds, and a
  non-zero exit code is appended to the output. Long output keeps its last
  2000 lines or 50KB; if `Environment.scratch` is set, the full output is
  saved there and its path is given

Paths given as absolute paths must lie inside the workspace; anything
outside it is refused.

`wingman.types` holds plain data classes for conversation messages
(`Message`, `Content`, `File`, `ToolCall`, `ToolResult`, `Usage`,
`MessageRole`).

## Usage

```python
from pathlib import Path

from wingman.tool import Environment, ToolError
from wingman.fs.tools import tools

env = Environment(root=Path("."))
by_name = {t.name: t for t in tools()}

print(by_name["ls"](env, {}))
print(by_name["grep"](env, {"pattern": "def main", "glob": "*.py"}))

try:
    by_name["read"](env, {"path": "/etc/passwd"})
except ToolError as err:
    print(err)  # cannot read file: path ... is outside workspace ...
```

The shell tool asks for approval through `Environment.prompt_user`, a
callable that gets the command line and returns `True` to allow it.
Commands known to be read-only (see `wingman.shell.commands.is_safe_command`)
run without asking:

```python
from wingman.shell.shell import shell_tool

env = Environment(root=Path("."), prompt_user=lambda prompt: True)
print(shell_tool()(env, {"command": "git status"}))
```

`write` and `edit` call `Environment.diagnose_file`, if set, with the path
they changed and append whatever non-empty text it returns.

## What this package does not do

It provides the tools only. There is no command-line program, no agent
loop, no model client and no code-intelligence or external tool-server
integration; wiring the tools to a model is left to the caller.

## Tests

```
pip install -e ".[test]"
pytest
```