"""Path, text and traversal helpers shared by the file-system tools."""

from __future__ import annotations

import difflib
import fnmatch
import os
import posixpath
import re
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator

from wingman.tool import ToolError

DEFAULT_MAX_LINES = 2000
DEFAULT_MAX_BYTES = 30 * 1024

DEFAULT_IGNORE_DIRS = frozenset(
    {".git", "node_modules", ".svn", "__pycache__", ".venv", "vendor"}
)

BINARY_EXTENSIONS = frozenset(
    {
        ".exe", ".dll", ".so", ".dylib", ".bin", ".dat", ".db", ".sqlite",
        ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".svg",
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx",
        ".zip", ".tar", ".gz", ".rar", ".7z", ".bz2", ".xz",
        ".mp3", ".mp4", ".avi", ".mov", ".wav", ".flac", ".ogg", ".webm",
        ".woff", ".woff2", ".ttf", ".otf", ".eot",
        ".pyc", ".pyo", ".class", ".o", ".a",
    }
)

_FUZZY_TABLE = str.maketrans(
    {
        **dict.fromkeys("\u2018\u2019\u201a\u201b", "'"),
        **dict.fromkeys("\u201c\u201d\u201e\u201f", '"'),
        **dict.fromkeys("\u2010\u2011\u2012\u2013\u2014\u2015\u2212", "-"),
        **dict.fromkeys(
            "\u00a0\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
            "\u202f\u205f\u3000",
            " ",
        ),
    }
)


def _from_slash(path: str) -> str:
    return path.replace("/", os.sep) if os.sep != "/" else path


def _to_slash(path: str) -> str:
    return path.replace(os.sep, "/") if os.sep != "/" else path


def _clean_slash(path: str) -> str:
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _rel(base: str, target: str) -> str | None:
    if os.path.isabs(base) != os.path.isabs(target):
        return None
    try:
        return os.path.relpath(target, base)
    except ValueError:
        return None


def normalize_path(path: str, working_dir: str) -> str:
    """Turn an absolute path inside the workspace into a relative one."""
    if not os.path.isabs(path):
        return _from_slash(path)
    rel, ok = rel_path_within_workspace(path, working_dir)
    return rel if ok else _from_slash(path)


def normalize_path_fs(path: str, working_dir: str) -> str:
    """Normalize a path and express it with forward slashes."""
    return _clean_slash(_to_slash(normalize_path(path, working_dir)))


def _outside_error(action: str, path_arg: str, working_dir: str) -> ToolError:
    return ToolError(
        f'cannot {action}: path "{path_arg}" is outside workspace "{working_dir}"'
    )


def ensure_path_in_workspace(path_arg: str, working_dir: str, action: str) -> str:
    """Return the normalized path, raising ToolError if it leaves the workspace."""
    if is_outside_workspace(path_arg, working_dir):
        raise _outside_error(action, path_arg, working_dir)
    return normalize_path(path_arg, working_dir)


def ensure_path_in_workspace_fs(path_arg: str, working_dir: str, action: str) -> str:
    """Like ensure_path_in_workspace, with a forward-slash result."""
    if is_outside_workspace(path_arg, working_dir):
        raise _outside_error(action, path_arg, working_dir)
    return normalize_path_fs(path_arg, working_dir)


def is_outside_workspace(path: str, working_dir: str) -> bool:
    """True if an absolute path does not lie within working_dir."""
    if not os.path.isabs(path):
        return False
    return not rel_path_within_workspace(path, working_dir)[1]


def rel_path_within_workspace(abs_path: str, working_dir: str) -> tuple[str, bool]:
    """Relative path from working_dir to abs_path and whether it lies inside."""
    if not os.path.isabs(abs_path):
        return _from_slash(abs_path), True

    abs_clean = clean_path(abs_path)
    wd_clean = clean_path(working_dir)
    comp_path = normalize_path_for_comparison(abs_clean)
    comp_wd = normalize_path_for_comparison(wd_clean)
    sep = os.sep

    if comp_path == comp_wd:
        return ".", True

    prefix = comp_wd if comp_wd.endswith(sep) else comp_wd + sep
    if comp_path.startswith(prefix):
        if wd_clean.endswith(sep):
            return abs_clean[len(wd_clean):], True
        return abs_clean[len(wd_clean) + len(sep):], True

    rel_comp = _rel(comp_wd, comp_path)
    if rel_comp is None:
        return "", False
    if rel_comp == ".":
        return ".", True
    if rel_comp == ".." or rel_comp.startswith(".." + sep):
        return "", False

    rel_orig = _rel(wd_clean, abs_clean)
    if rel_orig is not None:
        if rel_orig == ".":
            return ".", True
        if rel_orig != ".." and not rel_orig.startswith(".." + sep):
            return rel_orig, True
    return rel_comp, True


def clean_path(path: str) -> str:
    """Lexically clean a path, using native separators."""
    if not path:
        return path
    cleaned = os.path.normpath(_from_slash(path))
    if os.sep == "/" and cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def normalize_path_for_comparison(path: str) -> str:
    """Lower-case paths on case-insensitive platforms."""
    if sys.platform in ("win32", "darwin"):
        return path.lower()
    return path


def path_error(
    action: str, original_path: str, normalized_path: str, working_dir: str, err: object
) -> ToolError:
    """Build a descriptive error for a failed path operation."""
    if is_outside_workspace(original_path, working_dir):
        return ToolError(
            f'{action} failed: path "{original_path}" is outside workspace "{working_dir}"'
        )
    if original_path != normalized_path:
        return ToolError(
            f"{action} failed: {normalized_path} (resolved from {original_path}): {err}"
        )
    return ToolError(f"{action} failed: {original_path}: {err}")


def truncate_head(content: str) -> tuple[str, bool, bool]:
    """Keep the head of content; returns (text, cut_by_lines, cut_by_bytes)."""
    lines = content.split("\n")
    by_lines = len(lines) > DEFAULT_MAX_LINES
    result = "\n".join(lines[:DEFAULT_MAX_LINES])
    encoded = result.encode("utf-8")
    by_bytes = len(encoded) > DEFAULT_MAX_BYTES
    if by_bytes:
        result = encoded[:DEFAULT_MAX_BYTES].decode("utf-8", errors="ignore")
    return result, by_lines, by_bytes


def detect_line_ending(content: str) -> str:
    """Return the line ending of the first line break."""
    lf = content.find("\n")
    crlf = content.find("\r\n")
    if lf == -1 or crlf == -1:
        return "\n"
    return "\r\n" if crlf < lf else "\n"


def normalize_to_lf(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def restore_line_endings(text: str, ending: str) -> str:
    return text.replace("\n", "\r\n") if ending == "\r\n" else text


def strip_bom(content: str) -> tuple[str, str]:
    """Split a leading byte-order mark from content."""
    if content.startswith("\ufeff"):
        return "\ufeff", content[1:]
    return "", content


def map_fuzzy_index_to_original(original: str, fuzzy: str, fuzzy_idx: int) -> int:
    """Map a position in the fuzzy-normalized text back to the original."""
    if fuzzy_idx <= 0:
        return 0
    if fuzzy_idx >= len(fuzzy):
        return len(original)
    return min(fuzzy_idx, len(original))


def normalize_for_fuzzy_match(text: str) -> str:
    """Strip trailing blanks per line and fold typographic characters to ASCII."""
    text = "\n".join(line.rstrip(" \t") for line in text.split("\n"))
    return text.translate(_FUZZY_TABLE)


@dataclass
class FuzzyMatch:
    """Where old text was found in content."""

    found: bool
    index: int
    match_length: int
    used_fuzzy_match: bool
    content_for_replacement: str


def fuzzy_find_text(content: str, old_text: str) -> FuzzyMatch:
    """Find old_text exactly, falling back to a fuzzy-normalized search."""
    exact = content.find(old_text)
    if exact != -1:
        return FuzzyMatch(True, exact, len(old_text), False, content)

    fuzzy_content = normalize_for_fuzzy_match(content)
    fuzzy_old = normalize_for_fuzzy_match(old_text)
    fuzzy_index = fuzzy_content.find(fuzzy_old)
    if fuzzy_index == -1:
        return FuzzyMatch(False, -1, 0, False, content)

    start = map_fuzzy_index_to_original(content, fuzzy_content, fuzzy_index)
    end = map_fuzzy_index_to_original(
        content, fuzzy_content, fuzzy_index + len(fuzzy_old)
    )
    return FuzzyMatch(True, start, end - start, True, content)


def generate_diff_string(old_content: str, new_content: str) -> str:
    """Line diff listing removed ('-N') and added ('+N') lines."""
    old_lines = old_content.splitlines(keepends=True)
    new_lines = new_content.splitlines(keepends=True)
    matcher = difflib.SequenceMatcher(None, old_lines, new_lines, autojunk=False)
    out: list[str] = []
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag in ("delete", "replace"):
            for number, line in enumerate(old_lines[i1:i2], start=i1 + 1):
                out.append(f"-{number} {line.rstrip(chr(10))}\n")
        if tag in ("insert", "replace"):
            for number, line in enumerate(new_lines[j1:j2], start=j1 + 1):
                out.append(f"+{number} {line.rstrip(chr(10))}\n")
    return "".join(out)


def is_binary_file(path: str) -> bool:
    """Guess from the extension whether a file is binary."""
    name = os.path.basename(_from_slash(path))
    dot = name.rfind(".")
    return dot >= 0 and name[dot:].lower() in BINARY_EXTENSIONS


def rel_path_slash(base: str, target: str) -> str:
    """Relative path from base to target, with forward slashes."""
    rel = _rel(_from_slash(base), _from_slash(target))
    return target if rel is None else _to_slash(rel)


def rel_path_from_base(base: str, path: str) -> str:
    return path if base == "." else rel_path_slash(base, path)


def path_domain(fs_path: str) -> list[str]:
    """Split a slash path into components; empty for the root."""
    if fs_path in ("", "."):
        return []
    return fs_path.split("/")


def _translate_glob(pattern: str) -> str:
    out: list[str] = []
    depth = 0
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**", i) and (i == 0 or pattern[i - 1] == "/"):
                j = i + 2
                if j < n and pattern[j] == "/":
                    out.append("(?:.*/)?")
                    i = j + 1
                    continue
                if j == n:
                    out.append(".*")
                    i = j
                    continue
            while i < n and pattern[i] == "*":
                i += 1
            out.append("[^/]*")
            continue
        if c == "?":
            out.append("[^/]")
        elif c == "[":
            j = i + 1
            negate = j < n and pattern[j] in "!^"
            if negate:
                j += 1
            if j < n and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close == -1:
                raise ValueError(f"bad glob pattern: {pattern}")
            body = pattern[i + 1 + negate:close].replace("\\", "\\\\")
            out.append(("[^" if negate else "[") + body + "]")
            i = close
        elif c == "{":
            depth += 1
            out.append("(?:")
        elif c == "}" and depth:
            depth -= 1
            out.append(")")
        elif c == "," and depth:
            out.append("|")
        elif c == "\\" and i + 1 < n:
            i += 1
            out.append(re.escape(pattern[i]))
        else:
            out.append(re.escape(c))
        i += 1
    if depth:
        raise ValueError(f"bad glob pattern: {pattern}")
    return "(?s:" + "".join(out) + r")\Z"


def glob_match(pattern: str, name: str) -> bool:
    """Match a slash path against a glob supporting **, braces and classes.

    Raises ValueError for a malformed pattern.
    """
    return re.match(_translate_glob(pattern), name) is not None


@dataclass
class GitignorePattern:
    """One line of a .gitignore file, scoped to the directory it came from."""

    pattern: list[str]
    domain: list[str] = field(default_factory=list)
    inclusion: bool = False
    dir_only: bool = False
    is_glob: bool = False

    @classmethod
    def parse(cls, line: str, domain: list[str] | None = None) -> GitignorePattern:
        inclusion = line.startswith("!")
        if inclusion:
            line = line[1:]
        if not line.endswith("\\ "):
            line = line.rstrip(" ")
        dir_only = line.endswith("/")
        if dir_only:
            line = line[:-1]
        return cls(
            pattern=line.split("/"),
            domain=list(domain or []),
            inclusion=inclusion,
            dir_only=dir_only,
            is_glob="/" in line,
        )

    def match(self, parts: list[str], is_dir: bool) -> bool | None:
        """None if the pattern does not apply, else True for excluded, False for re-included."""
        if len(parts) <= len(self.domain) or parts[: len(self.domain)] != self.domain:
            return None
        rest = parts[len(self.domain):]
        matched = self._glob_match(rest, is_dir) if self.is_glob else self._name_match(rest, is_dir)
        if not matched:
            return None
        return not self.inclusion

    def _name_match(self, parts: list[str], is_dir: bool) -> bool:
        for index, name in enumerate(parts):
            if not fnmatch.fnmatchcase(name, self.pattern[0]):
                continue
            return not (self.dir_only and not is_dir and index == len(parts) - 1)
        return False

    def _glob_match(self, parts: list[str], is_dir: bool) -> bool:
        matched = False
        can_traverse = False
        remaining = list(parts)
        for index, segment in enumerate(self.pattern):
            if segment == "":
                can_traverse = False
                continue
            if segment == "**":
                if index == len(self.pattern) - 1:
                    break
                can_traverse = True
                continue
            if "**" in segment or not remaining:
                return False
            if can_traverse:
                can_traverse = False
                while remaining:
                    element = remaining.pop(0)
                    if fnmatch.fnmatchcase(element, segment):
                        matched = True
                        break
                    if not remaining:
                        matched = False
            else:
                if not fnmatch.fnmatchcase(remaining[0], segment):
                    return False
                matched = True
                remaining.pop(0)
        if matched and self.dir_only and not is_dir and not remaining:
            matched = False
        return matched


def _is_ignored(patterns: list[GitignorePattern], parts: list[str], is_dir: bool) -> bool:
    for pattern in reversed(patterns):
        result = pattern.match(parts, is_dir)
        if result is not None:
            return result
    return False


def load_gitignore(root: Path | str, domain: list[str] | None) -> list[GitignorePattern]:
    """Read the .gitignore in the directory named by domain under root."""
    domain = list(domain or [])
    path = Path(root).joinpath(*domain, ".gitignore")
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return []
    return [
        GitignorePattern.parse(line, domain)
        for line in text.splitlines()
        if line.strip() and not line.strip().startswith("#")
    ]


def walk_workspace(root: Path | str, start: str = ".") -> Iterator[tuple[str, str]]:
    """Yield (path, rel_path) for files under start, honouring .gitignore.

    Paths use forward slashes; ``path`` is relative to root and ``rel_path``
    to start. Symlinks and common dependency directories are skipped.
    """
    root = Path(root)
    patterns = load_gitignore(root, [])

    def visit(fs_path: str, is_dir: bool) -> Iterator[tuple[str, str]]:
        name = posixpath.basename(fs_path) or fs_path
        if is_dir and name in DEFAULT_IGNORE_DIRS:
            return
        rel = rel_path_from_base(start, fs_path)
        parts = rel.split("/")
        if not is_dir:
            if not _is_ignored(patterns, parts, False):
                yield fs_path, rel
            return
        if _is_ignored(patterns, parts, True):
            return
        patterns.extend(load_gitignore(root, path_domain(fs_path)))
        try:
            with os.scandir(root / fs_path) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError:
            return
        for entry in entries:
            if entry.is_symlink():
                continue
            child = entry.name if fs_path == "." else f"{fs_path}/{entry.name}"
            yield from visit(child, entry.is_dir(follow_symlinks=False))

    target = root / start
    if not target.exists():
        return
    yield from visit(start, target.is_dir())