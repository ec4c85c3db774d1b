import pytest

from wingman.fs.edit import edit_tool
from wingman.tool import Environment, ToolError


@pytest.fixture
def env(tmp_path):
    return Environment(root=tmp_path)


def test_simple_edit(env, tmp_path):
    (tmp_path / "edit_test.txt").write_bytes(b"hello world")

    result = edit_tool()(env, {"path": "edit_test.txt", "old_text": "world", "new_text": "universe"})

    assert result == (
        "Successfully replaced text in edit_test.txt.\n\n"
        "-1 hello world\n+1 hello universe\n"
    )
    assert (tmp_path / "edit_test.txt").read_bytes() == b"hello universe"


def test_edit_preserves_crlf(env, tmp_path):
    (tmp_path / "crlf_test.txt").write_bytes(b"line1\r\nline2\r\nline3")

    result = edit_tool()(env, {"path": "crlf_test.txt", "old_text": "line2", "new_text": "modified"})

    assert result.startswith("Successfully replaced text in crlf_test.txt.\n\n")
    assert "modified" in result
    assert "\r" not in result
    assert (tmp_path / "crlf_test.txt").read_bytes() == b"line1\r\nmodified\r\nline3"


def test_edit_fuzzy_trailing_whitespace(env, tmp_path):
    (tmp_path / "fuzzy_test.txt").write_bytes(b"hello   \nworld")

    result = edit_tool()(
        env, {"path": "fuzzy_test.txt", "old_text": "hello\nworld", "new_text": "goodbye\nworld"}
    )

    assert result.startswith("Successfully replaced text in fuzzy_test.txt.\n\n")
    assert "goodbye" in result
    assert (tmp_path / "fuzzy_test.txt").read_bytes() == b"goodbye\nworld"


def test_edit_non_unique_match(env, tmp_path):
    (tmp_path / "duplicate_test.txt").write_bytes(b"foo bar foo")

    with pytest.raises(ToolError, match="found 2 occurrences"):
        edit_tool()(env, {"path": "duplicate_test.txt", "old_text": "foo", "new_text": "baz"})
    assert (tmp_path / "duplicate_test.txt").read_bytes() == b"foo bar foo"


def test_edit_no_match(env, tmp_path):
    (tmp_path / "nomatch_test.txt").write_bytes(b"hello world")

    with pytest.raises(ToolError, match="could not find the exact text"):
        edit_tool()(env, {"path": "nomatch_test.txt", "old_text": "xyz", "new_text": "abc"})


def test_edit_identical_replacement(env, tmp_path):
    (tmp_path / "same.txt").write_bytes(b"hello world")

    with pytest.raises(ToolError, match="no changes made"):
        edit_tool()(env, {"path": "same.txt", "old_text": "world", "new_text": "world"})


def test_edit_preserves_bom(env, tmp_path):
    (tmp_path / "bom.txt").write_bytes("\ufeffabc".encode("utf-8"))

    result = edit_tool()(env, {"path": "bom.txt", "old_text": "b", "new_text": "x"})

    assert result == "Successfully replaced text in bom.txt.\n\n-1 abc\n+1 axc\n"
    assert (tmp_path / "bom.txt").read_bytes() == "\ufeffaxc".encode("utf-8")


def test_edit_appends_diagnostics(tmp_path):
    env = Environment(root=tmp_path, diagnose_file=lambda path: f"diag {path}")
    (tmp_path / "d.txt").write_bytes(b"one")

    result = edit_tool()(env, {"path": "d.txt", "old_text": "one", "new_text": "two"})

    assert result.endswith("\n\ndiag d.txt")


def test_edit_requires_arguments(env):
    with pytest.raises(ToolError, match="path is required"):
        edit_tool()(env, {"old_text": "a", "new_text": "b"})
    with pytest.raises(ToolError, match="old_text is required"):
        edit_tool()(env, {"path": "x.txt", "old_text": "", "new_text": "b"})
    with pytest.raises(ToolError, match="new_text is required"):
        edit_tool()(env, {"path": "x.txt", "old_text": "a"})


def test_edit_outside_workspace(env):
    with pytest.raises(ToolError, match="cannot edit file: .*outside workspace"):
        edit_tool()(env, {"path": "/etc/passwd", "old_text": "a", "new_text": "b"})


def test_edit_missing_file(env):
    with pytest.raises(ToolError, match="read file failed"):
        edit_tool()(env, {"path": "missing.txt", "old_text": "a", "new_text": "b"})