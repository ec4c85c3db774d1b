import pytest

from wingman.fs.read import read_tool
from wingman.tool import Environment, ToolError


@pytest.fixture
def env(tmp_path):
    (tmp_path / "test.txt").write_bytes(b"line1\nline2\nline3\nline4\nline5")
    return Environment(root=tmp_path)


def test_read_entire_file(env):
    result = read_tool()(env, {"path": "test.txt"})

    assert result == (
        "     1\tline1\n     2\tline2\n     3\tline3\n     4\tline4\n     5\tline5"
    )


def test_read_with_offset(env):
    result = read_tool()(env, {"path": "test.txt", "offset": 3.0})

    assert "line1" not in result
    assert "line2" not in result
    assert result == "     3\tline3\n     4\tline4\n     5\tline5"


def test_read_with_limit(env):
    result = read_tool()(env, {"path": "test.txt", "limit": 2.0})

    assert result == (
        "     1\tline1\n     2\tline2\n\n[Lines 1-2 of 5. Use offset=3 to continue]"
    )


def test_read_non_existent_file(env):
    with pytest.raises(ToolError, match="read file failed"):
        read_tool()(env, {"path": "nonexistent.txt"})


def test_read_outside_workspace_rejected(env):
    with pytest.raises(ToolError, match="outside workspace"):
        read_tool()(env, {"path": "/etc/passwd"})


def test_read_absolute_path_inside_workspace(env, tmp_path):
    result = read_tool()(env, {"path": str(tmp_path / "test.txt")})

    assert "line1" in result


def test_read_offset_beyond_end(env):
    with pytest.raises(ToolError, match=r"offset 10 is beyond end of file \(5 lines\)"):
        read_tool()(env, {"path": "test.txt", "offset": 10})


def test_read_requires_path(env):
    with pytest.raises(ToolError, match="path is required"):
        read_tool()(env, {})


def test_read_truncates_by_lines(tmp_path):
    (tmp_path / "big.txt").write_text("\n".join("x" for _ in range(2500)))

    result = read_tool()(Environment(root=tmp_path), {"path": "big.txt"})

    assert result.endswith("\n\n[Lines 1-2000 of 2500. Use offset=2001 to continue]")
    assert result.startswith("     1\tx\n")


def test_read_forward_slash_paths(tmp_path):
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)
    (nested / "new.txt").write_text("test")

    result = read_tool()(Environment(root=tmp_path), {"path": "a/b/c/new.txt"})

    assert result == "     1\ttest"