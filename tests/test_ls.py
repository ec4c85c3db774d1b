import pytest

from wingman.fs.ls import ls_tool
from wingman.tool import Environment, ToolError


@pytest.fixture
def env(tmp_path):
    (tmp_path / "subdir").mkdir()
    (tmp_path / "file1.txt").write_text("content")
    (tmp_path / "file2.go").write_text("content")
    (tmp_path / ".hidden").write_text("content")
    (tmp_path / "subdir" / "nested.txt").write_text("content")
    return Environment(root=tmp_path)


def test_list_current_directory(env):
    result = ls_tool()(env, {})

    assert result == ".hidden\nfile1.txt\nfile2.go\nsubdir/"


def test_list_includes_hidden_files(env):
    assert ".hidden" in ls_tool()(env, {}).split("\n")


def test_list_subdirectory(env):
    assert ls_tool()(env, {"path": "subdir"}) == "nested.txt"


def test_list_empty_directory(env, tmp_path):
    (tmp_path / "empty").mkdir()

    assert ls_tool()(env, {"path": "empty"}) == "(empty directory)"


def test_list_with_limit(env):
    result = ls_tool()(env, {"path": ".", "limit": 2})

    assert result == ".hidden\nfile1.txt\n\n[2 entries limit reached]"


def test_list_absolute_path(env, tmp_path):
    assert ls_tool()(env, {"path": str(tmp_path / "subdir")}) == "nested.txt"


def test_list_non_existent_path(env):
    with pytest.raises(ToolError, match="stat path failed"):
        ls_tool()(env, {"path": "nonexistent"})


def test_list_file_instead_of_directory(env):
    with pytest.raises(ToolError, match="path is not a directory: file1.txt"):
        ls_tool()(env, {"path": "file1.txt"})


def test_list_outside_workspace(env):
    with pytest.raises(ToolError, match="cannot list directory"):
        ls_tool()(env, {"path": "/etc"})