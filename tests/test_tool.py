import pytest

from wingman.tool import Environment, Tool, ToolError


def _echo(env, args):
    if "text" not in args:
        raise ToolError("text is required")
    return env.working_dir() + ":" + args["text"]


def test_environment_dirs(tmp_path):
    env = Environment(root=tmp_path, scratch=tmp_path / "s")
    assert env.working_dir() == str(tmp_path)
    assert env.scratch_dir() == str(tmp_path / "s")


def test_environment_without_scratch(tmp_path):
    assert Environment(root=str(tmp_path)).scratch_dir() == ""


def test_tool_call_runs_execute(tmp_path):
    tool = Tool(name="echo", description="Echo", execute=_echo)
    env = Environment(root=tmp_path)
    assert tool(env, {"text": "x"}) == str(tmp_path) + ":x"
    assert tool.hidden is False


def test_tool_error_propagates(tmp_path):
    tool = Tool(name="echo", description="Echo", execute=_echo)
    with pytest.raises(ToolError, match="text is required"):
        tool(Environment(root=tmp_path), {})