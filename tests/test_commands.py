import pytest

from wingman.shell.commands import SAFE_COMMANDS, SAFE_SUBCOMMANDS, is_safe_command


@pytest.mark.parametrize(
    "command",
    [
        "ls -la",
        "  ls  ",
        "cat file.txt",
        "grep foo bar.txt",
        "/usr/bin/grep foo",
        "Get-Content file.txt",
        "get-content file.txt",
        "git status",
        "GIT STATUS",
        "git stash list",
        "docker ps -a",
        "python3 -c 'print(1)'",
        "kubectl get pods",
        "go vet ./...",
    ],
)
def test_safe_commands_are_recognised(command):
    assert is_safe_command(command) is True


@pytest.mark.parametrize(
    "command",
    [
        "",
        "   ",
        "rm -rf /",
        "git",
        "git push",
        "git stash pop",
        "npm install",
        "kubectl delete pod x",
        "python script.py",
        "terraform apply",
    ],
)
def test_unsafe_commands_are_rejected(command):
    assert is_safe_command(command) is False


def test_every_safe_command_alone_is_safe():
    assert all(is_safe_command(name) for name in SAFE_COMMANDS)


def test_every_subcommand_prefix_is_safe():
    for name, subs in SAFE_SUBCOMMANDS.items():
        for sub in subs:
            assert is_safe_command(f"{name} {sub}"), (name, sub)


def test_subcommand_tool_without_argument_is_not_safe():
    assert not any(is_safe_command(name) for name in SAFE_SUBCOMMANDS if name not in SAFE_COMMANDS)


def test_tables_are_lower_case():
    assert all(name == name.lower() for name in SAFE_COMMANDS)
    assert all(sub == sub.lower() for subs in SAFE_SUBCOMMANDS.values() for sub in subs)