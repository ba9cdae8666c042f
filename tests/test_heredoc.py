import io
import os

import pytest

from minishell import heredoc
from minishell.ast import AstNode, Command, NodeType
from minishell.environment import Environment
from minishell.heredoc import (
    apply_heredocs,
    collect_heredoc,
    prepare_heredocs,
    read_heredoc_body,
)
from minishell.redirection import open_last_input


@pytest.fixture
def prefix(tmp_path, monkeypatch):
    value = str(tmp_path / "hd_")
    monkeypatch.setattr(heredoc, "HEREDOC_PREFIX", value)
    return value


@pytest.fixture
def saved_stdin():
    copy = os.dup(0)
    yield
    os.dup2(copy, 0)
    os.close(copy)


def test_body_expands_variables():
    env = Environment.from_entries(["USER=alice"])
    body = read_heredoc_body(["hello $USER\n", "EOF\n"], "EOF", True, env)
    assert body == "hello alice\n"


def test_body_without_expansion_keeps_text():
    env = Environment.from_entries(["USER=alice"])
    body = read_heredoc_body(["hello $USER\n", "EOF\n"], "EOF", False, env)
    assert body == "hello $USER\n"


def test_body_stops_at_delimiter_and_leaves_rest():
    lines = iter(["one\n", "EOF\n", "after\n"])
    body = read_heredoc_body(lines, "EOF", False, Environment())
    assert body == "one\n"
    assert next(lines) == "after\n"


def test_body_without_delimiter_takes_everything():
    body = read_heredoc_body(["a\n", "EOFX\n", "b"], "EOF", False, Environment())
    assert body == "a\nEOFX\nb"


def test_body_status_expansion():
    env = Environment()
    env.status = 7
    assert read_heredoc_body(["$?\n", "END\n"], "END", True, env) == "7\n"


def test_collect_heredoc_writes_files(prefix):
    env = Environment.from_entries(["A=1"])
    command = Command(args="cat", heredocs=["EOF", "'END'"])
    source = io.StringIO("x $A\nEOF\ny $A\nEND\nrest\n")
    collect_heredoc(command, env, source)
    first, second = command.heredocs
    assert first.startswith(prefix) and second.startswith(prefix)
    assert first != second
    with open(first) as fh:
        assert fh.read() == "x 1\n"
    with open(second) as fh:
        assert fh.read() == "y $A\n"
    assert source.readline() == "rest\n"


def test_prepare_heredocs_walks_left_then_right(prefix):
    left = AstNode(NodeType.COMMAND, command=Command(args="cat", heredocs=["L"]))
    right = AstNode(NodeType.COMMAND, command=Command(args="cat", heredocs=["R"]))
    root = AstNode(NodeType.AND, left=left, right=right)
    prepare_heredocs(root, Environment(), ["left body\n", "L\n", "right body\n", "R\n"])
    with open(left.command.heredocs[0]) as fh:
        assert fh.read() == "left body\n"
    with open(right.command.heredocs[0]) as fh:
        assert fh.read() == "right body\n"


def test_prepare_heredocs_leaves_commands_without_heredocs(prefix):
    node = AstNode(NodeType.COMMAND, command=Command(args="ls"))
    prepare_heredocs(node, Environment(), ["unused\n"])
    assert node.command.heredocs == []


def test_apply_heredocs_uses_last_existing(tmp_path, saved_stdin):
    first = tmp_path / "one"
    last = tmp_path / "two"
    first.write_text("first")
    last.write_text("second")
    command = Command(heredocs=[str(first), str(last), str(tmp_path / "missing")])
    apply_heredocs(command)
    fd = open_last_input([command.heredocs[1]])
    try:
        expected = os.read(fd, 100)
    finally:
        os.close(fd)
    assert expected == b"second"
    assert os.read(0, 100) == expected