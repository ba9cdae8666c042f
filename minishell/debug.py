"""Readable dumps of tokens and syntax trees."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from minishell.ast import AstNode, Command, NodeType, Redirections, Token


def format_tokens(tokens: Iterable[Token]) -> str:
    """Describe each token on its own line."""
    return "".join(
        f"Token: {token.value:<10} Type: {int(token.type)}\tspaceb : {int(token.has_space)}\n"
        for token in tokens
    )


def format_outputs(files: Iterable[str]) -> str:
    """List redirection file names on one line."""
    return "outputs list files : " + "".join(f"{name} " for name in files) + "\n"


def _indent(depth: int, is_last: bool) -> str:
    parts = []
    for i in range(depth):
        if i == depth - 1:
            parts.append("└── " if is_last else "├── ")
        else:
            parts.append("    ")
    return "".join(parts)


def _format_command(cmd: Command, depth: int, is_last: bool) -> list[str]:
    lines = [_indent(depth, is_last) + "COMMAND:\n"]
    inner = _indent(depth + 1, False)
    args = cmd.args if cmd.args is not None else "(null)"
    lines.append(f"{inner}ARGS: {args}\n")
    if cmd.inputs:
        lines.append(inner + "INPUT: " + format_outputs(cmd.inputs))
    if cmd.output:
        mode = "APPEND" if cmd.append else "TRUNCATE"
        lines.append(f"{inner}OUTPUT: {cmd.output} ({mode})\n")
        lines.append(inner + format_outputs(cmd.outputs))
    if cmd.heredocs:
        lines.append(inner + "HEREDOC: " + format_outputs(cmd.heredocs))
    return lines


def _format_node(node: AstNode | None, depth: int, is_last: bool) -> list[str]:
    if node is None:
        return []
    prefix = _indent(depth, is_last)
    lines: list[str] = []
    if node.type == NodeType.COMMAND:
        lines.append(f"{prefix}COMMAND NODE ({node.in_parens}):\n")
        lines.extend(_format_command(node.command or Command(), depth + 1, True))
    elif node.type == NodeType.PIPE:
        lines.append(f"{prefix}PIPE NODE({node.in_parens}):\n")
    elif node.type == NodeType.AND:
        lines.append(f"{prefix}AND NODE (&&)({node.in_parens}):\n")
    elif node.type == NodeType.OR:
        lines.append(f"{prefix}OR NODE (||)({node.in_parens}):\n")
    elif node.type == NodeType.SUB:
        redi = node.redirections or Redirections()
        lines.append(f"{prefix}SUBSHELL ()({node.in_parens}):\n")
        lines.append(prefix + format_outputs(redi.outputs))
        lines.append(prefix + format_outputs(redi.heredocs))
        lines.append(prefix + format_outputs(redi.inputs))
    else:
        lines.append(f"{prefix}UNKNOWN NODE: {int(node.type)}\n")
    if node.left is not None:
        lines.extend(_format_node(node.left, depth + 1, node.right is None))
    if node.right is not None:
        lines.extend(_format_node(node.right, depth + 1, True))
    return lines


def format_ast(root: AstNode | None) -> str:
    """Render the tree below ``root`` with box-drawing indentation."""
    return "".join(_format_node(root, 0, True))


def print_ast_tree(root: AstNode | None, file: TextIO | None = None) -> None:
    """Write a heading and the rendered tree to ``file`` (standard output by default)."""
    out = file if file is not None else sys.stdout
    out.write("AST TREE:\n" + format_ast(root))