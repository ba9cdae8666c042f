"""Tokens and the syntax tree produced by the parser."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import IntEnum


class TokenType(IntEnum):
    """Kinds of lexical tokens."""

    LPAREN = 0
    RPAREN = 1
    WORD = 2
    SINGLE_Q = 3
    DOUBLE_Q = 4
    PIPE = 5
    REDIRECT_IN = 6
    REDIRECT_OUT = 7
    APPEND = 8
    HEREDOC = 9
    AND = 10
    OR = 11


@dataclass
class Token:
    """A lexical token; ``has_space`` tells whether blank space preceded it."""

    value: str
    type: TokenType
    has_space: bool = False


class NodeType(IntEnum):
    """Kinds of nodes in the syntax tree."""

    COMMAND = 0
    PIPE = 1
    AND = 2
    OR = 3
    SUB = 4


@dataclass
class Command:
    """A simple command: its raw argument string and its redirections."""

    args: str | None = None
    input: str | None = None
    inputs: list[str] = field(default_factory=list)
    output: str | None = None
    outputs: list[str] = field(default_factory=list)
    append: bool = False
    heredoc: str | None = None
    heredocs: list[str] = field(default_factory=list)


@dataclass
class Redirections:
    """Redirections attached to a parenthesised subshell."""

    inputs: list[str] = field(default_factory=list)
    outputs: list[str] = field(default_factory=list)
    heredocs: list[str] = field(default_factory=list)
    append: bool = False


@dataclass
class AstNode:
    """A node of the syntax tree."""

    type: NodeType
    command: Command | None = None
    redirections: Redirections | None = None
    left: AstNode | None = None
    right: AstNode | None = None
    in_parens: int = 0

    def walk(self) -> Iterator[AstNode]:
        """Yield this node and its descendants, node first, then left, then right."""
        stack: list[AstNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)