"""A small bash-like shell engine: expansion, wildcards, redirections, heredocs, pipes, subshells and builtins."""

__version__ = "0.1.0"