"""Execution of syntax trees: commands, pipes, logical operators and subshells."""

from __future__ import annotations

import os
import signal
import sys
from collections.abc import Callable, Iterator
from contextlib import ExitStack, contextmanager
from typing import NoReturn, TextIO

from minishell.ast import AstNode, Command, NodeType
from minishell.builtins import ShellExit, is_builtin, run_builtin
from minishell.environment import Environment, parse_entry
from minishell.errors import print_error
from minishell.expander import expand_args, expand_env_vars
from minishell.heredoc import apply_heredocs, prepare_heredocs
from minishell.pathsearch import check_if_folder, search_command
from minishell.quotes import normalize_quoted_args, remove_first_layer_quotes
from minishell.redirection import (
    RedirectionError,
    open_last_input,
    open_last_output,
    redirect_input,
    redirect_output,
)
from minishell.wildcard import expand_line

BUILTIN_RAN = 5
"""Result of a command node that ran a builtin in the shell process."""


def _env_mapping(env_list: list[str]) -> dict[str, str]:
    return dict(parse_entry(entry) for entry in env_list)


def execute_local_executable(path: str, args: list[str], env_list: list[str]) -> NoReturn:
    """Replace the process with the program at ``path``.

    Raises :class:`ShellExit` with 127 when the file is missing and 126 when it
    is not executable or cannot be started.
    """
    if not os.access(path, os.F_OK):
        print_error(path, ": No such file or directory")
        raise ShellExit(127)
    if not os.access(path, os.X_OK):
        print_error(path, ": Permission denied")
        raise ShellExit(126)
    try:
        os.execve(path, args, _env_mapping(env_list))
    except OSError:
        print_error("execve")
    raise ShellExit(126)


@contextmanager
def _ignoring_interrupts() -> Iterator[None]:
    saved = []
    try:
        for sig in (signal.SIGQUIT, signal.SIGINT):
            saved.append((sig, signal.signal(sig, signal.SIG_IGN)))
    except ValueError:
        pass
    try:
        yield
    finally:
        for sig, handler in saved:
            signal.signal(sig, handler if handler is not None else signal.SIG_DFL)


def _flush_standard_streams() -> None:
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            pass


def _wait_status(pid: int) -> int:
    _, status = os.waitpid(pid, 0)
    if os.WIFSIGNALED(status):
        sig = os.WTERMSIG(status)
        if sig == signal.SIGINT:
            return 130
        if sig == signal.SIGQUIT:
            return 131
        return status
    return os.WEXITSTATUS(status)


class Executor:
    """Runs syntax trees against one shell environment."""

    def __init__(self, env: Environment) -> None:
        self.env = env

    def run(self, root: AstNode | None) -> int:
        """Collect every heredoc of the tree, then execute it."""
        prepare_heredocs(root, self.env)
        return self.execute(root)

    def execute(self, node: AstNode | None) -> int:
        """Execute ``node`` according to its type and return its result."""
        if node is None:
            return 1
        if node.type == NodeType.COMMAND:
            return self.execute_command(node)
        if node.type == NodeType.PIPE:
            return 1 if self.execute_pipe(node.left, node.right) != 0 else 0
        if node.type == NodeType.AND:
            if self.execute(node.left) == 0:
                return self.execute(node.right)
            return 0
        if node.type == NodeType.OR:
            if self.execute(node.left) == 1:
                return self.execute(node.right)
            return 0
        if node.type == NodeType.SUB:
            self.env.status = self.execute_subshell(node)
            return self.env.status
        return 0

    # forking

    def _spawn(self, body: Callable[[], int | None]) -> int:
        _flush_standard_streams()
        pid = os.fork()
        if pid == 0:
            self._become_child(body)
        return pid

    @staticmethod
    def _become_child(body: Callable[[], int | None]) -> NoReturn:
        code = 1
        try:
            sys.stdout = open(1, "w", closefd=False)
            sys.stderr = open(2, "w", closefd=False)
            result = body()
            code = result if isinstance(result, int) else 0
        except ShellExit as exc:
            code = exc.code
        except BaseException:
            code = 1
        finally:
            _flush_standard_streams()
            os._exit(code & 0xFF)

    # simple commands

    def execute_command(self, node: AstNode) -> int:
        """Run a simple command, as a builtin in place or as a child process."""
        cmd = node.command if node.command is not None else Command()
        with _ignoring_interrupts():
            return self._run_command(cmd)

    def _expand(self, cmd: Command) -> list[str] | None:
        cmd.args = expand_line(cmd.args)
        words = None if cmd.args is None else [w for w in cmd.args.split(" ") if w]
        args = expand_args(words, self.env)
        cmd.args = expand_env_vars(cmd.args, self.env)
        return args

    def _run_command(self, cmd: Command) -> int:
        args = self._expand(cmd)
        if args is None:
            self._touch_redirections(cmd)
            return 1
        if not args:
            return 1
        args = normalize_quoted_args(args)
        args[0] = remove_first_layer_quotes(args[0])
        if args[0] and is_builtin(args[0]):
            self._run_builtin(cmd, args)
            return BUILTIN_RAN
        if check_if_folder(args[0], self.env):
            return 126
        path = search_command(args[0], self.env)
        env_list = self.env.to_list()
        pid = self._spawn(lambda: self._child_command(cmd, args, path, env_list))
        self.env.status = _wait_status(pid)
        return self.env.status

    def _touch_redirections(self, cmd: Command) -> None:
        """Open the redirection targets of a command with no words, then drop them."""
        try:
            if cmd.outputs:
                os.close(open_last_output(cmd.outputs, cmd.append))
            if cmd.inputs:
                os.close(open_last_input(cmd.inputs))
        except RedirectionError:
            pass

    def _run_builtin(self, cmd: Command, args: list[str]) -> int:
        with ExitStack() as stack:
            out: TextIO | None = None
            try:
                if cmd.outputs:
                    fd = open_last_output(cmd.outputs, cmd.append)
                    out = stack.enter_context(os.fdopen(fd, "w"))
                if cmd.inputs:
                    os.close(open_last_input(cmd.inputs))
            except RedirectionError:
                return 1
            ret = run_builtin(args, cmd.args, self.env, out)
            self.env.status = ret
            return ret

    def _child_command(
        self, cmd: Command, args: list[str], path: str | None, env_list: list[str]
    ) -> int:
        signal.signal(signal.SIGINT, signal.SIG_DFL)
        signal.signal(signal.SIGQUIT, signal.SIG_DFL)
        apply_heredocs(cmd)
        try:
            if cmd.outputs:
                redirect_output(cmd.outputs, cmd.append)
            if cmd.inputs:
                redirect_input(cmd.inputs)
        except RedirectionError as exc:
            raise ShellExit(1) from exc
        _flush_standard_streams()
        if path is not None:
            try:
                os.execve(path, args, _env_mapping(env_list))
            except OSError:
                print_error("execve")
            raise ShellExit(126)
        if args[0].startswith("./"):
            execute_local_executable(args[0], args, env_list)
        if self.env.get("PATH") is None:
            local = "./" + args[0]
            if os.access(local, os.F_OK):
                execute_local_executable(local, args, env_list)
            print_error(args[0], ": No such file or directory")
            raise ShellExit(127)
        print_error(args[0], ": command not found")
        raise ShellExit(127)

    # pipes and subshells

    def execute_pipe(self, left: AstNode | None, right: AstNode | None) -> int:
        """Run ``left`` and ``right`` in children joined by a pipe; wait for both."""
        try:
            read_end, write_end = os.pipe()
        except OSError:
            print_error("pipe")
            return 1

        def run_left() -> int:
            os.close(read_end)
            os.dup2(write_end, 1)
            os.close(write_end)
            self.execute(left)
            return 0

        def run_right() -> int:
            os.close(write_end)
            os.dup2(read_end, 0)
            os.close(read_end)
            self.execute(right)
            return 0

        try:
            pid_left = self._spawn(run_left)
            pid_right = self._spawn(run_right)
        except OSError as exc:
            print_error("fork")
            raise ShellExit(1) from exc
        finally:
            os.close(read_end)
            os.close(write_end)
        os.waitpid(pid_left, 0)
        os.waitpid(pid_right, 0)
        return 0

    def execute_subshell(self, node: AstNode) -> int:
        """Run the subshell's inner tree in a child with its redirections applied."""

        def body() -> int:
            redi = node.redirections
            if redi is not None:
                try:
                    if redi.inputs:
                        redirect_input(redi.inputs)
                    if redi.outputs:
                        redirect_output(redi.outputs, redi.append)
                except RedirectionError as exc:
                    raise ShellExit(1) from exc
                if redi.heredocs and node.command is not None:
                    apply_heredocs(node.command)
            return self.execute(node.left)

        try:
            pid = self._spawn(body)
        except OSError:
            print_error("fork")
            return 1
        _, status = os.waitpid(pid, 0)
        return os.WEXITSTATUS(status)