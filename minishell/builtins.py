"""Commands the shell runs itself instead of starting a program."""

from __future__ import annotations

import os
import re
import sys
from typing import TextIO

from minishell.environment import Environment
from minishell.errors import print_error
from minishell.quotes import QUOTES, remove_all_quotes, remove_quotes

BUILTINS = frozenset(
    {"echo", "cd", "pwd", "export", "unset", "env", "exit", "correction"}
)

_VAR_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*\Z")
_NUMBER = re.compile(r"[ \t\n\v\f\r]*[+-]?[0-9]+\Z")


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``code``."""

    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code


def _stream(out: TextIO | None) -> TextIO:
    return out if out is not None else sys.stdout


def is_builtin(name: str) -> bool:
    """Tell whether ``name`` is a command the shell runs itself."""
    return name in BUILTINS


def is_valid_var_name(name: str | None) -> bool:
    """Tell whether ``name`` is a letter or ``_`` followed by letters, digits or ``_``."""
    return bool(name) and _VAR_NAME.match(name) is not None


def strip_quotes(text: str) -> str:
    """Remove matching quote pairs around the whole text, repeatedly."""
    while len(text) >= 2 and text[0] in QUOTES and text[0] == text[-1]:
        text = text[1:-1]
    return text


def builtin_echo(raw_args: str | None, out: TextIO | None = None) -> int:
    """Print the raw text after ``echo``, honouring ``-n`` options and dropping quotes."""
    text = raw_args or ""
    n = len(text)
    i = min(5, n)
    while i < n and text[i] == " ":
        i += 1
    newline = True
    while i < n and text[i] == "-":
        j = i + 1
        if j >= n or text[j] != "n":
            break
        while j < n and text[j] == "n":
            j += 1
        if j < n and text[j] != " ":
            break
        newline = False
        i = j
        while i < n and text[i] == " ":
            i += 1
    _stream(out).write(remove_all_quotes(text[i:]) + ("\n" if newline else ""))
    return 0


def _export_assignment(arg: str, env: Environment) -> int:
    name, _, value = arg.partition("=")
    if not is_valid_var_name(name):
        print_error("minishell: export: ", name, ": not a valid identifier")
        env.status = 1
        return 1
    env.set(name, strip_quotes(value))
    return 0


def _export_name(arg: str, env: Environment) -> int:
    if not is_valid_var_name(arg):
        print_error("minishell: export: ", arg, ": not a valid identifier")
        env.status = 1
        return 1
    if arg not in env:
        env.set(arg, None)
    return 0


def _export_arg(arg: str, env: Environment) -> int:
    if arg.startswith("="):
        print_error("minishell: export: ", arg, ": not a valid identifier")
        env.status = 1
        return 1
    if "=" in arg:
        return _export_assignment(arg, env)
    return _export_name(arg, env)


def _print_export_list(env: Environment, out: TextIO) -> None:
    for name, value in env:
        if value is not None:
            out.write(f'declare -x {name}="{value}"\n')
        else:
            out.write(f"declare -x {name}\n")


def builtin_export(args: list[str], env: Environment, out: TextIO | None = None) -> int:
    """List the variables when given no names, otherwise set or declare each one."""
    if len(args) < 2:
        _print_export_list(env, _stream(out))
    for arg in args[1:]:
        if _export_arg(arg, env) != 0:
            return 1
    env.status = 0
    return 0


def _current_dir() -> str:
    try:
        return os.getcwd()
    except OSError:
        return ""


def _update_pwd(env: Environment, oldpwd: str) -> None:
    _export_assignment("OLDPWD=" + oldpwd, env)
    _export_assignment("PWD=" + _current_dir(), env)
    env.status = 0


def _change_dir(path: str, env: Environment) -> int:
    try:
        os.chdir(path)
    except OSError:
        print_error("cd: ", path, ": No such file or directory")
        env.status = 1
        return 1
    return 0


def _cd_home(env: Environment) -> int:
    if "HOME" not in env:
        print_error("cd: HOME not set")
        env.status = 1
        return 1
    return _change_dir(remove_quotes(env.get("HOME") or ""), env)


def _cd_oldpwd(env: Environment) -> int:
    if "OLDPWD" not in env:
        print_error("cd: OLDPWD not set")
        env.status = 1
        return 1
    return _change_dir(env.get("OLDPWD") or "", env)


def builtin_cd(args: list[str], env: Environment) -> int:
    """Change directory to the argument, ``$HOME`` (none or ``~``) or ``$OLDPWD`` (``-``)."""
    oldpwd = _current_dir()
    if len(args) < 2 or args[1] == "~":
        ret = _cd_home(env)
    elif args[1] == "-":
        ret = _cd_oldpwd(env)
    elif _change_dir(args[1], env) != 0:
        return 1
    else:
        ret = 0
    _update_pwd(env, oldpwd)
    return ret


def builtin_pwd(out: TextIO | None = None) -> int:
    """Print the current working directory."""
    try:
        cwd = os.getcwd()
    except OSError:
        print_error("minihell: pwd")
    else:
        _stream(out).write(cwd + "\n")
    return 0


def builtin_unset(args: list[str], env: Environment) -> int:
    """Remove each named variable; stop at the first invalid name."""
    if not env.to_list():
        return 1
    for arg in args[1:]:
        if not is_valid_var_name(arg):
            print_error("unset: ", arg, ": not a valid identifier")
            env.status = 1
            return 1
        env.unset(arg)
    return 0


def builtin_env(env: Environment, out: TextIO | None = None) -> int:
    """Print every variable that has a non-empty value."""
    stream = _stream(out)
    for name, value in env:
        if value:
            stream.write(f"{name}={value}\n")
    return 0


def builtin_exit(args: list[str], env: Environment, out: TextIO | None = None) -> int:
    """Leave the shell by raising :class:`ShellExit`; too many arguments only fail."""
    _stream(out).write("exit\n")
    if len(args) == 1:
        raise ShellExit(env.status)
    if len(args) == 2:
        if _NUMBER.match(args[1]) is None:
            print_error("exit: ", args[1], ": numeric argument required")
            raise ShellExit(255)
        raise ShellExit(int(args[1]) & 0xFF)
    print_error("exit: ", "too many arguments")
    env.status = 1
    return 1


def builtin_correction(env: Environment, out: TextIO | None = None) -> int:
    """Print the shell's fixed greeting line."""
    _stream(out).write("HHHH: ser awa t9awd ser\n")
    env.status = 0
    return 0


def run_builtin(
    args: list[str], raw_args: str | None, env: Environment, out: TextIO | None = None
) -> int:
    """Run the builtin named by ``args[0]`` and return its status."""
    name = args[0] if args else ""
    if name == "echo":
        ret = builtin_echo(raw_args, out)
        env.status = 0
        return ret
    if name == "cd":
        return builtin_cd(args, env)
    if name == "pwd":
        ret = builtin_pwd(out)
        env.status = 0
        return ret
    if name == "export":
        return builtin_export(args, env, out)
    if name == "unset":
        return builtin_unset(args, env)
    if name == "env":
        return builtin_env(env, out)
    if name == "exit":
        return builtin_exit(args, env, out)
    if name == "correction":
        return builtin_correction(env, out)
    return 1