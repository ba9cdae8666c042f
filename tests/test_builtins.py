import io
import os

import pytest

from minishell.builtins import (
    ShellExit,
    builtin_cd,
    builtin_correction,
    builtin_echo,
    builtin_env,
    builtin_exit,
    builtin_export,
    builtin_pwd,
    builtin_unset,
    is_builtin,
    is_valid_var_name,
    run_builtin,
    strip_quotes,
)
from minishell.environment import Environment


def make_env(**values):
    env = Environment()
    for name, value in values.items():
        env.set(name, value)
    return env


@pytest.mark.parametrize(
    "name", ["echo", "cd", "pwd", "export", "unset", "env", "exit", "correction"]
)
def test_is_builtin_names(name):
    assert is_builtin(name) is True


@pytest.mark.parametrize("name", ["ls", "", "ECHO", "echo2"])
def test_is_builtin_rejects_others(name):
    assert is_builtin(name) is False


@pytest.mark.parametrize(
    "name,valid",
    [("PATH", True), ("_x1", True), ("a", True), ("1abc", False), ("", False), ("a-b", False)],
)
def test_is_valid_var_name(name, valid):
    assert is_valid_var_name(name) is valid


def test_strip_quotes_repeats():
    assert strip_quotes("'\"value\"'") == "value"


def test_strip_quotes_keeps_unmatched():
    assert strip_quotes("'value\"") == "'value\""
    assert strip_quotes("x") == "x"


def test_echo_plain():
    out = io.StringIO()
    assert builtin_echo("echo hello world", out) == 0
    assert out.getvalue() == "hello world\n"


def test_echo_no_args_prints_newline():
    out = io.StringIO()
    builtin_echo("echo", out)
    assert out.getvalue() == "\n"


def test_echo_n_options():
    out = io.StringIO()
    builtin_echo("echo -nnn -n hi", out)
    assert out.getvalue() == "hi"


def test_echo_bad_option_is_text():
    out = io.StringIO()
    builtin_echo("echo -nx hi", out)
    assert out.getvalue() == "-nx hi\n"


def test_echo_drops_quotes():
    out = io.StringIO()
    builtin_echo("echo 'a' \"b\"", out)
    assert out.getvalue() == "a b\n"


def test_export_lists_variables():
    env = make_env(A="1", B=None)
    out = io.StringIO()
    assert builtin_export(["export"], env, out) == 0
    assert out.getvalue() == 'declare -x A="1"\ndeclare -x B\n'


def test_export_sets_stripped_value():
    env = Environment()
    out = io.StringIO()
    assert builtin_export(["export", "NAME='some value'"], env, out) == 0
    assert env.get("NAME") == "some value"
    assert out.getvalue() == ""
    assert env.status == 0


def test_export_name_only_declares():
    env = Environment()
    builtin_export(["export", "FOO"], env, io.StringIO())
    assert "FOO" in env
    assert env.get("FOO") is None


def test_export_name_only_keeps_existing_value():
    env = make_env(FOO="bar")
    builtin_export(["export", "FOO"], env, io.StringIO())
    assert env.get("FOO") == "bar"


@pytest.mark.parametrize("arg", ["=x", "1A=2", "a-b"])
def test_export_invalid(arg, capsys):
    env = Environment()
    assert builtin_export(["export", arg], env, io.StringIO()) == 1
    assert env.status == 1
    assert "not a valid identifier" in capsys.readouterr().err


def test_unset_removes():
    env = make_env(A="1", B="2")
    assert builtin_unset(["unset", "A"], env) == 0
    assert "A" not in env
    assert env.get("B") == "2"


def test_unset_invalid(capsys):
    env = make_env(A="1")
    assert builtin_unset(["unset", "1bad"], env) == 1
    assert env.status == 1
    assert "unset: 1bad: not a valid identifier" in capsys.readouterr().err


def test_unset_empty_environment_fails():
    assert builtin_unset(["unset", "A"], Environment()) == 1


def test_env_skips_empty_and_unset_values():
    env = make_env(A="1", B="", C=None, D="x")
    out = io.StringIO()
    assert builtin_env(env, out) == 0
    assert out.getvalue() == "A=1\nD=x\n"


def test_pwd_prints_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    out = io.StringIO()
    assert builtin_pwd(out) == 0
    assert out.getvalue() == os.getcwd() + "\n"


def test_cd_changes_directory_and_updates_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    start = os.getcwd()
    target = tmp_path / "sub"
    target.mkdir()
    env = Environment()
    assert builtin_cd(["cd", str(target)], env) == 0
    assert os.getcwd() == os.path.realpath(target) or os.getcwd() == str(target)
    assert env.get("OLDPWD") == start
    assert env.get("PWD") == os.getcwd()


def test_cd_missing_directory(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    env = Environment()
    missing = str(tmp_path / "nope")
    assert builtin_cd(["cd", missing], env) == 1
    assert env.status == 1
    assert "PWD" not in env
    assert ": No such file or directory" in capsys.readouterr().err


def test_cd_home(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    home = tmp_path / "home"
    home.mkdir()
    env = make_env(HOME=str(home))
    assert builtin_cd(["cd"], env) == 0
    assert os.path.samefile(os.getcwd(), home)


def test_cd_home_not_set(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    env = Environment()
    assert builtin_cd(["cd", "~"], env) == 1
    assert "HOME not set" in capsys.readouterr().err


def test_cd_dash_returns_to_oldpwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    first = tmp_path / "first"
    first.mkdir()
    env = make_env(OLDPWD=str(first))
    assert builtin_cd(["cd", "-"], env) == 0
    assert os.path.samefile(os.getcwd(), first)


def test_exit_without_args_uses_status():
    env = Environment()
    env.status = 7
    out = io.StringIO()
    with pytest.raises(ShellExit) as info:
        builtin_exit(["exit"], env, out)
    assert info.value.code == 7
    assert out.getvalue() == "exit\n"


def test_exit_with_number():
    with pytest.raises(ShellExit) as info:
        builtin_exit(["exit", "42"], Environment(), io.StringIO())
    assert info.value.code == 42


def test_exit_non_numeric(capsys):
    with pytest.raises(ShellExit) as info:
        builtin_exit(["exit", "abc"], Environment(), io.StringIO())
    assert info.value.code == 255
    assert "numeric argument required" in capsys.readouterr().err


def test_exit_too_many_arguments(capsys):
    env = Environment()
    assert builtin_exit(["exit", "1", "2"], env, io.StringIO()) == 1
    assert env.status == 1
    assert "too many arguments" in capsys.readouterr().err


def test_correction():
    env = Environment()
    env.status = 3
    out = io.StringIO()
    assert builtin_correction(env, out) == 0
    assert out.getvalue() == "HHHH: ser awa t9awd ser\n"
    assert env.status == 0


def test_run_builtin_dispatches_echo():
    env = Environment()
    out = io.StringIO()
    assert run_builtin(["echo", "hi"], "echo hi", env, out) == 0
    assert out.getvalue() == "hi\n"


def test_run_builtin_dispatches_export_and_env():
    env = Environment()
    out = io.StringIO()
    run_builtin(["export", "X=5"], "export X=5", env, out)
    run_builtin(["env"], "env", env, out)
    assert out.getvalue() == "X=5\n"


def test_run_builtin_unknown():
    assert run_builtin(["ls"], "ls", Environment(), io.StringIO()) == 1


def test_run_builtin_exit_raises():
    with pytest.raises(ShellExit):
        run_builtin(["exit"], "exit", Environment(), io.StringIO())