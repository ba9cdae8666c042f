# minishell

A small bash-like shell engine for POSIX systems. Given a command tree, it
runs it the way bash does in the common cases:

- `$NAME` and `$?` expansion, which is skipped inside single quotes
- `*` wildcards matched against the entries of a directory
- `<`, `>` and `>>` redirections, and `<<` heredocs. A quoted delimiter
  turns expansion off inside the heredoc body.
- pipes, `&&`, `||` and parenthesised subshells
- the builtins `echo`, `cd`, `pwd`, `export`, `unset`, `env`, `exit` and
  `correction`
- `PATH` lookup, with bash-style messages and exit statuses: `127` for a
  command that cannot be found and `126` for a directory or for a file that
  cannot be run

Error messages are written to standard error and begin with `bash: `
(`minishell.errors.print_error`; `format_error` builds the same text without
printing it).

## What it does not do

The package has no tokenizer and no parser, and it has no interactive prompt
or command-line program. You build the command tree yourself from the
classes in `minishell.ast` and pass it to `Executor`.

## The environment

`minishell.environment.Environment` keeps the shell's variables in the order
they were defined. Its `status` attribute holds the status of the last
command.

```python
from minishell.environment import Environment

env = Environment.from_entries(["USER=alice", "HOME=/home/alice"])
env.set("EDITOR", "vi")
env.get("USER")        # "alice"
"EDITOR" in env        # True
env.unset("EDITOR")
env.to_list()          # ["USER=alice", "HOME=/home/alice"]
env.status_text()      # "0", the value of $?
```

A value of `None` marks a name that was exported without a value. `to_list`
writes such a name as `NAME=`.

## Expansion

```python
from minishell.expander import expand_env_vars, expand_args
from minishell.wildcard import match_pattern, expand_line

expand_env_vars('echo "$USER"', env)   # 'echo "alice"'
expand_env_vars("echo '$USER'", env)   # "echo '$USER'"
expand_args(["$USER", "x"], env)       # ["alice", "x"]

match_pattern("*.py", "setup.py")      # True
expand_line("ls *.txt", ".")           # matching names, space separated
```

`expand_env_vars` returns `None` when the result is empty. A wildcard that
matches nothing is left as it was written.

## Quotes

```python
from minishell.quotes import remove_quotes, remove_first_layer_quotes

remove_quotes("'EOF'")                 # "EOF"
remove_first_layer_quotes('ab"cd"')    # "abcd"
```

## Builtins

`minishell.builtins.run_builtin(args, raw_args, env, out)` runs a builtin
and writes its output to `out`, which defaults to standard output. `echo`
works on the raw argument text. `exit` raises `ShellExit`, and the exit code
is in its `code` attribute.

## Running a command tree

Build trees from `AstNode`, `Command` and `Redirections`, found in
`minishell.ast`.

```python
from minishell.ast import AstNode, Command, NodeType
from minishell.executor import Executor

root = AstNode(NodeType.COMMAND, command=Command(args="ls -l"))
Executor(env).run(root)
```

`Executor.run` first reads every heredoc in the tree from standard input
into a temporary file under `/tmp`, and then executes the tree:

- An external command runs in a child process. Its exit status is stored in
  `env.status` and returned.
- A builtin runs in the shell process itself.
- Each side of a pipe runs in a child process.
- A subshell runs in a child process, with its redirections applied.

`minishell.debug.print_ast_tree` draws a tree for inspection, and
`format_ast` returns the same drawing as a string.