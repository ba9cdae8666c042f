[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minishell"
version = "0.1.0"
description = "A small bash-like shell engine: variable expansion, wildcards, redirections, heredocs, pipes, subshells and builtins"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "bash", "pipes", "redirection", "heredoc", "wildcard", "builtins"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["minishell"]

[tool.hatch.build.targets.sdist]
include = ["minishell", "tests"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
