"""Core git utilities and subprocess wrappers."""

import os
import shlex
import subprocess
from dataclasses import dataclass
from pathlib import Path

import click

from ..config import NONINTERACTIVE_ENV
from ..errors import GitCommandError, NotAWorkingTree


# Output is decoded without newline translation so diffs of CRLF files survive.
ENCODING = "utf-8"


def _decode(data):
    return (data or b"").decode(ENCODING, errors="surrogateescape")


@dataclass(frozen=True)
class CommandResult:
    status: int
    output: str
    error: str = ""

    @property
    def ok(self):
        return self.status == 0


class GitRunner:
    """
    Run git subcommands against an explicit working directory.

    Non-zero exits are returned, not raised; callers decide which statuses
    are failures. We avoid invoking a shell so revisions and paths are passed
    through verbatim.
    """

    def __init__(self, verbose=False, git="git"):
        self.verbose = verbose
        self.git = git

    def __call__(self, args, cwd, *, input=None, noninteractive=False):
        argv = [self.git, *args]
        env = None
        if noninteractive:
            env = dict(os.environ)
            env.update(NONINTERACTIVE_ENV)

        if self.verbose:
            click.secho(f"$ {shlex.join(argv)}", dim=True, err=True)
        if input is not None:
            input = input.encode(ENCODING, errors="surrogateescape")
        try:
            proc = subprocess.run(
                argv,
                cwd=str(cwd),
                input=input,
                env=env,
                capture_output=True,
            )
        except FileNotFoundError as exc:
            raise GitCommandError(f"Could not run {self.git}: {exc}") from exc
        if self.verbose and proc.returncode != 0:
            click.secho(f"  exit status {proc.returncode}", dim=True, err=True)
        return CommandResult(proc.returncode, _decode(proc.stdout), _decode(proc.stderr))


default_runner = GitRunner()


def run(args, cwd, runner=None):
    """
    Run a git command and return stripped output.

    Raises GitCommandError carrying the exit status and git's message if the
    command fails.
    """
    runner = runner or default_runner
    result = runner(args, cwd)
    if not result.ok:
        raise GitCommandError(
            f"git {' '.join(args)} failed",
            result.status,
            result.error or result.output,
        )
    return result.output.strip()


def _as_directory(path):
    path = Path(path)
    return path if path.is_dir() else path.parent


def is_work_tree(path, runner=None):
    """Check whether `path` (a directory or a file in one) is inside a git working tree."""
    runner = runner or default_runner
    directory = _as_directory(path)
    if not directory.is_dir():
        return False
    try:
        result = runner(["rev-parse", "--is-inside-work-tree"], directory)
    except GitCommandError:
        return False
    return result.ok and result.output.strip() == "true"


def find_worktree_root(path, runner=None):
    """
    Return the top-level directory of the working tree containing `path`.

    Raises NotAWorkingTree if `path` is not inside one.
    """
    runner = runner or default_runner
    if not is_work_tree(path, runner):
        raise NotAWorkingTree(path)
    result = runner(["rev-parse", "--show-toplevel"], _as_directory(path))
    if not result.ok or not result.output.strip():
        raise NotAWorkingTree(path)
    return Path(result.output.strip())
