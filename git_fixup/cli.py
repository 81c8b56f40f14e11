"""CLI commands and entry point."""

import functools
import os

import click

from .config import __version__, load_settings
from .errors import FixupToolError
from .fixup import FixupOrchestrator
from .git import GitRunner, find_worktree_root
from .ui import confirm_markers, report_error, show_history
from .whitespace import WhitespaceDropper


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--verbose",
    is_flag=True,
    envvar="GIT_FIXUP_VERBOSE",
    help="Echo every git command to stderr",
)
@click.pass_context
def cli(ctx, verbose):
    """git-fixup: fold staged changes into earlier commits safely."""
    ctx.obj = GitRunner(verbose=verbose)


def _reporting_errors(func):
    """Turn workflow errors into a colored message and a non-zero exit."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except FixupToolError as exc:
            report_error(exc)
            raise SystemExit(exc.exit_code)

    return wrapper


@cli.command()
@click.argument("commit")
@click.option(
    "-y",
    "--yes",
    is_flag=True,
    envvar="GIT_FIXUP_YES",
    help="Do not ask before squashing other pending fixups",
)
@click.option(
    "--autostash/--no-autostash",
    default=None,
    help="Stash unstaged changes around the rebase (default: git config fixup.autostash)",
)
@click.option(
    "--allow-pushed",
    is_flag=True,
    help="Rewrite commits already on the upstream branch (git config fixup.allowPushed)",
)
@click.option("--no-log", is_flag=True, help="Do not print the commit log afterwards")
@click.pass_obj
@_reporting_errors
def fixup(runner, commit, yes, autostash, allow_pushed, no_log):
    """Commit the staged changes as a fixup of COMMIT and autosquash it."""
    root = find_worktree_root(os.getcwd(), runner)
    settings = load_settings(
        root,
        runner,
        autostash=autostash,
        allow_pushed=allow_pushed or None,
    )
    orchestrator = FixupOrchestrator(
        root,
        runner=runner,
        settings=settings,
        confirm=lambda markers: confirm_markers(markers, assume_yes=yes),
        on_history_changed=None if no_log else lambda top: show_history(top, runner),
    )
    outcome = orchestrator.run(commit)
    click.secho(outcome.message, fg="green", bold=True)
    click.echo("Remember to push with --force-with-lease if the commit was pushed.")


@cli.command(name="drop-whitespace")
@click.argument("path", type=click.Path(dir_okay=False))
@click.pass_obj
@_reporting_errors
def drop_whitespace(runner, path):
    """Revert whitespace-only edits in PATH, keeping and staging the rest."""
    result = WhitespaceDropper(runner).drop(path)
    if result.changed:
        click.secho(result.message, fg="green", bold=True)
    else:
        click.secho(result.message, fg="yellow")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
