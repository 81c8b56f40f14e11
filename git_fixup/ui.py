"""Display utilities and UI helpers."""

import click

from .errors import UserDeclined
from .git.history import get_recent_commits


def confirm_markers(markers, assume_yes=False):
    """Show pending fixup/squash commits and ask whether to fold them in too."""
    click.secho(
        "These commits will also be squashed by the autosquash rebase:",
        fg="yellow",
    )
    for marker in markers:
        click.echo(f"  - {marker}")
    if assume_yes:
        return True
    return click.confirm("Continue?", default=False)


def format_commit_log(commits, title=" Commit log (newest first) "):
    """Format commit lines under a divider for display."""
    divider = click.style("─" * 48, fg="blue")
    lines = [divider, click.style(title, fg="cyan", bold=True)]
    if commits:
        pad = len(str(len(commits)))
        for idx, line in enumerate(commits, 1):
            lines.append(f"  {idx:>{pad}}. {line}")
    else:
        lines.append("  (none)")
    lines.append(divider)
    return "\n".join(lines)


def show_history(root, runner=None):
    """Print the newest commits of `root`, refreshing the user's view of history."""
    click.echo(format_commit_log(get_recent_commits(root, runner)))


def report_error(exc):
    """Print a workflow error; declining a prompt is not shown as a failure."""
    color = "yellow" if isinstance(exc, UserDeclined) else "red"
    click.secho(str(exc), fg=color, err=True)
