"""Commit graph queries: parents, fixup markers, upstream and rewrite policy."""

import enum

from ..config import FIXUP_MARKER_PATTERN, FIXUP_MARKER_RE, RECENT_LOG_COUNT
from ..errors import QueryFailed
from .core import default_runner

# Rebase base meaning "rewrite from the first commit" (`git rebase --root`).
ROOT = "--root"


class RewritePolicy(enum.Enum):
    ALLOWED = "allowed"
    DISALLOWED = "disallowed"
    UNKNOWN = "unknown"


def resolve_commit(ref, root, runner=None):
    """Return the full commit id `ref` names, or None if it is not a commit."""
    runner = runner or default_runner
    result = runner(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], root)
    if not result.ok:
        return None
    return result.output.strip() or None


def get_parents(commit, root, runner=None):
    """
    Get the parent commit ids of `commit`, in order.

    An empty list means `commit` is a root commit.
    """
    runner = runner or default_runner
    result = runner(["show", "-s", "--format=%P", commit], root)
    if not result.ok:
        raise QueryFailed(
            f"Could not read the parents of {commit}",
            result.status,
            result.error or result.output,
        )
    return result.output.split()


def rebase_base_for(parents):
    """Map a parent list to a rebase base; None for merge commits."""
    if not parents:
        return ROOT
    if len(parents) == 1:
        return parents[0]
    return None


def find_fixup_markers(base, root, runner=None):
    """
    List commits between `base` and HEAD whose subject is a fixup/squash/amend marker.

    Returns:
        List of "<short sha> <subject>" strings, newest first
    """
    runner = runner or default_runner
    rev_range = "HEAD" if base == ROOT else f"{base}..HEAD"
    result = runner(
        [
            "log",
            "--format=%h%x1f%s",
            "--extended-regexp",
            f"--grep={FIXUP_MARKER_PATTERN}",
            rev_range,
        ],
        root,
    )
    if not result.ok:
        raise QueryFailed(
            f"Could not search {rev_range} for fixup markers",
            result.status,
            result.error or result.output,
        )
    markers = []
    for line in result.output.splitlines():
        if "\x1f" not in line:
            continue
        sha, subject = line.split("\x1f", 1)
        # --grep matches any line of the message; only subjects count.
        if FIXUP_MARKER_RE.match(subject):
            markers.append(f"{sha} {subject}")
    return markers


def is_ancestor(commit, ref, root, runner=None):
    """
    Check whether `commit` is reachable from `ref`.

    Raises QueryFailed if git can answer neither yes nor no.
    """
    runner = runner or default_runner
    result = runner(["merge-base", "--is-ancestor", commit, ref], root)
    if result.status == 0:
        return True
    if result.status == 1:
        return False
    raise QueryFailed(
        f"Could not check whether {commit} is in the history of {ref}",
        result.status,
        result.error or result.output,
    )


def get_upstream_ref(root, runner=None):
    """Return the upstream ref of the current branch, or None if there is none."""
    runner = runner or default_runner
    result = runner(["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"], root)
    if not result.ok:
        return None
    return result.output.strip() or None


def check_rewrite_policy(commit, root, runner=None, allow_pushed=False):
    """
    Decide whether `commit` may be rewritten.

    A commit already reachable from the branch's upstream has been pushed and
    is DISALLOWED. Without an upstream, or if git cannot answer, the result
    is UNKNOWN and callers should carry on.

    Returns:
        Tuple of (RewritePolicy, upstream_ref_or_None)
    """
    runner = runner or default_runner
    if allow_pushed:
        return RewritePolicy.ALLOWED, None
    upstream = get_upstream_ref(root, runner)
    if not upstream:
        return RewritePolicy.UNKNOWN, None
    result = runner(["merge-base", "--is-ancestor", commit, upstream], root)
    if result.status == 0:
        return RewritePolicy.DISALLOWED, upstream
    if result.status == 1:
        return RewritePolicy.ALLOWED, upstream
    return RewritePolicy.UNKNOWN, upstream


def get_recent_commits(root, runner=None, count=RECENT_LOG_COUNT):
    """Get "<short sha> <subject>" lines for the newest `count` commits."""
    runner = runner or default_runner
    result = runner(["log", f"-{count}", "--format=%h %s"], root)
    if not result.ok:
        return []
    return [line for line in result.output.splitlines() if line.strip()]
