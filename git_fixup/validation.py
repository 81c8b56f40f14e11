"""Safety checks for user-supplied revisions."""

import unicodedata
from dataclasses import dataclass

from .errors import (
    EmptyRevision,
    IncompleteRange,
    NotAWorkingTree,
    UnresolvableRevision,
    UnsafeRevision,
)
from .git.core import default_runner, is_work_tree
from .git.history import resolve_commit


@dataclass(frozen=True)
class RevisionSpec:
    """A checked revision: one commit-ish, or a two-sided `A..B` / `A...B` range."""

    text: str
    left: str
    right: str = None
    separator: str = None
    commits: tuple = ()

    @property
    def is_range(self):
        return self.separator is not None


def _check_characters(revision):
    if revision.startswith("-"):
        raise UnsafeRevision(revision, "must not start with '-'")
    for ch in revision:
        if ch.isspace() or unicodedata.category(ch) == "Cc":
            raise UnsafeRevision(revision, "contains whitespace or control characters")


def split_range(revision):
    """
    Split `revision` at its first `..` or `...`.

    Returns:
        Tuple of (left, separator, right); separator is None when there is no range
    """
    index = revision.find("..")
    if index == -1:
        return revision, None, None
    separator = "..." if revision[index + 2 : index + 3] == "." else ".."
    return revision[:index], separator, revision[index + len(separator) :]


def validate_revision(raw, root, runner=None):
    """
    Validate and normalize a revision string typed by the user.

    The string is checked syntactically before git is consulted at all, so a
    value that could be read as an option never reaches a git command line.
    Each side of a range is then resolved on its own so the error names the
    side that is wrong.

    Args:
        raw: Revision or range as given by the user
        root: Working tree to resolve it in
        runner: Git command runner

    Returns:
        RevisionSpec

    Raises:
        EmptyRevision, UnsafeRevision, NotAWorkingTree, IncompleteRange,
        UnresolvableRevision
    """
    runner = runner or default_runner
    revision = (raw or "").strip()
    if not revision:
        raise EmptyRevision()
    _check_characters(revision)

    if not is_work_tree(root, runner):
        raise NotAWorkingTree(root)

    left, separator, right = split_range(revision)
    if separator is None:
        commit = resolve_commit(revision, root, runner)
        if commit is None:
            raise UnresolvableRevision(revision)
        return RevisionSpec(text=revision, left=revision, commits=(commit,))

    if not left or not right:
        raise IncompleteRange(revision)
    commits = []
    for side in (left, right):
        commit = resolve_commit(side, root, runner)
        if commit is None:
            raise UnresolvableRevision(side)
        commits.append(commit)
    return RevisionSpec(
        text=revision,
        left=left,
        right=right,
        separator=separator,
        commits=tuple(commits),
    )
