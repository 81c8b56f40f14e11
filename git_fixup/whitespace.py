"""Revert whitespace-only edits in a file while keeping substantive ones."""

import contextlib
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from .errors import (
    MissingFile,
    NotAWorkingTree,
    PatchApplyFailed,
    PatchDoesNotApply,
    StageFailed,
    StagedChangesPresent,
    UnsavedChanges,
)
from .git.core import default_runner, find_worktree_root
from .git.diff import (
    apply_patch,
    check_patch,
    get_whitespace_insensitive_diff,
    has_staged_changes,
    revert_file,
)


def has_unsaved_changes(path):
    """
    Guess whether an editor holds unsaved edits to `path`.

    Emacs creates `.#name` while a buffer is modified and Vim keeps
    `.name.swp` while the file is open.
    """
    path = Path(path)
    lock = path.with_name(f".#{path.name}")
    swap = path.with_name(f".{path.name}.swp")
    return os.path.lexists(lock) or swap.exists()


def has_hunks(diff):
    """True if `diff` contains at least one hunk, not just file headers."""
    return any(line.startswith("@@") for line in diff.splitlines())


@dataclass(frozen=True)
class DropResult:
    path: Path
    changed: bool

    @property
    def message(self):
        if not self.changed:
            return f"No substantive changes in {self.path}; nothing to do."
        return f"Dropped whitespace-only changes from {self.path}."


@contextlib.contextmanager
def patch_file(text):
    """Write `text` to a temporary patch file that is removed on exit."""
    fd, name = tempfile.mkstemp(prefix="git-fixup-", suffix=".patch")
    try:
        with os.fdopen(
            fd, "w", encoding="utf-8", errors="surrogateescape", newline=""
        ) as handle:
            handle.write(text)
        yield Path(name)
    finally:
        # A leftover temp file must not mask the error being propagated.
        with contextlib.suppress(OSError):
            os.unlink(name)


class WhitespaceDropper:
    """
    Revert the whitespace-only edits in one file of a working tree.

    The whitespace-blind diff against the index holds exactly the
    substantive edits. The file is reset to its committed content and that
    diff is replayed on top of it and into the index. The original bytes are
    kept in memory and written back if the replay fails.
    """

    def __init__(self, runner=None, unsaved_check=None):
        self.runner = runner or default_runner
        self._unsaved_check = unsaved_check or has_unsaved_changes

    def _check_preconditions(self, path):
        if not path.is_file():
            raise MissingFile(path)
        root = find_worktree_root(path, self.runner)
        if self._unsaved_check(path):
            raise UnsavedChanges(path)
        # Resolve the directory only; a symlinked file is handled as the link itself.
        try:
            relative = (path.parent.resolve() / path.name).relative_to(root.resolve())
        except ValueError:
            raise NotAWorkingTree(path) from None
        if has_staged_changes(root, self.runner, path=relative):
            raise StagedChangesPresent(relative)
        return root, relative

    def drop(self, path):
        """
        Drop whitespace-only edits from `path`.

        Returns:
            DropResult; `changed` is False when there was nothing to do

        Raises:
            MissingFile, NotAWorkingTree, UnsavedChanges, StagedChangesPresent,
            PatchDoesNotApply, PatchApplyFailed, StageFailed
        """
        path = Path(path).absolute()
        root, relative = self._check_preconditions(path)

        diff = get_whitespace_insensitive_diff(relative, root, self.runner)
        if not has_hunks(diff):
            return DropResult(relative, changed=False)

        snapshot = path.read_bytes()
        with patch_file(diff) as patch:
            result = check_patch(patch, root, self.runner)
            if not result.ok:
                raise PatchDoesNotApply(relative, result.status, result.error or result.output)

            try:
                result = revert_file(relative, root, self.runner)
                if result.ok:
                    result = apply_patch(patch, root, self.runner)
            except BaseException:
                path.write_bytes(snapshot)
                raise
            if not result.ok:
                path.write_bytes(snapshot)
                raise PatchApplyFailed(relative, result.status, result.error or result.output)

            result = apply_patch(patch, root, self.runner, cached=True)
            if not result.ok:
                raise StageFailed(relative, result.status, result.error or result.output)

        return DropResult(relative, changed=True)


def drop_whitespace_changes(path, runner=None, unsaved_check=None):
    """Convenience wrapper: run a WhitespaceDropper once."""
    return WhitespaceDropper(runner, unsaved_check).drop(path)
