"""Create a fixup commit for a target and autosquash it into history."""

import enum
from dataclasses import dataclass

from .config import Settings
from .errors import (
    FixupCommitFailed,
    FixupToolError,
    MergeCommitUnsupported,
    NoStagedChanges,
    PreflightQueryFailed,
    QueryFailed,
    RangeNotAllowed,
    RebaseFailed,
    RewriteNotAllowed,
    TargetNotInHistory,
    UserDeclined,
)
from .git.core import default_runner, find_worktree_root
from .git.diff import has_staged_changes
from .git.history import (
    ROOT,
    RewritePolicy,
    check_rewrite_policy,
    find_fixup_markers,
    get_parents,
    is_ancestor,
    rebase_base_for,
)
from .validation import validate_revision


class FixupState(enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    PREFLIGHT_CHECKED = "preflight-checked"
    FIXUP_COMMITTED = "fixup-committed"
    REBASING = "rebasing"
    DONE = "done"
    ABORTED = "aborted"


@dataclass(frozen=True)
class FixupOutcome:
    target: str
    commit: str
    base: str
    root: object

    @property
    def from_root(self):
        return self.base == ROOT

    @property
    def message(self):
        return f"Fixed up {self.commit[:12]} ({self.target})."


def _combined_output(result):
    return "\n".join(part for part in (result.output, result.error) if part.strip())


class FixupOrchestrator:
    """
    Fold the currently staged changes into an earlier commit.

    The run is linear and fail-fast: nothing is committed until the target
    has been validated and staged changes are known to exist, and the rebase
    only runs after this run's fixup commit succeeded. A rebase failure
    leaves that fixup commit in history for the user to deal with.
    """

    def __init__(
        self,
        root,
        runner=None,
        settings=None,
        confirm=None,
        on_history_changed=None,
    ):
        self.root = root
        self.runner = runner or default_runner
        self.settings = settings or Settings()
        # Injection points so callers (and tests) decide how to ask and refresh.
        self._confirm = confirm or (lambda markers: False)
        self._on_history_changed = on_history_changed
        self.state = FixupState.IDLE
        self.base = None

    def run(self, target):
        """
        Fix up `target` with the staged changes.

        Returns:
            FixupOutcome

        Raises:
            FixupToolError subclasses; the state is left at ABORTED.
        """
        try:
            commit = self._validate(target)
            self._preflight(commit)
            self._commit_fixup(commit)
            self._rebase()
        except FixupToolError:
            self.state = FixupState.ABORTED
            raise

        self.state = FixupState.DONE
        if self._on_history_changed is not None:
            self._on_history_changed(self.root)
        return FixupOutcome(target=target.strip(), commit=commit, base=self.base, root=self.root)

    def _validate(self, target):
        self.state = FixupState.VALIDATING
        spec = validate_revision(target, self.root, self.runner)
        if spec.is_range:
            raise RangeNotAllowed(spec.text)
        return spec.commits[0]

    def _preflight(self, commit):
        try:
            staged = has_staged_changes(self.root, self.runner)
        except QueryFailed as exc:
            raise PreflightQueryFailed(exc.status, exc.output) from exc
        if not staged:
            raise NoStagedChanges()

        # Autosquash only folds the fixup into commits it replays from HEAD.
        if not is_ancestor(commit, "HEAD", self.root, self.runner):
            raise TargetNotInHistory(commit)

        policy, upstream = check_rewrite_policy(
            commit, self.root, self.runner, allow_pushed=self.settings.allow_pushed
        )
        if policy is RewritePolicy.DISALLOWED:
            raise RewriteNotAllowed(commit, upstream)

        parents = get_parents(commit, self.root, self.runner)
        base = rebase_base_for(parents)
        if base is None:
            raise MergeCommitUnsupported(commit, parents)
        self.base = base

        markers = find_fixup_markers(base, self.root, self.runner)
        if markers and not self._confirm(markers):
            raise UserDeclined()
        self.state = FixupState.PREFLIGHT_CHECKED

    def _commit_fixup(self, commit):
        result = self.runner(
            ["commit", "--quiet", f"--fixup={commit}"], self.root, noninteractive=True
        )
        if not result.ok:
            raise FixupCommitFailed(result.status, _combined_output(result))
        self.state = FixupState.FIXUP_COMMITTED

    def _rebase(self):
        self.state = FixupState.REBASING
        args = ["rebase", "--interactive", "--autosquash"]
        if self.settings.autostash:
            args.append("--autostash")
        args.append(self.base)
        result = self.runner(args, self.root, noninteractive=True)
        if not result.ok:
            raise RebaseFailed(result.status, _combined_output(result))


def run_fixup(target, path, runner=None, **kwargs):
    """Convenience wrapper: run a FixupOrchestrator once in the working tree of `path`."""
    root = find_worktree_root(path, runner)
    return FixupOrchestrator(root, runner=runner, **kwargs).run(target)
