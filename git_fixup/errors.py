"""Exception taxonomy for the fixup and whitespace workflows."""


class FixupToolError(Exception):
    """Base class for every error the workflows report to the user."""

    exit_code = 1


class GitCommandError(FixupToolError, RuntimeError):
    """A git command exited with a non-zero status."""

    def __init__(self, message, status=None, output=""):
        self.status = status
        self.output = output or ""
        detail = message
        if status is not None:
            detail = f"{detail} (exit status {status})"
        if self.output.strip():
            detail = f"{detail}\n{self.output.strip()}"
        super().__init__(detail)


class QueryFailed(GitCommandError):
    """A read-only git query failed."""


# Preconditions: checked before anything is mutated.


class PreconditionError(FixupToolError, RuntimeError):
    pass


class NotAWorkingTree(PreconditionError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"Not inside a git working tree: {path}")


class MissingFile(PreconditionError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"No such file: {path}")


class UnsavedChanges(PreconditionError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"{path} has unsaved edits in an editor; save it first.")


class StagedChangesPresent(PreconditionError):
    def __init__(self, path):
        self.path = path
        super().__init__(f"{path} has staged changes; unstage or commit them first.")


# Validation of user input.


class ValidationError(FixupToolError, ValueError):
    pass


class InvalidRevision(ValidationError):
    """A user-supplied revision string was rejected."""

    def __init__(self, message, revision=""):
        self.revision = revision
        super().__init__(message)


class EmptyRevision(InvalidRevision):
    def __init__(self):
        super().__init__("Revision is empty.")


class UnsafeRevision(InvalidRevision):
    def __init__(self, revision, reason):
        super().__init__(f"Unsafe revision {revision!r}: {reason}", revision)


class UnresolvableRevision(InvalidRevision):
    def __init__(self, revision):
        super().__init__(f"Revision {revision!r} does not name a commit.", revision)


class IncompleteRange(InvalidRevision):
    def __init__(self, revision):
        super().__init__(f"Range {revision!r} is missing one of its endpoints.", revision)


class RangeNotAllowed(InvalidRevision):
    def __init__(self, revision):
        super().__init__(f"Expected a single commit, got the range {revision!r}.", revision)


class TargetNotInHistory(ValidationError):
    def __init__(self, commit, head="HEAD"):
        self.commit = commit
        self.head = head
        super().__init__(
            f"{commit[:12]} is not in the history of {head}; "
            "only commits on the current branch can be fixed up."
        )


class MergeCommitUnsupported(ValidationError):
    def __init__(self, commit, parents):
        self.commit = commit
        self.parents = list(parents)
        super().__init__(
            f"{commit[:12]} is a merge commit with {len(self.parents)} parents; "
            "it cannot be used as a fixup target."
        )


# Preflight checks against repository state.


class PreflightError(FixupToolError, RuntimeError):
    pass


class NoStagedChanges(PreflightError):
    def __init__(self):
        super().__init__("No staged changes; stage the fix with `git add` first.")


class PreflightQueryFailed(PreflightError):
    def __init__(self, status, output=""):
        self.status = status
        self.output = output or ""
        super().__init__(
            f"Could not determine whether changes are staged (git exit status {status})."
        )


class RewriteNotAllowed(PreflightError):
    def __init__(self, commit, upstream):
        self.commit = commit
        self.upstream = upstream
        super().__init__(
            f"{commit[:12]} is already part of {upstream}; refusing to rewrite pushed history."
        )


# Failures of mutating commands.


class MutationError(GitCommandError):
    pass


class FixupCommitFailed(MutationError):
    def __init__(self, status, output=""):
        super().__init__("Creating the fixup commit failed", status, output)


class RebaseFailed(MutationError):
    def __init__(self, status, output=""):
        super().__init__(
            "Autosquash rebase failed; the fixup commit is still in history. "
            "Resolve the rebase or run `git rebase --abort`",
            status,
            output,
        )


class PatchDoesNotApply(MutationError):
    def __init__(self, path, status, output=""):
        self.path = path
        super().__init__(f"Substantive changes to {path} do not apply cleanly", status, output)


class PatchApplyFailed(MutationError):
    def __init__(self, path, status, output=""):
        self.path = path
        super().__init__(
            f"Reapplying changes to {path} failed; the original content was restored",
            status,
            output,
        )


class StageFailed(MutationError):
    def __init__(self, path, status, output=""):
        self.path = path
        super().__init__(
            f"{path} was cleaned but staging its remaining changes failed", status, output
        )


class UserDeclined(FixupToolError):
    def __init__(self, message="Aborted."):
        super().__init__(message)
