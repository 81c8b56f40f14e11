"""git-fixup: fold staged changes into earlier commits and drop whitespace-only edits."""

from .cli import cli, main
from .config import Settings, __version__, load_settings
from .errors import FixupToolError
from .fixup import FixupOrchestrator, FixupOutcome, FixupState, run_fixup
from .git import (  # noqa: F401
    ROOT,
    CommandResult,
    GitRunner,
    RewritePolicy,
    check_rewrite_policy,
    find_fixup_markers,
    find_worktree_root,
    get_parents,
    get_recent_commits,
    is_work_tree,
    rebase_base_for,
    run,
)
from .ui import confirm_markers, format_commit_log  # noqa: F401
from .validation import RevisionSpec, validate_revision
from .whitespace import (
    DropResult,
    WhitespaceDropper,
    drop_whitespace_changes,
    has_unsaved_changes,
)

__all__ = [
    "__version__",
    # CLI
    "cli",
    "main",
    # Config
    "Settings",
    "load_settings",
    # Git
    "run",
    "CommandResult",
    "GitRunner",
    "ROOT",
    "RewritePolicy",
    "is_work_tree",
    "find_worktree_root",
    "get_parents",
    "rebase_base_for",
    "find_fixup_markers",
    "check_rewrite_policy",
    "get_recent_commits",
    # Workflows
    "RevisionSpec",
    "validate_revision",
    "FixupOrchestrator",
    "FixupOutcome",
    "FixupState",
    "run_fixup",
    "DropResult",
    "WhitespaceDropper",
    "drop_whitespace_changes",
    "has_unsaved_changes",
    # Errors / UI
    "FixupToolError",
    "confirm_markers",
    "format_commit_log",
]
