"""Git utilities package."""

from .core import (
    CommandResult,
    GitRunner,
    default_runner,
    find_worktree_root,
    is_work_tree,
    run,
)
from .diff import (
    apply_patch,
    check_patch,
    get_whitespace_insensitive_diff,
    has_staged_changes,
    revert_file,
)
from .history import (
    ROOT,
    RewritePolicy,
    check_rewrite_policy,
    find_fixup_markers,
    get_parents,
    get_recent_commits,
    get_upstream_ref,
    is_ancestor,
    rebase_base_for,
    resolve_commit,
)

__all__ = [
    "CommandResult",
    "GitRunner",
    "default_runner",
    "run",
    "is_work_tree",
    "find_worktree_root",
    "has_staged_changes",
    "get_whitespace_insensitive_diff",
    "check_patch",
    "revert_file",
    "apply_patch",
    "ROOT",
    "RewritePolicy",
    "resolve_commit",
    "get_parents",
    "rebase_base_for",
    "find_fixup_markers",
    "get_upstream_ref",
    "is_ancestor",
    "check_rewrite_policy",
    "get_recent_commits",
]
