"""Diff, apply and staging helpers."""

from ..errors import QueryFailed
from .core import default_runner

# Flags shared by every `git apply` of a zero-context, whitespace-blind diff.
APPLY_FLAGS = ["--ignore-whitespace", "--unidiff-zero"]


def has_staged_changes(root, runner=None, path=None):
    """
    Check whether the index differs from HEAD, optionally for one path.

    Raises QueryFailed if git reports neither "clean" nor "dirty".
    """
    runner = runner or default_runner
    args = ["diff", "--cached", "--quiet"]
    if path is not None:
        args.extend(["--", str(path)])
    result = runner(args, root)
    if result.status == 0:
        return False
    if result.status == 1:
        return True
    raise QueryFailed(
        "Could not compare the index with HEAD",
        result.status,
        result.error or result.output,
    )


def get_whitespace_insensitive_diff(path, root, runner=None):
    """
    Get the diff of `path` against the index, ignoring all whitespace.

    Uses zero context lines so the result can be applied on top of the
    committed content regardless of whitespace-only edits elsewhere.
    """
    runner = runner or default_runner
    result = runner(
        [
            "diff",
            "--no-color",
            "--no-ext-diff",
            "--ignore-all-space",
            "--unified=0",
            "--",
            str(path),
        ],
        root,
    )
    if not result.ok:
        raise QueryFailed(
            f"Could not diff {path}", result.status, result.error or result.output
        )
    return result.output


def check_patch(patch_path, root, runner=None):
    """Dry-run a patch against the index; returns the CommandResult."""
    runner = runner or default_runner
    return runner(["apply", "--check", "--cached", *APPLY_FLAGS, str(patch_path)], root)


def revert_file(path, root, runner=None):
    """Discard working-tree changes to `path`, restoring it from the index."""
    runner = runner or default_runner
    return runner(["checkout", "--", str(path)], root)


def apply_patch(patch_path, root, runner=None, cached=False):
    """Apply a patch to the working tree, or to the index when `cached`."""
    runner = runner or default_runner
    args = ["apply"]
    if cached:
        args.append("--cached")
    args.extend(APPLY_FLAGS)
    args.append(str(patch_path))
    return runner(args, root)
