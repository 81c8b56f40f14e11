"""Configuration constants and per-repository settings for git-fixup."""

import re
from dataclasses import dataclass

__version__ = "0.1.0"

# Subjects left behind by `git commit --fixup/--squash` that autosquash consumes.
FIXUP_MARKER_RE = re.compile(r"^(fixup|squash|amend)! ")
FIXUP_MARKER_PATTERN = FIXUP_MARKER_RE.pattern

# Editor used while rebasing so the todo list is accepted as generated.
NOOP_EDITOR = ":"
NONINTERACTIVE_ENV = {
    "GIT_EDITOR": NOOP_EDITOR,
    "GIT_SEQUENCE_EDITOR": NOOP_EDITOR,
}

RECENT_LOG_COUNT = 10


@dataclass
class Settings:
    autostash: bool = True
    allow_pushed: bool = False


def _git_config_bool(root, key, runner):
    result = runner(["config", "--type=bool", "--get", key], root)
    if result.status != 0:
        return None
    return result.output.strip() == "true"


def load_settings(root, runner, **overrides):
    """
    Read `fixup.*` settings from git config, then apply explicit overrides.

    Overrides whose value is None are ignored, so CLI flags that were not
    given fall through to the repository configuration.
    """
    settings = Settings()
    autostash = _git_config_bool(root, "fixup.autostash", runner)
    if autostash is not None:
        settings.autostash = autostash
    allow_pushed = _git_config_bool(root, "fixup.allowPushed", runner)
    if allow_pushed is not None:
        settings.allow_pushed = allow_pushed

    for key, value in overrides.items():
        if value is not None:
            setattr(settings, key, value)
    return settings
