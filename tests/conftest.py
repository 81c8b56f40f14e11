import subprocess
from pathlib import Path

import pytest

from fakes import FakeRunner


@pytest.fixture
def tmp_git_repo(tmp_path):
    """Create a temporary git repository with user config set."""
    repo = tmp_path / "repo"
    repo.mkdir()

    def git(*args):
        return subprocess.run(
            ["git", "-C", str(repo), *args],
            check=True,
            capture_output=True,
            text=True,
        ).stdout

    git("init", "-q")
    git("config", "user.email", "test@example.com")
    git("config", "user.name", "Test User")
    git("config", "commit.gpgsign", "false")
    return repo, git


@pytest.fixture(autouse=True)
def clear_fixup_env(monkeypatch):
    """Ensure environment overrides for the CLI are absent during tests."""
    monkeypatch.delenv("GIT_FIXUP_VERBOSE", raising=False)
    monkeypatch.delenv("GIT_FIXUP_YES", raising=False)
    return


@pytest.fixture
def write_file():
    def _write(base: Path, name: str, content: str = "sample"):
        path = base / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write


@pytest.fixture
def fake_runner():
    return FakeRunner
