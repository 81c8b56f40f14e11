from click.testing import CliRunner

import git_fixup as gf


def _subjects(git):
    return git("log", "--format=%s").splitlines()


def _two_commit_repo(tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    write_file(repo, "a.txt", "one\n")
    git("add", "a.txt")
    git("commit", "-q", "-m", "add a")
    write_file(repo, "b.txt", "b\n")
    git("add", "b.txt")
    git("commit", "-q", "-m", "add b")
    return repo, git


def test_fixup_folds_staged_change_into_target(monkeypatch, tmp_git_repo, write_file):
    repo, git = _two_commit_repo(tmp_git_repo, write_file)
    write_file(repo, "a.txt", "one\ntwo\n")
    git("add", "a.txt")
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["fixup", "--no-log", "HEAD~1"])

    assert result.exit_code == 0, result.output
    assert "Fixed up" in result.output
    assert _subjects(git) == ["add b", "add a"]
    assert git("show", "HEAD~1:a.txt") == "one\ntwo\n"
    assert git("status", "--porcelain") == ""


def test_fixup_root_commit(monkeypatch, tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    write_file(repo, "a.txt", "one\n")
    git("add", "a.txt")
    git("commit", "-q", "-m", "initial")
    write_file(repo, "a.txt", "uno\n")
    git("add", "a.txt")
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["fixup", "HEAD"])

    assert result.exit_code == 0, result.output
    assert _subjects(git) == ["initial"]
    assert git("show", "HEAD:a.txt") == "uno\n"
    assert "Commit log (newest first)" in result.output


def test_fixup_keeps_unstaged_edits(monkeypatch, tmp_git_repo, write_file):
    repo, git = _two_commit_repo(tmp_git_repo, write_file)
    write_file(repo, "a.txt", "one\ntwo\n")
    git("add", "a.txt")
    write_file(repo, "b.txt", "b\nlocal\n")
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["fixup", "--no-log", "HEAD~1"])

    assert result.exit_code == 0, result.output
    assert (repo / "b.txt").read_text() == "b\nlocal\n"
    assert git("show", "HEAD~1:a.txt") == "one\ntwo\n"


def test_fixup_without_staged_changes(monkeypatch, tmp_git_repo, write_file):
    repo, git = _two_commit_repo(tmp_git_repo, write_file)
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["fixup", "HEAD~1"])

    assert result.exit_code == 1
    assert "No staged changes" in result.output
    assert _subjects(git) == ["add b", "add a"]


def test_fixup_rejects_option_like_revision(monkeypatch, tmp_git_repo, write_file):
    repo, git = _two_commit_repo(tmp_git_repo, write_file)
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["fixup", "--", "-foo"])

    assert result.exit_code == 1
    assert "Unsafe revision" in result.output


def test_fixup_declined_when_markers_pending(monkeypatch, tmp_git_repo, write_file):
    repo, git = _two_commit_repo(tmp_git_repo, write_file)
    write_file(repo, "b.txt", "b\nb2\n")
    git("commit", "-q", "-am", "fixup! add b")
    write_file(repo, "a.txt", "one\ntwo\n")
    git("add", "a.txt")
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["fixup", "HEAD~2"], input="n\n")

    assert result.exit_code == 1
    assert "fixup! add b" in result.output
    assert "Aborted." in result.output
    assert _subjects(git) == ["fixup! add b", "add b", "add a"]
    assert git("diff", "--cached", "--name-only").split() == ["a.txt"]


def test_fixup_with_yes_squashes_pending_markers(monkeypatch, tmp_git_repo, write_file):
    repo, git = _two_commit_repo(tmp_git_repo, write_file)
    write_file(repo, "b.txt", "b\nb2\n")
    git("commit", "-q", "-am", "fixup! add b")
    write_file(repo, "a.txt", "one\ntwo\n")
    git("add", "a.txt")
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["fixup", "--yes", "--no-log", "HEAD~2"])

    assert result.exit_code == 0, result.output
    assert _subjects(git) == ["add b", "add a"]
    assert git("show", "HEAD:b.txt") == "b\nb2\n"
    assert git("show", "HEAD~1:a.txt") == "one\ntwo\n"


def test_verbose_echoes_git_commands(monkeypatch, tmp_git_repo, write_file):
    repo, git = _two_commit_repo(tmp_git_repo, write_file)
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["--verbose", "fixup", "HEAD~1"])

    assert result.exit_code == 1
    assert "$ git diff --cached --quiet" in result.output


def test_drop_whitespace_command(monkeypatch, tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    write_file(repo, "mod.py", "a = 1\nb = 2\n")
    git("add", "mod.py")
    git("commit", "-q", "-m", "add mod")
    write_file(repo, "mod.py", "a = 1   \nb = 3\n")
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["drop-whitespace", "mod.py"])

    assert result.exit_code == 0, result.output
    assert "Dropped whitespace-only changes" in result.output
    assert (repo / "mod.py").read_text() == "a = 1\nb = 3\n"
    assert git("diff", "--cached", "--name-only").split() == ["mod.py"]


def test_drop_whitespace_nothing_to_do(monkeypatch, tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    write_file(repo, "mod.py", "a = 1\n")
    git("add", "mod.py")
    git("commit", "-q", "-m", "add mod")
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["drop-whitespace", "mod.py"])

    assert result.exit_code == 0
    assert "nothing to do" in result.output


def test_drop_whitespace_outside_repo(monkeypatch, tmp_path, write_file):
    write_file(tmp_path, "loose.txt", "x\n")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(gf.cli, ["drop-whitespace", "loose.txt"])

    assert result.exit_code == 1
    assert "Not inside a git working tree" in result.output


def test_fixup_refuses_commit_from_another_branch(monkeypatch, tmp_git_repo, write_file):
    repo, git = tmp_git_repo
    write_file(repo, "a.txt", "one\n")
    git("add", "a.txt")
    git("commit", "-q", "-m", "A")
    branch = git("rev-parse", "--abbrev-ref", "HEAD").strip()
    write_file(repo, "b.txt", "b\n")
    git("add", "b.txt")
    git("commit", "-q", "-m", "B")
    git("checkout", "-q", "-b", "feature", "HEAD~1")
    write_file(repo, "c.txt", "c\n")
    git("add", "c.txt")
    git("commit", "-q", "-m", "C")
    write_file(repo, "d.txt", "d\n")
    git("add", "d.txt")
    git("commit", "-q", "-m", "D")
    other = git("rev-parse", "HEAD").strip()
    git("checkout", "-q", branch)
    write_file(repo, "a.txt", "one\ntwo\n")
    git("add", "a.txt")
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["fixup", "--no-log", other])

    assert result.exit_code == 1
    assert "not in the history of HEAD" in result.output
    assert _subjects(git) == ["B", "A"]
    assert git("diff", "--cached", "--name-only").split() == ["a.txt"]


def test_drop_whitespace_on_symlink_leaving_repo(monkeypatch, tmp_git_repo):
    repo, git = tmp_git_repo
    outside = repo.parent / "outside.txt"
    outside.write_text("elsewhere\n")
    (repo / "link.txt").symlink_to("../outside.txt")
    git("add", "link.txt")
    git("commit", "-q", "-m", "add link")
    monkeypatch.chdir(repo)

    result = CliRunner().invoke(gf.cli, ["drop-whitespace", "link.txt"])

    assert result.exit_code == 0, result.output
    assert "nothing to do" in result.output
    assert (repo / "link.txt").is_symlink()
    assert outside.read_text() == "elsewhere\n"
