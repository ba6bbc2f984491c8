import subprocess
from pathlib import Path

from conftest import init_repo, requires_git
from vcs_prompt.domain import AheadBehind
from vcs_prompt.errors import GitError, ProbeUnavailableError
from vcs_prompt.git_adapter import _run_git, ahead_behind, empty_tree, scratch_index


def test_run_git_includes_stderr_details_on_failure(monkeypatch):
    def fake_run(*args, **kwargs):
        return subprocess.CompletedProcess(
            args=["git", "status"],
            returncode=128,
            stdout="",
            stderr="fatal: not a git repository",
        )

    monkeypatch.setattr("vcs_prompt.git_adapter.subprocess.run", fake_run)

    try:
        _run_git(["status"], cwd=Path("."))
    except GitError as exc:
        message = str(exc)
        assert "git status" in message
        assert "fatal: not a git repository" in message
    else:
        raise AssertionError("expected GitError to be raised")


def test_run_git_disables_optional_locks(monkeypatch):
    captured = {}

    def fake_run(cmd, **kwargs):
        captured.update(kwargs)
        return subprocess.CompletedProcess(args=cmd, returncode=0, stdout="", stderr="")

    monkeypatch.setattr("vcs_prompt.git_adapter.subprocess.run", fake_run)

    _run_git(["status"], cwd=Path("."), index_file="/tmp/scratch-index")

    assert captured["env"]["GIT_OPTIONAL_LOCKS"] == "0"
    assert captured["env"]["GIT_INDEX_FILE"] == "/tmp/scratch-index"


def test_run_git_wraps_missing_binary(monkeypatch):
    def fake_run(*args, **kwargs):
        raise FileNotFoundError("git")

    monkeypatch.setattr("vcs_prompt.git_adapter.subprocess.run", fake_run)

    try:
        _run_git(["status"], cwd=Path("."))
    except GitError as exc:
        assert "failed to execute git" in str(exc)
    else:
        raise AssertionError("expected GitError to be raised")


class FakeCompleted:
    def __init__(self, stdout: str):
        self.stdout = stdout


def test_ahead_behind_parses_counts(monkeypatch):
    monkeypatch.setattr(
        "vcs_prompt.git_adapter._run_git",
        lambda args, cwd, index_file=None: FakeCompleted("2\t5\n"),
    )

    assert ahead_behind(Path(".")) == AheadBehind(ahead=2, behind=5)


def test_ahead_behind_is_none_when_level(monkeypatch):
    monkeypatch.setattr(
        "vcs_prompt.git_adapter._run_git",
        lambda args, cwd, index_file=None: FakeCompleted("0\t0\n"),
    )

    assert ahead_behind(Path(".")) is None


def test_ahead_behind_is_none_without_upstream(monkeypatch):
    def no_upstream(args, cwd, index_file=None):
        raise GitError("fatal: no upstream configured for branch 'main'")

    monkeypatch.setattr("vcs_prompt.git_adapter._run_git", no_upstream)

    assert ahead_behind(Path(".")) is None


@requires_git
def test_scratch_index_copies_and_removes(tmp_path):
    repo = init_repo(tmp_path / "repo")
    original = (repo / ".git" / "index").read_bytes()
    scratch_dir = tmp_path / "scratch"
    scratch_dir.mkdir()

    with scratch_index(repo, tmp_dir=str(scratch_dir)) as index:
        assert index is not None
        assert Path(index).read_bytes() == original

    assert not Path(index).exists()
    assert list(scratch_dir.iterdir()) == []


@requires_git
def test_scratch_index_removed_on_error(tmp_path):
    repo = init_repo(tmp_path / "repo")
    scratch_dir = tmp_path / "scratch"
    scratch_dir.mkdir()

    try:
        with scratch_index(repo, tmp_dir=str(scratch_dir)):
            raise RuntimeError("probe blew up")
    except RuntimeError:
        pass

    assert list(scratch_dir.iterdir()) == []


@requires_git
def test_scratch_index_yields_none_without_index(tmp_path):
    repo = init_repo(tmp_path / "repo", commit=False)

    with scratch_index(repo) as index:
        assert index is None


def test_scratch_index_unavailable_outside_git(tmp_path, monkeypatch):
    def fail(args, cwd, index_file=None):
        raise GitError("git missing")

    monkeypatch.setattr("vcs_prompt.git_adapter._run_git", fail)

    try:
        with scratch_index(tmp_path):
            pass
    except ProbeUnavailableError as exc:
        assert "cannot locate index" in str(exc)
    else:
        raise AssertionError("expected ProbeUnavailableError to be raised")


@requires_git
def test_empty_tree_matches_object_format(tmp_path):
    repo = init_repo(tmp_path / "repo", commit=False)

    assert empty_tree(repo) == "4b825dc642cb6eb9a060e54bf8d69288fbee4904"
