import shutil
import subprocess
from pathlib import Path

import pytest


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git binary not available")


@pytest.fixture(autouse=True)
def isolated_git_env(monkeypatch, tmp_path):
    """
    Keep the developer's git configuration out of the test repositories.
    """

    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(home / ".gitconfig"))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "vcs-prompt")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "vcs-prompt@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "vcs-prompt")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "vcs-prompt@example.com")
    for name in ("GIT_DIR", "GIT_WORK_TREE", "GIT_INDEX_FILE"):
        monkeypatch.delenv(name, raising=False)


def run_git(args, cwd: Path) -> subprocess.CompletedProcess:
    return subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        text=True,
        capture_output=True,
        check=True,
    )


def init_repo(path: Path, commit: bool = True) -> Path:
    """
    Create a repository on branch main, optionally with one commit.
    """

    path.mkdir(parents=True, exist_ok=True)
    run_git(["init", "-q"], cwd=path)
    run_git(["symbolic-ref", "HEAD", "refs/heads/main"], cwd=path)
    if commit:
        (path / "README").write_text("hello\n")
        run_git(["add", "README"], cwd=path)
        run_git(["commit", "-q", "-m", "initial"], cwd=path)
    return path
