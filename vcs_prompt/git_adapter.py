"""
Git integration for vcs-prompt.

Every probe here is read-only. Commands run with optional locks
disabled, and the index comparisons run against a scratch copy of the
index so a concurrent git command never sees its index touched.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, Optional

from .domain import AheadBehind
from .errors import GitError, ProbeUnavailableError

LOG = logging.getLogger(__name__)


def _git_env(index_file: Optional[str] = None) -> Dict[str, str]:
    env = os.environ.copy()
    env["GIT_OPTIONAL_LOCKS"] = "0"
    env["LC_ALL"] = "C"
    if index_file is not None:
        env["GIT_INDEX_FILE"] = index_file
    return env


def _run_git(
    args: list[str],
    cwd: Path,
    index_file: Optional[str] = None,
) -> subprocess.CompletedProcess[str]:
    """
    Run a git command and return the completed process.

    Raises GitError when git cannot be started or exits non-zero.
    """

    cmd = ["git", *args]
    LOG.debug("Running git command: %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=_git_env(index_file),
            check=False,
            text=True,
            capture_output=True,
        )
    except OSError as exc:
        raise GitError(f"failed to execute git: {exc}") from exc

    if completed.returncode != 0:
        stderr = completed.stderr.strip()
        raise GitError(f"git command failed: {' '.join(cmd)}: {stderr}")

    return completed


def _git_differs(args: list[str], cwd: Path, index_file: Optional[str] = None) -> bool:
    """
    Run a ``--quiet`` style git command and map its exit status.

    0 means no difference, 1 means a difference; anything else is an error.
    """

    cmd = ["git", *args]
    LOG.debug("Running git command (quiet diff): %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd),
            env=_git_env(index_file),
            check=False,
            text=True,
            capture_output=True,
        )
    except OSError as exc:
        raise GitError(f"failed to execute git: {exc}") from exc

    if completed.returncode == 0:
        return False
    if completed.returncode == 1:
        return True
    raise GitError(f"git command failed: {' '.join(cmd)}: {completed.stderr.strip()}")


def toplevel(path: Path) -> Path:
    return Path(_run_git(["rev-parse", "--show-toplevel"], cwd=path).stdout.strip())


def head_revision(root: Path) -> Optional[str]:
    """
    Return the full id of HEAD, or None in a repository with no commits.
    """

    try:
        return _run_git(["rev-parse", "--verify", "--quiet", "HEAD"], cwd=root).stdout.strip()
    except GitError:
        return None


def symbolic_branch(root: Path) -> Optional[str]:
    """
    Return the short name of the checked out branch, or None when detached.
    """

    try:
        return _run_git(["symbolic-ref", "--quiet", "--short", "HEAD"], cwd=root).stdout.strip()
    except GitError:
        return None


def short_revision(root: Path) -> Optional[str]:
    try:
        return _run_git(["rev-parse", "--short", "HEAD"], cwd=root).stdout.strip()
    except GitError:
        return None


def ahead_behind(root: Path) -> Optional[AheadBehind]:
    """
    Compare HEAD with the configured upstream of the current branch.

    Returns None when there is no upstream or the branch is level with it.
    """

    try:
        output = _run_git(
            ["rev-list", "--left-right", "--count", "HEAD...@{upstream}"],
            cwd=root,
        ).stdout
    except GitError as exc:
        LOG.debug("no upstream comparison: %s", exc)
        return None

    fields = output.split()
    if len(fields) != 2:
        LOG.debug("unexpected rev-list output: %r", output)
        return None

    ahead, behind = int(fields[0]), int(fields[1])
    if ahead == 0 and behind == 0:
        return None
    return AheadBehind(ahead=ahead, behind=behind)


def _index_path(root: Path) -> Path:
    path = Path(_run_git(["rev-parse", "--git-path", "index"], cwd=root).stdout.strip())
    if not path.is_absolute():
        path = root / path
    return path


@contextmanager
def scratch_index(root: Path, tmp_dir: Optional[str] = None) -> Iterator[Optional[str]]:
    """
    Yield the path of a private copy of the repository index.

    Yields None when the repository has no index yet. The copy is removed
    on every exit path, including exceptions and KeyboardInterrupt.
    """

    try:
        source = _index_path(root)
    except GitError as exc:
        raise ProbeUnavailableError(f"cannot locate index: {exc}") from exc

    if not source.exists():
        yield None
        return

    try:
        fd, scratch = tempfile.mkstemp(prefix="vcs-prompt-index-", dir=tmp_dir)
    except OSError as exc:
        raise ProbeUnavailableError(f"cannot create scratch index: {exc}") from exc

    try:
        os.close(fd)
        try:
            shutil.copyfile(source, scratch)
        except OSError as exc:
            raise ProbeUnavailableError(f"cannot copy index {source}: {exc}") from exc
        LOG.debug("using scratch index %s", scratch)
        yield scratch
    finally:
        for leftover in (scratch, f"{scratch}.lock"):
            try:
                os.unlink(leftover)
            except FileNotFoundError:
                pass


def empty_tree(root: Path) -> str:
    """
    Return the id of the empty tree in the repository's object format.
    """

    return _run_git(["hash-object", "-t", "tree", os.devnull], cwd=root).stdout.strip()


def has_staged(root: Path, index_file: Optional[str], head: Optional[str]) -> bool:
    """
    Return True if the index differs from HEAD.

    With no commits yet, the index is compared against the empty tree.
    """

    if index_file is None:
        return False
    base = head if head is not None else empty_tree(root)
    return _git_differs(
        ["diff-index", "--cached", "--quiet", base, "--"],
        cwd=root,
        index_file=index_file,
    )


def has_unstaged(root: Path, index_file: Optional[str]) -> bool:
    if index_file is None:
        return False
    return _git_differs(
        ["diff", "--no-ext-diff", "--quiet", "--"],
        cwd=root,
        index_file=index_file,
    )


def has_untracked(root: Path) -> bool:
    """
    Return True if any file is neither tracked nor ignored.

    --directory collapses wholly untracked directories into one entry so
    big untracked trees are not listed file by file.
    """

    output = _run_git(
        [
            "ls-files",
            "--others",
            "--exclude-standard",
            "--directory",
            "--no-empty-directory",
        ],
        cwd=root,
    ).stdout
    return bool(output.strip())


def has_stash(root: Path) -> bool:
    try:
        _run_git(["rev-parse", "--verify", "--quiet", "refs/stash"], cwd=root)
    except GitError:
        return False
    return True
