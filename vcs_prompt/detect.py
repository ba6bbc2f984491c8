"""
Repository discovery by walking up the directory tree.

This only looks at the filesystem so that the common "not a repository"
case costs no subprocess at all.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Tuple

from .domain import RepoKind

LOG = logging.getLogger(__name__)


def _find_upwards(start: Path, name: str, want_dir: bool) -> Optional[Path]:
    for directory in (start, *start.parents):
        candidate = directory / name
        try:
            if candidate.is_dir() or (not want_dir and candidate.is_file()):
                return directory
        except OSError as exc:
            LOG.debug("cannot stat %s: %s", candidate, exc)
    return None


def detect_repo(cwd: Path) -> Optional[Tuple[RepoKind, Path]]:
    """
    Return the repository kind and the directory holding its metadata.

    Git wins whenever a .git entry is reachable from cwd, even if a
    nearer .svn directory exists. A .git file (worktrees, submodules)
    counts as git metadata.
    """

    start = cwd.resolve()

    git_dir = _find_upwards(start, ".git", want_dir=False)
    if git_dir is not None:
        LOG.debug("found git metadata in %s", git_dir)
        return "git", git_dir

    svn_dir = _find_upwards(start, ".svn", want_dir=True)
    if svn_dir is not None:
        LOG.debug("found svn metadata in %s", svn_dir)
        return "svn", svn_dir

    return None
