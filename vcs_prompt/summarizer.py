"""
Version-control status summary for an interactive prompt.

summarize() runs on every prompt redraw. It never raises: a probe that
cannot run simply leaves its flag unset, and anything worse yields a
shorter string.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, Optional, Set

from . import git_adapter, svn_adapter
from .config import Config
from .detect import detect_repo
from .domain import DirtyFlag, RepoStatus
from .errors import VcsPromptError
from .themes import Theme, get_theme

LOG = logging.getLogger(__name__)

UNKNOWN_LABEL = "(unknown)"


def _probe(name: str, func: Callable[[], bool]) -> bool:
    try:
        return func()
    except (VcsPromptError, OSError) as exc:
        LOG.debug("probe %s unavailable: %s", name, exc)
        return False


def _git_status(path: Path, metadata_dir: Path) -> RepoStatus:
    try:
        root = git_adapter.toplevel(path)
    except VcsPromptError as exc:
        # Inside .git itself, or git is missing.
        LOG.debug("cannot resolve working tree root: %s", exc)
        root = metadata_dir

    status = RepoStatus(in_repo=True, kind="git", root=root)

    head = git_adapter.head_revision(root)
    branch = git_adapter.symbolic_branch(root)
    status.label = branch or git_adapter.short_revision(root) or UNKNOWN_LABEL
    status.revision = head

    if branch is not None and head is not None:
        status.ahead_behind = git_adapter.ahead_behind(root)

    flags: Set[DirtyFlag] = set()
    try:
        with git_adapter.scratch_index(root) as index:
            if index is None and head is None:
                LOG.debug("empty repository, skipping index probes")
            else:
                if _probe("staged", lambda: git_adapter.has_staged(root, index, head)):
                    flags.add(DirtyFlag.STAGED)
                if _probe("unstaged", lambda: git_adapter.has_unstaged(root, index)):
                    flags.add(DirtyFlag.UNSTAGED)
    except VcsPromptError as exc:
        LOG.debug("index probes unavailable: %s", exc)

    if _probe("untracked", lambda: git_adapter.has_untracked(root)):
        flags.add(DirtyFlag.UNTRACKED)

    if _probe("stashed", lambda: git_adapter.has_stash(root)):
        flags.add(DirtyFlag.STASHED)

    status.dirty_flags = flags
    return status


def _svn_status(cwd: Path, metadata_dir: Path, show_branch: bool) -> RepoStatus:
    status = RepoStatus(in_repo=True, kind="svn", root=metadata_dir, label=UNKNOWN_LABEL)
    try:
        svn_info = svn_adapter.info(cwd)
    except VcsPromptError as exc:
        LOG.debug("svn info unavailable: %s", exc)
        return status

    wc_root = svn_info.get("Working Copy Root Path")
    if wc_root:
        status.root = Path(wc_root)
    name = svn_adapter.branch_name(svn_info) if show_branch else svn_adapter.repo_name(svn_info)
    status.label = name or UNKNOWN_LABEL
    status.revision = svn_adapter.revision(svn_info)

    try:
        status.dirty_flags = svn_adapter.dirty_flags(status.root)
    except VcsPromptError as exc:
        LOG.debug("svn status unavailable: %s", exc)

    # Changes below cwd, reported separately from the whole working copy.
    if Path(cwd).resolve() == status.root.resolve():
        status.dirty_below_cwd = bool(status.dirty_flags)
    else:
        status.dirty_below_cwd = _probe("dirty below cwd", lambda: svn_adapter.has_changes(cwd))
    return status


def collect_status(cwd: Path, config: Optional[Config] = None) -> RepoStatus:
    """
    Compute the RepoStatus of the working tree containing cwd.
    """

    config = config or Config()
    found = detect_repo(cwd)
    if found is None:
        return RepoStatus(in_repo=False)

    kind, metadata_dir = found
    if kind == "git":
        return _git_status(cwd, metadata_dir)
    return _svn_status(cwd, metadata_dir, config.svn_show_branch)


def render(status: RepoStatus, theme: Theme) -> str:
    """
    Format a RepoStatus; flags appear in the fixed order + ! ? $, then the
    svn dirty-below-cwd sigil.
    """

    if not status.in_repo:
        return ""

    parts: List[str] = []
    if status.ahead_behind is not None:
        if status.ahead_behind.ahead:
            parts.append(theme.ahead.format(count=status.ahead_behind.ahead))
        if status.ahead_behind.behind:
            parts.append(theme.behind.format(count=status.ahead_behind.behind))

    sigils = {
        DirtyFlag.STAGED: theme.staged,
        DirtyFlag.UNSTAGED: theme.unstaged,
        DirtyFlag.UNTRACKED: theme.untracked,
        DirtyFlag.STASHED: theme.stashed,
    }
    parts.extend(sigils[flag] for flag in DirtyFlag if flag in status.dirty_flags)
    if status.dirty_below_cwd:
        parts.append(theme.dirty_cwd)

    label = status.label
    if theme.revision and status.revision:
        label += theme.revision.format(rev=status.revision)

    text = f"{theme.prefix}{label}{theme.suffix}"
    if parts:
        text += f"{theme.status_prefix}{''.join(parts)}{theme.status_suffix}"
    return text


def summarize(cwd: Optional[Path] = None, config: Optional[Config] = None) -> str:
    """
    Return the prompt segment for cwd, or "" outside any repository.
    """

    config = config or Config()
    if cwd is None:
        cwd = Path(config.cwd) if config.cwd else Path.cwd()

    try:
        theme = get_theme(config.theme)
    except VcsPromptError as exc:
        LOG.warning("%s; using default theme", exc)
        theme = Theme()

    try:
        status = collect_status(Path(cwd), config)
    except (VcsPromptError, OSError) as exc:
        LOG.debug("status collection failed: %s", exc)
        return ""
    return render(status, theme)
