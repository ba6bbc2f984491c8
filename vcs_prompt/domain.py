"""
Core value types for vcs-prompt.

A RepoStatus is computed fresh for every prompt render and thrown away
afterwards. These types carry no git or svn logic so the renderer can
be tested without a repository.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Literal, Optional, Set

RepoKind = Literal["git", "svn"]


class DirtyFlag(Enum):
    """
    One category of uncommitted change.

    Declaration order is the order sigils are rendered in.
    """

    STAGED = "staged"
    UNSTAGED = "unstaged"
    UNTRACKED = "untracked"
    STASHED = "stashed"


@dataclass(frozen=True)
class AheadBehind:
    """
    Commit counts of the local branch relative to its upstream.
    """

    ahead: int
    behind: int


@dataclass
class RepoStatus:
    """
    Status of the working tree containing the summarized directory.

    label is a branch name, a short revision id, or a repository-relative
    path, depending on what could be discovered. dirty_below_cwd is only
    probed for svn, where it tracks changes under the current directory
    apart from the whole working copy.
    """

    in_repo: bool
    kind: Optional[RepoKind] = None
    root: Optional[Path] = None
    label: str = ""
    revision: Optional[str] = None
    ahead_behind: Optional[AheadBehind] = None
    dirty_flags: Set[DirtyFlag] = field(default_factory=set)
    dirty_below_cwd: bool = False
