"""
Subversion integration for vcs-prompt.

Only ``svn info`` and ``svn status`` are used. Both are parsed with
plain regular expressions, independent of the calling shell.
"""

from __future__ import annotations

import logging
import os
import re
import subprocess
from pathlib import Path
from typing import Dict, Optional, Set

from .domain import DirtyFlag
from .errors import SvnError

LOG = logging.getLogger(__name__)

_INFO_LINE = re.compile(r"^(?P<key>[^:\n]+):\s?(?P<value>.*)$", re.MULTILINE)

# Item status codes (first column) and property/lock codes (columns 2-7)
# that make a working copy dirty.
_CHANGE_CODES = set("ACDIMR!~L")


def _run_svn(args: list[str], cwd: Path) -> subprocess.CompletedProcess[str]:
    """
    Run an svn command non-interactively and return the completed process.
    """

    cmd = ["svn", "--non-interactive", *args]
    LOG.debug("Running svn command: %s", " ".join(cmd))
    try:
        completed = subprocess.run(
            cmd,
            cwd=str(cwd),
            env={**os.environ, "LC_ALL": "C"},
            check=False,
            text=True,
            capture_output=True,
        )
    except OSError as exc:
        raise SvnError(f"failed to execute svn: {exc}") from exc

    if completed.returncode != 0:
        raise SvnError(f"svn command failed: {' '.join(cmd)}: {completed.stderr.strip()}")

    return completed


def parse_info(output: str) -> Dict[str, str]:
    return {m.group("key").strip(): m.group("value").strip() for m in _INFO_LINE.finditer(output)}


def info(path: Path) -> Dict[str, str]:
    return parse_info(_run_svn(["info"], cwd=path).stdout)


def repo_name(svn_info: Dict[str, str]) -> str:
    """
    Return the checkout URL relative to the repository root.

    A checkout of the repository root itself is named after the root.
    """

    url = svn_info.get("URL", "").rstrip("/")
    root = svn_info.get("Repository Root", "").rstrip("/")
    if root and url.startswith(root):
        relative = url[len(root):].strip("/")
        if relative:
            return relative
    return (root or url).rsplit("/", 1)[-1]


def branch_name(svn_info: Dict[str, str]) -> str:
    """
    Return the branch or tag name from the checkout URL, or "trunk".

    Falls back to repo_name when the URL follows no standard layout.
    """

    parts = svn_info.get("URL", "").split("/")
    for i, part in enumerate(parts):
        if part in ("branches", "tags") and i + 1 < len(parts) and parts[i + 1]:
            return parts[i + 1]
        if part == "trunk":
            return part
    return repo_name(svn_info)


def revision(svn_info: Dict[str, str]) -> Optional[str]:
    return svn_info.get("Revision") or None


def parse_status(output: str) -> Set[DirtyFlag]:
    flags: Set[DirtyFlag] = set()
    for line in output.splitlines():
        columns = line[:7]
        if columns.startswith("?"):
            flags.add(DirtyFlag.UNTRACKED)
        elif _CHANGE_CODES.intersection(columns):
            flags.add(DirtyFlag.UNSTAGED)
    return flags


def dirty_flags(root: Path) -> Set[DirtyFlag]:
    """
    Return UNSTAGED and/or UNTRACKED for the working copy at root.

    Subversion has neither an index nor a stash, so STAGED and STASHED
    are never reported.
    """

    return parse_status(_run_svn(["status", "--ignore-externals"], cwd=root).stdout)


def has_changes(path: Path) -> bool:
    """
    Return True if anything at or below path is modified or unversioned.
    """

    return bool(parse_status(_run_svn(["status", "--ignore-externals"], cwd=path).stdout))
