"""
Named prompt themes.

A theme only controls how a RepoStatus is turned into text; it never
changes which probes run.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Dict, List

from .errors import ThemeNotFoundError


@dataclass(frozen=True)
class Theme:
    """
    Formatting for the VCS segment of a prompt.

    ahead and behind are format strings receiving ``count``; revision, when
    non-empty, receives ``rev`` and is appended to the label.
    """

    prefix: str = " ("
    suffix: str = ")"
    status_prefix: str = " ["
    status_suffix: str = "]"
    ahead: str = "↑{count}"
    behind: str = "↓{count}"
    staged: str = "+"
    unstaged: str = "!"
    untracked: str = "?"
    stashed: str = "$"
    dirty_cwd: str = "*"
    revision: str = ""


THEMES: Dict[str, Theme] = {
    "default": Theme(),
    "ascii": Theme(ahead=">{count}", behind="<{count}"),
    "compact": Theme(prefix=" ", suffix="", status_prefix=":", status_suffix=""),
    "detailed": Theme(revision="@{rev:.7}"),
}


def list_themes() -> List[str]:
    return sorted(THEMES)


def validate_theme(name: str) -> None:
    """
    Raise ThemeNotFoundError unless name is registered or "random".
    """

    if name != "random" and name not in THEMES:
        raise ThemeNotFoundError(
            f"unknown theme {name!r} (available: {', '.join(list_themes())})"
        )


def get_theme(name: str) -> Theme:
    """
    Look up a theme by name; "random" picks any registered theme.
    """

    validate_theme(name)
    if name == "random":
        return THEMES[random.choice(list_themes())]
    return THEMES[name]
