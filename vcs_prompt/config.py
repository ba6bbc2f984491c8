"""
Configuration model for vcs-prompt.

The CLI constructs a Config instance and passes it down into the
summarizer so the target directory and formatting never come from
global shell variables.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """
    Top-level configuration for a single prompt render.

    cwd defaults to the process working directory when left unset.
    theme is a name from the theme registry, or "random".
    """

    cwd: Optional[str] = None
    theme: str = "default"
    svn_show_branch: bool = False
    verbosity: int = 0
