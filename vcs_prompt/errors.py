"""
Custom exception types used across vcs-prompt.

Adapters raise these so the summarizer can tell a probe that could not
run apart from a genuine bug. None of them is ever allowed to escape
``summarize``; the CLI only reports ThemeNotFoundError.
"""

from __future__ import annotations


class VcsPromptError(Exception):
    """Base class for all vcs-prompt specific errors."""


class GitError(VcsPromptError):
    """Raised when a git command fails or cannot be executed."""


class SvnError(VcsPromptError):
    """Raised when an svn command fails or cannot be executed."""


class ProbeUnavailableError(VcsPromptError):
    """Raised when repository metadata needed by a probe is missing."""


class ThemeNotFoundError(VcsPromptError):
    """Raised when a requested prompt theme does not exist."""
