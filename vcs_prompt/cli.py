"""
Command-line interface for vcs-prompt.

Intended to be called from a prompt definition, e.g.
``PS1='\\w$(vcs-prompt)\\$ '``. Output carries no trailing newline.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .config import Config
from .errors import ThemeNotFoundError
from .logging_utils import configure_logging
from .summarizer import summarize
from .themes import list_themes, validate_theme


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vcs-prompt",
        description=(
            "Print a short git or subversion status segment for embedding "
            "in an interactive shell prompt."
        ),
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="Directory to summarize (default: current directory).",
    )
    parser.add_argument(
        "--theme",
        default="default",
        help="Prompt theme name, or 'random' (default: %(default)s).",
    )
    parser.add_argument(
        "--list-themes",
        action="store_true",
        help="List available themes and exit.",
    )
    parser.add_argument(
        "--svn-branch",
        dest="svn_show_branch",
        action="store_true",
        help="Label subversion checkouts by branch/tag instead of repository path.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity on stderr (can be specified multiple times).",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.list_themes:
        for name in list_themes():
            print(name)
        return 0

    config = Config(
        cwd=args.path,
        theme=args.theme,
        svn_show_branch=args.svn_show_branch,
        verbosity=args.verbose,
    )

    configure_logging(verbosity=config.verbosity)

    try:
        validate_theme(config.theme)
    except ThemeNotFoundError as exc:
        print(f"vcs-prompt: error: {exc}", file=sys.stderr)
        return 2

    try:
        sys.stdout.write(summarize(config=config))
        sys.stdout.flush()
    except KeyboardInterrupt:
        return 130

    return 0


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
