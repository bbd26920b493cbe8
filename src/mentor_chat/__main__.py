"""CLI entrypoint for MentorChat."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from importlib import metadata

from .app import MentorChatApp
from .config import ensure_config_dir


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mentorchat",
        description="MentorChat - design mentor chat with /imagine image generation",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Ensure configuration exists, handle CLI flags, and run the TUI."""
    args = _build_parser().parse_args(list(argv) if argv is not None else None)

    if args.version:
        try:
            version = metadata.version("mentorchat")
        except metadata.PackageNotFoundError:
            version = "0.0.0"
        print(f"mentorchat {version}")
        return

    ensure_config_dir()
    MentorChatApp().run()


if __name__ == "__main__":
    main()
