from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from ghroster.app import run_contributor_check
from ghroster.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ghroster",
        description="Check that every contributor of the organization signed the agreement",
    )
    parser.add_argument(
        "-t",
        "--token",
        type=str,
        help="GitHub token (defaults to GITHUB_TOKEN)",
    )
    parser.add_argument(
        "-e",
        "--exhaustive",
        action="store_true",
        help="Also walk every commit of every repository (slow, needs a token)",
    )
    parser.add_argument(
        "-i",
        "--input",
        type=Path,
        help="Roster to start from (defaults to contributors.csv in the temp dir)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Where to write the roster (defaults to contributors.csv in the temp dir)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output",
    )
    parser.add_argument(
        "repositories",
        nargs="*",
        help="Repositories to check: 'all' (default), names in the organization or owner/name",
    )
    return parser.parse_args(list(argv))


def _masked(args_list: Sequence[str]) -> list[str]:
    masked: list[str] = []
    hide_next = False
    for arg in args_list:
        if hide_next:
            masked.append("***")
            hide_next = False
        elif arg in {"-t", "--token"}:
            masked.append(arg)
            hide_next = True
        elif arg.startswith("--token="):
            masked.append("--token=***")
        elif arg.startswith("-t") and len(arg) > 2:
            masked.append("-t***")
        else:
            masked.append(arg)
    return masked


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.exhaustive and not (parsed_args.token or os.getenv("GITHUB_TOKEN")):
            raise ValueError("Exhaustive mode needs a GitHub token (-t or GITHUB_TOKEN)")  # noqa: TRY301
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    if parsed_args.verbose:
        configure_logging(level=logging.DEBUG, force=True)
    log.info("Program arguments: %s", " ".join(_masked(args_list)))

    try:
        result = run_contributor_check(
            repositories=parsed_args.repositories,
            exhaustive=parsed_args.exhaustive,
            token=parsed_args.token,
            input_path=parsed_args.input,
            output_path=parsed_args.output,
        )
    except Exception:
        log.exception("Fatal error during contributor check")
        sys.exit(1)

    if result.unsigned:
        log.info("Some contributors did not sign the agreement")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
