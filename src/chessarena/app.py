"""Application entry point."""

from __future__ import annotations

import argparse
import shlex
import sys
from collections.abc import Sequence

from chessarena.config import MOVE_SOURCES, ArenaSettings
from chessarena.core.scheduler import SupersedePolicy


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chessarena",
        description="Unattended chess exhibition with animated pieces.",
    )
    parser.add_argument("--white", choices=MOVE_SOURCES, default="random")
    parser.add_argument("--black", choices=MOVE_SOURCES, default="random")
    parser.add_argument(
        "--engine",
        help="UCI engine command line (defaults to the bundled mock engine)",
    )
    parser.add_argument("--depth", type=int, default=5, help="UCI search depth")
    parser.add_argument("--per-step-ms", type=int, default=None)
    parser.add_argument("--move-delay-ms", type=int, default=None)
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in SupersedePolicy],
        default=SupersedePolicy.REPLACE.value,
        help="what happens to a position that arrives mid-animation",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def settings_from_args(args: argparse.Namespace) -> ArenaSettings:
    """Overlay command-line options on the default settings."""
    settings = ArenaSettings(
        white_source=args.white,
        black_source=args.black,
        engine_depth=args.depth,
        supersede_policy=SupersedePolicy(args.policy),
    )
    if args.engine:
        settings.engine_command = shlex.split(args.engine)
    if args.per_step_ms is not None:
        settings.per_step_ms = args.per_step_ms
    if args.move_delay_ms is not None:
        settings.move_delay_ms = args.move_delay_ms
    settings.validate()
    return settings


def main(argv: Sequence[str] | None = None) -> None:
    """Launch the arena application."""
    from chessarena.ui.bootstrap import configure_logging, run_application

    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = settings_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    configure_logging(args.log_level)
    sys.exit(run_application([sys.argv[0]], settings))


if __name__ == "__main__":
    main()
