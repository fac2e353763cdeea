from __future__ import annotations

import argparse
from typing import List, Optional

from rogulator.config import RUN_CONFIGS, GameConfig, get_run_config
from rogulator.log import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rogulator", description="Turn-based roguelike dungeon crawler.")
    parser.add_argument("--size", default="quick", choices=sorted(RUN_CONFIGS), help="run length")
    parser.add_argument("--seed", type=int, default=None, help="seed for a reproducible run")
    parser.add_argument(
        "--log-level",
        default="INFO",
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="logging threshold",
    )
    parser.add_argument("--debug-log", default=None, help="append log records to this file")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.debug_log)
    cfg = GameConfig(seed=args.seed, log_level=args.log_level)

    # pygame is imported only once we actually open a window
    from rogulator.engine import Engine

    engine = Engine(cfg, get_run_config(args.size))
    engine.run()


if __name__ == "__main__":
    main()
