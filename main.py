"""Entry point for the relativistic field viewer."""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

import pygame

from logging_config import setup_logging
from scene2d import Scene2D
from simulation_config import SimulationConfig

logger = logging.getLogger("relfield")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Electric and magnetic fields of moving charges.")
    parser.add_argument("--lines", type=int, default=20, help="field lines per source charge")
    parser.add_argument("--step", type=float, default=0.05, help="integration step in scene units")
    parser.add_argument("--max-steps", type=int, default=200, help="step cap per field line")
    parser.add_argument("--size", type=int, nargs=2, default=(1000, 700), metavar=("W", "H"))
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    parser.add_argument("--log-file", default=None)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SimulationConfig:
    return SimulationConfig.from_mapping(
        {"num_field_lines": args.lines, "step_size": args.step, "max_steps": args.max_steps}
    )


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.INFO, args.log_file)
    config = build_config(args)

    pygame.init()
    screen = pygame.display.set_mode(tuple(args.size))
    logger.info("starting viewer (%s)", config.describe())

    try:
        Scene2D(screen, config).run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
