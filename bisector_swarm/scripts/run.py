#!/usr/bin/env python3
"""
Bisector Swarm CLI

Build a field of points from a config file, give each two partners,
and watch them chase their bisectors.

Usage:
    # Reference configuration, animated until the window is closed
    python -m bisector_swarm.scripts.run

    # Bigger, faster swarm, reproducible
    python -m bisector_swarm.scripts.run --points 80 --speed 0.3 --seed 7

    # Headless: fixed delta_time, report how close the swarm got
    python -m bisector_swarm.scripts.run --no-animate --steps 2000
"""

import argparse
import logging
from dataclasses import fields
from pathlib import Path
from typing import Optional

import numpy as np
import yaml

from bisector_swarm.environments.bisector_field import BisectorField, FieldConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).parent / "configs" / "swarm.yaml"
HEADLESS_STEPS = 1000


def load_config(config_path: Optional[str] = None) -> dict:
    """Load the run configuration from YAML."""
    if config_path is None:
        config_path = DEFAULT_CONFIG

    with open(config_path) as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ValueError(f"Config {config_path} must be a mapping")
    return config


def build_field_config(section: dict, overrides: Optional[dict] = None) -> FieldConfig:
    """Turn the `field` section of a config into a FieldConfig."""
    values = dict(section or {})
    values.update(overrides or {})

    known = {f.name for f in fields(FieldConfig)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f"Unknown field config keys: {sorted(unknown)}")

    for key in ("x_bounds", "y_bounds"):
        if key in values:
            values[key] = tuple(float(v) for v in values[key])

    return FieldConfig(**values)


def run_headless(field: BisectorField, steps: int, delta_time: float) -> None:
    """Step the field with a fixed delta_time and log progress."""
    for step in range(steps):
        report = field.step(delta_time)
        if step % 200 == 0 and len(report.skipped) < len(field.store):
            logger.info(
                f"Step {step}: mean bisector distance="
                f"{np.nanmean(report.distances):.2f}, skipped={len(report.skipped)}"
            )

    positions = field.get_positions()
    spread = np.linalg.norm(positions - positions.mean(axis=0), axis=1).mean()
    logger.info(f"Finished {steps} steps, mean spread={spread:.2f}")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Points steering toward their partners' bisectors",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML config file (defaults to the bundled swarm.yaml)",
    )
    parser.add_argument(
        "--points",
        type=int,
        default=None,
        help="Override number of points",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=None,
        help="Override speed multiplier",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for positions and partners",
    )
    parser.add_argument(
        "--steps",
        type=int,
        default=None,
        help="Number of ticks to run",
    )
    parser.add_argument(
        "--delta-time",
        type=float,
        default=None,
        help="Seconds per tick in headless mode",
    )
    parser.add_argument(
        "--no-animate",
        action="store_true",
        help="Run without a window",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging verbosity",
    )

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> BisectorField:
    """Build the field described by args and run it."""
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    config = load_config(args.config)

    overrides = {}
    if args.points is not None:
        overrides["n_points"] = args.points
    if args.speed is not None:
        overrides["speed_multiplier"] = args.speed
    if args.seed is not None:
        overrides["seed"] = args.seed

    field = BisectorField(build_field_config(config.get("field"), overrides))

    run_section = config.get("run") or {}
    steps = args.steps if args.steps is not None else run_section.get("steps")

    if args.no_animate:
        delta_time = args.delta_time
        if delta_time is None:
            delta_time = run_section.get("delta_time", 0.016)
        run_headless(field, HEADLESS_STEPS if steps is None else steps, delta_time)
    else:
        from bisector_swarm.observations.visualize import animate
        animate(field, steps=steps)

    return field


def main(argv=None):
    run(parse_args(argv))


if __name__ == "__main__":
    main()
