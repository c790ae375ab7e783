#!/usr/bin/env python3
"""
Run the randomized relation harness.

Usage:
    python scripts/relate_fuzz.py [--seed N] [--trials N] [--unit UNIT] [--shape KIND]

A failure prints the seed; pass it back with --seed to replay the run.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from spatial_shapes.context import new_context
from spatial_shapes.harness import GENERATORS, RelationCheckError, RelationHarness
from spatial_shapes.models import DistanceUnit

# Planar world the harness uses for euclidean runs
PLANAR_WORLD = (-100.0, 100.0, -50.0, 50.0)


def main():
    parser = argparse.ArgumentParser(description="Randomized checks of shape relations")
    parser.add_argument("--seed", type=int, default=None, help="Random seed (default: random)")
    parser.add_argument("--trials", type=int, default=1000, help="Number of trials (default: 1000)")
    parser.add_argument(
        "--unit",
        choices=[unit.value for unit in DistanceUnit],
        default=DistanceUnit.KILOMETERS.value,
        help="Distance unit of the context (default: kilometers)",
    )
    parser.add_argument(
        "--shape",
        choices=sorted(GENERATORS),
        default="rectangle",
        help="Kind of shape to relate to random rectangles (default: rectangle)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    unit = DistanceUnit(args.unit)
    ctx = new_context(unit, world_bounds=None if unit.is_geo else PLANAR_WORLD)
    harness = RelationHarness(ctx, GENERATORS[args.shape], seed=args.seed)

    print(f"Relating {args.shape} shapes, unit={unit.value}, seed={harness.seed}")
    try:
        counts = harness.run(args.trials)
    except RelationCheckError as err:
        print(f"FAILED: {err}")
        print(f"Replay with: --seed {err.seed} --unit {unit.value} --shape {args.shape}")
        return 1

    for relation, count in sorted(counts.items()):
        print(f"  {relation.value}: {count}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
