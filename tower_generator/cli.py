"""
Command-line front end: build one tower and print it.

Examples:
    tower-generator --biome ocean
    tower-generator --preset "Mirage Tower" --seed 7 --json
    tower-generator --config scene.json --verbose
"""

from __future__ import annotations
import argparse
import json
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional

from .config.parameters import SceneParameters, default_parameters
from .errors import TowerGeneratorError
from .generators.tower_builder import TowerBuilder
from .generators.types import BiomeType, Tower
from .presets import PRESET_CATALOG

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tower-generator",
        description="Procedurally generate a biome-decorated tower.",
    )
    parser.add_argument("--biome", choices=[b.value for b in BiomeType],
                        help="Biome (overrides the config file)")
    parser.add_argument("--preset", help="Apply a named tower preset")
    parser.add_argument("--config", type=Path, help="JSON scene parameter file")
    parser.add_argument("--seed", type=int, help="Seed for a repeatable tower")
    parser.add_argument("--list-presets", action="store_true",
                        help="List presets per biome and exit")
    parser.add_argument("--json", action="store_true",
                        help="Print the full tower description as JSON")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Enable debug logging")
    return parser


def load_parameters(args: argparse.Namespace) -> SceneParameters:
    """Resolve scene parameters: defaults, then config file, preset, biome."""
    if args.config is not None:
        with open(args.config, "r", encoding="utf-8") as f:
            params = SceneParameters.from_dict(json.load(f))
    else:
        params = default_parameters()

    if args.preset:
        preset = PRESET_CATALOG.require(args.preset)
        params.current_biome = preset.biome
        preset.apply_to(params)
    if args.biome:
        params.current_biome = BiomeType(args.biome)
    return params


def format_summary(tower: Tower) -> str:
    lines = [
        f"{tower.biome.value} tower, {tower.stack_pattern.value} pattern: "
        f"{len(tower)} tiers, height {tower.total_height:.2f}"
    ]
    for placed in tower.nodes:
        size = placed.node.size
        types = ", ".join(d.decoration_type for d in placed.decorations)
        lines.append(
            f"  [{placed.tier:2d}] {placed.node.shape.value:<8} "
            f"{size.width:.2f} x {size.height:.2f} x {size.depth:.2f} "
            f"@ y={placed.base_height:.2f}  ({types})"
        )
    return "\n".join(lines)


def list_presets() -> str:
    lines = []
    for biome in BiomeType:
        lines.append(f"{biome.value}:")
        for preset in PRESET_CATALOG.presets_for(biome):
            lines.append(f"  {preset.name} [{preset.category}] - {preset.description}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.list_presets:
        print(list_presets())
        return 0

    try:
        params = load_parameters(args)
        rng = random.Random(args.seed) if args.seed is not None else None
        tower = TowerBuilder(rng=rng).build(params)
    except (TowerGeneratorError, OSError, json.JSONDecodeError) as exc:
        logger.error("Generation failed: %s", exc)
        return 1

    if args.json:
        print(json.dumps(tower.to_dict(), indent=2))
    else:
        print(format_summary(tower))
    return 0


if __name__ == "__main__":
    sys.exit(main())
