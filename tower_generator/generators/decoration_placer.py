"""
Decoration placement and decoration asset caches.

generate() draws one to three decoration placements for a node from its
biome's vocabulary. Type-specific heights pin hanging decorations near the
top of the node and ground-cover decorations near its base.

The placer also owns the second-level caches used when a decoration
drawable has to be constructed: geometry per decoration type and surface per
(type, biome) pair. These outlive individual tower generations and are only
emptied by clear_cache().
"""

from __future__ import annotations
import logging
import math
import random
from typing import Dict, List, Optional, Tuple

from .material_factory import MATERIAL_PROVIDER, MaterialProvider
from .types import (
    BiomeType, Decoration, DecorationDrawable, Node, ShapeDescriptor,
    SurfaceDescriptor, Vec3, coerce_enum, color_from_hex, shape,
)

logger = logging.getLogger(__name__)


DECORATION_TYPES: Dict[BiomeType, Tuple[str, ...]] = {
    BiomeType.FOREST: ("vine", "moss", "leaf", "branch", "mushroom"),
    BiomeType.DESERT: ("cactus", "rock", "moss", "tumbleweed", "crystal"),
    BiomeType.OCEAN: ("coral", "seaweed", "barnacle", "shell", "anemone"),
}

MIN_DECORATIONS = 1
MAX_DECORATIONS = 3

# Fraction of node height at which a decoration type is pinned
PINNED_HEIGHTS: Dict[str, float] = {
    "vine": 0.3,       # hangs from upper part
    "seaweed": 0.3,
    "moss": -0.4,      # grows near bottom
    "mushroom": -0.4,
    "rock": -0.3,
    "crystal": -0.3,
}

SCALE_RANGE = (0.8, 1.2)
MAX_TILT = 0.25  # radians, X and Z

FOLIAGE_COLOR = 0x2D5A27
CRYSTAL_COLOR = 0xB19CD9
CORAL_COLOR = 0xFF7F50


def _build_geometry(decoration_type: str) -> ShapeDescriptor:
    if decoration_type == "vine":
        return shape("cylinder", translate=(0.0, -0.5, 0.0),
                     radius_top=0.02, radius_bottom=0.02, height=1.0, radial_segments=4)
    if decoration_type == "moss":
        return shape("sphere", scale=(1.0, 0.3, 1.0),
                     radius=0.15, width_segments=8, height_segments=8)
    if decoration_type == "leaf":
        return shape("circle", radius=0.2, segments=5)
    if decoration_type == "branch":
        return shape("cylinder", rotate=(0.0, 0.0, math.pi / 4),
                     radius_top=0.05, radius_bottom=0.03, height=1.0, radial_segments=5)
    if decoration_type == "mushroom":
        cap = shape("sphere", translate=(0.0, 0.2, 0.0), scale=(1.0, 0.5, 1.0),
                    radius=0.2, width_segments=8, height_segments=8)
        stem = shape("cylinder", radius_top=0.05, radius_bottom=0.08,
                     height=0.4, radial_segments=8)
        return ShapeDescriptor(primitive="composite", parts=(cap, stem))
    if decoration_type == "cactus":
        return shape("cylinder", translate=(0.0, 0.4, 0.0),
                     radius_top=0.1, radius_bottom=0.1, height=0.8, radial_segments=8)
    if decoration_type == "rock":
        return shape("icosahedron", scale=(1.0, 0.7, 1.0), radius=0.2, detail=0)
    if decoration_type == "crystal":
        return shape("cone", radius=0.15, height=0.4, radial_segments=6)
    if decoration_type == "coral":
        base = shape("cylinder", radius_top=0.05, radius_bottom=0.1,
                     height=0.5, radial_segments=8)
        branches = shape("sphere", translate=(0.0, 0.25, 0.0), scale=(1.0, 1.5, 1.0),
                         radius=0.2, width_segments=8, height_segments=4)
        return ShapeDescriptor(primitive="composite", parts=(base, branches))
    if decoration_type == "seaweed":
        return shape("plane", translate=(0.0, 0.4, 0.0), width=0.2, height=0.8)
    if decoration_type == "barnacle":
        return shape("cone", radius=0.1, height=0.15, radial_segments=8)
    if decoration_type == "shell":
        return shape("torus", radius=0.15, tube=0.05, radial_segments=8,
                     tubular_segments=12, arc=math.pi)
    if decoration_type == "anemone":
        return shape("cylinder", translate=(0.0, 0.15, 0.0),
                     radius_top=0.15, radius_bottom=0.1, height=0.3, radial_segments=16)
    # tumbleweed and anything unrecognised
    return shape("box", width=0.1, height=0.1, depth=0.1)


class DecorationPlacer:
    """Generates decoration placements and builds decoration drawables."""

    def __init__(self, materials: Optional[MaterialProvider] = None,
                 rng: Optional[random.Random] = None):
        self.materials = materials or MATERIAL_PROVIDER
        self.rng = rng or random.Random()
        self._geometries: Dict[str, ShapeDescriptor] = {}
        self._surfaces: Dict[Tuple[str, BiomeType], SurfaceDescriptor] = {}

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def generate(self, node: Node, biome,
                 rng: Optional[random.Random] = None) -> List[Decoration]:
        """Draw 1-3 decorations for a node from the biome vocabulary.

        Draws from rng when given, otherwise from the placer's own source.
        """
        rng = rng or self.rng
        biome = coerce_enum(BiomeType, biome)
        vocabulary = DECORATION_TYPES[biome]
        count = rng.randint(MIN_DECORATIONS, MAX_DECORATIONS)

        decorations = []
        for _ in range(count):
            decoration_type = rng.choice(vocabulary)
            decorations.append(Decoration(
                type=decoration_type,
                position=self._position_for(node, decoration_type, rng),
                scale=rng.uniform(*SCALE_RANGE),
                rotation=(
                    rng.uniform(-MAX_TILT, MAX_TILT),
                    rng.uniform(0.0, 2 * math.pi),
                    rng.uniform(-MAX_TILT, MAX_TILT),
                ),
            ))
        return decorations

    def _position_for(self, node: Node, decoration_type: str,
                      rng: random.Random) -> Vec3:
        width, height, depth = node.size.width, node.size.height, node.size.depth

        x = rng.uniform(-width / 2, width / 2)
        y = rng.uniform(-height / 2, height / 2)
        z = rng.uniform(-depth / 2, depth / 2)

        pinned = PINNED_HEIGHTS.get(decoration_type)
        if pinned is not None:
            y = height * pinned
        return (x, y, z)

    # ------------------------------------------------------------------
    # Asset caches
    # ------------------------------------------------------------------

    def geometry_for(self, decoration_type: str) -> ShapeDescriptor:
        geometry = self._geometries.get(decoration_type)
        if geometry is None:
            geometry = _build_geometry(decoration_type)
            self._geometries[decoration_type] = geometry
        return geometry

    def material_for(self, decoration_type: str, biome) -> SurfaceDescriptor:
        """Return a clone of the cached surface for (type, biome)."""
        biome = coerce_enum(BiomeType, biome)
        key = (decoration_type, biome)
        surface = self._surfaces.get(key)
        if surface is None:
            surface = self._build_surface(decoration_type, biome)
            self._surfaces[key] = surface
        return surface.clone()

    def _build_surface(self, decoration_type: str, biome: BiomeType) -> SurfaceDescriptor:
        if decoration_type in ("vine", "leaf", "seaweed"):
            return SurfaceDescriptor(
                color=color_from_hex(FOLIAGE_COLOR),
                opacity=0.9,
                transparent=True,
                double_sided=True,
            )
        if decoration_type == "crystal":
            return SurfaceDescriptor(
                color=color_from_hex(CRYSTAL_COLOR),
                roughness=0.2,
                metalness=0.9,
                opacity=0.8,
                transparent=True,
                physical=True,
            )
        if decoration_type == "coral":
            return SurfaceDescriptor(
                color=color_from_hex(CORAL_COLOR),
                roughness=0.7,
                metalness=0.2,
            )
        return self.materials.surface_for(biome)

    def create_drawable(self, decoration_type: str, biome) -> DecorationDrawable:
        """Build a new, not-yet-visible drawable from the asset caches."""
        return DecorationDrawable(
            decoration_type=decoration_type,
            geometry=self.geometry_for(decoration_type),
            surface=self.material_for(decoration_type, biome),
        )

    def clear_cache(self) -> None:
        self._geometries.clear()
        self._surfaces.clear()
        logger.debug("Decoration geometry and material caches cleared")


# Global singleton
DECORATION_PLACER = DecorationPlacer()
