"""
Forest presets: overgrown stone and vegetation towers.
"""

from ...config.parameters import HeightRange
from ...generators.types import BiomeType, ShapeKind, StackPattern
from ..base import TowerPreset


ANCIENT_RUIN = TowerPreset(
    name="Ancient Ruin",
    description="Weathered stone tower reclaimed by nature",
    biome=BiomeType.FOREST,
    category="Core",
    base_shape=ShapeKind.CUBE,
    height_range=HeightRange(4, 8),
    size_variation={"width": 0.3, "height": 0.2, "depth": 0.3},
    decoration_density=1.5,
    stack_pattern=StackPattern.RANDOM,
    material_properties={"roughness": 0.9, "metalness": 0.05, "opacity": 1.0},
)

OVERGROWN_SPIRE = TowerPreset(
    name="Overgrown Spire",
    description="Tall tower with vegetation growing through cracks",
    biome=BiomeType.FOREST,
    category="Core",
    base_shape=ShapeKind.CYLINDER,
    height_range=HeightRange(10, 15),
    size_variation={"width": 0.2, "height": 0.3, "depth": 0.2},
    decoration_density=2.0,
    stack_pattern=StackPattern.ALTERNATING,
    material_properties={"roughness": 0.8, "metalness": 0.1},
)

HANGING_GARDENS = TowerPreset(
    name="Hanging Gardens",
    description="Terraced tower with cascading vegetation",
    biome=BiomeType.FOREST,
    category="Unique",
    base_shape=ShapeKind.CUBE,
    height_range=HeightRange(8, 12),
    size_variation={"width": 0.4, "height": 0.2, "depth": 0.4},
    decoration_density=2.5,
    stack_pattern=StackPattern.ALTERNATING,
    material_properties={"roughness": 0.85, "metalness": 0.05},
)
