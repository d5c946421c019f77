"""
Desert presets: sandstone and mirage towers.
"""

from ...config.parameters import HeightRange
from ...generators.types import BiomeType, ShapeKind, StackPattern
from ..base import TowerPreset


SANDSTONE_PILLAR = TowerPreset(
    name="Sandstone Pillar",
    description="Wind-carved tower of ancient sandstone",
    biome=BiomeType.DESERT,
    category="Core",
    base_shape=ShapeKind.CUBE,
    height_range=HeightRange(6, 12),
    size_variation={"width": 0.15, "height": 0.2, "depth": 0.15},
    decoration_density=0.5,
    stack_pattern=StackPattern.ALTERNATING,
    material_properties={"roughness": 0.95, "metalness": 0.02},
)

DESERT_TEMPLE = TowerPreset(
    name="Desert Temple",
    description="Sacred structure with geometric patterns",
    biome=BiomeType.DESERT,
    category="Core",
    base_shape=ShapeKind.CYLINDER,
    height_range=HeightRange(8, 14),
    size_variation={"width": 0.25, "height": 0.2, "depth": 0.25},
    decoration_density=0.8,
    stack_pattern=StackPattern.SPIRAL,
    material_properties={"roughness": 0.7, "metalness": 0.1},
)

MIRAGE_TOWER = TowerPreset(
    name="Mirage Tower",
    description="Shimmering structure with ethereal properties",
    biome=BiomeType.DESERT,
    category="Unique",
    base_shape=ShapeKind.TORUS,
    height_range=HeightRange(7, 14),
    size_variation={"width": 0.3, "height": 0.3, "depth": 0.3},
    decoration_density=0.6,
    stack_pattern=StackPattern.SPIRAL,
    material_properties={"roughness": 0.2, "metalness": 0.8, "opacity": 0.7},
)
