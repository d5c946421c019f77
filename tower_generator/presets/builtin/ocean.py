"""
Ocean presets: coral, sunken and crystalline towers.
"""

from ...config.parameters import HeightRange
from ...generators.types import BiomeType, ShapeKind, StackPattern
from ..base import TowerPreset


CORAL_SPIRE = TowerPreset(
    name="Coral Spire",
    description="Living tower of coral and sea life",
    biome=BiomeType.OCEAN,
    category="Core",
    base_shape=ShapeKind.CYLINDER,
    height_range=HeightRange(5, 10),
    size_variation={"width": 0.25, "height": 0.2, "depth": 0.25},
    decoration_density=1.8,
    stack_pattern=StackPattern.RANDOM,
    material_properties={"roughness": 0.4, "metalness": 0.3, "opacity": 0.9},
)

SUNKEN_RUIN = TowerPreset(
    name="Sunken Ruin",
    description="Ancient structure claimed by the sea",
    biome=BiomeType.OCEAN,
    category="Core",
    base_shape=ShapeKind.CUBE,
    height_range=HeightRange(4, 8),
    size_variation={"width": 0.3, "height": 0.25, "depth": 0.3},
    decoration_density=1.5,
    stack_pattern=StackPattern.ALTERNATING,
    material_properties={"roughness": 0.8, "metalness": 0.1, "opacity": 0.95},
)

CRYSTAL_GROTTO = TowerPreset(
    name="Crystal Grotto",
    description="Crystalline formation with bioluminescent elements",
    biome=BiomeType.OCEAN,
    category="Unique",
    base_shape=ShapeKind.SPHERE,
    height_range=HeightRange(6, 10),
    size_variation={"width": 0.35, "height": 0.35, "depth": 0.35},
    decoration_density=1.2,
    stack_pattern=StackPattern.RANDOM,
    material_properties={"roughness": 0.3, "metalness": 0.6, "opacity": 0.8},
)
