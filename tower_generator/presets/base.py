"""
TowerPreset dataclass: named tower archetypes.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..config.parameters import HeightRange, SceneParameters
from ..generators.types import BiomeType, ShapeKind, StackPattern


@dataclass
class TowerPreset:
    """
    A named starting configuration for one biome.

    Selecting a preset overwrites the node shape, the tower height range,
    the stack pattern, the decoration density and any material properties
    it names. Everything else in the scene parameters is left alone.
    """

    # Identity
    name: str
    description: str
    biome: BiomeType
    category: str = "Core"  # "Core" or "Unique"

    # Tower shape
    base_shape: ShapeKind = ShapeKind.CUBE
    height_range: HeightRange = field(default_factory=HeightRange)
    # Relative size jitter per axis; informational for the parameter panel
    size_variation: Dict[str, float] = field(default_factory=dict)
    decoration_density: float = 1.0
    stack_pattern: StackPattern = StackPattern.ALTERNATING

    # Material overrides: roughness / metalness / opacity
    material_properties: Optional[Dict[str, float]] = None

    @property
    def label(self) -> str:
        return f"{self.name} - {self.description}"

    def apply_to(self, params: SceneParameters) -> SceneParameters:
        """Overwrite the preset-controlled fields of params in place."""
        params.node.shape = self.base_shape
        params.tower.height = HeightRange(self.height_range.min, self.height_range.max)
        params.tower.stack_pattern = self.stack_pattern
        params.tower.decoration_density = self.decoration_density

        if self.material_properties:
            for key, value in self.material_properties.items():
                setattr(params.material, key, value)
        return params
