"""
Scene parameters consumed by the tower builder.

The parameter tree mirrors what the parameter-editing collaborator exposes:
biome, node shape and size range, tower height range and stack pattern,
animation settings and material overrides. default_parameters() always
returns a fresh copy, so callers may mutate the result.

Ranges are not validated here; min <= max is the caller's responsibility.
"""

from __future__ import annotations
import copy
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Optional

from ..errors import InvalidConfigurationError
from ..generators.types import BiomeType, ShapeKind, Size, StackPattern, coerce_enum


@dataclass
class SizeRange:
    min: Size = field(default_factory=lambda: Size(1.0, 1.0, 1.0))
    max: Size = field(default_factory=lambda: Size(2.0, 2.0, 2.0))


@dataclass
class HeightRange:
    """Tier count range, inclusive on both ends."""
    min: int = 5
    max: int = 10


@dataclass
class MaterialParameters:
    """Material overrides; None leaves the biome value in place."""
    roughness: Optional[float] = 0.7
    metalness: Optional[float] = 0.1
    opacity: Optional[float] = 1.0
    env_map_intensity: Optional[float] = 1.0


@dataclass
class NodeParameters:
    shape: ShapeKind = ShapeKind.CUBE
    size: SizeRange = field(default_factory=SizeRange)


@dataclass
class TowerParameters:
    height: HeightRange = field(default_factory=HeightRange)
    stack_pattern: StackPattern = StackPattern.ALTERNATING
    decoration_density: float = 1.0


@dataclass
class AnimationParameters:
    # Consumed by the render loop only
    enabled: bool = True
    speed: float = 1.0
    wind_strength: float = 1.0


@dataclass
class SceneParameters:
    """Complete configuration for one tower build."""
    current_biome: BiomeType = BiomeType.FOREST
    node: NodeParameters = field(default_factory=NodeParameters)
    tower: TowerParameters = field(default_factory=TowerParameters)
    animation: AnimationParameters = field(default_factory=AnimationParameters)
    material: MaterialParameters = field(default_factory=MaterialParameters)

    def copy(self) -> SceneParameters:
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["current_biome"] = self.current_biome.value
        data["node"]["shape"] = self.node.shape.value
        data["tower"]["stack_pattern"] = self.tower.stack_pattern.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SceneParameters:
        """Build parameters from a (possibly partial) dictionary.

        Missing keys keep their defaults. Both snake_case keys and the
        camelCase keys used by the parameter panel (currentBiome,
        stackPattern, decorationDensity, envMapIntensity, windStrength)
        are accepted.

        Raises:
            InvalidConfigurationError: On unknown enum values or values of
                the wrong type.
        """
        if not isinstance(data, dict):
            raise InvalidConfigurationError(f"Expected a mapping, got {type(data).__name__}")

        params = cls()
        try:
            biome = _get(data, "current_biome", "currentBiome")
            if biome is not None:
                params.current_biome = coerce_enum(BiomeType, biome)

            node = data.get("node") or {}
            if "shape" in node:
                params.node.shape = coerce_enum(ShapeKind, node["shape"])
            size = node.get("size") or {}
            if "min" in size:
                params.node.size.min = _size_from_dict(size["min"], params.node.size.min)
            if "max" in size:
                params.node.size.max = _size_from_dict(size["max"], params.node.size.max)

            tower = data.get("tower") or {}
            height = tower.get("height") or {}
            if "min" in height:
                params.tower.height.min = int(height["min"])
            if "max" in height:
                params.tower.height.max = int(height["max"])
            pattern = _get(tower, "stack_pattern", "stackPattern")
            if pattern is not None:
                params.tower.stack_pattern = coerce_enum(StackPattern, pattern)
            density = _get(tower, "decoration_density", "decorationDensity")
            if density is not None:
                params.tower.decoration_density = float(density)

            animation = data.get("animation") or {}
            if "enabled" in animation:
                params.animation.enabled = bool(animation["enabled"])
            if "speed" in animation:
                params.animation.speed = float(animation["speed"])
            wind = _get(animation, "wind_strength", "windStrength")
            if wind is not None:
                params.animation.wind_strength = float(wind)

            material = data.get("material") or {}
            for key in ("roughness", "metalness", "opacity"):
                if key in material:
                    setattr(params.material, key, _optional_float(material[key]))
            env = _get(material, "env_map_intensity", "envMapIntensity")
            if env is not None:
                params.material.env_map_intensity = float(env)
        except (TypeError, ValueError, AttributeError) as exc:
            if isinstance(exc, InvalidConfigurationError):
                raise
            raise InvalidConfigurationError(f"Malformed configuration: {exc}") from exc

        return params


def _get(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _size_from_dict(data: Dict[str, Any], fallback: Size) -> Size:
    """Accept {width, height, depth} or the short {w, h, d} form."""
    width = _get(data, "width", "w")
    height = _get(data, "height", "h")
    depth = _get(data, "depth", "d")
    return Size(
        width=float(fallback.width if width is None else width),
        height=float(fallback.height if height is None else height),
        depth=float(fallback.depth if depth is None else depth),
    )


_DEFAULT_PARAMETERS = SceneParameters()


def default_parameters() -> SceneParameters:
    """Return a fresh copy of the default scene parameters."""
    return _DEFAULT_PARAMETERS.copy()
