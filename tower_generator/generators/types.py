"""
Core data types for tower generation.

Defines the closed enumerations (biome, shape, stack pattern), the per-tier
Node and Decoration records, and the descriptor types handed to the rendering
collaborator:

- SurfaceDescriptor: color/roughness/metalness bundle describing appearance
- ShapeDescriptor: primitive name plus parameters describing geometry
- DecorationDrawable: a pooled, placeable decoration instance
- PlacedNode / Tower: the output of one build
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

import numpy as np

from ..errors import InvalidConfigurationError


Vec3 = Tuple[float, float, float]
Color = Tuple[float, float, float]  # Linear RGB, each channel in [0, 1]

E = TypeVar("E", bound=Enum)


class BiomeType(Enum):
    """Environment theme selecting decoration vocabulary and surface tint"""
    FOREST = "forest"
    DESERT = "desert"
    OCEAN = "ocean"


class ShapeKind(Enum):
    """Node shapes; determines how a Size maps to geometry"""
    CUBE = "cube"
    CYLINDER = "cylinder"
    SPHERE = "sphere"
    CONE = "cone"
    TORUS = "torus"


class StackPattern(Enum):
    """Per-tier spatial arrangement rule"""
    ALTERNATING = "alternating"
    CLUSTERED = "clustered"
    SPIRAL = "spiral"
    RANDOM = "random"


def coerce_enum(enum_cls: Type[E], value: Any) -> E:
    """Convert a value (member or raw string) into a member of enum_cls.

    Raises:
        InvalidConfigurationError: If value is not a member of the enumeration.
    """
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(m.value for m in enum_cls)
        raise InvalidConfigurationError(
            f"Unknown {enum_cls.__name__} {value!r} (expected one of: {choices})"
        ) from None


def color_from_hex(value: int) -> Color:
    """Split a 0xRRGGBB integer into float channels."""
    return (
        ((value >> 16) & 0xFF) / 255.0,
        ((value >> 8) & 0xFF) / 255.0,
        (value & 0xFF) / 255.0,
    )


def color_to_hex(color: Color) -> int:
    r, g, b = (int(round(min(max(c, 0.0), 1.0) * 255)) for c in color)
    return (r << 16) | (g << 8) | b


@dataclass
class Size:
    width: float
    height: float
    depth: float

    def scaled(self, factor: float) -> Size:
        return Size(self.width * factor, self.height * factor, self.depth * factor)

    def to_dict(self) -> Dict[str, float]:
        return {"width": self.width, "height": self.height, "depth": self.depth}


@dataclass
class SurfaceDescriptor:
    """
    Appearance of a drawable.

    Instances handed out by the caches are always clones, so callers may
    mutate their copy freely.
    """
    color: Color
    roughness: float = 0.7
    metalness: float = 0.1
    opacity: float = 1.0
    env_map_intensity: float = 1.0
    transparent: bool = False
    double_sided: bool = False
    physical: bool = False

    def clone(self) -> SurfaceDescriptor:
        return replace(self)

    @property
    def hex_color(self) -> int:
        return color_to_hex(self.color)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "color": f"#{self.hex_color:06x}",
            "roughness": self.roughness,
            "metalness": self.metalness,
            "opacity": self.opacity,
            "env_map_intensity": self.env_map_intensity,
            "transparent": self.transparent,
            "double_sided": self.double_sided,
            "physical": self.physical,
        }


@dataclass(frozen=True)
class ShapeDescriptor:
    """
    Geometry description for the rendering collaborator.

    Attributes:
        primitive: Primitive name ("box", "cylinder", "sphere", "cone",
            "torus", "circle", "plane", "icosahedron" or "composite")
        params: Primitive constructor arguments (radius, segments, ...)
        translate: Offset baked into the geometry
        scale: Per-axis scale baked into the geometry
        rotate: Euler XYZ rotation baked into the geometry
        parts: Sub-shapes of a composite
    """
    primitive: str
    params: Tuple[Tuple[str, float], ...] = ()
    translate: Vec3 = (0.0, 0.0, 0.0)
    scale: Vec3 = (1.0, 1.0, 1.0)
    rotate: Vec3 = (0.0, 0.0, 0.0)
    parts: Tuple[ShapeDescriptor, ...] = ()

    def param(self, name: str) -> float:
        return dict(self.params)[name]

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "primitive": self.primitive,
            "params": dict(self.params),
            "translate": list(self.translate),
            "scale": list(self.scale),
            "rotate": list(self.rotate),
        }
        if self.parts:
            data["parts"] = [p.to_dict() for p in self.parts]
        return data


def shape(primitive: str, translate: Vec3 = (0.0, 0.0, 0.0),
          scale: Vec3 = (1.0, 1.0, 1.0), rotate: Vec3 = (0.0, 0.0, 0.0),
          **params: float) -> ShapeDescriptor:
    """Convenience constructor taking primitive parameters as keywords."""
    return ShapeDescriptor(
        primitive=primitive,
        params=tuple(params.items()),
        translate=translate,
        scale=scale,
        rotate=rotate,
    )


@dataclass
class Node:
    """One structural tier of a tower."""
    shape: ShapeKind
    size: Size
    surface: SurfaceDescriptor
    user_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Decoration:
    """A decoration placement in its owning node's local space."""
    type: str
    position: Vec3
    scale: float
    rotation: Optional[Vec3] = None


@dataclass(eq=False)
class DecorationDrawable:
    """
    A constructed decoration that can be pooled and reused.

    Identity matters here: the pool hands out the same object across
    generations, so equality is left as identity.
    """
    decoration_type: str
    geometry: ShapeDescriptor
    surface: SurfaceDescriptor
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    scale: np.ndarray = field(default_factory=lambda: np.ones(3))
    rotation: Vec3 = (0.0, 0.0, 0.0)
    visible: bool = False
    parent: Optional[PlacedNode] = None

    def place(self, decoration: Decoration) -> None:
        """Reset the transform to a decoration's local placement."""
        self.position = np.array(decoration.position, dtype=float)
        self.scale = np.full(3, decoration.scale, dtype=float)
        self.rotation = decoration.rotation or (0.0, 0.0, 0.0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.decoration_type,
            "position": self.position.tolist(),
            "scale": self.scale.tolist(),
            "rotation": list(self.rotation),
            "geometry": self.geometry.to_dict(),
            "surface": self.surface.to_dict(),
        }


@dataclass(eq=False)
class PlacedNode:
    """
    A node positioned in the tower.

    Attributes:
        node: The structural node
        tier: Tier index, bottom to top
        tier_progress: tier / tier count
        base_height: Cumulative height of all tiers below
        geometry: Drawable shape descriptor (already lifted by height / 2)
        position: Node position; Y is base_height, X/Z set by stack pattern
        rotation: Euler XYZ set by stack pattern
        decorations: Attached decoration drawables
    """
    node: Node
    tier: int
    tier_progress: float
    base_height: float
    geometry: ShapeDescriptor
    position: Vec3 = (0.0, 0.0, 0.0)
    rotation: Vec3 = (0.0, 0.0, 0.0)
    decorations: List[DecorationDrawable] = field(default_factory=list)

    def attach(self, drawable: DecorationDrawable) -> None:
        drawable.parent = self
        self.decorations.append(drawable)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tier": self.tier,
            "shape": self.node.shape.value,
            "size": self.node.size.to_dict(),
            "surface": self.node.surface.to_dict(),
            "base_height": self.base_height,
            "position": list(self.position),
            "rotation": list(self.rotation),
            "geometry": self.geometry.to_dict(),
            "decorations": [d.to_dict() for d in self.decorations],
        }


@dataclass
class Tower:
    """Result of one TowerBuilder.build() call."""
    biome: BiomeType
    stack_pattern: StackPattern
    nodes: List[PlacedNode] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def total_height(self) -> float:
        if not self.nodes:
            return 0.0
        top = self.nodes[-1]
        return top.base_height + top.node.size.height

    @property
    def decoration_count(self) -> int:
        return sum(len(n.decorations) for n in self.nodes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "biome": self.biome.value,
            "stack_pattern": self.stack_pattern.value,
            "total_height": self.total_height,
            "nodes": [n.to_dict() for n in self.nodes],
        }
