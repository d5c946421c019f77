"""
Node construction and node geometry mapping.

A node's local origin sits at its base; create_shape() lifts the drawable by
half the node height so it rests on that origin.
"""

from __future__ import annotations
from typing import Optional, TYPE_CHECKING

from ..errors import InvalidConfigurationError
from .material_factory import MATERIAL_PROVIDER, MaterialProvider
from .types import Node, ShapeDescriptor, ShapeKind, Size, SurfaceDescriptor, coerce_enum, shape

if TYPE_CHECKING:
    from ..config.parameters import MaterialParameters


# Tessellation constants (fixed, not configurable)
RADIAL_SEGMENTS = 32
SPHERE_SEGMENTS = 32
TORUS_RADIAL_SEGMENTS = 16
TORUS_TUBULAR_SEGMENTS = 32


class NodeFactory:
    """Builds tier nodes and their drawable shapes."""

    def __init__(self, materials: Optional[MaterialProvider] = None):
        self.materials = materials or MATERIAL_PROVIDER

    def generate_node(
        self,
        shape_kind,
        size: Size,
        biome,
        material_overrides: Optional['MaterialParameters'] = None,
        surface: Optional[SurfaceDescriptor] = None,
    ) -> Node:
        """Create a node for one tier.

        Args:
            shape_kind: ShapeKind or its string value
            size: Node dimensions
            biome: Biome whose base surface the node receives
            material_overrides: Optional opacity / env map overrides
            surface: Already-resolved surface (e.g. a biome blend); when
                given, the biome surface lookup is skipped

        Raises:
            InvalidConfigurationError: If shape_kind is not a ShapeKind.
        """
        shape_kind = coerce_enum(ShapeKind, shape_kind)
        if surface is None:
            surface = self.materials.surface_for(biome, material_overrides)
        return Node(shape=shape_kind, size=size, surface=surface)

    @staticmethod
    def create_shape(node: Node) -> ShapeDescriptor:
        """Map a node's shape and size to a drawable shape descriptor."""
        size = node.size
        lift = (0.0, size.height / 2, 0.0)

        if node.shape is ShapeKind.CUBE:
            return shape("box", translate=lift,
                         width=size.width, height=size.height, depth=size.depth)
        if node.shape is ShapeKind.CYLINDER:
            return shape("cylinder", translate=lift,
                         radius_top=size.width / 2, radius_bottom=size.width / 2,
                         height=size.height, radial_segments=RADIAL_SEGMENTS)
        if node.shape is ShapeKind.SPHERE:
            radius = min(size.width, size.height, size.depth) / 2
            return shape("sphere", translate=lift, radius=radius,
                         width_segments=SPHERE_SEGMENTS, height_segments=SPHERE_SEGMENTS)
        if node.shape is ShapeKind.CONE:
            return shape("cone", translate=lift, radius=size.width / 2,
                         height=size.height, radial_segments=RADIAL_SEGMENTS)
        if node.shape is ShapeKind.TORUS:
            return shape("torus", translate=lift,
                         radius=size.width / 2, tube=size.height / 4,
                         radial_segments=TORUS_RADIAL_SEGMENTS,
                         tubular_segments=TORUS_TUBULAR_SEGMENTS)

        raise InvalidConfigurationError(f"Unsupported shape: {node.shape!r}")
