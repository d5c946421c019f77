"""
Tower generation core: materials, nodes, decorations, pooling and the
tower builder.

Usage:
    from tower_generator.generators import TowerBuilder
    from tower_generator.config import default_parameters

    tower = TowerBuilder().build(default_parameters())
"""

from .types import (
    BiomeType,
    ShapeKind,
    StackPattern,
    Size,
    Node,
    Decoration,
    SurfaceDescriptor,
    ShapeDescriptor,
    DecorationDrawable,
    PlacedNode,
    Tower,
)
from .material_factory import MaterialProvider, MATERIAL_PROVIDER
from .node_factory import NodeFactory
from .decoration_placer import DecorationPlacer, DECORATION_PLACER, DECORATION_TYPES
from .decoration_pool import DecorationPool, DECORATION_POOL
from .tower_builder import TowerBuilder


def clear_caches() -> None:
    """Release every process-wide cache; they rebuild lazily."""
    MATERIAL_PROVIDER.clear_cache()
    DECORATION_PLACER.clear_cache()
    DECORATION_POOL.clear()


__all__ = [
    'BiomeType',
    'ShapeKind',
    'StackPattern',
    'Size',
    'Node',
    'Decoration',
    'SurfaceDescriptor',
    'ShapeDescriptor',
    'DecorationDrawable',
    'PlacedNode',
    'Tower',
    'MaterialProvider',
    'MATERIAL_PROVIDER',
    'NodeFactory',
    'DecorationPlacer',
    'DECORATION_PLACER',
    'DECORATION_TYPES',
    'DecorationPool',
    'DECORATION_POOL',
    'TowerBuilder',
    'clear_caches',
]
