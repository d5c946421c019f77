"""
Tower generation.

TowerBuilder.build() stacks one node per tier, shrinking upper tiers by up to
30%, dresses every node with pooled decorations adjusted by tier position and
biome, and applies the configured stack pattern to each node.

Tier progress is tier / tier_count, so it ranges over [0, 1). Randomness is
drawn from the builder's own random.Random, which is handed to the
decoration placer per call; pass a seeded instance to make a build
repeatable.
"""

from __future__ import annotations
import logging
import math
import random
from typing import Optional, TYPE_CHECKING

from ..errors import InvalidConfigurationError
from .decoration_placer import DECORATION_PLACER, DecorationPlacer
from .decoration_pool import DECORATION_POOL, DecorationPool
from .material_factory import MATERIAL_PROVIDER, MaterialProvider, apply_overrides
from .node_factory import NodeFactory
from .types import (
    BiomeType, Decoration, DecorationDrawable, PlacedNode, ShapeKind, Size,
    StackPattern, SurfaceDescriptor, Tower, coerce_enum,
)

if TYPE_CHECKING:
    from ..config.parameters import SceneParameters

logger = logging.getLogger(__name__)


# Upper tiers shrink linearly to (1 - TIER_SHRINK) of their drawn size
TIER_SHRINK = 0.3

# Tier-edge decoration bias
LOW_TIER_LIMIT = 0.3
LOW_TIER_DROP = 0.2
LOW_TIER_SCALE = 1.2
HIGH_TIER_LIMIT = 0.7
HIGH_TIER_RISE = 0.1
HIGH_TIER_SCALE = 0.8

# Stack patterns
ALTERNATING_YAW = math.pi / 4
CLUSTER_RADIUS = 0.5
CLUSTER_STEP = math.pi / 4
CLUSTER_TILT = 0.1


class TowerBuilder:
    """
    Builds towers from scene parameters.

    The material provider, placer and pool default to process-wide
    instances so their caches survive across builds; tests pass their own.
    """

    def __init__(
        self,
        materials: Optional[MaterialProvider] = None,
        placer: Optional[DecorationPlacer] = None,
        pool: Optional[DecorationPool] = None,
        rng: Optional[random.Random] = None,
    ):
        self.rng = rng or random.Random()
        self.materials = materials or MATERIAL_PROVIDER
        if placer is None:
            placer = pool.placer if pool is not None else DECORATION_PLACER
        if pool is None:
            pool = DECORATION_POOL if placer is DECORATION_PLACER else DecorationPool(placer)
        self.placer = placer
        self.pool = pool
        self.node_factory = NodeFactory(self.materials)

    def build(
        self,
        params: SceneParameters,
        previous_biome=None,
        transition_factor: float = 0.0,
    ) -> Tower:
        """Generate a complete tower.

        Args:
            params: Scene parameters
            previous_biome: Biome being transitioned away from; used only
                when transition_factor > 0
            transition_factor: Progress of a biome transition in [0, 1];
                0 means no transition

        Returns:
            Tower with one PlacedNode per tier, bottom to top.

        Raises:
            InvalidConfigurationError: On an unknown biome, shape or stack
                pattern, an inverted height range, or a transition factor
                outside [0, 1].
        """
        biome = coerce_enum(BiomeType, params.current_biome)
        shape_kind = coerce_enum(ShapeKind, params.node.shape)
        pattern = coerce_enum(StackPattern, params.tower.stack_pattern)
        if not 0.0 <= transition_factor <= 1.0:
            raise InvalidConfigurationError(f"Transition factor {transition_factor} outside [0, 1]")
        if transition_factor > 0:
            previous_biome = coerce_enum(BiomeType, previous_biome if previous_biome is not None else biome)

        try:
            tier_count = self.rng.randint(params.tower.height.min, params.tower.height.max)
        except ValueError as exc:
            raise InvalidConfigurationError(
                f"Invalid height range {params.tower.height.min}..{params.tower.height.max}"
            ) from exc
        tower = Tower(biome=biome, stack_pattern=pattern)
        self.pool.begin_pass()

        current_height = 0.0
        for tier in range(tier_count):
            tier_progress = tier / tier_count
            size = self._draw_size(params).scaled(1 - TIER_SHRINK * tier_progress)

            surface = self._resolve_surface(params, biome, previous_biome, transition_factor)
            node = self.node_factory.generate_node(
                shape_kind, size, biome, params.material, surface=surface
            )
            placed = PlacedNode(
                node=node,
                tier=tier,
                tier_progress=tier_progress,
                base_height=current_height,
                geometry=self.node_factory.create_shape(node),
                position=(0.0, current_height, 0.0),
            )

            for decoration in self.placer.generate(node, biome, rng=self.rng):
                drawable = self._acquire_drawable(decoration, biome)
                placed.attach(drawable)
                self._adjust_decoration(drawable, decoration.type, size, tier_progress, biome)

            self._apply_stack_pattern(placed, pattern)

            tower.nodes.append(placed)
            current_height += size.height
            logger.debug("Tier %d: %s h=%.3f, %d decorations", tier, shape_kind.value,
                         size.height, len(placed.decorations))

        released = self.pool.release_unattached()
        logger.info("Built %s tower: %d tiers, height %.2f, %d decorations (%d pooled, %d released)",
                    biome.value, tier_count, current_height, tower.decoration_count,
                    len(self.pool), released)
        return tower

    # ------------------------------------------------------------------
    # Tier helpers
    # ------------------------------------------------------------------

    def _draw_size(self, params: SceneParameters) -> Size:
        lo, hi = params.node.size.min, params.node.size.max
        return Size(
            width=self.rng.uniform(lo.width, hi.width),
            height=self.rng.uniform(lo.height, hi.height),
            depth=self.rng.uniform(lo.depth, hi.depth),
        )

    def _resolve_surface(self, params: SceneParameters, biome: BiomeType,
                         previous_biome: Optional[BiomeType],
                         transition_factor: float) -> SurfaceDescriptor:
        if transition_factor > 0:
            surface = self.materials.blend(previous_biome, biome, transition_factor)
            return apply_overrides(surface, params.material)
        return self.materials.surface_for(biome, params.material)

    def _acquire_drawable(self, decoration: Decoration, biome: BiomeType) -> DecorationDrawable:
        drawable = self.pool.acquire(decoration.type)
        if drawable is None:
            drawable = self.pool.construct(decoration.type, biome)
        else:
            # Pooled drawables may come from a tower of another biome
            drawable.surface = self.placer.material_for(decoration.type, biome)
        drawable.visible = True
        drawable.place(decoration)
        return drawable

    @staticmethod
    def _adjust_decoration(drawable: DecorationDrawable, decoration_type: str,
                           size: Size, tier_progress: float, biome: BiomeType) -> None:
        """Apply tier-edge bias, then the biome-specific rule."""
        height = size.height

        if tier_progress < LOW_TIER_LIMIT:
            drawable.position[1] -= height * LOW_TIER_DROP
            drawable.scale *= LOW_TIER_SCALE
        elif tier_progress > HIGH_TIER_LIMIT:
            drawable.position[1] += height * HIGH_TIER_RISE
            drawable.scale *= HIGH_TIER_SCALE

        if biome is BiomeType.FOREST:
            if decoration_type == "vine" and tier_progress > 0.5:
                drawable.scale[1] *= 1.5
                drawable.position[1] -= height * 0.1
        elif biome is BiomeType.OCEAN:
            if decoration_type == "coral" and tier_progress > 0.6:
                drawable.scale[1] *= 1.3
                drawable.position[1] += height * 0.1
        elif biome is BiomeType.DESERT:
            if decoration_type == "moss" and tier_progress < 0.4:
                drawable.scale *= 1.4

    def _apply_stack_pattern(self, placed: PlacedNode, pattern: StackPattern) -> None:
        tier, progress = placed.tier, placed.tier_progress
        _, y, _ = placed.position

        if pattern is StackPattern.ALTERNATING:
            yaw = ALTERNATING_YAW * (1 + progress * 0.5)
            placed.rotation = (0.0, yaw if tier % 2 == 0 else -yaw, 0.0)
        elif pattern is StackPattern.CLUSTERED:
            angle = tier * CLUSTER_STEP
            radius = CLUSTER_RADIUS * (1 + progress * 0.5)
            placed.position = (math.cos(angle) * radius, y, math.sin(angle) * radius)
            placed.rotation = (
                (self.rng.random() - 0.5) * CLUSTER_TILT * progress,
                0.0,
                (self.rng.random() - 0.5) * CLUSTER_TILT * progress,
            )
        elif pattern in (StackPattern.SPIRAL, StackPattern.RANDOM):
            # No bespoke transform for these patterns
            pass
        else:
            raise InvalidConfigurationError(f"Unsupported stack pattern: {pattern!r}")
