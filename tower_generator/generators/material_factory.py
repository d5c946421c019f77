"""
Biome surface descriptors and cross-biome blending.

Base descriptors are built lazily once per biome and handed out as clones.
Blends between two biomes are cached by (from, to, factor rounded to two
decimals); the blend cache is emptied wholesale once it holds
BLEND_CACHE_LIMIT entries.
"""

from __future__ import annotations
import colorsys
import logging
import random
from typing import Dict, Optional, Tuple, TYPE_CHECKING

import numpy as np

from ..errors import InvalidConfigurationError
from .types import BiomeType, SurfaceDescriptor, coerce_enum, color_from_hex

if TYPE_CHECKING:
    from ..config.parameters import MaterialParameters

logger = logging.getLogger(__name__)


BIOME_COLORS: Dict[BiomeType, int] = {
    BiomeType.FOREST: 0x228B22,  # Forest green
    BiomeType.DESERT: 0xDEB887,  # Sand
    BiomeType.OCEAN: 0x4682B4,   # Steel blue
}

# (roughness, metalness) fixed per biome, applied over any base values
BIOME_FINISH: Dict[BiomeType, Tuple[float, float]] = {
    BiomeType.FOREST: (0.8, 0.1),
    BiomeType.DESERT: (0.9, 0.05),
    BiomeType.OCEAN: (0.4, 0.3),
}

DEFAULT_ROUGHNESS = 0.7
DEFAULT_METALNESS = 0.1
DEFAULT_ENV_MAP_INTENSITY = 1.0

BLEND_CACHE_LIMIT = 100

BlendKey = Tuple[BiomeType, BiomeType, float]


def _lerp(a, b, t: float):
    # Written so that t == 0 and t == 1 reproduce the endpoints exactly
    return a * (1.0 - t) + b * t


class MaterialProvider:
    """Produces and caches surface descriptors per biome."""

    def __init__(self):
        self._biome_surfaces: Dict[BiomeType, SurfaceDescriptor] = {}
        self._blend_cache: Dict[BlendKey, SurfaceDescriptor] = {}
        self._blend_cache_clears = 0

    # ------------------------------------------------------------------
    # Base descriptors
    # ------------------------------------------------------------------

    def surface_for(self, biome, overrides: Optional['MaterialParameters'] = None) -> SurfaceDescriptor:
        """Return a clone of the biome's base surface.

        Args:
            biome: BiomeType or its string value
            overrides: Optional material parameters. Opacity and env map
                intensity are applied to the returned clone; roughness and
                metalness are fixed per biome.

        Returns:
            A SurfaceDescriptor the caller owns.
        """
        biome = coerce_enum(BiomeType, biome)
        base = self._biome_surfaces.get(biome)
        if base is None:
            base = self._create_base_surface(biome)
            self._biome_surfaces[biome] = base
            logger.debug("Created base surface for %s", biome.value)

        surface = base.clone()
        if overrides is not None:
            apply_overrides(surface, overrides)
        return surface

    @staticmethod
    def _create_base_surface(biome: BiomeType) -> SurfaceDescriptor:
        surface = SurfaceDescriptor(
            color=color_from_hex(BIOME_COLORS[biome]),
            roughness=DEFAULT_ROUGHNESS,
            metalness=DEFAULT_METALNESS,
            env_map_intensity=DEFAULT_ENV_MAP_INTENSITY,
        )
        surface.roughness, surface.metalness = BIOME_FINISH[biome]
        return surface

    # ------------------------------------------------------------------
    # Blending
    # ------------------------------------------------------------------

    def blend(self, from_biome, to_biome, factor: float) -> SurfaceDescriptor:
        """Interpolate color, roughness and metalness between two biomes.

        factor 0 yields from_biome's values, factor 1 yields to_biome's.
        Opacity and the remaining fields are taken from from_biome.

        Raises:
            InvalidConfigurationError: If factor lies outside [0, 1] or a
                biome is unknown.
        """
        from_biome = coerce_enum(BiomeType, from_biome)
        to_biome = coerce_enum(BiomeType, to_biome)
        if not 0.0 <= factor <= 1.0:
            raise InvalidConfigurationError(f"Blend factor {factor} outside [0, 1]")

        key = (from_biome, to_biome, round(factor, 2))
        cached = self._blend_cache.get(key)
        if cached is not None:
            return cached.clone()

        source = self.surface_for(from_biome)
        if from_biome == to_biome:
            blended = source
        else:
            target = self.surface_for(to_biome)
            blended = source.clone()
            color = _lerp(np.asarray(source.color), np.asarray(target.color), factor)
            blended.color = tuple(float(c) for c in color)
            blended.roughness = _lerp(source.roughness, target.roughness, factor)
            blended.metalness = _lerp(source.metalness, target.metalness, factor)

        if len(self._blend_cache) >= BLEND_CACHE_LIMIT:
            logger.debug("Blend cache reached %d entries, clearing", len(self._blend_cache))
            self._blend_cache.clear()
            self._blend_cache_clears += 1
        self._blend_cache[key] = blended
        return blended.clone()

    @property
    def blend_cache_size(self) -> int:
        return len(self._blend_cache)

    @property
    def blend_cache_clears(self) -> int:
        """How many times the blend cache has been emptied for size."""
        return self._blend_cache_clears

    # ------------------------------------------------------------------
    # Variation
    # ------------------------------------------------------------------

    @staticmethod
    def random_variation(surface: SurfaceDescriptor, rng: Optional[random.Random] = None) -> SurfaceDescriptor:
        """Return a clone with saturation and lightness jittered by up to 10%."""
        rng = rng or random
        varied = surface.clone()
        h, l, s = colorsys.rgb_to_hls(*surface.color)
        s = min(s * rng.uniform(0.9, 1.1), 1.0)
        l = min(l * rng.uniform(0.9, 1.1), 1.0)
        varied.color = colorsys.hls_to_rgb(h, l, s)
        return varied

    def clear_cache(self) -> None:
        """Drop all base and blended descriptors."""
        self._biome_surfaces.clear()
        self._blend_cache.clear()
        logger.debug("Material caches cleared")


def apply_overrides(surface: SurfaceDescriptor, overrides: 'MaterialParameters') -> SurfaceDescriptor:
    """Apply caller opacity / env map intensity to a surface in place."""
    if overrides.opacity is not None:
        surface.opacity = overrides.opacity
        surface.transparent = overrides.opacity < 1.0
    if overrides.env_map_intensity is not None:
        surface.env_map_intensity = overrides.env_map_intensity
    return surface


# Global singleton
MATERIAL_PROVIDER = MaterialProvider()
