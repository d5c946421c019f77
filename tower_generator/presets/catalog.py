"""
Preset catalog: registry of tower archetypes per biome.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional

from ..errors import InvalidConfigurationError
from ..generators.types import BiomeType, coerce_enum
from .base import TowerPreset

logger = logging.getLogger(__name__)


class PresetCatalog:
    """Registry mapping names to tower presets, in registration order."""

    def __init__(self):
        self._presets: Dict[str, TowerPreset] = {}

    def register(self, preset: TowerPreset) -> None:
        """Register a preset in the catalog."""
        if preset.name in self._presets:
            logger.warning("Preset %r re-registered", preset.name)
        self._presets[preset.name] = preset

    def get_preset(self, name: str) -> Optional[TowerPreset]:
        """Get a preset by name (case-insensitive)."""
        if name in self._presets:
            return self._presets[name]
        name_lower = name.lower()
        for pname, preset in self._presets.items():
            if pname.lower() == name_lower:
                return preset
        return None

    def require(self, name: str) -> TowerPreset:
        """Like get_preset(), but an unknown name is a configuration error."""
        preset = self.get_preset(name)
        if preset is None:
            raise InvalidConfigurationError(f"Unknown tower preset {name!r}")
        return preset

    def list_presets(self, biome=None) -> List[str]:
        """
        List preset names, optionally filtered by biome.

        Returns:
            Sorted list of preset names
        """
        if biome is None:
            return sorted(self._presets.keys())
        return sorted(p.name for p in self.presets_for(biome))

    def presets_for(self, biome) -> List[TowerPreset]:
        """Presets of one biome: Core archetypes first, then Unique ones."""
        biome = coerce_enum(BiomeType, biome)
        presets = [p for p in self._presets.values() if p.biome is biome]
        return sorted(presets, key=lambda p: p.category != "Core")

    def default_for(self, biome) -> Optional[TowerPreset]:
        presets = self.presets_for(biome)
        if not presets:
            logger.warning("No presets registered for biome %s", biome)
            return None
        return presets[0]

    def list_categories(self) -> List[str]:
        return sorted({p.category for p in self._presets.values()})

    def __len__(self) -> int:
        return len(self._presets)


# Global singleton
PRESET_CATALOG = PresetCatalog()

# Import and register built-in presets
from .builtin import register_builtin_presets
register_builtin_presets(PRESET_CATALOG)
