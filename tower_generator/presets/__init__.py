"""
Tower presets: named archetypes that overwrite shape, height, pattern,
decoration density and material settings in bulk.
"""

from .base import TowerPreset
from .catalog import PRESET_CATALOG, PresetCatalog

__all__ = ['TowerPreset', 'PRESET_CATALOG', 'PresetCatalog']
