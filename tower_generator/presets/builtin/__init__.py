"""
Built-in tower presets.
"""

from .forest import ANCIENT_RUIN, OVERGROWN_SPIRE, HANGING_GARDENS
from .desert import SANDSTONE_PILLAR, DESERT_TEMPLE, MIRAGE_TOWER
from .ocean import CORAL_SPIRE, SUNKEN_RUIN, CRYSTAL_GROTTO


BUILTIN_PRESETS = [
    ANCIENT_RUIN, OVERGROWN_SPIRE, HANGING_GARDENS,
    SANDSTONE_PILLAR, DESERT_TEMPLE, MIRAGE_TOWER,
    CORAL_SPIRE, SUNKEN_RUIN, CRYSTAL_GROTTO,
]


def register_builtin_presets(catalog):
    """Register all built-in presets with the catalog."""
    for preset in BUILTIN_PRESETS:
        catalog.register(preset)


__all__ = [
    'ANCIENT_RUIN',
    'OVERGROWN_SPIRE',
    'HANGING_GARDENS',
    'SANDSTONE_PILLAR',
    'DESERT_TEMPLE',
    'MIRAGE_TOWER',
    'CORAL_SPIRE',
    'SUNKEN_RUIN',
    'CRYSTAL_GROTTO',
    'BUILTIN_PRESETS',
    'register_builtin_presets',
]
