"""
Live scene parameters with change notification.

ParameterController is the model behind the parameter panel: it owns the
current SceneParameters, applies presets, and emits parameters_changed after
every edit so the scene can regenerate. Only QtCore is used, so no
QApplication is needed.
"""

from __future__ import annotations
import logging
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal

from ..generators.types import BiomeType, StackPattern, coerce_enum
from ..presets import PRESET_CATALOG, PresetCatalog, TowerPreset
from .parameters import HeightRange, SceneParameters, default_parameters

logger = logging.getLogger(__name__)


class ParameterController(QObject):
    """Owns the current scene parameters and announces changes."""

    parameters_changed = pyqtSignal()
    preset_changed = pyqtSignal(str)

    def __init__(self, catalog: Optional[PresetCatalog] = None, parent=None):
        super().__init__(parent)
        self._catalog = catalog or PRESET_CATALOG
        self._parameters = default_parameters()
        self._current_preset = self._catalog.default_for(self._parameters.current_biome)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def parameters(self) -> SceneParameters:
        return self._parameters

    @property
    def current_preset(self) -> Optional[TowerPreset]:
        return self._current_preset

    # ------------------------------------------------------------------
    # Edits
    # ------------------------------------------------------------------

    def set_biome(self, biome) -> None:
        """Switch biome; the preset list moves to that biome's first preset.

        The preset is only offered, not applied, matching the panel where
        picking a biome refreshes the preset list without touching the
        remaining settings.
        """
        biome = coerce_enum(BiomeType, biome)
        self._parameters.current_biome = biome
        self._current_preset = self._catalog.default_for(biome)
        if self._current_preset is not None:
            self.preset_changed.emit(self._current_preset.name)
        self._notify()

    def select_preset(self, name: str) -> TowerPreset:
        """Apply a preset by name (case-insensitive).

        Raises:
            InvalidConfigurationError: If no preset has that name.
        """
        preset = self._catalog.require(name)
        preset.apply_to(self._parameters)
        self._current_preset = preset
        logger.info("Applied preset %s", preset.name)
        self.preset_changed.emit(preset.name)
        self._notify()
        return preset

    def set_height_range(self, minimum: int, maximum: int) -> None:
        self._parameters.tower.height = HeightRange(int(minimum), int(maximum))
        self._notify()

    def set_stack_pattern(self, pattern) -> None:
        self._parameters.tower.stack_pattern = coerce_enum(StackPattern, pattern)
        self._notify()

    def set_decoration_density(self, density: float) -> None:
        self._parameters.tower.decoration_density = float(density)
        self._notify()

    def set_material(self, roughness: Optional[float] = None,
                     metalness: Optional[float] = None,
                     opacity: Optional[float] = None) -> None:
        material = self._parameters.material
        if roughness is not None:
            material.roughness = roughness
        if metalness is not None:
            material.metalness = metalness
        if opacity is not None:
            material.opacity = opacity
        self._notify()

    def regenerate(self) -> None:
        """Request a new tower without changing any parameter."""
        self._notify()

    def reset_to_defaults(self) -> None:
        self._parameters = default_parameters()
        self._current_preset = self._catalog.default_for(self._parameters.current_biome)
        self._notify()

    def _notify(self) -> None:
        self.parameters_changed.emit()
