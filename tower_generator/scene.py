"""
Scene driver: regenerates the tower whenever parameters change.

This is the non-rendering half of the interactive scene. Rendering, camera
and window handling belong to the host; the host reads current_tower after
each regeneration (or listens to tower_generated).
"""

from __future__ import annotations
import logging
from typing import Optional

from PyQt5.QtCore import QObject, pyqtSignal

from .config.controller import ParameterController
from .errors import InvalidConfigurationError, TowerGeneratorError
from .generators.tower_builder import TowerBuilder
from .generators.types import BiomeType, Tower

logger = logging.getLogger(__name__)


class TowerScene(QObject):
    """Keeps one tower in sync with a ParameterController."""

    tower_generated = pyqtSignal(object)
    generation_failed = pyqtSignal(str)

    def __init__(self, controller: Optional[ParameterController] = None,
                 builder: Optional[TowerBuilder] = None, parent=None):
        super().__init__(parent)
        self.controller = controller or ParameterController()
        self.builder = builder or TowerBuilder()
        self.previous_biome: BiomeType = self.controller.parameters.current_biome
        self._transition_factor = 0.0
        self._current_tower: Optional[Tower] = None

        self.controller.parameters_changed.connect(self._on_parameters_changed)

    @property
    def current_tower(self) -> Optional[Tower]:
        return self._current_tower

    @property
    def transition_factor(self) -> float:
        return self._transition_factor

    def set_transition_factor(self, factor: float) -> None:
        """Set biome transition progress; 0 disables blending.

        Takes effect on the next regeneration.
        """
        if not 0.0 <= factor <= 1.0:
            raise InvalidConfigurationError(f"Transition factor {factor} outside [0, 1]")
        self._transition_factor = factor

    def begin_transition(self) -> None:
        """Remember the current biome as the one being left."""
        self.previous_biome = self.controller.parameters.current_biome

    def regenerate(self) -> Tower:
        """Discard the current tower and build a new one."""
        self._current_tower = None
        tower = self.builder.build(
            self.controller.parameters,
            previous_biome=self.previous_biome,
            transition_factor=self._transition_factor,
        )
        self._current_tower = tower
        self.tower_generated.emit(tower)
        return tower

    def _on_parameters_changed(self) -> None:
        # Runs as a slot: exceptions cannot propagate past Qt
        try:
            self.regenerate()
        except TowerGeneratorError as e:
            logger.error("Tower generation failed: %s", e)
            self.generation_failed.emit(str(e))
