"""
Scene configuration: parameter dataclasses and defaults.

The Qt-backed ParameterController lives in config.controller and is imported
explicitly so that building towers does not require Qt.
"""

from .parameters import (
    AnimationParameters,
    HeightRange,
    MaterialParameters,
    NodeParameters,
    SceneParameters,
    SizeRange,
    TowerParameters,
    default_parameters,
)

__all__ = [
    'AnimationParameters',
    'HeightRange',
    'MaterialParameters',
    'NodeParameters',
    'SceneParameters',
    'SizeRange',
    'TowerParameters',
    'default_parameters',
]
