"""
Reuse pool for decoration drawables, keyed by decoration type.

A drawable is free when it is not visible. The builder calls begin_pass()
before each generation so drawables still held by the previous (discarded)
tower become free again; within one pass a handle is therefore attached to
at most one node.
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional

from .decoration_placer import DECORATION_PLACER, DecorationPlacer
from .types import DecorationDrawable

logger = logging.getLogger(__name__)


class DecorationPool:
    """Pool of constructed decoration drawables."""

    def __init__(self, placer: Optional[DecorationPlacer] = None):
        self.placer = placer or DecorationPlacer()
        self._drawables: Dict[str, List[DecorationDrawable]] = {}

    def acquire(self, decoration_type: str) -> Optional[DecorationDrawable]:
        """Return the first free drawable of this type, or None. Never allocates."""
        for drawable in self._drawables.get(decoration_type, ()):
            if not drawable.visible:
                return drawable
        return None

    def release(self, drawable: DecorationDrawable) -> None:
        drawable.visible = False
        drawable.parent = None

    def construct(self, decoration_type: str, biome) -> DecorationDrawable:
        """Build a new drawable and register it in the pool."""
        drawable = self.placer.create_drawable(decoration_type, biome)
        self._drawables.setdefault(decoration_type, []).append(drawable)
        logger.debug("Pool constructed %s (%d of type)", decoration_type,
                     len(self._drawables[decoration_type]))
        return drawable

    def begin_pass(self) -> None:
        """Take every drawable back from the previous tower."""
        for drawable in self:
            self.release(drawable)

    def release_unattached(self) -> int:
        """Release drawables not attached to a node; returns how many."""
        released = 0
        for drawable in self:
            if drawable.parent is None:
                self.release(drawable)
                released += 1
        return released

    def count(self, decoration_type: str) -> int:
        return len(self._drawables.get(decoration_type, ()))

    def in_use(self) -> int:
        return sum(1 for d in self if d.visible)

    def clear(self) -> None:
        self._drawables.clear()

    def __iter__(self):
        for drawables in self._drawables.values():
            yield from drawables

    def __len__(self) -> int:
        return sum(len(d) for d in self._drawables.values())


# Global singleton
DECORATION_POOL = DecorationPool(DECORATION_PLACER)
