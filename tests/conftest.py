"""
Shared fixtures: seeded randomness and isolated cache instances.

Every fixture builds fresh provider / placer / pool objects so tests never
share the process-wide caches.
"""

import random

import pytest

from tower_generator.config.parameters import default_parameters
from tower_generator.generators.decoration_placer import DecorationPlacer
from tower_generator.generators.decoration_pool import DecorationPool
from tower_generator.generators.material_factory import MaterialProvider
from tower_generator.generators.tower_builder import TowerBuilder


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def materials():
    return MaterialProvider()


@pytest.fixture
def placer(materials, rng):
    return DecorationPlacer(materials, rng)


@pytest.fixture
def pool(placer):
    return DecorationPool(placer)


@pytest.fixture
def builder(materials, placer, pool, rng):
    return TowerBuilder(materials=materials, placer=placer, pool=pool, rng=rng)


@pytest.fixture
def params():
    return default_parameters()
