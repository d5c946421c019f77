"""
Tests for full tower generation: tier counts, stacking, stack patterns,
decoration adjustments, biome transitions and pool reuse.
"""

import json
import math
import random

import pytest

from tower_generator.config.parameters import HeightRange, SizeRange
from tower_generator.errors import InvalidConfigurationError
from tower_generator.generators import clear_caches
from tower_generator.generators.decoration_pool import DECORATION_POOL
from tower_generator.generators.material_factory import MATERIAL_PROVIDER
from tower_generator.generators.decoration_placer import DECORATION_TYPES
from tower_generator.generators.tower_builder import TowerBuilder
from tower_generator.generators.types import (
    BiomeType, Decoration, DecorationDrawable, ShapeKind, Size, StackPattern, shape,
)


def _fixed_size(params, width=1.0, height=1.0, depth=1.0):
    params.node.size = SizeRange(Size(width, height, depth), Size(width, height, depth))


def _drawable(decoration_type, y=0.0, scale=1.0):
    drawable = DecorationDrawable(
        decoration_type=decoration_type,
        geometry=shape("box", width=0.1, height=0.1, depth=0.1),
        surface=None,
    )
    drawable.place(Decoration(type=decoration_type, position=(0.0, y, 0.0), scale=scale))
    return drawable


class TestTierCount:

    def test_tier_count_within_range(self, builder, params):
        params.tower.height = HeightRange(3, 6)
        seen = set()
        for _ in range(40):
            tower = builder.build(params)
            assert 3 <= len(tower) <= 6
            seen.add(len(tower))
        # Both ends of the range are reachable
        assert {3, 6} <= seen

    def test_fixed_height(self, builder, params):
        params.tower.height = HeightRange(5, 5)
        assert len(builder.build(params)) == 5


class TestStacking:

    def test_base_heights_are_running_sum(self, builder, params):
        tower = builder.build(params)
        running = 0.0
        for placed in tower.nodes:
            assert placed.base_height == pytest.approx(running)
            assert placed.position[1] == pytest.approx(running)
            running += placed.node.size.height
        assert tower.total_height == pytest.approx(running)

    def test_base_heights_non_decreasing(self, builder, params):
        tower = builder.build(params)
        bases = [p.base_height for p in tower.nodes]
        assert bases == sorted(bases)

    def test_upper_tiers_shrink(self, builder, params):
        _fixed_size(params, 2.0, 1.0, 3.0)
        params.tower.height = HeightRange(10, 10)
        tower = builder.build(params)
        for placed in tower.nodes:
            factor = 1 - 0.3 * placed.tier / 10
            assert placed.tier_progress == pytest.approx(placed.tier / 10)
            assert placed.node.size.width == pytest.approx(2.0 * factor)
            assert placed.node.size.height == pytest.approx(1.0 * factor)
            assert placed.node.size.depth == pytest.approx(3.0 * factor)

    def test_sizes_within_configured_range(self, builder, params):
        tower = builder.build(params)
        for placed in tower.nodes:
            factor = 1 - 0.3 * placed.tier_progress
            for axis in ("width", "height", "depth"):
                value = getattr(placed.node.size, axis)
                assert 1.0 * factor - 1e-9 <= value <= 2.0 * factor + 1e-9


class TestStackPatterns:

    def test_alternating_scenario(self, builder, params):
        params.current_biome = BiomeType.FOREST
        params.node.shape = ShapeKind.CUBE
        params.node.size = SizeRange(Size(1.0, 1.0, 1.0), Size(2.0, 2.0, 2.0))
        params.tower.height = HeightRange(5, 5)
        params.tower.stack_pattern = StackPattern.ALTERNATING

        tower = builder.build(params)

        assert len(tower) == 5
        for placed in tower.nodes:
            assert placed.node.shape is ShapeKind.CUBE
            yaw = placed.rotation[1]
            expected = math.pi / 4 * (1 + 0.5 * placed.tier / 5)
            assert abs(yaw) == pytest.approx(expected)
            if placed.tier % 2 == 0:
                assert yaw > 0
            else:
                assert yaw < 0
            assert placed.position[0] == 0.0
            assert placed.position[2] == 0.0

    def test_clustered(self, builder, params):
        params.tower.stack_pattern = StackPattern.CLUSTERED
        params.tower.height = HeightRange(8, 8)
        tower = builder.build(params)
        for placed in tower.nodes:
            p = placed.tier_progress
            radius = 0.5 * (1 + 0.5 * p)
            angle = placed.tier * math.pi / 4
            x, y, z = placed.position
            assert x == pytest.approx(math.cos(angle) * radius)
            assert z == pytest.approx(math.sin(angle) * radius)
            assert y == pytest.approx(placed.base_height)
            rx, ry, rz = placed.rotation
            assert abs(rx) <= 0.05 * p + 1e-12
            assert abs(rz) <= 0.05 * p + 1e-12
            assert ry == 0.0

    @pytest.mark.parametrize("pattern", [StackPattern.SPIRAL, StackPattern.RANDOM])
    def test_spiral_and_random_pass_through(self, builder, params, pattern):
        params.tower.stack_pattern = pattern
        tower = builder.build(params)
        for placed in tower.nodes:
            assert placed.rotation == (0.0, 0.0, 0.0)
            assert placed.position == (0.0, placed.base_height, 0.0)

    def test_string_values_are_accepted(self, builder, params):
        params.tower.stack_pattern = "clustered"
        params.node.shape = "cone"
        params.current_biome = "ocean"
        tower = builder.build(params)
        assert tower.stack_pattern is StackPattern.CLUSTERED
        assert tower.biome is BiomeType.OCEAN
        assert all(p.node.shape is ShapeKind.CONE for p in tower.nodes)


class TestInvalidConfiguration:

    @pytest.mark.parametrize("section,attr,value", [
        ("node", "shape", "pyramid"),
        ("tower", "stack_pattern", "zigzag"),
        (None, "current_biome", "tundra"),
    ])
    def test_unknown_enum_values(self, builder, params, section, attr, value):
        target = getattr(params, section) if section else params
        setattr(target, attr, value)
        with pytest.raises(InvalidConfigurationError):
            builder.build(params)

    def test_inverted_height_range(self, builder, params):
        params.tower.height.min, params.tower.height.max = 8, 3
        with pytest.raises(InvalidConfigurationError):
            builder.build(params)

    @pytest.mark.parametrize("factor", [-0.1, 1.5])
    def test_transition_factor_out_of_range(self, builder, params, factor):
        with pytest.raises(InvalidConfigurationError):
            builder.build(params, previous_biome=BiomeType.DESERT, transition_factor=factor)


class TestDecorations:

    @pytest.mark.parametrize("biome", list(BiomeType))
    def test_counts_and_types(self, builder, params, biome):
        params.current_biome = biome
        tower = builder.build(params)
        for placed in tower.nodes:
            assert 1 <= len(placed.decorations) <= 3
            for drawable in placed.decorations:
                assert drawable.decoration_type in DECORATION_TYPES[biome]
                assert drawable.visible is True
                assert drawable.parent is placed

    def test_no_drawable_shared_between_nodes(self, builder, params):
        params.tower.height = HeightRange(12, 12)
        tower = builder.build(params)
        drawables = [d for p in tower.nodes for d in p.decorations]
        assert len({id(d) for d in drawables}) == len(drawables)

    def test_low_tier_bias(self):
        drawable = _drawable("leaf", y=0.5)
        TowerBuilder._adjust_decoration(drawable, "leaf", Size(1.0, 2.0, 1.0), 0.1, BiomeType.FOREST)
        assert drawable.position[1] == pytest.approx(0.5 - 0.4)
        assert drawable.scale.tolist() == pytest.approx([1.2, 1.2, 1.2])

    def test_high_tier_bias(self):
        drawable = _drawable("shell", y=0.0, scale=1.0)
        TowerBuilder._adjust_decoration(drawable, "shell", Size(1.0, 1.0, 1.0), 0.8, BiomeType.OCEAN)
        assert drawable.position[1] == pytest.approx(0.1)
        assert drawable.scale.tolist() == pytest.approx([0.8, 0.8, 0.8])

    def test_middle_tiers_unbiased(self):
        drawable = _drawable("rock", y=-0.3)
        TowerBuilder._adjust_decoration(drawable, "rock", Size(1.0, 1.0, 1.0), 0.5, BiomeType.DESERT)
        assert drawable.position[1] == pytest.approx(-0.3)
        assert drawable.scale.tolist() == pytest.approx([1.0, 1.0, 1.0])

    def test_forest_vines_stretch_on_upper_tiers(self):
        drawable = _drawable("vine", y=0.3)
        TowerBuilder._adjust_decoration(drawable, "vine", Size(1.0, 1.0, 1.0), 0.8, BiomeType.FOREST)
        # High-tier bias first, then the vine rule
        assert drawable.position[1] == pytest.approx(0.3 + 0.1 - 0.1)
        assert drawable.scale.tolist() == pytest.approx([0.8, 1.2, 0.8])

    def test_ocean_coral_grows_on_upper_tiers(self):
        drawable = _drawable("coral", y=0.0)
        TowerBuilder._adjust_decoration(drawable, "coral", Size(1.0, 2.0, 1.0), 0.65, BiomeType.OCEAN)
        assert drawable.position[1] == pytest.approx(0.2)
        assert drawable.scale.tolist() == pytest.approx([1.0, 1.3, 1.0])

    def test_desert_moss_enlarges_on_lower_tiers(self):
        drawable = _drawable("moss", y=-0.4)
        TowerBuilder._adjust_decoration(drawable, "moss", Size(1.0, 1.0, 1.0), 0.35, BiomeType.DESERT)
        assert drawable.position[1] == pytest.approx(-0.4)
        assert drawable.scale.tolist() == pytest.approx([1.4, 1.4, 1.4])

    def test_biome_rules_do_not_cross_biomes(self):
        drawable = _drawable("moss", y=-0.4)
        TowerBuilder._adjust_decoration(drawable, "moss", Size(1.0, 1.0, 1.0), 0.35, BiomeType.FOREST)
        assert drawable.scale.tolist() == pytest.approx([1.0, 1.0, 1.0])


class TestSurfaces:

    def test_plain_biome_surface(self, builder, params, materials):
        params.current_biome = BiomeType.DESERT
        tower = builder.build(params)
        for placed in tower.nodes:
            assert placed.node.surface == materials.surface_for(BiomeType.DESERT)

    def test_material_opacity_override(self, builder, params):
        params.material.opacity = 0.5
        tower = builder.build(params)
        assert all(p.node.surface.opacity == 0.5 for p in tower.nodes)

    def test_biome_transition_blends(self, builder, params):
        params.current_biome = BiomeType.FOREST
        tower = builder.build(params, previous_biome=BiomeType.DESERT, transition_factor=0.5)
        for placed in tower.nodes:
            assert placed.node.surface.roughness == pytest.approx(0.85)
            assert placed.node.surface.metalness == pytest.approx(0.075)

    def test_zero_transition_ignores_previous_biome(self, builder, params, materials):
        params.current_biome = BiomeType.OCEAN
        tower = builder.build(params, previous_biome=BiomeType.DESERT, transition_factor=0.0)
        assert tower.nodes[0].node.surface == materials.surface_for(BiomeType.OCEAN)


class TestPoolReuse:

    def test_same_draws_reuse_the_pool(self, materials, placer, pool, params):
        first = TowerBuilder(materials, placer, pool, rng=random.Random(7)).build(params)
        size_after_first = len(pool)
        assert size_after_first == first.decoration_count

        second = TowerBuilder(materials, placer, pool, rng=random.Random(7)).build(params)

        assert len(pool) == size_after_first
        reused = {id(d) for p in second.nodes for d in p.decorations}
        assert reused == {id(d) for d in pool}

    def test_pool_state_after_build(self, builder, pool, params):
        builder.build(params)
        builder.build(params)
        for drawable in pool:
            assert drawable.visible == (drawable.parent is not None)

    def test_reused_drawable_takes_current_biome_surface(self, materials, placer, pool, params):
        params.tower.height = HeightRange(10, 10)
        params.current_biome = BiomeType.FOREST
        TowerBuilder(materials, placer, pool, rng=random.Random(3)).build(params)
        params.current_biome = BiomeType.DESERT
        tower = TowerBuilder(materials, placer, pool, rng=random.Random(4)).build(params)
        for placed in tower.nodes:
            for drawable in placed.decorations:
                if drawable.decoration_type == "moss":
                    assert drawable.surface == materials.surface_for(BiomeType.DESERT)

    def test_default_builder_uses_shared_pool(self):
        assert TowerBuilder().pool is DECORATION_POOL

    def test_clear_caches_resets_shared_state(self, params):
        builder = TowerBuilder(rng=random.Random(8))
        builder.build(params, previous_biome=BiomeType.DESERT, transition_factor=0.5)
        assert len(DECORATION_POOL) > 0
        assert MATERIAL_PROVIDER.blend_cache_size > 0

        clear_caches()

        assert len(DECORATION_POOL) == 0
        assert MATERIAL_PROVIDER.blend_cache_size == 0
        tower = builder.build(params)
        assert len(DECORATION_POOL) == tower.decoration_count


class TestOutput:

    def test_seeded_builds_repeat(self, materials, params):
        a = TowerBuilder(materials, rng=random.Random(99)).build(params)
        b = TowerBuilder(materials, rng=random.Random(99)).build(params)
        assert a.to_dict() == b.to_dict()

    def test_other_builders_do_not_disturb_seeded_build(self, materials, placer, params):
        expected = TowerBuilder(materials, placer, rng=random.Random(1)).build(params)

        seeded = TowerBuilder(materials, placer, rng=random.Random(1))
        TowerBuilder(materials, placer, rng=random.Random(2))
        TowerBuilder(materials, rng=random.Random(3))

        assert seeded.build(params).to_dict() == expected.to_dict()

    def test_builder_leaves_placer_source_alone(self, placer, rng):
        TowerBuilder(placer=placer, rng=random.Random(5))
        assert placer.rng is rng

    def test_to_dict_is_json_serializable(self, builder, params):
        data = builder.build(params).to_dict()
        text = json.dumps(data)
        assert json.loads(text)["biome"] == "forest"
        node = data["nodes"][0]
        assert set(node) >= {"shape", "size", "surface", "base_height", "position",
                             "rotation", "geometry", "decorations"}
        assert node["decorations"][0]["type"] in DECORATION_TYPES[BiomeType.FOREST]
