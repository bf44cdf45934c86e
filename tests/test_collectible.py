import math
import random

import pytest

from cartrunner.game.collectible import MAX_ROTATION, Collectible, height_bands


def test_spawned_box_uses_one_of_two_bands(layout):
    rng = random.Random(7)
    for _ in range(50):
        item = Collectible.spawn(layout.width + 100, layout, rng)
        assert item.base_y in height_bands(layout, item.h)
        assert item.y == item.base_y
        assert 0 <= item.float_phase < 2 * math.pi
        assert 2 <= item.float_speed < 4
        assert -1 <= item.rotation_speed < 1


def test_rotation_stays_within_bounds(layout):
    item = Collectible(x=0, base_y=100, w=40, h=40, rotation_speed=5.0)

    seen_negative_speed = False
    for _ in range(400):
        item.update(0.025, 0)
        assert -MAX_ROTATION <= item.rotation <= MAX_ROTATION
        seen_negative_speed |= item.rotation_speed < 0

    assert seen_negative_speed


def test_box_floats_around_base_height():
    item = Collectible(x=0, base_y=200, w=40, h=40, float_amplitude=15)
    for _ in range(200):
        item.update(0.02, 0)
        assert item.y == pytest.approx(200 + math.sin(item.float_phase) * 15)
        assert 185 - 1e-9 <= item.y <= 215 + 1e-9


def test_box_moves_left_with_scroll():
    item = Collectible(x=500, base_y=0, w=40, h=40)
    item.update(0.02, 100)
    assert item.x == pytest.approx(498)


def test_offscreen_only_after_fully_past_margin():
    item = Collectible(x=-90, base_y=0, w=40, h=40)
    assert not item.offscreen(50)
    item.x = -91
    assert item.offscreen(50)


def test_rotation_reverses_exactly_at_upper_bound():
    item = Collectible(x=0, base_y=0, w=10, h=10, rotation=MAX_ROTATION - 1e-4, rotation_speed=1.0)

    item.update(0.01, 0)

    assert item.rotation == MAX_ROTATION
    assert item.rotation_speed == -1.0


def test_rotation_reverses_exactly_at_lower_bound():
    item = Collectible(x=0, base_y=0, w=10, h=10, rotation=-MAX_ROTATION + 1e-4, rotation_speed=-1.0)

    item.update(0.01, 0)

    assert item.rotation == -MAX_ROTATION
    assert item.rotation_speed == 1.0


def test_rotation_keeps_direction_inside_bounds():
    item = Collectible(x=0, base_y=0, w=10, h=10, rotation=0.0, rotation_speed=1.0)

    item.update(0.01, 0)

    assert item.rotation == pytest.approx(0.01)
    assert item.rotation_speed == 1.0
