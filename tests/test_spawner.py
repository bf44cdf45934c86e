import random

from cartrunner.config.settings import SpawnSettings
from cartrunner.game.collectible import height_bands
from cartrunner.game.spawner import Spawner


def test_intervals_stay_in_range():
    spawner = Spawner(random.Random(3))
    for _ in range(200):
        assert 3000 <= spawner.next_interval() <= 4000


def test_spawns_off_the_right_edge_in_a_band(layout):
    spawner = Spawner(random.Random(11))
    for _ in range(100):
        item = spawner.spawn(layout)
        assert item.x > layout.width
        assert item.x >= layout.width + 500 + layout.width * 0.46
        assert item.base_y in height_bands(layout, item.h)


def test_tick_counts_down_then_spawns(layout):
    spawner = Spawner(random.Random(5), SpawnSettings())
    boxes = []

    delay = spawner.tick(800, 0.5, layout, boxes)
    assert delay == 300
    assert boxes == []

    delay = spawner.tick(delay, 0.4, layout, boxes)
    assert len(boxes) == 1
    assert 3000 <= delay <= 4000


def test_same_seed_same_boxes(layout):
    a = Spawner(random.Random(42)).spawn(layout)
    b = Spawner(random.Random(42)).spawn(layout)
    assert a == b
