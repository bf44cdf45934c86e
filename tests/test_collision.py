from cartrunner.game.cart import Cart
from cartrunner.game.collectible import Collectible
from cartrunner.game.collision import rects_overlap, resolve_collisions


def make_cart():
    return Cart(x=100, y=100, w=50, h=50)


def test_touching_edges_do_not_overlap():
    assert not rects_overlap(0, 0, 10, 10, 10, 0, 10, 10)
    assert not rects_overlap(0, 0, 10, 10, 0, 10, 10, 10)


def test_one_unit_overlap_counts():
    assert rects_overlap(0, 0, 10, 10, 9, 0, 10, 10)
    assert rects_overlap(0, 0, 10, 10, 0, 9, 10, 10)


def test_every_overlapping_box_is_collected_in_one_pass():
    cart = make_cart()
    hits = [Collectible(x=110, base_y=110, w=20, h=20), Collectible(x=140, base_y=140, w=20, h=20)]
    miss = Collectible(x=150, base_y=100, w=20, h=20)
    boxes = [hits[0], miss, hits[1]]
    collected = []

    earned = resolve_collisions(cart, boxes, 50, on_collect=collected.append)

    assert earned == 100
    assert boxes == [miss]
    assert all(item.collected for item in hits)
    assert len(collected) == 2


def test_already_collected_box_is_ignored():
    cart = make_cart()
    item = Collectible(x=110, base_y=110, w=20, h=20, collected=True)
    boxes = [item]

    assert resolve_collisions(cart, boxes, 50) == 0
    assert boxes == [item]
