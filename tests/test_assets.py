import asyncio

import pygame

from cartrunner.assets.store import AssetStore, image_manifest


def test_manifest_names():
    manifest = image_manifest()

    for name in ("cart", "box", "map", "splash", "win_screen", "lose_screen", "final_screen"):
        assert name in manifest
    assert manifest["product1"].endswith(".jpeg")
    assert manifest["product4"].endswith(".png")
    assert "qr15" in manifest
    assert "confetti21" in manifest
    assert "confetti22" not in manifest


def test_missing_images_fall_back(tmp_path):
    store = AssetStore(tmp_path, {"cart": "Cart.png", "box": "Box.png"})

    asyncio.run(store.load_all())

    assert store.image("cart") is None
    assert store.failed == {"cart", "box"}
    assert store.loaded == 0


def test_one_bad_image_does_not_block_others(tmp_path):
    pygame.image.save(pygame.Surface((4, 4)), str(tmp_path / "cart.bmp"))
    (tmp_path / "box.bmp").write_bytes(b"not an image")
    store = AssetStore(tmp_path, {"cart": "cart.bmp", "box": "box.bmp"})

    asyncio.run(store.load_all())

    assert store.image("cart").get_size() == (4, 4)
    assert store.image("box") is None
    assert store.failed == {"box"}
