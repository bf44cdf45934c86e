from cartrunner.game.layout import Layout


def test_fit_tall_window_uses_full_width():
    layout = Layout.fit(540, 2000)
    assert layout.width == 540
    assert layout.height == 960


def test_fit_wide_window_uses_full_height():
    layout = Layout.fit(1920, 960)
    assert layout.height == 960
    assert layout.width == 540


def test_fit_caps_at_target_size():
    layout = Layout.fit(4000, 8000)
    assert layout.size == (1080, 1920)
    assert layout.scale == 1.0


def test_fit_enforces_minimum_width():
    layout = Layout.fit(100, 100)
    assert layout.width == 300


def test_ground_line_has_minimum_margin():
    layout = Layout(360, 640)
    assert layout.ground_y == 590
    assert layout.cart_floor < layout.ground_y
