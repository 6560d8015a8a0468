from dataclasses import replace

import pytest

from fractol.view import HEIGHT, WIDTH, Key, MouseButton, View


def test_defaults_cover_source_region():
    view = View()
    assert (view.width, view.height) == (WIDTH, HEIGHT) == (800, 800)
    assert view.point_at(0, 0) == (-2.0, 2.0)


def test_mouse_point_at_origin_is_region_corner():
    view = View(min_real=-1.5, max_real=0.5, min_im=1.0, max_im=-1.0)
    assert view.mouse_point(0, 0) == (view.min_real, view.min_im)


def test_point_at_includes_offsets():
    view = View()
    view.handle_key(Key.RIGHT)
    re, im = view.point_at(10, 20)
    plain_re, plain_im = view.mouse_point(10, 20)
    assert re == pytest.approx(plain_re + view.x_offset)
    assert im == plain_im


def test_right_key_pans_by_step():
    view = View()
    view.handle_key(Key.RIGHT)
    assert view.x_offset == pytest.approx(0.1)


def test_left_then_right_returns_to_start():
    view = View()
    view.handle_key(Key.LEFT)
    view.handle_key(Key.RIGHT)
    assert view.x_offset == pytest.approx(0.0)


def test_up_and_down_move_opposite_ways():
    view = View()
    view.handle_key(Key.UP)
    assert view.y_offset > 0
    view.handle_key(Key.DOWN)
    view.handle_key(Key.DOWN)
    assert view.y_offset < 0


def test_pan_step_shrinks_with_zoom():
    view = View(zoom=2.0)
    view.handle_key(Key.RIGHT)
    assert view.x_offset == pytest.approx(0.1 / 2.0)


def test_c_key_shifts_colours():
    view = View()
    assert view.handle_key(Key.C) is False
    assert view.color_shift == 10


def test_escape_requests_quit():
    assert View().handle_key(Key.ESCAPE) is True


def test_unknown_key_changes_nothing():
    view = View()
    before = replace(view)
    assert view.handle_key(ord("q")) is False
    assert view == before


def test_scroll_up_zooms_in_around_mouse():
    view = View()
    anchor = view.mouse_point(200, 600)
    old_width = view.max_real - view.min_real
    view.handle_mouse(MouseButton.SCROLL_UP, 200, 600)
    assert view.zoom == pytest.approx(1.1)
    assert old_width / (view.max_real - view.min_real) == pytest.approx(1.1)
    assert view.mouse_point(200, 600) == pytest.approx(anchor)


def test_scroll_down_undoes_scroll_up():
    view = View()
    original = replace(view)
    view.handle_mouse(MouseButton.SCROLL_UP, 123, 456)
    view.handle_mouse(MouseButton.SCROLL_DOWN, 123, 456)
    assert view.zoom == pytest.approx(original.zoom)
    assert view.min_real == pytest.approx(original.min_real)
    assert view.max_real == pytest.approx(original.max_real)
    assert view.min_im == pytest.approx(original.min_im)
    assert view.max_im == pytest.approx(original.max_im)


def test_other_buttons_change_nothing():
    view = View()
    before = replace(view)
    view.handle_mouse(1, 100, 100)
    assert view == before