import pytest

from fractol.fractals import burning_ship, julia, mandelbrot
from fractol.mlx.image import new_image
from fractol.parsing import FractalConfig, FractalKind
from fractol.render import escape_time, get_color, render
from fractol.view import View


def test_points_inside_are_black():
    assert get_color(100, 100, 0) == 0x000000
    assert get_color(100, 100, 50) == 0x000000


@pytest.mark.parametrize(
    "iteration, expected",
    [(0, 0xFF0000), (24, 0xFF0000), (25, 0x00FF00), (49, 0x00FF00), (50, 0x0000FF), (74, 0x0000FF), (75, 0xFFFF00), (99, 0xFFFF00)],
)
def test_colour_bands(iteration, expected):
    assert get_color(iteration, 100, 0) == expected


def test_colour_shift_is_added():
    assert get_color(0, 100, 10) == 0xFF0000 + 10


def test_escape_time_dispatches_by_kind():
    point = (0.3, -0.4)
    assert escape_time(FractalConfig(FractalKind.MANDELBROT), *point) == mandelbrot(*point, 100)
    assert escape_time(FractalConfig(FractalKind.BURNING_SHIP), *point) == burning_ship(*point, 100)
    constant = complex(-0.8, 0.156)
    config = FractalConfig(FractalKind.JULIA, julia_c=constant)
    assert escape_time(config, *point) == julia(constant, complex(*point), 100)


def test_render_mandelbrot_small_view():
    config = FractalConfig(FractalKind.MANDELBROT)
    view = View(width=4, height=4)
    image = new_image(4, 4)
    assert render(config, view, image) is image
    # The centre pixel is the origin, which lies in the set.
    assert image.get_pixel(2, 2) == 0x000000
    assert image.get_pixel(0, 0) == 0xFF0000


def test_render_pixels_follow_escape_time():
    config = FractalConfig(FractalKind.JULIA, julia_c=complex(-0.8, 0.156))
    view = View(width=6, height=6, color_shift=10)
    image = render(config, view, new_image(6, 6))
    for x, y in [(0, 0), (3, 3), (5, 1)]:
        iteration = escape_time(config, *view.point_at(x, y))
        assert image.get_pixel(x, y) == get_color(iteration, config.max_iter, 10)


def test_render_rejects_small_image():
    with pytest.raises(ValueError):
        render(FractalConfig(FractalKind.MANDELBROT), View(width=4, height=4), new_image(2, 2))