"""Drawing a fractal into an image."""

from __future__ import annotations

from fractol.fractals import burning_ship, julia, mandelbrot
from fractol.mlx.image import Image
from fractol.parsing import FractalConfig, FractalKind
from fractol.view import View

INSIDE_COLOR = 0x000000


def get_color(iteration: int, max_iter: int, color_shift: int) -> int:
    """Pick a colour band for an iteration count; points that never escape are black."""
    if iteration == max_iter:
        return INSIDE_COLOR
    if iteration < max_iter // 4:
        return 0xFF0000 + color_shift
    if iteration < max_iter // 2:
        return 0x00FF00 + color_shift
    if iteration < 3 * max_iter // 4:
        return 0x0000FF + color_shift
    return 0xFFFF00 + color_shift


def escape_time(config: FractalConfig, c_re: float, c_im: float) -> int:
    """Iteration count of the configured fractal at the point (c_re, c_im)."""
    if config.kind is FractalKind.MANDELBROT:
        return mandelbrot(c_re, c_im, config.max_iter)
    if config.kind is FractalKind.JULIA:
        return julia(config.julia_c, complex(c_re, c_im), config.max_iter)
    return burning_ship(c_re, c_im, config.max_iter)


def render(config: FractalConfig, view: View, image: Image) -> Image:
    """Fill ``image`` with the fractal as seen through ``view`` and return it."""
    if image.width < view.width or image.height < view.height:
        raise ValueError(
            f"image {image.width}x{image.height} is smaller than view {view.width}x{view.height}"
        )
    for y in range(view.height):
        for x in range(view.width):
            iteration = escape_time(config, *view.point_at(x, y))
            image.put_pixel(x, y, get_color(iteration, config.max_iter, view.color_shift))
    return image