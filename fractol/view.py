"""The visible region of the complex plane and how input moves it."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum

WIDTH = 800
HEIGHT = 800
ZOOM_FACTOR = 1.1
PAN_STEP = 0.1
COLOR_STEP = 10


class Key(IntEnum):
    """Key symbols the viewer reacts to."""

    ESCAPE = 65307
    LEFT = 65361
    UP = 65362
    RIGHT = 65363
    DOWN = 65364
    C = 99


class MouseButton(IntEnum):
    """Mouse buttons the viewer reacts to."""

    SCROLL_UP = 4
    SCROLL_DOWN = 5


@dataclass
class View:
    """Maps window pixels onto a rectangle of the complex plane."""

    width: int = WIDTH
    height: int = HEIGHT
    min_real: float = -2.0
    max_real: float = 2.0
    min_im: float = 2.0
    max_im: float = -2.0
    zoom: float = 1.0
    x_offset: float = 0.0
    y_offset: float = 0.0
    color_shift: int = 0

    def mouse_point(self, x: int, y: int) -> tuple[float, float]:
        """Return the point of the plane under pixel (x, y), ignoring panning."""
        re = self.min_real + (x / self.width) * (self.max_real - self.min_real)
        im = self.min_im + (y / self.height) * (self.max_im - self.min_im)
        return re, im

    def point_at(self, x: int, y: int) -> tuple[float, float]:
        """Return the point of the plane drawn at pixel (x, y)."""
        re = self.min_real + (x / self.width) * (self.max_real - self.min_real) + self.x_offset
        im = self.min_im + (y / self.height) * (self.max_im - self.min_im) + self.y_offset
        return re, im

    def handle_key(self, keycode: int) -> bool:
        """Pan or change colours; return True when the key asks to quit."""
        if keycode == Key.ESCAPE:
            return True
        step = PAN_STEP / self.zoom
        if keycode == Key.DOWN:
            self.y_offset -= step
        elif keycode == Key.UP:
            self.y_offset += step
        elif keycode == Key.RIGHT:
            self.x_offset += step
        elif keycode == Key.LEFT:
            self.x_offset -= step
        elif keycode == Key.C:
            self.color_shift += COLOR_STEP
        return False

    def handle_mouse(self, button: int, x: int, y: int) -> None:
        """Zoom in or out around the point under the mouse."""
        if button == MouseButton.SCROLL_UP:
            self.zoom *= ZOOM_FACTOR
            self._rescale(x, y, lambda distance: distance / ZOOM_FACTOR)
        elif button == MouseButton.SCROLL_DOWN:
            self.zoom /= ZOOM_FACTOR
            self._rescale(x, y, lambda distance: distance * ZOOM_FACTOR)

    def _rescale(self, x: int, y: int, scale: Callable[[float], float]) -> None:
        mouse_re, mouse_im = self.mouse_point(x, y)
        self.min_real = mouse_re - scale(mouse_re - self.min_real)
        self.max_real = mouse_re + scale(self.max_real - mouse_re)
        self.min_im = mouse_im - scale(mouse_im - self.min_im)
        self.max_im = mouse_im + scale(self.max_im - mouse_im)