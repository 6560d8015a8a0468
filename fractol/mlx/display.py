"""A display holding windows, images, an event queue and the event loop.

Windows keep their contents in an in-memory frame buffer. A headless display
only records what is drawn; otherwise the newest window is also shown on
screen through pygame, whose input is turned into window events.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from itertools import count
from pathlib import Path
from typing import Any, NamedTuple

from fractol.mlx.events import Event, EventType, HookTable
from fractol.mlx.image import Image, channel_shifts, good_color, new_image
from fractol.mlx.xpm import xpm_file_to_image, xpm_to_image

_CHANNEL_MASKS = {
    8: (0xE0, 0x1C, 0x03),
    15: (0x7C00, 0x03E0, 0x001F),
    16: (0xF800, 0x07E0, 0x001F),
    24: (0xFF0000, 0x00FF00, 0x0000FF),
    32: (0xFF0000, 0x00FF00, 0x0000FF),
}
_ALL_EVENTS = 0xFFFFFF
_DEFAULT_SCREEN = (1920, 1080)
_window_ids = count(1)


class DisplayError(RuntimeError):
    """Raised when the display cannot be opened or is used wrongly."""


class DrawnText(NamedTuple):
    """A string drawn into a window, with its baseline position."""

    x: int
    y: int
    color: int
    text: str


@dataclass(eq=False)
class Window:
    """A fixed-size window with its own frame buffer and event hooks."""

    width: int
    height: int
    title: str = ""
    depth: int = 24
    hooks: HookTable = field(default_factory=HookTable)
    strings: list[DrawnText] = field(default_factory=list)
    font: str | None = None
    cursor_visible: bool = True
    pointer: tuple[int, int] = (0, 0)
    event_mask: int = _ALL_EVENTS
    id: int = field(default_factory=lambda: next(_window_ids))
    framebuffer: Image = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.framebuffer = new_image(self.width, self.height, self.depth)

    def pixel(self, x: int, y: int) -> int:
        """Return the pixel value shown at (x, y)."""
        return self.framebuffer.get_pixel(x, y)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height


def _keysym(key: int, pygame: Any) -> int:
    special = {
        pygame.K_ESCAPE: 0xFF1B,
        pygame.K_LEFT: 0xFF51,
        pygame.K_UP: 0xFF52,
        pygame.K_RIGHT: 0xFF53,
        pygame.K_DOWN: 0xFF54,
        pygame.K_RETURN: 0xFF0D,
        pygame.K_BACKSPACE: 0xFF08,
        pygame.K_TAB: 0xFF09,
        pygame.K_DELETE: 0xFFFF,
    }
    return special.get(key, key)


class _PygameScreen:
    """Shows one window's frame buffer with pygame and reads its input."""

    def __init__(self) -> None:
        try:
            import pygame
        except ImportError as exc:
            raise DisplayError("cannot open display: pygame is not available") from exc
        try:
            pygame.display.init()
            pygame.font.init()
        except pygame.error as exc:
            raise DisplayError(f"cannot open display: {exc}") from exc
        self._pg = pygame
        self._surface = None
        self._font = None

    def screen_size(self) -> tuple[int, int]:
        sizes = self._pg.display.get_desktop_sizes()
        return tuple(sizes[0]) if sizes else _DEFAULT_SCREEN

    def show(self, window: Window) -> None:
        pg = self._pg
        if not pg.display.get_init():
            pg.display.init()
        self._surface = pg.display.set_mode((window.width, window.height))
        pg.display.set_caption(window.title)
        pg.mouse.set_visible(window.cursor_visible)

    def hide(self) -> None:
        self._pg.display.quit()
        self._surface = None

    def present(self, window: Window) -> None:
        if self._surface is None:
            return
        fb = window.framebuffer
        if fb.bits_per_pixel != 32:
            raise DisplayError("only 32-bit frame buffers can be shown")
        data = fb.data
        rgb = bytearray(fb.width * fb.height * 3)
        red, green, blue = (data[1::4], data[2::4], data[3::4]) if fb.endian else (
            data[2::4], data[1::4], data[0::4])
        rgb[0::3], rgb[1::3], rgb[2::3] = red, green, blue
        picture = self._pg.image.frombuffer(bytes(rgb), (fb.width, fb.height), "RGB")
        self._surface.blit(picture, (0, 0))
        if window.strings:
            if self._font is None:
                self._font = self._pg.font.Font(None, 16)
            for item in window.strings:
                color = ((item.color >> 16) & 0xFF, (item.color >> 8) & 0xFF, item.color & 0xFF)
                label = self._font.render(item.text, True, color)
                self._surface.blit(label, (item.x, item.y - self._font.get_ascent()))
        self._pg.display.flip()

    def _convert(self, raw: Any) -> Event | None:
        pg = self._pg
        if raw.type == pg.QUIT:
            return Event(EventType.CLIENT_MESSAGE)
        if raw.type == pg.KEYDOWN:
            return Event(EventType.KEY_PRESS, keycode=_keysym(raw.key, pg))
        if raw.type == pg.KEYUP:
            return Event(EventType.KEY_RELEASE, keycode=_keysym(raw.key, pg))
        if raw.type == pg.MOUSEBUTTONDOWN:
            return Event(EventType.BUTTON_PRESS, button=raw.button, x=raw.pos[0], y=raw.pos[1])
        if raw.type == pg.MOUSEBUTTONUP:
            return Event(EventType.BUTTON_RELEASE, button=raw.button, x=raw.pos[0], y=raw.pos[1])
        if raw.type == pg.MOUSEMOTION:
            return Event(EventType.MOTION_NOTIFY, x=raw.pos[0], y=raw.pos[1])
        if raw.type in (pg.VIDEOEXPOSE, getattr(pg, "WINDOWEXPOSED", pg.VIDEOEXPOSE)):
            return Event(EventType.EXPOSE)
        return None

    def poll(self) -> list[Event]:
        if not self._pg.display.get_init():
            return []
        converted = (self._convert(raw) for raw in self._pg.event.get())
        return [event for event in converted if event is not None]

    def wait(self) -> Event:
        while True:
            event = self._convert(self._pg.event.wait())
            if event is not None:
                return event

    def set_cursor_visible(self, visible: bool) -> None:
        self._pg.mouse.set_visible(visible)

    def warp(self, x: int, y: int) -> None:
        self._pg.mouse.set_pos((x, y))

    def pointer(self) -> tuple[int, int]:
        return tuple(self._pg.mouse.get_pos())

    def close(self) -> None:
        self._pg.quit()


class Display:
    """A connection to a screen: windows, images and the event loop."""

    def __init__(
        self,
        *,
        headless: bool = False,
        depth: int = 24,
        screen_size: tuple[int, int] = _DEFAULT_SCREEN,
    ) -> None:
        if depth not in _CHANNEL_MASKS:
            raise DisplayError(f"no TrueColor visual available for depth {depth}")
        self.depth = depth
        self._shifts = channel_shifts(*_CHANNEL_MASKS[depth])
        self._screen_size = tuple(screen_size)
        self._windows: list[Window] = []
        self._images: list[Image] = []
        self._events: deque[tuple[Window, Event]] = deque()
        self._loop_hook: Callable[..., Any] | None = None
        self._loop_param: Any = None
        self._do_flush = True
        self._end_loop = False
        self._closed = False
        self._screen: _PygameScreen | None = None
        if not headless:
            if depth < 24:
                raise DisplayError("a shown display needs a colour depth of 24 or more")
            self._screen = _PygameScreen()

    def __enter__(self) -> Display:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def windows(self) -> tuple[Window, ...]:
        """The open windows, newest first."""
        return tuple(self._windows)

    @property
    def images(self) -> tuple[Image, ...]:
        return tuple(self._images)

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise DisplayError("display is closed")

    def _check_window(self, window: Window) -> None:
        self._check_open()
        if window not in self._windows:
            raise DisplayError(f"unknown window {window.id}")

    def _shown(self) -> Window | None:
        return self._windows[0] if self._windows else None

    def _flush(self) -> None:
        if self._do_flush:
            self._sync()

    def _sync(self) -> None:
        shown = self._shown()
        if self._screen is not None and shown is not None:
            self._screen.present(shown)

    # Windows

    def new_window(self, width: int, height: int, title: str) -> Window:
        """Open a window; its first event is an expose."""
        self._check_open()
        window = Window(width=width, height=height, title=title, depth=self.depth)
        self._windows.insert(0, window)
        if self._screen is not None:
            self._screen.show(window)
        self._events.append((window, Event(EventType.EXPOSE)))
        return window

    def destroy_window(self, window: Window) -> None:
        self._check_window(window)
        was_shown = window is self._shown()
        self._windows.remove(window)
        if self._screen is not None and was_shown:
            shown = self._shown()
            if shown is None:
                self._screen.hide()
            else:
                self._screen.show(shown)
                self._flush()

    def clear_window(self, window: Window) -> None:
        """Fill the window with black and forget drawn strings."""
        self._check_window(window)
        window.framebuffer.data[:] = bytes(len(window.framebuffer.data))
        window.strings.clear()
        self._flush()

    def pixel_put(self, window: Window, x: int, y: int, color: int) -> None:
        self._check_window(window)
        if window.contains(x, y):
            window.framebuffer.put_pixel(x, y, self.color_value(color))
        self._flush()

    def string_put(self, window: Window, x: int, y: int, color: int, text: str) -> None:
        """Draw ``text`` with its baseline starting at (x, y)."""
        self._check_window(window)
        window.strings.append(DrawnText(x, y, self.color_value(color), text))
        self._flush()

    def set_font(self, window: Window, name: str) -> None:
        self._check_window(window)
        window.font = name

    # Images

    def new_image(self, width: int, height: int) -> Image:
        self._check_open()
        image = new_image(width, height, self.depth)
        self._images.append(image)
        return image

    def _track(self, image: Image) -> Image:
        self._images.append(image)
        return image

    def destroy_image(self, image: Image) -> None:
        self._check_open()
        for index, known in enumerate(self._images):
            if known is image:
                del self._images[index]
                self._flush()
                return
        raise DisplayError("unknown image")

    def xpm_file_to_image(self, path: str | Path) -> Image:
        self._check_open()
        return self._track(xpm_file_to_image(path, self.depth))

    def xpm_to_image(self, data: Iterable[str]) -> Image:
        self._check_open()
        return self._track(xpm_to_image(data, self.depth))

    def put_image_to_window(self, window: Window, image: Image, x: int, y: int) -> None:
        """Copy ``image`` into the window with its top left corner at (x, y)."""
        self._check_window(window)
        fb = window.framebuffer
        x0, x1 = max(x, 0), min(x + image.width, fb.width)
        rows = range(max(y, 0), min(y + image.height, fb.height))
        if x0 < x1:
            if image.bits_per_pixel == fb.bits_per_pixel and image.endian == fb.endian:
                size = fb.bytes_per_pixel
                length = (x1 - x0) * size
                for row in rows:
                    src = (row - y) * image.size_line + (x0 - x) * size
                    dst = row * fb.size_line + x0 * size
                    fb.data[dst:dst + length] = image.data[src:src + length]
            else:
                for row in rows:
                    for col in range(x0, x1):
                        fb.put_pixel(col, row, image.get_pixel(col - x, row - y))
        self._flush()

    def color_value(self, color: int) -> int:
        """Convert 0xRRGGBB to the pixel value of this display."""
        return good_color(color, self.depth, self._shifts)

    # Events

    def loop_hook(self, func: Callable[..., Any] | None, param: Any = None) -> None:
        """Call ``func(param)`` once per loop turn, after pending events."""
        self._loop_hook = func
        self._loop_param = param

    def post_event(self, window: Window, event: Event) -> None:
        """Queue ``event`` for delivery to ``window``."""
        self._check_window(window)
        self._events.append((window, event))

    def _pull_screen_events(self) -> None:
        shown = self._shown()
        if self._screen is not None and shown is not None:
            self._events.extend((shown, event) for event in self._screen.poll())

    def flush_events(self) -> None:
        """Discard every pending event."""
        self._pull_screen_events()
        self._events.clear()

    def _pending(self) -> bool:
        self._pull_screen_events()
        return bool(self._events)

    def _next_event(self) -> tuple[Window, Event] | None:
        if self._events:
            return self._events.popleft()
        shown = self._shown()
        if self._screen is not None and shown is not None:
            return shown, self._screen.wait()
        return None

    def _deliver(self, window: Window, event: Event) -> None:
        if window not in self._windows:
            return
        if event.type == EventType.CLIENT_MESSAGE:
            window.hooks.dispatch(Event(EventType.DESTROY_NOTIFY))
            if window not in self._windows:
                return
        window.hooks.dispatch(event)

    def loop(self) -> None:
        """Deliver events and run the loop hook until no window is left or the loop ends.

        A headless display without a loop hook returns once its queue is empty.
        """
        self._check_open()
        for window in self._windows:
            window.event_mask = window.hooks.event_mask()
        self._do_flush = False
        try:
            while self._windows and not self._end_loop:
                while not self._end_loop and (self._loop_hook is None or self._pending()):
                    item = self._next_event()
                    if item is None:
                        self._sync()
                        return
                    self._deliver(*item)
                self._sync()
                if self._loop_hook is not None:
                    self._loop_hook(self._loop_param)
        finally:
            self._do_flush = True

    def loop_end(self) -> None:
        """Make the running loop return; later loops return at once."""
        self._end_loop = True

    # Screen and pointer

    def screen_size(self) -> tuple[int, int]:
        self._check_open()
        if self._screen is not None:
            return self._screen.screen_size()
        return self._screen_size

    def mouse_move(self, window: Window, x: int, y: int) -> None:
        self._check_window(window)
        window.pointer = (x, y)
        if self._screen is not None and window is self._shown():
            self._screen.warp(x, y)

    def mouse_get_pos(self, window: Window) -> tuple[int, int]:
        """Return the pointer position relative to the window."""
        self._check_window(window)
        if self._screen is not None and window is self._shown():
            window.pointer = self._screen.pointer()
        return window.pointer

    def mouse_hide(self, window: Window) -> None:
        self._set_cursor(window, False)

    def mouse_show(self, window: Window) -> None:
        self._set_cursor(window, True)

    def _set_cursor(self, window: Window, visible: bool) -> None:
        self._check_window(window)
        window.cursor_visible = visible
        if self._screen is not None and window is self._shown():
            self._screen.set_cursor_visible(visible)

    def close(self) -> None:
        """Release every window and image and close the screen."""
        if self._closed:
            return
        self._windows.clear()
        self._images.clear()
        self._events.clear()
        if self._screen is not None:
            self._screen.close()
            self._screen = None
        self._closed = True