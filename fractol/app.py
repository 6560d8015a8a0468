"""The interactive fractal viewer and its command-line entry point."""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import replace
from typing import Any

from fractol.mlx.display import Display, DisplayError
from fractol.mlx.events import EventMask, EventType
from fractol.parsing import ArgumentError, FractalConfig, parse_arguments
from fractol.render import render
from fractol.view import HEIGHT, WIDTH, View

TITLE = "fract-ol"


class FractolApp:
    """A window showing one fractal, redrawn as the user pans and zooms."""

    def __init__(
        self,
        config: FractalConfig,
        display: Display | None = None,
        *,
        size: tuple[int, int] = (WIDTH, HEIGHT),
    ) -> None:
        width, height = size
        self.config = config
        self.display = display if display is not None else Display()
        self.window = self.display.new_window(width, height, TITLE)
        self.image = self.display.new_image(width, height)
        self.view = View(width=width, height=height)
        self.closed = False
        self._dirty = True
        self.display.loop_hook(self.on_frame, None)
        self.window.hooks.key_hook(self.on_key, None)
        self.window.hooks.mouse_hook(self.on_mouse, None)
        self.window.hooks.hook(EventType.DESTROY_NOTIFY, EventMask.NONE, self.close, None)

    def _update_view(self, change: Any) -> None:
        before = replace(self.view)
        change()
        if self.view != before:
            self._dirty = True

    def on_key(self, keycode: int, param: Any = None) -> None:
        """Handle a released key: quit, pan or shift colours."""
        if self.closed:
            return
        before = replace(self.view)
        if self.view.handle_key(keycode):
            self.close()
            return
        if self.view != before:
            self._dirty = True

    def on_mouse(self, button: int, x: int, y: int, param: Any = None) -> None:
        """Handle a mouse button press: zoom with the wheel."""
        if self.closed:
            return
        self._update_view(lambda: self.view.handle_mouse(button, x, y))

    def on_frame(self, param: Any = None) -> None:
        """Redraw the fractal if the view changed and show it in the window."""
        if self.closed:
            return
        if self._dirty:
            render(self.config, self.view, self.image)
            self._dirty = False
        self.display.put_image_to_window(self.window, self.image, 0, 0)

    def close(self, param: Any = None) -> None:
        """Release the image, the window and the display."""
        if self.closed:
            return
        self.closed = True
        self.display.destroy_image(self.image)
        self.display.destroy_window(self.window)
        self.display.loop_end()
        self.display.close()


def run(config: FractalConfig) -> int:
    """Open the viewer for ``config`` and run it until closed; return an exit status."""
    try:
        app = FractolApp(config)
    except DisplayError as exc:
        print(f"Error : {exc}", file=sys.stderr)
        return 1
    try:
        app.display.loop()
    finally:
        app.close()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        config = parse_arguments(args)
    except ArgumentError as exc:
        print(exc, file=sys.stderr)
        return 1
    return run(config)


if __name__ == "__main__":
    sys.exit(main())