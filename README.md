# fractol

An interactive fractal explorer. It draws the Mandelbrot set, Julia sets and
the Burning Ship fractal into an 800×800 window shown with pygame. You can
zoom with the mouse wheel, pan with the arrow keys and shift the colours.

## Installation

```
pip install .
```

To run the test suite, install the `test` extra:

```
pip install ".[test]"
pytest
```

## Usage

```
fractol mandelbrot
fractol burning_ship
fractol julia <re> <im>
```

The same entry point is available as `python -m fractol.app`.

Both Julia parameters must be plain decimal numbers. Each may have a leading
sign and at most one decimal point. A number may not start or end with the
point. For example:

```
fractol julia -0.8 0.156
fractol julia 0.285 0.01
```

If the arguments are missing or invalid, the program prints a usage message
to standard error and exits with status 1. If no display can be opened, it
prints an error and exits with status 1.

## Controls

| Input            | Action                                          |
|------------------|-------------------------------------------------|
| Mouse wheel up   | Zoom in around the pointer (×1.1)               |
| Mouse wheel down | Zoom out around the pointer (÷1.1)              |
| Arrow keys       | Pan the view by 0.1 divided by the zoom level   |
| `c`              | Add 10 to every colour of the palette           |
| Escape           | Quit                                            |
| Window close     | Quit                                            |

Keys act when they are released. The picture is redrawn only after the view
has changed.

## Colouring

Each pixel is coloured by its escape iteration count, out of 100 iterations
(`fractol.render.get_color`):

- Points that never escape are black.
- The first quarter of the range is red (`0xFF0000`).
- The second quarter is green (`0x00FF00`).
- The third quarter is blue (`0x0000FF`).
- The last quarter is yellow (`0xFFFF00`).

The colour shift set with `c` is added to each of these values.

## Library use

The fractal code can be used without opening a window:

```python
from fractol.fractals import mandelbrot, julia, burning_ship
from fractol.parsing import parse_arguments
from fractol.render import get_color, render
from fractol.view import View
from fractol.mlx.image import new_image

mandelbrot(0.0, 0.0, 100)      # 100: the origin never escapes
get_color(100, 100, 0)         # 0x000000
config = parse_arguments(["julia", "-0.8", "0.156"])

view = View(width=64, height=64)
image = render(config, view, new_image(64, 64))
image.get_pixel(0, 0)
```

- `fractol.fractals` — `mandelbrot`, `julia` and `burning_ship` escape-time counts.
- `fractol.parsing` — `parse_arguments`, `parse_float`, `is_valid_number`,
  `FractalKind`, `FractalConfig` and `ArgumentError`.
- `fractol.view` — `View`, which maps pixels to the complex plane and reacts to
  `Key` and `MouseButton` input.
- `fractol.render` — `get_color`, `escape_time` and `render`.
- `fractol.app` — `FractolApp`, `run` and `main`.

### The `fractol.mlx` toolkit

The application is built on a small pixel-window toolkit:

- `fractol.mlx.display` — `Display` with windows, images, an event queue,
  a loop hook and `loop()`. `Display(headless=True)` keeps everything in
  memory; events are queued with `post_event`, and window contents can be read
  back with `Window.pixel`.
- `fractol.mlx.events` — `EventType`, `EventMask`, `Event` and `HookTable`
  (`hook`, `key_hook`, `mouse_hook`, `expose_hook`, `dispatch`).
- `fractol.mlx.image` — `Image` with a raw pixel buffer, `new_image`,
  `channel_shifts` and `good_color` for screens of 8 to 32 bits.
- `fractol.mlx.colors` — the X11 colour names (`lookup_color`, `text_to_rgb`).
- `fractol.mlx.xpm` — XPM reading from files or string lists
  (`xpm_file_to_image`, `xpm_to_image`, `parse_xpm`), raising `XpmError`.
- `fractol.mlx.text` — substring search and word splitting used by the XPM reader.

## Limitations

- Only the most recently opened window is shown on screen; other windows
  exist only as in-memory frame buffers.
- A shown display needs a colour depth of 24 or 32 bits; lower depths work
  only headless.
- Text drawn with `string_put` uses pygame's default font; `set_font` only
  records the font name.
- Transparent XPM pixels (`None`) are stored as `0xFF000000`; no clip mask is
  applied when an image is put into a window.
- Rendering is plain Python, so each redraw of the full 800×800 window takes
  noticeable time.