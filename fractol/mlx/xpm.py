"""Reader for XPM images, from files or from in-memory string arrays."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from fractol.mlx.colors import text_to_rgb
from fractol.mlx.image import Image, new_image
from fractol.mlx.text import find, find_unquoted, split_words

_TRANSPARENT = 0xFF000000
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or is malformed."""


def color_key(chars: str) -> int:
    """Pack the characters naming an XPM colour into one integer."""
    result = 0
    for char in chars:
        result = (result << 8) + ord(char)
    return result


def _blank(text: str, start: int, length: int) -> str:
    length = min(length, len(text) - start)
    return text[:start] + " " * length + text[start + length:]


def strip_comments(text: str) -> str:
    """Replace C-style comments outside quoted strings by spaces.

    The result has the same length as ``text``.
    """
    size = len(text)
    while (begin := find_unquoted(text, "/*", size)) != -1:
        end = find(text[begin + 2:], "*/", size - begin - 2)
        text = _blank(text, begin, end + 4)
    while (begin := find_unquoted(text, "//", size)) != -1:
        end = find(text[begin + 2:], "\n", size - begin - 2)
        text = _blank(text, begin, end + 3)
    return text


def file_lines(text: str) -> Iterator[str]:
    """Yield the contents of each double-quoted string in ``text``."""
    pos = 0
    while (start := text.find('"', pos)) != -1:
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def _atoi(word: str) -> int:
    match = _LEADING_INT.match(word)
    return int(match.group(1)) if match else 0


def _read_header(line: str | None) -> tuple[int, int, int, int]:
    if line is None:
        raise XpmError("missing XPM header")
    words = split_words(line)
    if len(words) < 4:
        raise XpmError(f"malformed XPM header: {line!r}")
    values = tuple(_atoi(word) for word in words[:4])
    if not all(values):
        raise XpmError(f"malformed XPM header: {line!r}")
    return values  # type: ignore[return-value]


def _read_colors(lines: Iterator[str], count: int, cpp: int) -> dict[int, int]:
    # Keys of one or two characters let later entries override earlier ones;
    # longer keys keep the first definition.
    overwrite = cpp <= 2
    colors: dict[int, int] = {}
    for _ in range(count):
        line = next(lines, None)
        if line is None:
            raise XpmError("missing XPM colour definition")
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
            spec = words[index]
        except (ValueError, IndexError):
            raise XpmError(f"no colour in XPM definition: {line!r}") from None
        extra = words[index + 1] if index + 1 < len(words) else None
        key = color_key(line[:cpp])
        value = text_to_rgb(spec, extra)
        if overwrite:
            colors[key] = value
        else:
            colors.setdefault(key, value)
    return colors


def parse_xpm(lines: Iterable[str], depth: int = 24) -> Image:
    """Build an image from the string values of an XPM description."""
    it = iter(lines)
    width, height, ncolors, cpp = _read_header(next(it, None))
    colors = _read_colors(it, ncolors, cpp)
    try:
        image = new_image(width, height, depth)
    except ValueError as exc:
        raise XpmError(str(exc)) from exc
    for y in range(height):
        line = next(it, None)
        if line is None:
            raise XpmError("missing XPM pixel row")
        for x in range(width):
            chunk = line[cpp * x:cpp * (x + 1)].ljust(cpp, "\0")
            color = colors.get(color_key(chunk), 0)
            if color == -1:
                color = _TRANSPARENT
            image.put_pixel(x, y, color)
    return image


def xpm_file_to_image(path: str | Path, depth: int = 24) -> Image:
    """Read an XPM file and return its image."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm(file_lines(strip_comments(text)), depth)


def xpm_to_image(data: Iterable[str], depth: int = 24) -> Image:
    """Build an image from XPM data given as a sequence of strings."""
    return parse_xpm(data, depth)