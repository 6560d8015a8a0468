"""In-memory images with a raw pixel buffer and colour conversion helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

_BITS_FOR_DEPTH = {8: 8, 15: 16, 16: 16, 24: 32, 32: 32}
_SCANLINE_PAD = 32


class ImageKind(IntEnum):
    """How an image's pixels are stored."""

    XIMAGE = 1
    SHM = 2
    SHM_PIXMAP = 3


@dataclass
class Image:
    """A width x height image whose pixels live in ``data``.

    ``endian`` is 0 for little-endian pixel storage and 1 for big-endian.
    """

    width: int
    height: int
    depth: int = 24
    bits_per_pixel: int = 32
    size_line: int = 0
    endian: int = 0
    kind: ImageKind = ImageKind.XIMAGE
    data: bytearray = field(default_factory=bytearray, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"invalid image size {self.width}x{self.height}")
        if self.size_line == 0:
            bits = self.width * self.bits_per_pixel
            self.size_line = (bits + _SCANLINE_PAD - 1) // _SCANLINE_PAD * (_SCANLINE_PAD // 8)
        if not self.data:
            self.data = bytearray(self.size_line * self.height)

    @property
    def bytes_per_pixel(self) -> int:
        return self.bits_per_pixel // 8

    @property
    def _byteorder(self) -> str:
        return "big" if self.endian else "little"

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.size_line + x * self.bytes_per_pixel

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store ``color`` at (x, y), keeping as many low bytes as a pixel holds."""
        offset = self._offset(x, y)
        size = self.bytes_per_pixel
        value = color & ((1 << (size * 8)) - 1)
        self.data[offset:offset + size] = value.to_bytes(size, self._byteorder)

    def get_pixel(self, x: int, y: int) -> int:
        """Return the pixel value stored at (x, y)."""
        offset = self._offset(x, y)
        return int.from_bytes(self.data[offset:offset + self.bytes_per_pixel], self._byteorder)


def new_image(width: int, height: int, depth: int = 24) -> Image:
    """Create a blank image for a screen of the given colour depth."""
    try:
        bits = _BITS_FOR_DEPTH[depth]
    except KeyError:
        raise ValueError(f"unsupported colour depth {depth}") from None
    return Image(width=width, height=height, depth=depth, bits_per_pixel=bits)


def _shift_and_width(mask: int) -> tuple[int, int]:
    if mask <= 0:
        raise ValueError("colour mask must be a positive bit field")
    shift = (mask & -mask).bit_length() - 1
    mask >>= shift
    width = 0
    while mask & 1:
        mask >>= 1
        width += 1
    return shift, width


def channel_shifts(red_mask: int, green_mask: int, blue_mask: int) -> tuple[int, ...]:
    """Return (red shift, red bits, green shift, green bits, blue shift, blue bits)."""
    return (
        *_shift_and_width(red_mask),
        *_shift_and_width(green_mask),
        *_shift_and_width(blue_mask),
    )


def good_color(color: int, depth: int, shifts: tuple[int, ...]) -> int:
    """Convert a 0xRRGGBB colour to a pixel value for a screen of ``depth`` bits."""
    if depth >= 24:
        return color
    red = (color >> 8) & 0xFF00
    green = color & 0xFF00
    blue = (color << 8) & 0xFF00
    red_shift, red_bits, green_shift, green_bits, blue_shift, blue_bits = shifts
    return (
        ((red >> (16 - red_bits)) << red_shift)
        + ((green >> (16 - green_bits)) << green_shift)
        + ((blue >> (16 - blue_bits)) << blue_shift)
    )