"""Command-line parsing: which fractal to draw and its parameters."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

DEFAULT_MAX_ITER = 100

USAGE = "usage: fractol <mandelbrot|julia|burning_ship> [julia_re julia_im]"
JULIA_USAGE = "usage: fractol julia <julia_re> <julia_im>"

_NUMBER_PREFIX = re.compile(r"([+-]?)([0-9]*)(?:\.([0-9]*))?")
_VALID_NUMBER = re.compile(r"[+-]?[0-9]*(?:\.[0-9]*)?")


class FractalKind(Enum):
    """The fractals that can be drawn."""

    MANDELBROT = "mandelbrot"
    JULIA = "julia"
    BURNING_SHIP = "burning_ship"


@dataclass(frozen=True)
class FractalConfig:
    """What to draw: the fractal, the Julia constant and the iteration limit."""

    kind: FractalKind
    julia_c: complex = 0j
    max_iter: int = DEFAULT_MAX_ITER


class ArgumentError(ValueError):
    """Raised when the command-line arguments are invalid."""


def parse_float(text: str) -> float:
    """Read a decimal number from the start of ``text``; stop at the first other character."""
    sign, whole, fraction = _NUMBER_PREFIX.match(text).groups()
    result = 0.0
    for digit in whole:
        result = result * 10 + int(digit)
    if fraction is not None:
        numerator = 0.0
        divisor = 1.0
        for digit in fraction:
            numerator = numerator * 10 + int(digit)
            divisor *= 10
        result += numerator / divisor
    return -result if sign == "-" else result


def is_valid_number(text: str) -> bool:
    """Tell whether ``text`` is a signed decimal with at most one inner dot."""
    if not text or text.startswith(".") or text.endswith("."):
        return False
    return _VALID_NUMBER.fullmatch(text) is not None


def parse_arguments(args: Sequence[str]) -> FractalConfig:
    """Build a configuration from the arguments after the program name."""
    args = list(args)
    if not args:
        raise ArgumentError(USAGE)
    name = args[0]
    if name == FractalKind.MANDELBROT.value:
        return FractalConfig(FractalKind.MANDELBROT)
    if name == FractalKind.BURNING_SHIP.value:
        return FractalConfig(FractalKind.BURNING_SHIP)
    if name == FractalKind.JULIA.value:
        if len(args) != 3:
            raise ArgumentError(JULIA_USAGE)
        if not (is_valid_number(args[1]) and is_valid_number(args[2])):
            raise ArgumentError("julia set parameters must be valid float numbers")
        return FractalConfig(
            FractalKind.JULIA,
            julia_c=complex(parse_float(args[1]), parse_float(args[2])),
        )
    raise ArgumentError(f"invalid argument: {name!r}\n{USAGE}")