"""Escape-time iteration counts for the Mandelbrot, Julia and Burning Ship sets."""

from __future__ import annotations

_ESCAPE_RADIUS_SQUARED = 4


def mandelbrot(c_re: float, c_im: float, max_iter: int) -> int:
    """Count iterations of z -> z^2 + c from z = 0 before |z| exceeds 2."""
    z_re = z_im = 0.0
    iteration = 0
    while z_re * z_re + z_im * z_im <= _ESCAPE_RADIUS_SQUARED and iteration < max_iter:
        z_re, z_im = z_re * z_re - z_im * z_im + c_re, 2 * z_re * z_im + c_im
        iteration += 1
    return iteration


def julia(c: complex, z: complex, max_iter: int) -> int:
    """Count iterations of z -> z^2 + c from the given z before |z| exceeds 2."""
    c_re, c_im = c.real, c.imag
    z_re, z_im = z.real, z.imag
    iteration = 0
    while z_re * z_re + z_im * z_im <= _ESCAPE_RADIUS_SQUARED and iteration < max_iter:
        z_re, z_im = z_re * z_re - z_im * z_im + c_re, 2 * z_re * z_im + c_im
        iteration += 1
    return iteration


def burning_ship(c_re: float, c_im: float, max_iter: int) -> int:
    """Count Burning Ship iterations from z = 0 before |z| exceeds 2."""
    z_re = z_im = 0.0
    iteration = 0
    while z_re * z_re + z_im * z_im <= _ESCAPE_RADIUS_SQUARED and iteration < max_iter:
        z_re, z_im = (
            abs(z_re * z_re) - abs(z_im * z_im) + c_re,
            2 * abs(z_re * z_im) + c_im,
        )
        iteration += 1
    return iteration