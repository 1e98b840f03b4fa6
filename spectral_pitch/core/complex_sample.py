"""Minimal complex number value type used by the transform."""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Union

import numpy as np

Number = Union[int, float, complex, "Complex"]


def _f32(value: float) -> float:
    # Components are stored with single precision, as delivered by audio callbacks
    return float(np.float32(value))


@dataclass(frozen=True)
class Complex:
    """An immutable (re, im) pair of 32-bit floats."""

    re: float = 0.0
    im: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "re", _f32(self.re))
        object.__setattr__(self, "im", _f32(self.im))

    def __add__(self, other: Complex) -> Complex:
        return Complex(self.re + other.re, self.im + other.im)

    def __sub__(self, other: Complex) -> Complex:
        return Complex(self.re - other.re, self.im - other.im)

    def __mul__(self, other: Complex) -> Complex:
        return Complex(
            self.re * other.re - self.im * other.im,
            self.re * other.im + self.im * other.re,
        )

    def scale(self, factor: float) -> Complex:
        return Complex(self.re * factor, self.im * factor)

    def magnitude(self) -> float:
        return math.hypot(self.re, self.im)

    def __complex__(self) -> complex:
        return complex(self.re, self.im)


def add(a: Complex, b: Complex) -> Complex:
    return a + b


def multiply(a: Complex, b: Complex) -> Complex:
    return a * b


def from_polar(angle: float, magnitude: float = 1.0) -> Complex:
    """Return magnitude * (cos(angle) + i*sin(angle)).

    With the default unit magnitude this is the twiddle factor exp(i*angle).
    """
    return Complex(magnitude * math.cos(angle), magnitude * math.sin(angle))
