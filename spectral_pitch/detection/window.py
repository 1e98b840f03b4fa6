"""Hann windowing applied to sample blocks before the transform."""

from __future__ import annotations
import math
from typing import MutableSequence, Union

import numpy as np

from ..core.complex_sample import Complex
from ..errors import InvalidInput
from ..logging_config import get_logger

logger = get_logger(__name__)

Block = Union[MutableSequence[float], MutableSequence[Complex], np.ndarray]


def hann_coefficient(index: int, length: int) -> float:
    """Periodic Hann weight 0.5 * (1 - cos(2*pi*i/L)) for sample ``index``."""
    return 0.5 * (1.0 - math.cos(2.0 * math.pi * index / length))


def hann_coefficients(length: int) -> np.ndarray:
    """Return the periodic Hann window of ``length`` samples.

    Unlike ``np.hanning`` (symmetric, divides by L - 1) the period here is L,
    so the window tiles cleanly over consecutive blocks.
    """
    if length <= 0:
        raise InvalidInput(f"Window length must be positive, got {length}")
    return 0.5 * (1.0 - np.cos(2.0 * np.pi * np.arange(length) / length))


def apply_window(samples: Block) -> None:
    """Taper ``samples`` in place with a Hann window.

    Accepts a list of real numbers, a list of Complex values (both components
    are scaled) or a 1-D numpy array. Applying the window twice squares it, so
    callers must window a block exactly once.

    Raises:
        InvalidInput: If the block is empty or not one-dimensional
    """
    length = len(samples)
    if length == 0:
        raise InvalidInput("Cannot window an empty block")

    if isinstance(samples, np.ndarray):
        if samples.ndim != 1:
            raise InvalidInput(
                f"Expected a 1-D block, got array with shape {samples.shape}"
            )
        if not np.issubdtype(samples.dtype, np.inexact):
            raise InvalidInput(
                f"Cannot window an array of dtype {samples.dtype} in place"
            )
        samples *= hann_coefficients(length).astype(samples.dtype, copy=False)
        return

    for i in range(length):
        weight = hann_coefficient(i, length)
        value = samples[i]
        if isinstance(value, Complex):
            samples[i] = value.scale(weight)
        else:
            samples[i] = value * weight

    logger.debug(f"Applied Hann window to {length} samples")
