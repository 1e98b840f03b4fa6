"""Recursive radix-2 decimation-in-time FFT over strided sample views."""

from __future__ import annotations
from functools import lru_cache
from typing import List, Sequence, Union

import numpy as np

from ..core.complex_sample import Complex, Number
from ..errors import InvalidInput
from ..logging_config import get_logger

logger = get_logger(__name__)

# Samples and bins are held as pairs of 32-bit floats
SAMPLE_DTYPE = np.complex64


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def check_block_length(length: int) -> None:
    """Raise InvalidInput unless ``length`` is a positive power of two."""
    if length == 0:
        raise InvalidInput("Block is empty; length must be a power of two")
    if not is_power_of_two(length):
        raise InvalidInput(f"length must be a power of two, got {length}")


def to_complex_array(samples: Union[np.ndarray, Sequence[Number]]) -> np.ndarray:
    """Copy a block of real, complex or Complex values into a new complex64 array."""
    if isinstance(samples, np.ndarray):
        if samples.ndim != 1:
            raise InvalidInput(f"Expected a 1-D block, got shape {samples.shape}")
        return samples.astype(SAMPLE_DTYPE, copy=True)
    return np.fromiter(
        (complex(s) for s in samples), dtype=SAMPLE_DTYPE, count=len(samples)
    )


@lru_cache(maxsize=None)
def _twiddles(n: int) -> np.ndarray:
    # exp(-2*pi*i*k/n) for k < n/2, where n is the subproblem size
    factors = np.exp(-2j * np.pi * np.arange(n // 2) / n).astype(SAMPLE_DTYPE)
    factors.setflags(write=False)
    return factors


def _transform(x: np.ndarray) -> np.ndarray:
    # x is a view: the parent's items at offset, offset + stride, ...
    n = len(x)
    if n == 1:
        return x.copy()

    even = _transform(x[0::2])
    odd = _transform(x[1::2])
    t = _twiddles(n) * odd
    return np.concatenate((even + t, even - t))


def transform_array(samples: np.ndarray) -> np.ndarray:
    """Compute the DFT of a 1-D array, returning a new complex64 array.

    The input array is never written to.

    Raises:
        InvalidInput: If the length is zero or not a power of two
    """
    n = len(samples)
    check_block_length(n)
    x = np.asarray(samples)
    if x.dtype != SAMPLE_DTYPE:
        x = to_complex_array(x)

    logger.debug(f"Transforming block of {n} samples (depth {n.bit_length() - 1})")
    return _transform(x)


def transform(samples: Sequence[Number]) -> List[Complex]:
    """Compute the discrete Fourier transform of ``samples``.

    Cooley-Tukey decimation in time, recursing over stride views of the input
    rather than copying even/odd halves. Twiddle factors are computed once per
    subproblem size and each level's butterflies run as one numpy operation.
    The input is left untouched and a new list of Complex bins is returned.

    Args:
        samples: Block of N values (Complex or real), N a power of two

    Returns:
        List of N Complex bins; bin k is frequency k * sample_rate / N

    Raises:
        InvalidInput: If N is zero or not a power of two
    """
    check_block_length(len(samples))
    spectrum = transform_array(to_complex_array(samples))
    return [Complex(z.real, z.imag) for z in spectrum]
