"""Dominant-bin search with parabolic sub-bin interpolation."""

from __future__ import annotations
from typing import Callable, Dict, Sequence, Union

import numpy as np

from ..core.complex_sample import Complex
from ..errors import InvalidInput
from ..logging_config import get_logger
from ..note_types import PitchEstimate
from .fft import to_complex_array

logger = get_logger(__name__)

# Keys used to rank spectrum bins. "real" is phase sensitive and can miss a
# peak whose energy sits in the imaginary part.
SELECTION_KEYS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "magnitude": np.abs,
    "real": np.real,
}


def parabolic_offset(alpha: float, beta: float, gamma: float) -> float:
    """Vertex offset (in bins) of the parabola through three equally spaced points.

    Returns 0.0 when the three points are collinear (zero curvature).
    """
    denominator = alpha - 2.0 * beta + gamma
    if denominator == 0:
        return 0.0
    return 0.5 * (alpha - gamma) / denominator


def interpolate_peak(values: Sequence[float], index: int, bin_width: float) -> float:
    """Refine the frequency of the peak at ``values[index]``.

    Args:
        values: Per-bin values the peak was selected from
        index: Index of the peak
        bin_width: Frequency spacing between bins in Hz

    Returns:
        The refined frequency in Hz. A peak on the first or last value, or in a
        flat neighbourhood, keeps the coarse frequency index * bin_width.
    """
    coarse = index * bin_width
    if index <= 0 or index >= len(values) - 1:
        return coarse

    alpha, beta, gamma = values[index - 1], values[index], values[index + 1]
    if alpha - 2.0 * beta + gamma == 0:
        logger.debug(f"Flat neighbourhood around bin {index}, keeping {coarse:.2f}Hz")
        return coarse

    return coarse + parabolic_offset(alpha, beta, gamma) * bin_width


def estimate_pitch(
    spectrum: Union[np.ndarray, Sequence[Complex]],
    sample_rate: int,
    selection: str = "magnitude",
) -> PitchEstimate:
    """Find the dominant frequency in ``spectrum``.

    Only bins 0..N/2 are scanned; the upper half mirrors them for real input.

    Args:
        spectrum: Output of ``transform`` or ``transform_array`` (N bins)
        sample_rate: Sample rate of the analyzed block in Hz
        selection: "magnitude" or "real", the per-bin value that is ranked and
            interpolated

    Returns:
        PitchEstimate with the refined frequency and the magnitude of the peak bin

    Raises:
        InvalidInput: On an empty spectrum, non-positive sample rate or an
            unknown selection key
    """
    if sample_rate <= 0:
        raise InvalidInput(f"Sample rate must be positive, got {sample_rate}")
    n = len(spectrum)
    if n == 0:
        raise InvalidInput("Spectrum is empty")
    if selection not in SELECTION_KEYS:
        raise InvalidInput(
            f"Unknown peak selection '{selection}', expected one of {sorted(SELECTION_KEYS)}"
        )

    if not isinstance(spectrum, np.ndarray):
        spectrum = to_complex_array(spectrum)
    values = SELECTION_KEYS[selection](spectrum[: n // 2 + 1]).astype(np.float64)

    # argmax keeps the first of equal maxima
    peak_index = int(np.argmax(values))

    bin_width = sample_rate / n
    frequency = float(interpolate_peak(values, peak_index, bin_width))
    magnitude = float(abs(spectrum[peak_index]))

    logger.debug(
        f"Peak at bin {peak_index}/{n}: coarse={peak_index * bin_width:.2f}Hz "
        f"refined={frequency:.2f}Hz magnitude={magnitude:.3f}"
    )
    return PitchEstimate(frequency_hz=frequency, magnitude=magnitude, bin_index=peak_index)
