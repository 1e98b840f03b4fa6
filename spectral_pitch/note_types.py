"""Type definitions for the spectral pitch pipeline."""

from typing import Optional
from dataclasses import dataclass


@dataclass(frozen=True)
class NoteEntry:
    """A named reference pitch in a note table."""

    name: str  # Note name in scientific pitch notation (e.g., 'A2')
    frequency: float  # Reference frequency in Hz


@dataclass
class PitchEstimate:
    """Dominant frequency found in a spectrum."""

    frequency_hz: float  # Interpolated frequency in Hz
    magnitude: float  # Magnitude of the dominant bin
    bin_index: int  # Index of the dominant bin


@dataclass
class DetectionResult:
    """Represents the outcome of analyzing one sample block."""

    frequency_hz: float  # Estimated frequency in Hz
    magnitude: float  # Magnitude of the dominant bin
    note: Optional[str] = None  # Closest note within threshold, if any
    bin_index: int = 0  # Dominant bin in the spectrum
    timestamp: float = 0.0  # Seconds from the start of the stream
