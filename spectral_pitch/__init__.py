"""Spectral pitch detection: Hann window, recursive FFT, peak interpolation and note lookup."""

from .errors import InvalidInput
from .note_types import DetectionResult, NoteEntry, PitchEstimate

__version__ = "0.1.0"

__all__ = ["InvalidInput", "DetectionResult", "NoteEntry", "PitchEstimate"]
