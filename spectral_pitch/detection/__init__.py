"""Signal processing stages of the pitch pipeline."""

from .fft import transform, is_power_of_two
from .note_table import (
    STANDARD_GUITAR_TUNING,
    build_chromatic_table,
    classify_note,
)
from .peak import estimate_pitch, interpolate_peak
from .pipeline import PitchPipeline, analyze_block
from .window import apply_window

__all__ = [
    "apply_window",
    "transform",
    "is_power_of_two",
    "estimate_pitch",
    "interpolate_peak",
    "classify_note",
    "build_chromatic_table",
    "STANDARD_GUITAR_TUNING",
    "PitchPipeline",
    "analyze_block",
]
