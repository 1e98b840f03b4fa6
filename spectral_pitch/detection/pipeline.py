"""Per-block pitch detection: window, transform, peak search and note lookup."""

from __future__ import annotations
from typing import Sequence, Union

import numpy as np

from ..core.complex_sample import Number
from ..errors import InvalidInput
from ..logging_config import get_logger
from ..note_types import DetectionResult
from .fft import check_block_length, to_complex_array, transform_array
from .note_table import (
    DEFAULT_THRESHOLD_HZ,
    STANDARD_GUITAR_TUNING,
    NoteTable,
    classify_note,
    note_table_from_pairs,
)
from .peak import SELECTION_KEYS, estimate_pitch
from .window import apply_window

logger = get_logger(__name__)


class PitchPipeline:
    """Estimates the dominant pitch of fixed-size sample blocks.

    The pipeline holds only read-only settings, so one instance can analyze
    blocks from several streams. Each call copies the block it is given;
    the caller's buffer is never windowed or retained.
    """

    def __init__(
        self,
        sample_rate: int,
        note_table: NoteTable = STANDARD_GUITAR_TUNING,
        threshold_hz: float = DEFAULT_THRESHOLD_HZ,
        selection: str = "magnitude",
    ) -> None:
        """Initialize the pipeline.

        Args:
            sample_rate: Sample rate of incoming blocks in Hz
            note_table: Ordered (name, frequency) entries used for classification
            threshold_hz: Maximum distance (exclusive) to report a note
            selection: Peak ranking key, "magnitude" or "real"
        """
        if sample_rate <= 0:
            raise InvalidInput(f"Sample rate must be positive, got {sample_rate}")
        if selection not in SELECTION_KEYS:
            raise InvalidInput(
                f"Unknown peak selection '{selection}', expected one of {sorted(SELECTION_KEYS)}"
            )
        self._sample_rate = sample_rate
        self._note_table = note_table_from_pairs(note_table)
        self._threshold_hz = threshold_hz
        self._selection = selection

        logger.info(
            f"Pitch pipeline initialized: sample_rate={sample_rate}, "
            f"notes={len(self._note_table)}, threshold={threshold_hz}Hz, selection={selection}"
        )

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def note_table(self) -> NoteTable:
        return self._note_table

    @property
    def threshold_hz(self) -> float:
        return self._threshold_hz

    def analyze(
        self, block: Union[np.ndarray, Sequence[Number]], timestamp: float = 0.0
    ) -> DetectionResult:
        """Analyze one block of N samples (N a power of two).

        Raises:
            InvalidInput: If the block is empty or its length is not a power of two
        """
        check_block_length(len(block))

        samples = to_complex_array(block)
        apply_window(samples)
        spectrum = transform_array(samples)
        estimate = estimate_pitch(spectrum, self._sample_rate, self._selection)
        note = classify_note(estimate.frequency_hz, self._note_table, self._threshold_hz)

        logger.debug(
            f"t={timestamp:.3f}s freq={estimate.frequency_hz:.2f}Hz "
            f"mag={estimate.magnitude:.3f} note={note or '---'}"
        )
        return DetectionResult(
            frequency_hz=estimate.frequency_hz,
            magnitude=estimate.magnitude,
            note=note,
            bin_index=estimate.bin_index,
            timestamp=timestamp,
        )


def analyze_block(
    samples: Sequence[Number],
    sample_rate: int,
    note_table: NoteTable = STANDARD_GUITAR_TUNING,
    threshold_hz: float = DEFAULT_THRESHOLD_HZ,
) -> DetectionResult:
    """One-shot form of ``PitchPipeline(...).analyze(samples)``."""
    return PitchPipeline(sample_rate, note_table, threshold_hz).analyze(samples)
