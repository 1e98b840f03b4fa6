"""Note tables and nearest-note classification."""

from __future__ import annotations
import math
from typing import Iterable, Optional, Sequence, Tuple, Union, ClassVar, List, Dict

import numpy as np

from ..errors import InvalidInput
from ..logging_config import get_logger
from ..note_types import NoteEntry

logger = get_logger(__name__)

NoteTable = Tuple[NoteEntry, ...]

DEFAULT_THRESHOLD_HZ = 50.0
DEFAULT_TUNING = 440.0


class NoteNames:
    """Chromatic note names in scientific pitch notation."""

    SHARP_NOTES: ClassVar[List[str]] = [
        "C",
        "C#",
        "D",
        "D#",
        "E",
        "F",
        "F#",
        "G",
        "G#",
        "A",
        "A#",
        "B",
    ]

    SHARP_TO_FLAT: ClassVar[Dict[str, str]] = {
        "C#": "Db",
        "D#": "Eb",
        "F#": "Gb",
        "G#": "Ab",
        "A#": "Bb",
    }

    @classmethod
    def name(cls, midi_number: int, use_flats: bool = False) -> str:
        """Return the SPN name for a MIDI note number (69 is A4)."""
        octave = (midi_number // 12) - 1
        note = cls.SHARP_NOTES[midi_number % 12]
        if use_flats:
            note = cls.SHARP_TO_FLAT.get(note, note)
        return f"{note}{octave}"


STANDARD_GUITAR_TUNING: NoteTable = (
    NoteEntry("E2", 82.41),
    NoteEntry("A2", 110.0),
    NoteEntry("D3", 146.83),
    NoteEntry("G3", 196.0),
    NoteEntry("B3", 246.94),
    NoteEntry("E4", 329.63),
)


def note_name_for_frequency(
    freq: float, tuning: float = DEFAULT_TUNING, use_flats: bool = False
) -> str:
    """Convert frequency to the nearest equal-tempered note name.

    Args:
        freq: Frequency in Hz
        tuning: Reference frequency of A4
        use_flats: If True, use flat notes (e.g., 'Bb') instead of sharps (e.g., 'A#')

    Returns:
        Note name with octave in SPN (e.g., 'A4', 'C#4'), or '---' for
        non-positive or non-finite input

    Note:
        - Middle C is C4 (261.63 Hz)
        - Octave numbers change between B and C (e.g., B3 -> C4)
    """
    if not np.isfinite(freq) or freq <= 0:
        return "---"

    half_steps = int(round(12 * np.log2(freq / tuning)))
    midi_number = 69 + half_steps
    return NoteNames.name(midi_number, use_flats)


def cents_offset(frequency_hz: float, reference_hz: float) -> float:
    """Deviation of ``frequency_hz`` from ``reference_hz`` in cents."""
    if frequency_hz <= 0 or reference_hz <= 0:
        return math.nan
    return 1200.0 * math.log2(frequency_hz / reference_hz)


def build_chromatic_table(
    min_octave: int = 0,
    max_octave: int = 8,
    tuning: float = DEFAULT_TUNING,
    use_flats: bool = False,
) -> NoteTable:
    """Build an equal-tempered table from C<min_octave> to B<max_octave>."""
    if max_octave < min_octave:
        raise InvalidInput(
            f"max_octave ({max_octave}) must not be below min_octave ({min_octave})"
        )
    entries = []
    for midi_number in range((min_octave + 1) * 12, (max_octave + 2) * 12):
        frequency = tuning * 2.0 ** ((midi_number - 69) / 12.0)
        entries.append(NoteEntry(NoteNames.name(midi_number, use_flats), frequency))
    return tuple(entries)


def note_table_from_pairs(pairs: Iterable[Sequence]) -> NoteTable:
    """Build a table from (name, frequency) pairs, preserving order."""
    table = []
    for pair in pairs:
        if isinstance(pair, NoteEntry):
            table.append(pair)
            continue
        if isinstance(pair, (str, bytes)) or len(pair) != 2:
            raise InvalidInput(f"Note table entry must be (name, frequency): {pair!r}")
        name, frequency = pair
        table.append(NoteEntry(str(name), float(frequency)))
    return tuple(table)


NAMED_TABLES = {
    "guitar": lambda use_flats: STANDARD_GUITAR_TUNING,
    "chromatic": lambda use_flats: build_chromatic_table(use_flats=use_flats),
}


def resolve_note_table(
    table: Union[str, Iterable[Sequence]], use_flats: bool = False
) -> NoteTable:
    """Resolve a configured table: a known name or explicit (name, freq) pairs."""
    if isinstance(table, str):
        if table not in NAMED_TABLES:
            raise InvalidInput(
                f"Unknown note table '{table}', expected one of {sorted(NAMED_TABLES)}"
            )
        return NAMED_TABLES[table](use_flats)
    return note_table_from_pairs(table)


def classify_note(
    frequency_hz: float,
    table: Sequence[NoteEntry],
    threshold_hz: float = DEFAULT_THRESHOLD_HZ,
) -> Optional[str]:
    """Return the name of the table entry closest to ``frequency_hz``.

    The first entry with the strictly smallest distance wins. A match is only
    reported when that distance is strictly less than ``threshold_hz``.

    Returns:
        The note name, or None when no entry is close enough
    """
    best: Optional[NoteEntry] = None
    best_distance = math.inf
    for entry in table:
        distance = abs(entry.frequency - frequency_hz)
        if distance < best_distance:
            best = entry
            best_distance = distance

    if best is None or not best_distance < threshold_hz:
        logger.debug(f"No note within {threshold_hz}Hz of {frequency_hz:.2f}Hz")
        return None

    logger.debug(
        f"Classified {frequency_hz:.2f}Hz as {best.name} (distance {best_distance:.2f}Hz)"
    )
    return best.name
