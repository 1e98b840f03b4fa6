"""Block sources and the detection service built on the pitch pipeline."""

from .block_sources import ArrayBlockSource, AudioFileBlockSource
from .pitch_detection_service import PitchDetectionService

__all__ = ["ArrayBlockSource", "AudioFileBlockSource", "PitchDetectionService"]
