"""Sample block sources feeding the pitch pipeline."""

from typing import Iterator, Optional

import numpy as np
import soundfile as sf

from ..core.interfaces import IBlockSource
from ..detection.fft import is_power_of_two
from ..errors import InvalidInput
from ..logging_config import get_logger

logger = get_logger(__name__)


def _check_source_settings(sample_rate: int, block_size: int) -> None:
    if sample_rate <= 0:
        raise InvalidInput(f"Sample rate must be positive, got {sample_rate}")
    if not is_power_of_two(block_size):
        raise InvalidInput(f"Block size must be a power of two, got {block_size}")


class ArrayBlockSource(IBlockSource):
    """Provides blocks sliced from an in-memory mono signal."""

    def __init__(self, samples, sample_rate: int, block_size: int):
        _check_source_settings(sample_rate, block_size)
        self._samples = np.asarray(samples, dtype=np.float32)
        if self._samples.ndim != 1:
            raise InvalidInput(
                f"Expected a mono signal, got array with shape {self._samples.shape}"
            )
        self._sample_rate = sample_rate
        self._block_size = block_size

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def block_size(self) -> int:
        return self._block_size

    def blocks(self) -> Iterator[np.ndarray]:
        # Trailing samples that do not fill a whole block are dropped
        for start in range(0, len(self._samples) - self._block_size + 1, self._block_size):
            yield self._samples[start : start + self._block_size].copy()


class AudioFileBlockSource(IBlockSource):
    """Provides blocks read from an audio file (WAV, FLAC, ...) with soundfile."""

    def __init__(
        self,
        file_path: str,
        block_size: int,
        gain: float = 1.0,
        sample_rate: Optional[int] = None,
    ):
        """Open ``file_path`` and validate the block size.

        Args:
            file_path: Path of a file readable by libsndfile
            block_size: Samples per block, a power of two
            gain: Linear gain applied to every block
            sample_rate: Expected sample rate; a mismatch with the file raises
        """
        self._file_path = file_path
        self._block_size = block_size
        self._gain = gain

        with sf.SoundFile(self._file_path) as f:
            self._sample_rate = f.samplerate
            self._channels = f.channels
            self._frames = f.frames

        if sample_rate is not None and sample_rate != self._sample_rate:
            raise InvalidInput(
                f"{file_path} is sampled at {self._sample_rate}Hz, expected {sample_rate}Hz"
            )
        _check_source_settings(self._sample_rate, block_size)

        logger.info(
            f"Opened {file_path}: {self._frames} frames, {self._channels} channel(s), "
            f"{self._sample_rate}Hz, block_size={block_size}"
        )

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def channels(self) -> int:
        return self._channels

    def blocks(self) -> Iterator[np.ndarray]:
        if self._channels > 1:
            logger.info(f"{self._file_path} has {self._channels} channels, using channel 0")

        for data in sf.blocks(
            self._file_path, blocksize=self._block_size, dtype="float32", always_2d=True
        ):
            if len(data) < self._block_size:
                logger.debug(f"Dropping trailing partial block of {len(data)} frames")
                break

            block = np.ascontiguousarray(data[:, 0])
            if self._gain != 1.0:
                block *= self._gain
            yield block
