"""Defines the interfaces of the collaborators around the pitch pipeline."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, Iterator

import numpy as np

from ..note_types import DetectionResult

# A sink consumes one detection result per analyzed block
ResultSink = Callable[[DetectionResult], None]


class IBlockSource(ABC):
    """Interface for producers of fixed-size mono sample blocks."""

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """The sample rate of the delivered blocks in Hz."""
        pass

    @property
    @abstractmethod
    def block_size(self) -> int:
        """Number of samples in every delivered block."""
        pass

    @abstractmethod
    def blocks(self) -> Iterator[np.ndarray]:
        """Yield float32 blocks of exactly ``block_size`` samples."""
        pass
