from typing import Callable, List, Optional

from ..core.events import EventEmitter, PitchEventType
from ..core.interfaces import IBlockSource, ResultSink
from ..detection.pipeline import PitchPipeline
from ..errors import InvalidInput
from ..logging_config import get_logger
from ..note_types import DetectionResult

logger = get_logger(__name__)


class PitchDetectionService:
    """Runs every block of a source through a pitch pipeline and publishes the results."""

    def __init__(
        self,
        block_source: IBlockSource,
        pipeline: Optional[PitchPipeline] = None,
        **pipeline_config,
    ) -> None:
        self._block_source = block_source
        if pipeline is None:
            pipeline = PitchPipeline(sample_rate=block_source.sample_rate, **pipeline_config)
        elif pipeline.sample_rate != block_source.sample_rate:
            raise InvalidInput(
                f"Pipeline expects {pipeline.sample_rate}Hz but source delivers "
                f"{block_source.sample_rate}Hz"
            )
        self._pipeline = pipeline
        self._events = EventEmitter()
        self._running = False

    @property
    def pipeline(self) -> PitchPipeline:
        return self._pipeline

    def on_result(self, callback: ResultSink) -> None:
        """Register a sink called with each DetectionResult."""
        self._events.on(PitchEventType.PITCH_DETECTED, callback)

    def on_error(self, callback: Callable[[Exception], None]) -> None:
        """Register a callback for errors raised while analyzing a block."""
        self._events.on(PitchEventType.ERROR, callback)

    def is_running(self) -> bool:
        return self._running

    def stop(self) -> None:
        """Stop after the block currently being analyzed."""
        self._running = False

    def run(self, max_blocks: Optional[int] = None) -> List[DetectionResult]:
        """Analyze blocks in order until the source is exhausted or stopped.

        Args:
            max_blocks: Stop after this many blocks, or None for all of them

        Returns:
            The results of every analyzed block, in order

        Raises:
            InvalidInput: If the pipeline rejects a block; listeners registered
                with on_error are notified first
        """
        results: List[DetectionResult] = []
        block_period = self._block_source.block_size / self._block_source.sample_rate
        self._running = True

        try:
            for index, block in enumerate(self._block_source.blocks()):
                if not self._running or (max_blocks is not None and index >= max_blocks):
                    break
                try:
                    result = self._pipeline.analyze(block, timestamp=index * block_period)
                except InvalidInput as e:
                    logger.error(f"Block {index} rejected: {e}")
                    self._events.emit(PitchEventType.ERROR, e)
                    raise
                results.append(result)
                self._events.emit(PitchEventType.PITCH_DETECTED, result)
        finally:
            self._running = False

        logger.info(f"Analyzed {len(results)} block(s)")
        return results
