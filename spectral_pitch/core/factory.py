"""Factory for creating spectral_pitch components from configuration."""

from typing import Optional, Dict, Type

from ..logging_config import get_logger
from ..detection.note_table import resolve_note_table
from ..detection.pipeline import PitchPipeline
from ..services.block_sources import AudioFileBlockSource
from ..services.pitch_detection_service import PitchDetectionService
from .config import ConfigManager
from .interfaces import IBlockSource

logger = get_logger(__name__)


class ComponentFactory:
    """Factory for creating spectral_pitch components."""

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """Initialize the component factory.

        Args:
            config_manager: Configuration manager, or None to create a default one
        """
        self.config_manager = config_manager or ConfigManager()

        self.block_source_classes: Dict[str, Type[IBlockSource]] = {
            "file": AudioFileBlockSource,
        }

    def create_pipeline(self, sample_rate: Optional[int] = None, **kwargs) -> PitchPipeline:
        """Create a pitch pipeline from the "pitch_detector" configuration.

        Args:
            sample_rate: Overrides the configured sample rate
            **kwargs: Overrides for any "pitch_detector" setting

        Raises:
            InvalidInput: If the resulting settings are invalid
        """
        config = self.config_manager.get_config("pitch_detector")
        config.update(kwargs)
        if sample_rate is not None:
            config["sample_rate"] = sample_rate

        pipeline = PitchPipeline(
            sample_rate=config["sample_rate"],
            note_table=resolve_note_table(config["note_table"], config["use_flats"]),
            threshold_hz=config["threshold_hz"],
            selection=config["selection"],
        )
        logger.info("Created pitch pipeline")
        return pipeline

    def create_block_source(
        self, file_path: str, implementation: str = "file", **kwargs
    ) -> IBlockSource:
        """Create a block source reading ``file_path``.

        Raises:
            ValueError: If the implementation is not registered
        """
        if implementation not in self.block_source_classes:
            raise ValueError(f"Unknown block source implementation: {implementation}")

        config = self.config_manager.get_config("block_source")
        config.setdefault(
            "block_size", self.config_manager.get_config("pitch_detector")["block_size"]
        )
        config.update(kwargs)

        cls = self.block_source_classes[implementation]
        instance = cls(file_path, **config)

        logger.info(f"Created block source: {implementation}")
        return instance

    def create_detection_service(
        self, block_source: IBlockSource, **kwargs
    ) -> PitchDetectionService:
        """Create a detection service whose pipeline matches the source's sample rate."""
        pipeline = self.create_pipeline(sample_rate=block_source.sample_rate, **kwargs)
        service = PitchDetectionService(block_source, pipeline=pipeline)
        logger.info("Created pitch detection service")
        return service
