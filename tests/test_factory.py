import os
import tempfile
import unittest

import numpy as np
import soundfile as sf

from spectral_pitch.core.config import ConfigManager
from spectral_pitch.core.factory import ComponentFactory
from spectral_pitch.errors import InvalidInput

SAMPLE_RATE = 2048


class TestComponentFactory(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.config = ConfigManager(os.path.join(self._tmp.name, "config"))
        self.factory = ComponentFactory(self.config)

    def write_tone(self, frequency, seconds=1.0):
        path = os.path.join(self._tmp.name, f"{frequency}.wav")
        t = np.arange(int(SAMPLE_RATE * seconds)) / SAMPLE_RATE
        sf.write(path, 0.5 * np.sin(2 * np.pi * frequency * t), SAMPLE_RATE, subtype="FLOAT")
        return path

    def test_create_pipeline_from_config(self):
        self.config.update_config(
            "pitch_detector", {"note_table": "chromatic", "threshold_hz": 3.0}
        )
        pipeline = self.factory.create_pipeline()
        self.assertEqual(pipeline.sample_rate, 44100)
        self.assertEqual(len(pipeline.note_table), 108)
        self.assertEqual(pipeline.threshold_hz, 3.0)

    def test_create_pipeline_with_explicit_table(self):
        pipeline = self.factory.create_pipeline(
            sample_rate=8000, note_table=[["A4", 440.0]]
        )
        self.assertEqual(pipeline.sample_rate, 8000)
        self.assertEqual(pipeline.note_table[0].name, "A4")

    def test_invalid_table_name(self):
        with self.assertRaises(InvalidInput):
            self.factory.create_pipeline(note_table="banjo")

    def test_block_source_uses_configured_block_size(self):
        self.config.update_config("pitch_detector", {"block_size": 512})
        source = self.factory.create_block_source(self.write_tone(110.0))
        self.assertEqual(source.block_size, 512)
        self.assertEqual(len(list(source.blocks())), SAMPLE_RATE // 512)

    def test_unknown_block_source(self):
        with self.assertRaises(ValueError):
            self.factory.create_block_source("x.wav", implementation="microphone")

    def test_detection_service_end_to_end(self):
        source = self.factory.create_block_source(self.write_tone(110.0), block_size=1024)
        service = self.factory.create_detection_service(source)
        self.assertEqual(service.pipeline.sample_rate, SAMPLE_RATE)
        results = service.run()
        self.assertEqual([r.note for r in results], ["A2", "A2"])


if __name__ == "__main__":
    unittest.main()
