import timeit
import unittest

import numpy as np

from spectral_pitch.detection.note_table import build_chromatic_table
from spectral_pitch.detection.pipeline import PitchPipeline, analyze_block
from spectral_pitch.errors import InvalidInput

SAMPLE_RATE = 2048
BLOCK_SIZE = 1024  # 2Hz per bin


def sine(frequency, n=BLOCK_SIZE, sample_rate=SAMPLE_RATE, amplitude=0.5):
    t = np.arange(n) / sample_rate
    return (amplitude * np.sin(2 * np.pi * frequency * t)).astype(np.float32)


class TestPitchPipeline(unittest.TestCase):
    def setUp(self):
        self.pipeline = PitchPipeline(sample_rate=SAMPLE_RATE)

    def test_detects_open_a_string(self):
        result = self.pipeline.analyze(sine(110.0))
        self.assertAlmostEqual(result.frequency_hz, 110.0, delta=0.1)
        self.assertEqual(result.bin_index, 55)
        self.assertEqual(result.note, "A2")
        self.assertGreater(result.magnitude, 0.0)

    def test_interpolates_between_bins(self):
        # 111Hz sits halfway between bins 55 and 56
        result = self.pipeline.analyze(sine(111.0))
        self.assertAlmostEqual(result.frequency_hz, 111.0, delta=0.25)
        self.assertIn(result.bin_index, (55, 56))

    def test_low_e_with_chromatic_table(self):
        pipeline = PitchPipeline(
            sample_rate=SAMPLE_RATE, note_table=build_chromatic_table(), threshold_hz=2.0
        )
        result = pipeline.analyze(sine(82.41))
        self.assertAlmostEqual(result.frequency_hz, 82.41, delta=0.5)
        self.assertEqual(result.note, "E2")

    def test_no_match_outside_threshold(self):
        pipeline = PitchPipeline(sample_rate=SAMPLE_RATE, threshold_hz=10.0)
        result = pipeline.analyze(sine(500.0))
        self.assertAlmostEqual(result.frequency_hz, 500.0, delta=0.5)
        self.assertIsNone(result.note)

    def test_silence_is_valid(self):
        result = self.pipeline.analyze(np.zeros(BLOCK_SIZE, dtype=np.float32))
        self.assertEqual(result.frequency_hz, 0.0)
        self.assertEqual(result.magnitude, 0.0)
        self.assertIsNone(result.note)

    def test_caller_buffer_is_not_modified(self):
        block = sine(196.0)
        snapshot = block.copy()
        self.pipeline.analyze(block)
        np.testing.assert_array_equal(block, snapshot)

        as_list = block.tolist()
        self.pipeline.analyze(as_list)
        self.assertEqual(as_list, snapshot.tolist())

    def test_timestamp_is_passed_through(self):
        self.assertEqual(self.pipeline.analyze(sine(110.0), timestamp=1.5).timestamp, 1.5)

    def test_rejects_bad_block_lengths(self):
        with self.assertRaises(InvalidInput):
            self.pipeline.analyze([0.1, 0.2, 0.3])
        with self.assertRaises(InvalidInput):
            self.pipeline.analyze([])

    def test_rejects_bad_settings(self):
        with self.assertRaises(InvalidInput):
            PitchPipeline(sample_rate=0)
        with self.assertRaises(InvalidInput):
            PitchPipeline(sample_rate=44100, selection="loudest")

    def test_note_table_is_copied_to_tuple(self):
        table = [("A2", 110.0)]
        pipeline = PitchPipeline(sample_rate=SAMPLE_RATE, note_table=table)
        table.append(("B2", 123.47))
        self.assertEqual(len(pipeline.note_table), 1)

    def test_keeps_up_with_default_block_period(self):
        sample_rate, block_size = 44100, 4096
        pipeline = PitchPipeline(sample_rate=sample_rate)
        block = sine(110.0, n=block_size, sample_rate=sample_rate)
        self.assertEqual(pipeline.analyze(block).note, "A2")

        elapsed = min(timeit.repeat(lambda: pipeline.analyze(block), number=1, repeat=5))
        self.assertLess(elapsed, block_size / sample_rate)

    def test_analyze_block(self):
        result = analyze_block(sine(146.83).tolist(), SAMPLE_RATE)
        self.assertEqual(result.note, "D3")


if __name__ == "__main__":
    unittest.main()
