import unittest

import numpy as np

from spectral_pitch.core.complex_sample import Complex
from spectral_pitch.detection.window import apply_window, hann_coefficients
from spectral_pitch.errors import InvalidInput


class TestHannWindow(unittest.TestCase):
    def test_real_list_in_place(self):
        samples = [1.0, 1.0, 1.0, 1.0]
        self.assertIsNone(apply_window(samples))
        for actual, expected in zip(samples, [0.0, 0.5, 1.0, 0.5]):
            self.assertAlmostEqual(actual, expected)

    def test_complex_list_scales_both_components(self):
        samples = [Complex(2, -2)] * 4
        apply_window(samples)
        self.assertAlmostEqual(samples[0].magnitude(), 0.0, places=6)
        self.assertAlmostEqual(samples[1].re, 1.0, places=6)
        self.assertAlmostEqual(samples[1].im, -1.0, places=6)
        self.assertAlmostEqual(samples[2].re, 2.0, places=6)
        self.assertAlmostEqual(samples[2].im, -2.0, places=6)

    def test_numpy_array_in_place(self):
        samples = np.ones(8, dtype=np.float32)
        apply_window(samples)
        np.testing.assert_allclose(samples, hann_coefficients(8), atol=1e-6)
        self.assertEqual(samples.dtype, np.float32)

    def test_matches_periodic_formula(self):
        length = 16
        expected = [0.5 * (1 - np.cos(2 * np.pi * i / length)) for i in range(length)]
        np.testing.assert_allclose(hann_coefficients(length), expected)

    def test_empty_block_rejected(self):
        with self.assertRaises(InvalidInput):
            apply_window([])
        with self.assertRaises(InvalidInput):
            apply_window(np.array([], dtype=np.float32))

    def test_integer_and_multichannel_arrays_rejected(self):
        with self.assertRaises(InvalidInput):
            apply_window(np.ones(4, dtype=np.int16))
        with self.assertRaises(InvalidInput):
            apply_window(np.ones((4, 2), dtype=np.float32))

    def test_double_windowing_differs_from_single(self):
        # Windowing is not idempotent: a second pass squares the taper
        once = [0.8] * 8
        apply_window(once)
        twice = [0.8] * 8
        apply_window(twice)
        apply_window(twice)
        self.assertNotEqual(once, twice)
        self.assertAlmostEqual(twice[2], 0.8 * 0.5 * 0.5)
        self.assertAlmostEqual(once[2], 0.8 * 0.5)


if __name__ == "__main__":
    unittest.main()
