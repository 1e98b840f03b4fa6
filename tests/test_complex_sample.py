import math
import unittest

import numpy as np

from spectral_pitch.core.complex_sample import Complex, add, from_polar, multiply


class TestComplex(unittest.TestCase):
    def test_add(self):
        self.assertEqual(add(Complex(1, 2), Complex(3, -5)), Complex(4, -3))
        self.assertEqual(Complex(1, 2) + Complex(3, -5), Complex(4, -3))

    def test_multiply(self):
        # (1+2i)(3+4i) = 3 + 4i + 6i + 8i^2 = -5 + 10i
        self.assertEqual(multiply(Complex(1, 2), Complex(3, 4)), Complex(-5, 10))
        self.assertEqual(Complex(0, 1) * Complex(0, 1), Complex(-1, 0))

    def test_subtract(self):
        self.assertEqual(Complex(1, 1) - Complex(0.5, 2), Complex(0.5, -1))

    def test_components_are_single_precision(self):
        c = Complex(0.1, 1 / 3)
        self.assertEqual(c.re, float(np.float32(0.1)))
        self.assertEqual(c.im, float(np.float32(1 / 3)))

    def test_from_polar_unit_circle(self):
        c = from_polar(math.pi / 2)
        self.assertAlmostEqual(c.re, 0.0, places=6)
        self.assertAlmostEqual(c.im, 1.0, places=6)
        self.assertAlmostEqual(from_polar(-math.pi / 3).magnitude(), 1.0, places=6)

    def test_from_polar_magnitude(self):
        c = from_polar(math.pi, magnitude=2.0)
        self.assertAlmostEqual(c.re, -2.0, places=6)
        self.assertAlmostEqual(c.im, 0.0, places=6)

    def test_magnitude(self):
        self.assertAlmostEqual(Complex(3, 4).magnitude(), 5.0)

    def test_immutable(self):
        c = Complex(1, 2)
        with self.assertRaises(AttributeError):
            c.re = 5.0


if __name__ == "__main__":
    unittest.main()
