"""Core components for the spectral pitch pipeline."""

from .complex_sample import Complex, add, multiply, from_polar
from .interfaces import IBlockSource

__all__ = ["Complex", "add", "multiply", "from_polar", "IBlockSource"]
