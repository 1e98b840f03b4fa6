"""Command-line interface for spectral_pitch."""

from .main import cli, main

__all__ = ["cli", "main"]
