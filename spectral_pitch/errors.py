"""Exceptions raised by the pitch detection pipeline."""


class InvalidInput(ValueError):
    """Raised when a caller hands the pipeline a malformed block or setting.

    Covers zero-length blocks, block lengths that are not a power of two,
    non-positive sample rates and unknown configuration names.
    """
