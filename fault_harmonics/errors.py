from __future__ import annotations


class HarmonicsError(ValueError):
    """Base class for errors raised before any window is analyzed."""


class ConfigurationError(HarmonicsError):
    """Window geometry, fundamental or harmonic orders are invalid."""


class InputShapeError(HarmonicsError):
    """Phase samples and timestamps do not line up."""
