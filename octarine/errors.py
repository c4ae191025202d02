"""Configuration and document errors.

Palette generation itself never raises for color values; these errors are
only raised at the configuration boundary.
"""


class OctarineError(Exception):
    """Base class for octarine errors."""
    pass


class ConfigError(OctarineError):
    """Invalid settings value (unknown method, malformed stop, ...)."""
    pass


class UnknownPresetError(ConfigError):
    """Reference to a curve preset that does not exist."""
    pass


class DocumentLoadError(OctarineError):
    """Palette document is corrupt, malformed or of an unsupported version."""
    pass
