class AsciiStudioError(Exception):
    """Base class for every error raised by asciistudio."""


class InvalidImage(AsciiStudioError, ValueError):
    """Input image is empty or could not be decoded."""


class InvalidConfig(AsciiStudioError, ValueError):
    """Conversion settings are out of range or structurally invalid."""


class RenderFailure(AsciiStudioError, RuntimeError):
    """Headless capture of exported markup failed."""


class RenderTimeout(RenderFailure):
    """Headless capture exceeded its time limit."""
