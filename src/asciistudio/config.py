import math
from dataclasses import dataclass

from asciistudio.charsets import DEFAULT
from asciistudio.errors import InvalidConfig
from asciistudio.luminance import resolve_charset, resolve_weights

DEFAULT_WIDTH = 200
DEFAULT_STRETCH = 1.05

# Input bounds of the HTTP form; the pipeline itself takes any width >= 1 and any positive stretch
MIN_WIDTH = 40
MAX_WIDTH = 320
MIN_STRETCH = 0.25
MAX_STRETCH = 4.0


@dataclass(frozen=True)
class Config:
    target_width: int = DEFAULT_WIDTH
    stretch_factor: float = DEFAULT_STRETCH
    charset: str = DEFAULT
    colorize: bool = True
    luminance: str = "ntsc"

    def validate(self) -> "Config":
        """Raise InvalidConfig for unusable settings, otherwise return self."""
        validate_geometry(self.target_width, self.stretch_factor)
        resolve_charset(self.charset)
        resolve_weights(self.luminance)
        return self

    @property
    def effective_charset(self) -> str:
        return resolve_charset(self.charset)

    @property
    def weights(self) -> tuple[float, float, float]:
        return resolve_weights(self.luminance)


def validate_geometry(target_width, stretch_factor) -> None:
    if isinstance(target_width, bool) or not isinstance(target_width, int):
        raise InvalidConfig(f"Target width must be an integer, got {target_width!r}")
    if target_width < 1:
        raise InvalidConfig(f"Target width must be at least 1, got {target_width}")
    if isinstance(stretch_factor, bool) or not isinstance(stretch_factor, (int, float)):
        raise InvalidConfig(f"Stretch factor must be a number, got {stretch_factor!r}")
    if not math.isfinite(stretch_factor) or stretch_factor <= 0:
        raise InvalidConfig(f"Stretch factor must be positive, got {stretch_factor}")


def check_width_bounds(width: int) -> int:
    """Validate a user-supplied width against the interactive range."""
    if not MIN_WIDTH <= width <= MAX_WIDTH:
        raise InvalidConfig(f"Width must be between {MIN_WIDTH} and {MAX_WIDTH}, got {width}")
    return width


def check_stretch_bounds(stretch: float) -> float:
    """Validate a user-supplied stretch factor against the interactive range."""
    if not MIN_STRETCH <= stretch <= MAX_STRETCH:
        raise InvalidConfig(f"Stretch must be between {MIN_STRETCH} and {MAX_STRETCH}, got {stretch}")
    return stretch
