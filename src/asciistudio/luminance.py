import numpy as np

from asciistudio.charsets import FALLBACK
from asciistudio.errors import InvalidConfig

NTSC = (0.299, 0.587, 0.114)
REC709 = (0.2126, 0.7152, 0.0722)

WEIGHTS = {
    "ntsc": NTSC,
    "rec709": REC709,
}


def resolve_charset(charset: str) -> str:
    """Return the ramp actually used for mapping.

    An empty ramp becomes a single space. Anything that is not a string, or
    contains a line break, cannot be laid out as a grid and is rejected.
    """
    if not isinstance(charset, str):
        raise InvalidConfig(f"Charset must be a string, got {type(charset).__name__}")
    # Any str.splitlines boundary (\v, \f, \x85, \u2028, ...) counts as a break
    if charset and charset.splitlines() != [charset]:
        raise InvalidConfig("Charset must not contain line breaks")
    return charset or FALLBACK


def resolve_weights(name: str) -> tuple[float, float, float]:
    try:
        return WEIGHTS[name]
    except KeyError:
        raise InvalidConfig(f"Unknown luminance formula: {name!r} (expected one of {', '.join(WEIGHTS)})") from None


def luminance(r: int, g: int, b: int, weights: tuple[float, float, float] = NTSC) -> int:
    """Weighted brightness of one pixel, rounded half-up into 0-255."""
    wr, wg, wb = weights
    value = int(wr * r + wg * g + wb * b + 0.5)
    return min(255, max(0, value))


def char_index(lum: int, n: int) -> int:
    # Dividing by 256 keeps lum=255 at n-1; the clamp only guards bad input.
    return min(n - 1, max(0, (lum * n) // 256))


def map_pixel_to_char(r: int, g: int, b: int, charset: str, weights: tuple[float, float, float] = NTSC) -> str:
    ramp = resolve_charset(charset)
    return ramp[char_index(luminance(r, g, b, weights), len(ramp))]


def luminance_grid(pixels: np.ndarray, weights: tuple[float, float, float] = NTSC) -> np.ndarray:
    """Luminance of an (H, W, 3) uint8 array as (H, W) int64, same rounding as `luminance`."""
    rgb = pixels[..., :3].astype(np.float64)
    wr, wg, wb = weights
    weighted = wr * rgb[..., 0] + wg * rgb[..., 1] + wb * rgb[..., 2]
    return np.clip(np.floor(weighted + 0.5), 0, 255).astype(np.int64)


def index_grid(pixels: np.ndarray, n: int, weights: tuple[float, float, float] = NTSC) -> np.ndarray:
    """Ramp index for every pixel of an (H, W, 3) array."""
    lum = luminance_grid(pixels, weights)
    return np.clip((lum * n) // 256, 0, n - 1)
