import io
import logging
import math
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, UnidentifiedImageError

from asciistudio.config import DEFAULT_STRETCH, validate_geometry
from asciistudio.errors import InvalidConfig, InvalidImage

log = logging.getLogger(__name__)

ImageSource = Image.Image | str | Path | bytes | np.ndarray

# Single-channel modes wider than 8 bits; Pillow clips these instead of scaling on convert
WIDE_MODES = ("I", "F")


@dataclass
class SampledGrid:
    pixels: np.ndarray  # (rows, cols, 3) uint8

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _from_array(arr: np.ndarray) -> Image.Image:
    if arr.ndim not in (2, 3) or (arr.ndim == 3 and arr.shape[2] not in (3, 4)):
        raise InvalidImage(f"Expected an (H, W), (H, W, 3) or (H, W, 4) array, got shape {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidImage(f"Image has zero size: {arr.shape[1]}x{arr.shape[0]}")
    if arr.ndim == 2 and arr.dtype == np.uint16:
        return Image.fromarray(arr)
    return Image.fromarray(np.ascontiguousarray(arr, dtype=np.uint8))


def _to_eight_bit(image: Image.Image) -> Image.Image:
    """Scale a 16-bit or 32-bit single-channel image into 0-255.

    Samples are read on a 16-bit scale and keep their high byte, the same
    reduction browsers apply to 16-bit PNGs.
    """
    arr = np.asarray(image)
    if image.mode == "F":
        arr = np.floor(np.nan_to_num(arr))
    wide = np.clip(arr, 0, 65535).astype(np.uint32)
    return Image.fromarray((wide >> 8).astype(np.uint8))


def load_image(source: ImageSource) -> Image.Image:
    """Decode any supported source into a non-empty RGB image.

    Alpha is dropped without compositing, so transparent pixels keep their
    stored colour.
    """
    if isinstance(source, np.ndarray):
        image = _from_array(source)
    elif isinstance(source, Image.Image):
        image = source
    else:
        try:
            if isinstance(source, (bytes, bytearray)):
                image = Image.open(io.BytesIO(source))
            else:
                image = Image.open(source)
            image.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise InvalidImage(f"Could not decode image: {exc}") from exc

    if image.width == 0 or image.height == 0:
        raise InvalidImage(f"Image has zero size: {image.width}x{image.height}")
    if image.mode in WIDE_MODES or image.mode.startswith("I;16"):
        image = _to_eight_bit(image)
    return image.convert("RGB")


def _nearest(count: int, source: int) -> list[int]:
    """Source index for each of `count` outputs, sampling at pixel centres."""
    return [min(source - 1, ((2 * i + 1) * source) // (2 * count)) for i in range(count)]


def sample(image: ImageSource, target_width: int, stretch_factor: float = DEFAULT_STRETCH) -> SampledGrid:
    """Resample an image to exactly `target_width` columns.

    The image is first widened by `stretch_factor` to offset character cells
    being taller than wide, then reduced with nearest-neighbour so luminance
    edges stay hard. Row count preserves the stretched aspect ratio and is
    never below one.

    Both stages are applied as index maps onto the source pixels, so the
    widened image is never allocated.
    """
    validate_geometry(target_width, stretch_factor)
    image = load_image(image)

    scaled = image.width * stretch_factor
    if not math.isfinite(scaled):
        raise InvalidConfig(f"Stretch factor {stretch_factor} is too large for a {image.width}px wide image")
    stretched_width = max(1, _round_half_up(scaled))
    rows = max(1, _round_half_up(image.height * target_width / stretched_width))

    # Stretched indices stay Python ints; they can exceed int64
    stretched_cols = _nearest(target_width, stretched_width)
    source_cols = [min(image.width - 1, ((2 * x + 1) * image.width) // (2 * stretched_width)) for x in stretched_cols]
    source_rows = _nearest(rows, image.height)

    arr = np.asarray(image, dtype=np.uint8)
    pixels = arr[np.array(source_rows, dtype=np.intp)][:, np.array(source_cols, dtype=np.intp)]
    log.debug(
        "sampled %dx%d -> stretched %dx%d -> %dx%d",
        image.width,
        image.height,
        stretched_width,
        image.height,
        target_width,
        rows,
    )
    return SampledGrid(pixels=np.ascontiguousarray(pixels))
