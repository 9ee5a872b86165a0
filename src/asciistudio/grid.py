from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from asciistudio.luminance import NTSC, index_grid, resolve_charset
from asciistudio.sampling import SampledGrid

# Colour given to every cell when colorize is off
FOREGROUND = (255, 255, 255)

Colour = tuple[int, int, int]


@dataclass(frozen=True)
class GlyphCell:
    char: str
    color: Colour


@dataclass
class GlyphGrid:
    rows: list[str]  # one string per row, each exactly `width` characters
    colours: np.ndarray  # (rows, cols, 3) uint8
    colorize: bool

    @property
    def width(self) -> int:
        return self.colours.shape[1]

    @property
    def height(self) -> int:
        return self.colours.shape[0]

    def __getitem__(self, pos: tuple[int, int]) -> GlyphCell:
        row, col = pos
        r, g, b = (int(v) for v in self.colours[row, col])
        return GlyphCell(self.rows[row][col], (r, g, b))

    def cells(self) -> Iterator[GlyphCell]:
        """Yield every cell top-to-bottom, left-to-right."""
        for row in range(self.height):
            for col in range(self.width):
                yield self[row, col]


def build(
    sampled: SampledGrid,
    charset: str,
    colorize: bool,
    weights: tuple[float, float, float] = NTSC,
) -> GlyphGrid:
    """Map each sampled pixel to a ramp character and a colour.

    Colourised cells keep the pixel's own RGB; otherwise every cell gets
    FOREGROUND.
    """
    ramp = resolve_charset(charset)
    indices = index_grid(sampled.pixels, len(ramp), weights)

    char_arr = np.array(list(ramp))
    rows = ["".join(char_arr[line]) for line in indices]

    if colorize:
        colours = sampled.pixels[..., :3].astype(np.uint8, copy=True)
    else:
        colours = np.empty((sampled.height, sampled.width, 3), dtype=np.uint8)
        colours[...] = FOREGROUND
    return GlyphGrid(rows=rows, colours=colours, colorize=colorize)
