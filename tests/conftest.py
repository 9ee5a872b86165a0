from io import BytesIO

import numpy as np
import pytest
from PIL import Image

from asciistudio.sampling import SampledGrid

CLASSIC = " .:-=+*#%@&"


def solid(width, height, colour):
    return Image.new("RGB", (width, height), colour)


def sampled_from(rows):
    """Build a SampledGrid from nested lists of RGB triples."""
    return SampledGrid(pixels=np.array(rows, dtype=np.uint8))


@pytest.fixture
def gradient_image():
    """64x32 horizontal ramp from black to white."""
    ramp = np.linspace(0, 255, 64).astype(np.uint8)
    arr = np.repeat(np.tile(ramp, (32, 1))[:, :, None], 3, axis=2)
    return Image.fromarray(arr)


@pytest.fixture
def png_bytes():
    img = solid(40, 20, (10, 200, 30))
    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()
