import hashlib
import logging
from collections import OrderedDict

from asciistudio.config import Config
from asciistudio.grid import GlyphGrid, build
from asciistudio.markup import to_document
from asciistudio.sampling import ImageSource, load_image, sample

log = logging.getLogger(__name__)


def convert(image: ImageSource, config: Config | None = None) -> GlyphGrid:
    """Run the whole pipeline for one image and one set of settings.

    Callers invoke this again whenever either input changes; nothing is
    carried over between calls.
    """
    config = (config or Config()).validate()
    sampled = sample(image, config.target_width, config.stretch_factor)
    return build(sampled, config.effective_charset, config.colorize, config.weights)


def image_to_html(image: ImageSource, config: Config | None = None, font_px: int = 14) -> str:
    return to_document(convert(image, config), font_px=font_px)


def _content_key(image) -> str:
    digest = hashlib.sha256()
    digest.update(f"{image.width}x{image.height}".encode())
    digest.update(image.tobytes())
    return digest.hexdigest()


class Converter:
    """`convert` with a small memo keyed on decoded pixel content and settings.

    Identical inputs return the very same GlyphGrid object, so treat results
    as read-only.
    """

    def __init__(self, max_entries: int = 32):
        self.max_entries = max_entries
        self._cache: OrderedDict[tuple[str, Config], GlyphGrid] = OrderedDict()

    def convert(self, image: ImageSource, config: Config | None = None) -> GlyphGrid:
        config = (config or Config()).validate()
        image = load_image(image)
        key = (_content_key(image), config)

        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            log.debug("memo hit for %s", key[0][:12])
            return cached

        grid = convert(image, config)
        self._cache[key] = grid
        if len(self._cache) > self.max_entries:
            self._cache.popitem(last=False)
        return grid

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
