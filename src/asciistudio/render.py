from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from typing import Protocol

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from asciistudio.errors import RenderFailure, RenderTimeout

log = logging.getLogger(__name__)

# Chromium refuses surfaces much beyond 16384px in either direction
MAX_DIMENSION = 15000

NORMALIZE_CSS = """
html, body { margin:0; background:#000; }
pre {
  font-family: "Courier New","DejaVu Sans Mono","Noto Sans Mono",monospace !important;
  font-variant-ligatures: none !important;
  -webkit-font-smoothing: antialiased;
  letter-spacing: 0;
  display: inline-block;
}
"""

MEASURE_JS = """
() => {
  const pre = document.querySelector('pre');
  if (!pre) return null;
  pre.scrollIntoView({ block: 'start', inline: 'start' });
  return { w: pre.scrollWidth, h: pre.scrollHeight };
}
"""


@dataclass(frozen=True)
class Capture:
    png: bytes
    width: int
    height: int


@dataclass(frozen=True)
class RenderSettings:
    max_dimension: int = MAX_DIMENSION
    device_scale_factor: float = 2.0
    settle_ms: int = 50
    timeout_s: float = 30.0
    chromium_args: tuple[str, ...] = ("--no-sandbox", "--disable-dev-shm-usage")

    @classmethod
    def from_env(cls, environ=None) -> RenderSettings:
        environ = os.environ if environ is None else environ
        kwargs = {}
        if environ.get("ASCIISTUDIO_MAX_DIMENSION"):
            kwargs["max_dimension"] = int(environ["ASCIISTUDIO_MAX_DIMENSION"])
        if environ.get("ASCIISTUDIO_RENDER_TIMEOUT"):
            kwargs["timeout_s"] = float(environ["ASCIISTUDIO_RENDER_TIMEOUT"])
        return cls(**kwargs)


class Renderer(Protocol):
    def render(self, markup: str) -> Capture:
        """Capture the first <pre> block of an HTML document as a PNG."""
        ...


def clamp_capture_size(width: float, height: float, maximum: int = MAX_DIMENSION) -> tuple[int, int]:
    """Round measured CSS pixels up and cap each side at `maximum`."""
    w = min(max(1, math.ceil(width)), maximum)
    h = min(max(1, math.ceil(height)), maximum)
    return w, h


class PlaywrightRenderer:
    """Single-shot capture in headless Chromium.

    The viewport is resized to the measured size of the <pre> block, so one
    clipped screenshot covers it without tiling. One attempt per call; the
    browser is closed whatever happens.
    """

    def __init__(self, settings: RenderSettings | None = None):
        self.settings = settings or RenderSettings()

    def render(self, markup: str) -> Capture:
        settings = self.settings
        timeout_ms = settings.timeout_s * 1000
        with sync_playwright() as pw:
            browser = None
            try:
                browser = pw.chromium.launch(headless=True, args=list(settings.chromium_args), timeout=timeout_ms)
                context = browser.new_context(device_scale_factor=settings.device_scale_factor)
                page = context.new_page()
                page.set_default_timeout(timeout_ms)

                page.set_content(markup, wait_until="domcontentloaded")
                page.add_style_tag(content=NORMALIZE_CSS)

                size = page.evaluate(MEASURE_JS)
                if size is None:
                    raise RenderFailure("<pre> not found")
                width, height = clamp_capture_size(size["w"], size["h"], settings.max_dimension)

                page.set_viewport_size({"width": width, "height": height})
                page.wait_for_timeout(settings.settle_ms)
                png = page.screenshot(type="png", clip={"x": 0, "y": 0, "width": width, "height": height})
            except PlaywrightTimeoutError as exc:
                raise RenderTimeout(f"Render timed out after {settings.timeout_s:g}s") from exc
            except PlaywrightError as exc:
                raise RenderFailure(exc.message or "Render failed") from exc
            finally:
                if browser is not None:
                    try:
                        browser.close()
                    except PlaywrightError as exc:
                        log.warning("failed to close browser: %s", exc)

        log.info("captured %dx%d (%d bytes)", width, height, len(png))
        return Capture(png=png, width=width, height=height)
