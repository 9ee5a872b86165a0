import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from asciistudio.config import Config
from asciistudio.converter import convert
from asciistudio.errors import RenderFailure
from asciistudio.markup import to_document
from asciistudio.render import MAX_DIMENSION, PlaywrightRenderer, RenderSettings, clamp_capture_size
from tests.conftest import solid


def _chromium_available():
    try:
        with sync_playwright() as pw:
            pw.chromium.launch(headless=True, args=["--no-sandbox"]).close()
    except PlaywrightError:
        return False
    return True


@pytest.fixture(scope="module")
def chromium():
    if not _chromium_available():
        pytest.skip("Chromium for Playwright is not installed")


def test_clamp_rounds_up():
    assert clamp_capture_size(100.2, 50.9) == (101, 51)


def test_clamp_caps_each_side():
    assert clamp_capture_size(40000, 200) == (MAX_DIMENSION, 200)
    assert clamp_capture_size(300, 16384, maximum=1000) == (300, 1000)


def test_clamp_never_zero():
    assert clamp_capture_size(0, 0) == (1, 1)


def test_settings_from_env():
    settings = RenderSettings.from_env({"ASCIISTUDIO_MAX_DIMENSION": "4096", "ASCIISTUDIO_RENDER_TIMEOUT": "5"})
    assert settings.max_dimension == 4096
    assert settings.timeout_s == 5.0
    assert RenderSettings.from_env({}) == RenderSettings()


def test_capture_matches_measured_block(chromium):
    doc = to_document(convert(solid(80, 40, (200, 50, 50)), Config(target_width=12)))
    capture = PlaywrightRenderer().render(doc)
    assert capture.png.startswith(b"\x89PNG")
    assert capture.width > 0
    assert capture.height > 0


def test_capture_respects_maximum(chromium):
    doc = to_document(convert(solid(80, 40, (200, 50, 50)), Config(target_width=40)), font_px=32)
    capture = PlaywrightRenderer(RenderSettings(max_dimension=64)).render(doc)
    assert capture.width <= 64
    assert capture.height <= 64


def test_markup_without_block_fails(chromium):
    with pytest.raises(RenderFailure, match="not found"):
        PlaywrightRenderer().render("<html><body><p>nothing here</p></body></html>")
