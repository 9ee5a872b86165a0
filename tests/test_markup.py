import re

from asciistudio.grid import build
from asciistudio.markup import ROW_SEPARATOR, rgb_to_hex, to_ansi, to_document, to_html, to_text
from asciistudio.sampling import sample
from tests.conftest import CLASSIC, sampled_from, solid

SPAN = re.compile(r'<span style="color:#[0-9a-f]{6}">(?:&lt;|&gt;|&amp;|[^<&>])</span>')


def test_rgb_to_hex():
    assert rgb_to_hex((255, 0, 16)) == "#ff0010"
    assert rgb_to_hex((0, 0, 0)) == "#000000"


def test_structural_characters_escaped():
    sampled = sampled_from([[(0, 0, 0), (128, 128, 128), (255, 255, 255)]])
    fragment = to_html(build(sampled, "<&>", colorize=True))
    assert fragment == (
        '<span style="color:#000000">&lt;</span>'
        '<span style="color:#808080">&amp;</span>'
        '<span style="color:#ffffff">&gt;</span>'
        "<br>"
    )


def test_one_separator_per_row_and_width_cells_per_row(gradient_image):
    grid = build(sample(gradient_image, 23, 1.05), CLASSIC, colorize=True)
    fragment = to_html(grid)
    assert fragment.count(ROW_SEPARATOR) == grid.height
    rows = fragment.split(ROW_SEPARATOR)
    assert rows[-1] == ""
    for row in rows[:-1]:
        assert len(SPAN.findall(row)) == 23
        assert SPAN.sub("", row) == ""


def test_uncoloured_cells_use_foreground():
    grid = build(sample(solid(20, 20, (255, 0, 0)), 4, 1.0), CLASSIC, colorize=False)
    fragment = to_html(grid)
    assert "#ff0000" not in fragment
    assert fragment.count('color:#ffffff"') == 4 * grid.height


def test_document_wraps_fragment_in_pre():
    grid = build(sample(solid(20, 20, (90, 90, 90)), 5, 1.0), CLASSIC, colorize=True)
    doc = to_document(grid, font_px=20)
    assert doc.startswith("<!doctype html>")
    assert "line-height:60%" in doc
    assert "font-size:20px" in doc
    assert "background-color:#000" in doc
    assert to_html(grid) in doc
    assert doc.count("<pre") == 1
    assert doc.endswith("</pre></body></html>")


def test_document_title_escaped():
    grid = build(sampled_from([[(0, 0, 0)]]), CLASSIC, colorize=True)
    assert "<title>a &lt;b&gt;</title>" in to_document(grid, title="a <b>")


def test_text_rows():
    sampled = sampled_from([[(0, 0, 0), (255, 255, 255)], [(255, 255, 255), (0, 0, 0)]])
    assert to_text(build(sampled, " #", colorize=True)) == " #\n# "


def test_ansi_resets_every_row():
    grid = build(sample(solid(30, 30, (255, 0, 0)), 6, 1.0), CLASSIC, colorize=True)
    out = to_ansi(grid)
    assert out.count("\033[0m") == grid.height
    assert out.count("\033[38;2;255;0;0m") == 6 * grid.height


def test_ansi_without_colour_is_plain_text():
    grid = build(sample(solid(30, 30, (255, 0, 0)), 6, 1.0), CLASSIC, colorize=False)
    assert "\033" not in to_ansi(grid)
    assert to_ansi(grid) == to_text(grid)
