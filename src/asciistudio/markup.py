import html

from asciistudio.grid import GlyphGrid

ROW_SEPARATOR = "<br>"
FONT_STACK = 'ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, "Liberation Mono", "Courier New", monospace'


def rgb_to_hex(colour) -> str:
    r, g, b = colour
    return f"#{int(r):02x}{int(g):02x}{int(b):02x}"


def to_text(grid: GlyphGrid) -> str:
    return "\n".join(grid.rows)


def to_ansi(grid: GlyphGrid) -> str:
    """Wrap each character in a 24-bit foreground escape, resetting at the end of every row."""
    if not grid.colorize:
        return to_text(grid)
    out = []
    for r, line in enumerate(grid.rows):
        parts = []
        for c, char in enumerate(line):
            fr, fg, fb = (int(v) for v in grid.colours[r, c])
            parts.append(f"\033[38;2;{fr};{fg};{fb}m{char}")
        parts.append("\033[0m")
        out.append("".join(parts))
    return "\n".join(out)


def to_html(grid: GlyphGrid) -> str:
    """Serialize as one coloured span per cell with an explicit break after every row.

    Rows never rely on wrapping: the fragment holds exactly `grid.height`
    separators and each row exactly `grid.width` spans.
    """
    escaped: dict[str, str] = {}
    out = []
    for r, line in enumerate(grid.rows):
        for c, char in enumerate(line):
            if char not in escaped:
                escaped[char] = html.escape(char, quote=False)
            out.append(f'<span style="color:{rgb_to_hex(grid.colours[r, c])}">{escaped[char]}</span>')
        out.append(ROW_SEPARATOR)
    return "".join(out)


def to_document(
    grid: GlyphGrid,
    font_px: int = 14,
    background: str = "#000",
    foreground: str = "#fff",
    title: str = "ASCII Html Output",
) -> str:
    # line-height 60% closes the gaps monospace fonts leave between rows
    pre_style = (
        f"display:inline-block; border-width:4px 6px; border-color:{background}; border-style:solid; "
        f"background-color:{background}; font-size:{font_px}px; font-family: {FONT_STACK}; "
        "font-weight:bold; line-height:60%"
    )
    return (
        "<!doctype html>\n"
        f'<html><head><meta charset="utf-8"><title>{html.escape(title)}</title></head>\n'
        f"<body style='background-color:{background}; margin:0; padding:16px; color:{foreground};'>\n"
        f"<pre style='{pre_style}'>\n"
        f"{to_html(grid)}\n"
        "</pre></body></html>"
    )
