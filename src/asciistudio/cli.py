import argparse
import sys
from pathlib import Path

from asciistudio.charsets import DEFAULT, PRESETS
from asciistudio.config import DEFAULT_STRETCH, DEFAULT_WIDTH, Config
from asciistudio.converter import convert
from asciistudio.errors import AsciiStudioError
from asciistudio.logging_conf import setup_logging
from asciistudio.luminance import WEIGHTS
from asciistudio.markup import to_ansi, to_document, to_text
from asciistudio.render import PlaywrightRenderer

FORMATS = ("text", "ansi", "html", "png")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as colourised ASCII art")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument(
        "-w", "--width", type=int, default=DEFAULT_WIDTH, help=f"Output width in columns (default: {DEFAULT_WIDTH})"
    )
    parser.add_argument(
        "--stretch",
        type=float,
        default=DEFAULT_STRETCH,
        help=f"Horizontal stretch applied before sampling (default: {DEFAULT_STRETCH}). Use 1.0 to disable.",
    )
    ramp = parser.add_mutually_exclusive_group()
    ramp.add_argument("--charset", default=None, help="Character ramp ordered dark to light")
    ramp.add_argument("-p", "--preset", choices=sorted(PRESETS), default=None, help="Named character ramp")
    parser.add_argument(
        "--luminance", choices=sorted(WEIGHTS), default="ntsc", help="Brightness weighting (default: ntsc)"
    )
    parser.add_argument("--no-colour", action="store_true", default=False, help="Use a single foreground colour")
    parser.add_argument("-f", "--format", choices=FORMATS, default="text", help="Output format (default: text)")
    parser.add_argument("-o", "--output", default=None, help="Write to this file instead of stdout")
    parser.add_argument("--font-px", type=int, default=14, help="Font size for html/png output (default: 14)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for debug)")
    parser.add_argument("--log-file", default=None, help="Also write logs to this rotating file")
    return parser


def _charset(args) -> str:
    if args.charset is not None:
        return args.charset
    if args.preset is not None:
        return PRESETS[args.preset]
    return DEFAULT


def run(args) -> None:
    image_path = Path(args.image)
    if not image_path.exists():
        raise FileNotFoundError(f"File not found: {image_path}")

    config = Config(
        target_width=args.width,
        stretch_factor=args.stretch,
        charset=_charset(args),
        colorize=not args.no_colour,
        luminance=args.luminance,
    )
    grid = convert(image_path, config)

    if args.format == "png":
        if args.output is None:
            raise ValueError("png output needs --output")
        capture = PlaywrightRenderer().render(to_document(grid, font_px=args.font_px))
        Path(args.output).write_bytes(capture.png)
        return

    if args.format == "html":
        out = to_document(grid, font_px=args.font_px)
    elif args.format == "ansi":
        out = to_ansi(grid)
    else:
        out = to_text(grid)

    if args.output is None:
        print(out)
    else:
        Path(args.output).write_text(out + "\n", encoding="utf-8")


def main():
    args = build_parser().parse_args()
    setup_logging(["WARNING", "INFO", "DEBUG"][min(args.verbose, 2)], log_file=args.log_file)
    try:
        run(args)
    except (AsciiStudioError, OSError, ValueError) as exc:
        print(str(exc), file=sys.stderr)
        sys.exit(1)
