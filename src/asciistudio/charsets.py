# All ramps are ordered dark -> light: index 0 is drawn for black pixels.

CLASSIC = " .:-=+*#%@&"

# Light, medium and dark shade plus the full block (U+2591-U+2593, U+2588)
BLOCKS = " " + "".join(chr(i) for i in range(0x2591, 0x2594)) + "█"

DENSE = " .'`^\",:;Il!i><~+_-?][}{1)(|\\/tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"

PRESETS = {
    "classic": CLASSIC,
    "blocks": BLOCKS,
    "dense": DENSE,
}

DEFAULT = CLASSIC

# Used in place of an empty ramp
FALLBACK = " "
