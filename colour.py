# colour.py

import re

# Accepts "#RRGGBB", "0xRRGGBB" and a bare "RRGGBB".
_HEX_COLOUR = re.compile(r'^(?:#|0x)?([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})$', re.IGNORECASE)


def hex_to_rgb(value: str) -> tuple:
    """
    Converts a hex colour string into an (R, G, B) tuple.

    Data Contract:
    - Inputs: value (str) - A colour such as "#ff8800" or "0xFF8800".
    - Outputs: tuple - Three ints in the 0-255 range.
    - Side Effects: None.
    - Invariants: Raises ValueError when the string is not a 6-digit hex colour.
    """
    match = _HEX_COLOUR.match(value.strip())
    if match is None:
        raise ValueError(f"Not a hex colour: {value!r}")
    return tuple(int(channel, 16) for channel in match.groups())
