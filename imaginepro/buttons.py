"""
ImaginePro Button Table

Follow-up actions available on a finished image job. Each member maps a
symbolic name to the exact string the API expects in the `button` field.

USAGE:
======
from imaginepro.buttons import Button, upscale_button

Button.REROLL.value        # "🔄"
upscale_button(2)          # "U2"

MAINTENANCE NOTES:
==================
- This table is the single source of truth for button wire strings.
- "Upscale (Creative)" maps to itself. An older mapping pointed it at
  "Cancel Job"; do not reintroduce that.
"""

from enum import Enum
from typing import Union


class Button(Enum):
    """Button identifiers accepted by /api/v1/nova/button"""
    # Upscale slots
    U1 = "U1"
    U2 = "U2"
    U3 = "U3"
    U4 = "U4"

    # Variant slots
    V1 = "V1"
    V2 = "V2"
    V3 = "V3"
    V4 = "V4"

    REROLL = "🔄"

    # Zoom
    ZOOM_OUT_2X = "Zoom Out 2x"
    ZOOM_OUT_1_5X = "Zoom Out 1.5x"

    # Vary
    VARY_STRONG = "Vary (Strong)"
    VARY_SUBTLE = "Vary (Subtle)"
    VARY_REGION = "Vary (Region)"

    # Pan
    PAN_LEFT = "⬅️"
    PAN_RIGHT = "➡️"
    PAN_UP = "⬆️"
    PAN_DOWN = "⬇️"

    MAKE_SQUARE = "Make Square"

    # Upscale variants on an already upscaled image
    UPSCALE_2X = "Upscale (2x)"
    UPSCALE_4X = "Upscale (4x)"
    UPSCALE_CREATIVE = "Upscale (Creative)"
    UPSCALE_SUBTLE = "Upscale (Subtle)"

    CANCEL_JOB = "Cancel Job"


ButtonLike = Union[Button, str]

_BY_WIRE_VALUE = {b.value: b for b in Button}


def button_value(button: ButtonLike) -> str:
    """Return the wire string for a Button member or raw string"""
    if isinstance(button, Button):
        return button.value
    return str(button)


def is_valid_button(button: ButtonLike) -> bool:
    """True if the value is in the button table (exact vendor casing)"""
    return button_value(button) in _BY_WIRE_VALUE


def parse_button(button: ButtonLike) -> Button:
    """
    Resolve a raw string to its Button member

    Raises:
        ValueError: If the string is not a known wire value
    """
    if isinstance(button, Button):
        return button
    try:
        return _BY_WIRE_VALUE[button]
    except KeyError:
        raise ValueError(f"unknown button: {button!r}") from None


def upscale_button(index: int) -> str:
    # U1..U4 are the only slots the API defines; range is left to the server
    return f"U{index}"


def variant_button(index: int) -> str:
    return f"V{index}"
