# colors.py

"""
Color values for the 2D drawing context.

Strokes and fills are described in the hue/saturation/lightness/alpha scheme.
Colors are produced by pure functions and validated once, so a drawing call
never receives a malformed color string.

Data Contract:
- HSLA.hue is in [0, 360), saturation and lightness in [0, 100] (percent),
  alpha in [0, 1].
- str(HSLA) is the canonical 'hsla(h, s%, l%, a)' string.
"""

import math
import numbers
import re
from collections import namedtuple

import pygame

_HSL_PATTERN = re.compile(
    r"^\s*hsla?\(\s*([-+]?\d*\.?\d+)\s*,\s*(\d*\.?\d+)%\s*,\s*(\d*\.?\d+)%\s*(?:,\s*(\d*\.?\d+)\s*)?\)\s*$",
    re.IGNORECASE,
)


class HSLA(namedtuple('HSLA', ['hue', 'saturation', 'lightness', 'alpha'])):
    __slots__ = ()

    def __str__(self):
        return f"hsla({self.hue:g}, {self.saturation:g}%, {self.lightness:g}%, {self.alpha:g})"


def _clamp(value, low, high):
    return max(low, min(high, value))


def hsla(hue, saturation, lightness, alpha=1.0) -> HSLA:
    """
    Builds a validated color.

    Hue wraps around the color wheel; the other channels are clamped to their
    ranges. Non-numeric or non-finite channels raise ValueError.
    """
    channels = (hue, saturation, lightness, alpha)
    for channel in channels:
        if not isinstance(channel, numbers.Real) or not math.isfinite(channel):
            raise ValueError(f"Invalid color channel {channel!r} in {channels}")

    return HSLA(
        float(hue) % 360.0,
        float(_clamp(saturation, 0, 100)),
        float(_clamp(lightness, 0, 100)),
        float(_clamp(alpha, 0, 1)),
    )


def parse_color(value) -> HSLA:
    """Accepts an HSLA value or an 'hsl(...)'/'hsla(...)' string."""
    if isinstance(value, HSLA):
        return value
    if isinstance(value, str):
        match = _HSL_PATTERN.match(value)
        if match:
            hue, saturation, lightness, alpha = match.groups()
            return hsla(
                float(hue),
                float(saturation),
                float(lightness),
                1.0 if alpha is None else float(alpha),
            )
    raise ValueError(f"Unsupported color value: {value!r}")


def to_pygame_color(color: HSLA) -> pygame.Color:
    """Converts to a pygame.Color, alpha included (0-255)."""
    result = pygame.Color(0, 0, 0, 0)
    # pygame expects alpha as a percentage here
    result.hsla = (color.hue, color.saturation, color.lightness, color.alpha * 100)
    return result


def premultiplied(color: HSLA) -> tuple:
    """RGB scaled by alpha, as used by additive and multiplicative blends."""
    rgb = to_pygame_color(color)
    return (
        int(round(rgb.r * color.alpha)),
        int(round(rgb.g * color.alpha)),
        int(round(rgb.b * color.alpha)),
    )
