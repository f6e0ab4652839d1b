"""A few functions to parse and format CSS style properties and colors."""

from __future__ import annotations

import re
from typing import TypeAlias

TRGB: TypeAlias = tuple[int, int, int]

# SVG whitespace
_SVG_WS = ' \t\r\n\f'

_CSSHEX_RGB_LEN = 6
_CSSHEX_RGBSHORT_LEN = 3

_RE_CSSHEX = re.compile(
    r'#?([0-9a-f]{6}|[0-9a-f]{3})$',
    flags=(re.IGNORECASE | re.ASCII),
)
_RE_CSSRGB = re.compile(
    r'rgb\(\s*([^,\s]+)\s*,\s*([^,\s]+)\s*,\s*([^,\s)]+)\s*\)$',
    flags=re.IGNORECASE,
)


def inline_style_to_dict(inline_style: str | None) -> dict[str, str]:
    """Create a dictionary of style properties from an inline style attribute.

    Args:
        inline_style: A string containing the value of a CSS `style` attribute.

    Returns:
        A dictionary of style properties.
    """
    style_map = {}
    if inline_style:
        for style_property in inline_style.split(';'):
            name, sep, value = style_property.partition(':')
            if not sep:
                continue
            name = name.strip(_SVG_WS)
            value = value.strip(_SVG_WS)
            if name and value:
                style_map[name] = value
    return style_map


def to_inline_style(**kwargs: object) -> str:
    """Create inline style from keyword attributes.

    Underscores in keyword names are replaced by dashes,
    so `stroke_linecap='round'` becomes `stroke-linecap:round`.
    """
    style_map = {key.replace('_', '-'): val for key, val in kwargs.items()}
    return dict_to_inline_style(style_map)


def dict_to_inline_style(style_map: dict) -> str:
    """Create an inline style attribute string.

    Args:
        style_map: A dictionary of CSS style properties.

    Returns:
        A string containing inline CSS style properties.
    """
    style_properties = [f'{name}:{value}' for name, value in style_map.items()]
    return ';'.join(style_properties)


def is_csshex(css_color: str) -> bool:
    """Return True if the string looks like a CSS hex color."""
    return _RE_CSSHEX.match(css_color.strip()) is not None


def csshex_to_rgb(hex_color: str) -> TRGB | None:
    """Convert a CSS hex color property to RGB.

    Args:
        hex_color: A CSS hex property string, with or without
            the leading '#'.

    Returns:
        The RGB value as a tuple of three integers in the range 0-255,
        or None if the hex value can't be parsed.
    """
    hex_color = hex_color.strip().lstrip('#')
    try:
        if len(hex_color) == _CSSHEX_RGB_LEN:
            return (
                int(hex_color[0:2], 16),
                int(hex_color[2:4], 16),
                int(hex_color[4:], 16),
            )
        if len(hex_color) == _CSSHEX_RGBSHORT_LEN:
            red = int(hex_color[0], 16)
            green = int(hex_color[1], 16)
            blue = int(hex_color[2], 16)
            return (red * 16 + red, green * 16 + green, blue * 16 + blue)
    except ValueError:
        pass

    return None


def cssrgb_to_rgb(rgb_color: str) -> TRGB | None:
    """Convert a CSS rgb() color property to RGB.

    Args:
        rgb_color: A CSS rgb property string: i.e. `rgb(r, g, b)`.
            Channels can be integers or percentages.

    Returns:
        The RGB value as a tuple of three integers,
        or None if the value can't be parsed.
    """
    m = _RE_CSSRGB.match(rgb_color.strip())
    if not m:
        return None
    red, green, blue = (parse_channel_value(v) for v in m.groups())
    return (red, green, blue)


def parse_channel_value(value: str) -> int:
    """Parse a CSS color channel value.

    Args:
        value: A valid CSS color channel value string.
            Can be an integer number or an integer percentage.

    Returns:
        An integer value between 0 and 255.
        Default is 0 if the value isn't a valid channel value.
    """
    n = 0
    value = value.strip()
    try:
        if value.endswith('%'):
            n = int(float(value.rstrip('%')) * 255 / 100)
        elif value.isnumeric():
            n = int(value)
    except ValueError:
        pass
    return max(min(n, 255), 0)
