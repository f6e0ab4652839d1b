"""Low level helpers for SVG markup output."""

from __future__ import annotations

import logging
import random
import re
import string
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from lxml import etree

if TYPE_CHECKING:
    from typing_extensions import TypeAlias

    from .geometry import Layout, Point

# For debugging...
logger = logging.getLogger(__name__)

SVG_VERSION = '1.1'
SVG_URI = 'http://www.w3.org/2000/svg'
SVG_DTD = (
    f'<!DOCTYPE svg PUBLIC "-//W3C//DTD SVG {SVG_VERSION}//EN" '
    '"http://www.w3.org/Graphics/SVG/1.1/DTD/svg11.dtd">'
)
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="no"?>'

# : SVG Namespaces
SVG_NS = {
    None: SVG_URI,
}

TElement: TypeAlias = (
    etree._Element  # noqa: SLF001 pylint: disable=protected-access
)

_ID_CHARS = string.digits + string.ascii_uppercase + string.ascii_lowercase

# Characters that XML 1.0 documents can't contain
_RE_XML_INVALID = re.compile(
    '[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]'
)

# Extra entities for double quoted attribute values
_ATTR_ENTITIES = {'"': '&quot;'}


class SVGError(Exception):
    """SVG output error."""


def svg_ns(tag: str) -> str:
    """Shortcut to prepend SVG namespace to `tag`."""
    return f'{{{SVG_URI}}}{tag}'


def strip_ns(tag: str) -> str:
    """Strip the namespace part from the tag if any."""
    return tag.rpartition('}')[2]


def floatystr(value: float, precision: int | None = None) -> str:
    """Format a float for SVG output.

    Args:
        value: The value to format.
        precision: Number of digits after the decimal point.
            If None then six digits are used and trailing zeros
            are stripped off. This is similar to the 'g' format
            but won't display scientific notation for big numbers.

    Returns:
        A numeric string.
    """
    if precision is None:
        s = f'{value:f}'
        if '.' in s:
            s = s.rstrip('0').rstrip('.')
    else:
        s = f'{value:.{precision}f}'
    if s.startswith('-') and not s.strip('-0.'):
        # Negative zero
        s = s[1:]
    return s


def fmt_float(value: float, layout: Layout) -> str:
    """Format a float using the layout output precision."""
    return floatystr(value, layout.precision)


def fmt_point(p: Point, layout: Layout) -> str:
    """Format a point as 'x,y' using the layout output precision."""
    return f'{fmt_float(p.x, layout)},{fmt_float(p.y, layout)}'


def xml_safe(value: str, where: str = '') -> str:
    """Remove characters that can't appear in an XML document.

    A warning is logged if anything was removed.

    Args:
        value: Attribute value or element text.
        where: Name of the caller, used in the warning message.

    Returns:
        The value without control characters, NULs, or
        unpaired surrogates.
    """
    safe = _RE_XML_INVALID.sub('', value)
    if safe != value:
        logger.warning(
            'Removed characters not allowed in XML from %s: %r',
            where or 'output',
            value,
        )
    return safe


def create_element(
    tag: str,
    attrs: dict[str, str],
    parent: TElement | None = None,
) -> TElement:
    """Create an SVG element.

    Args:
        tag: SVG tag name without namespace.
        attrs: Element attributes. Insertion order is preserved
            in the output. Characters not allowed in XML are
            removed from the values.
        parent: Optional parent element. If None a standalone
            element is created that declares the SVG namespace.

    Returns:
        A new element.
    """
    attrs = {
        name: xml_safe(value, f'<{tag} {name}>')
        for name, value in attrs.items()
    }
    if parent is None:
        return etree.Element(svg_ns(tag), attrs, nsmap=SVG_NS)
    return etree.SubElement(parent, svg_ns(tag), attrs)


def tostring(node: TElement, pretty_print: bool = False) -> str:
    """Serialize an element to a unicode string."""
    return etree.tostring(node, encoding='unicode', pretty_print=pretty_print)


def attrs_to_string(attrs: dict[str, str]) -> str:
    """Format attributes as a markup fragment.

    Returns:
        A string of the form `name="value" name="value"`,
        or an empty string if there are no attributes.
    """
    return ' '.join(
        f'{name}="{escape(xml_safe(value, name), _ATTR_ENTITIES)}"'
        for name, value in attrs.items()
    )


def random_id(
    prefix: str = '', length: int = 8, rng: random.Random | None = None
) -> str:
    """Create a random XML id attribute value.

    Args:
        prefix: The prefix prepended to the random characters.
        length: Number of random alphanumeric characters.
        rng: Random number generator. A fresh unseeded generator
            is used if None. Pass a seeded generator for
            reproducible output.

    Returns:
        A random id string that has a fairly low chance of collision
        with previously generated ids.
    """
    if rng is None:
        rng = random.Random()
    return prefix + ''.join(rng.choice(_ID_CHARS) for _ in range(length))
