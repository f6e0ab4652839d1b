"""Color, fill, stroke, and font styles.

Each style produces its SVG presentation attributes with
:meth:`to_attrs` (for element building) or :meth:`serialize`
(a markup attribute fragment).
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

from . import css, svg
from .geometry import check_finite, translate_scale

if TYPE_CHECKING:
    from typing_extensions import Self, TypeAlias

    from .geometry import Layout

logger = logging.getLogger(__name__)

# Named colors.
PALETTE: dict[str, tuple[int, int, int]] = {
    'aqua': (0, 255, 255),
    'black': (0, 0, 0),
    'gray': (127, 127, 127),
    'blue': (0, 0, 255),
    'brown': (165, 42, 42),
    'cyan': (0, 255, 255),
    'fuchsia': (255, 0, 255),
    'green': (0, 128, 0),
    'lime': (0, 255, 0),
    'magenta': (255, 0, 255),
    'orange': (255, 165, 0),
    'purple': (128, 0, 128),
    'red': (255, 0, 0),
    'silver': (192, 192, 192),
    'white': (255, 255, 255),
    'yellow': (255, 255, 0),
}

_TRANSPARENT_NAMES = {'transparent', 'none'}


def _clamp_channel(value: int) -> int:
    if not 0 <= value <= 255:  # noqa: PLR2004
        logger.warning(
            'Color channel value %s is out of range [0,255].', value
        )
        return max(min(int(value), 255), 0)
    return int(value)


@dataclass(frozen=True)
class Color:
    """An RGB color, or transparent.

    Transparent is a separate state, not an alpha channel.
    A transparent color serializes to `none`.
    """

    red: int = 0
    green: int = 0
    blue: int = 0
    transparent: bool = False

    def __post_init__(self) -> None:
        # Frozen, so assign through object
        for name in ('red', 'green', 'blue'):
            object.__setattr__(
                self, name, _clamp_channel(getattr(self, name))
            )

    @classmethod
    def none(cls: type[Self]) -> Self:
        """The transparent color."""
        return cls(transparent=True)

    @classmethod
    def named(cls: type[Self], name: str) -> Self:
        """Look up a palette color by name.

        'transparent' and 'none' produce a transparent color.
        Unknown names are parsed as CSS colors.

        Raises:
            ValueError: If the name is not a known color.
        """
        key = name.strip().lower()
        if key in _TRANSPARENT_NAMES:
            return cls.none()
        rgb = PALETTE.get(key)
        if rgb is None:
            return cls.from_css(name)
        return cls(*rgb)

    @classmethod
    def from_css(cls: type[Self], css_color: str) -> Self:
        """Parse a CSS hex (#rgb, #rrggbb) or rgb() color.

        Raises:
            ValueError: If the color can't be parsed.
        """
        rgb = None
        if css_color.strip().lower().startswith('rgb'):
            rgb = css.cssrgb_to_rgb(css_color)
        elif css.is_csshex(css_color):
            rgb = css.csshex_to_rgb(css_color)
        if rgb is None:
            raise ValueError(f'Unknown color: {css_color!r}')
        return cls(*rgb)

    @classmethod
    def random(cls: type[Self], rng: random.Random | None = None) -> Self:
        """A random opaque color.

        Args:
            rng: Random number generator. Pass a seeded generator
                for reproducible colors.
        """
        if rng is None:
            rng = random.Random()
        return cls(rng.randrange(256), rng.randrange(256), rng.randrange(256))

    def serialize(self, layout: Layout | None = None) -> str:  # noqa: ARG002
        """The SVG color value."""
        if self.transparent:
            return 'none'
        return f'rgb({self.red},{self.green},{self.blue})'

    def __str__(self) -> str:
        return self.serialize()


TColor: TypeAlias = Union[Color, str, Sequence[int], None]


def as_color(color: TColor) -> Color:
    """Coerce a color name, RGB sequence, or None to a Color.

    None means transparent.
    """
    if isinstance(color, Color):
        return color
    if color is None:
        return Color.none()
    if isinstance(color, str):
        return Color.named(color)
    red, green, blue = color
    return Color(red, green, blue)


class Fill:
    """Fill color and opacity."""

    color: Color
    opacity: float

    def __init__(self, color: TColor = None, opacity: float = 1.0) -> None:
        """New fill.

        Args:
            color: Fill color. Default is transparent.
            opacity: Fill opacity in the range [0, 1]
                where 1 is fully visible.
        """
        self.color = as_color(color)
        self.opacity = opacity
        check_finite('Fill()', opacity)
        if not 0 <= opacity <= 1:
            logger.warning('Fill opacity=%s is out of range [0,1].', opacity)

    def to_attrs(self, layout: Layout) -> dict[str, str]:
        """SVG fill attributes."""
        attrs = {'fill': self.color.serialize(layout)}
        if self.opacity < 1.0:
            attrs['fill-opacity'] = svg.fmt_float(self.opacity, layout)
        return attrs

    def serialize(self, layout: Layout) -> str:
        """SVG fill attributes as a markup fragment."""
        return svg.attrs_to_string(self.to_attrs(layout))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fill):
            return NotImplemented
        return self.color == other.color and self.opacity == other.opacity

    def __repr__(self) -> str:
        return f'Fill({self.color!r}, {self.opacity!r})'


@dataclass(frozen=True)
class Stroke:
    """Stroke style.

    Attributes:
        width: Stroke width. A negative width means no stroke at all,
            which is not the same as zero width.
        color: Stroke color.
        non_scaling: Use a non-scaling stroke (vector-effect).
        miter_limit: Stroke miter limit. Negative means unset.
        dash_array: Dash and gap lengths.
        dash_offset: Dash offset.
        opacity: Stroke opacity in the range [0, 1].
    """

    width: float = -1
    color: Color = field(default_factory=Color.none)
    non_scaling: bool = False
    miter_limit: float = -1
    dash_array: tuple[int, ...] = ()
    dash_offset: int = 0
    opacity: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, 'color', as_color(self.color))
        object.__setattr__(self, 'dash_array', tuple(self.dash_array))
        check_finite('Stroke()', self.width, self.miter_limit, self.opacity)
        if not 0 <= self.opacity <= 1:
            logger.warning(
                'Stroke opacity=%s is out of range [0,1].', self.opacity
            )

    @property
    def is_visible(self) -> bool:
        """True if this stroke will be drawn."""
        return self.width >= 0

    def to_attrs(self, layout: Layout) -> dict[str, str]:
        """SVG stroke attributes.

        Returns an empty dict if the stroke width is negative.
        """
        if not self.is_visible:
            return {}

        attrs = {
            'stroke-width': svg.fmt_float(
                translate_scale(self.width, layout), layout
            ),
            'stroke': self.color.serialize(layout),
        }
        if self.miter_limit >= 0:
            attrs['stroke-miterlimit'] = svg.fmt_float(
                translate_scale(self.miter_limit, layout), layout
            )
        attrs['stroke-dashoffset'] = svg.fmt_float(
            translate_scale(self.dash_offset, layout), layout
        )
        if self.dash_array:
            attrs['stroke-dasharray'] = ','.join(
                str(int(dash)) for dash in self.dash_array
            )
        if self.opacity < 1.0:
            attrs['stroke-opacity'] = svg.fmt_float(self.opacity, layout)
        if self.non_scaling:
            attrs['vector-effect'] = 'non-scaling-stroke'
        return attrs

    def serialize(self, layout: Layout) -> str:
        """SVG stroke attributes as a markup fragment."""
        return svg.attrs_to_string(self.to_attrs(layout))


@dataclass
class Font:
    """Font size and family."""

    size: float = 12
    family: str = 'Verdana'

    def to_attrs(self, layout: Layout) -> dict[str, str]:
        """SVG font attributes."""
        size = translate_scale(self.size, layout)
        return {
            'font-size': svg.fmt_float(size, layout),
            'font-family': self.family,
        }

    def serialize(self, layout: Layout) -> str:
        """SVG font attributes as a markup fragment."""
        return svg.attrs_to_string(self.to_attrs(layout))


def as_fill(fill: Fill | TColor) -> Fill:
    """Coerce a color (or None) to a Fill.

    None means a transparent fill.
    """
    if isinstance(fill, Fill):
        return fill
    return Fill(fill)
