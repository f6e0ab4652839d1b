"""Points, dimensions, and the logical to native coordinate transform.

A :class:`Layout` describes how coordinates in a caller defined logical
space map onto SVG user space. The origin can be placed in any of the
four document corners, so callers can work in a Cartesian (Y-up) frame
or in the native SVG (Y-down) frame transparently.
"""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from typing_extensions import Self, TypeAlias

logger = logging.getLogger(__name__)

# Float comparison tolerance
EPSILON = 1e-10


def valid_num(value: float) -> bool:
    """Return True if the value is neither infinite nor NaN."""
    return not (math.isinf(value) or math.isnan(value))


def check_finite(where: str, *values: float) -> bool:
    """Log a warning if any of the values is not finite.

    Args:
        where: Name of the caller, used in the warning message.
        values: Numeric values to check.

    Returns:
        True if all values are finite otherwise False.
    """
    if all(valid_num(value) for value in values):
        return True
    logger.warning('Infs or NaNs provided to %s.', where)
    return False


def float_eq(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Compare floats for equality within a tolerance."""
    return math.fabs(a - b) < epsilon


@dataclass(frozen=True)
class Point:
    """An immutable 2D point."""

    x: float = 0.0
    y: float = 0.0

    @classmethod
    def from_tuple(cls: type[Self], p: Sequence[float]) -> Self:
        """Create a Point from an (x, y) sequence."""
        return cls(float(p[0]), float(p[1]))

    def __add__(self, other: Point) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def __iter__(self):  # noqa: ANN204
        yield self.x
        yield self.y


TPoint: TypeAlias = Union[Point, tuple[float, float]]


def as_point(p: TPoint) -> Point:
    """Coerce an (x, y) tuple to a Point."""
    if isinstance(p, Point):
        return p
    return Point.from_tuple(p)


def as_points(points: Iterable[TPoint]) -> list[Point]:
    """Coerce a sequence of (x, y) tuples to a list of Points."""
    return [as_point(p) for p in points]


def min_point(points: Sequence[Point]) -> Point | None:
    """Component-wise minimum of the points, or None if empty."""
    if not points:
        return None
    return Point(min(p.x for p in points), min(p.y for p in points))


def max_point(points: Sequence[Point]) -> Point | None:
    """Component-wise maximum of the points, or None if empty."""
    if not points:
        return None
    return Point(max(p.x for p in points), max(p.y for p in points))


class Dimensions:
    """Width and height.

    A single value sets both width and height.
    """

    width: float
    height: float

    def __init__(self, width: float = 0, height: float | None = None) -> None:
        """New Dimensions."""
        if height is None:
            height = width
        self.width = width
        self.height = height
        check_finite('Dimensions()', width, height)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dimensions):
            return NotImplemented
        return self.width == other.width and self.height == other.height

    def __repr__(self) -> str:
        return f'Dimensions({self.width!r}, {self.height!r})'


class Origin(enum.Enum):
    """Document corner where the logical coordinate origin is placed."""

    TOP_LEFT = 'top-left'
    BOTTOM_LEFT = 'bottom-left'
    TOP_RIGHT = 'top-right'
    BOTTOM_RIGHT = 'bottom-right'

    @property
    def flips_x(self) -> bool:
        """True if the X axis runs right to left."""
        return self in {Origin.TOP_RIGHT, Origin.BOTTOM_RIGHT}

    @property
    def flips_y(self) -> bool:
        """True if the Y axis runs bottom to top."""
        return self in {Origin.BOTTOM_LEFT, Origin.BOTTOM_RIGHT}


@dataclass
class Layout:
    """Dimensions, origin, scale, and origin offset of a document.

    Attributes:
        dimensions: Document size in pixels.
        origin: Corner of the logical coordinate origin.
        scale: Logical to native scale factor.
        origin_offset: Logical offset added to every coordinate
            before scaling.
        precision: Number of digits after the decimal point for
            numeric output. None means up to six digits with
            trailing zeros stripped.
    """

    dimensions: Dimensions = field(default_factory=lambda: Dimensions(400, 300))
    origin: Origin = Origin.BOTTOM_LEFT
    scale: float = 1.0
    origin_offset: Point = field(default_factory=Point)
    precision: int | None = None

    def __post_init__(self) -> None:
        check_finite(
            'Layout()',
            self.scale,
            self.origin_offset.x,
            self.origin_offset.y,
        )

    def unchanged(self) -> Layout:
        """An identity layout that keeps this layout's precision.

        Coordinates are not translated, flipped, or scaled.
        """
        return Layout(
            Dimensions(), Origin.TOP_LEFT, precision=self.precision
        )


def translate_x(x: float, layout: Layout) -> float:
    """Convert a logical X coordinate to native SVG space."""
    if layout.origin.flips_x:
        return layout.dimensions.width - (
            (x + layout.origin_offset.x) * layout.scale
        )
    return (layout.origin_offset.x + x) * layout.scale


def translate_y(y: float, layout: Layout) -> float:
    """Convert a logical Y coordinate to native SVG space."""
    if layout.origin.flips_y:
        return layout.dimensions.height - (
            (y + layout.origin_offset.y) * layout.scale
        )
    return (layout.origin_offset.y + y) * layout.scale


def translate_scale(dimension: float, layout: Layout) -> float:
    """Scale a length (radius, stroke width, font size...)."""
    return dimension * layout.scale


def translate_point(p: TPoint, layout: Layout) -> Point:
    """Convert a logical point to native SVG space."""
    p = as_point(p)
    return Point(translate_x(p.x, layout), translate_y(p.y, layout))
