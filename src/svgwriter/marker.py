"""Reusable markers for line and polyline vertices."""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import svg
from .geometry import Layout, float_eq
from .shapes import Identifiable

if TYPE_CHECKING:
    from collections.abc import Iterator

    from typing_extensions import Self

    from .shapes import Shape
    from .svg import TElement


# Keyword values accepted by the SVG `orient` attribute.
MARKER_ORIENTATIONS = ('auto', 'auto-start-reverse')


class Marker(Identifiable):
    """A named group of shapes drawn at the vertices of lines.

    Marker shapes are defined in the marker's own coordinate system
    and are written without any layout translation or scaling.

    A marker must have an id to be referenced. Lines and polylines
    hold plain references to markers so the same marker can be shared
    by any number of shapes and documents.
    """

    shapes: list[Shape]
    width: float
    height: float
    ref_x: float
    ref_y: float
    orient: str

    def __init__(
        self,
        marker_id: str = '',
        width: float = 3,
        height: float = 3,
        ref_x: float = 0,
        ref_y: float = 0,
        shape: Shape | None = None,
        orientation: str | float = 'auto',
    ) -> None:
        """New marker.

        Args:
            marker_id: Marker id. Required to reference the marker.
            width: markerWidth attribute.
            height: markerHeight attribute.
            ref_x: X coordinate of the reference point.
            ref_y: Y coordinate of the reference point.
            shape: Optional first shape. The shape is copied.
            orientation: 'auto', 'auto-start-reverse', or an angle
                in degrees.

        Raises:
            ValueError: If the orientation is not valid.
        """
        super().__init__(marker_id)
        self.shapes = []
        self.width = width
        self.height = height
        self.ref_x = ref_x
        self.ref_y = ref_y
        self.set_orientation(orientation)
        if shape is not None:
            self.add_shape(shape)

    def add_shape(self, shape: Shape) -> Self:
        """Add a copy of the shape to this marker."""
        self.shapes.append(shape.clone())
        return self

    def __lshift__(self, shape: Shape) -> Self:
        return self.add_shape(shape)

    def __len__(self) -> int:
        return len(self.shapes)

    def __getitem__(self, index: int) -> Shape:
        return self.shapes[index]

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes)

    def valid(self) -> bool:
        """True if this marker can be referenced, i.e. it has an id."""
        return bool(self.id)

    def set_orientation(self, orientation: str | float = 'auto') -> None:
        """Set the marker orientation.

        Args:
            orientation: 'auto', 'auto-start-reverse', or an angle
                in degrees.

        Raises:
            ValueError: If the orientation is an unknown keyword.
        """
        if isinstance(orientation, str):
            if orientation not in MARKER_ORIENTATIONS:
                raise ValueError(
                    'Marker orientation must be "auto", '
                    f'"auto-start-reverse", or an angle: {orientation!r}'
                )
            self.orient = orientation
        else:
            self.orient = svg.floatystr(float(orientation))

    def to_element(
        self, layout: Layout, parent: TElement | None = None
    ) -> TElement:
        """Create the SVG marker element.

        Raises:
            SVGError: If the marker has no id.
        """
        if not self.valid():
            raise svg.SVGError(
                'A marker requires a non-empty id to be referenced.'
            )
        attrs = self.id_attrs()
        attrs.update(
            {
                'markerWidth': svg.fmt_float(self.width, layout),
                'markerHeight': svg.fmt_float(self.height, layout),
                'refX': svg.fmt_float(self.ref_x, layout),
                'refY': svg.fmt_float(self.ref_y, layout),
                'orient': self.orient,
            }
        )
        node = svg.create_element('marker', attrs, parent)
        # Don't add any translation
        unchanged = layout.unchanged()
        for shape in self.shapes:
            shape.to_element(unchanged, parent=node)
        return node

    def serialize(self, layout: Layout) -> str:
        """SVG markup for this marker.

        Raises:
            SVGError: If the marker has no id.
        """
        return svg.tostring(self.to_element(layout))

    def content_equals(self, other: Marker) -> bool:
        """True if both markers look the same. The id is ignored.

        This is used to detect different markers sharing an id.
        """
        if (
            len(self.shapes) != len(other.shapes)
            or not float_eq(self.width, other.width)
            or not float_eq(self.height, other.height)
            or not float_eq(self.ref_x, other.ref_x)
            or not float_eq(self.ref_y, other.ref_y)
            or self.orient != other.orient
        ):
            return False
        # Compare serialized shapes, sorted so order doesn't matter
        layout = Layout()
        mine = sorted(shape.serialize(layout) for shape in self.shapes)
        theirs = sorted(shape.serialize(layout) for shape in other.shapes)
        return mine == theirs

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Marker):
            return NotImplemented
        return self.content_equals(other)

    __hash__ = None  # type: ignore [assignment]

    def clone(self) -> Marker:
        """A deep copy of this marker and its shapes."""
        dup = Marker(
            self.id,
            self.width,
            self.height,
            self.ref_x,
            self.ref_y,
            orientation='auto',
        )
        dup.orient = self.orient
        dup.shapes = [shape.clone() for shape in self.shapes]
        return dup

    def __repr__(self) -> str:
        return f'<Marker id={self.id!r} shapes={len(self.shapes)}>'
