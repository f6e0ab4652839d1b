"""SVG shape elements.

All shapes share a stroke, a z-order, a free-form inline style,
a visibility flag, and an optional id. Surface shapes (circles,
ellipses, rectangles, polygons, paths, and text) can also be filled.
Lines and polylines can reference markers at their start, middle,
and end vertices.

Shape geometry is specified in logical coordinates and converted to
SVG user space by the :class:`~svgwriter.geometry.Layout` passed to
:meth:`Shape.to_element` or :meth:`Shape.serialize`.
"""

from __future__ import annotations

import abc
import copy
import enum
import logging
from typing import TYPE_CHECKING, Any

from . import css, svg
from .geometry import (
    Point,
    as_point,
    check_finite,
    translate_point,
    translate_scale,
    translate_x,
    translate_y,
)
from .style import Fill, Font, Stroke, as_fill

if TYPE_CHECKING:
    import random
    from collections.abc import Iterable

    from typing_extensions import Self

    from .geometry import Layout, TPoint
    from .marker import Marker
    from .style import TColor
    from .svg import TElement

logger = logging.getLogger(__name__)


class Identifiable:
    """Something with an optional XML id.

    An empty id means the element is unidentified and
    no id attribute is written.
    """

    id: str

    def __init__(self, node_id: str = '') -> None:
        """New identifiable object."""
        self.id = node_id

    @staticmethod
    def random_id(length: int = 8, rng: random.Random | None = None) -> str:
        """Generate a random alphanumeric id."""
        return svg.random_id(length=length, rng=rng)

    def id_attrs(self) -> dict[str, str]:
        """The id attribute, if any."""
        return {'id': self.id} if self.id else {}


class Shape(Identifiable, abc.ABC):
    """Base class of all SVG shapes.

    Attributes:
        stroke: Stroke style.
        z: Paint order in the document. Shapes with a smaller z are
            drawn first. If all shapes have the default z=0 they are
            drawn in order of insertion (the SVG default), so a shape
            added later overlays the ones added before it.
        style: Inline CSS style.
        visible: False if the shape is hidden.
    """

    tag: str = ''

    stroke: Stroke
    z: int
    style: str
    visible: bool

    def __init__(
        self,
        stroke: Stroke | None = None,
        z: int = 0,
        node_id: str = '',
    ) -> None:
        """New shape."""
        super().__init__(node_id)
        self.stroke = stroke if stroke is not None else Stroke()
        self.z = z
        self.style = ''
        self.visible = True

    def hide(self) -> None:
        """Hide this shape."""
        self.visible = False

    def show(self) -> None:
        """Show this shape."""
        self.visible = True

    def set_style(self, **properties: Any) -> None:  # noqa: ANN401
        """Set the inline style from CSS properties.

        Underscores in property names are replaced by dashes.
        """
        self.style = css.to_inline_style(**properties)

    def style_attrs(self, layout: Layout) -> dict[str, str]:
        """Stroke, style, and visibility attributes common to all shapes."""
        attrs = self.stroke.to_attrs(layout)
        if self.style:
            attrs['style'] = self.style
        if not self.visible:
            attrs['visibility'] = 'hidden'
        return attrs

    @abc.abstractmethod
    def geometry_attrs(self, layout: Layout) -> dict[str, str]:
        """Element specific geometry attributes."""

    def extra_attrs(self, layout: Layout) -> dict[str, str]:  # noqa: ARG002
        """Attributes written after the common shape attributes."""
        return {}

    def to_element(
        self, layout: Layout, parent: TElement | None = None
    ) -> TElement | None:
        """Create the SVG element for this shape.

        Args:
            layout: Logical to native coordinate mapping.
            parent: Optional parent element.

        Returns:
            The new element or None if there is nothing to draw.
        """
        attrs = self.id_attrs()
        attrs.update(self.geometry_attrs(layout))
        attrs.update(self.style_attrs(layout))
        attrs.update(self.extra_attrs(layout))
        return svg.create_element(self.tag, attrs, parent)

    def serialize(self, layout: Layout) -> str:
        """SVG markup for this shape."""
        node = self.to_element(layout)
        if node is None:
            return ''
        return svg.tostring(node)

    @abc.abstractmethod
    def offset(self, delta: TPoint) -> None:
        """Translate this shape in place by `delta`."""

    def clone(self) -> Self:
        """A deep copy of this shape.

        Markers referenced by the shape are shared, not copied.
        """
        dup = copy.copy(self)
        dup._detach()  # noqa: SLF001
        return dup

    def _detach(self) -> None:
        """Replace mutable state shared with the original by copies."""

    def _check_offset(self, delta: TPoint) -> Point:
        delta = as_point(delta)
        check_finite(f'{type(self).__name__}.offset()', delta.x, delta.y)
        return delta

    def __repr__(self) -> str:
        return f'<{type(self).__name__} id={self.id!r} z={self.z}>'


class SurfaceShape(Shape):
    """A shape that can be filled."""

    fill: Fill

    def __init__(
        self,
        fill: Fill | TColor = None,
        stroke: Stroke | None = None,
        z: int = 0,
        node_id: str = '',
    ) -> None:
        """New fillable shape. The default fill is transparent."""
        super().__init__(stroke, z, node_id)
        self.fill = as_fill(fill)

    def extra_attrs(self, layout: Layout) -> dict[str, str]:
        return self.fill.to_attrs(layout)

    def _detach(self) -> None:
        super()._detach()
        self.fill = copy.copy(self.fill)


class Markerable:
    """Capability of shapes that can reference markers.

    Markers are not owned by the shape. They are shared and must not
    be modified while a document referencing them is written.
    """

    marker_start: Marker | None = None
    marker_mid: Marker | None = None
    marker_end: Marker | None = None

    def set_start_marker(self, marker: Marker | None) -> None:
        """Reference a marker at the first vertex."""
        self.marker_start = marker

    def set_mid_marker(self, marker: Marker | None) -> None:
        """Reference a marker at every inner vertex."""
        self.marker_mid = marker

    def set_end_marker(self, marker: Marker | None) -> None:
        """Reference a marker at the last vertex."""
        self.marker_end = marker

    def _marker_refs(self) -> Iterable[tuple[str, Marker]]:
        for attr, marker in (
            ('marker-start', self.marker_start),
            ('marker-mid', self.marker_mid),
            ('marker-end', self.marker_end),
        ):
            if marker is not None and marker.valid():
                yield attr, marker

    def marker_attrs(self) -> dict[str, str]:
        """Marker reference attributes for valid markers."""
        return {attr: f'url(#{m.id})' for attr, m in self._marker_refs()}

    def used_markers(self) -> list[Marker]:
        """Distinct valid markers referenced by this shape, ordered by id."""
        markers: list[Marker] = []
        for _attr, marker in self._marker_refs():
            if not any(marker is m for m in markers):
                markers.append(marker)
        return sorted(markers, key=lambda m: m.id)


class Circle(SurfaceShape):
    """A circle."""

    tag = 'circle'

    def __init__(
        self,
        center: TPoint,
        diameter: float,
        fill: Fill | TColor = None,
        stroke: Stroke | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        """New circle."""
        super().__init__(fill, stroke, **kwargs)
        self.center = as_point(center)
        self.radius = diameter / 2
        check_finite('Circle()', self.center.x, self.center.y, diameter)

    def geometry_attrs(self, layout: Layout) -> dict[str, str]:
        return {
            'cx': svg.fmt_float(translate_x(self.center.x, layout), layout),
            'cy': svg.fmt_float(translate_y(self.center.y, layout), layout),
            'r': svg.fmt_float(translate_scale(self.radius, layout), layout),
        }

    def offset(self, delta: TPoint) -> None:
        self.center += self._check_offset(delta)


class Ellipse(SurfaceShape):
    """An axis aligned ellipse."""

    tag = 'ellipse'

    def __init__(
        self,
        center: TPoint,
        width: float,
        height: float,
        fill: Fill | TColor = None,
        stroke: Stroke | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        """New ellipse."""
        super().__init__(fill, stroke, **kwargs)
        self.center = as_point(center)
        self.radius_width = width / 2
        self.radius_height = height / 2
        check_finite(
            'Ellipse()', self.center.x, self.center.y, width, height
        )

    def geometry_attrs(self, layout: Layout) -> dict[str, str]:
        return {
            'cx': svg.fmt_float(translate_x(self.center.x, layout), layout),
            'cy': svg.fmt_float(translate_y(self.center.y, layout), layout),
            'rx': svg.fmt_float(
                translate_scale(self.radius_width, layout), layout
            ),
            'ry': svg.fmt_float(
                translate_scale(self.radius_height, layout), layout
            ),
        }

    def offset(self, delta: TPoint) -> None:
        self.center += self._check_offset(delta)


class Rectangle(SurfaceShape):
    """A rectangle with optionally rounded corners."""

    tag = 'rect'

    def __init__(
        self,
        edge: TPoint,
        width: float,
        height: float,
        fill: Fill | TColor = None,
        stroke: Stroke | None = None,
        rx: float = 0.0,
        ry: float = 0.0,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        """New rectangle.

        Args:
            edge: Upper left corner of the rectangle.
            width: Width of the rectangle.
            height: Height of the rectangle.
            fill: Fill style used to fill the rectangular area.
            stroke: Stroke used to draw the outline.
            rx: Rounded corner radius in x direction.
            ry: Rounded corner radius in y direction.
            kwargs: z and node_id.
        """
        super().__init__(fill, stroke, **kwargs)
        self.edge = as_point(edge)
        self.width = width
        self.height = height
        self.rx = rx
        self.ry = ry
        check_finite(
            'Rectangle()', self.edge.x, self.edge.y, width, height, rx, ry
        )

    def geometry_attrs(self, layout: Layout) -> dict[str, str]:
        attrs = {
            'x': svg.fmt_float(translate_x(self.edge.x, layout), layout),
            'y': svg.fmt_float(translate_y(self.edge.y, layout), layout),
        }
        if self.rx > 0 or self.ry > 0:
            attrs['rx'] = svg.fmt_float(
                translate_scale(self.rx, layout), layout
            )
            attrs['ry'] = svg.fmt_float(
                translate_scale(self.ry, layout), layout
            )
        attrs['width'] = svg.fmt_float(
            translate_scale(self.width, layout), layout
        )
        attrs['height'] = svg.fmt_float(
            translate_scale(self.height, layout), layout
        )
        return attrs

    def offset(self, delta: TPoint) -> None:
        self.edge += self._check_offset(delta)

    def center_at(self, pos: TPoint) -> Rectangle:
        """A rectangle of the same size and style centered at `pos`."""
        pos = as_point(pos)
        check_finite('Rectangle.center_at()', pos.x, pos.y)
        return Rectangle(
            Point(pos.x - self.width / 2, pos.y - self.height / 2),
            self.width,
            self.height,
            copy.copy(self.fill),
            self.stroke,
            self.rx,
            self.ry,
        )


class Line(Markerable, Shape):
    """A straight line segment."""

    tag = 'line'

    def __init__(
        self,
        start: TPoint,
        end: TPoint,
        stroke: Stroke | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        """New line."""
        super().__init__(stroke, **kwargs)
        self.start = as_point(start)
        self.end = as_point(end)
        check_finite(
            'Line()', self.start.x, self.start.y, self.end.x, self.end.y
        )

    def geometry_attrs(self, layout: Layout) -> dict[str, str]:
        return {
            'x1': svg.fmt_float(translate_x(self.start.x, layout), layout),
            'y1': svg.fmt_float(translate_y(self.start.y, layout), layout),
            'x2': svg.fmt_float(translate_x(self.end.x, layout), layout),
            'y2': svg.fmt_float(translate_y(self.end.y, layout), layout),
        }

    def extra_attrs(self, layout: Layout) -> dict[str, str]:  # noqa: ARG002
        return self.marker_attrs()

    def offset(self, delta: TPoint) -> None:
        delta = self._check_offset(delta)
        self.start += delta
        self.end += delta


class _PointList:
    """Mixin for shapes built from a list of vertices."""

    points: list[Point]

    def append(self, point: TPoint) -> Self:
        """Append a vertex."""
        point = as_point(point)
        check_finite(f'{type(self).__name__}.append()', point.x, point.y)
        self.points.append(point)
        return self

    def extend(self, points: Iterable[TPoint]) -> Self:
        """Append vertices."""
        for point in points:
            self.append(point)
        return self

    def __lshift__(self, point: TPoint) -> Self:
        return self.append(point)

    def offset(self, delta: TPoint) -> None:
        delta = self._check_offset(delta)  # type: ignore [attr-defined]
        self.points = [p + delta for p in self.points]

    def _points_attr(self, layout: Layout) -> str:
        return ' '.join(
            svg.fmt_point(translate_point(p, layout), layout)
            for p in self.points
        )


class Polygon(_PointList, SurfaceShape):
    """A closed polygon."""

    tag = 'polygon'

    def __init__(
        self,
        points: Iterable[TPoint] = (),
        fill: Fill | TColor = None,
        stroke: Stroke | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        """New polygon."""
        super().__init__(fill, stroke, **kwargs)
        self.points = []
        self.extend(points)

    def geometry_attrs(self, layout: Layout) -> dict[str, str]:
        return {'points': self._points_attr(layout)}

    def _detach(self) -> None:
        super()._detach()
        self.points = list(self.points)


class Polyline(_PointList, Markerable, Shape):
    """An open polyline. Polylines are never filled."""

    tag = 'polyline'

    def __init__(
        self,
        points: Iterable[TPoint] = (),
        stroke: Stroke | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        """New polyline."""
        super().__init__(stroke, **kwargs)
        self.points = []
        self.extend(points)

    def geometry_attrs(self, layout: Layout) -> dict[str, str]:
        return {'fill': 'none', 'points': self._points_attr(layout)}

    def extra_attrs(self, layout: Layout) -> dict[str, str]:  # noqa: ARG002
        return self.marker_attrs()

    def _detach(self) -> None:
        super()._detach()
        self.points = list(self.points)


class Path(SurfaceShape):
    """A path made of one or more closed polygonal subpaths.

    Subpaths are filled using the even-odd rule so that a subpath
    inside another one cuts a hole.
    """

    tag = 'path'

    subpaths: list[list[Point]]

    def __init__(
        self,
        points: Iterable[TPoint] = (),
        fill: Fill | TColor = None,
        stroke: Stroke | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        """New path with a single (possibly empty) subpath."""
        super().__init__(fill, stroke, **kwargs)
        self.subpaths = [[]]
        self.extend(points)

    def append(self, point: TPoint) -> Self:
        """Append a vertex to the current subpath."""
        point = as_point(point)
        check_finite('Path.append()', point.x, point.y)
        self.subpaths[-1].append(point)
        return self

    def extend(self, points: Iterable[TPoint]) -> Self:
        """Append vertices to the current subpath."""
        for point in points:
            self.append(point)
        return self

    def __lshift__(self, point: TPoint) -> Self:
        return self.append(point)

    def start_new_subpath(self) -> None:
        """Start a new subpath if the current one is not empty."""
        if not self.subpaths or self.subpaths[-1]:
            self.subpaths.append([])

    def geometry_attrs(self, layout: Layout) -> dict[str, str]:
        d = []
        for subpath in self.subpaths:
            if not subpath:
                continue
            coords = ' '.join(
                svg.fmt_point(translate_point(p, layout), layout)
                for p in subpath
            )
            d.append(f'M{coords} z')
        return {'d': ' '.join(d), 'fill-rule': 'evenodd'}

    def offset(self, delta: TPoint) -> None:
        delta = self._check_offset(delta)
        self.subpaths = [[p + delta for p in sp] for sp in self.subpaths]

    def _detach(self) -> None:
        super()._detach()
        self.subpaths = [list(sp) for sp in self.subpaths]


class TextAnchor(enum.Enum):
    """Horizontal text alignment. NONE writes no attribute (same as START)."""

    START = 'start'
    MIDDLE = 'middle'
    END = 'end'
    NONE = None


class DominantBaseline(enum.Enum):
    """Vertical text alignment. NONE writes no attribute (same as 'auto').

    See https://developer.mozilla.org/en-US/docs/Web/SVG/Attribute/dominant-baseline
    """

    TEXT_BOTTOM = 'text-bottom'
    ALPHABETIC = 'alphabetic'
    IDEOGRAPHIC = 'ideographic'
    MIDDLE = 'middle'
    CENTRAL = 'central'
    MATHEMATICAL = 'mathematical'
    HANGING = 'hanging'
    TEXT_TOP = 'text-top'
    NONE = None


class Text(SurfaceShape):
    """A single line of text.

    Text is centered on its origin by default so it can be used
    as a label without further configuration.
    """

    tag = 'text'

    def __init__(
        self,
        origin: TPoint,
        content: str,
        fill: Fill | TColor = None,
        font: Font | None = None,
        stroke: Stroke | None = None,
        anchor: TextAnchor = TextAnchor.MIDDLE,
        baseline: DominantBaseline = DominantBaseline.MIDDLE,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        """New text."""
        super().__init__(fill, stroke, **kwargs)
        self.origin = as_point(origin)
        self.content = content
        self.font = font if font is not None else Font()
        self.anchor = anchor
        self.baseline = baseline
        check_finite('Text()', self.origin.x, self.origin.y)
        if not content:
            logger.warning('Empty string provided to Text().')

    def geometry_attrs(self, layout: Layout) -> dict[str, str]:
        attrs = {}
        if self.anchor.value is not None:
            attrs['text-anchor'] = self.anchor.value
        if self.baseline.value is not None:
            attrs['dominant-baseline'] = self.baseline.value
        attrs['x'] = svg.fmt_float(translate_x(self.origin.x, layout), layout)
        attrs['y'] = svg.fmt_float(translate_y(self.origin.y, layout), layout)
        return attrs

    def extra_attrs(self, layout: Layout) -> dict[str, str]:
        attrs = super().extra_attrs(layout)
        attrs.update(self.font.to_attrs(layout))
        return attrs

    def to_element(
        self, layout: Layout, parent: TElement | None = None
    ) -> TElement | None:
        node = super().to_element(layout, parent)
        if node is not None:
            node.text = svg.xml_safe(self.content, 'Text()')
        return node

    def offset(self, delta: TPoint) -> None:
        self.origin += self._check_offset(delta)

    def _detach(self) -> None:
        super()._detach()
        self.font = copy.copy(self.font)
