"""A simple line chart built from polylines."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from . import svg
from .geometry import Dimensions, Point, max_point, min_point
from .shapes import Circle, Polyline, Shape
from .style import Color, Fill, Stroke

if TYPE_CHECKING:
    from typing_extensions import Self

    from .geometry import Layout, TPoint
    from .svg import TElement

# The axis is this much wider and higher than the data points.
AXIS_OVERSHOOT = 1.1
# Vertex circle radius relative to the data height.
VERTEX_RADIUS_RATIO = 1 / 30


class LineChart(Shape):
    """Polylines drawn with vertex dots and an L-shaped axis.

    The chart is written as an SVG group. A chart without any data
    points writes nothing at all.
    """

    tag = 'g'

    polylines: list[Polyline]

    def __init__(
        self,
        margin: Dimensions | None = None,
        axis_stroke: Stroke | None = None,
        **kwargs: Any,  # noqa: ANN401
    ) -> None:
        """New line chart.

        Args:
            margin: Offset of the chart axis origin.
            axis_stroke: Stroke used to draw the axis.
                Default is a thin purple line.
            kwargs: z and node_id.
        """
        super().__init__(**kwargs)
        self.margin = margin if margin is not None else Dimensions()
        if axis_stroke is None:
            axis_stroke = Stroke(0.5, Color.named('purple'))
        self.axis_stroke = axis_stroke
        self.polylines = []

    def append(self, polyline: Polyline) -> Self:
        """Add a copy of the polyline. Empty polylines are ignored."""
        if polyline.points:
            self.polylines.append(polyline.clone())
        return self

    def __lshift__(self, polyline: Polyline) -> Self:
        return self.append(polyline)

    def data_extent(self) -> Dimensions | None:
        """Width and height of the bounding box of all data points."""
        points = [p for polyline in self.polylines for p in polyline.points]
        pmin = min_point(points)
        pmax = max_point(points)
        if pmin is None or pmax is None:
            return None
        return Dimensions(pmax.x - pmin.x, pmax.y - pmin.y)

    def geometry_attrs(self, layout: Layout) -> dict[str, str]:  # noqa: ARG002
        return {}

    def to_element(
        self, layout: Layout, parent: TElement | None = None
    ) -> TElement | None:
        extent = self.data_extent()
        if extent is None:
            return None

        attrs = self.id_attrs()
        attrs.update(self.style_attrs(layout))
        group = svg.create_element(self.tag, attrs, parent)

        margin = Point(self.margin.width, self.margin.height)
        radius = extent.height * VERTEX_RADIUS_RATIO
        for polyline in self.polylines:
            shifted = polyline.clone()
            shifted.offset(margin)
            shifted.to_element(layout, parent=group)
            for p in shifted.points:
                vertex = Circle(p, radius * 2, Fill(Color.named('black')))
                vertex.to_element(layout, parent=group)

        self._axis(extent).to_element(layout, parent=group)
        return group

    def _axis(self, extent: Dimensions) -> Polyline:
        width = extent.width * AXIS_OVERSHOOT
        height = extent.height * AXIS_OVERSHOOT
        mx, my = self.margin.width, self.margin.height
        return Polyline(
            [(mx, my + height), (mx, my), (mx + width, my)],
            self.axis_stroke,
        )

    def offset(self, delta: TPoint) -> None:
        delta = self._check_offset(delta)
        for polyline in self.polylines:
            polyline.offset(delta)

    def _detach(self) -> None:
        super()._detach()
        self.margin = Dimensions(self.margin.width, self.margin.height)
        self.polylines = [polyline.clone() for polyline in self.polylines]
