"""SVG (SMIL) animation elements.

Animations reference the shape they animate by id. Missing required
values are reported as warnings and the element is still written.
"""

from __future__ import annotations

import abc
import copy
import logging
from typing import TYPE_CHECKING

from . import svg
from .geometry import as_points
from .shapes import Identifiable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from typing_extensions import Self

    from .geometry import Layout, Point, TPoint
    from .svg import TElement

logger = logging.getLogger(__name__)


class Animation(Identifiable, abc.ABC):
    """Base class of animation elements.

    Attributes:
        href: Id of the animated shape.
        begin: Begin time, i.e. '2s' or 'click'.
        fill: Animation fill mode, i.e. 'freeze'.
        dur: Duration, i.e. '5s'.
    """

    tag: str = ''

    def __init__(
        self,
        href: str,
        begin: str = '',
        fill: str = '',
        dur: str = '',
        node_id: str = '',
    ) -> None:
        """New animation."""
        super().__init__(node_id)
        self.href = href
        self.begin = begin
        self.fill = fill
        self.dur = dur

    def animation_attrs(self) -> dict[str, str]:
        """Attributes common to all animations."""
        if not self.href:
            logger.warning('No href given for animation with id="%s".', self.id)
        attrs = self.id_attrs()
        attrs['href'] = f'#{self.href}'
        if self.begin:
            attrs['begin'] = self.begin
        if self.fill:
            attrs['fill'] = self.fill
        if self.dur:
            attrs['dur'] = self.dur
        return attrs

    @abc.abstractmethod
    def to_element(
        self, layout: Layout, parent: TElement | None = None
    ) -> TElement:
        """Create the SVG animation element."""

    def serialize(self, layout: Layout) -> str:
        """SVG markup for this animation."""
        return svg.tostring(self.to_element(layout))

    def clone(self) -> Self:
        """A deep copy of this animation."""
        return copy.deepcopy(self)


class SetAttributeValue(Animation):
    """Set an attribute of the target shape to a value (`<set>`)."""

    tag = 'set'

    def __init__(
        self,
        to: str,
        attribute_name: str,
        href: str,
        begin: str = '',
        fill: str = '',
        dur: str = '',
        attribute_type: str = 'CSS',
        node_id: str = '',
    ) -> None:
        """New set animation.

        Args:
            to: The value to set.
            attribute_name: Name of the attribute to set.
            href: Id of the target shape.
            begin: Begin time.
            fill: Animation fill mode.
            dur: Duration.
            attribute_type: 'CSS', 'XML', or 'auto'.
            node_id: Id of the animation element.
        """
        super().__init__(href, begin, fill, dur, node_id)
        self.to = to
        self.attribute_name = attribute_name
        self.attribute_type = attribute_type

    def to_element(
        self, layout: Layout, parent: TElement | None = None  # noqa: ARG002
    ) -> TElement:
        if not self.attribute_name:
            logger.warning(
                'No attributeName given for animation with id="%s".', self.id
            )
        attrs = self.animation_attrs()
        attrs['to'] = self.to
        attrs['attributeName'] = self.attribute_name
        attrs['attributeType'] = self.attribute_type
        return svg.create_element(self.tag, attrs, parent)


class AnimateMotion(Animation):
    """Move the target shape along a polyline (`<animateMotion>`).

    Motion path points are relative to the target shape
    and are not translated by the document layout.
    """

    tag = 'animateMotion'

    points: list[Point]

    def __init__(
        self,
        points: Iterable[TPoint],
        href: str,
        begin: str = '',
        fill: str = '',
        dur: str = '',
        node_id: str = '',
    ) -> None:
        """New motion animation."""
        super().__init__(href, begin, fill, dur, node_id)
        self.points = as_points(points)

    def to_element(
        self, layout: Layout, parent: TElement | None = None
    ) -> TElement:
        if not self.points:
            logger.warning(
                'No path points given for animation with id="%s".', self.id
            )
        attrs = self.animation_attrs()
        attrs['path'] = ' '.join(
            f'{"M" if i == 0 else "L"}{svg.fmt_point(p, layout)}'
            for i, p in enumerate(self.points)
        )
        return svg.create_element(self.tag, attrs, parent)
