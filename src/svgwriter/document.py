"""SVG document assembly and output."""

from __future__ import annotations

import io
import logging
import pathlib
from typing import TYPE_CHECKING

from . import svg
from .animation import Animation
from .geometry import Layout
from .shapes import Identifiable, Markerable, Shape

if TYPE_CHECKING:
    import os
    from typing import TextIO

    from typing_extensions import Self

    from .marker import Marker
    from .svg import TElement

logger = logging.getLogger(__name__)

GENERATOR = 'svg-writer'

# File name extensions that are left alone by Document.save()
SVG_EXTENSION = '.svg'
HTML_EXTENSION = '.html'


class Document(Identifiable):
    """An SVG document.

    Shapes and animations are copied when they are added, so the
    originals can be changed or reused afterwards without affecting
    the document. Markers referenced by shapes are not copied.

    Attributes:
        diagnostics: Non-fatal problems found while writing the
            document, such as marker id collisions.
    """

    body_nodes: list[Shape]
    animation_nodes: list[Animation]
    needs_sorting: bool
    file_name: str
    diagnostics: list[str]

    def __init__(self, layout: Layout | None = None, node_id: str = '') -> None:
        """New document.

        Args:
            layout: Document dimensions, origin, scale, and offset.
                Default is a 400x300 document with the origin
                at the bottom left.
            node_id: Optional id of the root svg element.
        """
        super().__init__(node_id)
        self._layout = layout if layout is not None else Layout()
        self.body_nodes = []
        self.animation_nodes = []
        self.needs_sorting = False
        self.file_name = ''
        self.diagnostics = []

    @property
    def layout(self) -> Layout:
        """The document layout."""
        return self._layout

    def append(self, node: Shape | Animation) -> Self:
        """Add a copy of a shape or animation to this document.

        Raises:
            TypeError: If the node is neither a Shape nor an Animation.
        """
        if isinstance(node, Shape):
            shape = node.clone()
            self.body_nodes.append(shape)
            self.needs_sorting = self.needs_sorting or shape.z != 0
        elif isinstance(node, Animation):
            self.animation_nodes.append(node.clone())
        else:
            raise TypeError(
                f'Expected a Shape or Animation, not {type(node).__name__}'
            )
        return self

    def __lshift__(self, node: Shape | Animation) -> Self:
        return self.append(node)

    def is_animated(self) -> bool:
        """True if the document contains animations."""
        return bool(self.animation_nodes)

    def to_string(self, pretty_print: bool = False) -> str:
        """The SVG document as a string."""
        stream = io.StringIO()
        self.write_document(stream, pretty_print=pretty_print)
        return stream.getvalue()

    def __str__(self) -> str:
        return self.to_string()

    def save(
        self, filename: str | os.PathLike[str], auto_append: bool = True
    ) -> bool:
        """Write the document to a file.

        Args:
            filename: File name, possibly including the extension.
            auto_append: If True and the file name doesn't already end
                with '.svg' or '.html' then '.html' is appended if the
                document is animated, otherwise '.svg'.

        Returns:
            True on success, False if the file could not be written.
        """
        file_name = str(filename)
        if auto_append and not file_name.endswith(
            (SVG_EXTENSION, HTML_EXTENSION)
        ):
            file_name += HTML_EXTENSION if self.is_animated() else SVG_EXTENSION
        self.file_name = file_name

        try:
            with pathlib.Path(file_name).open('w', encoding='utf-8') as f:
                self.write_document(f)
        except OSError as e:
            logger.error('Unable to write %s: %s', file_name, e)  # noqa: TRY400
            return False
        return True

    def write_document(
        self, stream: TextIO, pretty_print: bool = False
    ) -> None:
        """Write the SVG document to a stream output."""
        self.diagnostics.clear()
        self._sort_body()
        markers = self._collect_markers()

        stream.write(svg.XML_DECLARATION + '\n')
        stream.write(f'<!-- Generator: {GENERATOR} -->\n')
        stream.write(svg.SVG_DTD + '\n')
        stream.write(svg.tostring(self._build(markers), pretty_print))
        if not pretty_print:
            stream.write('\n')

    def _sort_body(self) -> None:
        # Only reorder if some shape asked for it.
        # Equal z keeps the order of insertion.
        if self.needs_sorting:
            self.body_nodes.sort(key=lambda shape: shape.z)

    def _collect_markers(self) -> list[Marker]:
        """All markers referenced by the body shapes, ordered by id.

        The first marker found for an id is used. Other markers
        with the same id but different content are reported.
        """
        markers: dict[str, Marker] = {}
        for node in self.body_nodes:
            if not isinstance(node, Markerable):
                continue
            for marker in node.used_markers():
                known = markers.get(marker.id)
                if known is None:
                    markers[marker.id] = marker
                elif known is not marker and not known.content_equals(marker):
                    self._report_collision(marker, node)
        return [markers[marker_id] for marker_id in sorted(markers)]

    def _report_collision(self, marker: Marker, node: Shape) -> None:
        msg = (
            f'Marker collision detected for ID={marker.id} '
            f'within this element:\n{node.serialize(self._layout)}\n'
            'Expect markers not to be rendered correctly.'
        )
        logger.warning(msg)
        self.diagnostics.append(msg)

    def _build(self, markers: list[Marker]) -> TElement:
        attrs = self.id_attrs()
        attrs['width'] = f'{svg.floatystr(self._layout.dimensions.width)}px'
        attrs['height'] = f'{svg.floatystr(self._layout.dimensions.height)}px'
        attrs['version'] = svg.SVG_VERSION
        docroot = svg.create_element('svg', attrs)

        if markers:
            defs = svg.create_element('defs', {}, docroot)
            for marker in markers:
                marker.to_element(self._layout, parent=defs)

        for node in self.body_nodes:
            node.to_element(self._layout, parent=docroot)
        # Animations are never reordered
        for animation in self.animation_nodes:
            animation.to_element(self._layout, parent=docroot)
        return docroot
