"""A small library for writing SVG documents programmatically.

Compose a scene from shapes (circles, rectangles, lines, polygons,
paths, text...), style them with fills, strokes, and fonts, reference
reusable markers and add simple animations, then write the whole
document to a string or a file.

Shapes are specified in a logical coordinate space that is mapped to
SVG user space by a layout, so the origin can be put at any corner
of the document (i.e. bottom left for a Cartesian Y-up frame).
"""

import importlib.metadata

__version__ = importlib.metadata.version('svg-writer')
