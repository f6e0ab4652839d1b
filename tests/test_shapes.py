"""Test shape elements."""

from __future__ import annotations

import pytest
from conftest import parse

from svgwriter.geometry import Dimensions, Layout, Origin, Point
from svgwriter.marker import Marker
from svgwriter.shapes import (
    Circle,
    DominantBaseline,
    Ellipse,
    Line,
    Path,
    Polygon,
    Polyline,
    Rectangle,
    Text,
    TextAnchor,
)
from svgwriter.style import Color, Fill, Font, Stroke


def attrs_of(markup: str) -> dict[str, str]:
    return dict(parse(markup).attrib)


def test_circle(layout: Layout) -> None:
    circle = Circle((10, 20), 10, Fill('red'))
    markup = circle.serialize(layout)
    assert markup == (
        '<circle xmlns="http://www.w3.org/2000/svg"'
        ' cx="10" cy="20" r="5" fill="rgb(255,0,0)"/>'
    )


def test_circle_bottom_left() -> None:
    layout = Layout(Dimensions(400, 300), Origin.BOTTOM_LEFT, 2)
    attrs = attrs_of(Circle((10, 20), 10).serialize(layout))
    assert attrs == {'cx': '20', 'cy': '260', 'r': '10', 'fill': 'none'}


def test_attribute_order(layout: Layout) -> None:
    circle = Circle(
        (1, 2), 4, Fill('blue', 0.5), Stroke(1, 'black'), node_id='c1'
    )
    circle.set_style(stroke_linecap='round')
    circle.hide()
    node = parse(circle.serialize(layout))
    assert list(node.attrib) == [
        'id',
        'cx',
        'cy',
        'r',
        'stroke-width',
        'stroke',
        'stroke-dashoffset',
        'style',
        'visibility',
        'fill',
        'fill-opacity',
    ]
    assert node.get('style') == 'stroke-linecap:round'
    assert node.get('visibility') == 'hidden'

    circle.show()
    assert 'visibility' not in attrs_of(circle.serialize(layout))


def test_default_stroke_writes_nothing(layout: Layout) -> None:
    shapes = [
        Circle((0, 0), 1),
        Ellipse((0, 0), 1, 2),
        Rectangle((0, 0), 1, 2),
        Line((0, 0), (1, 1)),
        Polygon([(0, 0), (1, 1)]),
        Polyline([(0, 0), (1, 1)]),
        Path([(0, 0), (1, 1)]),
        Text((0, 0), 'x'),
    ]
    for shape in shapes:
        markup = shape.serialize(layout)
        assert 'stroke' not in markup, markup


def test_ellipse(layout: Layout) -> None:
    attrs = attrs_of(Ellipse((5, 5), 10, 4, 'green').serialize(layout))
    assert attrs == {
        'cx': '5',
        'cy': '5',
        'rx': '5',
        'ry': '2',
        'fill': 'rgb(0,128,0)',
    }


def test_rectangle(layout: Layout) -> None:
    node = parse(Rectangle((1, 2), 10, 5).serialize(layout))
    assert list(node.attrib) == ['x', 'y', 'width', 'height', 'fill']

    rounded = Rectangle((1, 2), 10, 5, rx=1, ry=2)
    scaled = Layout(Dimensions(400, 300), Origin.TOP_LEFT, 2)
    node = parse(rounded.serialize(scaled))
    assert list(node.attrib) == [
        'x',
        'y',
        'rx',
        'ry',
        'width',
        'height',
        'fill',
    ]
    assert node.get('rx') == '2'
    assert node.get('ry') == '4'
    assert node.get('width') == '20'


def test_rectangle_center_at(layout: Layout) -> None:
    rect = Rectangle((0, 0), 10, 4, 'red', Stroke(1, 'black'))
    centered = rect.center_at((50, 50))
    assert centered.edge == Point(45, 48)
    assert centered.width == 10
    assert centered.height == 4
    assert centered.fill == rect.fill
    assert centered.fill is not rect.fill
    assert centered.stroke == rect.stroke


def test_line(layout: Layout) -> None:
    attrs = attrs_of(Line((0, 0), (10, 5), Stroke(1, 'red')).serialize(layout))
    assert attrs['x1'] == '0'
    assert attrs['y1'] == '0'
    assert attrs['x2'] == '10'
    assert attrs['y2'] == '5'
    assert 'fill' not in attrs


def test_line_markers(layout: Layout) -> None:
    arrow = Marker('arrow', shape=Polygon([(0, 0), (3, 1.5), (0, 3)]))
    dot = Marker('dot', shape=Circle((1.5, 1.5), 3))
    line = Line((0, 0), (10, 5))
    line.set_start_marker(dot)
    line.set_mid_marker(Marker())
    line.set_end_marker(arrow)
    node = parse(line.serialize(layout))
    assert node.get('marker-start') == 'url(#dot)'
    assert node.get('marker-mid') is None
    assert node.get('marker-end') == 'url(#arrow)'
    assert line.used_markers() == [arrow, dot]


def test_used_markers_are_distinct() -> None:
    dot = Marker('dot', shape=Circle((1.5, 1.5), 3))
    polyline = Polyline([(0, 0), (1, 1), (2, 0)])
    polyline.set_start_marker(dot)
    polyline.set_mid_marker(dot)
    polyline.set_end_marker(dot)
    assert len(polyline.used_markers()) == 1


def test_polygon(layout: Layout) -> None:
    polygon = Polygon([(0, 0), (10, 0)], 'red')
    polygon << (10, 10) << Point(0, 10)
    attrs = attrs_of(polygon.serialize(layout))
    assert attrs == {'points': '0,0 10,0 10,10 0,10', 'fill': 'rgb(255,0,0)'}


def test_polyline_is_never_filled(layout: Layout) -> None:
    polyline = Polyline(stroke=Stroke(1, 'black'))
    polyline.extend([(0, 0), (5, 5)])
    node = parse(polyline.serialize(layout))
    assert list(node.attrib)[:2] == ['fill', 'points']
    assert node.get('fill') == 'none'
    assert node.get('points') == '0,0 5,5'


def test_path_subpaths(layout: Layout) -> None:
    path = Path([(0, 0), (10, 0), (10, 10)], 'black')
    path.start_new_subpath()
    path.start_new_subpath()
    path << (2, 2) << (4, 2) << (4, 4)
    assert len(path.subpaths) == 2
    attrs = attrs_of(path.serialize(layout))
    assert attrs['d'] == 'M0,0 10,0 10,10 z M2,2 4,2 4,4 z'
    assert attrs['fill-rule'] == 'evenodd'


def test_empty_path(layout: Layout) -> None:
    attrs = attrs_of(Path().serialize(layout))
    assert attrs['d'] == ''


def test_text(layout: Layout) -> None:
    text = Text((10, 20), 'a < b & c', 'black', Font(10, 'Arial'))
    markup = text.serialize(layout)
    assert 'a &lt; b &amp; c' in markup
    node = parse(markup)
    assert node.text == 'a < b & c'
    assert list(node.attrib) == [
        'text-anchor',
        'dominant-baseline',
        'x',
        'y',
        'fill',
        'font-size',
        'font-family',
    ]
    assert node.get('text-anchor') == 'middle'
    assert node.get('font-family') == 'Arial'


def test_text_alignment(layout: Layout) -> None:
    text = Text(
        (0, 0),
        'x',
        anchor=TextAnchor.NONE,
        baseline=DominantBaseline.HANGING,
    )
    attrs = attrs_of(text.serialize(layout))
    assert 'text-anchor' not in attrs
    assert attrs['dominant-baseline'] == 'hanging'


def test_empty_text_warns(
    layout: Layout, caplog: pytest.LogCaptureFixture
) -> None:
    text = Text((0, 0), '')
    assert 'Empty string provided to Text()' in caplog.text
    assert parse(text.serialize(layout)).text is None


def test_non_finite_warns(caplog: pytest.LogCaptureFixture) -> None:
    Circle((float('nan'), 0), 1)
    assert 'Infs or NaNs provided to Circle()' in caplog.text


OFFSET_LAYOUT = Layout(
    Dimensions(400, 300), Origin.BOTTOM_RIGHT, 2, Point(5, 7)
)


@pytest.mark.parametrize(
    'make_shape',
    [
        lambda p: Circle(p, 4),
        lambda p: Ellipse(p, 4, 2),
        lambda p: Rectangle(p, 4, 2, rx=1),
        lambda p: Line(p, p + Point(2, 2)),
        lambda p: Polygon([p, p + Point(2, 2)]),
        lambda p: Polyline([p, p + Point(2, 2)]),
        lambda p: Path([p, p + Point(2, 2)]),
        lambda p: Text(p, 'x'),
    ],
)
@pytest.mark.parametrize(
    'output_layout',
    [Layout(Dimensions(400, 300), Origin.TOP_LEFT), OFFSET_LAYOUT],
)
def test_offset(make_shape, output_layout: Layout) -> None:  # noqa: ANN001
    shape = make_shape(Point(1, 2))
    shape.offset((3, 4))
    moved = make_shape(Point(4, 6))
    assert shape.serialize(output_layout) == moved.serialize(output_layout)


def test_offset_is_scaled_by_layout() -> None:
    circle = Circle((1, 2), 4)
    before = parse(circle.serialize(OFFSET_LAYOUT))
    circle.offset((3, 4))
    after = parse(circle.serialize(OFFSET_LAYOUT))
    # Right/bottom origin with scale 2: deltas are doubled and flipped
    assert float(after.get('cx')) == float(before.get('cx')) - 6
    assert float(after.get('cy')) == float(before.get('cy')) - 8
    assert after.get('r') == before.get('r')


def test_text_invalid_characters(
    layout: Layout, caplog: pytest.LogCaptureFixture
) -> None:
    text = Text((0, 0), 'line\x0bfeed', node_id='t\x00')
    text.set_style(letter_spacing='2\x1b')
    node = parse(text.serialize(layout))
    assert node.text == 'linefeed'
    assert node.get('id') == 't'
    assert node.get('style') == 'letter-spacing:2'
    assert 'Removed characters not allowed in XML' in caplog.text


def test_clone_is_independent(layout: Layout) -> None:
    polygon = Polygon([(0, 0), (1, 1)], Fill('red'))
    dup = polygon.clone()
    polygon << (5, 5)
    polygon.fill.opacity = 0.5
    assert dup.points == [Point(0, 0), Point(1, 1)]
    assert dup.fill.opacity == 1

    path = Path([(0, 0), (1, 1)])
    dup_path = path.clone()
    path << (2, 2)
    path.start_new_subpath()
    assert dup_path.subpaths == [[Point(0, 0), Point(1, 1)]]

    text = Text((0, 0), 'x')
    dup_text = text.clone()
    text.font.size = 30
    text.content = 'y'
    assert dup_text.font.size == 12
    assert dup_text.content == 'x'

    circle = Circle((0, 0), 2, node_id='c')
    dup_circle = circle.clone()
    circle.offset((1, 1))
    circle.id = 'other'
    assert dup_circle.serialize(layout) == Circle(
        (0, 0), 2, node_id='c'
    ).serialize(layout)


def test_clone_shares_markers() -> None:
    marker = Marker('m', shape=Circle((0, 0), 1))
    polyline = Polyline([(0, 0), (1, 1)])
    polyline.set_end_marker(marker)
    dup = polyline.clone()
    polyline << (2, 2)
    assert dup.marker_end is marker
    assert len(dup.points) == 2


def test_color_shapes_accept_names(layout: Layout) -> None:
    attrs = attrs_of(Circle((0, 0), 2, Color(1, 2, 3)).serialize(layout))
    assert attrs['fill'] == 'rgb(1,2,3)'
