"""Test low level markup helpers."""

from __future__ import annotations

import random

import pytest

from svgwriter import svg
from svgwriter.shapes import Identifiable


def test_namespace() -> None:
    assert svg.svg_ns('rect') == '{http://www.w3.org/2000/svg}rect'
    assert svg.strip_ns(svg.svg_ns('rect')) == 'rect'
    assert svg.strip_ns('rect') == 'rect'


def test_create_element() -> None:
    root = svg.create_element('svg', {'width': '1px'})
    child = svg.create_element('g', {'id': 'g1'}, root)
    assert child.getparent() is root
    assert svg.tostring(root) == (
        '<svg xmlns="http://www.w3.org/2000/svg" width="1px">'
        '<g id="g1"/></svg>'
    )


def test_attrs_to_string() -> None:
    assert svg.attrs_to_string({}) == ''
    assert svg.attrs_to_string({'a': '1', 'b': 'x"y <&>'}) == (
        'a="1" b="x&quot;y &lt;&amp;&gt;"'
    )


def test_random_id(rng: random.Random) -> None:
    node_id = svg.random_id('m', 6, rng)
    assert len(node_id) == 7
    assert node_id.startswith('m')
    assert node_id[1:].isalnum()
    assert node_id == svg.random_id('m', 6, random.Random(42))

    assert len(Identifiable.random_id()) == 8
    assert Identifiable.random_id(rng=random.Random(1)) == (
        Identifiable.random_id(rng=random.Random(1))
    )


def test_id_attrs() -> None:
    assert Identifiable().id_attrs() == {}
    assert Identifiable('a').id_attrs() == {'id': 'a'}


def test_xml_safe(caplog: pytest.LogCaptureFixture) -> None:
    assert svg.xml_safe('tab\tand\nnewline') == 'tab\tand\nnewline'
    assert not caplog.records
    assert svg.xml_safe('line\x0bfeed\x00', 'Text()') == 'linefeed'
    assert 'Removed characters not allowed in XML from Text()' in caplog.text


def test_invalid_attribute_characters(
    caplog: pytest.LogCaptureFixture,
) -> None:
    node = svg.create_element('g', {'id': 'a\x01b', 'style': 'fill:red\x1f'})
    assert node.get('id') == 'ab'
    assert node.get('style') == 'fill:red'
    assert '<g id>' in caplog.text
    assert svg.attrs_to_string({'font-family': 'x\x02'}) == 'font-family="x"'
