"""Pytest fixtures."""

from __future__ import annotations

import random

import pytest
from lxml import etree

from svgwriter import svg
from svgwriter.geometry import Dimensions, Layout, Origin


@pytest.fixture
def layout() -> Layout:
    """A 400x300 layout that doesn't translate or scale coordinates."""
    return Layout(Dimensions(400, 300), Origin.TOP_LEFT)


@pytest.fixture
def rng() -> random.Random:
    """A seeded random number generator."""
    return random.Random(42)


def parse(markup: str) -> svg.TElement:
    """Parse SVG markup (a fragment or a complete document)."""
    return etree.fromstring(markup.encode('utf-8'))


def children_tags(node: svg.TElement) -> list[str]:
    """Tag names of the node's children without namespace."""
    return [svg.strip_ns(child.tag) for child in node]
