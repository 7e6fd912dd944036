"""Build pixel-adjacency graphs from grey and RGB images."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence
from typing import TypeVar

from .graph import UndirectedGraph

_T = TypeVar("_T")


def _rgb_distance(a: Sequence[int], b: Sequence[int]) -> float:
    return math.sqrt(sum((int(p) - int(q)) ** 2 for p, q in zip(a, b)))


def _gray_distance(a: int, b: int) -> float:
    return float(abs(int(a) - int(b)))


def _build(
    image: Sequence[Sequence[_T]],
    graph: UndirectedGraph,
    eight_connected: bool,
    distance: Callable[[_T, _T], float],
) -> UndirectedGraph:
    if not image or not image[0]:
        raise ValueError("image must not be empty")
    rows, cols = len(image), len(image[0])

    offsets = [(0, 1), (1, 0)]
    if eight_connected:
        offsets += [(1, 1), (-1, 1)]

    for y, row in enumerate(image):
        for x, value in enumerate(row):
            label_u = str(y * cols + x)
            graph.add_vertex(label_u)
            for dy, dx in offsets:
                ny, nx = y + dy, x + dx
                if 0 <= ny < rows and 0 <= nx < cols:
                    label_v = str(ny * cols + nx)
                    weight = distance(value, image[ny][nx])
                    graph.add_vertex(label_v)
                    graph.add_edge(label_u, label_v, weight)
    return graph


def image_to_graph_rgb(
    image: Sequence[Sequence[Sequence[int]]],
    graph: UndirectedGraph,
    eight_connected: bool = False,
) -> UndirectedGraph:
    """Add one vertex per RGB pixel, linked by Euclidean colour distance."""
    return _build(image, graph, eight_connected, _rgb_distance)


def image_to_graph_gray(
    image: Sequence[Sequence[int]],
    graph: UndirectedGraph,
    eight_connected: bool = False,
) -> UndirectedGraph:
    """Add one vertex per grey pixel, linked by absolute intensity difference."""
    return _build(image, graph, eight_connected, _gray_distance)