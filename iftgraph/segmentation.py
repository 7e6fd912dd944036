"""Graph-based segmentation by sorted-edge merging with a size floor."""

from __future__ import annotations

from .graph import UndirectedGraph
from .union_find import UnionFind


def segment_graph(graph: UndirectedGraph, k: float, min_size: int) -> list[int]:
    """Component root for every vertex index of ``graph``.

    Edges are merged in ascending weight order when they fall within the
    components' tolerance ``k``; a second pass merges any component smaller
    than ``min_size`` with its neighbour.
    """
    count = len(graph.vertices())
    sets = UnionFind(count)

    edges = sorted(
        (edge.weight, u, edge.to)
        for u in range(count)
        for edge in graph.edges_of(u)
        if u < edge.to
    )

    for weight, u, v in edges:
        sets.join(u, v, weight, k)

    for _, u, v in edges:
        root_u, root_v = sets.find(u), sets.find(v)
        if root_u != root_v and (
            sets.size_of(root_u) < min_size or sets.size_of(root_v) < min_size
        ):
            sets.force_join(root_u, root_v)

    return [sets.find(i) for i in range(count)]


def group_components(graph: UndirectedGraph, component_ids: list[int]) -> dict[int, list[str]]:
    """Vertex labels grouped by component root, in vertex order."""
    vertices = graph.vertices()
    components: dict[int, list[str]] = {}
    for vertex, root in zip(vertices, component_ids):
        components.setdefault(root, []).append(vertex.label)
    return components