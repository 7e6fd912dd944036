import pytest

from iftgraph.graph import UndirectedGraph
from iftgraph.segmentation import group_components, segment_graph


@pytest.fixture
def two_clusters():
    g = UndirectedGraph()
    for label in "ABCD":
        g.add_vertex(label)
    g.add_edge("A", "B", 1.0)
    g.add_edge("C", "D", 1.0)
    g.add_edge("B", "C", 100.0)
    return g


def test_strong_edge_separates_clusters(two_clusters):
    ids = segment_graph(two_clusters, 10.0, 1)
    assert len(ids) == 4
    assert ids[0] == ids[1]
    assert ids[2] == ids[3]
    assert ids[1] != ids[2]


def test_min_size_forces_merge(two_clusters):
    ids = segment_graph(two_clusters, 10.0, 3)
    assert len(set(ids)) == 1


def test_ids_are_roots(two_clusters):
    ids = segment_graph(two_clusters, 10.0, 1)
    assert all(ids[root] == root for root in ids)


def test_group_components(two_clusters):
    ids = segment_graph(two_clusters, 10.0, 1)
    groups = group_components(two_clusters, ids)
    assert sorted(groups.values()) == [["A", "B"], ["C", "D"]]
    assert set(groups) == set(ids)


def test_no_edges_leaves_singletons():
    g = UndirectedGraph()
    for label in "XYZ":
        g.add_vertex(label)
    assert segment_graph(g, 5.0, 1) == [0, 1, 2]


def test_inactive_vertex_raises(two_clusters):
    two_clusters.remove_vertex("D")
    with pytest.raises(ValueError):
        segment_graph(two_clusters, 10.0, 1)