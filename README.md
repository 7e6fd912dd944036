# iftgraph

Graph and image-segmentation tools in pure Python. The package has no third-party dependencies. It provides:

- adjacency-list graphs (`DirectedGraph`, `UndirectedGraph`) with Dijkstra, depth-first and breadth-first path search;
- graph-based segmentation of images, using union-find with an internal-difference merge criterion and a minimum component size;
- the Image Foresting Transform (IFT) on greyscale images. It computes a forest of optimum paths (predecessor, cost, label) from seed pixels, under additive or max path-cost functions.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Graphs

```python
from iftgraph.graph import DirectedGraph, UndirectedGraph

g = DirectedGraph()
for label in ("A", "B", "C"):
    g.add_vertex(label)
g.add_edge("A", "B", 2.0)
g.add_edge("B", "C", 1.5)
g.add_edge("A", "C", 5.0)

path, cost = g.dijkstra("A", "C")   # (["A", "B", "C"], 3.5)
g.neighbors("A")                    # ["B", "C"]
len(g)                              # 3
print(g)                            # one line per active vertex with its edges
```

- `add_vertex` returns the vertex index. If the label already exists, it returns the existing index.
- `remove_vertex` marks the vertex inactive and drops every edge that points to it. After that, the label can be added again as a new vertex.
- `dijkstra`, `dfs` and `bfs` return a path of labels and its cost. For `dfs` and `bfs` the cost is the hop count. When the target cannot be reached they return `([], inf)`.
- Naming an unknown vertex raises `ValueError`.
- Removing an edge that does not exist raises `EdgeNotFoundError`.
- In an `UndirectedGraph`, every edge is stored in both directions.

## Segmenting an image through a graph

```python
from iftgraph.graph import UndirectedGraph
from iftgraph.image_to_graph import image_to_graph_gray
from iftgraph.segmentation import segment_graph, group_components

pixels = [
    [10, 12, 200, 201],
    [11, 13, 199, 202],
]
graph = UndirectedGraph()
image_to_graph_gray(pixels, graph, False)
ids = segment_graph(graph, 50.0, 1)    # one component root per pixel, row-major
components = group_components(graph, ids)
```

Each pixel becomes a vertex labelled with its row-major index. `image_to_graph_rgb` does the same for rows of `(r, g, b)` triples and weights each edge by the Euclidean colour distance. The `UnionFind` class in `iftgraph.union_find` is the disjoint-set structure behind `segment_graph`.

## Image Foresting Transform

```python
from iftgraph.image import Image
from iftgraph.seed_set import SeedSet
from iftgraph.path_cost import intensity_difference_sum
from iftgraph.ift import IFTAlgorithm, quick_ift

image = Image.from_rows([
    [0, 0, 100, 100],
    [0, 0, 100, 100],
])
seeds = SeedSet()
seeds.add(image.pixel(0, 0), 1, 0.0, "left")
seeds.add(image.pixel(3, 1), 2, 0.0, "right")

result = quick_ift(image, intensity_difference_sum(), seeds, False)
result.label(image.pixel(1, 1))    # 1
result.label(image.pixel(2, 0))    # 2
result.optimal_path(image.pixel(2, 0))

algorithm = IFTAlgorithm()
result = algorithm.run(image, intensity_difference_sum(), seeds)
algorithm.validate(result, image, intensity_difference_sum(), seeds)
print(algorithm.last_stats())
```

`IFTAlgorithm.run_to_target` stops as soon as a given pixel is settled. `generate_automatic_seeds` in `iftgraph.seed_set` spreads labelled seeds over an image. `IFTResult` (in `iftgraph.ift_result`) offers:

- path queries;
- `segmentation_image` and `cost_image`;
- statistics and a text `summary`.

`visualize_forest` draws the forest as ASCII, and `Image.save_pgm` writes a plain-text PGM file.

Path-cost functions come from factories:

- `intensity_difference_sum` and `intensity_difference_max`;
- `watershed_sum` and `watershed_max`;
- `constant_sum` and `constant_max`.

You can also build one by combining `AdditivePathCost` or `MaxPathCost` with an `ArcWeightStrategy`: `IntensityDifferenceWeight`, `GradientWeight`, `ConstantWeight` or `DestinationIntensityWeight`.

`iftgraph.bucket_queue` provides these priority queues for integer and near-integer costs:

- `BucketQueue`;
- `DiscretizedBucketQueue`;
- `HybridPriorityQueue`;
- `benchmark_priority_queues`, which times the three.

The IFT algorithm itself uses a binary heap.

## What the package does not do

- It has no command-line program.
- It does not read image files such as PNG or JPEG, blur them, or show results in a window. Images are built from lists of intensities, and the only file output is `Image.save_pgm`.
- It has only the basic IFT algorithm. There are no bucket-queue-driven or tie-breaking variants of it.