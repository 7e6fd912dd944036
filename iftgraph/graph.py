"""Adjacency-list graphs with labelled vertices and weighted edges."""

from __future__ import annotations

import heapq
import math
from collections import deque
from dataclasses import dataclass


@dataclass
class Vertex:
    """A labelled vertex; removed vertices stay in place but become inactive."""

    label: str
    heuristic_weight: float = 0.0
    active: bool = True


@dataclass(frozen=True)
class Edge:
    """An outgoing edge towards the vertex at index ``to``."""

    to: int
    weight: float = 1.0

    def __str__(self) -> str:
        return f"({self.to} ,{self.weight:g}); "


class EdgeNotFoundError(LookupError):
    """Raised when an edge to be removed does not exist."""


class Graph:
    """Base graph holding vertices and adjacency lists indexed by position."""

    def __init__(self) -> None:
        self._adjacency: list[list[Edge]] = []
        self._vertices: list[Vertex] = []
        self._index: dict[str, int] = {}
        self._length = 0

    def _require(self, label: str, role: str = "Vertex") -> int:
        try:
            return self._index[label]
        except KeyError:
            raise ValueError(f"{role} '{label}' does not exist.") from None

    def add_vertex(self, label: str, heuristic_weight: float = 0.0) -> int:
        """Add a vertex and return its index; an existing label keeps its index."""
        if label in self._index:
            return self._index[label]
        index = len(self._vertices)
        self._vertices.append(Vertex(label, heuristic_weight))
        self._index[label] = index
        self._adjacency.append([])
        self._length += 1
        return index

    def remove_vertex(self, label: str) -> None:
        """Deactivate a vertex and drop every edge touching it."""
        index = self._require(label)
        self._vertices[index].active = False
        self._adjacency[index].clear()
        for edges in self._adjacency:
            edges[:] = [edge for edge in edges if edge.to != index]
        del self._index[label]
        self._length -= 1

    def __len__(self) -> int:
        return self._length

    def __str__(self) -> str:
        lines = []
        for vertex, edges in zip(self._vertices, self._adjacency):
            if not vertex.active:
                continue
            described = "".join(
                f"({self._vertices[edge.to].label}, {edge.weight:g}); " for edge in edges
            )
            lines.append(f"{vertex.label}: {described}")
        return "\n".join(lines)

    def neighbors(self, label: str) -> list[str]:
        """Labels of the vertices reached by the outgoing edges of ``label``."""
        index = self._require(label)
        return [self._vertices[edge.to].label for edge in self._adjacency[index]]

    def edges_of(self, index: int) -> list[Edge]:
        """Outgoing edges of the active vertex at ``index``."""
        if index < 0:
            raise ValueError("Vertex index cannot be negative.")
        if index >= len(self._vertices):
            raise ValueError(f"Vertex index '{index}' is out of bounds.")
        if not self._vertices[index].active:
            raise ValueError(f"Vertex at position '{index}' is inactive.")
        return list(self._adjacency[index])

    def label_to_index(self) -> dict[str, int]:
        """A copy of the mapping from live labels to vertex indices."""
        return dict(self._index)

    def vertices(self) -> list[Vertex]:
        """All vertices ever added, including inactive ones, in index order."""
        return list(self._vertices)

    def _reconstruct(
        self, parents: list[int], distances: list[float], source: int, target: int
    ) -> list[str]:
        stop = parents[source]
        path = []
        current = target
        while current != stop:
            path.append(self._vertices[current].label)
            current = parents[current]
        path.append(self._vertices[current].label)
        path.reverse()
        return path

    def dijkstra(self, source: str, target: str) -> tuple[list[str], float]:
        """Shortest weighted path; ``([], inf)`` when the target is unreachable."""
        start = self._require(source)
        goal = self._require(target)
        count = len(self._adjacency)
        distances = [math.inf] * count
        parents = [0] * count
        visited = [False] * count

        distances[start] = 0.0
        parents[start] = start
        heap: list[tuple[float, int, int]] = [(0.0, start, start)]

        while heap:
            dist, u, _ = heapq.heappop(heap)
            visited[u] = True
            if u == goal:
                break
            for edge in self._adjacency[u]:
                candidate = dist + edge.weight
                if not visited[edge.to] and distances[edge.to] > candidate:
                    distances[edge.to] = candidate
                    parents[edge.to] = u
                    heapq.heappush(heap, (candidate, edge.to, u))

        if not visited[goal]:
            return [], math.inf
        return self._reconstruct(parents, distances, start, goal), distances[goal]

    def _hop_search(self, source: str, target: str, depth_first: bool) -> tuple[list[str], float]:
        start = self._require(source)
        goal = self._require(target)
        count = len(self._adjacency)
        hops = [0.0] * count
        parents = [0] * count
        parents[start] = start
        visited = [False] * count

        frontier: deque[int] = deque([start])
        while frontier:
            u = frontier.pop() if depth_first else frontier.popleft()
            visited[u] = True
            if u == goal:
                break
            for edge in self._adjacency[u]:
                if not visited[edge.to]:
                    frontier.append(edge.to)
                    hops[edge.to] = hops[u] + 1
                    parents[edge.to] = u

        if not visited[goal]:
            return [], math.inf
        return self._reconstruct(parents, hops, start, goal), int(hops[goal])

    def dfs(self, source: str, target: str) -> tuple[list[str], float]:
        """Depth-first path and its hop count; ``([], inf)`` when unreachable."""
        return self._hop_search(source, target, depth_first=True)

    def bfs(self, source: str, target: str) -> tuple[list[str], float]:
        """Breadth-first path and its hop count; ``([], inf)`` when unreachable."""
        return self._hop_search(source, target, depth_first=False)


class DirectedGraph(Graph):
    """Graph whose edges go one way."""

    def add_edge(self, source: str, target: str, weight: float = 1.0) -> None:
        start = self._require(source, "Origin vertex")
        end = self._require(target, "Destiny vertex")
        self._adjacency[start].append(Edge(end, weight))

    def remove_edge(self, source: str, target: str) -> None:
        start = self._require(source, "Origin vertex")
        end = self._require(target, "Destiny vertex")
        edges = self._adjacency[start]
        before = len(edges)
        edges[:] = [edge for edge in edges if edge.to != end]
        if len(edges) == before:
            raise EdgeNotFoundError(f"Edge {source} -> {target} not found")


class UndirectedGraph(Graph):
    """Graph whose edges are stored in both directions."""

    def add_edge(self, source: str, target: str, weight: float = 1.0) -> None:
        start = self._require(source, "Origin vertex")
        end = self._require(target, "Destiny vertex")
        self._adjacency[start].append(Edge(end, weight))
        self._adjacency[end].append(Edge(start, weight))

    def remove_edge(self, source: str, target: str) -> None:
        start = self._require(source, "Origin vertex")
        end = self._require(target, "Destiny vertex")
        for here, there in ((start, end), (end, start)):
            edges = self._adjacency[here]
            before = len(edges)
            edges[:] = [edge for edge in edges if edge.to != there]
            if len(edges) == before:
                raise EdgeNotFoundError(f"Edge {source} <-> {target} not found")