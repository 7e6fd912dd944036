"""Disjoint sets tracking component size and internal difference."""

from __future__ import annotations


class UnionFind:
    """Union-find over ``n`` elements with size and internal-difference bookkeeping."""

    def __init__(self, n: int) -> None:
        self._parent = list(range(n))
        self._rank = [0] * n
        self._size = [1] * n
        self._internal = [0.0] * n

    def __len__(self) -> int:
        return len(self._parent)

    def find(self, u: int) -> int:
        """Root of ``u``'s set, compressing the path on the way."""
        root = u
        while self._parent[root] != root:
            root = self._parent[root]
        while self._parent[u] != root:
            self._parent[u], u = root, self._parent[u]
        return root

    def _link(self, a: int, b: int) -> int:
        if self._rank[a] < self._rank[b]:
            a, b = b, a
        self._parent[b] = a
        self._size[a] += self._size[b]
        if self._rank[a] == self._rank[b]:
            self._rank[a] += 1
        return a

    def join(self, u: int, v: int, weight: float, k: float) -> bool:
        """Merge the sets of ``u`` and ``v`` if ``weight`` is within their tolerance."""
        pu, pv = self.find(u), self.find(v)
        if pu == pv:
            return False
        threshold = min(
            self._internal[pu] + k / self._size[pu],
            self._internal[pv] + k / self._size[pv],
        )
        if weight > threshold:
            return False
        merged = max(weight, self._internal[pu], self._internal[pv])
        root = self._link(pu, pv)
        self._internal[root] = merged
        return True

    def force_join(self, u: int, v: int) -> None:
        """Merge the sets of ``u`` and ``v`` unconditionally."""
        pu, pv = self.find(u), self.find(v)
        if pu == pv:
            return
        merged = max(self._internal[pu], self._internal[pv])
        root = self._link(pu, pv)
        self._internal[root] = merged

    def size_of(self, u: int) -> int:
        """Number of elements in ``u``'s set."""
        return self._size[self.find(u)]

    def internal_diff(self, u: int) -> float:
        """Largest edge weight merged into ``u``'s set."""
        return self._internal[self.find(u)]