"""An undirected multigraph with a fixed edge budget, used to build hash functions."""

from __future__ import annotations

from typing import Iterator, Optional


class Graph:
    """An undirected graph of ``nnodes`` vertices holding up to ``nedges`` edges.

    Edge ``e`` occupies two slots: slot ``e`` in the adjacency list of its
    first endpoint and slot ``e + nedges`` in that of its second. Each slot
    stores the vertex at the other end.
    """

    def __init__(self, nnodes: int, nedges: int) -> None:
        if nnodes < 0 or nedges < 0:
            raise ValueError("node and edge counts must be non-negative")
        self.nnodes = nnodes
        self.nedges = nedges
        self._critical: set[int] = set()
        self.clear_edges()

    def _abs_edge(self, e: int, i: int) -> int:
        return e % self.nedges + i * self.nedges

    def _slots(self, v: int) -> Iterator[int]:
        slot = self._first[v]
        while slot is not None:
            yield slot
            slot = self._next[slot]

    def _check_edge(self, slot: int, v1: int, v2: int) -> bool:
        a = self._edges[self._abs_edge(slot, 0)]
        b = self._edges[self._abs_edge(slot, 1)]
        return (a == v1 and b == v2) or (a == v2 and b == v1)

    def clear_edges(self) -> None:
        """Remove every edge and allow additions again."""
        self._first: list[Optional[int]] = [None] * self.nnodes
        self._edges: list[Optional[int]] = [None] * (2 * self.nedges)
        self._next: list[Optional[int]] = [None] * (2 * self.nedges)
        self._cedges = 0
        self._shrinking = False

    def add_edge(self, v1: int, v2: int) -> None:
        if not (0 <= v1 < self.nnodes and 0 <= v2 < self.nnodes):
            raise ValueError(f"vertex out of range: ({v1}, {v2})")
        if self._cedges >= self.nedges:
            raise IndexError("graph already holds all its edges")
        if self._shrinking:
            raise RuntimeError("cannot add edges after an edge was deleted")
        e = self._cedges
        self._next[e] = self._first[v1]
        self._first[v1] = e
        self._edges[e] = v2
        back = e + self.nedges
        self._next[back] = self._first[v2]
        self._first[v2] = back
        self._edges[back] = v1
        self._cedges += 1

    def edge_id(self, v1: int, v2: int) -> int:
        """Return the id of the most recently added edge joining ``v1`` and ``v2``."""
        for slot in self._slots(v1):
            if self._check_edge(slot, v1, v2):
                return self._abs_edge(slot, 0)
        raise KeyError((v1, v2))

    def contains_edge(self, v1: int, v2: int) -> bool:
        return any(self._check_edge(slot, v1, v2) for slot in self._slots(v1))

    def _del_edge_point(self, v1: int, v2: int) -> None:
        prev: Optional[int] = None
        for slot in self._slots(v1):
            if self._check_edge(slot, v1, v2):
                if prev is None:
                    self._first[v1] = self._next[slot]
                else:
                    self._next[prev] = self._next[slot]
                return
            prev = slot
        raise KeyError((v1, v2))

    def del_edge(self, v1: int, v2: int) -> None:
        """Unlink one edge between ``v1`` and ``v2``; no edges may be added afterwards."""
        self._shrinking = True
        self._del_edge_point(v1, v2)
        self._del_edge_point(v2, v1)

    def _find_degree1_edge(self, v: int, deleted: set[int]) -> Optional[int]:
        found: Optional[int] = None
        for slot in self._slots(v):
            if self._abs_edge(slot, 0) in deleted:
                continue
            if found is not None:
                return None
            found = slot
        return found

    def _cyclic_del_edge(self, v: int, deleted: set[int]) -> None:
        v1 = v
        slot = self._find_degree1_edge(v1, deleted)
        while slot is not None:
            deleted.add(self._abs_edge(slot, 0))
            v2 = self._edges[self._abs_edge(slot, 0)]
            if v2 == v1:
                v2 = self._edges[self._abs_edge(slot, 1)]
            slot = self._find_degree1_edge(v2, deleted)
            v1 = v2

    def _peel(self) -> set[int]:
        deleted: set[int] = set()
        for v in range(self.nnodes):
            self._cyclic_del_edge(v, deleted)
        return deleted

    def is_cyclic(self) -> bool:
        """Return whether peeling degree-1 vertices leaves any edge slot behind.

        Edge slots that were never filled are never peeled, so a graph holding
        fewer than ``nedges`` edges reports a cycle.
        """
        deleted = self._peel()
        return any(e not in deleted for e in range(self.nedges))

    def obtain_critical_nodes(self) -> None:
        """Mark the vertices of the graph's 2-core as critical."""
        deleted = self._peel()
        self._critical = set()
        for e in range(self.nedges):
            if e in deleted:
                continue
            for endpoint in (self._edges[e], self._edges[e + self.nedges]):
                if endpoint is not None:
                    self._critical.add(endpoint)

    def node_is_critical(self, v: int) -> bool:
        return v in self._critical

    def ncritical_nodes(self) -> int:
        return len(self._critical)

    def vertex_id(self, e: int, id: int) -> Optional[int]:
        """Return endpoint ``id`` (0 or 1) of edge ``e``."""
        return self._edges[e + id * self.nedges]

    def neighbors(self, v: int) -> Iterator[int]:
        """Yield the neighbours of ``v``, most recently added edge first."""
        for slot in self._slots(v):
            other = self._edges[slot]
            if other == v:
                other = self._edges[(slot + self.nedges) % (2 * self.nedges)]
            yield other

    def describe(self) -> str:
        """Return one ``a -> b`` line per edge slot, vertex by vertex."""
        lines = [
            f"{self._edges[self._abs_edge(slot, 0)]} -> {self._edges[self._abs_edge(slot, 1)]}"
            for v in range(self.nnodes)
            for slot in self._slots(v)
        ]
        return "\n".join(lines)