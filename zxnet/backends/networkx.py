"""Reference backend over a NetworkX multigraph.

Vertex and edge handles are slot indices with a generation tag (see
:class:`~zxnet.core.handles.SlotTable`). The NetworkX graph is keyed by the
bare slot index: node ``i`` holds the payload of vertex slot ``i`` and the
edge with key ``k`` holds the payload of edge slot ``k``.
"""

from __future__ import annotations

import networkx as nx

from ..core.graph import CartesianGraph, GroundGraph
from ..core.handles import EdgeIx, SlotTable, VertexIx

__all__ = ["NxGraph"]


class NxGraph(CartesianGraph, GroundGraph):
    """ZX diagram stored in a :class:`networkx.MultiGraph`.

    Parameters
    ----------
    history : bool, default True
        Record mutating calls in the in-memory history.

    """

    BACKEND = "networkx"

    def __init__(self, history: bool = True):
        self._g = nx.MultiGraph()
        self._vslots = SlotTable(VertexIx)
        self._eslots = SlotTable(EdgeIx)
        self._ends = {}  # edge slot -> (VertexIx, VertexIx)
        super().__init__(history=history)

    def num_vertices(self) -> int:
        return len(self._vslots)

    def num_edges(self) -> int:
        return len(self._eslots)

    def vertices(self):
        return iter(self._vslots)

    def edges(self):
        return iter(self._eslots)

    def has_vertex(self, v) -> bool:
        return self._vslots.is_live(v)

    def has_edge(self, e) -> bool:
        return self._eslots.is_live(e)

    def vertex_mut(self, v):
        if not self._vslots.is_live(v):
            return None
        return self._g.nodes[v.index]["data"]

    def edge_mut(self, e):
        if not self._eslots.is_live(e):
            return None
        a, b = self._ends[e.index]
        return self._g.edges[a.index, b.index, e.index]["data"]

    def edge_endpoints(self, e):
        if not self._eslots.is_live(e):
            return None
        return self._ends[e.index]

    def _incident(self, v):
        vertex_at, edge_at = self._vslots.handle_at, self._eslots.handle_at
        for nbr, keys in self._g.adj[v.index].items():
            w = vertex_at(nbr)
            for key in keys:
                e = edge_at(key)
                yield e, w
                if nbr == v.index:
                    # second end of a self-loop
                    yield e, w

    def vertex_degree(self, v) -> int:
        if not self._vslots.is_live(v):
            return 0
        # networkx counts self-loops twice, matching _incident
        return self._g.degree(v.index)

    def connected(self, v, u) -> bool:
        if not (self._vslots.is_live(v) and self._vslots.is_live(u)):
            return False
        return self._g.has_edge(v.index, u.index)

    def _store_vertex(self, data):
        v = self._vslots.allocate()
        self._g.add_node(v.index, data=data)
        return v

    def _store_edge(self, v, u, data):
        e = self._eslots.allocate()
        self._g.add_edge(v.index, u.index, key=e.index, data=data)
        self._ends[e.index] = (v, u)
        return e

    def _drop_vertex(self, v):
        self._g.remove_node(v.index)
        self._vslots.release(v)

    def _drop_edge(self, e):
        a, b = self._ends.pop(e.index)
        self._g.remove_edge(a.index, b.index, key=e.index)
        self._eslots.release(e)
