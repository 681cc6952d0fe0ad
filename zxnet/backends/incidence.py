"""Sparse incidence-matrix backend.

Rows are vertex slots, columns are edge slots. An entry holds the number of
edge-ends the edge has at the vertex: 1 per endpoint of an ordinary edge, 2
for a self-loop, so a row sum is the vertex degree.
"""

from __future__ import annotations

import numpy as np
import scipy.sparse as sp

from ..core.graph import CartesianGraph, GroundGraph
from ..core.handles import EdgeIx, SlotTable, VertexIx

__all__ = ["IncidenceGraph"]


class IncidenceGraph(CartesianGraph, GroundGraph):
    """ZX diagram stored as a DOK (Dictionary Of Keys) incidence matrix.

    Parameters
    ----------
    n : int, optional
        Vertex capacity to pre-size the matrix with.
    e : int, optional
        Edge capacity to pre-size the matrix with.
    history : bool, default True
        Record mutating calls in the in-memory history.

    Notes
    -----
    - The matrix grows geometrically; capacity never shrinks.
    - Neighbourhood queries read a per-vertex index of the nonzero entries of
      its row, kept in step with the matrix, so they cost O(degree) and never
      convert the matrix.
    - :meth:`incidence_matrix` goes through a CSR (Compressed Sparse Row)
      copy that is rebuilt lazily after each structural write.

    """

    BACKEND = "incidence"

    def __init__(self, n: int = 0, e: int = 0, history: bool = True):
        self._vslots = SlotTable(VertexIx)
        self._eslots = SlotTable(EdgeIx)
        self._vdata = {}  # vertex slot -> payload
        self._edata = {}  # edge slot -> payload
        self._ends = {}  # edge slot -> (VertexIx, VertexIx)
        self._rows = {}  # vertex slot -> {edge slot: entry}, mirrors the matrix row

        # pre-size the incidence matrix to capacity (no zeros allocated in DOK)
        n = int(n) if n and n > 0 else 0
        e = int(e) if e and e > 0 else 0
        self._matrix = sp.dok_matrix((n, e), dtype=np.int8)
        self._csr = None
        super().__init__(history=history)

    def _new_empty(self):
        return IncidenceGraph(history=self._history_enabled)

    # grow-only helpers to avoid per-insert exact resizes
    def _grow_rows_to(self, target: int):
        rows, cols = self._matrix.shape
        if target > rows:
            # geometric bump; reduces churn
            self._matrix.resize((max(target, rows + max(8, rows >> 1)), cols))

    def _grow_cols_to(self, target: int):
        rows, cols = self._matrix.shape
        if target > cols:
            self._matrix.resize((rows, max(target, cols + max(8, cols >> 1))))

    def _csr_matrix(self):
        if self._csr is None:
            self._csr = self._matrix.tocsr()
        return self._csr

    def _set_entry(self, r: int, c: int, value: int):
        # assigning 0 deletes the DOK key
        self._matrix[r, c] = value
        if value:
            self._rows[r][c] = value
        else:
            self._rows[r].pop(c, None)

    def incidence_matrix(self):
        """Vertex-slot by edge-slot incidence matrix as a CSR copy.

        Rows of removed vertices and columns of removed edges are zero.
        """
        return self._csr_matrix()[: self._vslots.capacity, : self._eslots.capacity].copy()

    # ==================== Storage primitives ====================

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
        return self._vdata[v.index] if self._vslots.is_live(v) else None

    def edge_mut(self, e):
        return self._edata[e.index] if self._eslots.is_live(e) else None

    def edge_endpoints(self, e):
        return self._ends[e.index] if self._eslots.is_live(e) else None

    def _incident(self, v):
        for col, count in sorted(self._rows[v.index].items()):
            e = self._eslots.handle_at(col)
            a, b = self._ends[col]
            w = b if a == v else a
            for _ in range(count):
                yield e, w

    def vertex_degree(self, v) -> int:
        if not self._vslots.is_live(v):
            return 0
        return sum(self._rows[v.index].values())

    def _store_vertex(self, data):
        v = self._vslots.allocate()
        self._grow_rows_to(v.index + 1)
        self._vdata[v.index] = data
        self._rows[v.index] = {}
        self._csr = None
        return v

    def _store_edge(self, v, u, data):
        e = self._eslots.allocate()
        self._grow_cols_to(e.index + 1)
        if v == u:
            self._set_entry(v.index, e.index, 2)
        else:
            self._set_entry(v.index, e.index, 1)
            self._set_entry(u.index, e.index, 1)
        self._edata[e.index] = data
        self._ends[e.index] = (v, u)
        self._csr = None
        return e

    def _drop_vertex(self, v):
        del self._vdata[v.index]
        del self._rows[v.index]
        self._vslots.release(v)
        self._csr = None

    def _drop_edge(self, e):
        a, b = self._ends.pop(e.index)
        self._set_entry(a.index, e.index, 0)
        self._set_entry(b.index, e.index, 0)
        del self._edata[e.index]
        self._eslots.release(e)
        self._csr = None
