"""Tabular, matrix and NetworkX views of any backend.

All views are computed through the :class:`~zxnet.core.graph.BaseGraph`
contract, so they work the same on every backend.
"""

import networkx as nx
import numpy as np
import polars as pl
import scipy.sparse as sp

from .data import GroundData, PositionData

__all__ = ["vertices_view", "edges_view", "degree_table", "adjacency_matrix", "to_networkx"]

_VERTEX_SCHEMA = {
    "index": pl.Int64,
    "generation": pl.Int64,
    "kind": pl.Utf8,
    "phase": pl.Utf8,
    "ground": pl.Boolean,
    "qubit": pl.Int64,
    "row": pl.Int64,
    "is_input": pl.Boolean,
    "is_output": pl.Boolean,
    "degree": pl.Int64,
}

_EDGE_SCHEMA = {
    "index": pl.Int64,
    "generation": pl.Int64,
    "source": pl.Int64,
    "target": pl.Int64,
    "kind": pl.Utf8,
}


def vertices_view(graph):
    """Build a Polars DF [DataFrame] with one row per vertex.

    Parameters
    ----------
    graph : BaseGraph

    Returns
    -------
    polars.DataFrame
        Columns: ``index``, ``generation``, ``kind``, ``phase`` (rational
        multiple of pi as text), ``ground``, ``qubit``, ``row``,
        ``is_input``, ``is_output``, ``degree``.

    """
    cols = {k: [] for k in _VERTEX_SCHEMA}
    for v in graph.vertices():
        d = graph.vertex_mut(v)
        cols["index"].append(v.index)
        cols["generation"].append(v.generation)
        cols["kind"].append(d.kind.name)
        cols["phase"].append(str(d.phase.fraction))
        cols["ground"].append(d.ground if isinstance(d, GroundData) else False)
        cols["qubit"].append(d.qubit if isinstance(d, PositionData) else -1)
        cols["row"].append(d.row if isinstance(d, PositionData) else -1)
        cols["is_input"].append(graph.is_input(v))
        cols["is_output"].append(graph.is_output(v))
        cols["degree"].append(graph.vertex_degree(v))
    return pl.DataFrame(cols, schema=_VERTEX_SCHEMA)


def edges_view(graph):
    """Build a Polars DF [DataFrame] with one row per edge.

    ``source``/``target`` are vertex slot indices, lower first.
    """
    cols = {k: [] for k in _EDGE_SCHEMA}
    for e in graph.edges():
        a, b = graph.edge_endpoints(e)
        cols["index"].append(e.index)
        cols["generation"].append(e.generation)
        cols["source"].append(a.index)
        cols["target"].append(b.index)
        cols["kind"].append(graph.edge_kind(e).name)
    return pl.DataFrame(cols, schema=_EDGE_SCHEMA)


def degree_table(graph):
    """Degree histogram as a Polars DF: columns ``degree``, ``count``, sorted by degree."""
    return (
        vertices_view(graph)
        .group_by("degree")
        .agg(pl.len().cast(pl.Int64).alias("count"))
        .sort("degree")
    )


def adjacency_matrix(graph):
    """Symmetric adjacency matrix of edge multiplicities.

    Rows and columns follow ``graph.vertices()`` order. A self-loop adds 2
    on the diagonal, so row sums equal vertex degrees. The result is cached
    until the graph structure changes; each call returns its own copy, so
    writes to the result never reach the cache.

    Returns
    -------
    scipy.sparse.csr_matrix

    """
    state = graph._state
    entry = state._view_cache.get("adjacency")
    if entry is not None and not state.dirty_since(entry["version"]):
        return entry["matrix"].copy()

    pos = {v: i for i, v in enumerate(graph.vertices())}
    rows, cols, vals = [], [], []
    for e in graph.edges():
        a, b = graph.edge_endpoints(e)
        i, j = pos[a], pos[b]
        if i == j:
            rows.append(i)
            cols.append(i)
            vals.append(2)
        else:
            rows += [i, j]
            cols += [j, i]
            vals += [1, 1]
    n = len(pos)
    # duplicates (parallel edges) are summed by tocsr
    matrix = sp.coo_matrix(
        (np.asarray(vals, dtype=np.int64), (np.asarray(rows, dtype=np.int64), np.asarray(cols, dtype=np.int64))),
        shape=(n, n),
    ).tocsr()
    state._view_cache["adjacency"] = {"matrix": matrix, "version": state.version}
    return matrix.copy()


def to_networkx(graph):
    """Export to a :class:`networkx.MultiGraph`.

    Nodes are the vertex handles with ``kind``, ``phase``, ``ground``,
    ``qubit``, ``row`` attributes; edge keys are the edge handles with a
    ``kind`` attribute. ``G.graph`` carries ``backend``, ``inputs`` and
    ``outputs``.
    """
    # networkx reserves the ``backend`` keyword for dispatching, so graph
    # attributes are set after construction
    G = nx.MultiGraph()
    G.graph["backend"] = graph.BACKEND
    G.graph["inputs"] = list(graph.inputs())
    G.graph["outputs"] = list(graph.outputs())
    for v in graph.vertices():
        d = graph.vertex_mut(v)
        G.add_node(
            v,
            kind=d.kind,
            phase=d.phase,
            ground=d.ground if isinstance(d, GroundData) else False,
            qubit=d.qubit if isinstance(d, PositionData) else -1,
            row=d.row if isinstance(d, PositionData) else -1,
        )
    for e in graph.edges():
        a, b = graph.edge_endpoints(e)
        G.add_edge(a, b, key=e, kind=graph.edge_kind(e))
    return G
