"""Backend-independent contract for open ZX diagrams.

:class:`BaseGraph` is the capability set every storage backend satisfies.
Backends implement a handful of storage primitives (marked abstract below);
everything else, including the structural operators ``adjoint``,
``compose`` and ``tensor``, is written once against those primitives and so
behaves identically on every backend.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterable, Iterator

from ..errors import (
    BoundaryMismatchError,
    CompositionError,
    MissingEdgeError,
    MissingVertexError,
    UnsupportedGroundError,
)
from ._history import HistoryMixin
from ._state import _State
from .data import EdgeData, GroundData, PositionData, VertexData
from .phase import Phase
from .structure import EdgeKind, VertexKind

__all__ = ["BaseGraph", "CartesianGraph", "GroundGraph"]


class BaseGraph(HistoryMixin, ABC):
    """Undirected open multigraph with typed vertices and edges.

    Vertices carry a :class:`VertexKind` and a :class:`Phase`; edges carry an
    :class:`EdgeKind`. Two ordered vertex sequences mark the diagram's inputs
    and outputs. Multi-edges and self-loops are allowed.

    Parameters
    ----------
    history : bool, default True
        Record mutating calls in the in-memory history (see :meth:`history`).

    Notes
    -----
    - Handles are generation tagged: after a removal the old handle no longer
      resolves, even if its slot is reused. Reads through a stale handle give
      ``None`` (or 0 / False); removals of a stale handle are no-ops.
    - Degree convention: every incident edge-end counts once, so a self-loop
      adds 2 to the degree and its vertex appears twice in
      :meth:`neighbours`.
    - Not thread safe. Concurrent mutation needs external locking.

    """

    #: Name of the storage backend.
    BACKEND = "abstract"

    def __init__(self, history: bool = True):
        self._state = _State()
        self._inputs = []
        self._outputs = []
        self._init_history(history)

    # ==================== Storage primitives (backend) ====================

    @abstractmethod
    def num_vertices(self) -> int:
        """Vertex count of the graph."""

    @abstractmethod
    def num_edges(self) -> int:
        """Edge count of the graph."""

    @abstractmethod
    def vertices(self) -> Iterator:
        """Iterate over live vertex handles (fresh iterator per call)."""

    @abstractmethod
    def edges(self) -> Iterator:
        """Iterate over live edge handles (fresh iterator per call)."""

    @abstractmethod
    def has_vertex(self, v) -> bool: ...

    @abstractmethod
    def has_edge(self, e) -> bool: ...

    @abstractmethod
    def vertex_mut(self, v):
        """Live vertex payload, or None for a stale handle."""

    @abstractmethod
    def edge_mut(self, e):
        """Live edge payload, or None for a stale handle."""

    @abstractmethod
    def edge_endpoints(self, e):
        """Endpoint pair of an edge (lower handle first), or None."""

    @abstractmethod
    def _incident(self, v) -> Iterator:
        """Yield ``(edge, other_endpoint)`` once per incident edge-end of a live vertex."""

    @abstractmethod
    def _store_vertex(self, data):
        """Insert a vertex with its complete payload; return the new handle."""

    @abstractmethod
    def _store_edge(self, v, u, data):
        """Insert an edge between two live vertices; return the new handle."""

    @abstractmethod
    def _drop_vertex(self, v):
        """Delete a live vertex that has no incident edges left."""

    @abstractmethod
    def _drop_edge(self, e):
        """Delete a live edge."""

    def _new_empty(self):
        return type(self)(history=self._history_enabled)

    def new_vertex_data(self, kind=VertexKind.BOUNDARY, phase=0, ground=False, qubit=-1, row=-1):
        """Build a payload of the type this backend stores."""
        return VertexData(kind, phase, ground, qubit, row)

    def new_edge_data(self, kind=EdgeKind.REGULAR):
        return EdgeData(kind)

    # ==================== Cardinality & enumeration ====================

    def __len__(self):
        return self.num_vertices()

    def neighbours(self, v) -> Iterator:
        """Neighbours of a vertex, once per incident edge-end.

        A stale handle yields nothing.
        """
        if not self.has_vertex(v):
            return iter(())
        return (u for _, u in self._incident(v))

    def incident_edges(self, v) -> list:
        """Edges touching ``v``, each listed once."""
        if not self.has_vertex(v):
            return []
        return list(dict.fromkeys(e for e, _ in self._incident(v)))

    def inputs(self) -> Iterator:
        return iter(tuple(self._inputs))

    def outputs(self) -> Iterator:
        return iter(tuple(self._outputs))

    def num_inputs(self) -> int:
        return len(self._inputs)

    def num_outputs(self) -> int:
        return len(self._outputs)

    # ==================== Attribute access ====================

    def vertex(self, v):
        """Detached copy of a vertex payload, or None for a stale handle."""
        d = self.vertex_mut(v)
        return None if d is None else d.copy()

    def edge(self, e):
        """Detached copy of an edge payload, or None for a stale handle."""
        d = self.edge_mut(e)
        return None if d is None else d.copy()

    def _require_vertex(self, v):
        d = self.vertex_mut(v)
        if d is None:
            raise MissingVertexError(v)
        return d

    def _require_edge(self, e):
        d = self.edge_mut(e)
        if d is None:
            raise MissingEdgeError(e)
        return d

    def kind(self, v):
        d = self.vertex_mut(v)
        return None if d is None else d.kind

    def phase(self, v):
        d = self.vertex_mut(v)
        return None if d is None else d.phase

    def edge_kind(self, e):
        d = self.edge_mut(e)
        return None if d is None else d.kind

    def set_kind(self, v, kind):
        d = self._require_vertex(v)
        kind = VertexKind(kind)
        if kind is VertexKind.BOUNDARY and isinstance(d, GroundData) and d.ground:
            raise UnsupportedGroundError(f"vertex {v!r} is grounded and cannot become a boundary")
        d.kind = kind

    def set_phase(self, v, phase):
        self._require_vertex(v).phase = phase

    def add_to_phase(self, v, phase):
        """Add ``phase`` to the vertex phase (mod 2)."""
        d = self._require_vertex(v)
        d.phase = d.phase + Phase(phase)

    def set_edge_kind(self, e, kind):
        self._require_edge(e).kind = kind

    # ==================== Connectivity ====================

    def vertex_degree(self, v) -> int:
        """Number of incident edge-ends (self-loops count twice); 0 if stale."""
        if not self.has_vertex(v):
            return 0
        return sum(1 for _ in self._incident(v))

    def connected(self, v, u) -> bool:
        """True iff at least one edge joins ``v`` and ``u`` (either order)."""
        if not (self.has_vertex(v) and self.has_vertex(u)):
            return False
        return any(w == u for _, w in self._incident(v))

    def edges_between(self, v, u) -> list:
        """All edges joining ``v`` and ``u``, each listed once."""
        if not (self.has_vertex(v) and self.has_vertex(u)):
            return []
        return list(dict.fromkeys(e for e, w in self._incident(v) if w == u))

    # ==================== Mutation ====================

    def add_vertices(self, count: int) -> list:
        """Add ``count`` unconnected default vertices.

        Returns
        -------
        list
            Fresh handles in creation order.

        """
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise ValueError(f"count must be a non-negative integer, got {count!r}")
        out = [self._store_vertex(self.new_vertex_data()) for _ in range(count)]
        if out:
            self._state.bump()
        return out

    def add_vertex(self, kind=VertexKind.BOUNDARY, phase=0, *, qubit=-1, row=-1, ground=False):
        """Add a single vertex with its kind and phase.

        The payload is complete before it is stored, so no half-initialised
        vertex is ever visible.

        Parameters
        ----------
        kind : VertexKind, default BOUNDARY
        phase : Phase or rational, default 0
        qubit, row : int, optional
            Layout coordinates (-1 = unplaced).
        ground : bool, default False
            Measurement marker; not allowed on boundary vertices.

        Returns
        -------
        VertexIx

        """
        kind = VertexKind(kind)
        if ground and kind is VertexKind.BOUNDARY:
            raise UnsupportedGroundError("boundary vertices cannot be grounded")
        v = self._store_vertex(self.new_vertex_data(kind, phase, ground, qubit, row))
        self._state.bump()
        return v

    def add_edge(self, v, u, kind=EdgeKind.REGULAR):
        """Add an edge between two existing vertices.

        Argument order is not observable: endpoints are stored lower handle
        first.

        Raises
        ------
        MissingVertexError
            If either endpoint is not a live vertex. Nothing is added.

        """
        for w in (v, u):
            if not self.has_vertex(w):
                raise MissingVertexError(w)
        a, b = sorted((v, u))
        e = self._store_edge(a, b, self.new_edge_data(kind))
        self._state.bump()
        return e

    def add_edges(self, pairs: Iterable, kind=EdgeKind.REGULAR) -> list:
        """Add several edges of one kind; all endpoints are checked first."""
        pairs = [tuple(p) for p in pairs]
        for v, u in pairs:
            for w in (v, u):
                if not self.has_vertex(w):
                    raise MissingVertexError(w)
        return [self.add_edge(v, u, kind) for v, u in pairs]

    def remove_vertex(self, v):
        """Remove a vertex, its incident edges and its input/output marks.

        Removing an absent vertex is a no-op.
        """
        if not self.has_vertex(v):
            return
        for e in self.incident_edges(v):
            self._drop_edge(e)
        if v in self._inputs:
            self._inputs.remove(v)
        if v in self._outputs:
            self._outputs.remove(v)
        self._drop_vertex(v)
        self._state.bump()

    def remove_edge(self, e):
        """Remove an edge; removing an absent edge is a no-op."""
        if not self.has_edge(e):
            return
        self._drop_edge(e)
        self._state.bump()

    def remove_vertices(self, vs: Iterable):
        """Remove vertices one after another (no rollback)."""
        for v in list(vs):
            self.remove_vertex(v)

    def remove_edges(self, es: Iterable):
        """Remove edges one after another (no rollback)."""
        for e in list(es):
            self.remove_edge(e)

    def clear(self):
        """Remove every vertex and edge."""
        self.remove_vertices(list(self.vertices()))
        self._inputs.clear()
        self._outputs.clear()

    # ==================== Inputs / outputs ====================

    def set_input(self, v, flag: bool = True):
        """Mark (append) or unmark ``v`` as an input.

        Raises
        ------
        MissingVertexError
            When marking a stale handle. Unmarking never fails.

        """
        self._set_role(self._inputs, v, flag)

    def set_output(self, v, flag: bool = True):
        """Mark (append) or unmark ``v`` as an output."""
        self._set_role(self._outputs, v, flag)

    def _set_role(self, seq, v, flag):
        if flag:
            if not self.has_vertex(v):
                raise MissingVertexError(v)
            if v not in seq:
                seq.append(v)
        elif v in seq:
            seq.remove(v)

    def is_input(self, v) -> bool:
        return v in self._inputs

    def is_output(self, v) -> bool:
        return v in self._outputs

    def set_inputs(self, vs: Iterable):
        """Replace the ordered input sequence."""
        self._inputs = self._checked_role(vs)

    def set_outputs(self, vs: Iterable):
        """Replace the ordered output sequence."""
        self._outputs = self._checked_role(vs)

    def _checked_role(self, vs):
        vs = list(vs)
        for v in vs:
            if not self.has_vertex(v):
                raise MissingVertexError(v)
        if len(set(vs)) != len(vs):
            raise ValueError("input/output sequence contains duplicates")
        return vs

    # ==================== Structural operators ====================

    def adjoint(self):
        """Turn the diagram into its adjoint, in place.

        Inputs and outputs swap roles and every phase is negated (mod 2).
        Connectivity and edge kinds are untouched.
        """
        self._inputs, self._outputs = self._outputs, self._inputs
        for v in list(self.vertices()):
            d = self.vertex_mut(v)
            d.phase = -d.phase

    def _tensor_offsets(self, other):
        """(qubit, row) shift applied to ``other`` by :meth:`tensor`."""
        return 0, 0

    def _compose_offsets(self, other):
        """(qubit, row) shift applied to ``other`` by :meth:`compose`."""
        return 0, 0

    def _import_vertex_data(self, d, qubit_offset=0, row_offset=0):
        ground = d.ground if isinstance(d, GroundData) else False
        qubit, row = (d.qubit, d.row) if isinstance(d, PositionData) else (-1, -1)
        if qubit >= 0:
            qubit += qubit_offset
        if row >= 0:
            row += row_offset
        return self.new_vertex_data(d.kind, d.phase, ground, qubit, row)

    def _absorb(self, other, qubit_offset=0, row_offset=0) -> dict:
        """Copy every vertex and edge of ``other`` into this graph.

        Returns the mapping from ``other``'s vertex handles to the new ones.
        """
        vmap = {}
        for v in list(other.vertices()):
            data = self._import_vertex_data(other.vertex_mut(v), qubit_offset, row_offset)
            vmap[v] = self._store_vertex(data)
        for e in list(other.edges()):
            a, b = other.edge_endpoints(e)
            a, b = sorted((vmap[a], vmap[b]))
            self._store_edge(a, b, self.new_edge_data(other.edge_mut(e).kind))
        self._state.bump()
        return vmap

    def tensor(self, other: BaseGraph):
        """Place ``other`` beside this diagram (parallel composition), in place.

        Inputs become ``self.inputs + other.inputs`` and likewise for outputs.
        ``other`` may use any backend; it is drained and left empty.
        """
        if other is self:
            raise CompositionError("cannot tensor a graph with itself")
        q_off, r_off = self._tensor_offsets(other)
        ins, outs = list(other.inputs()), list(other.outputs())
        vmap = self._absorb(other, q_off, r_off)
        self._inputs.extend(vmap[v] for v in ins)
        self._outputs.extend(vmap[v] for v in outs)
        other.clear()

    def _check_splice(self, g, boundary, role, opposite):
        for v in boundary:
            if v in opposite:
                raise CompositionError(f"{role} {v!r} is also marked as the opposite role")
            # a self-loop already gives degree 2
            deg = g.vertex_degree(v)
            if deg != 1:
                raise CompositionError(f"{role} {v!r} must have exactly one wire, found degree {deg}")

    def compose(self, other: BaseGraph):
        """Append ``other`` after this diagram (sequential composition), in place.

        Output ``k`` of this graph is joined to input ``k`` of ``other``: both
        boundary vertices are removed and their neighbours are linked by a
        single edge whose kind follows :meth:`EdgeKind.compose`. A wire that
        the splicing closes into a loop disappears. The result keeps this
        graph's inputs and takes ``other``'s outputs. ``other`` is drained and
        left empty.

        Raises
        ------
        BoundaryMismatchError
            If the number of outputs differs from ``other``'s inputs.
        CompositionError
            If a spliced boundary vertex does not have exactly one wire, or
            ``other`` is this graph. Neither graph is modified on failure.

        """
        if other is self:
            raise CompositionError("cannot compose a graph with itself")
        outs, ins = list(self._outputs), list(other.inputs())
        if len(outs) != len(ins):
            raise BoundaryMismatchError(len(outs), len(ins))
        self._check_splice(self, outs, "output", set(self._inputs))
        self._check_splice(other, ins, "input", set(other.outputs()))

        q_off, r_off = self._compose_offsets(other)
        new_outputs = list(other.outputs())
        vmap = self._absorb(other, q_off, r_off)
        for o, i in zip(outs, ins):
            self._splice(o, vmap[i])
        self._outputs = [vmap[v] for v in new_outputs]
        other.clear()

    def _splice(self, o, i):
        # both ends have exactly one wire here; splicing keeps neighbour degrees
        ((eo, no),) = self._incident(o)
        ((ei, ni),) = self._incident(i)
        if no != i:
            kind = EdgeKind.compose(self.edge_mut(eo).kind, self.edge_mut(ei).kind)
            a, b = sorted((no, ni))
            self._store_edge(a, b, self.new_edge_data(kind))
        self.remove_vertex(o)
        self.remove_vertex(i)

    def copy(self):
        """Independent copy on the same backend.

        Handles of the copy are freshly allocated and do not match the
        original's.
        """
        g = self._new_empty()
        vmap = g._absorb(self)
        g._inputs = [vmap[v] for v in self._inputs]
        g._outputs = [vmap[v] for v in self._outputs]
        return g

    def adjoint_copy(self):
        g = self.copy()
        g.adjoint()
        return g

    # ==================== Diagnostics ====================

    def degree_distribution(self) -> dict:
        """``{degree: vertex count}`` sorted by degree."""
        degrees = Counter(self.vertex_degree(v) for v in self.vertices())
        return dict(sorted(degrees.items()))

    def stats(self) -> str:
        """Backend, counts and degree histogram as text."""
        header = (
            f"Graph(backend={self.BACKEND}, num_vertices={self.num_vertices()}, "
            f"num_edges={self.num_edges()})\n"
        )
        body = "".join(f"  {k}: {n}\n" for k, n in self.degree_distribution().items())
        return header + "degree distribution: \n" + body

    def validate(self) -> list[str]:
        """Check diagram well-formedness.

        Checks for:
        - boundary vertices with a non-zero phase
        - boundary vertices with more than one wire
        - input/output marks on non-boundary vertices

        Returns
        -------
        list[str]
            Problems found; empty when the diagram is well formed.

        """
        errors = []
        for v in self.vertices():
            d = self.vertex_mut(v)
            if d.kind is VertexKind.BOUNDARY:
                if not d.phase.is_zero():
                    errors.append(f"boundary {v!r} has phase {d.phase}")
                deg = self.vertex_degree(v)
                if deg > 1:
                    errors.append(f"boundary {v!r} has degree {deg}")
        for role, seq in (("input", self._inputs), ("output", self._outputs)):
            for v in seq:
                if self.kind(v) is not VertexKind.BOUNDARY:
                    errors.append(f"{role} {v!r} is a {self.kind(v).name} vertex")
        return errors

    def __repr__(self):
        return (
            f"{type(self).__name__}(backend={self.BACKEND!r}, vertices={self.num_vertices()}, "
            f"edges={self.num_edges()}, inputs={len(self._inputs)}, outputs={len(self._outputs)})"
        )


class CartesianGraph(BaseGraph):
    """Graph whose vertices carry (qubit, row) layout coordinates.

    Coordinates are metadata only. ``-1`` means unplaced; unplaced vertices
    are ignored by :meth:`depth` and :meth:`qubit_count`.
    """

    def qubit(self, v):
        d = self.vertex_mut(v)
        return None if d is None else d.qubit

    def row(self, v):
        d = self.vertex_mut(v)
        return None if d is None else d.row

    def position(self, v):
        d = self.vertex_mut(v)
        return None if d is None else (d.qubit, d.row)

    def set_qubit(self, v, q: int):
        self._require_vertex(v).qubit = q

    def set_row(self, v, r: int):
        self._require_vertex(v).row = r

    def set_position(self, v, q: int, r: int):
        d = self._require_vertex(v)
        d.qubit = q
        d.row = r

    def depth(self) -> int:
        """Number of rows: max row + 1."""
        return max((self.vertex_mut(v).row for v in self.vertices()), default=-1) + 1

    def qubit_count(self) -> int:
        """Number of distinct placed qubits."""
        return len({q for q in (self.vertex_mut(v).qubit for v in self.vertices()) if q >= 0})

    def _tensor_offsets(self, other):
        if isinstance(other, CartesianGraph):
            return max((self.vertex_mut(v).qubit for v in self.vertices()), default=-1) + 1, 0
        return 0, 0

    def _compose_offsets(self, other):
        if isinstance(other, CartesianGraph):
            return 0, self.depth()
        return 0, 0


class GroundGraph(BaseGraph):
    """Graph with measurement ("ground") markers on spiders and H-boxes."""

    def is_ground(self, v) -> bool:
        d = self.vertex_mut(v)
        return bool(d is not None and d.ground)

    def set_ground(self, v, flag: bool = True):
        """Set or clear the ground marker.

        Raises
        ------
        UnsupportedGroundError
            When grounding a boundary vertex.

        """
        d = self._require_vertex(v)
        if flag and d.kind is VertexKind.BOUNDARY:
            raise UnsupportedGroundError(f"boundary vertex {v!r} cannot be grounded")
        d.ground = flag

    def grounds(self) -> Iterator:
        """Iterate over grounded vertices."""
        return (v for v in self.vertices() if self.vertex_mut(v).ground)
