"""Payload capabilities for vertices and edges.

Backends may store any payload type as long as it exposes the capabilities
below; :class:`VertexData` and :class:`EdgeData` are the payloads shipped with
the bundled backends.
"""

from abc import ABC, abstractmethod

from .phase import Phase
from .structure import EdgeKind, VertexKind

__all__ = ["VData", "EData", "GroundData", "PositionData", "VertexData", "EdgeData"]


class VData(ABC):
    """Minimal vertex payload: kind and phase, readable and writable."""

    @property
    @abstractmethod
    def kind(self) -> VertexKind: ...

    @kind.setter
    @abstractmethod
    def kind(self, value): ...

    @property
    @abstractmethod
    def phase(self) -> Phase: ...

    @phase.setter
    @abstractmethod
    def phase(self, value): ...

    @abstractmethod
    def copy(self): ...


class EData(ABC):
    """Minimal edge payload.

    Edges are undirected: the payload never records an orientation.
    """

    @property
    @abstractmethod
    def kind(self) -> EdgeKind: ...

    @kind.setter
    @abstractmethod
    def kind(self, value): ...

    @abstractmethod
    def copy(self): ...


class GroundData(ABC):
    """Measurement ("ground") marker on a vertex payload."""

    @property
    @abstractmethod
    def ground(self) -> bool: ...

    @ground.setter
    @abstractmethod
    def ground(self, value): ...


class PositionData(ABC):
    """(qubit, row) layout coordinates; -1 means unplaced."""

    @property
    @abstractmethod
    def qubit(self) -> int: ...

    @qubit.setter
    @abstractmethod
    def qubit(self, value): ...

    @property
    @abstractmethod
    def row(self) -> int: ...

    @row.setter
    @abstractmethod
    def row(self, value): ...


class VertexData(VData, GroundData, PositionData):
    """Default vertex payload.

    Writes are coerced: ``phase`` to :class:`Phase`, ``kind`` to
    :class:`VertexKind`, coordinates to ``int``.
    """

    __slots__ = ("_kind", "_phase", "_ground", "_qubit", "_row")

    def __init__(self, kind=VertexKind.BOUNDARY, phase=0, ground=False, qubit=-1, row=-1):
        self._kind = VertexKind(kind)
        self._phase = Phase(phase)
        self._ground = bool(ground)
        self._qubit = int(qubit)
        self._row = int(row)

    @property
    def kind(self):
        return self._kind

    @kind.setter
    def kind(self, value):
        self._kind = VertexKind(value)

    @property
    def phase(self):
        return self._phase

    @phase.setter
    def phase(self, value):
        self._phase = Phase(value)

    @property
    def ground(self):
        return self._ground

    @ground.setter
    def ground(self, value):
        self._ground = bool(value)

    @property
    def qubit(self):
        return self._qubit

    @qubit.setter
    def qubit(self, value):
        self._qubit = int(value)

    @property
    def row(self):
        return self._row

    @row.setter
    def row(self, value):
        self._row = int(value)

    def copy(self):
        return VertexData(self._kind, self._phase, self._ground, self._qubit, self._row)

    def _key(self):
        return (self._kind, self._phase, self._ground, self._qubit, self._row)

    def __eq__(self, other):
        if not isinstance(other, VertexData):
            return NotImplemented
        return self._key() == other._key()

    __hash__ = None

    def __repr__(self):
        return (
            f"VertexData(kind={self._kind.name}, phase={self._phase}, ground={self._ground}, "
            f"qubit={self._qubit}, row={self._row})"
        )


class EdgeData(EData):
    """Default edge payload."""

    __slots__ = ("_kind",)

    def __init__(self, kind=EdgeKind.REGULAR):
        self._kind = EdgeKind(kind)

    @property
    def kind(self):
        return self._kind

    @kind.setter
    def kind(self, value):
        self._kind = EdgeKind(value)

    def copy(self):
        return EdgeData(self._kind)

    def __eq__(self, other):
        if not isinstance(other, EdgeData):
            return NotImplemented
        return self._kind == other._kind

    __hash__ = None

    def __repr__(self):
        return f"EdgeData(kind={self._kind.name})"
