"""Exceptions raised by zxnet.

Every error subclasses :class:`ZXNetError` and the builtin a caller would
naturally catch (``KeyError`` for missing handles, ``ValueError`` for
malformed requests).
"""

__all__ = [
    "ZXNetError",
    "MissingVertexError",
    "MissingEdgeError",
    "CompositionError",
    "BoundaryMismatchError",
    "UnsupportedGroundError",
    "UnknownBackendError",
]


class ZXNetError(Exception):
    pass


class MissingVertexError(ZXNetError, KeyError):
    def __init__(self, vertex):
        self.vertex = vertex
        super().__init__(f"vertex {vertex!r} not found")

    def __str__(self):
        return self.args[0]


class MissingEdgeError(ZXNetError, KeyError):
    def __init__(self, edge):
        self.edge = edge
        super().__init__(f"edge {edge!r} not found")

    def __str__(self):
        return self.args[0]


class CompositionError(ZXNetError, ValueError):
    """A structural operator's precondition does not hold."""


class BoundaryMismatchError(CompositionError):
    """Output count of the first diagram differs from input count of the second."""

    def __init__(self, n_outputs, n_inputs):
        self.n_outputs = n_outputs
        self.n_inputs = n_inputs
        super().__init__(
            f"cannot compose: {n_outputs} output(s) against {n_inputs} input(s)"
        )


class UnsupportedGroundError(ZXNetError, ValueError):
    pass


class UnknownBackendError(ZXNetError, ValueError):
    pass
