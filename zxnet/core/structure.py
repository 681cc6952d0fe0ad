from enum import Enum


class VertexKind(str, Enum):
    """Vertex kind (Z, X, BOUNDARY, H_BOX).

    Attributes:
        Z: Z-basis spider, carries a phase
        X: X-basis spider, carries a phase
        BOUNDARY: input/output terminal, phase 0 and degree at most 1
        H_BOX: generalised multi-ary Hadamard node
    """

    Z = "z"
    X = "x"
    BOUNDARY = "boundary"
    H_BOX = "h_box"

    @classmethod
    def default(cls):
        return cls.BOUNDARY

    @property
    def is_spider(self) -> bool:
        return self in (VertexKind.Z, VertexKind.X)


class EdgeKind(str, Enum):
    """Edge kind (REGULAR, HADAMARD).

    Attributes:
        REGULAR: plain wire
        HADAMARD: wire carrying an implicit Hadamard box
    """

    REGULAR = "regular"
    HADAMARD = "hadamard"

    @classmethod
    def default(cls):
        return cls.REGULAR

    @staticmethod
    def compose(a, b):
        """Kind of the single wire obtained by joining wires ``a`` and ``b``.

        Two Hadamards cancel, a single one survives.
        """
        a, b = EdgeKind(a), EdgeKind(b)
        return EdgeKind.HADAMARD if (a is EdgeKind.HADAMARD) != (b is EdgeKind.HADAMARD) else EdgeKind.REGULAR
