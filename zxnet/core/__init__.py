from .data import EData, EdgeData, GroundData, PositionData, VData, VertexData
from .graph import BaseGraph, CartesianGraph, GroundGraph
from .handles import EdgeIx, SlotTable, VertexIx
from .phase import Phase
from .structure import EdgeKind, VertexKind

__all__ = [
    "Phase",
    "VertexKind",
    "EdgeKind",
    "VData",
    "EData",
    "GroundData",
    "PositionData",
    "VertexData",
    "EdgeData",
    "VertexIx",
    "EdgeIx",
    "SlotTable",
    "BaseGraph",
    "CartesianGraph",
    "GroundGraph",
]
