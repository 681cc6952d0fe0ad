# zxnet/__init__.py
"""zxnet: graph layer for ZX-calculus diagrams."""
from __future__ import annotations

from importlib import import_module
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version
from typing import Any

# Lazily exposed submodules (imported on first attribute access)
_lazy_submodules = {
    "core": "zxnet.core",
    "backends": "zxnet.backends",
    "errors": "zxnet.errors",
    "views": "zxnet.core.views",
}

# Curated top-level symbols (lazy). name -> (module, attribute)
_lazy_symbols: dict[str, tuple[str, str]] = {
    # Core
    "Phase": ("zxnet.core.phase", "Phase"),
    "VertexKind": ("zxnet.core.structure", "VertexKind"),
    "EdgeKind": ("zxnet.core.structure", "EdgeKind"),
    "VertexData": ("zxnet.core.data", "VertexData"),
    "EdgeData": ("zxnet.core.data", "EdgeData"),
    "VertexIx": ("zxnet.core.handles", "VertexIx"),
    "EdgeIx": ("zxnet.core.handles", "EdgeIx"),
    "BaseGraph": ("zxnet.core.graph", "BaseGraph"),
    "CartesianGraph": ("zxnet.core.graph", "CartesianGraph"),
    "GroundGraph": ("zxnet.core.graph", "GroundGraph"),

    # Backends
    "Graph": ("zxnet.backends", "Graph"),
    "NxGraph": ("zxnet.backends.networkx", "NxGraph"),
    "IncidenceGraph": ("zxnet.backends.incidence", "IncidenceGraph"),
    "available_backends": ("zxnet.backends", "available_backends"),
    "load_backend": ("zxnet.backends", "load_backend"),

    # Views
    "vertices_view": ("zxnet.core.views", "vertices_view"),
    "edges_view": ("zxnet.core.views", "edges_view"),
    "degree_table": ("zxnet.core.views", "degree_table"),
    "adjacency_matrix": ("zxnet.core.views", "adjacency_matrix"),
    "to_networkx": ("zxnet.core.views", "to_networkx"),
}

__all__ = sorted(set(list(_lazy_submodules) + list(_lazy_symbols)))


def __getattr__(name: str) -> Any:  # PEP 562: lazy attribute resolution
    if name in _lazy_submodules:
        return import_module(_lazy_submodules[name])
    if name in _lazy_symbols:
        mod, attr = _lazy_symbols[name]
        return getattr(import_module(mod), attr)
    raise AttributeError(name)


def __dir__() -> list[str]:
    return sorted(list(globals().keys()) + list(__all__))


try:
    __version__ = _pkg_version("zxnet")
except PackageNotFoundError:
    __version__ = "0.0.0"
