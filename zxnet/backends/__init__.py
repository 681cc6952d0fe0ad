from importlib import import_module, util

from ..errors import UnknownBackendError

__all__ = [
    "available_backends",
    "backend_class",
    "load_backend",
    "get_default_backend",
    "set_default_backend",
    "Graph",
]

# name -> (required import, submodule, class_name)
_BACKENDS = {
    "networkx": ("networkx", ".networkx", "NxGraph"),
    "incidence": ("scipy", ".incidence", "IncidenceGraph"),
}

_default_backend = "networkx"


def _is_installed(modname: str) -> bool:
    return util.find_spec(modname) is not None


def available_backends() -> dict:
    """``{backend name: importable?}`` for every registered backend."""
    return {name: _is_installed(mod) for name, (mod, _, _) in _BACKENDS.items()}


def backend_class(name: str):
    """Return the graph class registered under ``name``."""
    key = str(name).lower()
    if key not in _BACKENDS:
        raise UnknownBackendError(f"Unknown backend '{name}'; known: {sorted(_BACKENDS)}")
    modname, submod, cls = _BACKENDS[key]
    if not _is_installed(modname):
        raise ModuleNotFoundError(
            f"Backend '{key}' needs '{modname}', which is not installed."
        )
    mod = import_module(__name__ + submod)
    return getattr(mod, cls)


def load_backend(name=None, *args, **kwargs):
    """Instantiate an empty graph of the given backend (default backend if None)."""
    return backend_class(name or _default_backend)(*args, **kwargs)


def get_default_backend() -> str:
    return _default_backend


def set_default_backend(name: str):
    """Change the backend :func:`Graph` builds when none is named."""
    global _default_backend
    backend_class(name)
    _default_backend = str(name).lower()


def Graph(backend=None, **kwargs):
    """Build an empty diagram on ``backend`` (the default backend if None).

    Examples
    --------
    >>> g = Graph()
    >>> g.BACKEND
    'networkx'

    """
    return load_backend(backend, **kwargs)
