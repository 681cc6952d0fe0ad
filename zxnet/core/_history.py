import inspect
import time
from datetime import UTC, datetime
from enum import Enum
from functools import wraps

import numpy as np
import polars as pl

from .phase import Phase


class HistoryMixin:
    """In-memory, append-only log of mutating calls.

    Mutators listed in ``_HISTORY_OPS`` are wrapped per instance by
    :meth:`_install_history_hooks`. Only the outermost call is recorded; the
    mutators it invokes internally are folded into that one event.
    """

    # Mutating methods to wrap. Add here if you add new mutators.
    _HISTORY_OPS = (
        "add_vertex",
        "add_vertices",
        "add_edge",
        "add_edges",
        "remove_vertex",
        "remove_vertices",
        "remove_edge",
        "remove_edges",
        "clear",
        "set_kind",
        "set_phase",
        "add_to_phase",
        "set_edge_kind",
        "set_input",
        "set_output",
        "set_inputs",
        "set_outputs",
        "adjoint",
        "compose",
        "tensor",
        "set_qubit",
        "set_row",
        "set_position",
        "set_ground",
    )

    def _init_history(self, enabled: bool = True):
        self._history_enabled = bool(enabled)
        self._history = []  # list[dict]
        self._history_version = 0
        self._history_depth = 0
        self._history_clock0 = time.perf_counter_ns()
        self._install_history_hooks()

    def _utcnow_iso(self) -> str:
        return datetime.now(UTC).isoformat(timespec="microseconds").replace("+00:00", "Z")

    def _jsonify(self, x):
        # Make args/return JSON-safe & compact.
        # str-valued enums are str too; test Enum first
        if isinstance(x, Enum):
            return x.name
        if x is None or isinstance(x, (bool, int, float, str)):
            return x
        if isinstance(x, Phase):
            return str(x.fraction)
        if isinstance(x, (set, frozenset)):
            return sorted(self._jsonify(v) for v in x)
        if isinstance(x, (list, tuple)):
            return [self._jsonify(v) for v in x]
        if isinstance(x, dict):
            return {str(k): self._jsonify(v) for k, v in x.items()}
        if isinstance(x, np.generic):
            return x.item()
        if inspect.isgenerator(x) or isinstance(x, (map, filter, zip)):
            return "<<iterator>>"
        # other graphs, frames, matrices -> just a tag
        return f"<<{type(x).__name__}>>"

    def _log_event(self, op: str, **fields):
        if not self._history_enabled:
            return
        self._history_version += 1
        evt = {
            "version": self._history_version,
            "ts_utc": self._utcnow_iso(),  # ISO-8601 with Z
            "mono_ns": time.perf_counter_ns() - self._history_clock0,
            "op": op,
        }
        for k, v in fields.items():
            evt[k] = self._jsonify(v)
        self._history.append(evt)

    def _log_mutation(self, name=None):
        def deco(fn):
            op = name or fn.__name__
            sig = inspect.signature(fn)

            @wraps(fn)
            def wrapper(*args, **kwargs):
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
                self._history_depth += 1
                try:
                    result = fn(*args, **kwargs)
                finally:
                    self._history_depth -= 1
                if self._history_depth == 0:
                    payload = dict(bound.arguments)
                    payload["result"] = result
                    self._log_event(op, **payload)
                return result

            return wrapper

        return deco

    def _install_history_hooks(self):
        for name in self._HISTORY_OPS:
            fn = getattr(self, name, None)
            # Avoid double-wrapping
            if fn is not None and getattr(fn, "__wrapped__", None) is None:
                setattr(self, name, self._log_mutation(name)(fn))

    def history(self, as_df: bool = False):
        """Return the mutation history.

        Parameters
        ----------
        as_df : bool, default False
            If True, return a Polars DF [DataFrame]; otherwise a list of dicts.

        Returns
        -------
        list[dict] or polars.DataFrame
            Each event includes 'version', 'ts_utc', 'mono_ns', 'op', the call
            arguments and 'result'.

        """
        if as_df:
            if not self._history:
                return pl.DataFrame(schema={"version": pl.Int64, "op": pl.Utf8})
            # argument sets differ between ops; payload columns are kept as text
            rows = [
                {k: (v if k in ("version", "mono_ns") or isinstance(v, str) else repr(v)) for k, v in e.items()}
                for e in self._history
            ]
            return pl.from_dicts(rows, infer_schema_length=None)
        return list(self._history)

    def enable_history(self, flag: bool = True):
        """Pause (False) or resume (True) mutation logging."""
        self._history_enabled = bool(flag)

    def clear_history(self):
        self._history.clear()

    def mark(self, label: str):
        """Insert a manual marker event (op='mark') into the history."""
        self._log_event("mark", label=label)
