from __future__ import annotations

import math
from fractions import Fraction
from functools import total_ordering
from numbers import Rational

__all__ = ["Phase"]


@total_ordering
class Phase:
    """Exact phase of a spider, stored as a rational multiple of pi.

    The value is reduced to lowest terms and normalised into ``[0, 2)`` when
    the object is built, so two phases compare equal iff they denote the same
    angle modulo 2*pi.

    Parameters
    ----------
    value : int, Fraction, str or Phase, optional
        Numerator, full rational value (``Fraction(3, 4)``, ``"3/4"``) or an
        existing phase. Defaults to 0.
    denominator : int, optional
        Denominator when ``value`` is an integer numerator.

    Raises
    ------
    TypeError
        For floats and other inexact inputs.
    ZeroDivisionError
        For a zero denominator.

    Examples
    --------
    >>> Phase(5, 2)
    Phase(1/2)
    >>> Phase(3, 2) + Phase(1, 2)
    Phase(0)

    """

    __slots__ = ("_f",)

    def __init__(self, value=0, denominator=None):
        if isinstance(value, Phase):
            f = value._f
        elif isinstance(value, bool):
            raise TypeError("Phase does not accept booleans")
        elif isinstance(value, (Rational, str)):
            f = Fraction(value)
        else:
            raise TypeError(f"Phase requires an exact rational, got {type(value).__name__}")
        if denominator is not None:
            if isinstance(denominator, bool) or not isinstance(denominator, Rational):
                raise TypeError("denominator must be an integer or Fraction")
            f = f / Fraction(denominator)
        self._f = f % 2

    @classmethod
    def default(cls) -> Phase:
        """The zero phase."""
        return cls(0)

    @classmethod
    def _coerce(cls, other):
        if isinstance(other, Phase):
            return other
        if isinstance(other, (Rational, str)) and not isinstance(other, bool):
            return cls(other)
        return None

    # ==================== Accessors ====================

    @property
    def fraction(self) -> Fraction:
        return self._f

    @property
    def numerator(self) -> int:
        return self._f.numerator

    @property
    def denominator(self) -> int:
        return self._f.denominator

    def is_zero(self) -> bool:
        return self._f == 0

    def is_pauli(self) -> bool:
        """True for 0 and pi."""
        return self._f.denominator == 1

    def is_clifford(self) -> bool:
        """True for integer multiples of pi/2."""
        return self._f.denominator <= 2

    # ==================== Arithmetic (mod 2) ====================

    def __add__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Phase(self._f + o._f)

    __radd__ = __add__

    def __sub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Phase(self._f - o._f)

    def __rsub__(self, other):
        o = self._coerce(other)
        if o is None:
            return NotImplemented
        return Phase(o._f - self._f)

    def __neg__(self):
        return Phase(-self._f)

    def __float__(self):
        # radians
        return float(self._f) * math.pi

    # ==================== Comparison ====================
    # Against another Phase the comparison is mod 2 (both are normalised).
    # Against a plain rational it is by exact value, so hash(Phase(r)) ==
    # hash(r) whenever the two compare equal.

    def _cmp_value(self, other):
        if isinstance(other, Phase):
            return other._f
        if isinstance(other, Rational) and not isinstance(other, bool):
            return Fraction(other)
        return None

    def __eq__(self, other):
        o = self._cmp_value(other)
        if o is None:
            return NotImplemented
        return self._f == o

    def __lt__(self, other):
        o = self._cmp_value(other)
        if o is None:
            return NotImplemented
        return self._f < o

    def __hash__(self):
        return hash(self._f)

    def __bool__(self):
        return self._f != 0

    def __repr__(self):
        return f"Phase({self._f})"

    def __str__(self):
        n, d = self._f.numerator, self._f.denominator
        if n == 0:
            return "0"
        head = "π" if n == 1 else f"{n}π"
        return head if d == 1 else f"{head}/{d}"
