"""
Intersection over union (IoU) scores.

The IoU of two boxes B and G is

    IoU(B, G) = A(B and G) / (A(B) + A(G) - A(B and G))

where A is the area. IoUValue wraps that ratio so scores from many box pairs
can be summed, averaged and thresholded.

Behavior notes
- Equality is fuzzy since the value is floating point. Values differing only
  by rounding error compare equal.
- < and > are exact. <= and >= are "strictly less or greater, or fuzzy equal".
- Division and modulo do not guard against zero. The IEEE result (inf or nan)
  is stored, nothing is raised.
- % follows fmod, the result has the sign of the dividend.
"""

import logging
import math
import numbers
import operator

import numpy as np

from .bounding_box import BoundingBox, area, intersection

logger = logging.getLogger(__name__)

# default tolerances for fuzzy equality
FUZZY_REL_TOL = 1e-9
FUZZY_ABS_TOL = 1e-12


def fuzzy_equal(a: float, b: float, rel_tol: float = FUZZY_REL_TOL, abs_tol: float = FUZZY_ABS_TOL) -> bool:
    """
    Compare two floats allowing for representation error.

    nan is never equal to anything. Infinities are equal only to themselves.
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def _apply(op, a, b) -> np.float64:
    with np.errstate(all="ignore"):
        return np.float64(op(np.float64(a), np.float64(b)))


class IoUValue:
    """
    An intersection over union value.

    Parameters
    value float the ratio, normally on [0 1]. It is stored as given without
        clamping or validation. Another IoUValue may be passed to copy it.
    """

    __slots__ = ("_value",)

    # instances are mutable through the in place operators
    __hash__ = None

    def __init__(self, value=0.0):
        if isinstance(value, IoUValue):
            value = value._value
        self._value = np.float64(float(value))

    @property
    def value(self) -> float:
        return float(self._value)

    @value.setter
    def value(self, v) -> None:
        self._value = np.float64(float(v))

    @staticmethod
    def _operand(other):
        if isinstance(other, IoUValue):
            return other._value
        if isinstance(other, numbers.Real):
            return other
        return None

    def _binary(self, other, op):
        b = self._operand(other)
        if b is None:
            return NotImplemented
        return IoUValue(_apply(op, self._value, b))

    def _reflected(self, other, op):
        a = self._operand(other)
        if a is None:
            return NotImplemented
        return IoUValue(_apply(op, a, self._value))

    def _inplace(self, other, op):
        b = self._operand(other)
        if b is None:
            return NotImplemented
        self._value = _apply(op, self._value, b)
        return self

    # arithmetic

    def __add__(self, other):
        return self._binary(other, operator.add)

    def __radd__(self, other):
        return self._reflected(other, operator.add)

    def __iadd__(self, other):
        return self._inplace(other, operator.add)

    def __sub__(self, other):
        return self._binary(other, operator.sub)

    def __rsub__(self, other):
        return self._reflected(other, operator.sub)

    def __isub__(self, other):
        return self._inplace(other, operator.sub)

    def __mul__(self, other):
        return self._binary(other, operator.mul)

    def __rmul__(self, other):
        return self._reflected(other, operator.mul)

    def __imul__(self, other):
        return self._inplace(other, operator.mul)

    def __truediv__(self, other):
        return self._binary(other, operator.truediv)

    def __rtruediv__(self, other):
        return self._reflected(other, operator.truediv)

    def __itruediv__(self, other):
        return self._inplace(other, operator.truediv)

    def __mod__(self, other):
        return self._binary(other, np.fmod)

    def __rmod__(self, other):
        return self._reflected(other, np.fmod)

    def __imod__(self, other):
        return self._inplace(other, np.fmod)

    def __neg__(self):
        return IoUValue(-self._value)

    def __pos__(self):
        return IoUValue(self._value)

    # comparison

    def __eq__(self, other):
        if not isinstance(other, IoUValue):
            return NotImplemented
        return fuzzy_equal(self._value, other._value)

    def __ne__(self, other):
        if not isinstance(other, IoUValue):
            return NotImplemented
        return not fuzzy_equal(self._value, other._value)

    def __lt__(self, other):
        if not isinstance(other, IoUValue):
            return NotImplemented
        return bool(self._value < other._value)

    def __gt__(self, other):
        if not isinstance(other, IoUValue):
            return NotImplemented
        return bool(self._value > other._value)

    def __le__(self, other):
        if not isinstance(other, IoUValue):
            return NotImplemented
        return self < other or self == other

    def __ge__(self, other):
        if not isinstance(other, IoUValue):
            return NotImplemented
        return self > other or self == other

    # conversion

    def __float__(self):
        return float(self._value)

    def __format__(self, format_spec):
        return format(float(self._value), format_spec)

    def __str__(self):
        return repr(float(self._value))

    def __repr__(self):
        return f"IoUValue({float(self._value)!r})"


def make_iou(box1: BoundingBox, box2: BoundingBox) -> IoUValue:
    """
    Compute the IoU of two boxes.

    Any error raised while computing is logged and a zero IoUValue is
    returned instead. A zero union is not special cased: two degenerate boxes
    give nan.
    """
    try:
        with np.errstate(all="ignore"):
            intersection_area = np.float64(area(intersection(box1, box2)))
            area1 = np.float64(area(box1))
            area2 = np.float64(area(box2))
            return IoUValue(intersection_area / (area1 + area2 - intersection_area))
    except Exception:
        logger.debug("IoU computation failed for %r and %r", box1, box2, exc_info=True)
        return IoUValue()
