"""Reductions along axes and elementwise functions for matrices."""

from __future__ import annotations

import math
from typing import Callable

from gradfit.matrix import Matrix


def _check_axis(axis: int) -> None:
    if axis not in (0, 1):
        raise ValueError("Axis must be 0 or 1")


def _lines(arr: Matrix, axis: int) -> list[list[float]]:
    """Columns for axis 0, rows for axis 1."""
    return arr.transpose().tolist() if axis == 0 else arr.tolist()


def _reduce(arr: Matrix, axis: int | None, pick: Callable[[list[float]], float]) -> Matrix:
    if axis is None:
        if arr.rows == 1 or arr.cols == 1:
            if not arr.data:
                raise IndexError("Index out of bounds")
            return Matrix(1, 1, [pick(arr.data)])
        axis = 0
    else:
        _check_axis(axis)
    lines = _lines(arr, axis)
    if any(not line for line in lines):
        raise IndexError("Index out of bounds")
    values = [pick(line) for line in lines]
    if axis == 0:
        return Matrix(1, len(values), values)
    return Matrix(len(values), 1, values)


def _argbest(better: Callable[[float, float], bool]) -> Callable[[list[float], ], float]:
    def pick(values: list[float]) -> float:
        best = 0
        for i, x in enumerate(values[1:], start=1):
            if better(x, values[best]):
                best = i
        return float(best)
    return pick


def _valbest(better: Callable[[float, float], bool]) -> Callable[[list[float]], float]:
    def pick(values: list[float]) -> float:
        best = values[0]
        for x in values[1:]:
            if better(x, best):
                best = x
        return best
    return pick


def _greater(a: float, b: float) -> bool:
    return a > b


def _less(a: float, b: float) -> bool:
    return a < b


def amax(arr: Matrix, axis: int | None = None) -> Matrix:
    """Maximum along an axis: 0 gives a row of column maxima, 1 a column of row maxima.

    Without an axis, a vector reduces to a 1 x 1 matrix and any other matrix
    to its column maxima.
    """
    return _reduce(arr, axis, _valbest(_greater))


def argmax(arr: Matrix, axis: int | None = None) -> Matrix:
    """Index of the first maximum along an axis, laid out as in :func:`amax`."""
    return _reduce(arr, axis, _argbest(_greater))


def amin(arr: Matrix, axis: int | None = None) -> Matrix:
    """Minimum along an axis, laid out as in :func:`amax`."""
    return _reduce(arr, axis, _valbest(_less))


def argmin(arr: Matrix, axis: int | None = None) -> Matrix:
    """Index of the first minimum along an axis, laid out as in :func:`amax`."""
    return _reduce(arr, axis, _argbest(_less))


def _elementwise(a: Matrix, fn: Callable[[float], float]) -> Matrix:
    return Matrix(a.rows, a.cols, [fn(x) for x in a.data])


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _ln(x: float) -> float:
    if math.isnan(x) or x < 0:
        return math.nan
    if x == 0:
        return -math.inf
    return math.log(x)


def _sqrt(x: float) -> float:
    if math.isnan(x) or x < 0:
        return math.nan
    return math.sqrt(x)


def _divide(a: float, b: float) -> float:
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    if math.isinf(a) and math.isinf(b):
        return math.nan
    return a / b


def fabs(a: Matrix) -> Matrix:
    """Elementwise absolute value."""
    return _elementwise(a, math.fabs)


def exp(a: Matrix) -> Matrix:
    """Elementwise exponential; overflow gives infinity."""
    return _elementwise(a, _exp)


def tanh(a: Matrix) -> Matrix:
    """Elementwise hyperbolic tangent."""
    return _elementwise(a, math.tanh)


def log(a: Matrix, base: float | None = None) -> Matrix:
    """Elementwise logarithm, natural unless ``base`` is given.

    Zero maps to negative infinity and negative values to NaN.
    """
    if base is None:
        return _elementwise(a, _ln)
    denominator = _ln(float(base))
    return _elementwise(a, lambda x: _divide(_ln(x), denominator))


def sqrt(a: Matrix) -> Matrix:
    """Elementwise square root; negative values give NaN."""
    return _elementwise(a, _sqrt)