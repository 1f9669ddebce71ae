"""Matrix products, vector norms and constructors for common matrices."""

from __future__ import annotations

import math
import struct

from gradfit.matrix import Matrix


def _shape_text(m: Matrix) -> str:
    return f"( {m.rows} , {m.cols} )"


def _single(x: float) -> float:
    """Round a double to the nearest single-precision value."""
    try:
        return struct.unpack("f", struct.pack("f", x))[0]
    except OverflowError:
        return math.copysign(math.inf, x)


def matmul(first: Matrix, second: Matrix) -> Matrix:
    """Return the matrix product ``first x second``."""
    if first.cols != second.rows:
        raise ValueError(
            f"Cannot matmul {_shape_text(first)} with {_shape_text(second)}"
        )
    columns = second.transpose().tolist()
    values = []
    for row in first.tolist():
        for column in columns:
            total = 0.0
            for x, y in zip(row, column):
                total += x * y
            values.append(total)
    return Matrix(first.rows, second.cols, values)


def dot(first: Matrix, second: Matrix) -> float:
    """Dot product of a 1 x n row vector with an n x 1 column vector.

    The sum is accumulated in single precision.
    """
    if first.rows != 1 or first.cols != second.rows or second.cols != 1:
        raise ValueError(
            f"Cannot dot vector with dimensions {_shape_text(first)} "
            f"with  a vector with dimensions {_shape_text(second)}"
        )
    total = 0.0
    for x, y in zip(first.data, second.data):
        total = _single(total + x * y)
    return total


def norm(v: Matrix) -> float:
    """Euclidean norm of a row or column vector."""
    if v.rows != 1 and v.cols != 1:
        raise ValueError(
            f"Cannot compute norm of vector with dimensions {_shape_text(v)}"
        )
    total = 0.0
    for x in v.data:
        total += x * x
    return math.sqrt(total)


def zeros(rows: int, cols: int = 1) -> Matrix:
    """Matrix of zeros; with one argument, a column vector."""
    return Matrix(rows, cols)


def ones(rows: int, cols: int = 1) -> Matrix:
    """Matrix filled with ones."""
    return Matrix(rows, cols, [1.0] * (rows * cols))


def eye(rows: int, cols: int | None = None) -> Matrix:
    """Matrix with ones on the main diagonal; square if ``cols`` is omitted."""
    if cols is None:
        cols = rows
    result = Matrix(rows, cols)
    for i in range(min(rows, cols)):
        result[i, i] = 1.0
    return result


def identity(size: int) -> Matrix:
    """Square identity matrix of the given size."""
    return eye(size)