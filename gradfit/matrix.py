"""Dense row-major matrix of floats with NumPy-style broadcasting."""

from __future__ import annotations

import math
import operator
from numbers import Real
from typing import Callable, Iterable, Sequence

Number = float | int

_BinaryOp = Callable[[float, float], float]


def _ieee_div(a: float, b: float) -> float:
    """Divide like IEEE-754 hardware: zero divisors give inf or nan."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _shape_text(m: "Matrix") -> str:
    return f"( {m.rows} , {m.cols} )"


def _add_error(a: "Matrix", b: "Matrix") -> str:
    return f"Cannot add {_shape_text(a)} with {_shape_text(b)}"


def _sub_error(a: "Matrix", b: "Matrix") -> str:
    return f"Cannot subtract {_shape_text(b)} from {_shape_text(a)}"


def _mul_error(a: "Matrix", b: "Matrix") -> str:
    return f"Cannot multiply(elementwise) {_shape_text(a)} with {_shape_text(b)}"


def _div_error(a: "Matrix", b: "Matrix") -> str:
    return f"Cannot divide {_shape_text(b)} from {_shape_text(a)}"


class Matrix:
    """A rows x cols matrix of floats stored in row-major order."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, rows: int, cols: int = 1, data: Iterable[Number] | None = None) -> None:
        rows = operator.index(rows)
        cols = operator.index(cols)
        if rows < 0 or cols < 0:
            raise ValueError("Matrix dimensions must be non-negative")
        self.rows = rows
        self.cols = cols
        if data is None:
            self.data = [0.0] * (rows * cols)
        else:
            values = [float(x) for x in data]
            if len(values) != rows * cols:
                raise ValueError(
                    f"Expected {rows * cols} values for a ( {rows} , {cols} ) matrix, got {len(values)}"
                )
            self.data = values

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Number]]) -> "Matrix":
        """Build a matrix from a sequence of equally long rows."""
        rows = [list(r) for r in rows]
        if not rows:
            return cls(0, 0)
        width = len(rows[0])
        if any(len(r) != width for r in rows):
            raise ValueError("All rows must have the same length")
        return cls(len(rows), width, (x for r in rows for x in r))

    def shape(self) -> tuple[int, int]:
        """Return (rows, cols)."""
        return self.rows, self.cols

    def row(self, i: int) -> "Matrix":
        """Return row ``i`` as a 1 x cols matrix."""
        i = operator.index(i)
        if not 0 <= i < self.rows:
            raise IndexError("Index out of bounds")
        start = i * self.cols
        return Matrix(1, self.cols, self.data[start:start + self.cols])

    def tolist(self) -> list[list[float]]:
        """Return the entries as a list of row lists."""
        return [self.data[r * self.cols:(r + 1) * self.cols] for r in range(self.rows)]

    def _offset(self, key: object) -> int:
        if isinstance(key, tuple):
            if len(key) != 2:
                raise IndexError("Matrix indices must be (row, col)")
            i, j = (operator.index(k) for k in key)
        else:
            if self.cols != 1:
                raise ValueError("Use 2D indexer for 2D arrays")
            i, j = operator.index(key), 0
        if not (0 <= i < self.rows and 0 <= j < self.cols):
            raise IndexError("Index out of bounds")
        return i * self.cols + j

    def __getitem__(self, key: object) -> float:
        return self.data[self._offset(key)]

    def __setitem__(self, key: object, value: Number) -> None:
        self.data[self._offset(key)] = float(value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape() == other.shape() and self.data == other.data

    def __repr__(self) -> str:
        return f"Matrix({self.rows}, {self.cols}, {self.data!r})"

    def __str__(self) -> str:
        return "".join(
            "".join(f"{x:g} " for x in r) + "\n" for r in self.tolist()
        )

    # -- elementwise arithmetic -------------------------------------------------

    def _combine(self, other: "Matrix", op: _BinaryOp, error: Callable[["Matrix", "Matrix"], str]) -> "Matrix":
        a, b = self, other
        if a.rows != b.rows and a.cols != b.cols:
            raise ValueError(error(a, b))
        if a.shape() == b.shape():
            return Matrix(a.rows, a.cols, [op(x, y) for x, y in zip(a.data, b.data)])
        if a.rows == b.rows:
            if a.cols == 1:
                return Matrix(b.rows, b.cols, [
                    op(a.data[i], b.data[i * b.cols + j])
                    for i in range(b.rows) for j in range(b.cols)
                ])
            if b.cols == 1:
                return Matrix(a.rows, a.cols, [
                    op(a.data[i * a.cols + j], b.data[i])
                    for i in range(a.rows) for j in range(a.cols)
                ])
            raise ValueError(error(a, b))
        if a.rows == 1:
            return Matrix(b.rows, b.cols, [
                op(a.data[j], b.data[i * b.cols + j])
                for i in range(b.rows) for j in range(b.cols)
            ])
        if b.rows == 1:
            return Matrix(a.rows, a.cols, [
                op(a.data[i * a.cols + j], b.data[j])
                for i in range(a.rows) for j in range(a.cols)
            ])
        raise ValueError(error(a, b))

    def _map(self, fn: Callable[[float], float]) -> "Matrix":
        return Matrix(self.rows, self.cols, [fn(x) for x in self.data])

    def _binary(self, other: object, op: _BinaryOp, error: Callable[["Matrix", "Matrix"], str]) -> "Matrix":
        if isinstance(other, Matrix):
            return self._combine(other, op, error)
        if isinstance(other, Real):
            t = float(other)
            return self._map(lambda x: op(x, t))
        return NotImplemented

    def _reflected(self, other: object, op: _BinaryOp) -> "Matrix":
        if isinstance(other, Real):
            t = float(other)
            return self._map(lambda x: op(t, x))
        return NotImplemented

    def __add__(self, other: object) -> "Matrix":
        return self._binary(other, operator.add, _add_error)

    def __radd__(self, other: object) -> "Matrix":
        return self._reflected(other, operator.add)

    def __sub__(self, other: object) -> "Matrix":
        return self._binary(other, operator.sub, _sub_error)

    def __rsub__(self, other: object) -> "Matrix":
        return self._reflected(other, operator.sub)

    def __mul__(self, other: object) -> "Matrix":
        return self._binary(other, operator.mul, _mul_error)

    def __rmul__(self, other: object) -> "Matrix":
        return self._reflected(other, operator.mul)

    def __truediv__(self, other: object) -> "Matrix":
        return self._binary(other, _ieee_div, _div_error)

    def __rtruediv__(self, other: object) -> "Matrix":
        return self._reflected(other, _ieee_div)

    def _inplace(self, other: object, op: _BinaryOp, verb: str) -> "Matrix":
        if not isinstance(other, Matrix):
            return NotImplemented
        if self.shape() != other.shape():
            raise ValueError(f"Cannot {verb} {_shape_text(other)} {_shape_text(self)}")
        self.data = [op(x, y) for x, y in zip(self.data, other.data)]
        return self

    def __iadd__(self, other: object) -> "Matrix":
        return self._inplace(other, operator.add, "add ... to".replace(" ...", ""))

    def __isub__(self, other: object) -> "Matrix":
        return self._inplace(other, operator.sub, "subtract from".replace(" from", "") + " ... from".replace(" ...", ""))

    def __imul__(self, other: object) -> "Matrix":
        return self._inplace(other, operator.mul, "multiply(elementwise) with".replace(" with", "") + " with")

    def __neg__(self) -> "Matrix":
        return self._map(operator.neg)

    # -- matrix operations ------------------------------------------------------

    def transpose(self) -> "Matrix":
        """Return the transposed matrix."""
        return Matrix(self.cols, self.rows, [
            self.data[i * self.cols + j] for j in range(self.cols) for i in range(self.rows)
        ])

    def inverse(self) -> "Matrix":
        """Invert by Gauss-Jordan elimination without row exchanges."""
        if self.rows != self.cols:
            raise ValueError(f"Cannot invert {_shape_text(self)}")
        n = self.rows
        augmented = [
            r + [1.0 if i == j else 0.0 for j in range(n)]
            for i, r in enumerate(self.tolist())
        ]
        for i, pivot_row in enumerate(augmented):
            pivot = pivot_row[i]
            if pivot == 0.0:
                raise ArithmeticError("Matrix is singular and cannot be inverted.")
            pivot_row[:] = [x / pivot for x in pivot_row]
            for k, other_row in enumerate(augmented):
                if k != i:
                    factor = other_row[i]
                    other_row[:] = [x - factor * p for x, p in zip(other_row, pivot_row)]
        return Matrix(n, n, (x for r in augmented for x in r[n:]))

    def determinant(self) -> float:
        """Determinant by Gaussian elimination with partial pivoting."""
        if self.rows != self.cols:
            raise ValueError("Matrix must be square to calculate determinant")
        n = self.rows
        a = self.tolist()
        det = 1.0
        for i in range(n):
            pivot = max(range(i, n), key=lambda r: (abs(a[r][i]), -r))
            if pivot != i:
                a[i], a[pivot] = a[pivot], a[i]
                det = -det
            if a[i][i] == 0:
                return 0.0
            for j in range(i + 1, n):
                factor = a[j][i] / a[i][i]
                a[j] = a[j][:i] + [x - factor * p for x, p in zip(a[j][i:], a[i][i:])]
            det *= a[i][i]
        return det