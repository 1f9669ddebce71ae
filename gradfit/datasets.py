"""Reading, generating and splitting datasets for the regression models."""

from __future__ import annotations

import random
from typing import Iterable

from gradfit.matrix import Matrix


def _rng(rng: random.Random | None) -> random.Random:
    return rng if rng is not None else random.Random()


def train_test_split(
    X: Matrix,
    Y: Matrix,
    ratio: float,
    rng: random.Random | None = None,
) -> tuple[tuple[Matrix, Matrix], tuple[Matrix, Matrix]]:
    """Shuffle the rows and split them into ((X_train, Y_train), (X_test, Y_test)).

    The first ``int(n * ratio)`` shuffled rows form the training set; ``Y``
    contributes its first column.
    """
    if ratio < 0 or ratio > 1:
        raise ValueError("Ratio must be between 0 and 1")
    n = X.rows
    train_size = int(n * ratio)
    indices = list(range(n))
    _rng(rng).shuffle(indices)

    def take(chosen: list[int]) -> tuple[Matrix, Matrix]:
        xs = Matrix(len(chosen), X.cols, (v for i in chosen for v in X.row(i).data))
        ys = Matrix(len(chosen), 1, (Y[i, 0] for i in chosen))
        return xs, ys

    return take(indices[:train_size]), take(indices[train_size:])


def _parse_line(line: str) -> list[float]:
    tokens = line.split(",")
    if len(tokens) > 1 and tokens[-1] == "":
        tokens.pop()
    try:
        return [float(token) for token in tokens]
    except ValueError as exc:
        raise ValueError(f"Cannot parse line {line!r}") from exc


def parse_csv(stream: Iterable[str]) -> tuple[Matrix, Matrix]:
    """Read comma-separated rows whose last value is the target.

    Returns the n x d feature matrix and the n x 1 target column.
    """
    features: list[list[float]] = []
    targets: list[float] = []
    for line in stream:
        values = _parse_line(line.rstrip("\n"))
        targets.append(values.pop())
        features.append(values)
    if not features:
        raise ValueError("No data rows in input")
    return Matrix.from_rows(features), Matrix(len(targets), 1, targets)


def generate_linear_data(
    n: int, d: int, rng: random.Random | None = None
) -> tuple[Matrix, Matrix]:
    """Random features in [0, 1] with targets from a random linear model plus small noise."""
    rng = _rng(rng)
    weights = [rng.random() for _ in range(d)]
    bias = rng.random()
    X = Matrix(n, d)
    Y = Matrix(n, 1)
    for i in range(n):
        y = bias
        for j, w in enumerate(weights):
            x = rng.random()
            X[i, j] = x
            y += x * w
        y += rng.random() * 0.1
        Y[i, 0] = y
    return X, Y


def generate_binary_classification_data(
    n: int, d: int, rng: random.Random | None = None
) -> tuple[Matrix, Matrix]:
    """Features in [-1, 1] labelled 1 or 0 by the side of a random hyperplane."""
    rng = _rng(rng)
    weights = [rng.random() * 2 - 1 for _ in range(d)]
    bias = rng.random() * 2 - 1
    X = Matrix(n, d)
    Y = Matrix(n, 1)
    for i in range(n):
        combination = bias
        for j, w in enumerate(weights):
            x = rng.random() * 2 - 1
            X[i, j] = x
            combination += x * w
        Y[i, 0] = 1.0 if combination >= 0 else 0.0
    return X, Y


def generate_polynomial_data(
    n: int, degree: int, rng: random.Random | None = None
) -> tuple[Matrix, Matrix]:
    """Single feature in [0, 1] with targets from a random polynomial plus small noise."""
    rng = _rng(rng)
    coefficients = [rng.random() for _ in range(degree + 1)]
    X = Matrix(n, 1)
    Y = Matrix(n, 1)
    for i in range(n):
        x = rng.random()
        y = sum(c * x**j for j, c in enumerate(coefficients))
        y += 0.1 * rng.random()
        X[i, 0] = x
        Y[i, 0] = y
    return X, Y