"""Polynomial regression of one feature by gradient descent on its powers."""

from __future__ import annotations

import argparse
import itertools
import operator
import random
import sys
from typing import TextIO

from gradfit.datasets import generate_polynomial_data, train_test_split
from gradfit.linalg import dot, matmul, norm, ones, zeros
from gradfit.matrix import Matrix
from gradfit.ops import fabs

EPS = 1e-15
ETA = 0.001


def _shape_text(shape: tuple[int, int]) -> str:
    return f"( {shape[0]} , {shape[1]} )"


class PolynomialRegression:
    """Model ``y = w1 x + w2 x^2 + ... + wd x^d + b`` of degree ``d``."""

    def __init__(self, d: int) -> None:
        self.d = d
        self.weights = zeros(d, 1)
        self.closed_form_weights = zeros(d, 1)
        self.bias = 0.0
        self.epsilon = EPS
        self.eta = ETA
        self.max_iterations = 0
        self.train_loss: list[float] = []

    def transform(self, X: Matrix) -> Matrix:
        """Map the first column of ``X`` to the n x d matrix of powers x, x^2, ..., x^d."""
        if self.d < 1 and X.rows > 0:
            raise IndexError("Index out of bounds")
        rows = [
            list(itertools.accumulate(itertools.repeat(X[i, 0], self.d), operator.mul))
            for i in range(X.rows)
        ]
        return Matrix(X.rows, self.d, (v for r in rows for v in r))

    def _residual(self, X: Matrix, Y: Matrix, what: str) -> Matrix:
        Y_pred = self.predict(X)
        if Y.shape() != Y_pred.shape():
            raise ValueError(
                f"Cannot compute {what} of vectors with dimensions {_shape_text(Y.shape())} "
                f"and {_shape_text(Y_pred.shape())} do not match"
            )
        return Y_pred - Y

    def l2loss(self, X: Matrix, Y: Matrix) -> float:
        """Mean squared error on already transformed features ``X``."""
        residual = self._residual(X, Y, "loss")
        return norm(residual) ** 2 / max(Y.shape())

    def l2loss_derivative(self, X: Matrix, Y: Matrix) -> tuple[Matrix, float]:
        """Gradient of the loss: (dL/dw, dL/db)."""
        residual = self._residual(X, Y, "loss derivative")
        n = X.rows
        dw = 2 * matmul(X.transpose(), residual) / n
        db = 2 * dot(ones(1, n), residual) / n
        return dw, db

    def predict(self, X: Matrix) -> Matrix:
        """Return ``Xw + b`` for transformed features ``X``."""
        return matmul(X, self.weights) + self.bias

    def gradient_descent(self, X: Matrix, Y: Matrix, learning_rate: float, limit: int) -> None:
        """Update weights and bias until the loss settles or ``limit`` steps pass."""
        self.eta = learning_rate
        self.max_iterations = limit
        old_loss = 0.0
        loss = self.l2loss(X, Y)
        self.train_loss.append(loss)
        iteration = 0
        while abs(loss - old_loss) > self.epsilon and iteration < self.max_iterations:
            old_loss = loss
            dw, db = self.l2loss_derivative(X, Y)
            self.weights = self.weights - self.eta * dw
            self.bias = self.bias - self.eta * db
            loss = self.l2loss(X, Y)
            self.train_loss.append(loss)
            iteration += 1

    def train(self, X: Matrix, Y: Matrix, learning_rate: float, limit: int) -> None:
        """Compute the bias-free closed-form weights, then fit by gradient descent."""
        phi = self.transform(X)
        phi_t = phi.transpose()
        Z = matmul(phi_t, phi)
        self.closed_form_weights = matmul(Z.inverse(), matmul(phi_t, Y))
        self.gradient_descent(phi, Y, learning_rate, limit)

    def test(self, X: Matrix, Y: Matrix, out: TextIO | None = None) -> None:
        """Print predictions against true values, then the loss and accuracy."""
        out = sys.stdout if out is None else out
        phi = self.transform(X)
        Y_pred = self.predict(phi)
        Y_closed = matmul(phi, self.closed_form_weights)
        print("Predictions(GD) \t Predictions(C) \t True Value", file=out)
        for i in range(phi.rows):
            print(f"{Y_pred[i, 0]:g}\t\t\t {Y_closed[i, 0]:g}\t\t\t {Y[i, 0]:g}", file=out)
        print(f"Testing loss {self.l2loss(phi, Y):g}", file=out)
        print(f"Testing accuracy {self.accuracy(Y_pred, Y):g}", file=out)

    def accuracy(self, Y_pred: Matrix, Y: Matrix) -> float:
        """Mean of ``1 - |relative error|`` over the samples."""
        n = Y.rows
        diff = (Y_pred - Y) / Y
        return dot(ones(1, n), 1 - fabs(diff)) / n


def main(argv: list[str] | None = None) -> int:
    """Generate polynomial data, split 80/20, train and report on the test set."""
    parser = argparse.ArgumentParser(description="Fit a polynomial regression to generated data.")
    parser.add_argument("--samples", type=int, default=10000, help="number of data points")
    parser.add_argument("--degree", type=int, default=10, help="degree of the polynomial")
    parser.add_argument("--learning-rate", type=float, default=0.0001)
    parser.add_argument("--iterations", type=int, default=10000, help="iteration limit")
    parser.add_argument("--seed", type=int, default=None, help="seed for data and shuffle")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    X, Y = generate_polynomial_data(args.samples, args.degree, rng)
    (X_train, Y_train), (X_test, Y_test) = train_test_split(X, Y, 0.8, rng)
    model = PolynomialRegression(args.degree)
    model.train(X_train, Y_train, args.learning_rate, args.iterations)
    model.test(X_test, Y_test)
    return 0


if __name__ == "__main__":
    sys.exit(main())