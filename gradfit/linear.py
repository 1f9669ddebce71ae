"""Linear regression trained by gradient descent on the mean squared error."""

from __future__ import annotations

import argparse
import random
import sys
from typing import TextIO

from gradfit.datasets import parse_csv, train_test_split
from gradfit.linalg import dot, matmul, norm, ones, zeros
from gradfit.matrix import Matrix
from gradfit.ops import fabs

EPS = 1e-15
ETA = 0.001
LOSS_RECORD_INTERVAL = 1000


def _shape_text(shape: tuple[int, int]) -> str:
    return f"( {shape[0]} , {shape[1]} )"


class LinearRegression:
    """Model ``Y = Xw + b`` for an n x d input ``X``."""

    def __init__(self, d: int) -> None:
        self.d = d
        self.weights = zeros(d, 1)
        self.closed_form_weights = zeros(d, 1)
        self.bias = 0.0
        self.epsilon = EPS
        self.eta = ETA
        self.max_iterations = 0
        self.train_loss: list[float] = []

    def _residual(self, X: Matrix, Y: Matrix, what: str) -> Matrix:
        Y_pred = self.predict(X)
        if Y.shape() != Y_pred.shape():
            raise ValueError(
                f"Cannot compute {what} of vectors with dimensions {_shape_text(Y.shape())} "
                f"and {_shape_text(Y_pred.shape())} do not match"
            )
        return Y_pred - Y

    def l2loss(self, X: Matrix, Y: Matrix) -> float:
        """Mean squared error of the current model on (X, Y)."""
        residual = self._residual(X, Y, "loss")
        n = max(Y.shape())
        return norm(residual) ** 2 / n

    def l2loss_derivative(self, X: Matrix, Y: Matrix) -> tuple[Matrix, float]:
        """Gradient of the loss: (dL/dw, dL/db)."""
        residual = self._residual(X, Y, "loss derivative")
        n = X.rows
        dw = 2 * matmul(X.transpose(), residual) / n
        db = 2 * dot(ones(1, n), residual) / n
        return dw, db

    def predict(self, X: Matrix) -> Matrix:
        """Return ``Xw + b``."""
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
            if iteration % LOSS_RECORD_INTERVAL == 0:
                self.train_loss.append(loss)
            iteration += 1

    def train(
        self,
        X: Matrix,
        Y: Matrix,
        learning_rate: float,
        limit: int,
        out: TextIO | None = None,
    ) -> None:
        """Fit by gradient descent, also compute the bias-free closed-form weights, and report the loss."""
        out = sys.stdout if out is None else out
        Xt = X.transpose()
        Z = matmul(Xt, X)
        self.gradient_descent(X, Y, learning_rate, limit)
        self.closed_form_weights = matmul(Z.inverse(), matmul(Xt, Y))
        print("Training Loss", file=out)
        for loss in self.train_loss:
            print(f"{loss:g}", file=out)

    def test(self, X: Matrix, Y: Matrix, out: TextIO | None = None) -> None:
        """Print predictions against true values, then the loss and accuracy."""
        out = sys.stdout if out is None else out
        Y_pred = self.predict(X)
        Y_closed = matmul(X, self.closed_form_weights)
        print("Predictions(GD) \t Predictions(C) \t True Value", file=out)
        for i in range(X.rows):
            print(f"{Y_pred[i, 0]:g}\t\t\t {Y_closed[i, 0]:g}\t\t\t {Y[i, 0]:g}", file=out)
        print(f"Testing loss {self.l2loss(X, Y):g}", file=out)
        print(f"Testing accuracy {self.accuracy(Y_pred, Y):g}", file=out)

    def accuracy(self, Y_pred: Matrix, Y: Matrix) -> float:
        """Mean of ``1 - |relative error|`` over the samples."""
        n = Y.rows
        diff = (Y_pred - Y) / Y
        return dot(ones(1, n), 1 - fabs(diff)) / n


def main(argv: list[str] | None = None) -> int:
    """Read CSV rows, split 80/20, train a linear model and report on the test set."""
    parser = argparse.ArgumentParser(description="Fit a linear regression to CSV data.")
    parser.add_argument("input", nargs="?", help="CSV file; standard input if omitted")
    parser.add_argument("--seed", type=int, default=None, help="seed for the train/test shuffle")
    args = parser.parse_args(argv)

    if args.input is None:
        X, Y = parse_csv(sys.stdin)
    else:
        with open(args.input, encoding="utf-8") as handle:
            X, Y = parse_csv(handle)

    (X_train, Y_train), (X_test, Y_test) = train_test_split(X, Y, 0.8, random.Random(args.seed))
    model = LinearRegression(X.cols)
    model.train(X_train, Y_train, 0.0001, 10000)
    model.test(X_test, Y_test)
    return 0


if __name__ == "__main__":
    sys.exit(main())