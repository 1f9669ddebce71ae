"""Logistic regression for binary labels trained by gradient descent."""

from __future__ import annotations

import argparse
import random
import sys
from typing import TextIO

from gradfit.datasets import generate_binary_classification_data, train_test_split
from gradfit.linalg import dot, matmul, ones, zeros
from gradfit.matrix import Matrix
from gradfit.ops import exp, log

EPS = 1e-15
ETA = 0.001


def _shape_text(shape: tuple[int, int]) -> str:
    return f"( {shape[0]} , {shape[1]} )"


class LogisticRegression:
    """Model ``Y = sigmoid(Xw + b)`` for an n x d input ``X`` and labels in {0, 1}."""

    def __init__(self, d: int) -> None:
        self.d = d
        self.weights = zeros(d, 1)
        self.bias = 0.0
        self.epsilon = EPS
        self.eta = ETA
        self.max_iterations = 0
        self.train_loss: list[float] = []

    def sigmoid(self, z: Matrix) -> Matrix:
        """Elementwise logistic function ``1 / (1 + exp(-z))``."""
        g = ones(z.rows, 1)
        return g / (g + exp(-z))

    def _probabilities(self, X: Matrix, Y: Matrix, what: str) -> Matrix:
        Y_pred = self.sigmoid(matmul(X, self.weights) + self.bias)
        if Y.shape() != Y_pred.shape():
            raise ValueError(
                f"Cannot compute {what} of vectors with dimensions {_shape_text(Y.shape())} "
                f"and {_shape_text(Y_pred.shape())} do not match"
            )
        return Y_pred

    def logistic_loss(self, X: Matrix, Y: Matrix) -> float:
        """Mean binary cross-entropy of the current model on (X, Y)."""
        Y_pred = self._probabilities(X, Y, "loss")
        n = max(Y.shape())
        Yt = Y.transpose()
        loss = -(dot(Yt, log(Y_pred)) + dot(1 - Yt, log(1 - Y_pred)))
        return loss / n

    def loss_derivative(self, X: Matrix, Y: Matrix) -> tuple[Matrix, float]:
        """Gradient of the loss: (dL/dw, dL/db)."""
        Y_pred = self._probabilities(X, Y, "loss derivative")
        n = X.rows
        diff = Y_pred - Y
        dw = matmul(X.transpose(), diff) / n
        db = dot(ones(1, n), diff) / n
        return dw, db

    def predict(self, X: Matrix) -> Matrix:
        """Class labels: 1 where the probability is at least 0.5, else 0."""
        probabilities = self.sigmoid(matmul(X, self.weights) + self.bias)
        return Matrix(
            probabilities.rows,
            probabilities.cols,
            [1.0 if p >= 0.5 else 0.0 for p in probabilities.data],
        )

    def gradient_descent(self, X: Matrix, Y: Matrix, learning_rate: float, limit: int) -> None:
        """Update weights and bias until the loss settles or ``limit`` steps pass."""
        self.eta = learning_rate
        self.max_iterations = limit
        old_loss = 0.0
        loss = self.logistic_loss(X, Y)
        self.train_loss.append(loss)
        iteration = 0
        while abs(loss - old_loss) > self.epsilon and iteration < self.max_iterations:
            old_loss = loss
            dw, db = self.loss_derivative(X, Y)
            self.weights = self.weights - self.eta * dw
            self.bias = self.bias - self.eta * db
            loss = self.logistic_loss(X, Y)
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
        """Fit by gradient descent and report the recorded training losses."""
        out = sys.stdout if out is None else out
        self.gradient_descent(X, Y, learning_rate, limit)
        print("Training Loss", file=out)
        for loss in self.train_loss:
            print(f"{loss:g}", file=out)

    def test(self, X: Matrix, Y: Matrix, out: TextIO | None = None) -> None:
        """Print predicted against true labels, then the loss and accuracy."""
        out = sys.stdout if out is None else out
        Y_pred = self.predict(X)
        print("Predictions(GD) \t True Value", file=out)
        for i in range(X.rows):
            print(f"{Y_pred[i, 0]:g}\t\t\t {Y[i, 0]:g}", file=out)
        print(f"Testing loss {self.logistic_loss(X, Y):g}", file=out)
        print(f"Testing accuracy {self.accuracy(Y_pred, Y):g}", file=out)

    def accuracy(self, Y_pred: Matrix, Y: Matrix) -> float:
        """Fraction of samples whose predicted label equals the true one."""
        n = Y.rows
        hits = sum(Y[i, 0] == Y_pred[i, 0] for i in range(n))
        return hits / n


def main(argv: list[str] | None = None) -> int:
    """Generate separable data, split 80/20, train and report on the test set."""
    parser = argparse.ArgumentParser(description="Fit a logistic regression to generated data.")
    parser.add_argument("--samples", type=int, default=1000, help="number of data points")
    parser.add_argument("--dims", type=int, default=10, help="dimensions of each data point")
    parser.add_argument("--learning-rate", type=float, default=0.0001)
    parser.add_argument("--iterations", type=int, default=10000, help="iteration limit")
    parser.add_argument("--seed", type=int, default=None, help="seed for data and shuffle")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    X, Y = generate_binary_classification_data(args.samples, args.dims, rng)
    (X_train, Y_train), (X_test, Y_test) = train_test_split(X, Y, 0.8, rng)
    model = LogisticRegression(args.dims)
    model.train(X_train, Y_train, args.learning_rate, args.iterations)
    model.test(X_test, Y_test)
    return 0


if __name__ == "__main__":
    sys.exit(main())