import io
import random

import pytest

from gradfit.datasets import generate_polynomial_data
from gradfit.matrix import Matrix
from gradfit.polynomial import PolynomialRegression, main


def _exact_data():
    xs = [0.5, 1.0, 1.5, 2.0]
    X = Matrix(4, 1, xs)
    Y = Matrix(4, 1, [2 * x + 3 * x * x for x in xs])
    return X, Y


def test_transform_powers():
    model = PolynomialRegression(3)
    phi = model.transform(Matrix(2, 1, [2.0, 3.0]))
    assert phi.shape() == (2, 3)
    assert phi.tolist() == [[2.0, 4.0, 8.0], [3.0, 9.0, 27.0]]


def test_transform_degree_zero_raises():
    model = PolynomialRegression(0)
    with pytest.raises(IndexError):
        model.transform(Matrix(2, 1, [1.0, 2.0]))


def test_loss_zero_for_exact_fit():
    model = PolynomialRegression(2)
    model.bias = 4.0
    phi = model.transform(Matrix(3, 1, [0.1, 0.2, 0.3]))
    Y = Matrix(3, 1, [4.0, 4.0, 4.0])
    assert model.l2loss(phi, Y) == 0.0
    dw, db = model.l2loss_derivative(phi, Y)
    assert dw.data == [0.0, 0.0]
    assert db == 0.0


def test_loss_shape_mismatch():
    model = PolynomialRegression(2)
    phi = model.transform(Matrix(3, 1, [0.1, 0.2, 0.3]))
    with pytest.raises(ValueError, match="Cannot compute loss"):
        model.l2loss(phi, Matrix(2, 1))
    with pytest.raises(ValueError, match="loss derivative"):
        model.l2loss_derivative(phi, Matrix(2, 1))


def test_closed_form_recovers_polynomial():
    X, Y = _exact_data()
    model = PolynomialRegression(2)
    model.train(X, Y, 0.01, 0)
    assert model.closed_form_weights.data == pytest.approx([2.0, 3.0], abs=1e-9)
    assert len(model.train_loss) == 1


def test_train_singular_raises():
    model = PolynomialRegression(2)
    X = Matrix(3, 1, [0.0, 0.0, 0.0])
    Y = Matrix(3, 1, [1.0, 1.0, 1.0])
    with pytest.raises(ArithmeticError):
        model.train(X, Y, 0.1, 5)


def test_gradient_descent_reduces_loss():
    X, Y = generate_polynomial_data(30, 2, random.Random(7))
    model = PolynomialRegression(2)
    model.train(X, Y, 0.1, 20)
    assert len(model.train_loss) == 21
    assert model.train_loss[-1] < model.train_loss[0]
    assert model.train_loss[-1] == pytest.approx(model.l2loss(model.transform(X), Y))


def test_accuracy_perfect():
    model = PolynomialRegression(1)
    Y = Matrix(3, 1, [1.0, 2.0, 4.0])
    assert model.accuracy(Y, Y) == 1.0


def test_predict_uses_weights_and_bias():
    X, Y = _exact_data()
    model = PolynomialRegression(2)
    model.train(X, Y, 0.01, 0)
    model.weights = model.closed_form_weights
    pred = model.predict(model.transform(X))
    assert pred.data == pytest.approx(Y.data)


def test_test_output():
    X, Y = _exact_data()
    model = PolynomialRegression(2)
    model.train(X, Y, 0.01, 2)
    out = io.StringIO()
    model.test(X, Y, out=out)
    lines = out.getvalue().splitlines()
    assert lines[0] == "Predictions(GD) \t Predictions(C) \t True Value"
    assert len(lines) == 1 + X.rows + 2
    assert lines[-2].startswith("Testing loss ")
    assert lines[-1].startswith("Testing accuracy ")


def test_main_runs(capsys):
    code = main(["--samples", "20", "--degree", "2", "--iterations", "3", "--seed", "1"])
    captured = capsys.readouterr().out
    assert code == 0
    assert "Testing loss" in captured
    assert "Testing accuracy" in captured