import io
import math
import random

import pytest

from gradfit.datasets import generate_binary_classification_data
from gradfit.logistic import LogisticRegression, main
from gradfit.matrix import Matrix


def _data():
    X = Matrix.from_rows([[1.0, 2.0], [-1.0, 0.5], [0.3, -0.7], [2.0, 1.0]])
    Y = Matrix(4, 1, [1, 0, 0, 1])
    return X, Y


def test_sigmoid_of_zero_is_half():
    model = LogisticRegression(2)
    result = model.sigmoid(Matrix(3, 1, [0, 0, 0]))
    assert result.data == [0.5, 0.5, 0.5]


def test_sigmoid_symmetry():
    model = LogisticRegression(1)
    z = Matrix(4, 1, [-3.0, -0.5, 1.2, 4.0])
    pos = model.sigmoid(z)
    neg = model.sigmoid(-z)
    for a, b in zip(pos.data, neg.data):
        assert a + b == pytest.approx(1.0)
    assert all(0.0 < v < 1.0 for v in pos.data)


def test_loss_at_zero_weights_is_log_two():
    X, Y = _data()
    model = LogisticRegression(2)
    assert model.logistic_loss(X, Y) == pytest.approx(math.log(2), abs=1e-6)


def test_loss_shape_mismatch():
    X, _ = _data()
    model = LogisticRegression(2)
    with pytest.raises(ValueError, match="Cannot compute loss"):
        model.logistic_loss(X, Matrix(3, 1))


def test_derivative_shape_mismatch():
    X, _ = _data()
    model = LogisticRegression(2)
    with pytest.raises(ValueError, match="loss derivative"):
        model.loss_derivative(X, Matrix(2, 1))


def test_derivative_matches_finite_difference():
    X, Y = _data()
    model = LogisticRegression(2)
    model.weights = Matrix(2, 1, [0.2, -0.1])
    model.bias = 0.05
    dw, db = model.loss_derivative(X, Y)
    h = 1e-3
    for j in range(2):
        base = model.logistic_loss(X, Y)
        model.weights[j, 0] += h
        shifted = model.logistic_loss(X, Y)
        model.weights[j, 0] -= h
        assert (shifted - base) / h == pytest.approx(dw[j, 0], abs=2e-3)
    base = model.logistic_loss(X, Y)
    model.bias += h
    shifted = model.logistic_loss(X, Y)
    assert (shifted - base) / h == pytest.approx(db, abs=2e-3)


def test_predict_zero_weights_gives_ones():
    X, _ = _data()
    model = LogisticRegression(2)
    assert model.predict(X).data == [1.0, 1.0, 1.0, 1.0]


def test_predict_thresholds():
    X, Y = _data()
    model = LogisticRegression(2)
    model.weights = Matrix(2, 1, [5.0, 5.0])
    model.bias = -5.0
    pred = model.predict(X)
    assert set(pred.data) <= {0.0, 1.0}
    assert model.accuracy(pred, Y) == 1.0


def test_accuracy_fraction():
    model = LogisticRegression(1)
    Y = Matrix(4, 1, [1, 0, 1, 0])
    Y_pred = Matrix(4, 1, [1, 1, 1, 0])
    assert model.accuracy(Y_pred, Y) == 0.75


def test_gradient_descent_reduces_loss():
    X, Y = generate_binary_classification_data(40, 2, random.Random(3))
    model = LogisticRegression(2)
    model.gradient_descent(X, Y, 1.0, 50)
    assert len(model.train_loss) == 51
    assert model.train_loss[-1] < model.train_loss[0]
    assert model.train_loss[-1] == pytest.approx(model.logistic_loss(X, Y))


def test_gradient_descent_zero_limit():
    X, Y = _data()
    model = LogisticRegression(2)
    model.gradient_descent(X, Y, 0.5, 0)
    assert len(model.train_loss) == 1
    assert model.weights.data == [0.0, 0.0]


def test_train_reports_losses():
    X, Y = _data()
    model = LogisticRegression(2)
    out = io.StringIO()
    model.train(X, Y, 0.1, 3, out=out)
    lines = out.getvalue().splitlines()
    assert lines[0] == "Training Loss"
    assert len(lines) == len(model.train_loss) + 1


def test_test_output():
    X, Y = _data()
    model = LogisticRegression(2)
    out = io.StringIO()
    model.test(X, Y, out=out)
    lines = out.getvalue().splitlines()
    assert lines[0] == "Predictions(GD) \t True Value"
    assert len(lines) == 1 + X.rows + 2
    assert lines[-2].startswith("Testing loss ")
    assert lines[-1] == "Testing accuracy 0.5"


def test_main_runs(capsys):
    code = main(["--samples", "20", "--dims", "2", "--iterations", "3", "--seed", "1"])
    captured = capsys.readouterr().out
    assert code == 0
    assert "Training Loss" in captured
    assert "Testing accuracy" in captured