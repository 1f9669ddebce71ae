# gradfit

A small, dependency-free toolkit of dense matrices and gradient-descent
models: linear regression, logistic regression and polynomial regression.

## Installing

    pip install .

For the test suite:

    pip install ".[test]"
    pytest

## Matrices

`gradfit.matrix.Matrix(rows, cols=1, data=None)` is a row-major matrix of
floats; `Matrix.from_rows(...)` builds one from a list of equal-length rows.
Entries are read and written as `m[i, j]`, or `m[i]` for a column vector.
`shape()`, `row(i)` and `tolist()` give its shape, one row as a 1 x cols
matrix, and its rows as lists.

It supports element-wise `+ - * /` with another matrix of the same shape, with
a matrix that differs by a single row or column (which is broadcast), or with
a number on either side; in-place `+= -= *=` between equal shapes; negation;
`transpose()`; `inverse()` (Gauss-Jordan, no row exchanges) and
`determinant()` (elimination with partial pivoting). Division by zero gives
infinity or NaN rather than raising.

    from gradfit.matrix import Matrix
    from gradfit.linalg import matmul, dot, norm, zeros, ones, eye, identity

    A = Matrix.from_rows([[2.0, 0.0], [0.0, 4.0]])
    A.shape()                # (2, 2)
    A.inverse().tolist()     # [[0.5, 0.0], [0.0, 0.25]]
    matmul(A, identity(2)) == A   # True

`gradfit.linalg` has `matmul`, `dot` (a 1 x n row with an n x 1 column,
summed in single precision), `norm` (Euclidean norm of a vector), and the
constructors `zeros`, `ones`, `eye` and `identity`.

`gradfit.ops` offers reductions `amax`, `argmax`, `amin` and `argmin`
(axis 0 gives a row of per-column results, axis 1 a column of per-row
results; with no axis a vector reduces to a 1 x 1 matrix) and element-wise
functions `fabs`, `exp`, `tanh`, `log` (natural, or to a given base) and
`sqrt`.

Shape mismatches and bad axes raise `ValueError`, out-of-range indices
`IndexError`, and inverting a matrix that meets a zero pivot raises
`ArithmeticError`.

## Models

    from gradfit.datasets import generate_linear_data, train_test_split
    from gradfit.linear import LinearRegression

    X, Y = generate_linear_data(1000, 10)
    (X_train, Y_train), (X_test, Y_test) = train_test_split(X, Y, 0.8)
    model = LinearRegression(10)
    model.train(X_train, Y_train, 0.0001, 10000)
    model.test(X_test, Y_test)

- `LinearRegression(d)` (in `gradfit.linear`): `l2loss`, `l2loss_derivative`,
  `predict`, `gradient_descent`, `train`, `test`, `accuracy`. `train` also
  computes bias-free closed-form weights (`closed_form_weights`) and prints
  the training loss, recorded at the start and every 1000th iteration.
- `LogisticRegression(d)` (in `gradfit.logistic`): `sigmoid`,
  `logistic_loss`, `loss_derivative`, `predict` (labels 0 or 1),
  `gradient_descent`, `train`, `test`, `accuracy` (fraction of matching
  labels). The loss is recorded after every iteration.
- `PolynomialRegression(d)` (in `gradfit.polynomial`): `transform` maps a
  single feature to its powers x, x², …, x^d; `train` takes the raw feature,
  computes closed-form weights and runs gradient descent without printing;
  `test` transforms its input and prints the results.

Training stops when the change in loss is at most 1e-15 or the iteration
limit is reached. `train` and `test` print to standard output unless given an
`out` stream. For the regression models, accuracy is the mean of
`1 - |relative error|`.

`gradfit.datasets` provides `parse_csv` (lines of comma-separated numbers,
target last), `train_test_split` (shuffles rows; takes an optional
`random.Random`) and the generators `generate_linear_data`,
`generate_binary_classification_data` and `generate_polynomial_data`, each
taking an optional `random.Random` for reproducible output.

## Commands

    gradfit-linear [FILE] [--seed N]

reads comma-separated rows from FILE or standard input (features followed by
the target in the last column), splits them 80/20, trains a linear model with
learning rate 0.0001 for up to 10000 iterations and prints the training loss,
predictions, test loss and accuracy.

    gradfit-logistic [--samples N] [--dims D] [--learning-rate R] [--iterations K] [--seed N]
    gradfit-polynomial [--samples N] [--degree D] [--learning-rate R] [--iterations K] [--seed N]

train on generated binary-classification data (defaults: 1000 samples,
10 dimensions) and polynomial data (defaults: 10000 samples, degree 10)
respectively, and print their results.

## What it does not do

Training losses are only printed as numbers; nothing is plotted. Models are
not saved to or loaded from files.