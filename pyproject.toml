[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gradfit"
version = "0.1.0"
description = "Small dense matrices and gradient-descent models: linear, logistic and polynomial regression"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "matrix",
    "linear regression",
    "logistic regression",
    "polynomial regression",
    "gradient descent",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
gradfit-linear = "gradfit.linear:main"
gradfit-logistic = "gradfit.logistic:main"
gradfit-polynomial = "gradfit.polynomial:main"

[tool.hatch.build.targets.wheel]
packages = ["gradfit"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
