"""Dense matrices, matrix functions, datasets and gradient-descent regression models."""

__version__ = "0.1.0"