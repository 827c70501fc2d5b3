"""Conversions between the stacked (12,) and per-leg (3, 4) layouts."""

import numpy as np


def vec12_to_vec34(vec12):
    """Turn a 12-vector into a 3x4 matrix whose column i holds elements 3i..3i+2."""
    arr = np.asarray(vec12, dtype=float)
    if arr.size != 12:
        raise ValueError(f"expected 12 elements, got {arr.size}")
    return arr.reshape(4, 3).T.copy()


def vec34_to_vec12(vec34):
    """Stack the four columns of a 3x4 matrix into one 12-vector."""
    arr = np.asarray(vec34, dtype=float)
    if arr.shape != (3, 4):
        raise ValueError(f"expected shape (3, 4), got {arr.shape}")
    return arr.T.reshape(12).copy()