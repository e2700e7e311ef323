from __future__ import annotations

import numbers

import numpy as np

from src.chains.errors import InvalidArgument, InvalidTransitionMatrix
from src.config import settings


def validate_transition_matrix(
    transition_matrix: np.ndarray,
    atol: float = settings.row_sum_atol,
) -> np.ndarray:
    """
    Return a float copy of a stochastic matrix, or raise InvalidTransitionMatrix.

    Entry (i, j) is P(next state = j | current state = i), so every row
    must be a probability vector. Row sums are checked to within `atol`
    so literals like [0.1, 0.2, 0.7] pass despite rounding.
    """
    p = np.array(transition_matrix, dtype=float)
    if p.ndim != 2 or p.shape[0] != p.shape[1]:
        raise InvalidTransitionMatrix(f"Transition matrix must be a square 2D array, got shape {p.shape}")
    if p.shape[0] < 1:
        raise InvalidTransitionMatrix("Transition matrix must have at least one state")
    if not np.all(np.isfinite(p)):
        raise InvalidTransitionMatrix("Transition matrix must contain finite values")
    if np.any(p < 0.0):
        raise InvalidTransitionMatrix("Transition probabilities must be non-negative")

    row_sums = p.sum(axis=1)
    bad_rows = np.flatnonzero(~np.isclose(row_sums, 1.0, rtol=0.0, atol=atol))
    if bad_rows.size:
        first = int(bad_rows[0])
        raise InvalidTransitionMatrix(
            f"Each transition-matrix row must sum to 1 (row {first + 1} sums to {row_sums[first]:.12g})"
        )
    return p


def validate_positive_int(value: int, name: str) -> int:
    # bool is an Integral, but n_steps=True is always a mistake
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgument(f"{name} must be an integer, got {type(value).__name__}")
    if value < 1:
        raise InvalidArgument(f"{name} must be >= 1, got {value}")
    return int(value)
