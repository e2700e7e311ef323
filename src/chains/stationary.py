from __future__ import annotations

import numpy as np

from src.chains.transition import validate_transition_matrix


def stationary_distribution(transition_matrix: np.ndarray) -> np.ndarray:
    """
    Solve pi P = pi with sum(pi) = 1.

    The balance equations (P^T - I) pi = 0 are stacked with a row of ones
    for the normalisation and solved by least squares. The solution is
    unique when the chain is irreducible.
    """
    p = validate_transition_matrix(transition_matrix)
    n_states = p.shape[0]

    a = np.vstack([p.T - np.eye(n_states), np.ones((1, n_states))])
    b = np.zeros(n_states + 1, dtype=float)
    b[-1] = 1.0

    pi, *_ = np.linalg.lstsq(a, b, rcond=None)
    pi = np.clip(pi, 0.0, None)
    return pi / pi.sum()


def is_stationary(transition_matrix: np.ndarray, pi: np.ndarray, atol: float = 1e-9) -> bool:
    p = validate_transition_matrix(transition_matrix)
    v = np.asarray(pi, dtype=float)
    if v.shape != (p.shape[0],):
        return False
    return bool(np.isclose(v.sum(), 1.0, atol=atol) and np.allclose(v @ p, v, atol=atol))
