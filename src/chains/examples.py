from __future__ import annotations

import numpy as np


def three_state_matrix() -> np.ndarray:
    """
    3-state chain with stationary distribution approx [0.54, 0.41, 0.05].
    State 3 always moves to state 2.
    """
    return np.array(
        [
            [0.7, 0.2, 0.1],
            [0.4, 0.6, 0.0],
            [0.0, 1.0, 0.0],
        ],
        dtype=float,
    )


def weather_matrix() -> np.ndarray:
    # State 1 = sunny, state 2 = rainy
    return np.array(
        [
            [0.9, 0.1],
            [0.5, 0.5],
        ],
        dtype=float,
    )


def banded_random_walk(n_states: int = 5, p_up: float = 0.3, p_down: float = 0.3) -> np.ndarray:
    """
    Lazy random walk on 1..n_states with reflecting ends (tridiagonal).

    Mass that would step past an end stays in place.
    """
    if n_states < 2:
        raise ValueError("n_states must be >= 2")
    if p_up < 0.0 or p_down < 0.0 or p_up + p_down > 1.0:
        raise ValueError("p_up and p_down must be non-negative with p_up + p_down <= 1")

    p = np.zeros((n_states, n_states), dtype=float)
    for i in range(n_states):
        stay = 1.0 - p_up - p_down
        if i + 1 < n_states:
            p[i, i + 1] = p_up
        else:
            stay += p_up
        if i > 0:
            p[i, i - 1] = p_down
        else:
            stay += p_down
        p[i, i] = stay
    return p


def example_matrices() -> dict[str, np.ndarray]:
    return {
        "three_state": three_state_matrix(),
        "weather": weather_matrix(),
        "random_walk": banded_random_walk(),
    }
