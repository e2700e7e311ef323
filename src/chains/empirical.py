from __future__ import annotations

from typing import Optional

import numpy as np
import pandas as pd

from src.chains.errors import InvalidArgument
from src.chains.simulator import ChainSimulation


def empirical_frequencies(states: np.ndarray, n_states: int) -> np.ndarray:
    """
    Fraction of chains in each state at each time step.

    states: (n_steps, n_chains) array of 1-indexed states
    returns (n_steps, n_states); column j is state j + 1
    """
    s = np.asarray(states, dtype=int)
    if s.ndim != 2:
        raise InvalidArgument("states must be a 2D array (n_steps, n_chains)")
    if np.any(s < 1) or np.any(s > n_states):
        raise InvalidArgument(f"states must lie in [1, {n_states}]")

    counts = np.zeros((s.shape[0], n_states), dtype=float)
    for t in range(s.shape[0]):
        counts[t] = np.bincount(s[t] - 1, minlength=n_states)
    return counts / s.shape[1]


def total_variation_distance(p: np.ndarray, q: np.ndarray) -> float:
    a = np.asarray(p, dtype=float)
    b = np.asarray(q, dtype=float)
    if a.shape != b.shape:
        raise InvalidArgument(f"distributions must have the same shape, got {a.shape} and {b.shape}")
    return float(0.5 * np.abs(a - b).sum())


def convergence_table(
    simulation: ChainSimulation,
    stationary: Optional[np.ndarray] = None,
) -> pd.DataFrame:
    """
    One row per time step with:
      tv_empirical_vs_exact   sampling error of the chain ensemble
      tv_exact_vs_stationary  distance of e_1 P^t from pi (if pi given)
    """
    freq = empirical_frequencies(simulation.states, simulation.n_states)
    probs = simulation.probabilities

    records = {
        "step": np.arange(simulation.n_steps),
        "tv_empirical_vs_exact": 0.5 * np.abs(freq - probs).sum(axis=1),
    }
    if stationary is not None:
        pi = np.asarray(stationary, dtype=float)
        if pi.shape != (simulation.n_states,):
            raise InvalidArgument(f"stationary must have shape ({simulation.n_states},)")
        records["tv_exact_vs_stationary"] = 0.5 * np.abs(probs - pi).sum(axis=1)

    return pd.DataFrame(records)
