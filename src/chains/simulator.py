from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Union

import numpy as np

from src.chains.errors import SamplingFailure
from src.chains.transition import validate_positive_int, validate_transition_matrix

SeedLike = Union[int, np.random.Generator, None]


@dataclass(frozen=True)
class ChainSimulation:
    """
    Output of one simulation run.

    probabilities: (n_steps, n_states) exact distribution, row t = e_1 P^t
    states:        (n_steps, n_chains) 1-indexed state of each chain
    """
    probabilities: np.ndarray
    states: np.ndarray

    @property
    def n_steps(self) -> int:
        return int(self.states.shape[0])

    @property
    def n_chains(self) -> int:
        return int(self.states.shape[1])

    @property
    def n_states(self) -> int:
        return int(self.probabilities.shape[1])

    def __iter__(self) -> Iterator[np.ndarray]:
        # allows `probs, states = simulate(P)`
        return iter((self.probabilities, self.states))


def exact_distribution(transition_matrix: np.ndarray, n_steps: int = 50) -> np.ndarray:
    """
    Exact n-step distributions starting from state 1.

    Row 0 is e_1 = [1, 0, ..., 0]; row t is e_1 P^t, obtained by carrying
    the power matrix forward one multiplication per step.
    """
    p = validate_transition_matrix(transition_matrix)
    n_steps = validate_positive_int(n_steps, "n_steps")
    n_states = p.shape[0]

    pi0 = np.zeros(n_states, dtype=float)
    pi0[0] = 1.0

    probs = np.zeros((n_steps, n_states), dtype=float)
    probs[0] = pi0

    p_n = p.copy()
    for t in range(1, n_steps):
        probs[t] = pi0 @ p_n
        p_n = p_n @ p

    return probs


def simulate_chains(
    transition_matrix: np.ndarray,
    n_steps: int = 50,
    n_chains: int = 150,
    seed: SeedLike = None,
) -> np.ndarray:
    """
    Simulate independent chains that all start in state 1.

    Returns an int array of shape (n_steps, n_chains) with 1-indexed states.
    `seed` is an int, None, or an existing np.random.Generator.
    """
    p = validate_transition_matrix(transition_matrix)
    n_steps = validate_positive_int(n_steps, "n_steps")
    n_chains = validate_positive_int(n_chains, "n_chains")
    n_states = p.shape[0]

    # rows that are off from 1 by rounding are sampled in their intended proportions
    rows = p / p.sum(axis=1, keepdims=True)

    rng = np.random.default_rng(seed)
    states = np.zeros((n_steps, n_chains), dtype=int)
    states[0] = 1

    for t in range(1, n_steps):
        prev = states[t - 1]
        nxt = np.zeros(n_chains, dtype=int)
        for s in np.unique(prev):
            in_s = prev == s
            try:
                draws = rng.choice(n_states, size=int(in_s.sum()), p=rows[s - 1])
            except ValueError as exc:
                raise SamplingFailure(f"Categorical draw from state {s} failed at step {t}: {exc}") from exc
            if np.any(draws < 0) or np.any(draws >= n_states):
                raise SamplingFailure(f"Categorical draw from state {s} returned an invalid index at step {t}")
            nxt[in_s] = draws + 1
        states[t] = nxt

    return states


def simulate(
    transition_matrix: np.ndarray,
    n_steps: int = 50,
    n_chains: int = 150,
    seed: SeedLike = None,
) -> ChainSimulation:
    """
    Run `n_chains` independent chains for `n_steps` time points and the
    exact distribution alongside.

    Both outputs have `n_steps` rows; row 0 is the deterministic start
    (every chain in state 1, all probability mass on state 1).
    """
    p = validate_transition_matrix(transition_matrix)
    probs = exact_distribution(p, n_steps=n_steps)
    states = simulate_chains(p, n_steps=n_steps, n_chains=n_chains, seed=seed)
    return ChainSimulation(probabilities=probs, states=states)
