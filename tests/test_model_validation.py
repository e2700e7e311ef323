import numpy as np
import pytest

from src.chains import simulator
from src.chains.empirical import empirical_frequencies, total_variation_distance
from src.chains.errors import InvalidArgument, InvalidTransitionMatrix, SamplingFailure
from src.chains.examples import banded_random_walk, three_state_matrix
from src.chains.simulator import exact_distribution, simulate, simulate_chains
from src.chains.transition import validate_positive_int, validate_transition_matrix


def test_rejects_rows_not_summing_to_one() -> None:
    bad_p = np.array([[0.9, 0.2], [0.1, 0.8]], dtype=float)
    with pytest.raises(InvalidTransitionMatrix, match="row must sum to 1"):
        simulate(bad_p, n_steps=5, n_chains=2, seed=1)


def test_rejects_negative_probabilities() -> None:
    bad_p = np.array([[1.1, -0.1], [0.2, 0.8]], dtype=float)
    with pytest.raises(InvalidTransitionMatrix, match="non-negative"):
        simulate(bad_p)


def test_rejects_non_square_matrix() -> None:
    with pytest.raises(InvalidTransitionMatrix, match="square"):
        validate_transition_matrix(np.array([[0.5, 0.5, 0.0], [0.0, 0.5, 0.5]]))


def test_rejects_empty_matrix() -> None:
    with pytest.raises(InvalidTransitionMatrix, match="at least one state"):
        validate_transition_matrix(np.zeros((0, 0)))


def test_rejects_non_finite_entries() -> None:
    with pytest.raises(InvalidTransitionMatrix, match="finite"):
        validate_transition_matrix(np.array([[np.nan, 1.0], [0.5, 0.5]]))


def test_invalid_matrix_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        validate_transition_matrix(np.array([[0.3, 0.3], [0.5, 0.5]]))


def test_rejects_zero_steps() -> None:
    with pytest.raises(InvalidArgument, match="n_steps must be >= 1"):
        simulate(three_state_matrix(), n_steps=0)


def test_rejects_zero_chains() -> None:
    with pytest.raises(InvalidArgument, match="n_chains must be >= 1"):
        simulate_chains(three_state_matrix(), n_steps=5, n_chains=0)


def test_rejects_non_integer_sizes() -> None:
    with pytest.raises(InvalidArgument, match="integer"):
        exact_distribution(three_state_matrix(), n_steps=2.5)
    with pytest.raises(InvalidArgument, match="integer"):
        validate_positive_int(True, "n_chains")


def test_accepts_numpy_integers() -> None:
    assert validate_positive_int(np.int64(3), "n_steps") == 3


class _FakeGenerator:
    def __init__(self, choice) -> None:
        self.choice = choice


def test_sampling_failure_wraps_generator_errors(monkeypatch) -> None:
    def broken_choice(*args, **kwargs):
        raise ValueError("probabilities do not sum to 1")

    monkeypatch.setattr(simulator.np.random, "default_rng", lambda seed: _FakeGenerator(broken_choice))
    with pytest.raises(SamplingFailure, match="Categorical draw"):
        simulate_chains(three_state_matrix(), n_steps=3, n_chains=2, seed=0)


def test_sampling_failure_on_out_of_range_index(monkeypatch) -> None:
    def off_by_one_choice(a, size=None, p=None):
        return np.full(size, a, dtype=int)

    monkeypatch.setattr(simulator.np.random, "default_rng", lambda seed: _FakeGenerator(off_by_one_choice))
    with pytest.raises(SamplingFailure, match="invalid index"):
        simulate_chains(three_state_matrix(), n_steps=3, n_chains=2, seed=0)


def test_empirical_frequencies_rejects_bad_labels() -> None:
    with pytest.raises(InvalidArgument, match=r"\[1, 2\]"):
        empirical_frequencies(np.array([[1, 3]]), n_states=2)


def test_total_variation_rejects_shape_mismatch() -> None:
    with pytest.raises(InvalidArgument, match="same shape"):
        total_variation_distance(np.array([0.5, 0.5]), np.array([1.0, 0.0, 0.0]))


def test_random_walk_rejects_bad_parameters() -> None:
    with pytest.raises(ValueError, match="p_up"):
        banded_random_walk(4, p_up=0.7, p_down=0.4)
    with pytest.raises(ValueError, match="n_states"):
        banded_random_walk(1)
