import numpy as np

from src.chains.empirical import convergence_table, empirical_frequencies, total_variation_distance
from src.chains.examples import banded_random_walk, three_state_matrix
from src.chains.simulator import simulate
from src.chains.stationary import stationary_distribution


def test_empirical_frequencies_counts_by_state() -> None:
    states = np.array(
        [
            [1, 1, 1, 1],
            [1, 2, 2, 3],
        ]
    )
    freq = empirical_frequencies(states, n_states=3)

    np.testing.assert_allclose(freq[0], [1.0, 0.0, 0.0])
    np.testing.assert_allclose(freq[1], [0.25, 0.5, 0.25])


def test_empirical_frequencies_rows_sum_to_one() -> None:
    sim = simulate(banded_random_walk(5), n_steps=30, n_chains=25, seed=4)
    freq = empirical_frequencies(sim.states, sim.n_states)
    assert freq.shape == (30, 5)
    assert np.allclose(freq.sum(axis=1), 1.0)


def test_total_variation_distance() -> None:
    assert total_variation_distance([1.0, 0.0], [0.0, 1.0]) == 1.0
    assert total_variation_distance([0.5, 0.5], [0.5, 0.5]) == 0.0
    assert np.isclose(total_variation_distance([0.6, 0.3, 0.1], [0.5, 0.4, 0.1]), 0.1)


def test_empirical_tracks_exact_with_default_chains() -> None:
    sim = simulate(three_state_matrix(), n_steps=50, n_chains=150, seed=2024)
    table = convergence_table(sim)

    # sampling noise only; averaged over the tail to keep the check stable
    assert table["tv_empirical_vs_exact"].iloc[-20:].mean() < 0.1


def test_empirical_error_shrinks_with_more_chains() -> None:
    sim = simulate(three_state_matrix(), n_steps=50, n_chains=5000, seed=7)
    freq = empirical_frequencies(sim.states, sim.n_states)
    assert total_variation_distance(freq[-1], sim.probabilities[-1]) < 0.05


def test_convergence_table_columns() -> None:
    P = three_state_matrix()
    sim = simulate(P, n_steps=40, n_chains=10, seed=1)
    table = convergence_table(sim, stationary=stationary_distribution(P))

    assert list(table.columns) == ["step", "tv_empirical_vs_exact", "tv_exact_vs_stationary"]
    assert len(table) == 40
    assert table["tv_empirical_vs_exact"].iloc[0] == 0.0
    assert table["tv_exact_vs_stationary"].iloc[-1] < 0.01
    # exact distribution ends closer to pi than after one step
    assert table["tv_exact_vs_stationary"].iloc[-1] < table["tv_exact_vs_stationary"].iloc[1]
