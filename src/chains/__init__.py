from src.chains.empirical import convergence_table, empirical_frequencies, total_variation_distance
from src.chains.errors import InvalidArgument, InvalidTransitionMatrix, MarkovChainError, SamplingFailure
from src.chains.examples import banded_random_walk, example_matrices, three_state_matrix, weather_matrix
from src.chains.simulator import ChainSimulation, exact_distribution, simulate, simulate_chains
from src.chains.stationary import is_stationary, stationary_distribution
from src.chains.transition import validate_positive_int, validate_transition_matrix

__all__ = [
    "ChainSimulation",
    "simulate",
    "simulate_chains",
    "exact_distribution",
    "stationary_distribution",
    "is_stationary",
    "empirical_frequencies",
    "total_variation_distance",
    "convergence_table",
    "three_state_matrix",
    "weather_matrix",
    "banded_random_walk",
    "example_matrices",
    "validate_transition_matrix",
    "validate_positive_int",
    "MarkovChainError",
    "InvalidTransitionMatrix",
    "InvalidArgument",
    "SamplingFailure",
]
