from __future__ import annotations


class MarkovChainError(Exception):
    """
    Base class for errors raised by the chain simulation code.
    """


class InvalidTransitionMatrix(MarkovChainError, ValueError):
    """
    Transition matrix is not square, has negative/non-finite entries,
    or has rows that do not sum to 1.
    """


class InvalidArgument(MarkovChainError, ValueError):
    """
    Run parameter (number of steps, number of chains, ...) is out of range.
    """


class SamplingFailure(MarkovChainError, RuntimeError):
    """
    A categorical draw did not produce a valid state index.
    """
