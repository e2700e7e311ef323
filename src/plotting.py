from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from src.chains.empirical import empirical_frequencies
from src.chains.simulator import ChainSimulation


def get_pyplot(disable_plots: bool = False):
    """
    Return matplotlib.pyplot with a safe backend/config for local or headless runs.
    """
    if "MPLCONFIGDIR" not in os.environ:
        mpl_dir = Path(tempfile.gettempdir()) / "markov_convergence_mpl"
        mpl_dir.mkdir(parents=True, exist_ok=True)
        os.environ["MPLCONFIGDIR"] = str(mpl_dir)

    import matplotlib

    if disable_plots and "MPLBACKEND" not in os.environ:
        matplotlib.use("Agg", force=True)
    elif "DISPLAY" not in os.environ and "MPLBACKEND" not in os.environ:
        matplotlib.use("Agg", force=True)

    import matplotlib.pyplot as plt

    return plt


def plot_chain_paths(
    states: np.ndarray,
    chains: Sequence[int],
    out_path: Path,
    title: str = "Simulated chain paths",
) -> Path:
    """
    Step plot of selected chain columns (0-based column indices) over time.
    """
    plt = get_pyplot()
    s = np.asarray(states, dtype=int)
    steps = np.arange(s.shape[0])

    fig, ax = plt.subplots()
    for c in chains:
        ax.step(steps, s[:, c], where="post", label=f"chain {c + 1}")
    ax.set_yticks(np.arange(1, int(s.max()) + 1))
    ax.set_title(title)
    ax.set_xlabel("Step")
    ax.set_ylabel("State")
    ax.legend(loc="upper right", fontsize="small")
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path


def plot_probability_trajectory(
    probabilities: np.ndarray,
    out_path: Path,
    title: str = "Exact state probabilities",
    stationary: Optional[np.ndarray] = None,
) -> Path:
    plt = get_pyplot()
    probs = np.asarray(probabilities, dtype=float)
    steps = np.arange(probs.shape[0])

    fig, ax = plt.subplots()
    for j in range(probs.shape[1]):
        line, = ax.plot(steps, probs[:, j], label=f"state {j + 1}")
        if stationary is not None:
            ax.axhline(stationary[j], color=line.get_color(), linestyle="--", linewidth=0.8)
    ax.set_ylim(-0.02, 1.02)
    ax.set_title(title)
    ax.set_xlabel("Step")
    ax.set_ylabel("P(X_t = state)")
    ax.legend(loc="upper right")
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path


def plot_empirical_vs_exact(
    simulation: ChainSimulation,
    out_path: Path,
    title: str = "Empirical vs exact state frequencies",
) -> Path:
    """
    Solid lines: exact probabilities. Markers: fraction of chains in each state.
    """
    plt = get_pyplot()
    freq = empirical_frequencies(simulation.states, simulation.n_states)
    steps = np.arange(simulation.n_steps)

    fig, ax = plt.subplots()
    for j in range(simulation.n_states):
        line, = ax.plot(steps, simulation.probabilities[:, j], label=f"state {j + 1}")
        ax.plot(steps, freq[:, j], linestyle="none", marker=".", color=line.get_color())
    ax.set_ylim(-0.02, 1.02)
    ax.set_title(title)
    ax.set_xlabel("Step")
    ax.set_ylabel("Probability / frequency")
    ax.legend(loc="upper right")
    fig.savefig(out_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out_path
