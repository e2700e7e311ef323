from __future__ import annotations

import argparse

import numpy as np
import pandas as pd

from src.chains.empirical import convergence_table, empirical_frequencies, total_variation_distance
from src.chains.examples import example_matrices
from src.chains.simulator import simulate
from src.chains.stationary import stationary_distribution
from src.config import PROJECT_ROOT, settings
from src.plotting import plot_chain_paths, plot_empirical_vs_exact, plot_probability_trajectory
from src.runtime_utils import add_common_simulation_args, write_run_metadata


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Convergence of simulated Markov chains to the stationary distribution.")
    add_common_simulation_args(
        parser,
        default_n_steps=settings.n_steps,
        default_n_chains=settings.n_chains,
        default_seed=settings.seed,
    )
    parser.add_argument(
        "--chains-to-plot",
        type=int,
        default=settings.chains_to_plot,
        help="Number of individual chain paths to draw.",
    )
    return parser


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()

    settings.output_dir.mkdir(parents=True, exist_ok=True)

    summary: dict[str, dict[str, object]] = {}

    # each example gets its own seed so runs share no random state
    for i, (name, P) in enumerate(example_matrices().items()):
        sim = simulate(P, n_steps=args.n_steps, n_chains=args.n_chains, seed=args.seed + i)
        pi = stationary_distribution(P)

        freq_last = empirical_frequencies(sim.states, sim.n_states)[-1]
        exact_last = sim.probabilities[-1]

        print(f"=== {name} ({sim.n_states} states, {sim.n_chains} chains, {sim.n_steps} steps) ===")
        print("Transition matrix:")
        print(pd.DataFrame(P, index=range(1, sim.n_states + 1), columns=range(1, sim.n_states + 1)).to_string())

        comp = pd.DataFrame(
            {
                "state": np.arange(1, sim.n_states + 1),
                "stationary": pi,
                "exact_last": exact_last,
                "empirical_last": freq_last,
            }
        )
        print(comp.to_string(index=False, float_format=lambda v: f"{v:.4f}"))

        table = convergence_table(sim, stationary=pi)
        tv_exact = total_variation_distance(exact_last, pi)
        tv_emp = total_variation_distance(freq_last, exact_last)
        print(f"TV(exact_last, stationary):   {tv_exact:.6f}")
        print(f"TV(empirical_last, exact):    {tv_emp:.4f}")
        print(f"Mean TV(empirical, exact):    {table['tv_empirical_vs_exact'].mean():.4f}\n")

        summary[name] = {
            "n_states": sim.n_states,
            "stationary": [float(v) for v in pi],
            "exact_last": [float(v) for v in exact_last],
            "empirical_last": [float(v) for v in freq_last],
            "tv_exact_vs_stationary": tv_exact,
            "tv_empirical_vs_exact": tv_emp,
        }

        if not args.no_plots:
            n_plot = max(0, min(args.chains_to_plot, sim.n_chains))
            p1 = plot_chain_paths(
                sim.states,
                chains=range(n_plot),
                out_path=settings.output_dir / f"chain_paths_{name}.png",
                title=f"First {n_plot} chain paths ({name})",
            )
            p2 = plot_probability_trajectory(
                sim.probabilities,
                out_path=settings.output_dir / f"probabilities_{name}.png",
                title=f"Exact state probabilities ({name})",
                stationary=pi,
            )
            p3 = plot_empirical_vs_exact(
                sim,
                out_path=settings.output_dir / f"empirical_vs_exact_{name}.png",
                title=f"Empirical vs exact ({name})",
            )
            print("Saved plot:", p1)
            print("Saved plot:", p2)
            print("Saved plot:", p3)
            print()

    metadata_path = write_run_metadata(
        output_dir=settings.output_dir,
        run_name="convergence_demo",
        args=args,
        summary=summary,
        project_root=PROJECT_ROOT,
    )
    print("Saved metadata:", metadata_path)


if __name__ == "__main__":
    main()
