from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

@dataclass(frozen=True)
class Settings:
    # Paths
    output_dir: Path = PROJECT_ROOT / "outputs"

    # Default run choices
    n_steps: int = 50
    n_chains: int = 150
    seed: int = 2024
    chains_to_plot: int = 5

    # Tolerance on transition-matrix row sums
    row_sum_atol: float = 1e-8

settings = Settings()
