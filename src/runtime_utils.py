from __future__ import annotations

import argparse
import json
import platform
import subprocess
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


def add_common_simulation_args(
    parser: argparse.ArgumentParser,
    *,
    default_n_steps: int = 50,
    default_n_chains: int = 150,
    default_seed: int = 2024,
) -> argparse.ArgumentParser:
    parser.add_argument("--n-steps", type=int, default=default_n_steps, help="Number of time points (rows) per run.")
    parser.add_argument("--n-chains", type=int, default=default_n_chains, help="Number of independent chains.")
    parser.add_argument("--seed", type=int, default=default_seed, help="Base RNG seed.")
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Run without generating plot files.",
    )
    parser.add_argument(
        "--metadata-tag",
        type=str,
        default="",
        help="Optional suffix for the metadata JSON filename.",
    )
    return parser


def _git_commit_hash(cwd: Path) -> str:
    try:
        res = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            cwd=str(cwd),
            check=True,
            capture_output=True,
            text=True,
        )
        return res.stdout.strip()
    except (OSError, subprocess.CalledProcessError):
        return ""


def environment_info() -> dict[str, str]:
    """
    Interpreter and library versions for the run record.
    """
    import matplotlib
    import numpy
    import pandas

    return {
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "numpy": numpy.__version__,
        "pandas": pandas.__version__,
        "matplotlib": matplotlib.__version__,
    }


def write_run_metadata(
    *,
    output_dir: Path,
    run_name: str,
    args: argparse.Namespace,
    summary: dict[str, Any],
    project_root: Path,
) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)

    tag = f"_{args.metadata_tag}" if getattr(args, "metadata_tag", "") else ""
    out_path = output_dir / f"{run_name}_metadata{tag}.json"

    payload: dict[str, Any] = {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "git_commit": _git_commit_hash(project_root),
        "environment": environment_info(),
        "args": vars(args),
        "summary": summary,
    }

    out_path.write_text(json.dumps(payload, indent=2, sort_keys=True))
    return out_path
