"""
run_seed_compare.py

Compare a calm order-flow mix against an aggressive one.

We replay many seeds for each configuration and report:
  * Mean spread
  * Mean |imbalance|
  * Microprice drift (final - initial)
  * Share of market-order events
"""

from __future__ import annotations

from dataclasses import replace

import numpy as np

from lobsim.metrics import to_arrays
from lobsim.simulator import SimulationParams, run_simulation


# ---------- helper to run ONE seed for a given configuration ----------

def run_single_path(params: SimulationParams, n_steps: int, seed: int):
    """
    Returns:
      dict with mean_spread, mean_abs_imbalance, drift, market_share
    """
    run = run_simulation(replace(params, seed=seed), n_steps)
    series = to_arrays(run.snapshots)

    n_market = sum(1 for e in run.events if e.startswith("MKT_"))

    return {
        "mean_spread": series["spread"].mean(),
        "mean_abs_imbalance": np.abs(series["imbalance"]).mean(),
        "drift": series["microprice"][-1] - series["microprice"][0],
        "market_share": n_market / max(1, len(run.events)),
    }


# ---------- configurations --------------------------------------

def make_calm_params() -> SimulationParams:
    return SimulationParams(market_rate=0.10, cancel_rate=0.20, market_order_size=4)


def make_aggressive_params() -> SimulationParams:
    return SimulationParams(market_rate=0.60, cancel_rate=0.30, market_order_size=30)


# ---------- main experiment --------------------------------------

def run_experiment(n_paths: int = 50, n_steps: int = 100):
    calm_results = []
    aggressive_results = []

    for i in range(n_paths):
        seed = 1 + i
        calm_results.append(run_single_path(make_calm_params(), n_steps, seed))
        aggressive_results.append(run_single_path(make_aggressive_params(), n_steps, seed))

    def summarize(results, name: str):
        spreads = np.array([r["mean_spread"] for r in results])
        imbalances = np.array([r["mean_abs_imbalance"] for r in results])
        drifts = np.array([r["drift"] for r in results])
        shares = np.array([r["market_share"] for r in results])

        print(f"\n===== {name} =====")
        print(f"# paths: {len(results)}")
        print(f"Mean spread          : {spreads.mean():8.4f}")
        print(f"Mean |imbalance|     : {imbalances.mean():8.4f}")
        print(f"Mean microprice drift: {drifts.mean():8.4f}")
        print(f"Std microprice drift : {drifts.std():8.4f}")
        print(f"Market order share   : {shares.mean():8.3f}")

    summarize(calm_results, "Calm flow")
    summarize(aggressive_results, "Aggressive flow")


if __name__ == "__main__":
    run_experiment(n_paths=50, n_steps=100)
