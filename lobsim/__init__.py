"""
lobsim: deterministic limit order book dynamics simulator.
"""

from .flow import apply_cancellation, apply_limit_arrival, replenish
from .lob import (
    BookSide,
    BookState,
    FillResult,
    Level,
    Side,
    apply_market_order,
    best_level,
    create_book,
    total_depth,
)
from .metrics import MetricsSnapshot, MetricsSummary, compute_snapshot, summarize, to_arrays
from .rng import Mulberry32, coerce_seed
from .simulator import LOBSimulator, SimulationParams, SimulationRun, run_simulation

__all__ = [
    "BookSide",
    "BookState",
    "FillResult",
    "LOBSimulator",
    "Level",
    "MetricsSnapshot",
    "MetricsSummary",
    "Mulberry32",
    "Side",
    "SimulationParams",
    "SimulationRun",
    "apply_cancellation",
    "apply_limit_arrival",
    "apply_market_order",
    "best_level",
    "coerce_seed",
    "compute_snapshot",
    "create_book",
    "replenish",
    "run_simulation",
    "summarize",
    "to_arrays",
    "total_depth",
]
