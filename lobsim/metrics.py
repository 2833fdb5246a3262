"""
metrics.py

Top-of-book metrics derived from a BookState:
  * spread     - best ask minus best bid (never negative)
  * imbalance  - (bid_size - ask_size) / (bid_size + ask_size), in [-1, 1]
  * microprice - size-weighted fair price between the best quotes
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, Sequence

import numpy as np

from .lob import BookSide, BookState, best_level

METRIC_NAMES = ("spread", "imbalance", "microprice")


def format_fixed(value: float, decimals: int) -> str:
    """
    Fixed-point text with ties away from zero, decided on the exact
    binary value (0.15625 -> "0.1563" at 4 decimals).
    """
    quantum = Decimal(1).scaleb(-decimals)
    return str(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def round_fixed(value: float, decimals: int) -> float:
    return float(format_fixed(value, decimals))


@dataclass(frozen=True)
class MetricsSnapshot:
    spread: float
    imbalance: float
    microprice: float


@dataclass(frozen=True)
class MetricStats:
    mean: float
    min: float
    max: float


@dataclass(frozen=True)
class MetricsSummary:
    """
    Per-metric statistics over a whole run.
    """
    spread: MetricStats
    imbalance: MetricStats
    microprice: MetricStats


def compute_snapshot(book: BookState) -> MetricsSnapshot:
    """
    Metrics from the first non-empty level on each side.

    A side with no liquidity falls back to the last trade price with
    zero size, so this never divides by zero.
    """
    best_bid = best_level(book, BookSide.BID)
    best_ask = best_level(book, BookSide.ASK)

    bid = best_bid.price if best_bid is not None else book.last_trade_price
    ask = best_ask.price if best_ask is not None else book.last_trade_price
    bid_size = best_bid.size if best_bid is not None else 0
    ask_size = best_ask.size if best_ask is not None else 0

    spread = max(0.0, ask - bid)
    denom = bid_size + ask_size
    if denom > 0:
        imbalance = (bid_size - ask_size) / denom
        microprice = (ask * bid_size + bid * ask_size) / denom
    else:
        imbalance = 0.0
        microprice = (ask + bid) / 2

    return MetricsSnapshot(spread=spread, imbalance=imbalance, microprice=microprice)


def to_arrays(snapshots: Sequence[MetricsSnapshot]) -> Dict[str, np.ndarray]:
    return {
        name: np.asarray([getattr(s, name) for s in snapshots], dtype=float)
        for name in METRIC_NAMES
    }


def summarize(snapshots: Sequence[MetricsSnapshot]) -> MetricsSummary:
    """
    Mean / min / max of each metric series. Needs at least one snapshot.
    """
    if not snapshots:
        raise ValueError("summarize() needs at least one snapshot")

    arrays = to_arrays(snapshots)
    stats = {
        name: MetricStats(
            mean=float(values.mean()),
            min=float(values.min()),
            max=float(values.max()),
        )
        for name, values in arrays.items()
    }
    return MetricsSummary(**stats)
