"""
simulator.py

Discrete-event driver for the limit order book.

At each step:
  * draw r from the run's own Mulberry32 stream
  * r < market_rate                  -> market order (random side)
  * r < market_rate + cancel_rate    -> cancellation at a random level
  * otherwise                        -> limit arrival at a random level
  * replenish empty levels and record a metrics snapshot

Same params (seed included) -> same events and snapshots, every time.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .flow import apply_cancellation, apply_limit_arrival, replenish
from .lob import BookState, Side, apply_market_order, create_book
from .metrics import (
    MetricsSnapshot,
    MetricsSummary,
    compute_snapshot,
    format_fixed,
    round_fixed,
    summarize,
)
from .rng import Mulberry32, coerce_seed

logger = logging.getLogger(__name__)


@dataclass
class SimulationParams:
    seed: int = 42
    # Book shape
    mid: float = 100.0
    tick_size: float = 0.5
    levels: int = 6
    base_size: int = 20

    # Event mix: market_rate + cancel_rate <= 1, the rest are limit arrivals
    limit_arrival_rate: float = 0.45     # also scales the size of an arrival
    cancel_rate: float = 0.30
    market_rate: float = 0.25
    market_order_size: int = 8

    def validate(self) -> None:
        """
        Boundary check for user-supplied configs. The engine itself
        never calls this.
        """
        if self.tick_size <= 0:
            raise ValueError(f"tick_size must be positive, got {self.tick_size}")
        if self.levels < 1:
            raise ValueError(f"levels must be at least 1, got {self.levels}")
        if self.base_size < 1:
            raise ValueError(f"base_size must be at least 1, got {self.base_size}")
        if self.market_order_size < 0:
            raise ValueError(
                f"market_order_size must be non-negative, got {self.market_order_size}"
            )
        for name in ("limit_arrival_rate", "cancel_rate", "market_rate"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative, got {getattr(self, name)}")
        if self.market_rate + self.cancel_rate > 1:
            raise ValueError(
                "market_rate + cancel_rate must not exceed 1, got "
                f"{self.market_rate} + {self.cancel_rate}"
            )


@dataclass
class SimulationRun:
    """
    events:    one label per step
    snapshots: initial snapshot plus one per step (len == steps + 1)
    """
    events: List[str] = field(default_factory=list)
    snapshots: List[MetricsSnapshot] = field(default_factory=list)

    @property
    def final(self) -> MetricsSnapshot:
        return self.snapshots[-1]

    def tail(self, n: int = 8) -> List[str]:
        """Most recent n event labels, oldest first."""
        if n <= 0:
            return []
        return self.events[-n:]

    def chart_rows(self, decimals: int = 4) -> List[Dict[str, float]]:
        return [
            {
                "step": i,
                "spread": round_fixed(s.spread, decimals),
                "imbalance": round_fixed(s.imbalance, decimals),
                "microprice": round_fixed(s.microprice, decimals),
            }
            for i, s in enumerate(self.snapshots)
        ]

    def summary(self) -> MetricsSummary:
        return summarize(self.snapshots)


def format_price(price: float) -> str:
    """
    Two decimals, ties away from zero on the exact binary value.
    """
    return format_fixed(price, 2)


class LOBSimulator:
    """
    Stateful wrapper owning the run's book and random stream.

    Only this object replaces `self.book`; the handlers it calls return
    fresh books, so a caller holding an earlier book never sees it change.
    """

    def __init__(self, params: SimulationParams):
        self.params = params
        self.rng = Mulberry32(coerce_seed(params.seed))
        self.book: BookState = self._initial_book()
        self.t = 0

    def _initial_book(self) -> BookState:
        p = self.params
        return create_book(p.mid, p.tick_size, p.levels, p.base_size)

    def reset(self) -> None:
        self.rng.reset()
        self.book = self._initial_book()
        self.t = 0

    def snapshot(self) -> MetricsSnapshot:
        return compute_snapshot(self.book)

    def _apply_event(self) -> Tuple[BookState, str]:
        p = self.params
        r = self.rng.random()

        if r < p.market_rate:
            side = Side.BUY if self.rng.random() < 0.5 else Side.SELL
            fill = apply_market_order(self.book, side, p.market_order_size)
            label = f"MKT_{side.value}_{fill.filled_qty}@{format_price(fill.avg_price)}"
            return fill.next_book, label

        if r < p.market_rate + p.cancel_rate:
            book, book_side, index = apply_cancellation(self.book, self.rng, p.base_size)
            return book, f"CANCEL_{book_side.value}_{index}"

        book, book_side, index = apply_limit_arrival(
            self.book, self.rng, p.base_size, p.limit_arrival_rate
        )
        return book, f"LIMIT_{book_side.value}_{index}"

    def step(self) -> Tuple[str, MetricsSnapshot]:
        """
        Advance one event.

        Returns:
          (event_label, snapshot after replenishment)
        """
        book, label = self._apply_event()
        self.book = replenish(book, self.params.base_size)
        self.t += 1

        snap = self.snapshot()
        logger.debug(
            "step=%d event=%s spread=%.4f imbalance=%.4f microprice=%.4f",
            self.t, label, snap.spread, snap.imbalance, snap.microprice,
        )
        return label, snap


def run_simulation(params: SimulationParams, steps: int) -> SimulationRun:
    """
    Replay `steps` events from a fresh book and a fresh random stream.
    """
    sim = LOBSimulator(params)
    run = SimulationRun(snapshots=[sim.snapshot()])

    for _ in range(max(0, steps)):
        label, snap = sim.step()
        run.events.append(label)
        run.snapshots.append(snap)

    logger.info(
        "simulation done: seed=%s steps=%d final_spread=%.4f final_microprice=%.4f",
        params.seed, len(run.events), run.final.spread, run.final.microprice,
    )
    return run
