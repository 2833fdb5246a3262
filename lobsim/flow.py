"""
flow.py

Passive order flow and book maintenance:
  * cancellations shrink a random level
  * limit arrivals grow a random level
  * replenishment refills anything that hit zero

Each function takes the current book and returns a new one.
"""

from __future__ import annotations

import math
from typing import Tuple

from .lob import BookSide, BookState
from .rng import Mulberry32

CANCEL_FRACTION = 0.35


def round_half_up(x: float) -> int:
    # halves go toward +inf: 2.5 -> 3, -2.5 -> -2, 0.49999999999999994 -> 0
    whole = math.floor(x)
    return int(whole + 1 if x - whole >= 0.5 else whole)


def _pick_level(book: BookState, rng: Mulberry32) -> Tuple[BookSide, int]:
    """
    Two draws: side first (ASK below 0.5), then the level index.
    """
    book_side = BookSide.ASK if rng.random() < 0.5 else BookSide.BID
    index = int(math.floor(rng.random() * len(book.side(book_side))))
    return book_side, index


def cancel_size(base_size: int) -> int:
    return max(1, round_half_up(base_size * CANCEL_FRACTION))


def arrival_size(base_size: int, limit_arrival_rate: float) -> int:
    return max(1, round_half_up(base_size * limit_arrival_rate))


def refill_size(base_size: int) -> int:
    return max(1, round_half_up(base_size / 2))


def apply_cancellation(
    book: BookState,
    rng: Mulberry32,
    base_size: int,
) -> Tuple[BookState, BookSide, int]:
    """
    Remove a chunk of resting size from one random level.

    Returns:
      (next_book, book_side, index)
    """
    next_book = book.clone()
    book_side, index = _pick_level(next_book, rng)
    level = next_book.side(book_side)[index]
    level.size = max(0, level.size - cancel_size(base_size))
    return next_book, book_side, index


def apply_limit_arrival(
    book: BookState,
    rng: Mulberry32,
    base_size: int,
    limit_arrival_rate: float,
) -> Tuple[BookState, BookSide, int]:
    """
    Add new resting size to one random level.

    Returns:
      (next_book, book_side, index)
    """
    next_book = book.clone()
    book_side, index = _pick_level(next_book, rng)
    level = next_book.side(book_side)[index]
    level.size += arrival_size(base_size, limit_arrival_rate)
    return next_book, book_side, index


def replenish(book: BookState, base_size: int) -> BookState:
    """
    Reset every empty level on both sides to half the base size (at least 1).
    """
    next_book = book.clone()
    refill = refill_size(base_size)
    for level in next_book.bids + next_book.asks:
        if level.size <= 0:
            level.size = refill
    return next_book
