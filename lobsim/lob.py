"""
lob.py

Price-level limit order book for the dynamics simulator.

The book is a fixed-depth ladder: `levels` bid prices below the mid and
`levels` ask prices above it, one tick apart. We do not track individual
orders, only the resting size at each price.

Operations here never mutate the book they are given; they work on a
clone and hand the new book back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Side(Enum):
    """Aggressor side of a market order."""
    BUY = "BUY"
    SELL = "SELL"


class BookSide(Enum):
    """Resting side of the book."""
    BID = "BID"
    ASK = "ASK"


@dataclass
class Level:
    """
    One price point in the ladder.
    - price: fixed at creation
    - size:  resting quantity (never negative)
    """
    price: float
    size: int

    def __setattr__(self, name, value):
        if name == "price" and "price" in self.__dict__:
            raise AttributeError("Level.price is fixed once the level exists")
        object.__setattr__(self, name, value)


@dataclass
class BookState:
    """
    bids: descending prices, index 0 is the best bid
    asks: ascending prices, index 0 is the best ask

    Index 0 stays the best price even when its size is 0.
    """
    bids: List[Level] = field(default_factory=list)
    asks: List[Level] = field(default_factory=list)
    last_trade_price: float = 0.0

    def side(self, book_side: BookSide) -> List[Level]:
        return self.bids if book_side is BookSide.BID else self.asks

    def clone(self) -> "BookState":
        return BookState(
            bids=[Level(lv.price, lv.size) for lv in self.bids],
            asks=[Level(lv.price, lv.size) for lv in self.asks],
            last_trade_price=self.last_trade_price,
        )


@dataclass
class FillResult:
    """
    Outcome of a market order.

    next_book:   book after the order walked the levels
    filled_qty:  quantity actually executed (may be < requested)
    avg_price:   notional / filled_qty, or last trade price if nothing filled
    """
    next_book: BookState
    filled_qty: int
    avg_price: float


def create_book(mid: float, tick_size: float, levels: int, base_size: int) -> BookState:
    """
    Build a symmetric ladder around `mid`, every level holding `base_size`.

    No validation: tick_size <= 0 or levels == 0 are the caller's problem.
    """
    bids: List[Level] = []
    asks: List[Level] = []
    for i in range(1, levels + 1):
        bids.append(Level(price=mid - i * tick_size, size=base_size))
        asks.append(Level(price=mid + i * tick_size, size=base_size))
    return BookState(bids=bids, asks=asks, last_trade_price=mid)


def best_level(book: BookState, book_side: BookSide) -> Optional[Level]:
    """
    First level on a side with positive size, or None.
    """
    for level in book.side(book_side):
        if level.size > 0:
            return level
    return None


def total_depth(book: BookState, book_side: BookSide) -> int:
    return sum(level.size for level in book.side(book_side))


def apply_market_order(book: BookState, side: Side, quantity: int) -> FillResult:
    """
    Execute a market order against the opposite side of the book.

    Market BUY consumes asks, market SELL consumes bids, best price first.
    A shortfall in liquidity gives a partial fill, not an error.
    """
    next_book = book.clone()

    remaining = max(0, quantity)
    filled_qty = 0
    notional = 0.0

    levels = next_book.asks if side is Side.BUY else next_book.bids

    for level in levels:
        if remaining <= 0:
            break
        taken = min(level.size, remaining)
        level.size -= taken
        remaining -= taken
        filled_qty += taken
        notional += taken * level.price
        if taken > 0:
            # ends at the deepest level touched
            next_book.last_trade_price = level.price

    if filled_qty > 0:
        avg_price = notional / filled_qty
    else:
        avg_price = next_book.last_trade_price
    return FillResult(next_book=next_book, filled_qty=filled_qty, avg_price=avg_price)
