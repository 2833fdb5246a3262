import numpy as np
import pytest

from lobsim.lob import create_book
from lobsim.metrics import (
    MetricsSnapshot,
    compute_snapshot,
    format_fixed,
    round_fixed,
    summarize,
    to_arrays,
)


def test_symmetric_book_metrics():
    snap = compute_snapshot(create_book(100.0, 0.5, 3, 10))

    assert snap.spread == pytest.approx(1.0)
    assert snap.imbalance == 0.0
    assert snap.microprice == pytest.approx(100.0)


def test_bid_heavy_book_leans_microprice_to_ask():
    book = create_book(100.0, 0.5, 3, 10)
    book.bids[0].size = 30

    snap = compute_snapshot(book)

    assert snap.imbalance == pytest.approx(0.5)
    assert snap.microprice == pytest.approx(100.25)


def test_empty_best_level_is_skipped():
    book = create_book(100.0, 0.5, 3, 10)
    book.bids[0].size = 0

    snap = compute_snapshot(book)

    assert snap.spread == pytest.approx(1.5)


def test_one_sided_book_falls_back_to_last_trade():
    book = create_book(100.0, 0.5, 2, 10)
    for lv in book.asks:
        lv.size = 0

    snap = compute_snapshot(book)

    # ask falls back to 100.0 with size 0
    assert snap.spread == pytest.approx(0.5)
    assert snap.imbalance == 1.0
    assert snap.microprice == pytest.approx(100.0)


def test_crossed_fallback_clamps_spread():
    book = create_book(100.0, 0.5, 1, 10)
    book.asks[0].size = 0
    book.last_trade_price = 98.0

    assert compute_snapshot(book).spread == 0.0


def test_summarize_and_arrays():
    snaps = [
        MetricsSnapshot(spread=1.0, imbalance=-0.5, microprice=100.0),
        MetricsSnapshot(spread=0.5, imbalance=0.5, microprice=101.0),
    ]

    arrays = to_arrays(snaps)
    assert set(arrays) == {"spread", "imbalance", "microprice"}
    np.testing.assert_allclose(arrays["spread"], [1.0, 0.5])

    summary = summarize(snaps)
    assert summary.spread.mean == pytest.approx(0.75)
    assert summary.imbalance.min == -0.5
    assert summary.microprice.max == 101.0


def test_summarize_rejects_empty():
    with pytest.raises(ValueError):
        summarize([])


def test_fixed_rounding_sends_exact_ties_up():
    assert format_fixed(0.15625, 4) == "0.1563"
    assert format_fixed(99.90625, 4) == "99.9063"
    assert format_fixed(100.125, 2) == "100.13"
    assert format_fixed(2.5, 0) == "3"
    assert format_fixed(1.0, 4) == "1.0000"
    # 1.005 is really 1.00499999..., so it rounds down
    assert format_fixed(1.005, 2) == "1.00"

    assert round_fixed(0.15625, 4) == 0.1563
    assert round_fixed(-0.15625, 4) == -0.1563
