"""
run_lob_sim.py

Command-line replay of the limit order book simulator.

Prints the spread / imbalance / microprice series, the final metrics,
and the tail of the event log.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace

from lobsim.metrics import format_fixed
from lobsim.simulator import SimulationParams, run_simulation

logger = logging.getLogger(__name__)

# slider ranges of the interactive version
RANGES = {
    "seed": (1, 999),
    "steps": (10, 120),
    "market_rate": (0.0, 0.8),
    "cancel_rate": (0.0, 0.8),
    "market_order_size": (1, 40),
}


def clamp(value, lo, hi):
    return min(max(value, lo), hi)


def parse_arguments(argv=None):
    defaults = SimulationParams()
    parser = argparse.ArgumentParser(
        description="Deterministic limit order book replay",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--seed", type=int, default=defaults.seed, help="Random seed")
    parser.add_argument("--steps", type=int, default=40, help="Number of events to simulate")
    parser.add_argument(
        "--market-rate", type=float, default=defaults.market_rate,
        help="Probability that an event is a market order",
    )
    parser.add_argument(
        "--cancel-rate", type=float, default=defaults.cancel_rate,
        help="Probability that an event is a cancellation",
    )
    parser.add_argument(
        "--market-order-size", type=int, default=defaults.market_order_size,
        help="Quantity of every market order",
    )
    parser.add_argument(
        "--clamp", action="store_true",
        help="Clamp seed, steps, rates and order size to the interactive ranges",
    )
    parser.add_argument("--tail", type=int, default=8, help="Number of trailing events to print")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser, parser.parse_args(argv)


def build_params(args):
    """
    Returns:
      (params, steps), clamped to the interactive ranges when --clamp is set
    """
    values = {
        "seed": args.seed,
        "steps": args.steps,
        "market_rate": args.market_rate,
        "cancel_rate": args.cancel_rate,
        "market_order_size": args.market_order_size,
    }
    if args.clamp:
        values = {name: clamp(v, *RANGES[name]) for name, v in values.items()}
    steps = values.pop("steps")
    return replace(SimulationParams(), **values), steps


def main(argv=None):
    parser, args = parse_arguments(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    params, steps = build_params(args)
    try:
        params.validate()
    except ValueError as exc:
        parser.error(str(exc))

    logger.info("running %d steps with %s", steps, params)
    run = run_simulation(params, steps)

    print("step   spread   imbalance   microprice")
    print("-" * 40)
    for i, snap in enumerate(run.snapshots):
        print(
            f"{i:4d}  "
            f"{format_fixed(snap.spread, 4):>7}  "
            f"{format_fixed(snap.imbalance, 4):>10}  "
            f"{format_fixed(snap.microprice, 4):>11}"
        )

    last = run.final
    print()
    print(f"Final spread      : {format_fixed(last.spread, 4)}")
    print(f"Final imbalance   : {format_fixed(last.imbalance, 4)}")
    print(f"Final microprice  : {format_fixed(last.microprice, 4)}")
    print(f"Events simulated  : {len(run.events)}")

    print()
    for event in run.tail(args.tail):
        print(event)


if __name__ == "__main__":
    main()
