#!/usr/bin/env python3
"""
Prévision SEIR-D pour la région de Novossibirsk.

Affiche les données initiales, divise le pas par deux jusqu'à ce que le
nombre de décès au jour b se stabilise, puis affiche la prévision et
vérifie que toute la population est comptabilisée.

Usage (depuis la racine du dépôt) :
    python3 scripts/forecast.py [--end 90] [--eps 1e-2] [--max-halvings 30]
"""
import argparse
import logging
import sys
from pathlib import Path

# Add src/ to path for imports when running from repo root
REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from seird.params import x0, theta_nsk, N_POP, DAY_START, DAY_END, H_INIT, EPS, MAX_HALVINGS
from seird.convergence import ConvergenceConfig, solve_converged
from seird.report import (
    format_forecast,
    format_halving,
    format_initial_conditions,
    format_population_check,
    population_check,
)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="SEIR-D forecast with step halving until convergence"
    )
    parser.add_argument(
        "--start", type=int, default=DAY_START,
        help=f"First day of the horizon (default: {DAY_START})"
    )
    parser.add_argument(
        "--end", type=int, default=DAY_END,
        help=f"Forecast day (default: {DAY_END})"
    )
    parser.add_argument(
        "--step", type=float, default=H_INIT,
        help=f"Initial step size in days (default: {H_INIT})"
    )
    parser.add_argument(
        "--eps", type=float, default=EPS,
        help=f"Tolerance on the change in deceased between halvings (default: {EPS})"
    )
    parser.add_argument(
        "--max-halvings", type=int, default=MAX_HALVINGS,
        help=f"Give up after this many halvings, 0 = never (default: {MAX_HALVINGS})"
    )
    parser.add_argument(
        "--no-overshoot", action="store_true",
        help="Stop exactly at the forecast day instead of one step past it"
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    _logger = logging.getLogger("seird")
    _logger.addHandler(_handler)
    _logger.setLevel(logging.DEBUG if args.verbose else logging.WARNING)

    config = ConvergenceConfig(
        start=args.start,
        end=args.end,
        h0=args.step,
        eps=args.eps,
        max_halvings=args.max_halvings or None,
        overshoot=not args.no_overshoot,
    )

    print()
    print(format_initial_conditions(x0, N_POP, args.start, args.end))
    print()
    print(" Solving the system...")

    result = solve_converged(x0, theta_nsk, config)
    for record in result.history:
        print(format_halving(record))

    if not result.converged:
        print(f" No convergence after {result.n_iterations} halvings (h = {result.h:g})")
        return 1

    print()
    print(format_forecast(result.state, args.end))
    print(format_population_check(result.state, N_POP))
    print()

    return 0 if population_check(result.state, N_POP) else 1


if __name__ == "__main__":
    sys.exit(main())
