#!/usr/bin/env python3
"""
Smoke test: quick validation that core functionality works.

Runs the reference forecast and verifies the basic invariants.
Exit code 0 = PASS, 1 = FAIL.

Usage (from repository root):
    python scripts/smoke_test.py
"""
import sys
import time
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

import numpy as np

from seird.params import x0, theta_nsk, N_POP, DAY_START, DAY_END, H_INIT, TimeGrid
from seird.integrators import iter_heun, integrate
from seird.convergence import ConvergenceConfig, solve_converged
from seird.report import population_check


def test_single_pass() -> bool:
    """Test one integration pass (h = 1 day)."""
    print(f"Test 1: Single pass ({DAY_END} days, h = {H_INIT})")
    grid = TimeGrid(DAY_START, DAY_END, H_INIT)
    x_end = integrate(x0, theta_nsk, grid)

    assert x_end.shape == (5,), f"x_end shape mismatch: {x_end.shape}"

    rel_drift = abs(x_end.sum() - N_POP) / N_POP
    assert rel_drift < 1e-6, f"Population drift too large: {rel_drift}"

    print(f"  ✓ Shape correct, relative drift = {rel_drift:.2e}")
    return True


def test_deceased_monotone() -> bool:
    """Test that D never decreases along the trajectory."""
    print("Test 2: Deceased non-decreasing")
    grid = TimeGrid(DAY_START, DAY_END, H_INIT)
    ds = np.array([x[4] for _, x in iter_heun(x0, theta_nsk, grid)])

    assert np.all(np.diff(ds) >= 0.0), "D decreased during integration"

    print(f"  ✓ {ds.size} steps, final D = {ds[-1]:.4f}")
    return True


def test_convergence() -> bool:
    """Test the step-halving loop on the reference scenario."""
    print("Test 3: Step halving until convergence")
    result = solve_converged(x0, theta_nsk, ConvergenceConfig())

    assert result.converged, f"No convergence: {result.history}"
    assert result.history[-1].delta <= 1e-2, "Last delta above eps"
    assert population_check(result.state, N_POP), "Population check failed"

    print(f"  ✓ Converged in {result.n_iterations} halvings, h = {result.h:g}")
    return True


def main() -> int:
    print("=" * 60)
    print("SEIR-D Smoke Test")
    print("=" * 60)

    start = time.time()
    tests = [
        test_single_pass,
        test_deceased_monotone,
        test_convergence,
    ]

    passed = 0
    for test_fn in tests:
        try:
            if test_fn():
                passed += 1
        except AssertionError as e:
            print(f"  ✗ FAILED: {e}")

    elapsed = time.time() - start

    print("-" * 60)
    print(f"Results: {passed}/{len(tests)} tests passed in {elapsed:.1f}s")
    print("=" * 60)

    if passed == len(tests):
        print("✓ SMOKE TEST PASSED")
        return 0
    else:
        print("✗ SMOKE TEST FAILED")
        return 1


if __name__ == "__main__":
    sys.exit(main())
