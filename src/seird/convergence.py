"""
Step-halving convergence loop for the SEIR-D integrator.

The single-pass integrator is re-run from the same initial state with a
step that is halved each time, until two successive Deceased totals agree
within a tolerance. Only D is compared between runs.
"""
import logging
from dataclasses import dataclass, field

import numpy as np

from .integrators import integrate
from .params import (
    DAY_END,
    DAY_START,
    EPS,
    H_INIT,
    MAX_HALVINGS,
    SEIRDParams,
    SEIRDState,
    TimeGrid,
)

logger = logging.getLogger(__name__)

D_INDEX = 4


class ConvergenceError(RuntimeError):
    """Raised when the step-halving loop gives up before reaching eps."""


@dataclass
class ConvergenceConfig:
    """
    Configuration of the step-halving loop.

    start, end : integration horizon [days]
    h0 : initial step size [days]
    eps : tolerance on |D_new - D_prev| between two successive runs
    max_halvings : cap on the number of halvings (None = no cap)
    overshoot : take one extra step past `end` (see integrators.n_steps)
    """

    start: float = DAY_START
    end: float = DAY_END
    h0: float = H_INIT
    eps: float = EPS
    max_halvings: int | None = MAX_HALVINGS
    overshoot: bool = True

    def __post_init__(self):
        if self.eps < 0:
            raise ValueError(f"eps must be >= 0, got {self.eps}")
        if self.max_halvings is not None and self.max_halvings < 0:
            raise ValueError(
                f"max_halvings must be >= 0 or None, got {self.max_halvings}"
            )
        # Validates h0 and the horizon
        self.initial_grid()

    def initial_grid(self) -> TimeGrid:
        return TimeGrid(self.start, self.end, self.h0, overshoot=self.overshoot)


@dataclass(frozen=True)
class HalvingRecord:
    """One outer-loop attempt: iteration index, D delta and step used."""

    iteration: int
    delta: float
    h: float


@dataclass
class ConvergenceResult:
    """Outcome of `solve_converged`."""

    state: SEIRDState
    h: float
    converged: bool
    history: list[HalvingRecord] = field(default_factory=list)

    @property
    def n_iterations(self) -> int:
        return len(self.history)

    @property
    def deltas(self) -> np.ndarray:
        return np.array([rec.delta for rec in self.history], dtype=np.float64)

    def raise_for_status(self) -> "ConvergenceResult":
        if not self.converged:
            last = self.history[-1].delta if self.history else float("nan")
            raise ConvergenceError(
                f"No convergence after {self.n_iterations} halvings "
                f"(h = {self.h:g}, last delta = {last:g})"
            )
        return self


def solve_converged(
    x_start: SEIRDState,
    params: SEIRDParams,
    config: ConvergenceConfig | None = None,
) -> ConvergenceResult:
    """
    Halve the step until the Deceased total stabilizes.

    Parameters
    ----------
    x_start : SEIRDState
        Initial state. Every attempt restarts from it at ``config.start``.
    params : SEIRDParams
        Model parameters.
    config : ConvergenceConfig, optional
        Horizon, initial step, tolerance and halving cap.

    Returns
    -------
    result : ConvergenceResult
        Final state of the last run, the step it used and the
        (iteration, delta, h) history. ``converged`` is False when the
        halving cap was hit first.
    """
    if config is None:
        config = ConvergenceConfig()

    grid = config.initial_grid()
    x_end = integrate(x_start, params, grid)
    d_prev = x_end[D_INDEX]
    logger.debug("Initial pass: h = %g, D = %.6f", grid.h, d_prev)

    history: list[HalvingRecord] = []
    k = 1
    while True:
        if config.max_halvings is not None and k > config.max_halvings:
            logger.warning(
                "Step halving stopped after %d iterations without reaching "
                "eps = %g (h = %g)",
                config.max_halvings,
                config.eps,
                grid.h,
            )
            return ConvergenceResult(
                state=SEIRDState.from_array(x_end),
                h=grid.h,
                converged=False,
                history=history,
            )

        grid = grid.halved()
        x_end = integrate(x_start, params, grid)
        delta = abs(x_end[D_INDEX] - d_prev)
        d_prev = x_end[D_INDEX]

        history.append(HalvingRecord(iteration=k, delta=float(delta), h=grid.h))
        logger.info("%d: delta = %f, h = %f", k, delta, grid.h)

        if delta <= config.eps:
            return ConvergenceResult(
                state=SEIRDState.from_array(x_end),
                h=grid.h,
                converged=True,
                history=history,
            )
        k += 1
