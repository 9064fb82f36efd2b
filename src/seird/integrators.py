"""
Numerical integrators for the SEIR-D model.

Implements the Euler-Cauchy (Heun / improved Euler) predictor-corrector
scheme with a fixed time step.
"""
from typing import Callable, Iterator, Union

import numpy as np

from .dynamics import rhs
from .params import SEIRDParams, SEIRDState, TimeGrid


def heun_step(
    rhs_fn: Callable[[float, np.ndarray, SEIRDParams], np.ndarray],
    t: float,
    x: np.ndarray,
    params: SEIRDParams,
    dt: float,
) -> np.ndarray:
    """
    Perform one Euler-Cauchy (Heun) integration step.

    Parameters
    ----------
    rhs_fn : Callable
        Right-hand side function with signature rhs(t, x, params) -> dxdt.
    t : float
        Current time.
    x : np.ndarray
        Current state vector, shape (5,).
    params : SEIRDParams
        Model parameters.
    dt : float
        Time step size.

    Returns
    -------
    x_next : np.ndarray
        Corrected state at time t + dt, shape (5,).
    """
    f0 = rhs_fn(t, x, params)
    # Predictor: all compartments from the same pre-step state
    x_pred = x + dt * f0
    f1 = rhs_fn(t + dt, x_pred, params)

    x_next = x + (dt / 2.0) * (f0 + f1)
    return x_next


def n_steps(grid: TimeGrid) -> int:
    """
    Number of steps taken over the grid.

    With ``grid.overshoot`` the loop runs one step past the horizon,
    i.e. ``ceil((end - start) / h) + 1`` steps, so the last state lies at
    ``start + n * h > end``.
    """
    n = grid.n_intervals
    if grid.overshoot:
        n += 1
    return n


def iter_heun(
    x_start: Union[SEIRDState, np.ndarray],
    params: SEIRDParams,
    grid: TimeGrid,
) -> Iterator[tuple[float, np.ndarray]]:
    """
    Yield ``(t, x)`` after every committed step.

    Only the current state is kept; the caller decides whether to store
    the trajectory.
    """
    if isinstance(x_start, SEIRDState):
        x = x_start.to_array()
    else:
        x = np.array(x_start, dtype=np.float64)

    t = float(grid.start)
    for k in range(n_steps(grid)):
        x = heun_step(rhs, t, x, params, grid.h)
        t = grid.start + (k + 1) * grid.h
        yield t, x


def integrate(
    x_start: Union[SEIRDState, np.ndarray],
    params: SEIRDParams,
    grid: TimeGrid,
) -> np.ndarray:
    """
    Integrate the SEIR-D model over the grid and return the final state.

    Parameters
    ----------
    x_start : SEIRDState or np.ndarray
        Initial state [S, E, I, R, D].
    params : SEIRDParams
        Model parameters.
    grid : TimeGrid
        Horizon and step size. ``grid.h`` is never modified here.

    Returns
    -------
    x_end : np.ndarray
        State after the last step, shape (5,).
    """
    if isinstance(x_start, SEIRDState):
        x_end = x_start.to_array()
    else:
        x_end = np.array(x_start, dtype=np.float64)

    for _, x_end in iter_heun(x_start, params, grid):
        pass

    return x_end
