"""
Package du modèle épidémique SEIR-D.

Fournit la dynamique EDO, l'intégration d'Euler-Cauchy (prédicteur-
correcteur), la gestion des paramètres et la boucle de division du pas
jusqu'à convergence du nombre de décès.
"""
from .params import SEIRDParams, SEIRDState, TimeGrid, initial_state
from .params import x0, theta_nsk, N_POP, DAY_START, DAY_END, H_INIT, EPS, MAX_HALVINGS
from .dynamics import rhs
from .integrators import heun_step, n_steps, iter_heun, integrate
from .convergence import (
    ConvergenceConfig,
    ConvergenceError,
    ConvergenceResult,
    HalvingRecord,
    solve_converged,
)
from .report import population_check

__all__ = [
    "SEIRDParams",
    "SEIRDState",
    "TimeGrid",
    "initial_state",
    "x0",
    "theta_nsk",
    "N_POP",
    "DAY_START",
    "DAY_END",
    "H_INIT",
    "EPS",
    "MAX_HALVINGS",
    "rhs",
    "heun_step",
    "n_steps",
    "iter_heun",
    "integrate",
    "ConvergenceConfig",
    "ConvergenceError",
    "ConvergenceResult",
    "HalvingRecord",
    "solve_converged",
    "population_check",
]
