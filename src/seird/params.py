"""
Paramètres, état et constantes du modèle SEIR-D.

Ordre des paramètres : θ = [μ, β, ρ, α_E, α_I, κ, γ, c]^T.
Ordre de l'état : x = [S, E, I, R, D]^T.
Valeurs numériques : épidémie de COVID-19 dans la région de Novossibirsk.
"""
import math
from dataclasses import dataclass, replace

import numpy as np


@dataclass(frozen=True)
class SEIRDParams:
    """
    Paramètres épidémiologiques du modèle SEIR-D.

    μ   : taux de mortalité due au COVID-19
    β   : taux de guérison des cas infectés (symptomatiques)
    ρ   : taux de guérison des cas exposés (asymptomatiques)
    α_E : coefficient de transmission entre exposés et susceptibles
    α_I : coefficient de transmission entre infectés et susceptibles
    κ   : taux d'apparition des symptômes chez les exposés
    γ   : taux de réinfection (0 = immunité durable)
    c   : multiplicateur de contacts (restriction des déplacements)
    """

    mu: float
    beta: float
    rho: float
    alpha_e: float
    alpha_i: float
    kappa: float
    gamma: float = 0.0
    c: float = 1.0

    def to_array(self) -> np.ndarray:
        """Convertit les paramètres en array numpy (8,)."""
        return np.array(
            [
                self.mu,
                self.beta,
                self.rho,
                self.alpha_e,
                self.alpha_i,
                self.kappa,
                self.gamma,
                self.c,
            ],
            dtype=np.float64,
        )

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "SEIRDParams":
        """Crée un SEIRDParams depuis un array [μ, β, ρ, α_E, α_I, κ, γ, c]."""
        assert arr.shape == (8,), f"Attendu (8,), reçu {arr.shape}"
        return cls(*(float(v) for v in arr))


@dataclass(frozen=True)
class SEIRDState:
    """
    État du modèle : effectifs des cinq compartiments à un instant donné.

    S : population susceptible
    E : infectés sans symptômes (exposés)
    I : cas détectés / infectés avec symptômes
    R : guéris
    D : décédés
    """

    S: float
    E: float
    I: float
    R: float
    D: float

    @property
    def total(self) -> float:
        """Population totale S + E + I + R + D."""
        return self.S + self.E + self.I + self.R + self.D

    def to_array(self) -> np.ndarray:
        """Convertit l'état en array numpy (5,)."""
        return np.array([self.S, self.E, self.I, self.R, self.D], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "SEIRDState":
        """Crée un SEIRDState depuis un array [S, E, I, R, D]."""
        arr = np.asarray(arr, dtype=np.float64)
        assert arr.shape == (5,), f"Attendu (5,), reçu {arr.shape}"
        return cls(*(float(v) for v in arr))


@dataclass(frozen=True)
class TimeGrid:
    """
    Grille temporelle d'intégration.

    start, end : jours de début et de fin de l'horizon
    h : pas de temps [jours], modifié uniquement par la boucle de convergence
    overshoot : si True, un pas supplémentaire est fait au-delà de `end`
    """

    start: float
    end: float
    h: float
    overshoot: bool = True

    def __post_init__(self):
        if self.h <= 0:
            raise ValueError(f"Le pas h doit être > 0, reçu {self.h}")
        if self.end < self.start:
            raise ValueError(
                f"Horizon invalide : end={self.end} < start={self.start}"
            )

    @property
    def n_intervals(self) -> int:
        """Nombre exact de pas nécessaires pour couvrir [start, end]."""
        return math.ceil((self.end - self.start) / self.h)

    def halved(self) -> "TimeGrid":
        """Même horizon, pas divisé par deux."""
        return replace(self, h=self.h / 2)


def initial_state(
    n_pop: float,
    e0: float,
    i0: float = 0.0,
    r0: float = 0.0,
    d0: float = 0.0,
) -> SEIRDState:
    """Construit l'état initial ; S est déduit pour que la somme vaille n_pop."""
    s0 = n_pop - i0 - e0 - r0 - d0
    return SEIRDState(S=float(s0), E=float(e0), I=float(i0), R=float(r0), D=float(d0))


# ---------------------------------------------------------------------------
# Constantes de simulation
# ---------------------------------------------------------------------------

DAY_START: int = 0  # Jour de début du décompte
DAY_END: int = 90  # Jour de fin du décompte (jour de la prévision)
H_INIT: float = 1.0  # Pas initial [jours]
EPS: float = 1e-2  # Tolérance sur l'écart de D entre deux pas successifs
MAX_HALVINGS: int = 30  # Nombre max de divisions du pas par deux


# ---------------------------------------------------------------------------
# Condition initiale x0
# Ordre : [S, E, I, R, D]
# sum(x0) = N_POP exactement (S0 = N0 - E0 - I0 - R0 - D0).
# ---------------------------------------------------------------------------

N_POP: int = 2798170  # Population de la région de Novossibirsk
E_INIT: int = 99  # Exposés (sans symptômes) initiaux
R_INIT: int = 24  # Guéris initiaux

x0: SEIRDState = initial_state(N_POP, e0=E_INIT, r0=R_INIT)


# ---------------------------------------------------------------------------
# Paramètres nominaux θ (Novossibirsk)
# c = 1 : le terme d'isolement 1 + C_isol * (...) est nul (C_isol = 0).
# ---------------------------------------------------------------------------

theta_nsk: SEIRDParams = SEIRDParams(
    mu=0.0188,
    beta=0.999,
    rho=0.952,
    alpha_e=0.999,
    alpha_i=0.999,
    kappa=0.042,
    gamma=0.0,
    c=1.0,
)
