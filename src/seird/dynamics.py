"""
Dynamique du modèle SEIR-D.

Implémente le système d'EDO non linéaires à cinq compartiments.
"""
import numpy as np

from .params import SEIRDParams


def rhs(
    t: float,
    x: np.ndarray,
    params: SEIRDParams,
) -> np.ndarray:
    """
    Membre de droite du système d'EDO SEIR-D.

    Calcule dx/dt selon :
        Sdot = -c (α_I S I + α_E S E) / N + γ R
        Edot =  c (α_I S I + α_E S E) / N - (κ + ρ) E
        Idot = κ E - β I - μ I
        Rdot = β I + ρ E - γ R
        Ddot = μ I

    avec N = S + E + I + R + D recalculé à partir de l'état courant.
    L'état x = [S, E, I, R, D] représente des effectifs de population.
    Le système est autonome : t n'intervient pas. Aucune borne n'est
    imposée sur l'état.
    """
    assert x.shape == (5,), f"État x doit être de dim 5, reçu {x.shape}"

    # Extraction de l'état
    S, E, I, R, D = x
    N = S + E + I + R + D

    # Extraction des paramètres épidémiologiques
    mu = params.mu
    beta = params.beta
    rho = params.rho
    kappa = params.kappa
    gamma = params.gamma

    # Flux de contamination S -> E
    infection_rate = params.c * (params.alpha_i * S * I + params.alpha_e * S * E) / N

    Sdot = -infection_rate + gamma * R
    Edot = infection_rate - (kappa + rho) * E
    Idot = kappa * E - beta * I - mu * I
    Rdot = beta * I + rho * E - gamma * R
    Ddot = mu * I

    return np.array([Sdot, Edot, Idot, Rdot, Ddot], dtype=np.float64)
