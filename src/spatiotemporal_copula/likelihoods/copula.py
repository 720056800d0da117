"""Bivariate Gaussian copula density and conditional distribution.

In the factor copula each site's count is linked to a shared latent factor
``V ~ U(0, 1)`` by a bivariate Gaussian copula with site-specific
correlation. Given ``V = v`` the probability that the copula margin falls
below ``u`` is the h-function

    C_{1|2}(u | v) = Phi((Phi^{-1}(u) - rho Phi^{-1}(v)) / sqrt(1 - rho^2)).

All functions broadcast over their arguments.
"""

import numpy as np
from scipy.special import ndtr, ndtri


def bivariate_gaussian_copula_density(u, v, rho) -> np.ndarray:
    """Density of the bivariate Gaussian copula.

    Parameters
    ----------
    u, v : array_like
        Uniform margins in (0, 1).
    rho : array_like
        Correlation, ``|rho| < 1``.

    Returns
    -------
    density : np.ndarray
    """
    x = ndtri(u)
    y = ndtri(v)
    rho = np.asarray(rho, dtype=float)

    one_minus_rho_sq = 1.0 - rho * rho
    sum_sq = x * x + y * y
    exponent = -0.5 / one_minus_rho_sq * (sum_sq - 2.0 * rho * x * y) + 0.5 * sum_sq
    return np.exp(exponent) / np.sqrt(one_minus_rho_sq)


def conditional_copula_cdf(u, v, rho) -> np.ndarray:
    """Conditional distribution ``C_{1|2}(u | v)`` of the Gaussian copula.

    Parameters
    ----------
    u : array_like
        Margin being evaluated, in [0, 1].
    v : array_like
        Conditioning margin (the latent factor), in (0, 1).
    rho : array_like
        Correlation in [-1, 1].

    Returns
    -------
    probability : np.ndarray

    Notes
    -----
    At ``|rho| = 1`` the conditional distribution collapses to a point mass
    and the scale ``sqrt(1 - rho^2)`` is zero. The limiting step function
    ``1{Phi^{-1}(u) >= rho Phi^{-1}(v)}`` is returned there instead of
    dividing by zero.

    With ``rho = 0`` the result is ``u`` for any ``v``.
    """
    x1 = ndtri(u)
    x2 = ndtri(v)
    rho = np.asarray(rho, dtype=float)

    shift = x1 - rho * x2
    scale_sq = 1.0 - rho * rho
    is_degenerate = scale_sq <= 0.0

    with np.errstate(invalid="ignore"):
        scale = np.sqrt(np.where(is_degenerate, 1.0, scale_sq))
        step = np.where(shift >= 0.0, 1.0, 0.0)
    return np.where(is_degenerate, step, ndtr(shift / scale))
