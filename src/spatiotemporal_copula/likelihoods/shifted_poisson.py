"""Shifted Poisson distribution with support 1, 2, 3, ...

``X - 1 ~ Poisson(lam)``, so

    P(X = x) = exp(-lam) lam^(x - 1) / (x - 1)!,   x >= 1.

Used for the number of events at a site once at least one event occurred.
"""

import numpy as np
from scipy.special import gammaln, xlogy

from spatiotemporal_copula.exceptions import ValidationError


def shifted_poisson_log_pmf(x, lam) -> np.ndarray:
    """Log probability mass ``log P(X = x)``; ``-inf`` for ``x < 1``.

    Parameters
    ----------
    x : array_like
        Integer support points.
    lam : array_like
        Rate, >= 0.

    Returns
    -------
    log_pmf : np.ndarray
    """
    x = np.asarray(x, dtype=float)
    lam = np.asarray(lam, dtype=float)
    is_supported = x >= 1
    safe_x = np.where(is_supported, x, 1.0)
    log_pmf = -lam + xlogy(safe_x - 1.0, lam) - gammaln(safe_x)
    return np.where(is_supported, log_pmf, -np.inf)


def shifted_poisson_log_pmf_from_log_rate(x, log_lam) -> np.ndarray:
    """``log P(X = x)`` parameterized by the log rate.

    Evaluates ``-exp(log_lam) + (x - 1) log_lam - log((x - 1)!)`` without
    taking the logarithm of the rate. No support check is applied: ``x < 1``
    gives a non-finite value.

    Parameters
    ----------
    x : array_like
    log_lam : array_like

    Returns
    -------
    log_pmf : np.ndarray
    """
    x = np.asarray(x, dtype=float)
    log_lam = np.asarray(log_lam, dtype=float)
    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        return -np.exp(log_lam) + (x - 1.0) * log_lam - gammaln(x)


def shifted_poisson_pmf(x, lam) -> np.ndarray:
    """Probability mass ``P(X = x)``; 0 for ``x < 1``."""
    return np.exp(shifted_poisson_log_pmf(x, lam))


def shifted_poisson_cdf(x, lam) -> np.ndarray:
    """Cumulative distribution ``P(X <= x)``.

    Accumulates the probability masses of ``1, ..., floor(x)`` with the
    running recurrence ``p(i + 1) = p(i) * lam / i`` starting from
    ``p(1) = exp(-lam)``. The recurrence and the sum are carried out on the
    log scale, since ``exp(-lam)`` underflows for rates above ~745 while the
    masses near ``x = lam`` do not. Entries with ``x < 1`` are 0.

    Parameters
    ----------
    x : array_like
    lam : array_like
        Rate, >= 0. Broadcast against ``x``.

    Returns
    -------
    cdf : np.ndarray
        Values in [0, 1].
    """
    x, lam = np.broadcast_arrays(
        np.floor(np.asarray(x, dtype=float)), np.asarray(lam, dtype=float)
    )
    if x.size == 0:
        return np.zeros(x.shape)

    max_x = np.max(x)
    if not np.isfinite(max_x):
        raise ValidationError(
            "shifted_poisson_cdf requires finite support points",
            expected="finite x",
            got=f"max(x) = {max_x}",
        )

    log_cdf = np.full(x.shape, -np.inf)
    with np.errstate(divide="ignore", invalid="ignore"):
        log_lam = np.log(lam)
        log_term = -lam
        for i in range(1, int(max_x) + 1):
            log_cdf = np.where(x >= i, np.logaddexp(log_cdf, log_term), log_cdf)
            log_term = log_term + log_lam - np.log(i)

    return np.minimum(np.exp(log_cdf), 1.0)
