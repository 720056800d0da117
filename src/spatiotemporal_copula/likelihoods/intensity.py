"""Negative log-likelihood of the event intensity model.

Counts follow a shifted Poisson distribution with log-linear rate,
``log(lam) = link``, so each observation contributes

    -(-lam + (count - 1) log(lam) - log((count - 1)!)).

Unlike the occurrence model there is no clamping: a rate that overflows or a
zero count makes the objective non-finite. Pass ``guard_non_finite=True`` to
drop such observations instead.
"""

from logging import getLogger

import numpy as np

from spatiotemporal_copula.likelihoods.common import prepare_inputs, sum_finite
from spatiotemporal_copula.likelihoods.link import linear_predictor
from spatiotemporal_copula.likelihoods.shifted_poisson import (
    shifted_poisson_log_pmf_from_log_rate,
)
from spatiotemporal_copula.parameters import LinkCoefficients, split_link_parameters
from spatiotemporal_copula.tables import ObservationTable

logger = getLogger(__name__)


def intensity_nllk_from_basis(
    coefficients: LinkCoefficients,
    observations: ObservationTable,
    basis: np.ndarray,
    guard_non_finite: bool = False,
) -> float:
    """Intensity negative log-likelihood with a precomputed kernel basis.

    Parameters
    ----------
    coefficients : LinkCoefficients
    observations : ObservationTable
    basis : np.ndarray, shape (n_observations, n_centers)
    guard_non_finite : bool, optional
        Drop non-finite per-observation terms, by default False

    Returns
    -------
    nllk : float
    """
    log_rate = linear_predictor(basis, observations.time, coefficients)
    log_likelihood = shifted_poisson_log_pmf_from_log_rate(
        observations.count, log_rate
    )

    if guard_non_finite:
        total, n_dropped = sum_finite(log_likelihood)
        if n_dropped > 0:
            logger.debug("Intensity likelihood: dropped %d non-finite terms", n_dropped)
        return float(-total)

    return float(-np.sum(log_likelihood))


def nllk_intensity(
    params,
    data,
    centers,
    n_centers: int,
    bandwidth: float,
    guard_non_finite: bool = False,
) -> float:
    """Negative log-likelihood of the shifted-Poisson intensity model.

    Parameters
    ----------
    params : array_like, shape (n_centers + 5,)
        Kernel weights, intercept and trend coefficients ``b0..b3``.
    data : pd.DataFrame or array_like, shape (n_observations, 4)
        Columns time, count, longitude, latitude. Counts are expected to be
        >= 1.
    centers : pd.DataFrame or array_like, shape (n_centers, 2)
    n_centers : int
    bandwidth : float
    guard_non_finite : bool, optional
        Drop non-finite per-observation terms, by default False

    Returns
    -------
    nllk : float
        May be ``inf`` or ``nan`` when ``guard_non_finite`` is False.
    """
    coefficients = split_link_parameters(params, n_centers)
    observations, basis = prepare_inputs(data, centers, n_centers, bandwidth)
    return intensity_nllk_from_basis(
        coefficients, observations, basis, guard_non_finite=guard_non_finite
    )
