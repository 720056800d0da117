"""Numerical guards and argument handling shared by the likelihood evaluators."""

from __future__ import annotations

import numpy as np

from spatiotemporal_copula import _validation as val
from spatiotemporal_copula.config import (
    NON_FINITE_PROBABILITY,
    PROBABILITY_CEILING,
    PROBABILITY_FLOOR,
)
from spatiotemporal_copula.likelihoods.link import build_kernel_basis
from spatiotemporal_copula.tables import (
    ObservationTable,
    as_center_array,
    as_observation_table,
)


def clamp_probability(
    probability: np.ndarray,
    floor: float = PROBABILITY_FLOOR,
    ceiling: float = PROBABILITY_CEILING,
    non_finite_value: float = NON_FINITE_PROBABILITY,
) -> np.ndarray:
    """Keep probabilities away from 0 and 1 before taking logarithms.

    Non-finite entries are replaced by ``non_finite_value``; finite entries are
    clipped into ``[floor, ceiling]``.

    Parameters
    ----------
    probability : np.ndarray, shape (n,)

    Returns
    -------
    probability : np.ndarray, shape (n,)
    """
    probability = np.asarray(probability, dtype=float)
    return np.where(
        np.isfinite(probability),
        np.clip(probability, floor, ceiling),
        non_finite_value,
    )


def sum_finite(terms: np.ndarray, axis: int = -1) -> tuple[np.ndarray, int]:
    """Sum log-likelihood terms along ``axis``, dropping non-finite entries.

    Parameters
    ----------
    terms : np.ndarray
    axis : int, optional

    Returns
    -------
    total : np.ndarray
        ``terms`` summed along ``axis`` with non-finite entries counted as 0.
    n_dropped : int
        Number of entries that were dropped.
    """
    is_finite = np.isfinite(terms)
    total = np.sum(np.where(is_finite, terms, 0.0), axis=axis)
    return total, int(is_finite.size - np.count_nonzero(is_finite))


def prepare_inputs(
    data, centers, n_centers: int, bandwidth: float
) -> tuple[ObservationTable, np.ndarray]:
    """Validate the shared evaluator arguments and build the kernel basis.

    Returns
    -------
    observations : ObservationTable
    basis : np.ndarray, shape (n_observations, n_centers)
    """
    val.ensure_positive_scalar(bandwidth, "bandwidth")
    centers = as_center_array(centers, n_centers)
    observations = as_observation_table(data)
    return observations, build_kernel_basis(observations, centers, bandwidth)
