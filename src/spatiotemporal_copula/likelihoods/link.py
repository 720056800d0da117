"""Spatio-temporal link functions.

Every sub-model (occurrence, intensity, dependence) shares one linear
predictor: a radial-basis-function smoother over fixed kernel centers plus a
harmonic seasonal trend,

    field(i) = b + sum_j w_j exp(-g * d2(s_i, c_j))
    link(i)  = field(i) + c0 + c1 t_i + c2 sin(w t_i) + c3 cos(w t_i)

where ``d2`` is the squared Euclidean distance in (longitude, latitude) and
``w = 2 pi / 12``. Only the coefficients differ between sub-models, so the
kernel basis ``exp(-g * d2)`` is computed once per observation table and
reused.
"""

from __future__ import annotations

import numpy as np

from spatiotemporal_copula.config import ANGULAR_FREQUENCY
from spatiotemporal_copula.parameters import LinkCoefficients
from spatiotemporal_copula.tables import ObservationTable


def squared_distances(
    longitude: np.ndarray, latitude: np.ndarray, centers: np.ndarray
) -> np.ndarray:
    """Squared distance between each observation site and each kernel center.

    Parameters
    ----------
    longitude : np.ndarray, shape (n_observations,)
    latitude : np.ndarray, shape (n_observations,)
    centers : np.ndarray, shape (n_centers, 2)

    Returns
    -------
    sq_distances : np.ndarray, shape (n_observations, n_centers)
    """
    return (
        np.subtract.outer(longitude, centers[:, 0]) ** 2
        + np.subtract.outer(latitude, centers[:, 1]) ** 2
    )


def kernel_basis(sq_distances: np.ndarray, bandwidth: float) -> np.ndarray:
    """Gaussian kernel ``exp(-bandwidth * d2)`` of squared distances."""
    return np.exp(-bandwidth * sq_distances)


def build_kernel_basis(
    observations: ObservationTable, centers: np.ndarray, bandwidth: float
) -> np.ndarray:
    """Kernel basis matrix of an observation table.

    Returns
    -------
    basis : np.ndarray, shape (n_observations, n_centers)
    """
    return kernel_basis(
        squared_distances(observations.longitude, observations.latitude, centers),
        bandwidth,
    )


def spatial_field(basis: np.ndarray, coefficients: LinkCoefficients) -> np.ndarray:
    """Kernel-weighted spatial field including the intercept.

    Parameters
    ----------
    basis : np.ndarray, shape (n_observations, n_centers)
    coefficients : LinkCoefficients

    Returns
    -------
    field : np.ndarray, shape (n_observations,)
    """
    return coefficients.intercept + basis @ coefficients.kernel_weights


def temporal_trend(time: np.ndarray, coefficients: LinkCoefficients) -> np.ndarray:
    """Linear plus annual harmonic trend in time.

    Parameters
    ----------
    time : np.ndarray, shape (n_observations,)
    coefficients : LinkCoefficients

    Returns
    -------
    trend : np.ndarray, shape (n_observations,)
    """
    c0, c1, c2, c3 = coefficients.trend
    phase = ANGULAR_FREQUENCY * time
    return c0 + c1 * time + c2 * np.sin(phase) + c3 * np.cos(phase)


def linear_predictor(
    basis: np.ndarray,
    time: np.ndarray,
    coefficients: LinkCoefficients,
    include_trend: bool = True,
) -> np.ndarray:
    """Spatial field plus, optionally, the temporal trend.

    Parameters
    ----------
    basis : np.ndarray, shape (n_observations, n_centers)
    time : np.ndarray, shape (n_observations,)
    coefficients : LinkCoefficients
    include_trend : bool, optional
        False for the dependence sub-model, by default True

    Returns
    -------
    link : np.ndarray, shape (n_observations,)
    """
    field = spatial_field(basis, coefficients)
    if not include_trend:
        return field
    return field + temporal_trend(time, coefficients)
