"""Shared test fixtures for spatiotemporal_copula tests.

This module provides:
1. Kernel-center and observation tables of different sizes
2. Parameter vectors laid out for the standalone and joint models
3. A brute-force reference of the joint likelihood loop
"""

import numpy as np
import pandas as pd
import pytest
from scipy.special import ndtr, ndtri

# ==============================================================================
# TABLE FIXTURES
# ==============================================================================


@pytest.fixture
def single_center():
    """One kernel center at the origin."""
    return np.array([[0.0, 0.0]])


@pytest.fixture
def three_centers():
    """Three kernel centers spread over a unit square."""
    return np.array([[0.0, 0.0], [1.0, 0.5], [0.5, 1.0]])


@pytest.fixture
def origin_observation():
    """One observation at the origin at time 0 without an event."""
    return np.array([[0.0, 0.0, 0.0, 0.0]])


@pytest.fixture
def event_data():
    """Twenty-four monthly observations at random sites with mixed counts.

    Returns:
        np.ndarray: Columns time, count, longitude, latitude.
    """
    rng = np.random.default_rng(7)
    n_observations = 24
    time = np.arange(n_observations, dtype=float)
    count = rng.choice([0, 0, 1, 1, 2, 3, 5], size=n_observations).astype(float)
    longitude = rng.uniform(0.0, 1.0, n_observations)
    latitude = rng.uniform(0.0, 1.0, n_observations)
    return np.column_stack([time, count, longitude, latitude])


@pytest.fixture
def event_frame(event_data):
    """`event_data` as a DataFrame with named columns."""
    return pd.DataFrame(event_data, columns=["time", "count", "longitude", "latitude"])


# ==============================================================================
# PARAMETER FIXTURES
# ==============================================================================


@pytest.fixture
def link_params():
    """Standalone occurrence/intensity vector for three centers."""
    return np.array([0.4, -0.3, 0.2, -0.1, 0.05, 0.01, 0.3, -0.2])


@pytest.fixture
def joint_params():
    """Joint model vector for three centers (3 * 3 + 11 entries)."""
    occurrence = [0.4, -0.3, 0.2, -0.1, 0.05, 0.01, 0.3, -0.2]
    intensity = [0.2, 0.1, -0.2, 0.3, 0.1, 0.0, -0.1, 0.2]
    dependence = [0.5, -0.2, 0.3, 0.1]
    return np.array(occurrence + intensity + dependence)


# ==============================================================================
# REFERENCE IMPLEMENTATIONS
# ==============================================================================


def reference_link(weights, trend, time, longitude, latitude, centers, bandwidth):
    """Linear predictor for one observation, summed term by term."""
    total = weights[-1]
    for weight, (center_lon, center_lat) in zip(weights[:-1], centers):
        sq_distance = (longitude - center_lon) ** 2 + (latitude - center_lat) ** 2
        total += weight * np.exp(-bandwidth * sq_distance)
    omega = 2.0 * np.pi / 12.0
    return (
        total
        + trend[0]
        + trend[1] * time
        + trend[2] * np.sin(omega * time)
        + trend[3] * np.cos(omega * time)
    )


def reference_shifted_poisson_cdf(x, lam):
    """Sum of independently computed shifted-Poisson masses."""
    total = 0.0
    for i in range(1, int(x) + 1):
        total += np.exp(-lam) * lam ** (i - 1) / np.prod(np.arange(1, i, dtype=float))
    return total


def reference_joint_likelihood(params, data, centers, bandwidth, nodes, weights):
    """Scalar loop over quadrature nodes and observations."""
    n_centers = centers.shape[0]
    block = n_centers + 5
    a_weights, a_trend = params[: n_centers + 1], params[n_centers + 1 : block]
    b_weights = params[block : block + n_centers + 1]
    b_trend = params[block + n_centers + 1 : 2 * block]
    dep_weights = params[2 * block :]
    no_trend = np.zeros(4)

    likelihood = 0.0
    for node, weight in zip(nodes, weights):
        node_log_integrand = 0.0
        for time, count, longitude, latitude in data:
            odds = np.exp(
                reference_link(
                    a_weights, a_trend, time, longitude, latitude, centers, bandwidth
                )
            )
            if count == 0:
                term = -np.log(1.0 + odds)
            else:
                term = np.log(odds / (1.0 + odds))
                lam = np.exp(
                    reference_link(
                        b_weights, b_trend, time, longitude, latitude, centers, bandwidth
                    )
                )
                tmp = np.exp(
                    2.0
                    * reference_link(
                        dep_weights, no_trend, 0.0, longitude, latitude, centers, bandwidth
                    )
                )
                rho = (tmp - 1.0) / (tmp + 1.0)
                scale = np.sqrt(1.0 - rho**2)

                def h(u):
                    return ndtr((ndtri(u) - rho * ndtri(node)) / scale)

                term += np.log(
                    h(reference_shifted_poisson_cdf(count + 1, lam))
                    - h(reference_shifted_poisson_cdf(count, lam))
                )
            if np.isfinite(term):
                node_log_integrand += term
        likelihood += np.exp(node_log_integrand) * weight
    return likelihood


@pytest.fixture
def joint_reference():
    """`reference_joint_likelihood` for tests outside this module."""
    return reference_joint_likelihood


@pytest.fixture
def link_reference():
    """`reference_link` for tests outside this module."""
    return reference_link


@pytest.fixture
def cdf_reference():
    """`reference_shifted_poisson_cdf` for tests outside this module."""
    return reference_shifted_poisson_cdf
