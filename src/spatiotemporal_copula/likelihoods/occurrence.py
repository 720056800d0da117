"""Negative log-likelihood of the event occurrence model.

Each observation is a Bernoulli trial with logit-linear success probability

    p(s, t) = exp(link) / (1 + exp(link)),

where ``link`` is the spatio-temporal linear predictor of
`spatiotemporal_copula.likelihoods.link`. Probabilities are clamped into
``[1e-7, 1 - 1e-7]`` (non-finite values become ``1e-4``) before the
logarithm, so the objective is always finite and non-negative.
"""

from logging import DEBUG, getLogger

import numpy as np

from spatiotemporal_copula import _validation as val
from spatiotemporal_copula.config import (
    EVENT_RULES,
    PROBABILITY_CEILING,
    PROBABILITY_FLOOR,
)
from spatiotemporal_copula.likelihoods.common import clamp_probability, prepare_inputs
from spatiotemporal_copula.likelihoods.link import linear_predictor
from spatiotemporal_copula.parameters import LinkCoefficients, split_link_parameters
from spatiotemporal_copula.tables import ObservationTable

logger = getLogger(__name__)


def is_occurrence_event(
    count: np.ndarray, event_rule: str = "exactly_one"
) -> np.ndarray:
    """Which observations fall in the event branch of the occurrence model.

    Parameters
    ----------
    count : np.ndarray, shape (n_observations,)
    event_rule : {"exactly_one", "at_least_one"}, optional
        ``"exactly_one"`` only treats ``count == 1`` as an event; larger
        counts fall in the no-event branch. By default "exactly_one".
        Not validated here; `nllk_occurrence` and `ModelConfig` check it.

    Returns
    -------
    is_event : np.ndarray, shape (n_observations,)
    """
    if event_rule == "exactly_one":
        return count == 1
    return count >= 1


def occurrence_probability(link: np.ndarray, is_event: np.ndarray) -> np.ndarray:
    """Clamped probability of the observed occurrence outcome.

    Parameters
    ----------
    link : np.ndarray, shape (n_observations,)
    is_event : np.ndarray, shape (n_observations,)

    Returns
    -------
    probability : np.ndarray, shape (n_observations,)
    """
    with np.errstate(over="ignore", invalid="ignore"):
        odds = np.exp(link)
        probability = np.where(is_event, odds / (1.0 + odds), 1.0 / (1.0 + odds))
    return clamp_probability(probability)


def occurrence_nllk_from_basis(
    coefficients: LinkCoefficients,
    observations: ObservationTable,
    basis: np.ndarray,
    event_rule: str = "exactly_one",
) -> float:
    """Occurrence negative log-likelihood with a precomputed kernel basis.

    Parameters
    ----------
    coefficients : LinkCoefficients
    observations : ObservationTable
    basis : np.ndarray, shape (n_observations, n_centers)
    event_rule : str, optional

    Returns
    -------
    nllk : float
    """
    link = linear_predictor(basis, observations.time, coefficients)
    is_event = is_occurrence_event(observations.count, event_rule)
    probability = occurrence_probability(link, is_event)

    if logger.isEnabledFor(DEBUG):
        n_clamped = np.count_nonzero(
            (probability <= PROBABILITY_FLOOR) | (probability >= PROBABILITY_CEILING)
        )
        logger.debug(
            "Occurrence likelihood: %d observations, %d events, %d clamped",
            observations.n_observations,
            np.count_nonzero(is_event),
            n_clamped,
        )

    return float(-np.sum(np.log(probability)))


def nllk_occurrence(
    params,
    data,
    centers,
    n_centers: int,
    bandwidth: float,
    event_rule: str = "exactly_one",
) -> float:
    """Negative log-likelihood of the occurrence model.

    Parameters
    ----------
    params : array_like, shape (n_centers + 5,)
        Kernel weights, intercept and trend coefficients ``a0..a3``.
    data : pd.DataFrame or array_like, shape (n_observations, 4)
        Columns time, count, longitude, latitude.
    centers : pd.DataFrame or array_like, shape (n_centers, 2)
        Longitude and latitude of the kernel centers.
    n_centers : int
    bandwidth : float
        Kernel decay ``g`` > 0.
    event_rule : {"exactly_one", "at_least_one"}, optional
        By default "exactly_one".

    Returns
    -------
    nllk : float
        Non-negative, finite.

    Raises
    ------
    ValidationError
        If the inputs have the wrong shape or invalid hyperparameters.
    DataError
        If the observation table holds non-finite or invalid values.
    """
    val.ensure_one_of(event_rule, "event_rule", EVENT_RULES)
    coefficients = split_link_parameters(params, n_centers)
    observations, basis = prepare_inputs(data, centers, n_centers, bandwidth)
    return occurrence_nllk_from_basis(coefficients, observations, basis, event_rule)
