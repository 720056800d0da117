"""Joint occurrence, intensity and dependence likelihood of the factor copula model.

Conditional on the latent factor ``V = v`` sites are independent. A site
without events contributes ``1 / (1 + exp(link_p))``. A site with
``count = m >= 1`` events contributes the occurrence probability times the
conditional probability, under the bivariate Gaussian copula linking the
site to ``V``, of the count bin ``(F(m), F(m + 1)]``:

    p(s, t) * [C_{1|2}(F(m + 1) | v) - C_{1|2}(F(m) | v)],

where ``F`` is the shifted-Poisson CDF with rate ``lam = exp(link_lam)`` and
the copula correlation is ``rho = tanh(field_dep)``. The product over sites
is integrated over ``v`` with Gauss-Legendre quadrature on [0, 1]:

    L = sum_k w_k exp(sum_i log f_i(x_k)).

Per-site log terms that are not finite are left out of the sum over sites
so that one degenerate site cannot invalidate a quadrature node.

`joint_likelihood` returns ``L`` itself. For many observations
``sum_i log f_i`` is large and negative and ``exp`` underflows to 0;
`joint_log_likelihood` and `nllk_joint` combine the nodes with ``logsumexp``
and stay finite in that regime.
"""

from logging import DEBUG, getLogger

import numpy as np
from scipy.special import logsumexp

from spatiotemporal_copula import _validation as val
from spatiotemporal_copula.likelihoods.common import prepare_inputs, sum_finite
from spatiotemporal_copula.likelihoods.copula import conditional_copula_cdf
from spatiotemporal_copula.likelihoods.link import linear_predictor, spatial_field
from spatiotemporal_copula.likelihoods.shifted_poisson import shifted_poisson_cdf
from spatiotemporal_copula.parameters import JointParameters, split_joint_parameters
from spatiotemporal_copula.quadrature import cached_gauss_legendre, gauss_legendre
from spatiotemporal_copula.tables import ObservationTable

logger = getLogger(__name__)


def dependence_correlation(field: np.ndarray) -> np.ndarray:
    """Map the dependence field onto a copula correlation in [-1, 1].

    ``rho = (exp(2 f) - 1) / (exp(2 f) + 1)``. Fields above ~355 overflow
    to ``nan``, which drops the site from the quadrature sum.
    """
    with np.errstate(over="ignore", invalid="ignore"):
        tmp = np.exp(2.0 * field)
        return (tmp - 1.0) / (tmp + 1.0)


def joint_node_log_terms(
    parameters: JointParameters,
    observations: ObservationTable,
    basis: np.ndarray,
    nodes: np.ndarray,
) -> np.ndarray:
    """Per-node, per-site log contributions before non-finite terms are dropped.

    Parameters
    ----------
    parameters : JointParameters
    observations : ObservationTable
    basis : np.ndarray, shape (n_observations, n_centers)
    nodes : np.ndarray, shape (n_nodes,)
        Values of the latent factor.

    Returns
    -------
    log_terms : np.ndarray, shape (n_nodes, n_observations)
        May contain ``-inf`` and ``nan``.
    """
    time = observations.time
    count = observations.count
    is_event = count != 0

    with np.errstate(over="ignore", invalid="ignore", divide="ignore"):
        odds = np.exp(linear_predictor(basis, time, parameters.occurrence))
        occurrence_log_term = np.where(
            is_event, np.log(odds / (1.0 + odds)), -np.log(1.0 + odds)
        )

    log_terms = np.tile(occurrence_log_term, (nodes.shape[0], 1))
    if not np.any(is_event):
        return log_terms

    event_basis = basis[is_event]
    event_count = count[is_event]
    with np.errstate(over="ignore"):
        rate = np.exp(
            linear_predictor(event_basis, time[is_event], parameters.intensity)
        )
    rho = dependence_correlation(spatial_field(event_basis, parameters.dependence))

    upper = shifted_poisson_cdf(event_count + 1, rate)
    lower = shifted_poisson_cdf(event_count, rate)

    latent = nodes[:, np.newaxis]
    with np.errstate(invalid="ignore", divide="ignore"):
        bin_probability = conditional_copula_cdf(
            upper, latent, rho
        ) - conditional_copula_cdf(lower, latent, rho)
        log_terms[:, is_event] += np.log(bin_probability)

    return log_terms


def _quadrature_rule(
    n_quadrature_nodes: int, use_cached_quadrature: bool
) -> tuple[np.ndarray, np.ndarray]:
    if use_cached_quadrature:
        return cached_gauss_legendre(n_quadrature_nodes)
    return gauss_legendre(n_quadrature_nodes)


def joint_node_log_integrand(
    parameters: JointParameters,
    observations: ObservationTable,
    basis: np.ndarray,
    nodes: np.ndarray,
) -> np.ndarray:
    """Log of the integrand at each quadrature node.

    Returns
    -------
    node_log_integrand : np.ndarray, shape (n_nodes,)
        ``sum_i log f_i(x_k)`` over the finite site terms.
    """
    log_terms = joint_node_log_terms(parameters, observations, basis, nodes)
    node_log_integrand, n_dropped = sum_finite(log_terms, axis=1)

    if logger.isEnabledFor(DEBUG):
        logger.debug(
            "Joint likelihood: %d nodes x %d observations, %d non-finite terms "
            "dropped, node log integrand in [%g, %g]",
            nodes.shape[0],
            observations.n_observations,
            n_dropped,
            np.min(node_log_integrand),
            np.max(node_log_integrand),
        )
    return node_log_integrand


def joint_likelihood_from_basis(
    parameters: JointParameters,
    observations: ObservationTable,
    basis: np.ndarray,
    n_quadrature_nodes: int,
    use_cached_quadrature: bool = False,
) -> float:
    """Integrated joint likelihood with a precomputed kernel basis."""
    nodes, weights = _quadrature_rule(n_quadrature_nodes, use_cached_quadrature)
    node_log_integrand = joint_node_log_integrand(
        parameters, observations, basis, nodes
    )
    return float(np.exp(node_log_integrand) @ weights)


def joint_log_likelihood_from_basis(
    parameters: JointParameters,
    observations: ObservationTable,
    basis: np.ndarray,
    n_quadrature_nodes: int,
    use_cached_quadrature: bool = False,
) -> float:
    """Log of the integrated joint likelihood with a precomputed kernel basis."""
    nodes, weights = _quadrature_rule(n_quadrature_nodes, use_cached_quadrature)
    node_log_integrand = joint_node_log_integrand(
        parameters, observations, basis, nodes
    )
    return float(logsumexp(node_log_integrand, b=weights))


def joint_nllk_from_basis(
    parameters: JointParameters,
    observations: ObservationTable,
    basis: np.ndarray,
    n_quadrature_nodes: int,
    use_cached_quadrature: bool = False,
) -> float:
    """Negative of `joint_log_likelihood_from_basis`, for minimization."""
    return -joint_log_likelihood_from_basis(
        parameters, observations, basis, n_quadrature_nodes, use_cached_quadrature
    )


def _prepare_joint(
    params, data, centers, n_centers, bandwidth, n_quadrature_nodes
) -> tuple[JointParameters, ObservationTable, np.ndarray]:
    val.ensure_positive_integer(n_quadrature_nodes, "n_quadrature_nodes")
    parameters = split_joint_parameters(params, n_centers)
    observations, basis = prepare_inputs(data, centers, n_centers, bandwidth)
    return parameters, observations, basis


def joint_likelihood(
    params,
    data,
    centers,
    n_centers: int,
    bandwidth: float,
    n_quadrature_nodes: int,
    use_cached_quadrature: bool = False,
) -> float:
    """Integrated likelihood of the joint factor copula model.

    This is the likelihood itself, not its negative logarithm.

    Parameters
    ----------
    params : array_like, shape (3 * n_centers + 11,)
        Occurrence block (kernel weights, intercept, ``a0..a3``), intensity
        block (kernel weights, intercept, ``b0..b3``) and dependence block
        (kernel weights, intercept).
    data : pd.DataFrame or array_like, shape (n_observations, 4)
        Columns time, count, longitude, latitude; ``count`` is 0 when no
        event occurred.
    centers : pd.DataFrame or array_like, shape (n_centers, 2)
    n_centers : int
    bandwidth : float
    n_quadrature_nodes : int
        Gauss-Legendre order used to integrate out the latent factor.
    use_cached_quadrature : bool, optional
        Reuse quadrature tables across calls, by default False

    Returns
    -------
    likelihood : float
        Approximately in [0, 1]; underflows to 0 for large data sets.

    Examples
    --------
    >>> import numpy as np
    >>> likelihood = joint_likelihood(
    ...     np.zeros(14), [[0.0, 0, 0.0, 0.0]], [[0.0, 0.0]], 1, 1.0, 5
    ... )
    >>> round(likelihood, 12)
    0.5
    """
    parameters, observations, basis = _prepare_joint(
        params, data, centers, n_centers, bandwidth, n_quadrature_nodes
    )
    return joint_likelihood_from_basis(
        parameters, observations, basis, n_quadrature_nodes, use_cached_quadrature
    )


def joint_log_likelihood(
    params,
    data,
    centers,
    n_centers: int,
    bandwidth: float,
    n_quadrature_nodes: int,
    use_cached_quadrature: bool = False,
) -> float:
    """``log(joint_likelihood(...))`` evaluated without underflow.

    Same parameters as `joint_likelihood`.
    """
    parameters, observations, basis = _prepare_joint(
        params, data, centers, n_centers, bandwidth, n_quadrature_nodes
    )
    return joint_log_likelihood_from_basis(
        parameters, observations, basis, n_quadrature_nodes, use_cached_quadrature
    )


def nllk_joint(
    params,
    data,
    centers,
    n_centers: int,
    bandwidth: float,
    n_quadrature_nodes: int,
    use_cached_quadrature: bool = False,
) -> float:
    """Negative log of the integrated joint likelihood, for minimization."""
    parameters, observations, basis = _prepare_joint(
        params, data, centers, n_centers, bandwidth, n_quadrature_nodes
    )
    return joint_nllk_from_basis(
        parameters, observations, basis, n_quadrature_nodes, use_cached_quadrature
    )


def joint_log_integrand(
    params,
    data,
    centers,
    n_centers: int,
    bandwidth: float,
    n_quadrature_nodes: int,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Quadrature nodes, weights and the per-site log terms at each node.

    Diagnostic view of what `joint_likelihood` sums. Non-finite terms are
    replaced by 0, the value they contribute.

    Returns
    -------
    nodes : np.ndarray, shape (n_nodes,)
    weights : np.ndarray, shape (n_nodes,)
    log_terms : np.ndarray, shape (n_nodes, n_observations)
    """
    parameters, observations, basis = _prepare_joint(
        params, data, centers, n_centers, bandwidth, n_quadrature_nodes
    )
    nodes, weights = gauss_legendre(n_quadrature_nodes)
    log_terms = joint_node_log_terms(parameters, observations, basis, nodes)
    return nodes, weights, np.where(np.isfinite(log_terms), log_terms, 0.0)
