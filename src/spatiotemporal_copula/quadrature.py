"""Gauss-Legendre quadrature on the unit interval.

The latent factor of the copula model is uniform on [0, 1] and is integrated
out with a fixed-order Gauss-Legendre rule. Nodes are the roots of the
Legendre polynomial ``P_n``, found by Newton iteration on the three-term
recurrence. Only the roots in one half of the interval are iterated; the
rest follow from symmetry about the midpoint.
"""

from functools import lru_cache
from logging import getLogger

import numpy as np

from spatiotemporal_copula import _validation as val
from spatiotemporal_copula.exceptions import ConvergenceError

logger = getLogger(__name__)

CONVERGENCE_TOLERANCE = 3.0e-11
MAX_NEWTON_ITERATIONS = 100


def _legendre_recurrence(z: np.ndarray, order: int) -> tuple[np.ndarray, np.ndarray]:
    """Evaluate ``P_order`` and ``P_{order - 1}`` at ``z``.

    Parameters
    ----------
    z : np.ndarray, shape (n_roots,)
    order : int

    Returns
    -------
    p_order : np.ndarray, shape (n_roots,)
    p_order_minus_one : np.ndarray, shape (n_roots,)
    """
    p1 = np.ones_like(z)
    p2 = np.zeros_like(z)
    for j in range(1, order + 1):
        p3 = p2
        p2 = p1
        p1 = ((2.0 * j - 1.0) * z * p2 - (j - 1.0) * p3) / j
    return p1, p2


def gauss_legendre(n_nodes: int) -> tuple[np.ndarray, np.ndarray]:
    """Gauss-Legendre nodes and weights on [0, 1].

    The rule integrates polynomials of degree up to ``2 * n_nodes - 1``
    exactly and its weights sum to one.

    Parameters
    ----------
    n_nodes : int
        Quadrature order, >= 1.

    Returns
    -------
    nodes : np.ndarray, shape (n_nodes,)
        Ascending nodes in (0, 1).
    weights : np.ndarray, shape (n_nodes,)

    Raises
    ------
    ValidationError
        If ``n_nodes`` is not a positive integer.
    ConvergenceError
        If a root does not converge within ``MAX_NEWTON_ITERATIONS``.

    Examples
    --------
    >>> nodes, weights = gauss_legendre(3)
    >>> round(float(weights @ nodes**2), 12)  # integral of x^2 over [0, 1]
    0.333333333333
    """
    val.ensure_positive_integer(n_nodes, "n_nodes")
    n_nodes = int(n_nodes)
    n_roots = (n_nodes + 1) // 2

    root_ind = np.arange(1, n_roots + 1)
    z = np.cos(np.pi * (root_ind - 0.25) / (n_nodes + 0.5))
    derivative = np.empty_like(z)
    is_active = np.ones((n_roots,), dtype=bool)

    for _ in range(MAX_NEWTON_ITERATIONS):
        z_active = z[is_active]
        p1, p2 = _legendre_recurrence(z_active, n_nodes)
        dp = n_nodes * (z_active * p1 - p2) / (z_active * z_active - 1.0)
        z_next = z_active - p1 / dp

        active_ind = np.flatnonzero(is_active)
        derivative[active_ind] = dp
        z[active_ind] = z_next
        is_active[active_ind[np.abs(z_next - z_active) <= CONVERGENCE_TOLERANCE]] = (
            False
        )
        if not is_active.any():
            break
    else:
        raise ConvergenceError(
            f"Legendre root iteration did not converge for n_nodes={n_nodes}",
            iterations=MAX_NEWTON_ITERATIONS,
            tolerance=CONVERGENCE_TOLERANCE,
        )

    # Map [-1, 1] onto [0, 1]: midpoint 0.5, half-length 0.5.
    nodes = np.empty((n_nodes,))
    weights = np.empty((n_nodes,))
    root_weights = 1.0 / ((1.0 - z * z) * derivative * derivative)

    nodes[:n_roots] = 0.5 - 0.5 * z
    nodes[n_nodes - root_ind] = 0.5 + 0.5 * z
    weights[:n_roots] = root_weights
    weights[n_nodes - root_ind] = root_weights

    return nodes, weights


@lru_cache(maxsize=32)
def _cached_rule(n_nodes: int) -> tuple[np.ndarray, np.ndarray]:
    logger.debug("Computing Gauss-Legendre rule of order %d", n_nodes)
    nodes, weights = gauss_legendre(n_nodes)
    nodes.setflags(write=False)
    weights.setflags(write=False)
    return nodes, weights


def cached_gauss_legendre(n_nodes: int) -> tuple[np.ndarray, np.ndarray]:
    """Like `gauss_legendre`, but reuses read-only tables across calls."""
    val.ensure_positive_integer(n_nodes, "n_nodes")
    return _cached_rule(int(n_nodes))
