"""Model constants and the evaluation configuration.

The constants fix the seasonal period and the numerical guards applied by the
likelihood evaluators. Changing the guard values changes objective values, so
they must stay in step with any previously fitted parameters.
"""

from dataclasses import dataclass

import numpy as np

from spatiotemporal_copula import _validation as val
from spatiotemporal_copula.exceptions import ConfigurationError, ValidationError

MONTHS_PER_YEAR = 12
"""Number of time periods per seasonal cycle (monthly data)."""

ANGULAR_FREQUENCY = 2.0 * np.pi / MONTHS_PER_YEAR
"""Angular frequency of the harmonic seasonal trend."""

PROBABILITY_FLOOR = 1e-7
PROBABILITY_CEILING = 1.0 - 1e-7
NON_FINITE_PROBABILITY = 1e-4
"""Probability substituted for a non-finite occurrence probability."""

EVENT_RULES = ("exactly_one", "at_least_one")
"""How the occurrence model reads the count column.

``"exactly_one"`` treats only ``count == 1`` as an event, so counts of two
or more fall in the no-event branch. ``"at_least_one"`` treats any positive
count as an event.
"""

DEFAULT_N_QUADRATURE_NODES = 25


@dataclass(frozen=True)
class ModelConfig:
    """Hyperparameters shared by every evaluator of one fitted model.

    Attributes
    ----------
    n_centers : int
        Number of kernel centers (``Kcen``).
    bandwidth : float
        Gaussian kernel decay ``g`` applied to squared distances.
    n_quadrature_nodes : int
        Gauss-Legendre order used to integrate out the latent factor.
    event_rule : str
        One of ``EVENT_RULES``.
    use_cached_quadrature : bool
        Reuse quadrature tables across joint evaluations.
    """

    n_centers: int
    bandwidth: float
    n_quadrature_nodes: int = DEFAULT_N_QUADRATURE_NODES
    event_rule: str = "exactly_one"
    use_cached_quadrature: bool = False

    def __post_init__(self) -> None:
        val.ensure_positive_integer(self.n_centers, "n_centers")
        val.ensure_positive_scalar(self.bandwidth, "bandwidth")
        val.ensure_positive_integer(self.n_quadrature_nodes, "n_quadrature_nodes")
        try:
            val.ensure_one_of(self.event_rule, "event_rule", EVENT_RULES)
        except ValidationError as error:
            raise ConfigurationError(
                str(error),
                hint="'exactly_one' reproduces previously fitted occurrence models",
            ) from error
