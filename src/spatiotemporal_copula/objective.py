"""Objective functions bound to one data set, for use inside an optimizer.

An optimizer evaluates the same objective at many parameter vectors while
the observations, centers and hyperparameters stay fixed. The kernel basis
only depends on the latter, so `SpatioTemporalObjective.fit` computes it once
and every call reuses it.

Examples
--------
>>> import numpy as np
>>> from spatiotemporal_copula import ModelConfig, SpatioTemporalObjective
>>> config = ModelConfig(n_centers=1, bandwidth=1.0, n_quadrature_nodes=5)
>>> objective = SpatioTemporalObjective("occurrence", config).fit(
...     [[0.0, 0, 0.0, 0.0]], [[0.0, 0.0]]
... )
>>> objective.n_parameters
6
>>> round(objective(np.zeros(6)), 6)  # -log(0.5)
0.693147
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger

import numpy as np

from spatiotemporal_copula.config import ModelConfig
from spatiotemporal_copula.exceptions import ConfigurationError, ValidationError
from spatiotemporal_copula.likelihoods import _JOINT_OBJECTIVES, _STANDALONE_OBJECTIVES
from spatiotemporal_copula.likelihoods.common import prepare_inputs
from spatiotemporal_copula.parameters import (
    joint_parameter_size,
    occurrence_parameter_size,
    split_joint_parameters,
    split_link_parameters,
)

logger = getLogger(__name__)

OBJECTIVE_KINDS = (*_STANDALONE_OBJECTIVES, *_JOINT_OBJECTIVES)


@dataclass
class SpatioTemporalObjective:
    """Callable objective ``params -> float`` over a fixed data set.

    Parameters
    ----------
    kind : {"occurrence", "intensity", "joint", "joint_nllk"}
        ``"occurrence"`` and ``"intensity"`` are negative log-likelihoods of
        the standalone models. ``"joint"`` is the integrated joint likelihood
        (to be maximized) and ``"joint_nllk"`` its negative logarithm.
    config : ModelConfig
    """

    kind: str
    config: ModelConfig

    def __post_init__(self) -> None:
        if self.kind not in OBJECTIVE_KINDS:
            raise ConfigurationError(
                f"Unknown objective kind {self.kind!r}",
                hint=f"Use one of {OBJECTIVE_KINDS}",
            )
        if not isinstance(self.config, ModelConfig):
            raise ConfigurationError(
                f"config must be a ModelConfig, got {type(self.config).__name__}"
            )

    @property
    def n_parameters(self) -> int:
        """Length of the parameter vector the objective expects."""
        if self.kind in _STANDALONE_OBJECTIVES:
            return occurrence_parameter_size(self.config.n_centers)
        return joint_parameter_size(self.config.n_centers)

    def fit(self, data, centers) -> "SpatioTemporalObjective":
        """Coerce the tables and precompute the kernel basis.

        Parameters
        ----------
        data : pd.DataFrame or array_like, shape (n_observations, 4)
        centers : pd.DataFrame or array_like, shape (n_centers, 2)

        Returns
        -------
        self : SpatioTemporalObjective
        """
        logger.info("Precomputing kernel basis...")
        self.observations_, self.basis_ = prepare_inputs(
            data, centers, self.config.n_centers, self.config.bandwidth
        )
        logger.info(
            "Kernel basis ready: %d observations x %d centers",
            *self.basis_.shape,
        )
        return self

    def __call__(self, params: np.ndarray) -> float:
        """Evaluate the objective at ``params``.

        Raises
        ------
        ValidationError
            If `fit` has not been called or ``params`` has the wrong length.
        """
        if not hasattr(self, "basis_"):
            raise ValidationError(
                "Objective has no data",
                hint="Call fit(data, centers) before evaluating the objective",
            )

        if self.kind in _STANDALONE_OBJECTIVES:
            coefficients = split_link_parameters(params, self.config.n_centers)
            options = (
                {"event_rule": self.config.event_rule}
                if self.kind == "occurrence"
                else {}
            )
            return _STANDALONE_OBJECTIVES[self.kind](
                coefficients, self.observations_, self.basis_, **options
            )

        parameters = split_joint_parameters(params, self.config.n_centers)
        return _JOINT_OBJECTIVES[self.kind](
            parameters,
            self.observations_,
            self.basis_,
            self.config.n_quadrature_nodes,
            self.config.use_cached_quadrature,
        )
