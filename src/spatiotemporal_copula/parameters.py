"""Structured views of the flat parameter vector.

The optimizer works on one flat vector whose positions are significant. It
is sliced once at the evaluator boundary into `LinkCoefficients` per
sub-model:

========================  ==========================================
Sub-model                 Positions
========================  ==========================================
occurrence / intensity    ``[0, K]`` kernel weights then intercept,
(standalone)              ``[K+1, K+4]`` trend coefficients
joint occurrence          ``[0, K+4]`` (same as standalone)
joint intensity           ``[K+5, 2K+9]``
joint dependence          ``[2K+10, 3K+10]`` weights and intercept
========================  ==========================================

where ``K`` is the number of kernel centers. The dependence sub-model has no
seasonal trend.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from spatiotemporal_copula import _validation as val

N_TREND_COEFFICIENTS = 4


def link_parameter_size(n_centers: int, include_trend: bool = True) -> int:
    """Number of entries one sub-model occupies in the flat vector."""
    return n_centers + 1 + (N_TREND_COEFFICIENTS if include_trend else 0)


def occurrence_parameter_size(n_centers: int) -> int:
    """Length of a standalone occurrence or intensity parameter vector."""
    return link_parameter_size(n_centers)


def joint_parameter_size(n_centers: int) -> int:
    """Length of the joint model parameter vector (``3 * n_centers + 11``)."""
    return 2 * link_parameter_size(n_centers) + link_parameter_size(
        n_centers, include_trend=False
    )


@dataclass(frozen=True, eq=False)
class LinkCoefficients:
    """Coefficients of one spatio-temporal link.

    Attributes
    ----------
    kernel_weights : np.ndarray, shape (n_centers,)
        Weight of each Gaussian kernel basis function.
    intercept : float
        Constant added to the spatial field.
    trend : np.ndarray, shape (4,)
        ``(c0, c1, c2, c3)`` for ``c0 + c1 t + c2 sin(w t) + c3 cos(w t)``.
        All zeros for the dependence sub-model.
    """

    kernel_weights: np.ndarray
    intercept: float
    trend: np.ndarray

    @property
    def n_centers(self) -> int:
        return self.kernel_weights.shape[0]

    @classmethod
    def from_vector(
        cls, params, n_centers: int, include_trend: bool = True
    ) -> "LinkCoefficients":
        """Slice a vector laid out as weights, intercept[, trend]."""
        params = np.asarray(params, dtype=float)
        val.ensure_parameter_length(
            params,
            link_parameter_size(n_centers, include_trend),
            "n_centers kernel weights, intercept"
            + (", 4 trend coefficients" if include_trend else ""),
        )
        trend = (
            params[n_centers + 1 :].copy()
            if include_trend
            else np.zeros((N_TREND_COEFFICIENTS,))
        )
        return cls(
            kernel_weights=params[:n_centers].copy(),
            intercept=float(params[n_centers]),
            trend=trend,
        )

    def to_vector(self, include_trend: bool = True) -> np.ndarray:
        """Inverse of `from_vector`."""
        parts = [self.kernel_weights, np.atleast_1d(self.intercept)]
        if include_trend:
            parts.append(self.trend)
        return np.concatenate(parts)


@dataclass(frozen=True, eq=False)
class JointParameters:
    """Occurrence, intensity and dependence coefficients of the joint model."""

    occurrence: LinkCoefficients
    intensity: LinkCoefficients
    dependence: LinkCoefficients

    @classmethod
    def from_vector(cls, params, n_centers: int) -> "JointParameters":
        params = np.asarray(params, dtype=float)
        val.ensure_parameter_length(
            params,
            joint_parameter_size(n_centers),
            "occurrence block (n_centers + 5), intensity block (n_centers + 5), "
            "dependence block (n_centers + 1)",
        )
        block_size = link_parameter_size(n_centers)
        return cls(
            occurrence=LinkCoefficients.from_vector(params[:block_size], n_centers),
            intensity=LinkCoefficients.from_vector(
                params[block_size : 2 * block_size], n_centers
            ),
            dependence=LinkCoefficients.from_vector(
                params[2 * block_size :], n_centers, include_trend=False
            ),
        )

    def to_vector(self) -> np.ndarray:
        return np.concatenate(
            [
                self.occurrence.to_vector(),
                self.intensity.to_vector(),
                self.dependence.to_vector(include_trend=False),
            ]
        )


def split_link_parameters(params, n_centers: int) -> LinkCoefficients:
    """Slice a standalone occurrence or intensity parameter vector."""
    val.ensure_positive_integer(n_centers, "n_centers")
    return LinkCoefficients.from_vector(params, n_centers)


def split_joint_parameters(params, n_centers: int) -> JointParameters:
    """Slice the joint model parameter vector into its three blocks."""
    val.ensure_positive_integer(n_centers, "n_centers")
    return JointParameters.from_vector(params, n_centers)
