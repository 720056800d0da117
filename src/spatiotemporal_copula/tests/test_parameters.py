"""Tests for slicing the flat parameter vector."""

import numpy as np
import pytest

from spatiotemporal_copula.exceptions import ValidationError
from spatiotemporal_copula.parameters import (
    JointParameters,
    LinkCoefficients,
    joint_parameter_size,
    link_parameter_size,
    occurrence_parameter_size,
    split_joint_parameters,
    split_link_parameters,
)


@pytest.mark.unit
@pytest.mark.parametrize("n_centers", [1, 3, 10])
def test_sizes(n_centers):
    assert occurrence_parameter_size(n_centers) == n_centers + 5
    assert link_parameter_size(n_centers, include_trend=False) == n_centers + 1
    assert joint_parameter_size(n_centers) == 3 * n_centers + 11


class TestLinkCoefficients:
    def test_slices_weights_intercept_trend(self):
        coefficients = split_link_parameters(np.arange(8.0), 3)

        np.testing.assert_array_equal(coefficients.kernel_weights, [0.0, 1.0, 2.0])
        assert coefficients.intercept == 3.0
        np.testing.assert_array_equal(coefficients.trend, [4.0, 5.0, 6.0, 7.0])
        assert coefficients.n_centers == 3

    def test_without_trend_uses_zero_trend(self):
        coefficients = LinkCoefficients.from_vector(
            [1.0, 2.0], 1, include_trend=False
        )
        np.testing.assert_array_equal(coefficients.kernel_weights, [1.0])
        assert coefficients.intercept == 2.0
        np.testing.assert_array_equal(coefficients.trend, np.zeros(4))

    def test_to_vector_inverts_from_vector(self, link_params):
        coefficients = split_link_parameters(link_params, 3)
        np.testing.assert_array_equal(coefficients.to_vector(), link_params)

    def test_copies_input(self):
        params = np.arange(6.0)
        coefficients = split_link_parameters(params, 1)
        params[:] = -1.0
        assert coefficients.kernel_weights[0] == 0.0
        assert coefficients.trend[0] == 2.0

    def test_wrong_length_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            split_link_parameters(np.zeros(7), 3)
        assert "length 8" in str(exc_info.value)

    @pytest.mark.parametrize("n_centers", [0, 1.5])
    def test_invalid_n_centers_raises(self, n_centers):
        with pytest.raises(ValidationError):
            split_link_parameters(np.zeros(6), n_centers)


class TestJointParameters:
    def test_blocks(self, joint_params):
        parameters = split_joint_parameters(joint_params, 3)

        np.testing.assert_array_equal(
            parameters.occurrence.to_vector(), joint_params[:8]
        )
        np.testing.assert_array_equal(
            parameters.intensity.to_vector(), joint_params[8:16]
        )
        np.testing.assert_array_equal(
            parameters.dependence.kernel_weights, joint_params[16:19]
        )
        assert parameters.dependence.intercept == joint_params[19]
        np.testing.assert_array_equal(parameters.dependence.trend, np.zeros(4))

    def test_to_vector_inverts_from_vector(self, joint_params):
        parameters = JointParameters.from_vector(joint_params, 3)
        np.testing.assert_array_equal(parameters.to_vector(), joint_params)

    @pytest.mark.parametrize("length", [19, 21, 24])
    def test_wrong_length_raises(self, length):
        with pytest.raises(ValidationError) as exc_info:
            split_joint_parameters(np.zeros(length), 3)
        assert "length 20" in str(exc_info.value)
