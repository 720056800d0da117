import numpy as np
import pytest
from scipy.stats import poisson

from spatiotemporal_copula.exceptions import ValidationError
from spatiotemporal_copula.likelihoods.shifted_poisson import (
    shifted_poisson_cdf,
    shifted_poisson_log_pmf,
    shifted_poisson_log_pmf_from_log_rate,
    shifted_poisson_pmf,
)


@pytest.mark.parametrize("lam", [0.1, 1.0, 4.5, 30.0])
def test_pmf_is_poisson_shifted_by_one(lam):
    x = np.arange(1, 40)
    np.testing.assert_allclose(
        shifted_poisson_pmf(x, lam), poisson.pmf(x - 1, lam), rtol=1e-10
    )


def test_pmf_at_one_is_exp_minus_rate():
    assert shifted_poisson_pmf(1, 2.5) == pytest.approx(np.exp(-2.5))


def test_no_mass_below_one():
    assert shifted_poisson_pmf(0, 3.0) == 0.0
    assert shifted_poisson_log_pmf(0, 3.0) == -np.inf
    assert shifted_poisson_log_pmf(-2, 3.0) == -np.inf


def test_zero_rate_is_point_mass_at_one():
    np.testing.assert_allclose(shifted_poisson_pmf([1, 2, 3], 0.0), [1.0, 0.0, 0.0])
    np.testing.assert_allclose(shifted_poisson_cdf([0, 1, 5], 0.0), [0.0, 1.0, 1.0])


def test_log_pmf_from_log_rate_matches_log_pmf():
    x = np.array([1.0, 2.0, 5.0, 12.0])
    log_lam = np.array([-1.0, 0.0, 0.7, 2.3])
    np.testing.assert_allclose(
        shifted_poisson_log_pmf_from_log_rate(x, log_lam),
        shifted_poisson_log_pmf(x, np.exp(log_lam)),
        rtol=1e-12,
    )


class TestCdf:
    @pytest.mark.parametrize("lam", [0.2, 1.0, 6.0])
    def test_is_cumulative_sum_of_pmf(self, lam):
        x = np.arange(0, 25)
        expected = np.cumsum(shifted_poisson_pmf(x, lam))
        np.testing.assert_allclose(shifted_poisson_cdf(x, lam), expected, rtol=1e-10)

    @pytest.mark.parametrize("lam", [0.5, 3.0, 12.0])
    def test_matches_scipy(self, lam):
        x = np.arange(1, 50)
        np.testing.assert_allclose(
            shifted_poisson_cdf(x, lam), poisson.cdf(x - 1, lam), rtol=1e-10
        )

    def test_matches_term_by_term_sum(self, cdf_reference):
        for x, lam in [(1, 0.3), (4, 2.0), (9, 7.5)]:
            assert shifted_poisson_cdf(x, lam) == pytest.approx(
                cdf_reference(x, lam), rel=1e-10
            )

    def test_floors_non_integer_support(self):
        assert shifted_poisson_cdf(2.7, 1.5) == shifted_poisson_cdf(2, 1.5)
        assert shifted_poisson_cdf(0.9, 1.5) == 0.0

    def test_zero_below_one(self):
        np.testing.assert_array_equal(shifted_poisson_cdf([-3, 0], 2.0), [0.0, 0.0])

    def test_monotone_and_bounded(self):
        cdf = shifted_poisson_cdf(np.arange(0, 200), 40.0)
        assert np.all(np.diff(cdf) >= 0.0)
        assert np.all(cdf <= 1.0)
        assert cdf[-1] == pytest.approx(1.0, abs=1e-12)

    def test_broadcasts_rate_per_site(self):
        x = np.array([1.0, 2.0, 3.0])
        lam = np.array([[0.5], [2.0]])
        cdf = shifted_poisson_cdf(x, lam)
        assert cdf.shape == (2, 3)
        np.testing.assert_allclose(cdf[1], poisson.cdf(x - 1, 2.0))

    def test_per_element_rates(self):
        x = np.array([1.0, 3.0, 2.0])
        lam = np.array([0.5, 4.0, 1.0])
        np.testing.assert_allclose(
            shifted_poisson_cdf(x, lam), poisson.cdf(x - 1, lam), rtol=1e-10
        )

    def test_nan_rate_propagates(self):
        cdf = shifted_poisson_cdf([1.0, 3.0], np.nan)
        assert np.all(np.isnan(cdf))

    def test_small_counts_under_huge_rate_are_zero(self):
        assert shifted_poisson_cdf(5, 1e6) == 0.0

    @pytest.mark.parametrize("lam", [740.0, 760.0, 5000.0])
    def test_matches_scipy_where_exp_minus_rate_underflows(self, lam):
        # exp(-lam) is subnormal or 0 here, but the masses near x = lam are not
        spread = 4.0 * np.sqrt(lam)
        x = np.arange(np.floor(lam - spread), np.ceil(lam + spread))
        np.testing.assert_allclose(
            shifted_poisson_cdf(x, lam), poisson.cdf(x - 1, lam), rtol=1e-8
        )

    def test_empty(self):
        assert shifted_poisson_cdf(np.array([]), 1.0).shape == (0,)

    def test_infinite_support_point_raises(self):
        with pytest.raises(ValidationError):
            shifted_poisson_cdf([1.0, np.inf], 1.0)
