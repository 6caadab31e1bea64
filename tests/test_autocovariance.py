"""
Test autocovariance estimators against Stan reference values.
"""

import numpy as np
import pytest
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chaindiag.diagnostics import (
    InsufficientLength,
    InvalidInput,
    autocovariance,
    autocovariance_profile,
)


DRAWS = np.array([
    0.747858687681513, 0.290118161168511, -0.66263075102762, -0.00794439358648058,
    0.612494029879686, 1.15915333101436, 0.844402455747637, -0.493298834393585,
    0.140306938408938, -0.207331367372662, 0.344322796977632, -0.216755313401662,
    -0.704730639551491, -0.262457923752462, 0.338587814578015, 0.79334841402936,
    -0.495245866959037, -0.736378128523917, -1.10220108378805, 2.37069694852591,
])

# Autocovariance of DRAWS as computed by Stan
STAN_ACOV = np.array([
    0.6269672577, -0.0113804234, -0.1668563930, -0.2086591087, 0.1016590536,
    0.1767212413, -0.0059714922, -0.1489622883, -0.0996503101, 0.0996094900,
    0.0450098619, -0.0109203038, -0.2154921627, -0.0374684937, 0.1274360411,
    0.1121981758, 0.0073812983, -0.1254719533, -0.0208019612, 0.0681360996,
])


def test_matches_stan_reference():
    for method in ('fft', 'direct'):
        acov = autocovariance(DRAWS, method=method)
        assert len(acov) == len(DRAWS)
        np.testing.assert_allclose(acov, STAN_ACOV, atol=1e-10)


def test_fft_agrees_with_direct_summation():
    np.random.seed(11)
    for n in (2, 3, 7, 64, 501):
        x = np.cumsum(np.random.randn(n))
        np.testing.assert_allclose(
            autocovariance(x, method='fft'),
            autocovariance(x, method='direct'),
            atol=1e-10,
        )


def test_lag_zero_is_biased_variance():
    np.random.seed(5)
    x = np.random.randn(200)
    assert autocovariance(x)[0] == pytest.approx(np.var(x))


def test_max_lag():
    acov = autocovariance(DRAWS, max_lag=3)
    assert len(acov) == 4
    np.testing.assert_allclose(acov, STAN_ACOV[:4], atol=1e-10)

    assert len(autocovariance(DRAWS, max_lag=0)) == 1

    with pytest.raises(InvalidInput):
        autocovariance(DRAWS, max_lag=len(DRAWS))
    with pytest.raises(InvalidInput):
        autocovariance(DRAWS, max_lag=-1)


def test_invalid_chains():
    with pytest.raises(InsufficientLength):
        autocovariance([])
    with pytest.raises(InvalidInput):
        autocovariance([1.0, np.nan, 2.0])
    with pytest.raises(InvalidInput):
        autocovariance(np.zeros((2, 3)))
    with pytest.raises(ValueError, match="Unknown method"):
        autocovariance(DRAWS, method='wavelet')


def test_input_not_modified():
    x = DRAWS.copy()
    autocovariance(x)
    np.testing.assert_array_equal(x, DRAWS)


def test_profile_single_chain():
    profile = autocovariance_profile([DRAWS])
    n = len(DRAWS)

    assert profile.n_chains == 1
    assert profile.acov.shape == (1, n)
    assert profile.mean_variance == pytest.approx(np.var(DRAWS, ddof=1))
    # One chain: no between-chain term
    assert profile.var_plus == pytest.approx(np.var(DRAWS))

    rho = profile.autocorrelation()
    assert rho[0] == 1.0
    # W / var_plus = L / (L - 1) for a single chain
    expected = STAN_ACOV[1:] / STAN_ACOV[0] - 1 / (n - 1)
    np.testing.assert_allclose(rho[1:], expected, atol=1e-8)


def test_profile_multiple_chains():
    chains = [[1.0, 2.0, 3.0, 4.0], [5.0, 6.0, 7.0, 8.0]]
    profile = autocovariance_profile(chains)

    assert profile.mean_variance == pytest.approx(5 / 3)
    # (L - 1)/L * W + B/L
    assert profile.var_plus == pytest.approx(9.25)

    rho = profile.autocorrelation()
    # Both chains have γ_1 = 0.3125
    assert rho[1] == pytest.approx(1.0 - (5 / 3 - 0.3125) / 9.25)


def test_profile_requires_two_draws():
    with pytest.raises(InsufficientLength):
        autocovariance_profile([[1.0], [2.0]])
