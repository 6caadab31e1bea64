"""
Autocovariance of MCMC chains.

For a chain of length L with mean θ̄ the lag-t autocovariance is

    γ_t = (1/L) * Σ_{i=0}^{L-t-1} (θ_i - θ̄)(θ_{i+t} - θ̄)

The FFT estimator agrees with direct summation to floating-point
tolerance and is the default; direct summation is kept as the reference.
"""

import numpy as np
from typing import Optional, Sequence
from dataclasses import dataclass
from scipy import signal

from .chains import as_chain_set
from .errors import InsufficientLength, InvalidInput


def autocovariance(
    chain: Sequence[float],
    max_lag: Optional[int] = None,
    method: str = 'fft'
) -> np.ndarray:
    """
    Compute the biased (divisor L) autocovariance of a single chain.

    Args:
        chain: 1D sequence of draws
        max_lag: Largest lag to compute (default: L - 1)
        method: 'fft' or 'direct'

    Returns:
        Array of length max_lag + 1 holding γ_0 .. γ_max_lag
    """
    x = np.asarray(chain, dtype=np.float64)
    if x.ndim != 1:
        raise InvalidInput(f"Chain must be 1D, got shape {x.shape}")

    n = len(x)
    if n < 1:
        raise InsufficientLength("Need at least 1 draw for autocovariance")
    if not np.all(np.isfinite(x)):
        raise InvalidInput("All draws must be finite")

    if max_lag is None:
        max_lag = n - 1
    if not 0 <= max_lag < n:
        raise InvalidInput(f"max_lag must be in [0, {n - 1}], got {max_lag}")

    x = x - np.mean(x)

    if method == 'fft':
        full = signal.correlate(x, x, mode='full', method='fft')
        acov = full[n - 1:n + max_lag] / n
    elif method == 'direct':
        acov = np.zeros(max_lag + 1)
        for t in range(max_lag + 1):
            acov[t] = np.dot(x[:n - t], x[t:]) / n
    else:
        raise ValueError(f"Unknown method: {method}")

    return acov


@dataclass(frozen=True)
class AutocovarianceProfile:
    """Per-chain autocovariances of a chain set, lags 0 .. L-1."""
    acov: np.ndarray  # (n_chains, n_draws)
    chain_means: np.ndarray
    chain_variances: np.ndarray  # Sample variances, divisor L - 1
    n_draws: int

    @property
    def n_chains(self) -> int:
        return self.acov.shape[0]

    @property
    def mean_variance(self) -> float:
        """Within-chain variance W."""
        return float(np.mean(self.chain_variances))

    @property
    def var_plus(self) -> float:
        """Pooled variance; the between-chain term is dropped for one chain."""
        var_plus = self.mean_variance * (self.n_draws - 1) / self.n_draws
        if self.n_chains > 1:
            var_plus += np.var(self.chain_means, ddof=1)
        return float(var_plus)

    def autocorrelation(self) -> np.ndarray:
        """
        Combined multi-chain autocorrelation.

        ρ_t = 1 - (W - mean_n γ_{n,t}) / var_plus,  with ρ_0 = 1
        """
        rho = 1.0 - (self.mean_variance - np.mean(self.acov, axis=0)) / self.var_plus
        rho[0] = 1.0
        return rho


def autocovariance_profile(chains, method: str = 'fft') -> AutocovarianceProfile:
    """
    Compute autocovariances for every chain in a chain set.

    Args:
        chains: ChainSet, list of chains or array of shape (n_chains, n_draws)
        method: 'fft' or 'direct'

    Returns:
        AutocovarianceProfile
    """
    chain_set = as_chain_set(chains)
    n_draws = chain_set.n_draws
    if n_draws < 2:
        raise InsufficientLength(f"Need at least 2 draws per chain, got {n_draws}")

    acov = np.array([autocovariance(chain, method=method) for chain in chain_set.draws])

    return AutocovarianceProfile(
        acov=acov,
        chain_means=np.mean(chain_set.draws, axis=1),
        chain_variances=acov[:, 0] * n_draws / (n_draws - 1),
        n_draws=n_draws,
    )
