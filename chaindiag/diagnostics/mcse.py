"""
Monte Carlo standard error.

MCSE quantifies the uncertainty in MCMC estimates of the posterior mean
due to finite sampling: MCSE = sqrt(var_hat) / sqrt(ESS).
"""

import numpy as np

from .chains import as_chain_set
from .ess import effective_sample_size
from .moments import moment_summary


def mcse(chains, method: str = 'fft') -> float:
    """
    Compute the Monte Carlo standard error of the mean.

    Args:
        chains: ChainSet, list of chains or array of shape (n_chains, n_draws)
        method: Autocovariance estimator used for ESS

    Returns:
        Monte Carlo standard error
    """
    chain_set = as_chain_set(chains)
    var_hat = moment_summary(chain_set).var_hat
    ess = effective_sample_size(chain_set, method=method)
    return float(np.sqrt(var_hat) / np.sqrt(ess))


class MCMCError:
    """
    Monte Carlo standard error estimation.

    Smaller MCSE indicates more precise estimates.
    """

    def __init__(self, method: str = 'fft'):
        self.method = method

    def compute(self, chains) -> float:
        return mcse(chains, method=self.method)

    @staticmethod
    def from_ess(var_hat: float, ess: float) -> float:
        """MCSE from an already computed variance estimate and ESS."""
        return float(np.sqrt(var_hat) / np.sqrt(ess))
