"""
Gelman-Rubin potential scale reduction factor (R̂).

Reference:
    Gelman & Rubin (1992) "Inference from Iterative Simulation Using Multiple Sequences"
    Stan Reference Manual, "Potential Scale Reduction"
"""

import numpy as np
from typing import Tuple

from .chains import as_chain_set, split_chains
from .errors import DegenerateVariance
from .moments import moment_summary


def r_hat(chains) -> float:
    """
    Compute R̂ = sqrt(var_hat / W).

    Args:
        chains: ChainSet, list of chains or array of shape (n_chains, n_draws)

    Returns:
        Potential scale reduction factor
    """
    chain_set = as_chain_set(chains)
    moments = moment_summary(chain_set)

    # Constant chains such as [0.1, 0.1, 0.1] leave rounding noise in W
    if moments.within_variance == 0 or chain_set.constant_within_chains():
        raise DegenerateVariance("R̂ is undefined when within-chain variance is zero")

    return float(np.sqrt(moments.var_hat / moments.within_variance))


def split_r_hat(chains) -> float:
    """R̂ of the chains after splitting each one in half."""
    return r_hat(split_chains(chains))


class GelmanRubinDiagnostic:
    """
    Gelman-Rubin convergence diagnostic with a convergence threshold.

    R̂ < 1.1 indicates convergence (some use R̂ < 1.01 for stricter convergence).
    """

    def __init__(self, threshold: float = 1.1, split: bool = True):
        """
        Args:
            threshold: R̂ threshold for convergence (typically 1.01-1.1)
            split: Whether to use split R̂
        """
        self.threshold = threshold
        self.split = split

    def compute(self, chains) -> Tuple[float, bool]:
        """
        Compute R̂ and compare it with the threshold.

        Returns:
            r_hat: The potential scale reduction factor
            converged: Whether R̂ < threshold
        """
        value = split_r_hat(chains) if self.split else r_hat(chains)
        return value, value < self.threshold
