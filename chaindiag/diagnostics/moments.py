"""
Within- and between-chain variance decomposition.

These are the moment statistics shared by R̂ and MCSE:
    W       = mean of per-chain sample variances (divisor L - 1)
    B       = L * variance of the chain means (divisor N - 1)
    var_hat = (L - 1)/L * W + B/L
"""

import numpy as np
from dataclasses import dataclass

from .chains import as_chain_set
from .errors import InsufficientChains, InsufficientLength


@dataclass(frozen=True)
class MomentSummary:
    """Moment statistics of one chain set."""
    chain_means: np.ndarray
    chain_variances: np.ndarray
    within_variance: float  # W
    between_variance: float  # B
    var_hat: float  # Pooled marginal posterior variance estimate
    grand_mean: float
    n_chains: int
    n_draws: int


def moment_summary(chains) -> MomentSummary:
    """
    Compute per-chain moments and the W / B / var_hat decomposition.

    Args:
        chains: ChainSet, list of chains or array of shape (n_chains, n_draws)

    Returns:
        MomentSummary
    """
    chain_set = as_chain_set(chains)
    n_chains, n_draws = chain_set.n_chains, chain_set.n_draws

    if n_chains < 2:
        raise InsufficientChains(
            f"Need at least 2 chains for between-chain variance, got {n_chains}"
        )
    if n_draws < 2:
        raise InsufficientLength(
            f"Need at least 2 draws per chain for within-chain variance, got {n_draws}"
        )

    draws = chain_set.draws

    chain_means = np.mean(draws, axis=1)
    grand_mean = np.mean(chain_means)
    B = n_draws * np.var(chain_means, ddof=1)

    chain_vars = np.var(draws, axis=1, ddof=1)
    W = np.mean(chain_vars)

    var_hat = ((n_draws - 1) / n_draws) * W + B / n_draws

    return MomentSummary(
        chain_means=chain_means,
        chain_variances=chain_vars,
        within_variance=float(W),
        between_variance=float(B),
        var_hat=float(var_hat),
        grand_mean=float(grand_mean),
        n_chains=n_chains,
        n_draws=n_draws,
    )
