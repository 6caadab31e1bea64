"""
Convergence and precision diagnostics for MCMC output.

Every diagnostic is a pure function of a set of chains for one
scalar parameter and either returns a float or raises a
DiagnosticError subclass.
"""

from .errors import (
    DiagnosticError,
    InsufficientChains,
    InsufficientLength,
    DegenerateVariance,
    DegenerateAutocorrelation,
    InvalidInput,
)
from .chains import ChainSet, as_chain_set, split, split_chains
from .moments import MomentSummary, moment_summary
from .rhat import GelmanRubinDiagnostic, r_hat, split_r_hat
from .autocovariance import AutocovarianceProfile, autocovariance, autocovariance_profile
from .ess import (
    EffectiveSampleSize,
    effective_sample_size,
    integrated_autocorrelation_time,
    split_effective_sample_size,
)
from .mcse import MCMCError, mcse
from .convergence import (
    ConvergenceDiagnostics,
    ConvergenceResult,
    quick_convergence_check,
)

__all__ = [
    # Errors
    'DiagnosticError',
    'InsufficientChains',
    'InsufficientLength',
    'DegenerateVariance',
    'DegenerateAutocorrelation',
    'InvalidInput',
    # Chains
    'ChainSet',
    'as_chain_set',
    'split',
    'split_chains',
    # R-hat
    'MomentSummary',
    'moment_summary',
    'GelmanRubinDiagnostic',
    'r_hat',
    'split_r_hat',
    # ESS / MCSE
    'AutocovarianceProfile',
    'autocovariance',
    'autocovariance_profile',
    'EffectiveSampleSize',
    'effective_sample_size',
    'integrated_autocorrelation_time',
    'split_effective_sample_size',
    'MCMCError',
    'mcse',
    # Summary
    'ConvergenceDiagnostics',
    'ConvergenceResult',
    'quick_convergence_check',
]
