"""
Convergence summary for MCMC output.

Runs every diagnostic on a chain set and reports whether sampling
appears to have converged. Diagnostics that cannot be computed are
reported as unavailable instead of aborting the whole summary.

Key diagnostics:
- Gelman-Rubin statistic (R̂) and split R̂: Tests convergence across chains
- Effective Sample Size (ESS): Measures statistical efficiency
- Monte Carlo standard error (MCSE): Precision of the posterior mean
"""

from typing import List, Dict, Optional, Any
from dataclasses import dataclass, field
import warnings

from .chains import as_chain_set
from .errors import DiagnosticError
from .ess import EffectiveSampleSize, split_effective_sample_size
from .mcse import MCMCError
from .moments import moment_summary
from .rhat import GelmanRubinDiagnostic, r_hat


@dataclass
class ConvergenceResult:
    """Results from convergence diagnostics."""
    converged: bool
    r_hat: Optional[float] = None  # Gelman-Rubin statistic
    split_r_hat: Optional[float] = None
    ess: Optional[float] = None  # Effective sample size
    split_ess: Optional[float] = None
    mcse: Optional[float] = None  # Monte Carlo standard error
    autocorr_time: Optional[float] = None  # Integrated autocorrelation time
    warnings: List[str] = field(default_factory=list)
    unavailable: Dict[str, str] = field(default_factory=dict)


class ConvergenceDiagnostics:
    """
    Comprehensive convergence diagnostics for a single parameter.

    Converged means split R̂ and ESS were both computed, split R̂ is
    below the threshold and ESS reaches the minimum.
    """

    def __init__(
        self,
        r_hat_threshold: float = 1.1,
        min_ess: int = 100,
        min_draws: int = 100,
        autocov_method: str = 'fft'
    ):
        """
        Args:
            r_hat_threshold: Gelman-Rubin threshold
            min_ess: Minimum effective sample size
            min_draws: Chains shorter than this trigger a warning
            autocov_method: Autocovariance estimator, 'fft' or 'direct'
        """
        self.gelman_rubin = GelmanRubinDiagnostic(r_hat_threshold, split=True)
        self.ess_calculator = EffectiveSampleSize(min_ess, method=autocov_method)
        self.mcse_calculator = MCMCError(autocov_method)
        self.min_draws = min_draws

    def diagnose(self, chains) -> ConvergenceResult:
        """
        Run all diagnostics on one chain set.

        Args:
            chains: ChainSet, list of chains or array of shape (n_chains, n_draws)

        Returns:
            ConvergenceResult with diagnostic information
        """
        chain_set = as_chain_set(chains)
        result = ConvergenceResult(converged=True)

        if chain_set.n_draws < self.min_draws:
            warnings.warn(f"Only {chain_set.n_draws} draws per chain - may be unreliable")

        # Gelman-Rubin diagnostic
        result.r_hat = self._run(result, 'r_hat', r_hat, chain_set)

        gr = self._run(result, 'split_r_hat', self.gelman_rubin.compute, chain_set)
        if gr is None:
            result.converged = False
        else:
            result.split_r_hat, gr_converged = gr
            if not gr_converged:
                result.converged = False
                result.warnings.append(
                    f"Split R̂={result.split_r_hat:.3f} >= {self.gelman_rubin.threshold}"
                )

        # Effective sample size
        ess = self._run(result, 'ess', self.ess_calculator.compute, chain_set)
        if ess is None:
            result.converged = False
        else:
            result.ess, ess_adequate = ess
            result.autocorr_time = chain_set.total_draws / result.ess
            if not ess_adequate:
                result.converged = False
                result.warnings.append(
                    f"Low ESS: {result.ess:.1f} < {self.ess_calculator.min_ess}"
                )

        result.split_ess = self._run(
            result, 'split_ess', split_effective_sample_size, chain_set,
            method=self.ess_calculator.method
        )

        # Monte Carlo standard error, reusing the ESS computed above
        if result.ess is not None:
            moments = self._run(result, 'mcse', moment_summary, chain_set)
            if moments is not None:
                result.mcse = self.mcse_calculator.from_ess(moments.var_hat, result.ess)
        else:
            result.unavailable['mcse'] = result.unavailable['ess']
            result.warnings.append(f"mcse unavailable: {result.unavailable['ess']}")

        return result

    @staticmethod
    def _run(result: ConvergenceResult, name: str, fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except DiagnosticError as e:
            result.unavailable[name] = f"{type(e).__name__}: {e}"
            result.warnings.append(f"{name} unavailable: {e}")
            return None

    def recommend_sampling_params(self, result: ConvergenceResult) -> Dict[str, Any]:
        """
        Recommend sampling parameters based on diagnostics.

        Args:
            result: Convergence diagnostic results

        Returns:
            Dictionary of recommended parameters
        """
        recommendations = {}

        if result.split_r_hat is not None and result.split_r_hat >= self.gelman_rubin.threshold:
            recommendations['increase_warmup'] = True
            recommendations['suggested_warmup_multiplier'] = 2.0

        if result.ess is not None and result.ess < self.ess_calculator.min_ess:
            increase_factor = self.ess_calculator.min_ess / result.ess
            recommendations['increase_samples'] = True
            recommendations['suggested_sample_multiplier'] = max(2.0, increase_factor)

        if result.unavailable:
            recommendations['unavailable_diagnostics'] = sorted(result.unavailable)

        return recommendations


def quick_convergence_check(chains, verbose: bool = True) -> bool:
    """
    Quick convergence check with default parameters.

    Args:
        chains: ChainSet, list of chains or array of shape (n_chains, n_draws)
        verbose: Whether to print diagnostic information

    Returns:
        Whether the samples appear to have converged
    """
    diagnostics = ConvergenceDiagnostics()
    result = diagnostics.diagnose(chains)

    if verbose:
        print("=== Convergence Diagnostics ===")
        if result.r_hat is not None:
            print(f"Gelman-Rubin R̂: {result.r_hat:.3f}")
        if result.split_r_hat is not None:
            print(f"Split R̂: {result.split_r_hat:.3f}")
        if result.ess is not None:
            print(f"Effective Sample Size: {result.ess:.1f}")
        if result.mcse is not None:
            print(f"Monte Carlo Std Error: {result.mcse:.4f}")

        print(f"\nConverged: {result.converged}")
        if result.warnings:
            print("Warnings:")
            for warning in result.warnings:
                print(f"  - {warning}")

    return result.converged
