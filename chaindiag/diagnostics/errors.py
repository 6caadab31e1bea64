"""
Failure modes of the convergence diagnostics.

Every diagnostic either returns a float or raises one of these.
They subclass ValueError so existing ``except ValueError`` handlers
keep catching them.
"""


class DiagnosticError(ValueError):
    """Base class for diagnostics that cannot be computed."""


class InsufficientChains(DiagnosticError):
    """Fewer chains than the statistic requires (e.g. < 2 for R̂)."""


class InsufficientLength(DiagnosticError):
    """Chains shorter than the statistic requires."""


class DegenerateVariance(DiagnosticError):
    """Zero within-chain variance makes R̂ undefined."""


class DegenerateAutocorrelation(DiagnosticError):
    """Integrated autocorrelation time is not positive."""


class InvalidInput(DiagnosticError):
    """Non-finite draws, ragged chains or wrongly shaped input."""
