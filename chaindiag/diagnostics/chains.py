"""
Chain containers and chain splitting.

A ChainSet holds N chains of equal length L for a single scalar
parameter. Splitting produces 2N half-chains, which lets R̂ and ESS
detect non-stationarity within a chain.
"""

import numpy as np
from typing import Sequence, Tuple, Union
from dataclasses import dataclass

from .errors import InsufficientChains, InsufficientLength, InvalidInput

# Draws closer than this to their predecessor count as constant
CONSTANT_TOLERANCE = 1e-10


def _validate_draws(chains: Union[Sequence[Sequence[float]], np.ndarray]) -> np.ndarray:
    """Return a non-writeable float64 (n_chains, n_draws) copy of valid chains."""
    if isinstance(chains, np.ndarray) and chains.ndim != 2:
        raise InvalidInput(
            f"Expected array of shape (n_chains, n_draws), got {chains.shape}"
        )
    rows = list(chains)

    if len(rows) == 0:
        raise InsufficientChains("Need at least 1 chain")

    arrays = []
    for i, chain in enumerate(rows):
        try:
            arr = np.asarray(chain, dtype=np.float64)
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"Chain {i} is not numeric: {e}") from e
        if arr.ndim != 1:
            raise InvalidInput(f"Chain {i} must be 1D, got shape {arr.shape}")
        arrays.append(arr)

    lengths = {len(a) for a in arrays}
    if len(lengths) > 1:
        raise InvalidInput(f"Chains must have equal length, got lengths {sorted(lengths)}")

    n_draws = lengths.pop()
    if n_draws == 0:
        raise InsufficientLength("Chains must contain at least 1 draw")

    draws = np.array(arrays, dtype=np.float64)
    if not np.all(np.isfinite(draws)):
        raise InvalidInput("All draws must be finite")

    draws.flags.writeable = False
    return draws


@dataclass(frozen=True)
class ChainSet:
    """
    Read-only (n_chains, n_draws) block of draws.

    The constructor validates and copies its input, so ``ChainSet(chains)``
    and ``ChainSet.from_chains(chains)`` are equivalent.
    """
    draws: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, 'draws', _validate_draws(self.draws))

    @classmethod
    def from_chains(cls, chains: Union[Sequence[Sequence[float]], np.ndarray]) -> 'ChainSet':
        """
        Validate and copy raw chains.

        Args:
            chains: List of 1D sequences or array of shape (n_chains, n_draws)

        Returns:
            ChainSet owning a non-writeable float64 copy
        """
        return cls(chains)

    @property
    def n_chains(self) -> int:
        return self.draws.shape[0]

    @property
    def n_draws(self) -> int:
        return self.draws.shape[1]

    @property
    def total_draws(self) -> int:
        return self.draws.size

    def constant_within_chains(self) -> bool:
        """Whether every chain is constant up to CONSTANT_TOLERANCE."""
        return bool(np.all(np.abs(np.diff(self.draws, axis=1)) < CONSTANT_TOLERANCE))

    def split(self) -> 'ChainSet':
        """Split every chain in half (interleaved: first, second, first, ...)."""
        halves = []
        for chain in self.draws:
            first, second = split(chain)
            halves.append(first)
            halves.append(second)
        return ChainSet(halves)


def as_chain_set(chains: Union[ChainSet, Sequence[Sequence[float]], np.ndarray]) -> ChainSet:
    """Accept a ChainSet as-is, validate anything else."""
    if isinstance(chains, ChainSet):
        return chains
    return ChainSet(chains)


def split(chain: Sequence[float]) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split a chain into two contiguous halves of length floor(L/2).

    When L is odd the middle draw belongs to neither half.

    Args:
        chain: 1D sequence of finite draws

    Returns:
        (first_half, second_half)
    """
    try:
        arr = np.asarray(chain, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInput(f"Chain is not numeric: {e}") from e
    if arr.ndim != 1:
        raise InvalidInput(f"Chain must be 1D, got shape {arr.shape}")

    n = len(arr)
    if n < 2:
        raise InsufficientLength(f"Need at least 2 draws to split a chain, got {n}")
    if not np.all(np.isfinite(arr)):
        raise InvalidInput("All draws must be finite")

    half = n // 2
    return arr[:half].copy(), arr[n - half:].copy()


def split_chains(chains: Union[ChainSet, Sequence[Sequence[float]], np.ndarray]) -> ChainSet:
    """Split every chain of a chain set, yielding 2N chains."""
    return as_chain_set(chains).split()
