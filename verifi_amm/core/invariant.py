"""
Constant-product invariant checks.

`k = reserve_a * reserve_b` must never decrease across a swap. Liquidity
add/remove moves `k` proportionally by design and is never checked here.
"""

from __future__ import annotations

from ..errors import InvalidInput, InvariantViolation
from ..fixed_point import require_int


def invariant(reserve_a: int, reserve_b: int) -> int:
    """Return `k = reserve_a * reserve_b`."""
    require_int("reserve_a", reserve_a)
    require_int("reserve_b", reserve_b)
    if reserve_a < 0 or reserve_b < 0:
        raise InvalidInput(f"reserves must be non-negative: ({reserve_a}, {reserve_b})")
    return reserve_a * reserve_b


def verify_invariant_non_decreasing(old_a: int, old_b: int, new_a: int, new_b: int) -> bool:
    return invariant(new_a, new_b) >= invariant(old_a, old_b)


def assert_invariant_non_decreasing(old_a: int, old_b: int, new_a: int, new_b: int) -> None:
    """Post-condition for swap computations; raises InvariantViolation."""
    k_before = invariant(old_a, old_b)
    k_after = invariant(new_a, new_b)
    if k_after < k_before:
        raise InvariantViolation(
            f"Invariant violation: new_k ({k_after}) < old_k ({k_before})",
            k_before=k_before,
            k_after=k_after,
        )
