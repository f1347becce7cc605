"""
Integer-only CPMM kernels.

These modules are designed to be:
- deterministic (integer-only, explicit rounding direction),
- easy to audit (explicit intermediate variables),
- small surface-area (pure functions, frozen results).

`verifi_amm.core` wraps them with display ratios and post-condition checks.
"""
