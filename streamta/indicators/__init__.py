"""
Indicator implementations.

All indicators live in streamta.indicators.incremental.
"""
