"""Infrastructure Layer — file persistence and logging setup.

Invariants:
    - IO failures mapped to core.errors types before leaving this layer
"""
