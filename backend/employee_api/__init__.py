"""Employee API Package — resilient facade over the upstream employee service.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
