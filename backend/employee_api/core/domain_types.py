"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EmployeeId is opaque: never parsed, compared, or ordered — only passed through
    - EmployeeId is sent upstream as a single percent-encoded path segment

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - EmployeeId wraps str, not UUID: upstream owns the id format
"""

from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EmployeeId = NewType("EmployeeId", str)


# ─── Policy Constants ────────────────────────────────────────────

DEFAULT_TOP_EARNERS = 10
EMPTY_MAX_SALARY = 0  # upstream-documented default for an empty collection
