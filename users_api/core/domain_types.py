"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps int and is assigned only by the database
    - Every integer column is a 32-bit signed PostgreSQL `integer`

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)


# ─── Value Bounds ────────────────────────────────────────────────

INT4_MIN = -(2**31)
INT4_MAX = 2**31 - 1
