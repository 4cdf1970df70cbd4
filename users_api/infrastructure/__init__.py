"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/
    - All database calls map driver failures to core.errors.DatabaseError
"""
