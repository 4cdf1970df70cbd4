"""Database Declarations — SQLAlchemy Base shared by models and tests.

Invariants:
    - No engine is created at import time

Design Decisions:
    - asyncpg driver for PostgreSQL: native async, no thread pool overhead
"""
