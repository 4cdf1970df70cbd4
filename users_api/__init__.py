"""Users API Package — HTTP CRUD over a single `users` table.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
