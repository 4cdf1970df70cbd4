"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - Models imported here so Base.metadata knows every table before create_all
"""

from users_api.models.user import User  # noqa: F401
