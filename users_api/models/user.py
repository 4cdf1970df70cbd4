"""User ORM — maps the pre-existing `users` table.

Invariants:
    - user_id is the serial primary key, assigned by the database on insert
    - name is non-nullable text with no length constraint
    - age is a nullable integer

Design Decisions:
    - Table is never migrated by the service: the mapping exists for queries and
      for tests that create the table with Base.metadata.create_all
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from users_api.db.base import Base


class User(Base):
    """Stored user row."""
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
