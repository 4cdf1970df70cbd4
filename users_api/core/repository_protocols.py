"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Routes depend on UserRepository, not on a concrete SQL implementation

Design Decisions:
    - Protocol over ABC: structural subtyping, test doubles need no inheritance
"""

from typing import Protocol

from users_api.core.domain_types import UserId


class UserLike(Protocol):
    """Structural contract for stored user objects handed to routes."""
    user_id: int
    name: str
    age: int | None


class UserRepository(Protocol):
    """Contract for user persistence — implemented by infrastructure."""
    async def list_all(self) -> list[UserLike]: ...
    async def get(self, user_id: UserId) -> UserLike: ...
    async def find(self, user_id: UserId) -> UserLike | None: ...
    async def create(self, name: str, age: int | None) -> UserId: ...
    async def update(
        self, user_id: UserId, changes: dict[str, object],
    ) -> None: ...
    async def delete(self, user_id: UserId) -> None: ...
