"""
User Repository Implementation

SQLAlchemy implementation of IUserRepository.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from agenda.domains.scheduling.application.ports.user_repository import IUserRepository
from agenda.domains.scheduling.domain.entities.user import User
from agenda.domains.scheduling.infrastructure.persistence.sqlalchemy.models import UserModel

logger = logging.getLogger(__name__)


class SQLAlchemyUserRepository(IUserRepository):
    """
    SQLAlchemy implementation of user repository.

    Read-only access to users for the booking flow.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: int) -> User | None:
        """Find user by ID."""
        result = await self.session.execute(select(UserModel).where(UserModel.id == user_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_provider(self, user_id: int) -> User | None:
        """Find user by ID only if flagged as provider."""
        result = await self.session.execute(
            select(UserModel).where(
                UserModel.id == user_id,
                UserModel.provider.is_(True),
            )
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    def _to_entity(self, model: UserModel) -> User:
        """Convert model to entity."""
        return User(
            id=model.id,  # type: ignore[arg-type]
            name=model.name or "",  # type: ignore[arg-type]
            email=model.email,  # type: ignore[arg-type]
            is_provider=bool(model.provider),
            created_at=model.created_at,  # type: ignore[arg-type]
            updated_at=model.updated_at,  # type: ignore[arg-type]
        )
