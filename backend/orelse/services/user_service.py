"""User records mirrored from the identity provider."""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from orelse.core.security import Principal
from orelse.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    """Keeps the local user row in step with the authenticated principal."""

    async def get_user(self, db: AsyncSession, user_id: str) -> Optional[User]:
        result = await db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def sync_user(self, db: AsyncSession, principal: Principal) -> User:
        """Create or refresh the user row for ``principal`` (flushed, not committed)."""
        user = await self.get_user(db, principal.id)
        if user is None:
            user = User(
                id=principal.id,
                email=principal.email,
                name=principal.name,
                image=principal.image,
            )
            db.add(user)
            await db.flush()
            logger.info("Registered user from identity provider", extra={"user_id": str(principal.id)})
            return user

        for field in ("email", "name", "image"):
            value = getattr(principal, field)
            if value is not None and getattr(user, field) != value:
                setattr(user, field, value)
        await db.flush()
        return user


user_service = UserService()
