"""User service for admin account management."""

import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from siteadmin.core.security import get_password_hash, verify_password
from siteadmin.models.user import User
from siteadmin.services.base_service import BaseService


class UserService(BaseService[User]):
    """User service for authentication and management."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, User)

    async def get_by_username(self, username: str) -> User | None:
        """Get user by username."""
        result = await self.db.execute(
            select(User).where(User.username == username)
        )
        return result.scalar_one_or_none()

    async def list_users(self) -> list[User]:
        """Get all users ordered by username."""
        result = await self.db.execute(select(User).order_by(User.username))
        return list(result.scalars().all())

    async def authenticate(self, username: str, password: str) -> User | None:
        """Authenticate active user by username and password."""
        user = await self.get_by_username(username)
        if not user or not user.is_active:
            return None
        if not verify_password(password, user.hashed_password):
            return None
        return user

    async def record_login(self, user: User, when: datetime | None = None) -> User:
        """Store last login time."""
        user.last_login = when or datetime.now()
        return await self.update(user)

    async def change_password(self, user_id: str, new_password: str) -> bool:
        """Change user password."""
        user = await self.get_by_id(user_id)
        if not user:
            return False
        user.hashed_password = get_password_hash(new_password)
        await self.update(user)
        return True

    async def create_user(
        self,
        username: str,
        password: str,
        is_superuser: bool = False,
        user_id: str | None = None,
    ) -> User:
        """Create new user."""
        user = User(
            id=user_id or uuid.uuid4().hex,
            username=username,
            hashed_password=get_password_hash(password),
            is_active=True,
            is_superuser=is_superuser,
        )
        return await self.create(user)
