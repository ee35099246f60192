"""Auth service for admin login."""

from sqlalchemy.ext.asyncio import AsyncSession

from siteadmin.core.security import create_access_token
from siteadmin.schemas.auth import Token
from siteadmin.services.log_service import LogService
from siteadmin.services.user_service import UserService


class AuthService:
    """Authentication service."""

    def __init__(self, db: AsyncSession, log_service: LogService):
        self.db = db
        self.user_service = UserService(db)
        self.log_service = log_service

    async def login(self, username: str, password: str) -> Token | None:
        """Authenticate user and return JWT token.

        Every attempt is written to the audit log under ``authenticator``.
        """
        user = await self.user_service.authenticate(username, password)
        if not user:
            await self.log_service.log(
                "authenticator",
                f"failed login attempt for user: {username}",
            )
            return None

        await self.user_service.record_login(user)
        await self.log_service.log("authenticator", f"user: {username} logged in")

        token = create_access_token(
            data={
                "sub": user.id,
                "username": user.username,
            }
        )
        return Token(token=token)
