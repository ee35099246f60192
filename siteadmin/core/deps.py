"""FastAPI dependencies for dependency injection."""

from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from siteadmin.core.security import decode_access_token
from siteadmin.db.session import async_session_maker
from siteadmin.models.user import User
from siteadmin.models.visitor import Visitor
from siteadmin.services.log_service import LogService
from siteadmin.services.user_service import UserService
from siteadmin.services.visitor_service import VisitorService
from siteadmin.utils.client_info import ClientContext

# Security scheme
security = HTTPBearer(auto_error=False)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session."""
    async with async_session_maker() as session:
        try:
            yield session
        finally:
            await session.close()


def get_client_context(request: Request) -> ClientContext:
    """Get address and user agent of the requesting client."""
    return ClientContext.from_request(request)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> User | None:
    """Get current authenticated user from JWT token."""
    if not credentials:
        return None

    payload = decode_access_token(credentials.credentials)
    if not payload:
        return None

    user_id = payload.get("sub")
    if not user_id:
        return None

    user = await UserService(db).get_by_id(user_id)
    if not user or not user.is_active:
        return None
    return user


async def get_current_user_required(
    user: Annotated[User | None, Depends(get_current_user)],
) -> User:
    """Require authenticated user, raise 401 if not authenticated."""
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def get_current_superuser(
    user: Annotated[User, Depends(get_current_user_required)],
) -> User:
    """Require superuser, raise 403 otherwise."""
    if not user.is_superuser:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Superuser privileges required",
        )
    return user


def get_log_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Annotated[ClientContext, Depends(get_client_context)],
) -> LogService:
    """Get audit log service bound to the requesting client."""
    return LogService(db, context)


async def get_tracked_visitor(
    db: Annotated[AsyncSession, Depends(get_db)],
    context: Annotated[ClientContext, Depends(get_client_context)],
    log_service: Annotated[LogService, Depends(get_log_service)],
) -> Visitor:
    """Track the requesting visitor, rejecting banned visitors with 403."""
    visitor = await VisitorService(db).track(context)
    if visitor.banned_status:
        await log_service.log(
            "ban-system",
            f"visitor with ip: {context.ip_address} trying to access page, "
            f"but visitor banned for: {visitor.ban_reason}",
        )
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You are banned: {visitor.ban_reason}",
        )
    return visitor


# Type aliases for cleaner dependency injection
DBSession = Annotated[AsyncSession, Depends(get_db)]
Client = Annotated[ClientContext, Depends(get_client_context)]
AuditLog = Annotated[LogService, Depends(get_log_service)]
CurrentUser = Annotated[User | None, Depends(get_current_user)]
CurrentUserRequired = Annotated[User, Depends(get_current_user_required)]
CurrentSuperuser = Annotated[User, Depends(get_current_superuser)]
TrackedVisitor = Annotated[Visitor, Depends(get_tracked_visitor)]
