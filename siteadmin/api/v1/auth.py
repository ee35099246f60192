"""Authentication API endpoints."""

from fastapi import APIRouter, HTTPException, status

from siteadmin.core.deps import AuditLog, DBSession
from siteadmin.schemas.auth import Token, UserLogin
from siteadmin.services.auth_service import AuthService

router = APIRouter()


@router.post("", response_model=Token)
async def login(
    credentials: UserLogin,
    db: DBSession,
    log_service: AuditLog,
) -> Token:
    """
    Login and get JWT access token.

    - **username**: Admin username
    - **password**: Admin password
    """
    auth_service = AuthService(db, log_service)
    token = await auth_service.login(credentials.username, credentials.password)

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
        )

    return token
