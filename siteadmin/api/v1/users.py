"""User management API endpoints."""

from fastapi import APIRouter, HTTPException, status

from siteadmin.core.deps import AuditLog, CurrentSuperuser, CurrentUserRequired, DBSession
from siteadmin.schemas.auth import ChangePassword, UserCreate, UserDTO
from siteadmin.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=list[UserDTO])
async def list_users(
    db: DBSession,
    current_user: CurrentUserRequired,
) -> list[UserDTO]:
    """List admin users."""
    users = await UserService(db).list_users()
    return [UserDTO.model_validate(u) for u in users]


@router.post("", response_model=UserDTO, status_code=status.HTTP_201_CREATED)
async def create_user(
    data: UserCreate,
    db: DBSession,
    current_user: CurrentSuperuser,
    log_service: AuditLog,
) -> UserDTO:
    """Create a new admin user (superuser only)."""
    user_service = UserService(db)
    if await user_service.get_by_username(data.username):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Username already exists",
        )

    user = await user_service.create_user(
        username=data.username,
        password=data.password,
        is_superuser=data.is_superuser,
    )
    await log_service.log(
        "account-manager",
        f"user: {data.username} created by {current_user.username}",
    )
    return UserDTO.model_validate(user)


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    db: DBSession,
    current_user: CurrentSuperuser,
    log_service: AuditLog,
) -> dict:
    """Delete an admin user (superuser only, not yourself)."""
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete your own account",
        )

    if not await UserService(db).delete_by_id(user_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    await log_service.log(
        "account-manager",
        f"user: {user_id} deleted by {current_user.username}",
    )
    return {"status": "success"}


@router.put("/{user_id}/password")
async def change_password(
    user_id: str,
    data: ChangePassword,
    db: DBSession,
    current_user: CurrentUserRequired,
    log_service: AuditLog,
) -> dict:
    """
    Change user password.

    - **user_id**: User ID to change password for
    - **password**: New password
    """
    # Users can only change their own password
    if current_user.id != user_id and not current_user.is_superuser:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Cannot change other user's password",
        )

    if not await UserService(db).change_password(user_id, data.password):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    await log_service.log(
        "account-settings",
        f"password of user: {user_id} changed by {current_user.username}",
    )
    return {"status": "success"}
