"""Request-scoped dependencies: authentication and role checks."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from fitness_platform.database import get_db
from fitness_platform.errors import AuthenticationError, NotFoundError, PermissionDeniedError
from fitness_platform.models.database_models import User, UserRole
from fitness_platform.services.auth_service import AuthService


def get_current_user(
    db: Annotated[Session, Depends(get_db)],
    x_access_token: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the ``x-access-token`` header to a user."""
    if not x_access_token:
        raise HTTPException(status_code=401, detail="Token is missing")
    try:
        return AuthService(db).get_user_for_token(x_access_token)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message)


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: UserRole):
    """Dependency factory rejecting users whose role is not in ``roles``."""

    def checker(user: CurrentUser) -> User:
        if user.role not in roles:
            raise HTTPException(status_code=403, detail="You do not have access to this resource")
        return user

    return checker


AdminUser = Annotated[User, Depends(require_roles(UserRole.admin))]
TrainerUser = Annotated[User, Depends(require_roles(UserRole.trainer))]
TraineeUser = Annotated[User, Depends(require_roles(UserRole.trainee))]
StaffUser = Annotated[User, Depends(require_roles(UserRole.admin, UserRole.trainer))]


def ensure_trainee_access(db: Session, user: User, trainee_id: str) -> User:
    """
    Return the trainee if ``user`` may see their data.

    Admins see everyone, trainees only themselves and trainers only the
    trainees assigned to them.
    """
    trainee = db.get(User, trainee_id)
    if trainee is None or trainee.role != UserRole.trainee:
        raise NotFoundError(f"Trainee {trainee_id} not found")
    if user.role == UserRole.admin:
        return trainee
    if user.role == UserRole.trainee and user.id == trainee.id:
        return trainee
    if user.role == UserRole.trainer and trainee.trainer_id == user.id:
        return trainee
    raise PermissionDeniedError("You do not have access to this trainee")


def resolve_trainee_id(db: Session, user: User, trainee_id: str | None) -> str:
    """Default to the caller when a trainee asks about their own data."""
    if trainee_id is None:
        if user.role == UserRole.trainee:
            return user.id
        raise HTTPException(status_code=400, detail="trainee_id is required")
    return ensure_trainee_access(db, user, trainee_id).id
