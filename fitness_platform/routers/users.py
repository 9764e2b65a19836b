"""User administration and trainer-trainee lookups."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from fitness_platform.database import get_db
from fitness_platform.dependencies import AdminUser, CurrentUser, StaffUser
from fitness_platform.models.database_models import UserRole
from fitness_platform.models.schemas import TrainerAssignment, UserCreate, UserResponse, UserUpdate
from fitness_platform.services.user_service import UserService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserResponse])
async def list_users(
    admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
    role: UserRole | None = None,
):
    """List every user, optionally narrowed to one role."""
    users = UserService(db).get_all_users()
    if role is not None:
        users = [user for user in users if user.role == role]
    return users


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    payload: UserCreate,
    admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
):
    return UserService(db).create_user(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        trainer_id=payload.trainer_id,
    )


@router.get("/trainers", response_model=list[UserResponse])
async def list_trainers(
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
):
    return UserService(db).get_trainers()


@router.get("/trainees", response_model=list[UserResponse])
async def list_trainees(
    user: StaffUser,
    db: Annotated[Session, Depends(get_db)],
    trainer_id: str | None = None,
):
    """
    Trainees assigned to a trainer.

    Trainers always get their own trainees; admins pass ``trainer_id``.
    """
    if user.role == UserRole.trainer:
        trainer_id = user.id
    elif trainer_id is None:
        raise HTTPException(status_code=400, detail="trainer_id is required")
    return UserService(db).get_trainees(trainer_id)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    user: CurrentUser,
    db: Annotated[Session, Depends(get_db)],
):
    service = UserService(db)
    target = service.require_user(user_id)
    allowed = (
        user.role == UserRole.admin
        or user.id == target.id
        or (user.role == UserRole.trainer and target.trainer_id == user.id)
        or (user.role == UserRole.trainee and user.trainer_id == target.id)
    )
    if not allowed:
        raise HTTPException(status_code=403, detail="You do not have access to this user")
    return target


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    payload: UserUpdate,
    admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Edit a user. Leave ``password`` empty to keep the current one."""
    return UserService(db).update_user(
        user_id,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
        trainer_id=payload.trainer_id,
    )


@router.put("/{user_id}/trainer", response_model=UserResponse)
async def assign_trainer(
    user_id: str,
    payload: TrainerAssignment,
    admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
):
    return UserService(db).assign_trainer(user_id, payload.trainer_id)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    admin: AdminUser,
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a user. A deleted trainer's trainees become unassigned."""
    if user_id == admin.id:
        raise HTTPException(status_code=400, detail="You cannot delete your own account")
    UserService(db).delete_user(user_id)
    return Response(status_code=204)
