"""Login, registration and the current session's user."""
from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fitness_platform.database import get_db
from fitness_platform.dependencies import CurrentUser
from fitness_platform.models.schemas import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from fitness_platform.services.auth_service import AuthService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=TokenResponse)
async def login(
    credentials: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Exchange email and password for an access token.

    Send the token back in the ``x-access-token`` header.
    """
    user, token, expires_at = AuthService(db).login(credentials.email, credentials.password)
    return {"access_token": token, "expires_at": expires_at, "user": user}


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(
    payload: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
):
    """Create a trainer or trainee account and log it in."""
    user, token, expires_at = AuthService(db).register(
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    return {"access_token": token, "expires_at": expires_at, "user": user}


@router.get("/me", response_model=UserResponse)
async def current_user(user: CurrentUser):
    """Return the authenticated user."""
    return user
