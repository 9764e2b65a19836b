"""Password hashing, login and access tokens."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import jwt
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from fitness_platform.config import get_settings
from fitness_platform.errors import AuthenticationError, ConflictError, PermissionDeniedError
from fitness_platform.models.database_models import User, UserRole


logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(user: User, password: str) -> bool:
    return check_password_hash(user.password_hash, password)


class AuthService:
    """Authenticate users and issue signed access tokens."""

    def __init__(self, db: Session):
        self.db = db
        self.settings = get_settings()

    def login(self, email: str, password: str) -> tuple[User, str, datetime]:
        """Return the user, a fresh token and its expiry for valid credentials."""

        user = self.db.query(User).filter(User.email == email.strip()).first()
        if user is None or not verify_password(user, password):
            logger.warning("Failed login attempt for %s", email)
            raise AuthenticationError("Invalid email or password")

        token, expires_at = self.issue_token(user)
        logger.info("User %s logged in as %s", user.id, user.role.value)
        return user, token, expires_at

    def register(self, name: str, email: str, password: str, role: UserRole) -> tuple[User, str, datetime]:
        """Create an account and log it in."""

        if role == UserRole.admin:
            raise PermissionDeniedError("Admin accounts can only be created by an admin")
        if self.db.query(User).filter(User.email == email).first():
            raise ConflictError("User with this email already exists")

        user = User(name=name, email=email, role=role, password_hash=hash_password(password))
        self.db.add(user)
        self.db.flush()

        token, expires_at = self.issue_token(user)
        logger.info("Registered user %s with role %s", user.id, role.value)
        return user, token, expires_at

    def issue_token(self, user: User) -> tuple[str, datetime]:
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=self.settings.access_token_ttl_minutes)
        payload = {
            "user_id": user.id,
            "role": user.role.value,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self.settings.secret_key, algorithm=TOKEN_ALGORITHM)
        return token, expires_at

    def get_user_for_token(self, token: str) -> User:
        """Resolve a token to its user, rejecting expired or tampered tokens."""

        try:
            data = jwt.decode(token, self.settings.secret_key, algorithms=[TOKEN_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

        user = self.db.get(User, data.get("user_id"))
        if user is None:
            raise AuthenticationError("User not found")
        return user
