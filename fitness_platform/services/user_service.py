"""User management: admin CRUD and trainer-trainee relationships."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from fitness_platform.errors import ConflictError, InvalidOperationError, NotFoundError
from fitness_platform.models.database_models import User, UserRole
from fitness_platform.services.auth_service import hash_password


logger = logging.getLogger(__name__)


class UserService:
    """Query and manage platform users."""

    def __init__(self, db: Session):
        self.db = db

    def get_all_users(self) -> list[User]:
        return self.db.query(User).order_by(User.created_at, User.name).all()

    def get_trainers(self) -> list[User]:
        return self.db.query(User).filter(User.role == UserRole.trainer).order_by(User.name).all()

    def get_trainees(self, trainer_id: str) -> list[User]:
        return (
            self.db.query(User)
            .filter(User.role == UserRole.trainee, User.trainer_id == trainer_id)
            .order_by(User.name)
            .all()
        )

    def get_user_by_id(self, user_id: str) -> User | None:
        return self.db.get(User, user_id)

    def require_user(self, user_id: str) -> User:
        user = self.get_user_by_id(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def require_trainee(self, trainee_id: str) -> User:
        user = self.require_user(trainee_id)
        if user.role != UserRole.trainee:
            raise InvalidOperationError(f"User {trainee_id} is not a trainee")
        return user

    def create_user(
        self,
        name: str,
        email: str,
        password: str,
        role: UserRole,
        trainer_id: str | None = None,
    ) -> User:
        """Create a user of any role. Only trainees keep a trainer assignment."""

        self._ensure_email_available(email)
        trainer_id = self._resolve_trainer(role, trainer_id)

        user = User(
            name=name,
            email=email,
            role=role,
            trainer_id=trainer_id,
            password_hash=hash_password(password),
        )
        self.db.add(user)
        self.db.flush()

        logger.info("Created user %s (%s) trainer=%s", user.id, role.value, trainer_id)
        return user

    def update_user(
        self,
        user_id: str,
        name: str | None = None,
        email: str | None = None,
        password: str | None = None,
        role: UserRole | None = None,
        trainer_id: str | None = None,
    ) -> User:
        """
        Apply an admin edit.

        An empty password keeps the existing one. Changing the role away from
        trainee drops the trainer assignment; a trainer losing the role leaves
        their trainees unassigned.
        """
        user = self.require_user(user_id)

        if email is not None and email != user.email:
            self._ensure_email_available(email, exclude_user_id=user.id)
            user.email = email
        if name is not None:
            user.name = name
        if password:
            user.password_hash = hash_password(password)

        new_role = role or user.role
        if user.role == UserRole.trainer and new_role != UserRole.trainer:
            self._unassign_trainees(user)
        user.role = new_role

        if new_role == UserRole.trainee:
            if trainer_id is not None:
                if trainer_id == user.id:
                    raise InvalidOperationError("A user cannot be their own trainer")
                user.trainer_id = self._resolve_trainer(new_role, trainer_id)
        else:
            user.trainer_id = None

        self.db.flush()
        logger.info("Updated user %s (%s) trainer=%s", user.id, user.role.value, user.trainer_id)
        return user

    def assign_trainer(self, trainee_id: str, trainer_id: str | None) -> User:
        """Move a trainee to another trainer, or unassign them with ``None``."""

        trainee = self.require_trainee(trainee_id)
        old_trainer_id = trainee.trainer_id
        trainee.trainer_id = self._resolve_trainer(UserRole.trainee, trainer_id)
        self.db.flush()
        logger.info("Reassigned trainee %s: %s -> %s", trainee.id, old_trainer_id, trainee.trainer_id)
        return trainee

    def delete_user(self, user_id: str) -> None:
        user = self.require_user(user_id)
        if user.role == UserRole.trainer:
            self._unassign_trainees(user)
        self.db.delete(user)
        self.db.flush()
        logger.info("Deleted user %s (%s)", user_id, user.role.value)

    def count_by_role(self) -> dict[str, int]:
        counts = {role.value: 0 for role in UserRole}
        for user in self.db.query(User).all():
            counts[user.role.value] += 1
        return counts

    def _ensure_email_available(self, email: str, exclude_user_id: str | None = None) -> None:
        query = self.db.query(User).filter(User.email == email)
        if exclude_user_id is not None:
            query = query.filter(User.id != exclude_user_id)
        if query.first() is not None:
            raise ConflictError(
                "Email already in use by another user" if exclude_user_id else "User with this email already exists"
            )

    def _resolve_trainer(self, role: UserRole, trainer_id: str | None) -> str | None:
        if role != UserRole.trainee or trainer_id is None:
            return None
        trainer = self.get_user_by_id(trainer_id)
        if trainer is None or trainer.role != UserRole.trainer:
            raise InvalidOperationError(f"User {trainer_id} is not a trainer")
        return trainer.id

    def _unassign_trainees(self, trainer: User) -> None:
        for trainee in list(trainer.trainees):
            trainee.trainer_id = None
        self.db.flush()
        self.db.expire(trainer, ["trainees"])
