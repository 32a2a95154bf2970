"""User service - Profiles, registration and account administration"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ...auth import Actor
from ...errors import AuthenticationError, NotFoundError, ValidationError
from ...models import Role, User
from ...security_utils import create_access_token, hash_password, verify_password
from .repository import UserRepository
from .schemas import AdminUserUpdate, ProfileUpdate, RegisterRequest

logger = logging.getLogger(__name__)


def parse_role(role_id: int) -> Role:
    try:
        return Role(role_id)
    except ValueError as e:
        raise ValidationError(f"Invalid role_id: {role_id}") from e


class UserService:
    """Service layer for user accounts"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def get_user(self, user_id: int) -> User:
        user = self.repo.get_user(self.db, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def register(self, data: RegisterRequest) -> User:
        """Self-registration always creates a client account"""
        if self.repo.get_user_by_email(self.db, data.email):
            raise ValidationError("Email is already registered", code="EMAIL_TAKEN")

        try:
            user = self.repo.create_user(
                self.db,
                role_id=Role.CLIENT.value,
                first_name=data.first_name,
                last_name=data.last_name,
                email=data.email,
                phone_number=data.phone_number,
                password_hash=hash_password(data.password),
            )
        except IntegrityError as e:
            # Email taken between the check and the insert
            self.db.rollback()
            raise ValidationError("Email is already registered", code="EMAIL_TAKEN") from e

        logger.info(f"🆕 New client registered: {user.email}")
        return user

    def login(self, email: str, password: str) -> tuple[str, User]:
        user = self.repo.get_user_by_email(self.db, email)
        if not user or not verify_password(password, user.password_hash):
            logger.warning(f"⚠️ Failed login for {email}")
            raise AuthenticationError("Invalid email or password", code="INVALID_CREDENTIALS")

        token = create_access_token(user.id, user.role_id)
        logger.info(f"🔑 User {user.id} logged in")
        return token, user

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def update_profile(self, actor: Actor, data: ProfileUpdate) -> User:
        user = self.get_user(actor.user_id)
        return self.repo.update_user(
            self.db,
            user,
            first_name=data.first_name,
            last_name=data.last_name,
            phone_number=data.phone_number,
        )

    def get_manicurists(self) -> list[User]:
        return self.repo.get_users(self.db, Role.MANICURIST)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def get_users(self, role_id: Optional[int] = None) -> list[User]:
        role = parse_role(role_id) if role_id is not None else None
        return self.repo.get_users(self.db, role)

    def update_user(self, user_id: int, data: AdminUserUpdate) -> User:
        role = parse_role(data.role_id)
        user = self.get_user(user_id)
        user = self.repo.update_user(
            self.db,
            user,
            first_name=data.first_name,
            last_name=data.last_name,
            phone_number=data.phone_number,
            role_id=role.value,
        )
        logger.info(f"👤 User {user_id} updated (role={role.name})")
        return user

    def delete_user(self, user_id: int, actor: Actor) -> None:
        if user_id == actor.user_id:
            raise ValidationError("You cannot delete yourself")

        user = self.get_user(user_id)
        if self.repo.count_appointments(self.db, user_id) > 0:
            raise ValidationError(
                "Cannot delete: the user has associated appointments", code="USER_IN_USE"
            )
        self.repo.delete_user(self.db, user)
        logger.info(f"🗑️ User {user_id} deleted by admin {actor.user_id}")
