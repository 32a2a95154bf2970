"""User repository - Database operations for accounts"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ...models import Appointment, Role, User


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_user(db: Session, user_id: int) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_users(db: Session, role: Optional[Role] = None) -> list[User]:
        query = db.query(User)
        if role is not None:
            query = query.filter(User.role_id == role.value)
        return query.order_by(User.id).all()

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        user = User(**user_data)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        for key, value in updates.items():
            if hasattr(user, key):
                setattr(user, key, value)
        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def count_appointments(db: Session, user_id: int) -> int:
        return (
            db.query(Appointment)
            .filter(or_(Appointment.client_id == user_id, Appointment.manicurist_id == user_id))
            .count()
        )

    @staticmethod
    def delete_user(db: Session, user: User) -> None:
        db.delete(user)
        db.commit()
