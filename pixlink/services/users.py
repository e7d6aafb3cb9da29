"""
User record operations.
"""
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import UniquenessViolationError
from ..logging_config import service_logger
from ..models.user import User
from ..schemas.user import UserCreate


def create_user(db: Session, user_data: UserCreate) -> User:
    """
    Create a new user.

    There is no find-existing path: a username or email that is already
    taken fails the insert and raises UniquenessViolationError.
    """
    user = User(username=user_data.username, email=user_data.email)
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        service_logger.warning(
            "User creation rejected",
            username=user_data.username,
            reason="duplicate",
        )
        raise UniquenessViolationError("Username or email already registered") from e

    db.refresh(user)
    service_logger.info("User created", user_id=user.id, username=user.username)
    return user


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()
