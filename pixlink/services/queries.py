"""
Read-only gallery listings.
"""
from typing import List

from sqlalchemy.orm import Session

from ..logging_config import service_logger, timed
from ..models.image import Image


@timed(service_logger)
def list_public_images(db: Session) -> List[Image]:
    """All public images, newest first."""
    return (
        db.query(Image)
        .filter(Image.is_public.is_(True))
        .order_by(Image.created_at.desc())
        .all()
    )


@timed(service_logger)
def list_user_images(db: Session, user_id: int) -> List[Image]:
    """All images owned by ``user_id``, public and private, in storage order."""
    return db.query(Image).filter(Image.user_id == user_id).order_by(Image.id).all()
