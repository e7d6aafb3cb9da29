"""
Image record operations: upload, update, delete and short-link access.
"""
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..exceptions import UniquenessViolationError, UserNotFoundError
from ..logging_config import service_logger
from ..models.image import Image
from ..schemas.image import ImageUpdate, ImageUpload
from .short_url import generate_unique_short_url
from .users import get_user


def upload_image(db: Session, image_data: ImageUpload) -> Image:
    """Store metadata for a new image owned by ``image_data.user_id``."""
    if get_user(db, image_data.user_id) is None:
        raise UserNotFoundError(image_data.user_id)

    short_url = generate_unique_short_url(db)
    image = Image(
        **image_data.model_dump(),
        short_url=short_url,
        view_count=0,
    )
    db.add(image)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        reason = str(e.orig).lower()
        service_logger.warning(
            "Image insert rejected",
            user_id=image_data.user_id,
            short_url=short_url,
            reason=reason,
        )
        # owner removed between the existence check and the commit
        if "foreign key" in reason:
            raise UserNotFoundError(image_data.user_id) from e
        raise UniquenessViolationError("Short URL already in use") from e

    db.refresh(image)
    service_logger.info(
        "Image uploaded",
        image_id=image.id,
        user_id=image.user_id,
        short_url=image.short_url,
    )
    return image


def update_image(db: Session, image_id: int, update: ImageUpdate) -> Optional[Image]:
    """
    Apply the fields present in ``update`` to an image.

    Any caller may update any image; ownership is not checked here.
    updated_at is refreshed even when no field is given.
    """
    image = db.query(Image).filter(Image.id == image_id).first()
    if not image:
        return None

    for key, value in update.model_dump(exclude_unset=True).items():
        setattr(image, key, value)
    image.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(image)
    return image


def delete_image(db: Session, image_id: int, user_id: int) -> bool:
    """Delete an image owned by ``user_id``. Missing and not-owned both return False."""
    removed = db.query(Image).filter(
        Image.id == image_id,
        Image.user_id == user_id,
    ).delete()
    db.commit()

    if removed:
        service_logger.info("Image deleted", image_id=image_id, user_id=user_id)
    return removed > 0


def get_image_by_short_url(db: Session, short_url: str) -> Optional[Image]:
    """
    Resolve a public image by short URL and count the view.

    The increment is a single relative UPDATE so concurrent views are not
    lost. Private images never match, even for their owner.
    """
    matched = db.query(Image).filter(
        Image.short_url == short_url,
        Image.is_public.is_(True),
    ).update(
        {
            Image.view_count: Image.view_count + 1,
            Image.updated_at: datetime.now(timezone.utc),
        },
        synchronize_session=False,
    )
    if not matched:
        db.rollback()
        return None

    db.commit()
    return db.query(Image).filter(Image.short_url == short_url).first()
