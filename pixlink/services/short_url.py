"""
Short URL generation for image share links.
"""
import secrets
import string
from typing import Optional

from sqlalchemy.orm import Session

from ..config import get_settings
from ..exceptions import ShortUrlExhaustedError
from ..logging_config import service_logger
from ..models.image import Image

ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits


def generate_short_url(length: Optional[int] = None) -> str:
    """Return a random alphanumeric token."""
    if length is None:
        length = get_settings().short_url_length
    return "".join(secrets.choice(ALPHABET) for _ in range(length))


def short_url_exists(db: Session, short_url: str) -> bool:
    return db.query(Image.id).filter(Image.short_url == short_url).first() is not None


def generate_unique_short_url(db: Session, max_attempts: Optional[int] = None) -> str:
    """
    Generate a short URL not used by any stored image.

    The check is advisory: nothing is reserved, and the unique constraint on
    images.short_url still decides at insert time.
    """
    if max_attempts is None:
        max_attempts = get_settings().short_url_max_attempts

    for attempt in range(1, max_attempts + 1):
        candidate = generate_short_url()
        if not short_url_exists(db, candidate):
            return candidate
        service_logger.warning(
            "Short URL collision",
            short_url=candidate,
            attempt=attempt,
        )

    raise ShortUrlExhaustedError(max_attempts)
