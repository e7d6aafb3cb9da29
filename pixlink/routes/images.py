"""
Image routes: upload, public gallery, short-link access, update and delete.
"""
from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session
from typing import List

from ..config import get_settings
from ..database import get_db
from ..limiter import limiter
from ..models.image import Image
from ..responses import deleted, not_found
from ..schemas.image import ImageResponse, ImageUpdate, ImageUpload
from ..services import (
    delete_image,
    get_image_by_short_url,
    list_public_images,
    update_image,
    upload_image,
)

settings = get_settings()

router = APIRouter(prefix="/api/images", tags=["images"])
share_router = APIRouter(prefix="/i", tags=["share"])


def share_url_for(short_url: str) -> str:
    return f"{settings.public_base_url.rstrip('/')}/i/{short_url}"


def image_to_dict(image: Image) -> dict:
    """Convert an Image model to a dictionary response."""
    return {
        "id": image.id,
        "user_id": image.user_id,
        "title": image.title,
        "description": image.description,
        "filename": image.filename,
        "file_path": image.file_path,
        "file_size": image.file_size,
        "mime_type": image.mime_type,
        "short_url": image.short_url,
        "share_url": share_url_for(image.short_url),
        "view_count": image.view_count,
        "is_public": image.is_public,
        "created_at": image.created_at.isoformat(),
        "updated_at": image.updated_at.isoformat(),
    }


def _view_by_short_url(short_url: str, db: Session) -> dict:
    image = get_image_by_short_url(db, short_url)
    if not image:
        not_found("Image")
    return image_to_dict(image)


@router.get("", response_model=List[ImageResponse])
def get_public_images(db: Session = Depends(get_db)):
    """Public gallery, newest first."""
    return [image_to_dict(image) for image in list_public_images(db)]


@router.post("", response_model=ImageResponse)
@limiter.limit(settings.upload_rate_limit)
def upload(request: Request, image_data: ImageUpload, db: Session = Depends(get_db)):
    """Record a new image and assign its short URL."""
    return image_to_dict(upload_image(db, image_data))


@router.get("/short/{short_url}", response_model=ImageResponse)
def get_by_short_url(short_url: str, db: Session = Depends(get_db)):
    """Resolve a public image by short URL. Each successful call counts one view."""
    return _view_by_short_url(short_url, db)


@router.patch("/{image_id}", response_model=ImageResponse)
def patch_image(image_id: int, update: ImageUpdate, db: Session = Depends(get_db)):
    """Update title, description or visibility. Omitted fields are left untouched."""
    image = update_image(db, image_id, update)
    if not image:
        not_found("Image", image_id)
    return image_to_dict(image)


@router.delete("/{image_id}")
def remove_image(
    image_id: int,
    user_id: int = Query(..., description="Owner of the image"),
    db: Session = Depends(get_db),
):
    """Delete an image. Images that are missing or owned by someone else both give 404."""
    if not delete_image(db, image_id, user_id):
        not_found("Image", image_id)
    return deleted("Image deleted")


@share_router.get("/{short_url}", response_model=ImageResponse)
def open_share_link(short_url: str, db: Session = Depends(get_db)):
    """Share link target, same payload as /api/images/short/{short_url}."""
    return _view_by_short_url(short_url, db)
