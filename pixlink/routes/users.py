"""
User routes: registration, lookup and personal gallery.
"""
from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from typing import List

from ..config import get_settings
from ..database import get_db
from ..limiter import limiter
from ..responses import not_found
from ..schemas.image import ImageResponse
from ..schemas.user import UserCreate, UserResponse
from ..services import create_user, get_user, list_user_images
from .images import image_to_dict

settings = get_settings()

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserResponse)
@limiter.limit(settings.create_user_rate_limit)
def register_user(request: Request, user_data: UserCreate, db: Session = Depends(get_db)):
    """Create a user. A taken username or email is rejected with 409."""
    return create_user(db, user_data)


@router.get("/{user_id}", response_model=UserResponse)
def read_user(user_id: int, db: Session = Depends(get_db)):
    user = get_user(db, user_id)
    if not user:
        not_found("User", user_id)
    return user


@router.get("/{user_id}/images", response_model=List[ImageResponse])
def read_user_images(user_id: int, db: Session = Depends(get_db)):
    """Get every image owned by the user, including private ones."""
    return [image_to_dict(image) for image in list_user_images(db, user_id)]
