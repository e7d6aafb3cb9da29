from .user import UserCreate, UserResponse
from .image import ImageUpload, ImageUpdate, ImageResponse

__all__ = [
    "UserCreate", "UserResponse",
    "ImageUpload", "ImageUpdate", "ImageResponse",
]
