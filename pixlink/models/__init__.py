from .user import User
from .image import Image

__all__ = [
    "User",
    "Image",
]
