from .short_url import generate_short_url, generate_unique_short_url
from .users import create_user, get_user
from .images import upload_image, update_image, delete_image, get_image_by_short_url
from .queries import list_public_images, list_user_images

__all__ = [
    "generate_short_url", "generate_unique_short_url",
    "create_user", "get_user",
    "upload_image", "update_image", "delete_image", "get_image_by_short_url",
    "list_public_images", "list_user_images",
]
