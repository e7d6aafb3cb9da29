from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class ImageUpload(BaseModel):
    user_id: int
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    filename: str
    file_path: str
    file_size: int = Field(..., gt=0)
    mime_type: str
    is_public: bool = True


class ImageUpdate(BaseModel):
    """Partial update of an image.

    Only fields present in ``model_fields_set`` are applied. Passing
    ``description=None`` clears the description; leaving it out keeps it.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    is_public: Optional[bool] = None

    @field_validator("title", "is_public")
    @classmethod
    def not_null_when_given(cls, value, info):
        if value is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return value


class ImageResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    filename: str
    file_path: str
    file_size: int
    mime_type: str
    short_url: str
    share_url: str
    view_count: int
    is_public: bool
    created_at: datetime
    updated_at: datetime
