from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator
from datetime import datetime


class UserCreate(BaseModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: str = Field(..., max_length=255)

    @field_validator("email")
    @classmethod
    def valid_email(cls, value):
        """Check the syntax but keep the address exactly as entered."""
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError as e:
            raise ValueError(str(e)) from e
        return value


class UserResponse(BaseModel):
    id: int
    username: str
    email: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
