"""
Data Transfer Objects for users.

DTOs keep the internal shape of the User entity out of the API and the
remote client.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateUserRequest(BaseModel):
    """
    Request to register a user.

    The email is carried verbatim; its format is checked by the entity
    after the uniqueness checks.
    """

    username: str = Field(..., min_length=2, max_length=50, description="Username",
                          examples=["alice"])
    email: str = Field(..., description="Email", examples=["alice@example.com"])
    phone: Optional[str] = Field(default=None, description="Phone number", examples=["13800138000"])
    real_name: Optional[str] = Field(default=None, description="Real name", examples=["Alice"])


class UserDTO(BaseModel):
    """External view of a user."""

    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = Field(default=None, description="User ID")
    username: Optional[str] = Field(default=None, description="Username")
    email: Optional[str] = Field(default=None, description="Email")
    phone: Optional[str] = Field(default=None, description="Phone number")
    real_name: Optional[str] = Field(default=None, description="Real name")
    create_time: Optional[datetime] = Field(default=None, description="Creation time")
    update_time: Optional[datetime] = Field(default=None, description="Last update time")
