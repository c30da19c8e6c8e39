"""User aggregate."""

import re
from typing import Optional

from pydantic import Field

from user_service.core.errors import InvalidArgumentError
from user_service.domain.entities.base import Entity

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")


class User(Entity):
    """
    A registered account.

    Username and email are unique across all stored users; uniqueness is
    enforced by the application service and the storage adapters, not by
    the entity itself.
    """

    username: Optional[str] = Field(default=None, description="Login name, 2-50 characters")
    email: Optional[str] = Field(default=None, description="Email address")
    phone: Optional[str] = Field(default=None, description="Phone number (unvalidated)")
    real_name: Optional[str] = Field(default=None, description="Display name")

    def validate_for_create(self) -> None:
        """
        Structural checks run before the first save.

        Raises:
            InvalidArgumentError: on the first failing field; an empty
                username is reported before any email problem
        """
        if self.username is None or not self.username.strip():
            raise InvalidArgumentError("username", "username must not be empty")
        if self.email is None or not self.email.strip():
            raise InvalidArgumentError("email", "email must not be empty")
        if not EMAIL_PATTERN.match(self.email):
            raise InvalidArgumentError("email", "email format is invalid")
