"""Entity <-> DTO conversion for users."""

from typing import Optional

from user_service.application.dto import CreateUserRequest, UserDTO
from user_service.domain.entities import User


class UserAssembler:
    """Stateless mapping between User and its transfer objects. No validation."""

    def to_dto(self, user: Optional[User]) -> Optional[UserDTO]:
        """Entity to view; copies every field."""
        if user is None:
            return None
        return UserDTO(
            id=user.id,
            username=user.username,
            email=user.email,
            phone=user.phone,
            real_name=user.real_name,
            create_time=user.create_time,
            update_time=user.update_time,
        )

    def to_entity(self, request: Optional[CreateUserRequest]) -> Optional[User]:
        """Create request to a new (unsaved) entity."""
        if request is None:
            return None
        return User(
            username=request.username,
            email=request.email,
            phone=request.phone,
            real_name=request.real_name,
        )
