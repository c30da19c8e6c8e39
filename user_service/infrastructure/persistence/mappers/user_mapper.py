"""
Mapper between the domain User entity and UserModel.
"""
from datetime import timezone
from typing import Optional

from user_service.domain.entities import User
from user_service.infrastructure.persistence.models import UserModel


class UserMapper:
    """
    Converts User <-> UserModel.

    The domain never sees SQLAlchemy objects; repositories go through
    this mapper in both directions.
    """

    @staticmethod
    def to_entity(model: UserModel) -> User:
        """Build a detached domain entity from a row."""
        return User(
            id=model.id,
            username=model.username,
            email=model.email,
            phone=model.phone,
            real_name=model.real_name,
            create_time=_as_utc(model.create_time),
            update_time=_as_utc(model.update_time),
        )

    @staticmethod
    def to_model(user: User, model: Optional[UserModel] = None) -> UserModel:
        """
        Copy entity fields onto a row.

        Args:
            user: Source entity
            model: Existing row to update; a new row is created when omitted

        Returns:
            The populated row
        """
        if model is None:
            model = UserModel()
            if user.id is not None:
                model.id = user.id
        model.username = user.username
        model.email = user.email
        model.phone = user.phone
        model.real_name = user.real_name
        model.create_time = user.create_time
        model.update_time = user.update_time
        return model


def _as_utc(value):
    # SQLite drops tzinfo on round trip
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
