"""
Base class for domain entities.

An entity is an object with a unique identity and a lifecycle. Two
persisted entities with the same ID are the same entity even if their
attributes differ.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


class Entity(BaseModel):
    """
    Base domain entity.

    The identifier is assigned by storage on first save, so a freshly
    constructed entity has ``id=None`` and no timestamps.

    Attributes:
        id: Storage-assigned identifier (None until persisted)
        create_time: Creation time (UTC)
        update_time: Last update time (UTC)

    Example:
        >>> class Account(Entity):
        ...     name: str
        >>>
        >>> account = Account(name="main")
        >>> account.is_new
        True
    """

    id: Optional[int] = Field(
        default=None,
        description="Storage-assigned identifier"
    )

    create_time: Optional[datetime] = Field(
        default=None,
        description="Creation time (UTC)"
    )

    update_time: Optional[datetime] = Field(
        default=None,
        description="Last update time (UTC)"
    )

    @property
    def is_new(self) -> bool:
        """True while the entity has not been persisted."""
        return self.id is None

    def init_create_time(self) -> None:
        """
        Stamp a new entity before its first save.

        Both timestamps get the same instant so that
        ``create_time <= update_time`` holds from the start.
        """
        now = datetime.now(timezone.utc)
        self.create_time = now
        self.update_time = now

    def touch_update_time(self) -> None:
        """Refresh update_time before a subsequent save."""
        now = datetime.now(timezone.utc)
        if self.create_time is not None and now < self.create_time:
            now = self.create_time
        self.update_time = now

    def __eq__(self, other: object) -> bool:
        """
        Compare entities by ID.

        Transient entities (no ID yet) are only equal to themselves.
        """
        if not isinstance(other, Entity) or type(self) is not type(other):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return id(self)
        return hash((type(self), self.id))

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id!r})>"
