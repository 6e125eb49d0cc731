"""Timestamp model shared by entries and groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime


def _now() -> datetime:
    # Second precision, matching the resolution of imported timestamps
    return datetime.now(UTC).replace(microsecond=0)


@dataclass
class Times:
    """Timestamps for an entry or group.

    All times are timezone-aware UTC datetimes.

    Attributes:
        creation_time: When the element was created
        last_modification_time: When the element was last modified
        last_access_time: When the element was last accessed
        expiry_time: When the element expires (only meaningful if expires)
        expires: Whether the element expires
        usage_count: Number of times the element was used
        location_changed: When the element was last moved to another group
    """

    creation_time: datetime = field(default_factory=_now)
    last_modification_time: datetime = field(default_factory=_now)
    last_access_time: datetime = field(default_factory=_now)
    expiry_time: datetime | None = None
    expires: bool = False
    usage_count: int = 0
    location_changed: datetime | None = None

    def touch(self, modify: bool = False) -> None:
        """Update access time, optionally modification time."""
        now = _now()
        self.last_access_time = now
        if modify:
            self.last_modification_time = now

    def update_location(self) -> None:
        """Record that the element was moved to a different group."""
        self.location_changed = _now()

    @classmethod
    def create_new(
        cls,
        expires: bool = False,
        expiry_time: datetime | None = None,
    ) -> Times:
        """Create timestamps for a new element, all set to now.

        Args:
            expires: Whether the element expires
            expiry_time: Expiration time

        Returns:
            New Times instance
        """
        now = _now()
        return cls(
            creation_time=now,
            last_modification_time=now,
            last_access_time=now,
            expiry_time=expiry_time,
            expires=expires,
            location_changed=now,
        )

    @classmethod
    def from_timestamps(
        cls, created: datetime, modified: datetime
    ) -> Times:
        """Create timestamps for an imported element.

        The last access time mirrors the modification time.

        Args:
            created: Creation time
            modified: Last modification time

        Returns:
            New Times instance
        """
        return cls(
            creation_time=created,
            last_modification_time=modified,
            last_access_time=modified,
            location_changed=modified,
        )
