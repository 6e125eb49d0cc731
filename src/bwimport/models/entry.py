"""Entry model for password entries."""

from __future__ import annotations

import copy
import uuid as uuid_module
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

from ..exceptions import TotpParseError
from ..totp import TotpSettings, parse_settings
from .attributes import RESERVED_KEYS, STANDARD_KEYS, AttributeSet, StringField
from .times import Times

if TYPE_CHECKING:
    from .group import Group


@dataclass(eq=False)
class Entry:
    """A password entry in a database.

    Entries store credentials and associated metadata. Each entry has
    standard fields (title, username, password, url, notes) plus support
    for custom string fields.

    Attributes:
        uuid: Unique identifier for the entry
        times: Timestamps (creation, modification, access, expiry)
        tags: List of tags for categorization, without duplicates
        strings: Ordered attribute set (key -> StringField)
        history: List of previous versions of this entry
    """

    uuid: uuid_module.UUID = field(default_factory=uuid_module.uuid4)
    times: Times = field(default_factory=Times.create_new)
    tags: list[str] = field(default_factory=list)
    strings: AttributeSet = field(default_factory=AttributeSet)
    history: list[HistoryEntry] = field(default_factory=list)

    # Runtime reference to parent group
    _parent: Optional[Group] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Initialize default string fields if not present."""
        for key in STANDARD_KEYS:
            if key not in self.strings:
                self.strings.set(key, None, protected=key == "Password")

    def _set_standard(self, key: str, value: Optional[str]) -> None:
        existing = self.strings.get(key)
        if existing is None:
            self.strings.set(key, value, protected=key == "Password")
        else:
            existing.value = value

    # --- Standard field properties ---

    @property
    def title(self) -> Optional[str]:
        """Get or set entry title."""
        return self.strings.value("Title")

    @title.setter
    def title(self, value: Optional[str]) -> None:
        self._set_standard("Title", value)

    @property
    def username(self) -> Optional[str]:
        """Get or set entry username."""
        return self.strings.value("UserName")

    @username.setter
    def username(self, value: Optional[str]) -> None:
        self._set_standard("UserName", value)

    @property
    def password(self) -> Optional[str]:
        """Get or set entry password."""
        return self.strings.value("Password")

    @password.setter
    def password(self, value: Optional[str]) -> None:
        self._set_standard("Password", value)

    @property
    def url(self) -> Optional[str]:
        """Get or set entry URL."""
        return self.strings.value("URL")

    @url.setter
    def url(self, value: Optional[str]) -> None:
        self._set_standard("URL", value)

    @property
    def notes(self) -> Optional[str]:
        """Get or set entry notes."""
        return self.strings.value("Notes")

    @notes.setter
    def notes(self, value: Optional[str]) -> None:
        self._set_standard("Notes", value)

    @property
    def otp(self) -> Optional[str]:
        """Get or set the raw OTP string stored on the entry."""
        return self.strings.value("otp")

    @otp.setter
    def otp(self, value: Optional[str]) -> None:
        if value is None:
            if "otp" in self.strings:
                self.strings.remove("otp")
            return
        self.strings.set("otp", value, protected=True)

    @property
    def totp(self) -> Optional[TotpSettings]:
        """Get or set TOTP settings.

        The settings are stored as an ``otpauth://`` URI in the "otp"
        attribute. Reading returns None if no usable settings are stored.
        """
        if not self.otp:
            return None
        try:
            return parse_settings(self.otp)
        except TotpParseError:
            return None

    @totp.setter
    def totp(self, settings: Optional[TotpSettings]) -> None:
        self.otp = settings.to_uri() if settings is not None else None

    # --- Custom properties ---

    def get_custom_property(self, key: str) -> Optional[str]:
        """Get a custom property value.

        Args:
            key: Property name (must not be a reserved key)

        Returns:
            Property value, or None if not set

        Raises:
            ValueError: If key is a reserved key
        """
        if key in RESERVED_KEYS:
            raise ValueError(f"{key} is a reserved key, use the property instead")
        return self.strings.value(key)

    def set_custom_property(
        self, key: str, value: str, protected: bool = False
    ) -> None:
        """Set a custom property, replacing any existing value.

        Args:
            key: Property name (must not be a reserved key)
            value: Property value
            protected: Whether to mark as protected

        Raises:
            ValueError: If key is a reserved key
        """
        if key in RESERVED_KEYS:
            raise ValueError(f"{key} is a reserved key, use the property instead")
        self.strings.set(key, value, protected=protected)

    def add_custom_property(
        self, key: str, value: str, protected: bool = False
    ) -> str:
        """Add a custom property without overwriting an existing one.

        If the name is already taken by a custom property, or is a reserved
        name such as a standard field or "otp", a numeric suffix is appended.

        Returns:
            The name the property was stored under
        """
        string_field = self.strings.add_unique(
            key, value, protected=protected, reserved=RESERVED_KEYS
        )
        return string_field.key

    @property
    def custom_properties(self) -> dict[str, Optional[str]]:
        """Get all custom properties as a dictionary."""
        return {key: self.strings.value(key) for key in self.strings.custom_keys()}

    # --- Tags ---

    def add_tag(self, tag: str) -> None:
        """Add a tag unless the entry already has it."""
        if tag and tag not in self.tags:
            self.tags.append(tag)

    # --- History ---

    def save_history(self) -> None:
        """Save current state to history before making changes."""
        self.history.append(HistoryEntry.from_entry(self))

    def remove_history_items(self, items: list[HistoryEntry]) -> None:
        """Remove the given history items from this entry.

        Args:
            items: History items to remove; items not in the history are ignored
        """
        doomed = {id(item) for item in items}
        self.history = [item for item in self.history if id(item) not in doomed]

    # --- Convenience methods ---

    @property
    def parent(self) -> Optional[Group]:
        """Get parent group."""
        return self._parent

    def __hash__(self) -> int:
        return hash(self.uuid)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Entry):
            return self.uuid == other.uuid
        return NotImplemented

    @classmethod
    def create(
        cls,
        title: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        url: Optional[str] = None,
        notes: Optional[str] = None,
        tags: Optional[list[str]] = None,
        uuid: Optional[uuid_module.UUID] = None,
    ) -> Entry:
        """Create a new entry with common fields.

        Args:
            title: Entry title
            username: Username
            password: Password
            url: URL
            notes: Notes
            tags: List of tags
            uuid: Identifier to use instead of a random one

        Returns:
            New Entry instance
        """
        entry = cls(uuid=uuid or uuid_module.uuid4())
        for tag in tags or []:
            entry.add_tag(tag)
        entry.title = title
        entry.username = username
        entry.password = password
        entry.url = url
        entry.notes = notes
        return entry


@dataclass(eq=False)
class HistoryEntry(Entry):
    """A historical version of an entry.

    History entries are snapshots of an entry at a previous point in time.
    They share the same UUID as their parent entry.
    """

    def __hash__(self) -> int:
        # Include mtime since history entries share UUID with parent
        return hash((self.uuid, self.times.last_modification_time))

    @classmethod
    def from_entry(cls, entry: Entry) -> HistoryEntry:
        """Create a history entry from an existing entry.

        Args:
            entry: Entry to create history from

        Returns:
            New HistoryEntry with copied data
        """
        return cls(
            uuid=entry.uuid,
            times=copy.deepcopy(entry.times),
            tags=list(entry.tags),
            strings=AttributeSet(
                [StringField(k, f.value, f.protected) for k, f in entry.strings.items()]
            ),
            history=[],  # History entries don't have history
            _parent=None,
        )
