"""Ordered string attributes for entries."""

from __future__ import annotations

from collections.abc import Collection, Iterator
from dataclasses import dataclass
from typing import Optional


# Fields that every entry carries and that have dedicated properties
STANDARD_KEYS = ("Title", "UserName", "Password", "URL", "Notes")

# Fields that have special handling and shouldn't be treated as custom properties
RESERVED_KEYS = frozenset({*STANDARD_KEYS, "otp"})


@dataclass
class StringField:
    """A string field in an entry.

    Attributes:
        key: Field name (e.g., "Title", "UserName", "Password")
        value: Field value
        protected: Whether the field holds sensitive data
    """

    key: str
    value: Optional[str] = None
    protected: bool = False


class AttributeSet:
    """Ordered mapping of attribute name to StringField.

    Names are unique within a set. Insertion order is preserved, and
    re-setting an existing name keeps its original position.

    Example:
        >>> attrs = AttributeSet()
        >>> attrs.set("pin", "1234", protected=True)
        >>> attrs.unique_key("pin")
        'pin_1'
    """

    def __init__(self, fields: Optional[list[StringField]] = None) -> None:
        self._fields: dict[str, StringField] = {}
        for string_field in fields or []:
            self._fields[string_field.key] = string_field

    def set(self, key: str, value: Optional[str], protected: bool = False) -> StringField:
        """Set an attribute, replacing any existing value under the same name.

        Args:
            key: Attribute name
            value: Attribute value
            protected: Whether the value is sensitive

        Returns:
            The stored field
        """
        string_field = StringField(key=key, value=value, protected=protected)
        self._fields[key] = string_field
        return string_field

    def get(self, key: str) -> Optional[StringField]:
        """Get the field stored under a name, or None."""
        return self._fields.get(key)

    def value(self, key: str) -> Optional[str]:
        """Get the value stored under a name, or None."""
        string_field = self._fields.get(key)
        return string_field.value if string_field else None

    def is_protected(self, key: str) -> bool:
        """Check whether the named attribute is marked sensitive."""
        string_field = self._fields.get(key)
        return string_field.protected if string_field else False

    def has_key(self, key: str) -> bool:
        return key in self._fields

    def remove(self, key: str) -> None:
        """Remove an attribute.

        Raises:
            KeyError: If no attribute has that name
        """
        if key not in self._fields:
            raise KeyError(f"No such attribute: {key}")
        del self._fields[key]

    def unique_key(self, key: str, reserved: Collection[str] = ()) -> str:
        """Return a name that is not yet used in this set.

        The name itself is returned when free. Otherwise a numeric suffix
        is appended (``name_1``, ``name_2``, ...) using the smallest free
        number.

        Args:
            key: Preferred attribute name
            reserved: Names treated as taken even when not present

        Returns:
            An unused attribute name
        """

        def taken(name: str) -> bool:
            return name in self._fields or name in reserved

        if not taken(key):
            return key
        counter = 1
        while taken(f"{key}_{counter}"):
            counter += 1
        return f"{key}_{counter}"

    def add_unique(
        self,
        key: str,
        value: Optional[str],
        protected: bool = False,
        reserved: Collection[str] = (),
    ) -> StringField:
        """Add an attribute without overwriting, renaming it on collision.

        Args:
            key: Preferred attribute name
            value: Attribute value
            protected: Whether the value is sensitive
            reserved: Names treated as taken even when not present

        Returns:
            The stored field, whose ``key`` is the name actually used
        """
        return self.set(self.unique_key(key, reserved), value, protected=protected)

    def keys(self) -> list[str]:
        return list(self._fields)

    def custom_keys(self) -> list[str]:
        """Names of all attributes that are not standard or reserved fields."""
        return [key for key in self._fields if key not in RESERVED_KEYS]

    def items(self) -> Iterator[tuple[str, StringField]]:
        yield from self._fields.items()

    def __contains__(self, key: object) -> bool:
        return key in self._fields

    def __getitem__(self, key: str) -> StringField:
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, AttributeSet):
            return self._fields == other._fields
        return NotImplemented

    def __repr__(self) -> str:
        # Values may be secrets, so only names are shown
        return f"AttributeSet({list(self._fields)!r})"
