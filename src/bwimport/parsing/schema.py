"""Typed views of a Bitwarden JSON export.

Bitwarden's export format has no published schema and real exports vary
between client versions: fields go missing, arrive as ``null`` or carry an
unexpected type. These models absorb all of that at the boundary. Every
field has a default and every value is coerced leniently, so validating
a parsed JSON object never fails and the mapping code downstream can rely
on plain ``str``/``int``/``bool``/``list`` values.

Coercion rules:
- strings: ``null`` and containers become ``""``, numbers are formatted,
  booleans become ``"true"``/``"false"``
- integers: numeric strings are parsed, anything else becomes ``0``
- booleans: ``""``, ``"0"`` and ``"false"`` are false, other strings true
- lists: non-lists become ``[]``, non-object elements become ``{}``
- sub-objects: anything that is not an object is treated as absent
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import IntEnum
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


class CustomFieldType(IntEnum):
    """Bitwarden custom field types."""

    TEXT = 0
    HIDDEN = 1
    BOOLEAN = 2
    LINKED = 3


def _as_str(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else 0
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0


def _as_optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return _as_int(value)


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return False


def _as_object_list(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [element if isinstance(element, dict) else {} for element in value]


def _as_object(value: Any) -> Optional[dict[str, Any]]:
    return value if isinstance(value, dict) else None


def _as_datetime(value: Any) -> Optional[datetime]:
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


LenientStr = Annotated[str, BeforeValidator(_as_str)]
LenientInt = Annotated[int, BeforeValidator(_as_int)]
LenientBool = Annotated[bool, BeforeValidator(_as_bool)]
OptionalEpoch = Annotated[Optional[int], BeforeValidator(_as_optional_int)]
OptionalIsoTime = Annotated[Optional[datetime], BeforeValidator(_as_datetime)]


def from_epoch(seconds: int) -> datetime:
    """Convert seconds since the Unix epoch to a UTC datetime.

    Values outside the representable range map to the epoch itself.
    """
    try:
        return datetime.fromtimestamp(seconds, tz=UTC)
    except (OverflowError, OSError, ValueError):
        return EPOCH


class RawModel(BaseModel):
    """Base for all export models: unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class RawFolder(RawModel):
    id: LenientStr = ""
    name: LenientStr = ""


class RawUri(RawModel):
    uri: LenientStr = ""


class RawField(RawModel):
    """Custom field on a vault item."""

    name: LenientStr = ""
    value: LenientStr = ""
    type: LenientInt = CustomFieldType.TEXT

    @property
    def is_hidden(self) -> bool:
        return self.type == CustomFieldType.HIDDEN


class RawLogin(RawModel):
    username: LenientStr = ""
    password: LenientStr = ""
    totp: LenientStr = ""
    uris: Annotated[list[RawUri], BeforeValidator(_as_object_list)] = Field(
        default_factory=list
    )


class RawIdentity(RawModel):
    """Identity sub-object.

    Only the address parts are modelled. Older tooling wrote the postal
    code under a lowercase ``postalcode`` key, which is honoured when the
    documented ``postalCode`` key is missing.
    """

    address1: LenientStr = ""
    city: LenientStr = ""
    state: LenientStr = ""
    postal_code: Optional[LenientStr] = Field(default=None, alias="postalCode")
    legacy_postal_code: LenientStr = Field(default="", alias="postalcode")
    country: LenientStr = ""

    @property
    def postal(self) -> str:
        if self.postal_code is not None:
            return self.postal_code
        return self.legacy_postal_code

    @property
    def address(self) -> str:
        """Multi-line postal address, one segment per line."""
        return (
            f"{self.address1}\n"
            f"{self.city}, {self.state} {self.postal}\n"
            f"{self.country}"
        )


class RawCard(RawModel):
    cardholder_name: LenientStr = Field(default="", alias="cardholderName")
    brand: LenientStr = ""
    number: LenientStr = ""
    exp_month: LenientStr = Field(default="", alias="expMonth")
    exp_year: LenientStr = Field(default="", alias="expYear")
    code: LenientStr = ""


class RawItem(RawModel):
    """A single vault item with every field defaulted."""

    folder_id: LenientStr = Field(default="", alias="folderId")
    name: LenientStr = ""
    notes: LenientStr = ""
    favorite: LenientBool = False
    login: Annotated[Optional[RawLogin], BeforeValidator(_as_object)] = None
    identity: Annotated[Optional[RawIdentity], BeforeValidator(_as_object)] = None
    card: Annotated[Optional[RawCard], BeforeValidator(_as_object)] = None
    custom_fields: Annotated[list[RawField], BeforeValidator(_as_object_list)] = Field(
        default_factory=list, alias="fields"
    )
    created_at: OptionalEpoch = Field(default=None, alias="createdAt")
    updated_at: OptionalEpoch = Field(default=None, alias="updatedAt")
    creation_date: OptionalIsoTime = Field(default=None, alias="creationDate")
    revision_date: OptionalIsoTime = Field(default=None, alias="revisionDate")

    @property
    def created_time(self) -> datetime:
        """Creation time: ``createdAt`` seconds, else ``creationDate``, else the epoch."""
        if self.created_at is not None:
            return from_epoch(self.created_at)
        return self.creation_date or EPOCH

    @property
    def modified_time(self) -> datetime:
        """Modification time: ``updatedAt`` seconds, else ``revisionDate``, else the epoch."""
        if self.updated_at is not None:
            return from_epoch(self.updated_at)
        return self.revision_date or EPOCH


class RawVault(RawModel):
    """Top-level export document.

    ``folders`` and ``items`` are None when the key is missing from the
    document, and an empty list when present but empty or malformed.
    """

    encrypted: LenientBool = False
    folders: Annotated[Optional[list[RawFolder]], BeforeValidator(_as_object_list)] = None
    items: Annotated[Optional[list[RawItem]], BeforeValidator(_as_object_list)] = None

    @property
    def is_complete(self) -> bool:
        """Whether both the folder and item lists are present."""
        return self.folders is not None and self.items is not None

    @classmethod
    def from_json(cls, document: Any) -> RawVault:
        """Build a vault from a parsed JSON value.

        A document that is not a JSON object is treated as an empty one.
        """
        if not isinstance(document, dict):
            document = {}
        return cls.model_validate(document)
