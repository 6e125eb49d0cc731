"""Bitwarden vault to database mapping.

This module turns a validated RawVault into groups and entries:
- map_folders: one group per Bitwarden folder, directly under the root
- map_item: one entry per Bitwarden item, plus the folder it belongs to
- write_vault: runs both and files every entry into its group

Identifiers for new groups and entries come from an injectable
generator so results can be made deterministic.
"""

from __future__ import annotations

import logging
import uuid as uuid_module
from collections.abc import Callable
from dataclasses import dataclass, field
from gettext import gettext as _

from ..database import Database
from ..exceptions import TotpParseError
from ..models import Entry, Group, Times
from ..totp import parse_settings
from .schema import RawCard, RawFolder, RawItem, RawVault

logger = logging.getLogger(__name__)

IdGenerator = Callable[[], uuid_module.UUID]


@dataclass
class ImportSettings:
    """Options controlling how vault items become entries.

    Attributes:
        favorite_tag: Tag added to items marked as favorite (localized)
        url_attribute_prefix: Attribute name prefix for additional URLs,
            followed by a 1-based counter
        identity_address_key: Attribute name for the composed identity address
        card_attribute_prefix: Attribute name prefix for card fields
        import_cards: Whether card details are copied into attributes
        database_name: Name of the created database and its root group
    """

    favorite_tag: str = field(default_factory=lambda: _("Favorite"))
    url_attribute_prefix: str = "KP2A_URL_"
    identity_address_key: str = "identity_address"
    card_attribute_prefix: str = "card_"
    import_cards: bool = True
    database_name: str = "Bitwarden Import"


# Card fields copied to attributes: (attribute suffix, model attribute, protected)
CARD_FIELDS = (
    ("cardholderName", "cardholder_name", False),
    ("brand", "brand", False),
    ("number", "number", True),
    ("expMonth", "exp_month", False),
    ("expYear", "exp_year", False),
    ("code", "code", True),
)


def map_folders(
    folders: list[RawFolder],
    root: Group,
    new_id: IdGenerator = uuid_module.uuid4,
) -> dict[str, Group]:
    """Create a group under the root for every folder.

    Args:
        folders: Folders from the export
        root: Root group the new groups are attached to
        new_id: Identifier generator for the new groups

    Returns:
        Mapping of Bitwarden folder id to the created group; folders with
        an empty id are not included
    """
    folder_map: dict[str, Group] = {}
    for folder in folders:
        group = root.create_subgroup(folder.name, uuid=new_id())
        # A folder without an id still becomes a group, but nothing can reference it
        if folder.id:
            folder_map[folder.id] = group
    logger.debug("Created %d groups from folders", len(folders))
    return folder_map


def _map_login(entry: Entry, item: RawItem, settings: ImportSettings) -> None:
    login = item.login
    if login is None:
        return

    entry.username = login.username
    entry.password = login.password

    if login.totp:
        try:
            entry.totp = parse_settings(login.totp)
        except TotpParseError as e:
            logger.warning("Ignoring unusable TOTP setting on item %r: %s", item.name, e)

    # First URI is the primary URL, the rest are numbered from 1
    for index, uri in enumerate(login.uris):
        if index == 0:
            entry.url = uri.uri
        else:
            entry.add_custom_property(f"{settings.url_attribute_prefix}{index}", uri.uri)


def _map_card(entry: Entry, card: RawCard, settings: ImportSettings) -> None:
    for suffix, attribute, protected in CARD_FIELDS:
        value = getattr(card, attribute)
        if value:
            entry.add_custom_property(
                f"{settings.card_attribute_prefix}{suffix}", value, protected=protected
            )


def map_item(
    item: RawItem,
    new_id: IdGenerator = uuid_module.uuid4,
    settings: ImportSettings | None = None,
) -> tuple[Entry, str]:
    """Convert one vault item into an entry.

    The entry is not attached to any group. The Bitwarden folder id is
    returned alongside it so the caller can resolve the destination.

    Args:
        item: Item from the export
        new_id: Identifier generator for the new entry
        settings: Import options (defaults if omitted)

    Returns:
        Tuple of (entry, folder id); the folder id is empty when unset
    """
    settings = settings or ImportSettings()

    entry = Entry.create(
        title=item.name,
        notes=item.notes,
        uuid=new_id(),
    )

    if item.favorite:
        entry.add_tag(settings.favorite_tag)

    _map_login(entry, item, settings)

    if item.identity is not None:
        entry.add_custom_property(settings.identity_address_key, item.identity.address)

    if item.card is not None and settings.import_cards:
        _map_card(entry, item.card, settings)

    for custom_field in item.custom_fields:
        entry.add_custom_property(
            custom_field.name, custom_field.value, protected=custom_field.is_hidden
        )

    entry.remove_history_items(entry.history)

    entry.times = Times.from_timestamps(item.created_time, item.modified_time)

    return entry, item.folder_id


def write_vault(
    vault: RawVault,
    db: Database,
    new_id: IdGenerator = uuid_module.uuid4,
    settings: ImportSettings | None = None,
) -> None:
    """Populate a database with the folders and items of a vault.

    Nothing is written unless the vault has both a folder and an item
    list. Items whose folder id is empty or unknown are placed in the
    root group.

    Args:
        vault: Validated export document
        db: Database to populate
        new_id: Identifier generator for new groups and entries
        settings: Import options (defaults if omitted)
    """
    if not vault.is_complete:
        logger.debug("Vault has no folder or item list, nothing to import")
        return

    settings = settings or ImportSettings()
    root = db.root_group
    folder_map = map_folders(vault.folders, root, new_id)

    for item in vault.items:
        entry, folder_id = map_item(item, new_id, settings)
        group = folder_map.get(folder_id) if folder_id else None
        if group is None:
            if folder_id:
                logger.warning("Item %r references unknown folder, using root", item.name)
            group = root
        group.add_entry(entry, track_times=False)

    logger.debug("Imported %d items", len(vault.items))


def build_database(
    vault: RawVault,
    new_id: IdGenerator = uuid_module.uuid4,
    settings: ImportSettings | None = None,
) -> Database:
    """Create a fresh database holding the contents of a vault.

    Args:
        vault: Validated export document
        new_id: Identifier generator for the root group, groups and entries
        settings: Import options (defaults if omitted)

    Returns:
        New Database instance
    """
    settings = settings or ImportSettings()
    db = Database.create(database_name=settings.database_name, root_uuid=new_id())
    write_vault(vault, db, new_id, settings)
    return db
