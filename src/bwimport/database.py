"""In-memory password database.

This module provides the object that owns an imported vault:
- The root group and, through it, every group and entry
- Database-level settings
- Searching for entries and groups
"""

from __future__ import annotations

import uuid as uuid_module
from collections.abc import Iterator
from dataclasses import dataclass

from .models import Entry, Group


@dataclass
class DatabaseSettings:
    """Settings for a database.

    Attributes:
        generator: Generator application name
        database_name: Name of the database, also used for the root group
        database_description: Description of the database
    """

    generator: str = "bwimport"
    database_name: str = "Database"
    database_description: str = ""


class Database:
    """Container for a group/entry tree.

    A database owns exactly one root group. Everything else is reachable
    from it.

    Example usage:
        db = Database.create(database_name="Imported")
        work = db.root_group.create_subgroup("Work")
        work.add_entry(Entry.create(title="Jira", username="dev@work.com"))

        entries = db.find_entries(username="dev@work.com")
    """

    def __init__(
        self,
        root_group: Group,
        settings: DatabaseSettings | None = None,
    ) -> None:
        """Initialize database.

        Usually you should use Database.create() instead.

        Args:
            root_group: Root group containing all entries/groups
            settings: Database settings
        """
        self._root_group = root_group
        self._settings = settings or DatabaseSettings()

    @property
    def root_group(self) -> Group:
        """Get the root group of the database."""
        return self._root_group

    @property
    def settings(self) -> DatabaseSettings:
        """Get database settings."""
        return self._settings

    @classmethod
    def create(
        cls,
        database_name: str = "Database",
        root_uuid: uuid_module.UUID | None = None,
    ) -> Database:
        """Create a new, empty database.

        Args:
            database_name: Name for the database and its root group
            root_uuid: Identifier for the root group (random if omitted)

        Returns:
            New Database instance
        """
        root_group = Group.create_root(database_name, uuid=root_uuid)
        return cls(
            root_group=root_group,
            settings=DatabaseSettings(database_name=database_name),
        )

    # --- Search operations ---

    def find_entries(
        self,
        title: str | None = None,
        username: str | None = None,
        url: str | None = None,
        tags: list[str] | None = None,
        recursive: bool = True,
    ) -> list[Entry]:
        """Find entries matching criteria.

        Args:
            title: Match entries with this title
            username: Match entries with this username
            url: Match entries with this URL
            tags: Match entries with all these tags
            recursive: Search in subgroups

        Returns:
            List of matching entries
        """
        return self._root_group.find_entries(
            title=title,
            username=username,
            url=url,
            tags=tags,
            recursive=recursive,
        )

    def find_groups(
        self,
        name: str | None = None,
        recursive: bool = True,
    ) -> list[Group]:
        """Find groups matching criteria.

        Args:
            name: Match groups with this name
            recursive: Search in nested subgroups

        Returns:
            List of matching groups
        """
        return self._root_group.find_groups(name=name, recursive=recursive)

    def iter_entries(self, recursive: bool = True) -> Iterator[Entry]:
        """Iterate over all entries in the database.

        Args:
            recursive: Include entries from all subgroups

        Yields:
            Entry objects
        """
        yield from self._root_group.iter_entries(recursive=recursive)

    def iter_groups(self, recursive: bool = True) -> Iterator[Group]:
        """Iterate over all groups in the database, excluding the root.

        Args:
            recursive: Include nested subgroups

        Yields:
            Group objects
        """
        yield from self._root_group.iter_groups(recursive=recursive)

    def __str__(self) -> str:
        entry_count = sum(1 for _ in self.iter_entries())
        group_count = sum(1 for _ in self.iter_groups())
        name = self._settings.database_name
        return f'Database: "{name}" ({entry_count} entries, {group_count} groups)'
