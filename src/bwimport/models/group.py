"""Group model for database folders."""

from __future__ import annotations

import uuid as uuid_module
from collections.abc import Iterator
from dataclasses import dataclass, field

from .entry import Entry
from .times import Times


@dataclass(eq=False)
class Group:
    """A group (folder) in a database.

    Groups organize entries into a hierarchical structure. Each group can
    contain entries and subgroups.

    Attributes:
        uuid: Unique identifier for the group
        name: Display name of the group
        notes: Optional notes/description
        times: Timestamps (creation, modification, access, expiry)
        entries: List of entries in this group
        subgroups: List of subgroups
    """

    uuid: uuid_module.UUID = field(default_factory=uuid_module.uuid4)
    name: str | None = None
    notes: str | None = None
    times: Times = field(default_factory=Times.create_new)
    entries: list[Entry] = field(default_factory=list)
    subgroups: list[Group] = field(default_factory=list)

    # Runtime reference to parent group
    _parent: Group | None = field(default=None, repr=False)
    # Flag for root group
    _is_root: bool = field(default=False, repr=False)

    @property
    def parent(self) -> Group | None:
        """Get parent group, or None if this is the root."""
        return self._parent

    @property
    def is_root_group(self) -> bool:
        """Check if this is the database root group."""
        return self._is_root

    def touch(self, modify: bool = False) -> None:
        """Update access time, optionally modification time."""
        self.times.touch(modify=modify)

    # --- Entry management ---

    def add_entry(self, entry: Entry, track_times: bool = True) -> Entry:
        """Add an entry to this group.

        An entry belongs to exactly one group, so it is first detached
        from any group it is currently in.

        Args:
            entry: Entry to add
            track_times: If False, leave the entry's location_changed and
                this group's modification time untouched

        Returns:
            The added entry
        """
        if entry._parent is not None:
            entry._parent.entries.remove(entry)
        entry._parent = self
        self.entries.append(entry)
        if track_times:
            entry.times.update_location()
            self.touch(modify=True)
        return entry

    # --- Subgroup management ---

    def add_subgroup(self, group: Group) -> Group:
        """Add a subgroup to this group.

        Args:
            group: Group to add

        Returns:
            The added group
        """
        group._parent = self
        self.subgroups.append(group)
        self.touch(modify=True)
        return group

    def create_subgroup(
        self,
        name: str,
        notes: str | None = None,
        uuid: uuid_module.UUID | None = None,
    ) -> Group:
        """Create and add a new subgroup.

        Args:
            name: Group name
            notes: Optional notes
            uuid: Identifier to use instead of a random one

        Returns:
            Newly created group
        """
        group = Group(uuid=uuid or uuid_module.uuid4(), name=name, notes=notes)
        return self.add_subgroup(group)

    # --- Iteration and search ---

    def iter_entries(self, recursive: bool = True) -> Iterator[Entry]:
        """Iterate over entries in this group.

        Args:
            recursive: If True, include entries from all subgroups

        Yields:
            Entry objects
        """
        yield from self.entries
        if recursive:
            for subgroup in self.subgroups:
                yield from subgroup.iter_entries(recursive=True)

    def iter_groups(self, recursive: bool = True) -> Iterator[Group]:
        """Iterate over subgroups.

        Args:
            recursive: If True, include nested subgroups

        Yields:
            Group objects
        """
        for subgroup in self.subgroups:
            yield subgroup
            if recursive:
                yield from subgroup.iter_groups(recursive=True)

    def find_entries(
        self,
        title: str | None = None,
        username: str | None = None,
        url: str | None = None,
        tags: list[str] | None = None,
        recursive: bool = True,
    ) -> list[Entry]:
        """Find entries matching criteria.

        All criteria are combined with AND logic. None means "any value".

        Args:
            title: Match entries with this title (exact)
            username: Match entries with this username (exact)
            url: Match entries with this URL (exact)
            tags: Match entries containing all these tags
            recursive: Search in subgroups

        Returns:
            List of matching entries
        """
        results = []
        for entry in self.iter_entries(recursive=recursive):
            if title is not None and entry.title != title:
                continue
            if username is not None and entry.username != username:
                continue
            if url is not None and entry.url != url:
                continue
            if tags is not None and not all(t in entry.tags for t in tags):
                continue
            results.append(entry)
        return results

    def find_groups(
        self,
        name: str | None = None,
        recursive: bool = True,
    ) -> list[Group]:
        """Find groups matching criteria.

        Args:
            name: Match groups with this name (exact)
            recursive: Search in nested subgroups

        Returns:
            List of matching groups
        """
        results = []
        for group in self.iter_groups(recursive=recursive):
            if name is not None and group.name != name:
                continue
            results.append(group)
        return results

    def __hash__(self) -> int:
        return hash(self.uuid)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Group):
            return self.uuid == other.uuid
        return NotImplemented

    @classmethod
    def create_root(
        cls, name: str = "Root", uuid: uuid_module.UUID | None = None
    ) -> Group:
        """Create a root group for a new database.

        Args:
            name: Name for the root group
            uuid: Identifier to use instead of a random one

        Returns:
            New root Group instance
        """
        group = cls(uuid=uuid or uuid_module.uuid4(), name=name)
        group._is_root = True
        return group
