"""Data models for database elements.

This module provides typed Python classes for representing database
contents: entries, groups, their attributes and timestamps.
"""

from .attributes import RESERVED_KEYS, STANDARD_KEYS, AttributeSet, StringField
from .entry import Entry, HistoryEntry
from .group import Group
from .times import Times

__all__ = [
    "RESERVED_KEYS",
    "STANDARD_KEYS",
    "AttributeSet",
    "Entry",
    "Group",
    "HistoryEntry",
    "StringField",
    "Times",
]
