"""Bitwarden export parsing and mapping.

This module handles turning a Bitwarden JSON export into database objects:
- Lenient, typed models of the export document (schema)
- Folder and item mapping into groups and entries (bitwarden)
"""

from .bitwarden import (
    IdGenerator,
    ImportSettings,
    build_database,
    map_folders,
    map_item,
    write_vault,
)
from .schema import (
    CustomFieldType,
    RawCard,
    RawField,
    RawFolder,
    RawIdentity,
    RawItem,
    RawLogin,
    RawUri,
    RawVault,
)

__all__ = [
    # Schema
    "CustomFieldType",
    "RawCard",
    "RawField",
    "RawFolder",
    "RawIdentity",
    "RawItem",
    "RawLogin",
    "RawUri",
    "RawVault",
    # Mapping
    "IdGenerator",
    "ImportSettings",
    "build_database",
    "map_folders",
    "map_item",
    "write_vault",
]
