"""bwimport - Convert Bitwarden vault exports into a password database.

This library reads an unencrypted Bitwarden JSON export and builds an
in-memory group/entry tree from it:
- Folders become groups directly under the root group
- Items become entries with credentials, URLs, custom attributes,
  tags, timestamps and TOTP settings
- Malformed or missing item fields fall back to defaults instead of
  aborting the import

Example:
    from bwimport import convert_file

    db = convert_file("bitwarden_export.json")
    entry = db.find_entries(title="Gmail")[0]
    print(entry.username, entry.url)
"""

__version__ = "0.1.0"

from .converter import BitwardenReader, convert_file
from .database import Database, DatabaseSettings
from .exceptions import (
    ConversionError,
    SourceFileError,
    SourceFileNotFoundError,
    SourceFileUnreadableError,
    TotpParseError,
    VaultFormatError,
)
from .models import AttributeSet, Entry, Group, HistoryEntry, StringField, Times
from .parsing import ImportSettings
from .totp import TotpSettings, parse_settings

__all__ = [
    # Core classes
    "AttributeSet",
    "BitwardenReader",
    "Database",
    "DatabaseSettings",
    "Entry",
    "Group",
    "HistoryEntry",
    "ImportSettings",
    "StringField",
    "Times",
    "TotpSettings",
    # Functions
    "convert_file",
    "parse_settings",
    # Exceptions
    "ConversionError",
    "SourceFileError",
    "SourceFileNotFoundError",
    "SourceFileUnreadableError",
    "TotpParseError",
    "VaultFormatError",
]
