"""Custom exception hierarchy for bwimport.

All conversion failures that are reported to the caller inherit from
ConversionError. Problems inside individual vault items are never raised:
the importer substitutes defaults and carries on.

Exception Hierarchy:
    ConversionError (base)
    ├── SourceFileError
    │   ├── SourceFileNotFoundError
    │   └── SourceFileUnreadableError
    └── VaultFormatError

    TotpParseError (ValueError)

Security Note:
    Exception messages never include vault contents. They name the file
    problem or the JSON position, not field values.
"""

from __future__ import annotations


class ConversionError(Exception):
    """Base exception for all bwimport conversion errors.

    The message is a complete human-readable sentence suitable for
    showing to the user as-is.
    """


# --- Source file errors ---


class SourceFileError(ConversionError):
    """The export file could not be read."""


class SourceFileNotFoundError(SourceFileError):
    """The export path does not reference an existing file."""

    def __init__(self, message: str = "File does not exist.") -> None:
        super().__init__(message)


class SourceFileUnreadableError(SourceFileError):
    """The export file exists but cannot be opened for reading."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Cannot open file: {reason}")


# --- Vault content errors ---


class VaultFormatError(ConversionError):
    """The file contents are not a Bitwarden vault this library can import.

    Raised for data that is not JSON at all, and for encrypted exports.
    """


# --- Recoverable errors ---


class TotpParseError(ValueError):
    """A TOTP configuration string could not be interpreted.

    The importer treats this as "no TOTP" for the affected item.
    """
