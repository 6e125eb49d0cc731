"""Bitwarden JSON export reader.

Entry point for importing a vault file:

    from bwimport import BitwardenReader

    reader = BitwardenReader()
    db = reader.convert("bitwarden_export.json")
    if db is None:
        print(reader.error_string())

convert_file() offers the same conversion with exceptions instead of an
error string.
"""

from __future__ import annotations

import json
import logging
import uuid as uuid_module
from pathlib import Path
from typing import Any

from .database import Database
from .exceptions import (
    ConversionError,
    SourceFileNotFoundError,
    SourceFileUnreadableError,
    VaultFormatError,
)
from .parsing import IdGenerator, ImportSettings, RawVault, build_database

logger = logging.getLogger(__name__)


def _read_document(filepath: Path) -> Any:
    """Read and decode the JSON document stored at a path.

    Raises:
        SourceFileNotFoundError: If the path does not exist
        SourceFileUnreadableError: If the file cannot be opened or read
        VaultFormatError: If the contents are not valid JSON
    """
    if not filepath.exists():
        raise SourceFileNotFoundError()

    try:
        with filepath.open("rb") as f:
            data = f.read()
    except OSError as e:
        raise SourceFileUnreadableError(e.strerror or str(e)) from e

    try:
        return json.loads(data)
    except ValueError as e:
        # Covers both JSONDecodeError and undecodable bytes
        raise VaultFormatError(f"Invalid JSON: {e}") from e


def convert_file(
    path: str | Path,
    settings: ImportSettings | None = None,
    new_id: IdGenerator = uuid_module.uuid4,
) -> Database:
    """Convert a Bitwarden JSON export file into a new database.

    Args:
        path: Path to the export file
        settings: Import options (defaults if omitted)
        new_id: Identifier generator for groups and entries

    Returns:
        Database holding the imported folders and items

    Raises:
        SourceFileNotFoundError: If the file doesn't exist
        SourceFileUnreadableError: If the file can't be opened
        VaultFormatError: If the file isn't JSON or is an encrypted export
    """
    filepath = Path(path)
    logger.debug("Reading Bitwarden export %s", filepath)
    vault = RawVault.from_json(_read_document(filepath))

    if vault.encrypted:
        raise VaultFormatError("Encrypted Bitwarden exports are not supported.")

    return build_database(vault, new_id=new_id, settings=settings)


class BitwardenReader:
    """Converts Bitwarden exports, reporting failures as a message.

    Each call to convert() yields either a database or an error string,
    never both. The error from a previous call is cleared first.
    """

    def __init__(
        self,
        settings: ImportSettings | None = None,
        new_id: IdGenerator = uuid_module.uuid4,
    ) -> None:
        """Initialize the reader.

        Args:
            settings: Import options (defaults if omitted)
            new_id: Identifier generator for groups and entries
        """
        self._settings = settings
        self._new_id = new_id
        self._error = ""

    def convert(self, path: str | Path) -> Database | None:
        """Convert an export file.

        Args:
            path: Path to the export file

        Returns:
            The new database, or None if conversion failed
        """
        self._error = ""
        try:
            return convert_file(path, settings=self._settings, new_id=self._new_id)
        except ConversionError as e:
            logger.info("Bitwarden import failed: %s", e)
            self._error = str(e)
            return None

    def has_error(self) -> bool:
        """Whether the last conversion failed."""
        return bool(self._error)

    def error_string(self) -> str:
        """Message describing why the last conversion failed, or ""."""
        return self._error
