"""Tests for converting export files."""

from collections.abc import Callable
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest

from bwimport import (
    BitwardenReader,
    ConversionError,
    Database,
    ImportSettings,
    SourceFileNotFoundError,
    SourceFileUnreadableError,
    VaultFormatError,
    convert_file,
)

WriteExport = Callable[..., Path]


class TestConvertFile:
    """Tests for the raising entry point."""

    def test_convert(self, write_export: WriteExport, export_document: dict[str, Any]) -> None:
        """Test converting a valid export."""
        db = convert_file(write_export(export_document))

        assert isinstance(db, Database)
        assert len(list(db.iter_entries())) == 3
        assert len(list(db.iter_groups())) == 2

    def test_accepts_str_path(self, write_export: WriteExport, export_document: dict[str, Any]) -> None:
        """Test that a plain string path works."""
        db = convert_file(str(write_export(export_document)))
        assert len(db.find_entries(title="GitHub")) == 1

    def test_settings_passed_through(
        self, write_export: WriteExport, export_document: dict[str, Any]
    ) -> None:
        """Test that import settings reach the item mapping."""
        db = convert_file(
            write_export(export_document), settings=ImportSettings(favorite_tag="Star")
        )
        assert db.find_entries(tags=["Star"])[0].title == "GitHub"

    def test_utf8_bom(self, tmp_path: Path) -> None:
        """Test that a byte order mark doesn't break parsing."""
        path = tmp_path / "bom.json"
        path.write_bytes(b"\xef\xbb\xbf" + '{"folders": [], "items": [{"name": "Café"}]}'.encode("utf-8"))
        db = convert_file(path)
        assert db.root_group.entries[0].title == "Café"

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a nonexistent path is reported."""
        with pytest.raises(SourceFileNotFoundError, match="File does not exist."):
            convert_file(tmp_path / "nope.json")

    def test_directory_is_unreadable(self, tmp_path: Path) -> None:
        """Test that a path that can't be opened as a file is reported."""
        with pytest.raises(SourceFileUnreadableError, match="^Cannot open file: "):
            convert_file(tmp_path)

    def test_permission_denied(self, write_export: WriteExport) -> None:
        """Test that the system reason is part of the message."""
        path = write_export({"folders": [], "items": []})
        with patch.object(Path, "open", side_effect=PermissionError(13, "Permission denied")):
            with pytest.raises(SourceFileUnreadableError) as excinfo:
                convert_file(path)

        assert str(excinfo.value) == "Cannot open file: Permission denied"
        assert excinfo.value.reason == "Permission denied"

    def test_invalid_json(self, tmp_path: Path) -> None:
        """Test that unparseable content is reported distinctly."""
        path = tmp_path / "broken.json"
        path.write_text('{"folders": [', encoding="utf-8")
        with pytest.raises(VaultFormatError, match="^Invalid JSON: "):
            convert_file(path)

    def test_invalid_encoding(self, tmp_path: Path) -> None:
        """Test that bytes which aren't text are reported as invalid JSON."""
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe\xfa\x00\x01")
        with pytest.raises(VaultFormatError, match="^Invalid JSON: "):
            convert_file(path)

    def test_non_object_document(self, write_export: WriteExport) -> None:
        """Test that a JSON array yields an empty database."""
        db = convert_file(write_export([1, 2, 3]))
        assert list(db.iter_entries()) == []
        assert list(db.iter_groups()) == []

    def test_missing_items_key(self, write_export: WriteExport) -> None:
        """Test that a vault without items yields an empty database."""
        db = convert_file(write_export({"folders": [{"id": "a", "name": "A"}]}))
        assert db.root_group.entries == []
        assert db.root_group.subgroups == []

    def test_encrypted_export(self, write_export: WriteExport) -> None:
        """Test that account-encrypted exports are refused."""
        path = write_export({"encrypted": True, "folders": [], "items": []})
        with pytest.raises(VaultFormatError, match="Encrypted"):
            convert_file(path)

    @pytest.mark.parametrize(
        "totp", ["\u00e9", "s\u00e9\u00e7ret", "otpauth://[totp/x?secret=JBSWY3DP"]
    )
    def test_unusable_totp_keeps_whole_vault(self, write_export: WriteExport, totp: str) -> None:
        """Test that one item with an unusable TOTP doesn't abort the import."""
        path = write_export(
            {"folders": [], "items": [{"name": "ok"}, {"name": "bad", "login": {"totp": totp}}]}
        )
        db = convert_file(path)

        assert [e.title for e in db.iter_entries()] == ["ok", "bad"]
        assert db.find_entries(title="bad")[0].otp is None

    def test_errors_share_base_class(self, tmp_path: Path) -> None:
        """Test that all reported failures are ConversionErrors."""
        with pytest.raises(ConversionError):
            convert_file(tmp_path / "nope.json")


class TestBitwardenReader:
    """Tests for the message-reporting entry point."""

    def test_success(self, write_export: WriteExport, export_document: dict[str, Any]) -> None:
        """Test that a successful conversion has no error."""
        reader = BitwardenReader()
        db = reader.convert(write_export(export_document))

        assert db is not None
        assert not reader.has_error()
        assert reader.error_string() == ""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that failure yields a message and no database."""
        reader = BitwardenReader()
        db = reader.convert(tmp_path / "nope.json")

        assert db is None
        assert reader.has_error()
        assert reader.error_string() == "File does not exist."

    def test_unreadable_file(self, tmp_path: Path) -> None:
        """Test that an unreadable path yields a message and no database."""
        reader = BitwardenReader()
        assert reader.convert(tmp_path) is None
        assert reader.error_string().startswith("Cannot open file: ")

    def test_error_cleared_between_calls(
        self, tmp_path: Path, write_export: WriteExport, export_document: dict[str, Any]
    ) -> None:
        """Test that a previous error doesn't leak into the next call."""
        reader = BitwardenReader()
        reader.convert(tmp_path / "nope.json")
        assert reader.has_error()

        assert reader.convert(write_export(export_document)) is not None
        assert not reader.has_error()

    def test_each_call_builds_new_database(
        self, write_export: WriteExport, export_document: dict[str, Any]
    ) -> None:
        """Test that databases aren't reused across calls."""
        reader = BitwardenReader()
        path = write_export(export_document)
        first = reader.convert(path)
        second = reader.convert(path)

        assert first is not None and second is not None
        assert first is not second
        assert len(list(second.iter_entries())) == 3
