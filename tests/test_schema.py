"""Tests for the lenient Bitwarden export models."""

from datetime import UTC, datetime

import pytest

from bwimport.parsing import CustomFieldType, RawIdentity, RawItem, RawVault
from bwimport.parsing.schema import EPOCH, from_epoch


class TestRawItemDefaults:
    """Tests that missing or malformed item fields get defaults."""

    def test_empty_item(self) -> None:
        """Test that an empty object validates."""
        item = RawItem.model_validate({})
        assert item.name == ""
        assert item.notes == ""
        assert item.folder_id == ""
        assert item.favorite is False
        assert item.login is None
        assert item.identity is None
        assert item.card is None
        assert item.custom_fields == []
        assert item.created_time == EPOCH
        assert item.modified_time == EPOCH

    def test_nulls(self) -> None:
        """Test that JSON nulls become defaults."""
        item = RawItem.model_validate(
            {"name": None, "notes": None, "folderId": None, "fields": None, "login": None}
        )
        assert item.name == ""
        assert item.notes == ""
        assert item.folder_id == ""
        assert item.custom_fields == []
        assert item.login is None

    def test_wrong_types(self) -> None:
        """Test that unexpected types are coerced instead of rejected."""
        item = RawItem.model_validate(
            {
                "name": 42,
                "notes": ["a"],
                "favorite": "false",
                "login": "not an object",
                "identity": [],
                "fields": "nope",
                "createdAt": "not a number",
            }
        )
        assert item.name == "42"
        assert item.notes == ""
        assert item.favorite is False
        assert item.login is None
        assert item.identity is None
        assert item.custom_fields == []
        assert item.created_time == from_epoch(0)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(True, True), (1, True), (0, False), ("true", True), ("0", False), ("", False), (None, False)],
    )
    def test_favorite_coercion(self, raw: object, expected: bool) -> None:
        """Test truthiness rules for the favorite flag."""
        assert RawItem.model_validate({"favorite": raw}).favorite is expected

    def test_field_list_elements(self) -> None:
        """Test that non-object field entries become empty fields."""
        item = RawItem.model_validate(
            {"fields": [None, {"name": "pin", "value": 1234, "type": "1"}, "x"]}
        )
        assert len(item.custom_fields) == 3
        assert item.custom_fields[0].name == ""
        assert item.custom_fields[0].type == CustomFieldType.TEXT
        assert item.custom_fields[1].value == "1234"
        assert item.custom_fields[1].is_hidden
        assert item.custom_fields[2].value == ""

    def test_boolean_field_value(self) -> None:
        """Test that boolean values are rendered as text."""
        item = RawItem.model_validate({"fields": [{"name": "flag", "value": True, "type": 2}]})
        assert item.custom_fields[0].value == "true"
        assert not item.custom_fields[0].is_hidden

    def test_login_uris(self) -> None:
        """Test that URI entries default their uri."""
        item = RawItem.model_validate(
            {"login": {"uris": [{"uri": "https://a"}, {"uri": None}, 5]}}
        )
        assert item.login is not None
        assert [u.uri for u in item.login.uris] == ["https://a", "", ""]
        assert item.login.username == ""
        assert item.login.totp == ""


class TestTimestamps:
    """Tests for item timestamps."""

    def test_epoch_seconds(self) -> None:
        """Test createdAt/updatedAt as seconds since the epoch."""
        item = RawItem.model_validate({"createdAt": 1600000000, "updatedAt": "1650000000"})
        assert item.created_time == datetime(2020, 9, 13, 12, 26, 40, tzinfo=UTC)
        assert item.modified_time == datetime.fromtimestamp(1650000000, tz=UTC)

    def test_iso_dates(self) -> None:
        """Test the ISO-8601 fields written by current Bitwarden clients."""
        item = RawItem.model_validate(
            {
                "creationDate": "2021-03-04T05:06:07.890Z",
                "revisionDate": "2022-01-02T03:04:05Z",
            }
        )
        assert item.created_time == datetime(2021, 3, 4, 5, 6, 7, 890000, tzinfo=UTC)
        assert item.modified_time == datetime(2022, 1, 2, 3, 4, 5, tzinfo=UTC)

    def test_epoch_fields_take_precedence(self) -> None:
        """Test that createdAt wins over creationDate."""
        item = RawItem.model_validate(
            {"createdAt": 0, "creationDate": "2021-03-04T05:06:07Z"}
        )
        assert item.created_time == EPOCH

    def test_unparseable_dates(self) -> None:
        """Test that garbage dates fall back to the epoch."""
        item = RawItem.model_validate({"creationDate": "yesterday", "revisionDate": 7})
        assert item.created_time == EPOCH
        assert item.modified_time == EPOCH

    def test_out_of_range_epoch(self) -> None:
        """Test that huge values don't raise."""
        assert from_epoch(10**20) == EPOCH


class TestRawIdentity:
    """Tests for identity address composition."""

    def test_full_address(self) -> None:
        """Test the three-line address layout."""
        identity = RawIdentity.model_validate(
            {
                "address1": "1 Main St",
                "city": "Springfield",
                "state": "IL",
                "postalCode": "62701",
                "country": "US",
            }
        )
        assert identity.address == "1 Main St\nSpringfield, IL 62701\nUS"

    def test_empty_address(self) -> None:
        """Test that missing parts leave empty segments."""
        assert RawIdentity.model_validate({}).address == "\n,  \n"

    def test_legacy_postal_code_key(self) -> None:
        """Test that a lowercase postalcode key is still read."""
        identity = RawIdentity.model_validate({"postalcode": "12345"})
        assert identity.postal == "12345"

    def test_documented_key_wins(self) -> None:
        """Test that postalCode takes precedence over postalcode."""
        identity = RawIdentity.model_validate({"postalCode": "1", "postalcode": "2"})
        assert identity.postal == "1"


class TestRawVault:
    """Tests for the top-level document."""

    def test_missing_lists(self) -> None:
        """Test that missing keys are distinguishable from empty lists."""
        vault = RawVault.from_json({"folders": []})
        assert vault.folders == []
        assert vault.items is None
        assert not vault.is_complete

    def test_null_lists_count_as_present(self) -> None:
        """Test that present-but-null lists are empty, not missing."""
        vault = RawVault.from_json({"folders": None, "items": None})
        assert vault.folders == []
        assert vault.items == []
        assert vault.is_complete

    @pytest.mark.parametrize("document", [[], "text", 3, None])
    def test_non_object_document(self, document: object) -> None:
        """Test that a non-object document is an empty vault."""
        vault = RawVault.from_json(document)
        assert vault.folders is None
        assert vault.items is None
        assert vault.encrypted is False

    def test_unknown_keys_ignored(self) -> None:
        """Test that extra keys are dropped."""
        vault = RawVault.from_json({"folders": [], "items": [], "collections": [{}]})
        assert vault.is_complete
        assert not hasattr(vault, "collections")
