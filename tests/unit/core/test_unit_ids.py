# tests/unit/core/test_unit_ids.py — v1
"""Tests for core/ids.py — ObjectId <-> string normalization."""

from __future__ import annotations

from bson import ObjectId

from doccache.core.ids import id_to_string, is_valid_object_id_string, string_to_id

HEX = "5cf82e14a220a607eb64a7d4"


class TestIdToString:
    def test_object_id_to_hex(self):
        assert id_to_string(ObjectId(HEX)) == HEX

    def test_string_unchanged(self):
        assert id_to_string("s2QBCnv6fXv5YbjAP") == "s2QBCnv6fXv5YbjAP"

    def test_other_scalars_stringified(self):
        assert id_to_string(42) == "42"


class TestIsValidObjectIdString:
    def test_canonical_hex(self):
        assert is_valid_object_id_string(HEX) is True

    def test_twelve_char_string_rejected(self):
        assert is_valid_object_id_string("toptoptoptop") is False

    def test_uppercase_hex_fails_round_trip(self):
        upper = HEX.upper()
        assert ObjectId.is_valid(upper) is True
        assert is_valid_object_id_string(upper) is False

    def test_non_string(self):
        assert is_valid_object_id_string(ObjectId(HEX)) is False
        assert is_valid_object_id_string(None) is False


class TestStringToId:
    def test_valid_hex_becomes_object_id(self):
        result = string_to_id(HEX)
        assert isinstance(result, ObjectId)
        assert result == ObjectId(HEX)

    def test_object_id_returned_as_is(self):
        oid = ObjectId(HEX)
        assert string_to_id(oid) is oid

    def test_malformed_passes_through(self):
        assert string_to_id("not-an-id") == "not-an-id"
        assert string_to_id(HEX.upper()) == HEX.upper()

    def test_non_string_passes_through(self):
        assert string_to_id(7) == 7
