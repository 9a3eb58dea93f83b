"""
Unit tests for column name resolution.
"""

from __future__ import annotations

import math

import pytest

from flow_tree.column_resolver import (
    FIELD_ALIASES,
    ColumnResolver,
    as_text,
    coerce_layer,
    is_absent,
    lookup,
    normalize_key,
    normalize_row,
)


class TestNormalizeKey:
    @pytest.mark.parametrize(
        "raw",
        ["Account No", "Account No.", "account_no", "ACCOUNT-NO", "  account no  ", "AccountNo"],
    )
    def test_variants_normalize_identically(self, raw: str) -> None:
        assert normalize_key(raw) == "accountno"

    def test_slash_and_parentheses_are_kept(self) -> None:
        assert normalize_key("A/C No") == "a/cno"
        assert normalize_key("Account No./ (Wallet /PG/PA) Id") == "accountno/(wallet/pg/pa)id"

    def test_non_string_keys(self) -> None:
        assert normalize_key(12) == "12"


class TestNormalizeRow:
    def test_later_column_wins_on_collision(self) -> None:
        row = {"Account No": "first", "account_no": "second"}
        assert normalize_row(row) == {"accountno": "second"}


class TestIsAbsent:
    @pytest.mark.parametrize("value", [None, "", "   ", float("nan")])
    def test_absent_values(self, value) -> None:
        assert is_absent(value) is True

    @pytest.mark.parametrize("value", [0, 0.0, False, "0", "null", "x"])
    def test_present_values(self, value) -> None:
        assert is_absent(value) is False


class TestLookup:
    def test_first_alias_in_priority_order_wins(self) -> None:
        normalized = normalize_row({"AC No": "low", "Account Number": "high"})
        assert lookup(normalized, FIELD_ALIASES["account_no"]) == "high"

    def test_skips_empty_values(self) -> None:
        normalized = normalize_row({"Account Number": "", "A/C No": "fallback"})
        assert lookup(normalized, FIELD_ALIASES["account_no"]) == "fallback"

    def test_skips_whitespace_only_values(self) -> None:
        normalized = normalize_row({"Account Number": "   ", "A/C No": "fallback"})
        assert lookup(normalized, FIELD_ALIASES["account_no"]) == "fallback"

    def test_returns_none_when_nothing_matches(self) -> None:
        assert lookup(normalize_row({"Amount": 100}), FIELD_ALIASES["account_no"]) is None

    def test_returns_raw_value_unconverted(self) -> None:
        assert lookup(normalize_row({"Layer": "2"}), ("Layer",)) == "2"


class TestAsText:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("ACC1", "ACC1"),
            ("  ACC1 ", "ACC1"),
            (12345, "12345"),
            (12345.0, "12345"),
            (1.5, "1.5"),
            (None, ""),
        ],
    )
    def test_as_text(self, value, expected: str) -> None:
        assert as_text(value) == expected


class TestCoerceLayer:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, 0),
            ("", 0),
            (0, 0),
            (3, 3),
            ("2", 2),
            (" 3 ", 3),
            ("2.0", 2),
            (2.9, 2),
            ("abc", 0),
            (-1, 0),
            ("-4", 0),
            (True, 0),
            (float("inf"), 0),
            (math.nan, 0),
        ],
    )
    def test_coerce_layer(self, value, expected: int) -> None:
        assert coerce_layer(value) == expected


class TestColumnResolver:
    @pytest.mark.parametrize("column", ["Account No", "account_no", "A/C No", "ACCOUNT-NO."])
    def test_account_variants_resolve_identically(self, column: str) -> None:
        resolver = ColumnResolver()
        assert resolver.resolve({column: "9876"}, "account_no") == "9876"

    def test_layer_falls_back_to_level(self) -> None:
        assert ColumnResolver().resolve({"Level": 2}, "layer") == 2

    def test_layer_prefers_layer_over_level(self) -> None:
        assert ColumnResolver().resolve({"Level": 2, "LAYER": 1}, "layer") == 1

    def test_parent_aliases(self) -> None:
        resolver = ColumnResolver()
        assert resolver.resolve({"Remitter Account": "R1"}, "parent_account_no") == "R1"
        assert resolver.resolve({"Payer": "P1", "Sender": "S1"}, "parent_account_no") == "S1"

    def test_extra_aliases_are_appended_after_defaults(self) -> None:
        resolver = ColumnResolver({"account_no": ("Beneficiary Acct",)})
        assert resolver.aliases_for("account_no")[-1] == "Beneficiary Acct"
        assert resolver.resolve({"Beneficiary Acct": "X1"}, "account_no") == "X1"
        assert resolver.resolve({"Beneficiary Acct": "X1", "Account No": "Y"}, "account_no") == "Y"

    def test_new_field_via_aliases(self) -> None:
        resolver = ColumnResolver({"amount": ("Amount", "Txn Amount")})
        assert "amount" in resolver.fields
        assert resolver.resolve({"txn_amount": 500}, "amount") == 500

    def test_defaults_not_mutated_by_extension(self) -> None:
        ColumnResolver({"account_no": ("Custom",)})
        assert "Custom" not in FIELD_ALIASES["account_no"]

    def test_unknown_field_raises_key_error(self) -> None:
        with pytest.raises(KeyError, match="Unknown field"):
            ColumnResolver().resolve({"a": 1}, "no_such_field")
