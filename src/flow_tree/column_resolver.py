"""
Column name resolution for heterogeneous transaction sheets.

Input files come from many sources and name the same column differently
("Account No.", "account_no", "ACCOUNT-NO"). Each semantic field has an
ordered alias list; a value is resolved by normalizing both the row's column
names and the aliases and taking the first alias that carries a value.

The alias table is plain data (`FIELD_ALIASES`), so new spellings can be
added without touching the lookup code.

A cell counts as absent when it is missing, None, NaN, or a string that is
empty after stripping whitespace. A whitespace-only cell in a higher-priority
column therefore falls through to the next alias.
"""

from __future__ import annotations

import math
import re
from typing import Any, Dict, Iterable, Mapping, Sequence, Tuple

from .models import Row, RowValue

_STRIP_PATTERN = re.compile(r"[\s._-]")

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "account_no": (
        "Account No./ (Wallet /PG/PA) Id",
        "Account No",
        "AccountNo",
        "Account Number",
        "acc_no",
        "Acknowledgement N",
        "A/C No",
        "AC No",
    ),
    "layer": ("Layer", "Level"),
    "s_no": ("S.No", "SNo", "Serial No", "S No", "SerialNumber"),
    "acknowledgement_no": (
        "Acknowledgement N",
        "Acknowledgement",
        "AcknowledgementN",
        "Acknowledgement No",
    ),
    "ifsc_code": ("IFSC Code", "IFSCCode", "IFSC", "Bank IFSC", "IFSC_Code"),
    "state": ("State",),
    "district": ("District",),
    "police_station": ("Police Station", "PS Name", "PoliceStation"),
    "designation": ("Designation",),
    "mobile_number": ("Mobile Number", "MobileNumber", "Mobile", "Phone"),
    "email": ("Email", "E-mail", "EmailID"),
    "parent_account_no": (
        "parent_acc_no",
        "ParentAccountNo",
        "Parent Account No",
        "Parent",
        "Sender Account",
        "Source Account",
        "Debit Account",
        "Remitter Account",
        "Sender",
        "Payer",
    ),
}

# Fields copied into every node's attribute bag, in output order.
ATTRIBUTE_FIELDS: Tuple[str, ...] = (
    "s_no",
    "acknowledgement_no",
    "ifsc_code",
    "state",
    "district",
    "police_station",
    "designation",
    "mobile_number",
    "email",
)


def normalize_key(key: Any) -> str:
    """
    Normalize a column name or alias for comparison.

    Lowercases and removes whitespace, periods, underscores and hyphens.

    Example:
        >>> normalize_key("Account No.")
        'accountno'
        >>> normalize_key("ACCOUNT-NO") == normalize_key("account_no")
        True
    """
    return _STRIP_PATTERN.sub("", str(key).lower())


def normalize_row(row: Row) -> Dict[str, RowValue]:
    """
    Re-key a row by normalized column name.

    When two columns normalize to the same key, the later column wins.
    """
    return {normalize_key(key): value for key, value in row.items()}


def is_absent(value: Any) -> bool:
    """
    Return True for values that count as "no value".

    Absent means None, an empty or whitespace-only string, or a float NaN
    (spreadsheet readers emit NaN for blank numeric cells).
    """
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, float):
        return math.isnan(value)
    return False


def lookup(normalized_row: Mapping[str, RowValue], aliases: Iterable[str]) -> RowValue:
    """
    Return the first non-absent value among `aliases`, or None.

    Args:
        normalized_row: Row produced by `normalize_row`.
        aliases: Candidate column names in priority order.

    Returns:
        The raw cell value (not converted), or None when no alias matches.
    """
    for alias in aliases:
        value = normalized_row.get(normalize_key(alias))
        if not is_absent(value):
            return value
    return None


def as_text(value: RowValue) -> str:
    """
    Canonical string form of an identifier cell.

    Spreadsheet readers often hand account numbers over as floats, so
    integral floats drop their trailing ".0".

    Example:
        >>> as_text(12345.0)
        '12345'
        >>> as_text("  ACC-9 ")
        'ACC-9'
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def coerce_layer(value: RowValue) -> int:
    """
    Coerce a layer cell to a non-negative integer.

    Absent, unparsable, non-finite, boolean and negative values all map to 0.
    Numeric strings and floats are truncated toward zero ("2.0" -> 2).
    """
    if is_absent(value) or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        number: float = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return 0
    if not math.isfinite(number) or number < 0:
        return 0
    return int(number)


class ColumnResolver:
    """
    Data-driven resolver mapping semantic fields to row values.

    Extra aliases are appended after the defaults for the same field, so the
    built-in priority order is kept. Unknown field names may be introduced
    through `aliases` as well.

    Example:
        >>> resolver = ColumnResolver({"account_no": ("Beneficiary Acct",)})
        >>> resolver.resolve({"Beneficiary Acct": "X1"}, "account_no")
        'X1'
    """

    def __init__(self, aliases: Mapping[str, Sequence[str]] | None = None) -> None:
        table: Dict[str, Tuple[str, ...]] = dict(FIELD_ALIASES)
        for field_name, extra in (aliases or {}).items():
            table[field_name] = table.get(field_name, ()) + tuple(extra)
        self._aliases = table

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(self._aliases)

    def aliases_for(self, field_name: str) -> Tuple[str, ...]:
        """
        Return the alias list for a field.

        Raises:
            KeyError: If the field is not known to this resolver.
        """
        try:
            return self._aliases[field_name]
        except KeyError:
            raise KeyError(f"Unknown field: {field_name!r}") from None

    def resolve(self, row: Row, field_name: str) -> RowValue:
        """Resolve `field_name` from a raw row."""
        return self.resolve_normalized(normalize_row(row), field_name)

    def resolve_normalized(
        self, normalized_row: Mapping[str, RowValue], field_name: str
    ) -> RowValue:
        """Resolve `field_name` from a row already passed through `normalize_row`."""
        return lookup(normalized_row, self.aliases_for(field_name))


DEFAULT_RESOLVER = ColumnResolver()
