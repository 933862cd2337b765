"""Delimited text tokenizer with quoted-field support.

The grammar is intentionally narrow:
- The quote character toggles an "inside quotes" flag and is never part of a value
- The delimiter splits fields only outside quotes
- Fields are whitespace-trimmed
- Records never span lines

Doubled quotes ("") are NOT an escape: they toggle the flag twice and vanish.
This is not an RFC 4180 parser.
"""

import math
from dataclasses import dataclass

from eqtl_network.parsing.errors import FieldConversionError, RecordParseError


@dataclass(frozen=True)
class Record:
    """One parsed data line.

    Attributes:
        row_index: 1-based line number in the source text
        fields: Trimmed field values in column order
    """
    row_index: int
    fields: tuple[str, ...]

    def __len__(self) -> int:
        return len(self.fields)

    def __getitem__(self, position: int) -> str:
        return self.fields[position]


def split_line(line: str, delimiter: str = ",", quote: str = '"') -> list[str]:
    """Split a single line into trimmed fields, honoring quoted sections.

    Args:
        line: Text of one line (no trailing newline)
        delimiter: Field separator character
        quote: Quote character

    Returns:
        List of field strings with quotes removed and whitespace trimmed
    """
    fields: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == quote:
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    fields.append("".join(current).strip())
    return fields


def parse_records(
    text: str,
    delimiter: str = ",",
    quote: str = '"',
    skip_header: bool = True,
    expected_fields: int | None = None,
) -> list[Record]:
    """Tokenize a delimited document into ordered records.

    The first non-blank line is treated as the header and skipped when
    skip_header is set. Whitespace-only lines are ignored.

    Args:
        text: Full document text
        delimiter: Field separator character
        quote: Quote character
        skip_header: Whether to drop the first non-blank line
        expected_fields: If set, every data line must have exactly this many fields

    Returns:
        Records in source order

    Raises:
        RecordParseError: If a line's field count differs from expected_fields
    """
    records: list[Record] = []
    header_pending = skip_header

    for line_number, line in enumerate(text.split("\n"), start=1):
        if not line.strip():
            continue
        if header_pending:
            header_pending = False
            continue

        fields = split_line(line.rstrip("\r"), delimiter=delimiter, quote=quote)
        if expected_fields is not None and len(fields) != expected_fields:
            raise RecordParseError(
                row_index=line_number,
                expected=expected_fields,
                actual=len(fields),
            )
        records.append(Record(row_index=line_number, fields=tuple(fields)))

    return records


# Column converters shared by the statistics and relation schemas

def to_int(record: Record, position: int, column: str) -> int:
    value = record[position]
    try:
        return int(value)
    except ValueError:
        raise FieldConversionError(record.row_index, column, value, "integer") from None


def to_float(record: Record, position: int, column: str) -> float:
    value = record[position]
    try:
        result = float(value)
    except ValueError:
        raise FieldConversionError(record.row_index, column, value, "number") from None
    if not math.isfinite(result):
        raise FieldConversionError(record.row_index, column, value, "finite number")
    return result


def to_identifier(record: Record, position: int, column: str) -> str:
    value = record[position]
    if not value:
        raise FieldConversionError(record.row_index, column, value, "non-empty identifier")
    return value
