"""Delimited text parsing with quoted-field support."""

from eqtl_network.parsing.delimited import (
    Record,
    parse_records,
    split_line,
)
from eqtl_network.parsing.errors import (
    FieldConversionError,
    RecordParseError,
    SourceFormatError,
)

__all__ = [
    "Record",
    "parse_records",
    "split_line",
    "FieldConversionError",
    "RecordParseError",
    "SourceFormatError",
]
