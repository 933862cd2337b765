"""Error types for delimited source parsing and field conversion."""


class SourceFormatError(ValueError):
    """Base class for malformed source data.

    Attributes:
        row_index: 1-based line number of the failing line in the source text
        source: Name of the source being parsed (e.g. "relations"), if known
    """

    def __init__(self, message: str, row_index: int, source: str | None = None):
        self.row_index = row_index
        self.source = source
        self.reason = message
        super().__init__(self._format())

    def _format(self) -> str:
        prefix = f"{self.source} " if self.source else ""
        return f"{prefix}row {self.row_index}: {self.reason}"

    def with_source(self, source: str) -> "SourceFormatError":
        """Attach the source name and refresh the message."""
        self.source = source
        self.args = (self._format(),)
        return self


class RecordParseError(SourceFormatError):
    """A data row has the wrong number of fields."""

    def __init__(
        self,
        row_index: int,
        expected: int,
        actual: int,
        source: str | None = None,
    ):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"expected {expected} fields, found {actual}",
            row_index=row_index,
            source=source,
        )


class FieldConversionError(SourceFormatError):
    """A field could not be converted to its column type."""

    def __init__(
        self,
        row_index: int,
        column: str,
        value: str,
        expected_type: str,
        source: str | None = None,
    ):
        self.column = column
        self.value = value
        self.expected_type = expected_type
        super().__init__(
            f"column '{column}' value {value!r} is not a valid {expected_type}",
            row_index=row_index,
            source=source,
        )
