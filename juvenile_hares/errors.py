"""
Errors raised by the report pipeline.
"""


class HareReportError(Exception):
    """Base class for report pipeline errors."""


class DataFormatError(HareReportError, ValueError):
    """Input table is missing required columns or cannot be read as a table."""

    def __init__(self, message, missing_columns=()):
        super().__init__(message)
        self.missing_columns = tuple(missing_columns)


class ParseError(HareReportError, ValueError):
    """A date or numeric field in one row could not be parsed."""

    def __init__(self, row, column, value):
        super().__init__(f"Row {row}: cannot parse {column}={value!r}")
        self.row = row
        self.column = column
        self.value = value


class InsufficientDataError(HareReportError, ValueError):
    """A statistical routine does not have enough observations to run."""

    def __init__(self, message, group=None, n=None):
        super().__init__(message)
        self.group = group
        self.n = n
