"""
Exceptions raised by the DBF header codec.
"""


class DBFError(Exception):
    """Base class for all DBF codec errors."""


class DBFDecodeError(DBFError, ValueError):
    """Input bytes do not form a valid DBF structure."""


class DBFTruncatedError(DBFDecodeError):
    """The source ended before a fixed-size item was complete."""

    def __init__(self, expected: int, actual: int, what: str = 'data'):
        self.expected = expected
        self.actual = actual
        self.what = what
        super().__init__(f"Truncated {what}: expected {expected} bytes, got {actual}")


class DBFUnknownDataTypeError(DBFDecodeError):
    """A field descriptor carries a type code outside the known set."""

    def __init__(self, code: int):
        self.code = code
        message = f"Unknown data type: {code} (0x{code:02X})"
        if 0x20 <= code < 0x7F:
            message += f" '{chr(code)}'"
        super().__init__(message)


class DBFFieldOverflowError(DBFError, ValueError):
    """A formatted value does not fit in its fixed-width field."""

    def __init__(self, text: str, field_length: int):
        self.text = text
        self.field_length = field_length
        super().__init__(f"Value '{text}' does not fit in a field of {field_length} bytes")
