"""
Fixed-width text and number formatting for DBF fields.

Every value stored in a DBF record occupies an exact number of bytes.
These helpers turn text and numbers into byte strings of that width.
"""

import logging
from decimal import Decimal, Context, ROUND_HALF_EVEN
from enum import Enum
from typing import Optional, Union

from dbf_constants import DBF_PAD_SPACE
from dbf_errors import DBFFieldOverflowError

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]


class DBFAlignment(Enum):
    """Where the text sits inside a padded field."""
    LEFT = "LEFT"  # pad on the right
    RIGHT = "RIGHT"  # pad on the left


def text_padding(text: str, charset: str, length: int,
                 alignment: DBFAlignment = DBFAlignment.LEFT,
                 pad_byte: int = DBF_PAD_SPACE) -> bytes:
    """
    Encode text into exactly length bytes.

    If the encoded text is too long, the last character of the string is
    dropped and the text is encoded again, until it fits. Truncation works
    on characters so a multi-byte sequence is never cut in half.

    Args:
        text: Text to encode
        charset: Python codec name
        length: Width of the result in bytes
        alignment: LEFT pads after the text, RIGHT pads before it
        pad_byte: Filler byte value

    Returns:
        Byte string of exactly length bytes
    """
    if length < 0:
        raise ValueError(f"Invalid field length: {length}")

    original = text
    encoded = text.encode(charset, errors='replace')
    while len(encoded) > length:
        text = text[:-1]
        encoded = text.encode(charset, errors='replace')
        if not text and len(encoded) > length:
            raise ValueError(f"Cannot fit any text into {length} bytes with {charset}")

    if text != original:
        logger.debug("Truncated %r to %r to fit %d bytes", original, text, length)

    filler = bytes([pad_byte]) * (length - len(encoded))
    if alignment == DBFAlignment.RIGHT:
        return filler + encoded
    return encoded + filler


def _to_decimal(number: Number) -> Decimal:
    if isinstance(number, bool):
        raise TypeError("Boolean is not a numeric field value")
    if isinstance(number, Decimal):
        return number
    if isinstance(number, int):
        return Decimal(number)
    if isinstance(number, float):
        # exact binary value, rounded as stored
        return Decimal(number)
    raise TypeError(f"Unsupported numeric type: {type(number).__name__}")


def format_fixed_point(number: Number, decimal_count: int) -> str:
    """
    Format a number with a fixed count of decimal places.

    Uses half-even rounding on the exact value, '.' as separator and no
    grouping. With decimal places, a zero integer part is left out
    (0.5 -> '.50'). A negative value that rounds to zero is written without
    its sign (-0.001 -> '.00'), unlike DecimalFormat, which keeps it ('-.00').
    """
    if decimal_count < 0:
        raise ValueError(f"Invalid decimal count: {decimal_count}")

    value = _to_decimal(number)
    if not value.is_finite():
        raise ValueError(f"Cannot format non-finite number: {number}")

    digits = max(value.adjusted(), 0) + decimal_count + 2
    context = Context(prec=digits, rounding=ROUND_HALF_EVEN)
    rounded = value.quantize(Decimal(1).scaleb(-decimal_count), context=context)
    if rounded.is_zero():
        rounded = rounded.copy_abs()

    text = f"{rounded:f}"
    if decimal_count > 0:
        if text.startswith("0."):
            text = text[1:]
        elif text.startswith("-0."):
            text = "-" + text[2:]
    return text


def double_formatting(number: Number, charset: str, field_length: int, decimal_count: int) -> bytes:
    """
    Format a number for a Numeric or Floating Point field.

    Args:
        number: Value to store
        charset: Python codec name
        field_length: Field width in bytes
        decimal_count: Digits after the decimal point

    Returns:
        field_length bytes, right aligned and space padded

    Raises:
        DBFFieldOverflowError: if the number needs more than field_length bytes
    """
    whole_part = field_length - (decimal_count + 1 if decimal_count > 0 else 0)
    if whole_part < 0:
        raise ValueError(f"Field length {field_length} too small for {decimal_count} decimals")

    text = format_fixed_point(number, decimal_count)
    if len(text.encode(charset, errors='replace')) > field_length:
        raise DBFFieldOverflowError(text, field_length)

    return text_padding(text, charset, field_length, DBFAlignment.RIGHT)


def is_pure_ascii(text: Optional[str], charset: str = 'ascii') -> bool:
    """Check whether text can be encoded with charset (7-bit ASCII by default)."""
    if text is None:
        return True
    try:
        text.encode(charset)
    except UnicodeEncodeError:
        return False
    return True


def contains(data: Optional[bytes], value: int) -> bool:
    """Check whether a byte string contains the given byte value."""
    if data is None:
        return False
    for byte in data:
        if byte == value:
            return True
    return False


def remove_spaces(data: bytes) -> bytes:
    """Remove every space (0x20) byte from data."""
    return bytes(b for b in data if b != DBF_PAD_SPACE)


def to_boolean(logical: int) -> Optional[bool]:
    """
    Convert a stored LOGICAL byte to a boolean.

    'T', 't', 'Y', 'y' are True; 'F', 'f', 'N', 'n' are False;
    anything else ('?', space) is None.
    """
    if logical in b'TtYy':
        return True
    if logical in b'FfNn':
        return False
    return None
