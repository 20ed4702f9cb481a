"""
Encoding and decoding of single field values.

A record stores every value as text in a fixed-width slot. These
functions convert between Python values and that slot for each data type:

    CHARACTER       str, left aligned, space padded
    NUMERIC         Decimal, right aligned
    FLOATING_POINT  float, right aligned
    LOGICAL         bool ('T' / 'F', '?' for unknown)
    DATE            datetime.date as YYYYMMDD
    MEMO            int block number in the memo file
"""

import datetime
import logging
from decimal import Decimal, InvalidOperation
from typing import Any

from dbf_constants import DBF_DEFAULT_CHARSET
from dbf_errors import DBFDecodeError, DBFTruncatedError
from dbf_field import DBFField
from dbf_text import (
    text_padding, double_formatting, remove_spaces, contains, to_boolean
)
from dbf_types import DBFDataType

logger = logging.getLogger(__name__)


def _blank(field: DBFField) -> bytes:
    return b' ' * field.length


def encode_dbf_value(field: DBFField, value: Any, charset: str = DBF_DEFAULT_CHARSET) -> bytes:
    """
    Encode a value into the record slot of a field.

    Args:
        field: The field descriptor
        value: Python value for the field, or None
        charset: Codec for text

    Returns:
        Exactly field.length bytes

    Raises:
        TypeError: if the value does not suit the field type
        DBFFieldOverflowError: if a number does not fit the field
    """
    data_type = field.data_type

    if data_type == DBFDataType.CHARACTER:
        if value is None:
            return _blank(field)
        if not isinstance(value, str):
            raise TypeError(f"Field {field.name} expects str, got {type(value).__name__}")
        return text_padding(value, charset, field.length)

    if data_type in (DBFDataType.NUMERIC, DBFDataType.FLOATING_POINT):
        if value is None:
            return _blank(field)
        return double_formatting(value, charset, field.length, field.decimal_count)

    if data_type == DBFDataType.LOGICAL:
        if value is None:
            text = '?'
        elif isinstance(value, bool):
            text = 'T' if value else 'F'
        else:
            raise TypeError(f"Field {field.name} expects bool, got {type(value).__name__}")
        return text_padding(text, charset, field.length)

    if data_type == DBFDataType.DATE:
        if value is None:
            return _blank(field)
        if not isinstance(value, datetime.date):
            raise TypeError(f"Field {field.name} expects date, got {type(value).__name__}")
        text = f"{value.year:04d}{value.month:02d}{value.day:02d}"
        return text_padding(text, charset, field.length)

    if data_type == DBFDataType.MEMO:
        if value is None:
            return _blank(field)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise TypeError(f"Field {field.name} expects a memo block number, got {value!r}")
        return double_formatting(value, charset, field.length, 0)

    # UNKNOWN fields carry raw bytes
    if isinstance(value, (bytes, bytearray)):
        if len(value) > field.length:
            logger.debug("Truncated %d raw bytes to %d for field %s", len(value), field.length, field.name)
        return bytes(value[:field.length]).ljust(field.length, b' ')
    if value is None:
        return _blank(field)
    raise TypeError(f"Field {field.name} has unknown type and expects bytes")


def decode_dbf_value(field: DBFField, raw: bytes, charset: str = DBF_DEFAULT_CHARSET) -> Any:
    """
    Decode the record slot of a field.

    Args:
        field: The field descriptor
        raw: The field's bytes from the record
        charset: Codec for text

    Returns:
        The Python value, or None for blank / unknown values

    Raises:
        DBFTruncatedError: if raw is not exactly field.length bytes
        DBFDecodeError: if a number or date is malformed
    """
    if len(raw) != field.length:
        raise DBFTruncatedError(field.length, len(raw), f"field {field.name}")

    data_type = field.data_type

    if data_type == DBFDataType.CHARACTER:
        return raw.decode(charset, errors='replace').rstrip(' \x00')

    if data_type in (DBFDataType.NUMERIC, DBFDataType.FLOATING_POINT):
        cleaned = remove_spaces(raw)
        if not cleaned or contains(cleaned, ord('?')):
            return None
        text = cleaned.decode('ascii', errors='replace')
        try:
            if data_type == DBFDataType.NUMERIC:
                return Decimal(text)
            return float(text)
        except (InvalidOperation, ValueError):
            raise DBFDecodeError(f"Invalid number in field {field.name}: {text!r}")

    if data_type == DBFDataType.LOGICAL:
        return to_boolean(raw[0]) if raw else None

    if data_type == DBFDataType.DATE:
        text = raw.decode('ascii', errors='replace').strip()
        if not text or text.strip('0') == '':
            return None
        if len(text) != 8 or not text.isdigit():
            raise DBFDecodeError(f"Invalid date in field {field.name}: {text!r}")
        try:
            return datetime.datetime.strptime(text, '%Y%m%d').date()
        except ValueError:
            raise DBFDecodeError(f"Invalid date in field {field.name}: {text!r}")

    if data_type == DBFDataType.MEMO:
        cleaned = remove_spaces(raw).strip(b'\x00')
        if not cleaned:
            return None
        try:
            return int(cleaned.decode('ascii'))
        except (UnicodeDecodeError, ValueError):
            raise DBFDecodeError(f"Invalid memo block in field {field.name}: {cleaned!r}")

    return bytes(raw)
