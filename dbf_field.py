"""
DBF field descriptors.

Each column of a DBF table is described by a 32-byte record in the header:

    0-10   field name, NUL padded
    11     data type code
    12-15  reserved
    16     field length
    17     decimal count
    18-19  reserved
    20     work area id
    21-22  reserved
    23     set fields flag
    24-30  reserved
    31     index field flag
"""

import io
from dataclasses import dataclass
from typing import BinaryIO, Optional

from dbf_bytes import read_exact, read_u8, fixed_bytes
from dbf_constants import (
    DBF_FIELD_DESCRIPTOR_SIZE, DBF_FIELD_TERMINATOR, DBF_FIELD_NAME_SIZE,
    DBF_MAX_FIELD_NAME_LEN, DBF_MAX_FIELD_LENGTH, DBF_DATE_FIELD_LENGTH,
    DBF_LOGICAL_FIELD_LENGTH, DBF_MEMO_FIELD_LENGTH, DBF_DEFAULT_CHARSET, DBF_PAD_NUL
)
from dbf_text import text_padding, is_pure_ascii
from dbf_types import DBFDataType, dbf_type_from_code, dbf_type_to_code


_FIXED_LENGTHS = {
    DBFDataType.DATE: DBF_DATE_FIELD_LENGTH,
    DBFDataType.LOGICAL: DBF_LOGICAL_FIELD_LENGTH,
    DBFDataType.MEMO: DBF_MEMO_FIELD_LENGTH,
}

_DECIMAL_TYPES = (DBFDataType.NUMERIC, DBFDataType.FLOATING_POINT)


@dataclass
class DBFField:
    """Represents one field descriptor of a DBF header."""
    name: str  # Field name (max 10 chars for new fields)
    data_type: DBFDataType
    length: int  # Field length in bytes
    decimal_count: int = 0  # Numeric and floating point only
    reserved_1: bytes = bytes(4)  # 12-15
    reserved_2: bytes = bytes(2)  # 18-19
    work_area_id: int = 0  # 20
    reserved_3: bytes = bytes(2)  # 21-22
    set_fields_flag: int = 0  # 23
    reserved_4: bytes = bytes(7)  # 24-30
    index_field_flag: int = 0  # 31


def new_dbf_field(name: str, data_type: DBFDataType, length: Optional[int] = None,
                  decimal_count: int = 0) -> DBFField:
    """
    Build a field descriptor for a new table.

    Date, Logical and Memo fields have a fixed length; a length given for
    them must match it or be omitted.

    Args:
        name: Field name, 1 to 10 ASCII characters
        data_type: The field's data type
        length: Field length in bytes
        decimal_count: Digits after the decimal point (Numeric/Floating Point)

    Returns:
        The new DBFField

    Raises:
        ValueError: if any attribute is out of range
    """
    if not name or len(name) > DBF_MAX_FIELD_NAME_LEN:
        raise ValueError(f"Field name should be of length 1-{DBF_MAX_FIELD_NAME_LEN}: {name!r}")
    if not is_pure_ascii(name):
        raise ValueError(f"Field name must be ASCII: {name!r}")
    if data_type == DBFDataType.UNKNOWN:
        raise ValueError("Cannot create a field of UNKNOWN type")

    fixed = _FIXED_LENGTHS.get(data_type)
    if fixed is not None:
        if length is not None and length != fixed:
            raise ValueError(f"{data_type.name} fields are always {fixed} bytes, got {length}")
        length = fixed
    elif length is None or length < 1 or length > DBF_MAX_FIELD_LENGTH:
        raise ValueError(f"Field length should be 1-{DBF_MAX_FIELD_LENGTH}: {length}")

    if decimal_count:
        if data_type not in _DECIMAL_TYPES:
            raise ValueError(f"Decimal count is only allowed for numeric fields, not {data_type.name}")
        if decimal_count < 0 or decimal_count >= length:
            raise ValueError(f"Decimal count {decimal_count} invalid for length {length}")

    return DBFField(name=name, data_type=data_type, length=length, decimal_count=decimal_count)


def read_dbf_field(source: BinaryIO, charset: str = DBF_DEFAULT_CHARSET) -> Optional[DBFField]:
    """
    Read one field descriptor.

    Args:
        source: Binary stream positioned at a descriptor
        charset: Codec for the field name

    Returns:
        The field, or None when the field list terminator (0x0D) is read.
        Only the terminator byte is consumed in that case.
    """
    first = read_u8(source, 'field descriptor')
    if first == DBF_FIELD_TERMINATOR:
        return None

    buf = bytes([first]) + read_exact(source, DBF_FIELD_DESCRIPTOR_SIZE - 1, 'field descriptor')

    name_bytes = buf[0:DBF_FIELD_NAME_SIZE]
    end = name_bytes.find(b'\x00')
    if end >= 0:
        name_bytes = name_bytes[:end]

    return DBFField(
        name=name_bytes.decode(charset, errors='replace'),
        data_type=dbf_type_from_code(buf[11]),
        length=buf[16],
        decimal_count=buf[17],
        reserved_1=buf[12:16],
        reserved_2=buf[18:20],
        work_area_id=buf[20],
        reserved_3=buf[21:23],
        set_fields_flag=buf[23],
        reserved_4=buf[24:31],
        index_field_flag=buf[31],
    )


def write_dbf_field(sink: BinaryIO, field: DBFField, charset: str = DBF_DEFAULT_CHARSET) -> None:
    """Write one 32-byte field descriptor; reserved bytes are written back as stored."""
    buf = bytearray(DBF_FIELD_DESCRIPTOR_SIZE)
    buf[0:11] = text_padding(field.name, charset, DBF_FIELD_NAME_SIZE, pad_byte=DBF_PAD_NUL)
    buf[11] = dbf_type_to_code(field.data_type)
    buf[12:16] = fixed_bytes(field.reserved_1, 4)
    buf[16] = field.length
    buf[17] = field.decimal_count
    buf[18:20] = fixed_bytes(field.reserved_2, 2)
    buf[20] = field.work_area_id
    buf[21:23] = fixed_bytes(field.reserved_3, 2)
    buf[23] = field.set_fields_flag
    buf[24:31] = fixed_bytes(field.reserved_4, 7)
    buf[31] = field.index_field_flag
    sink.write(bytes(buf))


def encode_dbf_field(field: DBFField, charset: str = DBF_DEFAULT_CHARSET) -> bytes:
    """Return the 32-byte descriptor for a field."""
    sink = io.BytesIO()
    write_dbf_field(sink, field, charset)
    return sink.getvalue()


def dbf_field_length(field: DBFField) -> int:
    """Number of bytes the field occupies in each record."""
    return field.length
