"""
DBF file header: the 32-byte prologue, the field descriptors and the
terminator byte that precede the data records.

Prologue layout (multi-byte values little-endian):

    0      signature
    1-3    last update date (year - 1900, month, day)
    4-7    record count
    8-9    header length
    10-11  record length
    12-13  reserved
    14     incomplete transaction flag
    15     encryption flag
    16-19  free record thread
    20-27  reserved
    28     MDX flag
    29     language driver
    30-31  reserved
"""

import datetime
import io
import logging
from dataclasses import dataclass, field as dataclass_field
from typing import BinaryIO, List, Optional, Tuple

from dbf_bytes import (
    read_exact, read_u8, read_le_u16, read_le_u32, write_u8, write_le_u16, write_le_u32, fixed_bytes
)
from dbf_constants import (
    DBF_HEADER_PROLOGUE_SIZE, DBF_FIELD_DESCRIPTOR_SIZE, DBF_FIELD_TERMINATOR,
    DBF_DELETE_FLAG_SIZE, DBF_SIG_DBASE_III, DBF_DEFAULT_CHARSET, DBF_MAX_U16
)
from dbf_field import DBFField, read_dbf_field, write_dbf_field, dbf_field_length

logger = logging.getLogger(__name__)


@dataclass
class DBFHeader:
    """Represents the header of a DBF file."""
    signature: int = DBF_SIG_DBASE_III  # 0x03 for dBase III
    year: int = 0  # Last update year (since 1900)
    month: int = 0  # Last update month
    day: int = 0  # Last update day
    record_count: int = 0
    header_length: int = 0  # Recomputed on write
    record_length: int = 0  # Recomputed on write
    reserved_1: bytes = bytes(2)
    incomplete_transaction: int = 0
    encryption_flag: int = 0
    free_record_thread: int = 0
    reserved_2: bytes = bytes(4)
    reserved_3: bytes = bytes(4)
    mdx_flag: int = 0
    language_driver: int = 0
    reserved_4: bytes = bytes(2)
    fields: List[DBFField] = dataclass_field(default_factory=list)


def dbf_header_metrics(fields: List[DBFField]) -> Tuple[int, int]:
    """
    Compute the derived lengths for a field list.

    Args:
        fields: Field descriptors in record order

    Returns:
        Tuple of (header_length, record_length)
    """
    header_length = DBF_HEADER_PROLOGUE_SIZE + DBF_FIELD_DESCRIPTOR_SIZE * len(fields) + 1
    record_length = DBF_DELETE_FLAG_SIZE + sum(dbf_field_length(f) for f in fields)
    return (header_length, record_length)


def dbf_field_offsets(fields: List[DBFField]) -> List[int]:
    """Offset of each field within a record; the first field starts at 1."""
    offsets = []
    offset = DBF_DELETE_FLAG_SIZE  # First byte is delete flag
    for f in fields:
        offsets.append(offset)
        offset += dbf_field_length(f)
    return offsets


def read_dbf_header(source: BinaryIO, charset: str = DBF_DEFAULT_CHARSET) -> DBFHeader:
    """
    Read a DBF header from a binary stream.

    The stream is left positioned just after the field list terminator.

    Args:
        source: Binary stream positioned at the start of the file
        charset: Codec for field names

    Returns:
        The decoded DBFHeader

    Raises:
        DBFTruncatedError: if the stream ends inside the header
        DBFUnknownDataTypeError: if a field has an unknown type code
    """
    buf = io.BytesIO(read_exact(source, DBF_HEADER_PROLOGUE_SIZE, 'header'))

    header = DBFHeader()
    header.signature = read_u8(buf)
    header.year = read_u8(buf)
    header.month = read_u8(buf)
    header.day = read_u8(buf)
    header.record_count = read_le_u32(buf)
    header.header_length = read_le_u16(buf)
    header.record_length = read_le_u16(buf)
    header.reserved_1 = read_exact(buf, 2)
    header.incomplete_transaction = read_u8(buf)
    header.encryption_flag = read_u8(buf)
    header.free_record_thread = read_le_u32(buf)
    header.reserved_2 = read_exact(buf, 4)
    header.reserved_3 = read_exact(buf, 4)
    header.mdx_flag = read_u8(buf)
    header.language_driver = read_u8(buf)
    header.reserved_4 = read_exact(buf, 2)

    # Read field descriptors until 0x0D
    fields = []
    while True:
        f = read_dbf_field(source, charset)
        if f is None:
            break
        fields.append(f)
    header.fields = fields

    logger.debug("Read DBF header: signature=0x%02X, %d records, %d fields",
                 header.signature, header.record_count, len(fields))
    return header


def write_dbf_header(sink: BinaryIO, header: DBFHeader, charset: str = DBF_DEFAULT_CHARSET,
                     today: Optional[datetime.date] = None) -> None:
    """
    Write a DBF header to a binary stream.

    The last update date is set to today (or to the date given), and the
    header and record lengths are recomputed from the field list. Values
    previously held in the header are overwritten once the bytes have been
    written; if serializing fails the header is left as it was.

    Args:
        sink: Writable binary stream
        header: The header to write; its date and lengths are updated
        charset: Codec for field names
        today: Date to stamp instead of the current date
    """
    if today is None:
        today = datetime.date.today()
    header_length, record_length = dbf_header_metrics(header.fields)
    if header_length > DBF_MAX_U16:
        raise ValueError(f"Too many fields for a DBF header: {len(header.fields)}")
    if record_length > DBF_MAX_U16:
        raise ValueError(f"Record length {record_length} exceeds {DBF_MAX_U16} bytes")

    year = today.year - 1900

    buf = io.BytesIO()
    write_u8(buf, header.signature)
    write_u8(buf, year)
    write_u8(buf, today.month)
    write_u8(buf, today.day)
    write_le_u32(buf, header.record_count)
    write_le_u16(buf, header_length)
    write_le_u16(buf, record_length)
    buf.write(fixed_bytes(header.reserved_1, 2))
    write_u8(buf, header.incomplete_transaction)
    write_u8(buf, header.encryption_flag)
    write_le_u32(buf, header.free_record_thread)
    buf.write(fixed_bytes(header.reserved_2, 4))
    buf.write(fixed_bytes(header.reserved_3, 4))
    write_u8(buf, header.mdx_flag)
    write_u8(buf, header.language_driver)
    buf.write(fixed_bytes(header.reserved_4, 2))

    for f in header.fields:
        write_dbf_field(buf, f, charset)

    # Field descriptor terminator (0x0D)
    write_u8(buf, DBF_FIELD_TERMINATOR)

    sink.write(buf.getvalue())

    header.year = year
    header.month = today.month
    header.day = today.day
    header.header_length = header_length
    header.record_length = record_length

    logger.debug("Wrote DBF header: %d fields, header_length=%d, record_length=%d",
                 len(header.fields), header_length, record_length)


def encode_dbf_header(header: DBFHeader, charset: str = DBF_DEFAULT_CHARSET,
                      today: Optional[datetime.date] = None) -> bytes:
    """Return the header bytes as write_dbf_header would write them."""
    sink = io.BytesIO()
    write_dbf_header(sink, header, charset, today)
    return sink.getvalue()


def decode_dbf_header(data: bytes, charset: str = DBF_DEFAULT_CHARSET) -> DBFHeader:
    """Decode a header from a byte string."""
    return read_dbf_header(io.BytesIO(data), charset)


def dbf_header_last_update(header: DBFHeader) -> Optional[datetime.date]:
    """
    Get the last update date of a header.

    Returns:
        The date, or None when the stored bytes are not a valid date
    """
    try:
        return datetime.date(1900 + header.year, header.month, header.day)
    except ValueError:
        return None


def dbf_header_find_field(header: DBFHeader, name: str) -> Optional[DBFField]:
    """Find a field by name, ignoring case."""
    name = name.upper()
    for f in header.fields:
        if f.name.upper() == name:
            return f
    return None
