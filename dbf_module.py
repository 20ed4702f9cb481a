"""
Codec for the header of dBase (.DBF) files.

This module gathers the entry points used by record and table layers:
header and field descriptor read/write, data type codes, fixed-width
text and number formatting, and per-type value coercion.
"""

from dbf_bytes import (
    read_exact, read_u8, read_le_u16, read_le_u32,
    write_u8, write_le_u16, write_le_u32,
    to_little_endian_u16, to_little_endian_u32
)
from dbf_constants import (
    DBF_HEADER_PROLOGUE_SIZE, DBF_FIELD_DESCRIPTOR_SIZE, DBF_FIELD_TERMINATOR,
    DBF_EOF_MARKER, DBF_SIG_DBASE_III, DBF_SIG_DBASE_III_MEMO,
    DBF_MAX_FIELD_NAME_LEN, DBF_MAX_FIELD_LENGTH, DBF_DEFAULT_CHARSET
)
from dbf_errors import (
    DBFError, DBFDecodeError, DBFTruncatedError, DBFUnknownDataTypeError, DBFFieldOverflowError
)
from dbf_field import DBFField, new_dbf_field, read_dbf_field, write_dbf_field, encode_dbf_field, dbf_field_length
from dbf_header import (
    DBFHeader, read_dbf_header, write_dbf_header, encode_dbf_header, decode_dbf_header,
    dbf_header_metrics, dbf_field_offsets, dbf_header_last_update, dbf_header_find_field
)
from dbf_text import (
    DBFAlignment, text_padding, double_formatting, format_fixed_point,
    is_pure_ascii, contains, remove_spaces, to_boolean
)
from dbf_types import DBFDataType, DBF_TYPE_CODES, dbf_type_from_code, dbf_type_to_code
from dbf_values import encode_dbf_value, decode_dbf_value


# Export functions
__all__ = [
    'DBFHeader', 'DBFField', 'DBFDataType', 'DBFAlignment', 'DBF_TYPE_CODES',
    'DBFError', 'DBFDecodeError', 'DBFTruncatedError', 'DBFUnknownDataTypeError', 'DBFFieldOverflowError',
    'DBF_HEADER_PROLOGUE_SIZE', 'DBF_FIELD_DESCRIPTOR_SIZE', 'DBF_FIELD_TERMINATOR',
    'DBF_EOF_MARKER', 'DBF_SIG_DBASE_III', 'DBF_SIG_DBASE_III_MEMO',
    'DBF_MAX_FIELD_NAME_LEN', 'DBF_MAX_FIELD_LENGTH', 'DBF_DEFAULT_CHARSET',
    'read_dbf_header', 'write_dbf_header', 'encode_dbf_header', 'decode_dbf_header',
    'dbf_header_metrics', 'dbf_field_offsets', 'dbf_header_last_update', 'dbf_header_find_field',
    'new_dbf_field', 'read_dbf_field', 'write_dbf_field', 'encode_dbf_field', 'dbf_field_length',
    'dbf_type_from_code', 'dbf_type_to_code',
    'text_padding', 'double_formatting', 'format_fixed_point',
    'is_pure_ascii', 'contains', 'remove_spaces', 'to_boolean',
    'encode_dbf_value', 'decode_dbf_value',
    'read_exact', 'read_u8', 'read_le_u16', 'read_le_u32',
    'write_u8', 'write_le_u16', 'write_le_u32',
    'to_little_endian_u16', 'to_little_endian_u32'
]
