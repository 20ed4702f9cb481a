"""
DBF field data types and their one-byte codes.
"""

import logging
from enum import Enum
from typing import Dict, Union

from dbf_errors import DBFUnknownDataTypeError

logger = logging.getLogger(__name__)


class DBFDataType(Enum):
    """Field data type as stored at offset 11 of a field descriptor."""
    UNKNOWN = "UNKNOWN"
    CHARACTER = "CHARACTER"
    DATE = "DATE"
    FLOATING_POINT = "FLOATING_POINT"
    LOGICAL = "LOGICAL"
    MEMO = "MEMO"
    NUMERIC = "NUMERIC"

    @property
    def code(self) -> int:
        return DBF_TYPE_CODES[self]


DBF_TYPE_CODES: Dict[DBFDataType, int] = {
    DBFDataType.UNKNOWN: 0x00,
    DBFDataType.CHARACTER: ord('C'),
    DBFDataType.DATE: ord('D'),
    DBFDataType.FLOATING_POINT: ord('F'),
    DBFDataType.LOGICAL: ord('L'),
    DBFDataType.MEMO: ord('M'),
    DBFDataType.NUMERIC: ord('N'),
}

_TYPES_BY_CODE: Dict[int, DBFDataType] = {code: t for t, code in DBF_TYPE_CODES.items()}


def dbf_type_from_code(code: Union[int, str, bytes]) -> DBFDataType:
    """
    Look up the data type for a descriptor type byte.

    Args:
        code: The byte value, or a one-character str/bytes such as 'N'

    Returns:
        The matching DBFDataType

    Raises:
        DBFUnknownDataTypeError: if the code is not a known type
    """
    if isinstance(code, str):
        if len(code) != 1:
            raise ValueError(f"Type code must be a single character: {code!r}")
        code = ord(code)
    elif isinstance(code, (bytes, bytearray)):
        if len(code) != 1:
            raise ValueError(f"Type code must be a single byte: {code!r}")
        code = code[0]

    data_type = _TYPES_BY_CODE.get(code)
    if data_type is None:
        logger.warning("Unknown data type code %d", code)
        raise DBFUnknownDataTypeError(code)
    return data_type


def dbf_type_to_code(data_type: DBFDataType) -> int:
    """Return the descriptor byte for a data type."""
    return DBF_TYPE_CODES[data_type]
