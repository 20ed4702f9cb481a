"""
Little-endian byte primitives for DBF headers.
All multi-byte integers in a DBF file are stored least significant byte first.
"""

import struct
from typing import BinaryIO

from dbf_constants import DBF_MAX_U16, DBF_MAX_U32
from dbf_errors import DBFTruncatedError


def read_exact(source: BinaryIO, size: int, what: str = 'data') -> bytes:
    """
    Read exactly size bytes from a binary stream.

    Args:
        source: Readable binary stream
        size: Number of bytes required
        what: Description used in the error message

    Returns:
        The bytes read

    Raises:
        DBFTruncatedError: if the stream ends early
    """
    buf = source.read(size)
    if buf is None or len(buf) < size:
        raise DBFTruncatedError(size, len(buf) if buf else 0, what)
    return buf


def read_u8(source: BinaryIO, what: str = 'byte') -> int:
    """Read a single unsigned byte."""
    return read_exact(source, 1, what)[0]


def read_le_u16(source: BinaryIO, what: str = 'word') -> int:
    """Read a 16-bit little-endian unsigned integer."""
    return struct.unpack("<H", read_exact(source, 2, what))[0]


def read_le_u32(source: BinaryIO, what: str = 'long') -> int:
    """Read a 32-bit little-endian unsigned integer."""
    return struct.unpack("<L", read_exact(source, 4, what))[0]


def _check_range(value: int, limit: int, what: str) -> None:
    if value < 0 or value > limit:
        raise ValueError(f"{what} out of range 0..{limit}: {value}")


def write_u8(sink: BinaryIO, value: int) -> None:
    """Write a single unsigned byte."""
    _check_range(value, 0xFF, "Byte value")
    sink.write(bytes([value]))


def write_le_u16(sink: BinaryIO, value: int) -> None:
    """Write a 16-bit little-endian unsigned integer."""
    _check_range(value, DBF_MAX_U16, "16-bit value")
    sink.write(struct.pack("<H", value))


def write_le_u32(sink: BinaryIO, value: int) -> None:
    """Write a 32-bit little-endian unsigned integer."""
    _check_range(value, DBF_MAX_U32, "32-bit value")
    sink.write(struct.pack("<L", value))


def to_little_endian_u16(value: int) -> int:
    """
    Swap the byte order of a 16-bit value.

    Stages a value already held in big-endian order for a raw write;
    applying it twice returns the original value.
    """
    _check_range(value, DBF_MAX_U16, "16-bit value")
    return struct.unpack("<H", struct.pack(">H", value))[0]


def to_little_endian_u32(value: int) -> int:
    """Swap the byte order of a 32-bit value."""
    _check_range(value, DBF_MAX_U32, "32-bit value")
    return struct.unpack("<L", struct.pack(">L", value))[0]


def fixed_bytes(value: bytes, size: int) -> bytes:
    """Check that a preserved raw area has its exact on-disk size."""
    if len(value) != size:
        raise ValueError(f"Reserved area must be {size} bytes, got {len(value)}")
    return bytes(value)
