"""
Legacy padding and formatting calls that take a character set name and an
integer alignment. They resolve the name and delegate to dbf_text.
"""

import codecs

from dbf_constants import DBF_PAD_SPACE
from dbf_text import DBFAlignment, Number, text_padding, double_formatting

ALIGN_LEFT = 10
ALIGN_RIGHT = 12


def resolve_charset(charset_name: str) -> str:
    """
    Resolve a character set name to its Python codec name.

    Raises:
        LookupError: if no codec is registered under that name
    """
    return codecs.lookup(charset_name).name


def resolve_alignment(alignment) -> DBFAlignment:
    """Map ALIGN_LEFT / ALIGN_RIGHT (or a DBFAlignment) to DBFAlignment."""
    if isinstance(alignment, DBFAlignment):
        return alignment
    if alignment == ALIGN_LEFT:
        return DBFAlignment.LEFT
    return DBFAlignment.RIGHT


def text_padding_by_name(text: str, charset_name: str, length: int,
                         alignment=ALIGN_LEFT, pad_byte: int = DBF_PAD_SPACE) -> bytes:
    """text_padding with a character set name and a legacy alignment."""
    return text_padding(text, resolve_charset(charset_name), length,
                        resolve_alignment(alignment), pad_byte)


def double_formatting_by_name(number: Number, charset_name: str, field_length: int,
                              decimal_count: int) -> bytes:
    """double_formatting with a character set name."""
    return double_formatting(number, resolve_charset(charset_name), field_length, decimal_count)
