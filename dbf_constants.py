"""
Constants for the dBase (.DBF) header codec.
Offsets, sentinel bytes and defaults shared by all dbf_* modules.
"""

# Header layout
DBF_HEADER_PROLOGUE_SIZE = 32
DBF_FIELD_DESCRIPTOR_SIZE = 32
DBF_FIELD_TERMINATOR = 0x0D  # ends the field descriptor list
DBF_EOF_MARKER = 0x1A
DBF_DELETE_FLAG_SIZE = 1  # leading byte of every record

# Signatures
DBF_SIG_DBASE_III = 0x03
DBF_SIG_DBASE_III_MEMO = 0x83

# Field limits
DBF_FIELD_NAME_SIZE = 11  # bytes on disk, NUL padded
DBF_MAX_FIELD_NAME_LEN = 10  # characters accepted for new fields
DBF_MAX_FIELD_LENGTH = 254
DBF_DATE_FIELD_LENGTH = 8
DBF_LOGICAL_FIELD_LENGTH = 1
DBF_MEMO_FIELD_LENGTH = 10

DBF_MAX_U16 = 0xFFFF
DBF_MAX_U32 = 0xFFFFFFFF

# Codec defaults
DBF_DEFAULT_CHARSET = 'latin-1'
DBF_PAD_SPACE = 0x20
DBF_PAD_NUL = 0x00
