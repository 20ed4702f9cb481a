"""
Test file for validating the binary format of DBF headers.
This ensures our implementation correctly follows the dBase file format.
"""

import datetime
import io
import os
import shutil
import struct
import tempfile
import unittest
from dbf_module import (
    DBFField, DBFHeader, DBFDataType, DBFTruncatedError, DBFUnknownDataTypeError,
    new_dbf_field, encode_dbf_field, read_dbf_header, write_dbf_header, encode_dbf_header, decode_dbf_header,
    dbf_header_metrics, dbf_field_offsets, dbf_header_find_field
)

PROLOGUE_FORMAT = "<BBBBLHH2sBBL4s4sBB2s"

STAMP = datetime.date(2024, 3, 15)


def sample_fields():
    return [
        new_dbf_field("ID", DBFDataType.NUMERIC, 5),
        new_dbf_field("NAME", DBFDataType.CHARACTER, 30),
        new_dbf_field("SALARY", DBFDataType.NUMERIC, 10, 2),
        new_dbf_field("ACTIVE", DBFDataType.LOGICAL),
    ]


class TestDBFHeaders(unittest.TestCase):
    """Test cases for DBF header validation."""

    def test_prologue_layout(self):
        """Test the fixed 32-byte prologue of a new header."""
        header = DBFHeader(fields=sample_fields(), record_count=7)
        data = encode_dbf_header(header, today=STAMP)

        # Version byte should be 0x03 for dBase III
        self.assertEqual(data[0], 0x03)

        # Last update date (year since 1900)
        self.assertEqual(data[1:4], bytes([124, 3, 15]))

        # Record count (bytes 4-7, little endian)
        self.assertEqual(struct.unpack("<L", data[4:8])[0], 7)

        # Header size (bytes 8-9, little endian)
        self.assertEqual(struct.unpack("<H", data[8:10])[0], 32 + 4 * 32 + 1)

        # Record size (bytes 10-11, little endian): delete flag + fields
        self.assertEqual(struct.unpack("<H", data[10:12])[0], 1 + 5 + 30 + 10 + 1)

        # Flags and reserved bytes are zero for a new header
        self.assertEqual(data[12:32], b'\x00' * 20)

        # Whole header length and terminator
        self.assertEqual(len(data), 32 + 4 * 32 + 1)
        self.assertEqual(data[-1], 0x0D)

    def test_field_descriptors_follow_prologue(self):
        data = encode_dbf_header(DBFHeader(fields=sample_fields()), today=STAMP)
        self.assertEqual(data[32:43], b'ID'.ljust(11, b'\x00'))
        self.assertEqual(data[64:75], b'NAME'.ljust(11, b'\x00'))
        self.assertEqual(data[64 + 11], ord('C'))
        self.assertEqual(data[64 + 16], 30)
        self.assertEqual(data[96 + 17], 2)

    def test_lengths_recomputed_on_write(self):
        """Stale lengths are replaced by values derived from the fields."""
        header = DBFHeader(fields=[
            new_dbf_field("A", DBFDataType.CHARACTER, 10),
            new_dbf_field("B", DBFDataType.CHARACTER, 5),
            new_dbf_field("C", DBFDataType.CHARACTER, 8),
        ])
        header.record_length = 999
        header.header_length = 1

        data = encode_dbf_header(header, today=STAMP)

        self.assertEqual(header.record_length, 24)
        self.assertEqual(header.header_length, 129)
        self.assertEqual(struct.unpack("<H", data[10:12])[0], 24)
        self.assertEqual(struct.unpack("<H", data[8:10])[0], 129)

        # Mutating the field list changes the next write
        header.fields.append(new_dbf_field("D", DBFDataType.DATE))
        data = encode_dbf_header(header, today=STAMP)
        self.assertEqual(header.record_length, 32)
        self.assertEqual(struct.unpack("<H", data[8:10])[0], 161)

    def test_round_trip(self):
        header = DBFHeader(fields=sample_fields(), record_count=3)
        data = encode_dbf_header(header, today=STAMP)
        decoded = decode_dbf_header(data)

        self.assertEqual(len(decoded.fields), len(header.fields))
        for original, field in zip(header.fields, decoded.fields):
            self.assertEqual(field.name, original.name)
            self.assertEqual(field.data_type, original.data_type)
            self.assertEqual(field.length, original.length)
            self.assertEqual(field.decimal_count, original.decimal_count)

        self.assertEqual(decoded.record_count, 3)
        self.assertEqual(decoded.signature, 0x03)
        self.assertEqual((decoded.year, decoded.month, decoded.day), (124, 3, 15))
        self.assertEqual(dbf_header_metrics(decoded.fields),
                         (decoded.header_length, decoded.record_length))

    def test_byte_identical_rewrite(self):
        """Flags and reserved areas of a read header are written back unchanged."""
        fields = io.BytesIO()
        field_list = [new_dbf_field("CODE", DBFDataType.CHARACTER, 6)]
        for field in field_list:
            fields.write(encode_dbf_field(field))
        prologue = struct.pack(
            PROLOGUE_FORMAT,
            0x83, 124, 3, 15, 42, 65, 7,
            b'\x01\x02', 1, 0, 0x01020304, b'ABCD', b'EFGH', 1, 0x57, b'\xFE\xFF'
        )
        raw = prologue + fields.getvalue() + b'\x0D'

        header = decode_dbf_header(raw)
        self.assertEqual(header.signature, 0x83)
        self.assertEqual(header.record_count, 42)
        self.assertEqual(header.reserved_1, b'\x01\x02')
        self.assertEqual(header.incomplete_transaction, 1)
        self.assertEqual(header.free_record_thread, 0x01020304)
        self.assertEqual(header.reserved_2, b'ABCD')
        self.assertEqual(header.reserved_3, b'EFGH')
        self.assertEqual(header.mdx_flag, 1)
        self.assertEqual(header.language_driver, 0x57)
        self.assertEqual(header.reserved_4, b'\xFE\xFF')

        self.assertEqual(encode_dbf_header(header, today=STAMP), raw)

    def test_failed_write_leaves_header_unchanged(self):
        """A write that fails part way leaves date and lengths as they were."""
        header = DBFHeader(fields=sample_fields(), year=99, month=1, day=2,
                           header_length=10, record_length=20)
        header.record_count = -1
        sink = io.BytesIO()

        with self.assertRaises(ValueError):
            write_dbf_header(sink, header, today=STAMP)

        self.assertEqual((header.year, header.month, header.day), (99, 1, 2))
        self.assertEqual((header.header_length, header.record_length), (10, 20))
        self.assertEqual(sink.getvalue(), b'')

        # A bad reserved area after the prologue fields fails the same way
        header.record_count = 0
        header.reserved_4 = b'\x00'
        with self.assertRaises(ValueError):
            write_dbf_header(sink, header, today=STAMP)
        self.assertEqual((header.year, header.header_length), (99, 10))
        self.assertEqual(sink.getvalue(), b'')

    def test_empty_field_list(self):
        data = encode_dbf_header(DBFHeader(), today=STAMP)
        self.assertEqual(len(data), 33)
        self.assertEqual(struct.unpack("<H", data[8:10])[0], 33)
        self.assertEqual(struct.unpack("<H", data[10:12])[0], 1)

        self.assertEqual(decode_dbf_header(data).fields, [])

    def test_terminator_stops_reading(self):
        """Reading stops right after the terminator; record data is untouched."""
        data = encode_dbf_header(DBFHeader(), today=STAMP)
        source = io.BytesIO(data + b' record data')
        header = read_dbf_header(source)

        self.assertEqual(header.fields, [])
        self.assertEqual(source.tell(), 33)

    def test_truncated_prologue(self):
        with self.assertRaises(DBFTruncatedError):
            decode_dbf_header(b'\x03' * 10)

    def test_missing_terminator(self):
        data = encode_dbf_header(DBFHeader(fields=sample_fields()), today=STAMP)
        with self.assertRaises(DBFTruncatedError):
            decode_dbf_header(data[:-1])
        with self.assertRaises(DBFTruncatedError):
            decode_dbf_header(data[:-20])

    def test_unknown_field_type(self):
        data = bytearray(encode_dbf_header(DBFHeader(fields=sample_fields()), today=STAMP))
        data[32 + 11] = ord('Q')
        with self.assertLogs('dbf_types', level='WARNING'):
            with self.assertRaises(DBFUnknownDataTypeError):
                decode_dbf_header(bytes(data))

    def test_too_many_fields(self):
        fields = [DBFField(name=f"F{i}", data_type=DBFDataType.CHARACTER, length=1) for i in range(2100)]
        with self.assertRaises(ValueError):
            encode_dbf_header(DBFHeader(fields=fields), today=STAMP)

    def test_record_too_long(self):
        fields = [DBFField(name=f"F{i}", data_type=DBFDataType.CHARACTER, length=254) for i in range(300)]
        with self.assertRaises(ValueError):
            encode_dbf_header(DBFHeader(fields=fields), today=STAMP)

    def test_field_offsets(self):
        fields = sample_fields()
        self.assertEqual(dbf_field_offsets(fields), [1, 6, 36, 46])
        self.assertEqual(dbf_field_offsets([]), [])

    def test_find_field(self):
        header = DBFHeader(fields=sample_fields())
        self.assertIs(dbf_header_find_field(header, "salary"), header.fields[2])
        self.assertIsNone(dbf_header_find_field(header, "MISSING"))

    def test_logging(self):
        data = encode_dbf_header(DBFHeader(fields=sample_fields()), today=STAMP)
        with self.assertLogs('dbf_header', level='DEBUG') as ctx:
            decode_dbf_header(data)
        self.assertIn("4 fields", ctx.output[0])


class TestDBFHeaderFile(unittest.TestCase):
    """Test writing a header to a file and reading it back."""

    def setUp(self):
        """Set up test environment."""
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up test files."""
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_create_and_open(self):
        """Test creating a file and then opening it."""
        filename = os.path.join(self.test_dir, "TEST.DBF")

        header = DBFHeader(fields=sample_fields())
        with open(filename, "wb") as f:
            write_dbf_header(f, header, today=STAMP)
            f.write(b'\x1A')

        with open(filename, "rb") as f:
            opened = read_dbf_header(f)
            position = f.tell()

        self.assertEqual(position, header.header_length)
        self.assertEqual(opened.record_count, 0)
        self.assertEqual([f.name for f in opened.fields], ["ID", "NAME", "SALARY", "ACTIVE"])
        self.assertEqual(opened.header_length, 32 + 4 * 32 + 1)
        self.assertEqual(opened.record_length, 47)


if __name__ == "__main__":
    unittest.main()
