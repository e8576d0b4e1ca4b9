#!/usr/bin/env python3
"""
Tests for the connection descriptor builder.

This module tests option validation, token order, value escaping and the
fixed descriptor capacity.
"""

import unittest

from psycopg.conninfo import conninfo_to_dict

from pgsqlclient.constants import DESCRIPTOR_CAPACITY
from pgsqlclient.database import build_descriptor, describe_descriptor, escape_value
from pgsqlclient.models import (
    ConnectionOptions,
    DescriptorOverflow,
    ErrorKind,
    InvalidArgument,
    InvalidOption,
)


class TestDescriptorEncoding(unittest.TestCase):
    """Test cases for descriptor token layout."""

    def test_all_fields_in_fixed_order(self):
        """Test that every present option is encoded in the fixed order."""
        options = {
            "connect_timeout": "5",
            "database": "app",
            "password": "secret",
            "user": "report",
            "port": 5432,
            "host": "db.internal",
        }

        descriptor, error = build_descriptor(options)

        self.assertIsNone(error)
        self.assertEqual(
            descriptor,
            "host='db.internal' port='5432' user='report' password='secret' "
            "dbname='app' connect_timeout='5'",
        )

    def test_required_fields_only(self):
        """Test that absent optional fields produce no tokens."""
        descriptor, error = build_descriptor({"host": "localhost", "port": 5432})

        self.assertIsNone(error)
        self.assertEqual(descriptor, "host='localhost' port='5432'")

    def test_none_optional_fields_are_omitted(self):
        """Test that optional fields set to None count as absent."""
        descriptor, error = build_descriptor(
            {"host": "localhost", "port": 5432, "user": None, "database": "app"}
        )

        self.assertIsNone(error)
        self.assertEqual(descriptor, "host='localhost' port='5432' dbname='app'")

    def test_connection_options_input(self):
        """Test that ConnectionOptions encodes the same as a mapping."""
        options = ConnectionOptions(host="localhost", port=5433, user="app", connect_timeout=10)

        outcome = build_descriptor(options)

        self.assertTrue(outcome.ok)
        self.assertEqual(
            outcome.value, "host='localhost' port='5433' user='app' connect_timeout='10'"
        )

    def test_db_alias(self):
        """Test that the legacy ``db`` key is accepted for the database name."""
        descriptor, error = build_descriptor({"host": "h", "port": 1, "db": "legacy"})

        self.assertIsNone(error)
        self.assertEqual(descriptor, "host='h' port='1' dbname='legacy'")

    def test_numeric_string_port(self):
        """Test that a port given as decimal digits is accepted."""
        descriptor, error = build_descriptor({"host": "h", "port": "6432"})

        self.assertIsNone(error)
        self.assertEqual(descriptor, "host='h' port='6432'")

    def test_extra_keys_are_ignored(self):
        """Test that unknown keys never reach the descriptor."""
        descriptor, error = build_descriptor({"host": "h", "port": 1, "sslmode": "disable"})

        self.assertIsNone(error)
        self.assertNotIn("sslmode", descriptor)


class TestDescriptorValidation(unittest.TestCase):
    """Test cases for option type checking."""

    def assertInvalidOption(self, options, field, expected):
        descriptor, error = build_descriptor(options)
        self.assertIsNone(descriptor)
        self.assertIsInstance(error, InvalidOption)
        self.assertEqual(error.kind, ErrorKind.INVALID_OPTION)
        self.assertEqual(error.field, field)
        self.assertEqual(error.expected, expected)
        self.assertIn(field, error.message)
        self.assertIn(expected, error.message)
        return error

    def test_missing_host(self):
        """Test that a missing host is reported by name."""
        error = self.assertInvalidOption({"port": 5432}, "host", "string")
        self.assertEqual(error.actual, "None")

    def test_missing_port(self):
        """Test that a missing port is reported by name."""
        self.assertInvalidOption({"host": "localhost"}, "port", "number")

    def test_wrongly_typed_fields(self):
        """Test that wrongly typed fields are rejected with their name."""
        cases = [
            ({"host": ["localhost"], "port": 5432}, "host", "string", "list"),
            ({"host": "h", "port": "abc"}, "port", "number", "str"),
            ({"host": "h", "port": "\uff15\uff14\uff13\uff12"}, "port", "number", "str"),
            ({"host": "h", "port": "\u00b2"}, "port", "number", "str"),
            ({"host": "h", "port": True}, "port", "number", "bool"),
            ({"host": "h", "port": 5432.5}, "port", "number", "float"),
            ({"host": "h", "port": 1, "user": {}}, "user", "string", "dict"),
            ({"host": "h", "port": 1, "password": b"pw"}, "password", "string", "bytes"),
            ({"host": "h", "port": 1, "database": False}, "database", "string", "bool"),
            ({"host": "h", "port": 1, "connect_timeout": object()}, "connect_timeout", "string", "object"),
        ]

        for options, field, expected, actual in cases:
            with self.subTest(field=field, actual=actual):
                error = self.assertInvalidOption(options, field, expected)
                self.assertEqual(error.actual, actual)

    def test_first_invalid_field_in_order_wins(self):
        """Test that validation reports fields in encoding order."""
        self.assertInvalidOption({"host": 1.5j, "port": None}, "host", "string")

    def test_nul_character_rejected(self):
        """Test that values libpq cannot carry are rejected."""
        error = self.assertInvalidOption({"host": "h", "port": 1, "user": "a\x00b"}, "user", "string")
        self.assertIn("NUL", error.message)

    def test_non_mapping_argument(self):
        """Test that a non-mapping argument is an InvalidArgument."""
        for value in (None, "host=localhost", 42, ["host"]):
            with self.subTest(value=value):
                descriptor, error = build_descriptor(value)
                self.assertIsNone(descriptor)
                self.assertIsInstance(error, InvalidArgument)
                self.assertIn("mapping", error.message)

    def test_type_errors_win_over_overflow(self):
        """Test that type checking happens before any encoding."""
        self.assertInvalidOption({"host": "x" * 5000, "port": "nope"}, "port", "number")


class TestDescriptorEscaping(unittest.TestCase):
    """Test cases for quoting values inside tokens."""

    def test_escape_value(self):
        """Test that quotes and backslashes are backslash-escaped."""
        self.assertEqual(escape_value("plain"), "plain")
        self.assertEqual(escape_value("it's"), "it\\'s")
        self.assertEqual(escape_value("a\\b"), "a\\\\b")

    def test_hostile_values_round_trip_through_libpq_parser(self):
        """Test that libpq reads back exactly the values that were given."""
        options = {
            "host": "localhost",
            "port": 5432,
            "user": "o'brien",
            "password": "p' host='evil\\",
            "database": "my db",
        }

        descriptor, error = build_descriptor(options)
        self.assertIsNone(error)

        parsed = conninfo_to_dict(descriptor)
        self.assertEqual(parsed["host"], "localhost")
        self.assertEqual(parsed["port"], "5432")
        self.assertEqual(parsed["user"], "o'brien")
        self.assertEqual(parsed["password"], "p' host='evil\\")
        self.assertEqual(parsed["dbname"], "my db")

    def test_describe_descriptor_masks_password(self):
        """Test that the password token is hidden for logging."""
        descriptor, _ = build_descriptor(
            {"host": "h", "port": 1, "password": "it's\\secret", "database": "d"}
        )

        masked = describe_descriptor(descriptor)

        self.assertEqual(masked, "host='h' port='1' password='***' dbname='d'")
        self.assertNotIn("secret", masked)


class TestDescriptorCapacity(unittest.TestCase):
    """Test cases for the fixed descriptor capacity."""

    # len("host='' port='5432'")
    OVERHEAD = 19

    def test_largest_descriptor_fits(self):
        """Test that a descriptor filling the capacity exactly is accepted."""
        host = "h" * (DESCRIPTOR_CAPACITY - 1 - self.OVERHEAD)

        descriptor, error = build_descriptor({"host": host, "port": 5432})

        self.assertIsNone(error)
        self.assertEqual(len(descriptor), DESCRIPTOR_CAPACITY - 1)

    def test_one_byte_over_capacity(self):
        """Test that one byte too many is an overflow, not a truncation."""
        host = "h" * (DESCRIPTOR_CAPACITY - self.OVERHEAD)

        descriptor, error = build_descriptor({"host": host, "port": 5432})

        self.assertIsNone(descriptor)
        self.assertIsInstance(error, DescriptorOverflow)
        self.assertEqual(error.kind, ErrorKind.DESCRIPTOR_OVERFLOW)
        self.assertEqual(error.capacity, DESCRIPTOR_CAPACITY)
        self.assertEqual(error.size, DESCRIPTOR_CAPACITY + 1)

    def test_capacity_counts_encoded_bytes(self):
        """Test that multi-byte characters count by their UTF-8 length."""
        descriptor, error = build_descriptor({"host": "é" * 500, "port": 5432})

        self.assertIsNone(descriptor)
        self.assertIsInstance(error, DescriptorOverflow)

    def test_escaping_counts_toward_capacity(self):
        """Test that escape characters are included in the size check."""
        # Fits unescaped, overflows once every quote gains a backslash
        host = "'" * ((DESCRIPTOR_CAPACITY - self.OVERHEAD) // 2 + 1)

        descriptor, error = build_descriptor({"host": host, "port": 5432})

        self.assertIsNone(descriptor)
        self.assertIsInstance(error, DescriptorOverflow)


if __name__ == "__main__":
    unittest.main()
