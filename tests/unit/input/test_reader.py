"""Tests for raw key decoding from a file descriptor."""

from __future__ import annotations

import os
import unittest

from lazydu.input import reader
from lazydu.input.reader import read_key


class ReadKeyTests(unittest.TestCase):
    def setUp(self) -> None:
        reader._PENDING_BYTES.clear()
        self.read_fd, self.write_fd = os.pipe()

    def tearDown(self) -> None:
        reader._PENDING_BYTES.clear()
        os.close(self.read_fd)
        os.close(self.write_fd)

    def _feed(self, data: bytes) -> None:
        os.write(self.write_fd, data)

    def test_plain_characters(self) -> None:
        self._feed(b"jG?")

        self.assertEqual(read_key(self.read_fd), "j")
        self.assertEqual(read_key(self.read_fd), "G")
        self.assertEqual(read_key(self.read_fd), "?")

    def test_control_keys(self) -> None:
        self._feed(b"\x04\x15\x06\x02\x03\r\n")

        keys = [read_key(self.read_fd) for _ in range(7)]

        self.assertEqual(keys, ["CTRL_D", "CTRL_U", "CTRL_F", "CTRL_B", "CTRL_C", "ENTER", "ENTER"])

    def test_arrow_and_home_end_sequences(self) -> None:
        self._feed(b"\x1b[A\x1b[B\x1b[C\x1b[D\x1b[H\x1b[F\x1bOA")

        keys = [read_key(self.read_fd) for _ in range(7)]

        self.assertEqual(keys, ["UP", "DOWN", "RIGHT", "LEFT", "HOME", "END", "UP"])

    def test_tilde_sequences(self) -> None:
        self._feed(b"\x1b[5~\x1b[6~\x1b[1~\x1b[4~")

        keys = [read_key(self.read_fd) for _ in range(4)]

        self.assertEqual(keys, ["PAGE_UP", "PAGE_DOWN", "HOME", "END"])

    def test_lone_escape_and_alt_prefix(self) -> None:
        self._feed(b"\x1b")
        self.assertEqual(read_key(self.read_fd), "ESC")

        self._feed(b"\x1bq")
        self.assertEqual(read_key(self.read_fd), "ESC")
        self.assertEqual(read_key(self.read_fd), "q")

    def test_multibyte_utf8_character(self) -> None:
        self._feed("é".encode("utf-8"))

        self.assertEqual(read_key(self.read_fd), "é")

    def test_timeout_and_end_of_input_return_empty(self) -> None:
        self.assertEqual(read_key(self.read_fd, timeout_ms=10), "")

        os.close(self.write_fd)
        self.write_fd = os.open(os.devnull, os.O_WRONLY)
        self.assertEqual(read_key(self.read_fd), "")


if __name__ == "__main__":
    unittest.main()
