"""Regression tests for raw-key decoding.

Covers ESC timing, arrow/delete sequences, control-key tokens, and UTF-8
input. These protect interactive input handling in raw terminal mode.
"""

import os
import time
import unittest

from sniprrr import input as input_mod


class ReadKeyRegressionTests(unittest.TestCase):
    def setUp(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def tearDown(self) -> None:
        input_mod._PENDING_BYTES.clear()

    def _keys(self, payload: bytes, count: int = 1) -> list[str]:
        read_fd, write_fd = os.pipe()
        try:
            os.write(write_fd, payload)
            return [input_mod.read_key(read_fd, timeout_ms=20) for _ in range(count)]
        finally:
            os.close(read_fd)
            os.close(write_fd)

    def test_single_escape_returns_esc_without_second_keypress(self) -> None:
        started = time.monotonic()
        keys = self._keys(b"\x1b")
        elapsed = time.monotonic() - started

        self.assertEqual(keys, ["ESC"])
        # Esc waits briefly for sequence bytes, but should not require another key press.
        self.assertLess(elapsed, 0.2)

    def test_arrow_sequences_are_recognized(self) -> None:
        self.assertEqual(self._keys(b"\x1b[A\x1b[B\x1b[C\x1b[D", 4), ["UP", "DOWN", "RIGHT", "LEFT"])

    def test_application_mode_arrows_are_recognized(self) -> None:
        self.assertEqual(self._keys(b"\x1bOA\x1bOB", 2), ["UP", "DOWN"])

    def test_delete_sequence_is_recognized(self) -> None:
        self.assertEqual(self._keys(b"\x1b[3~"), ["DELETE"])

    def test_unknown_sequence_is_consumed_whole(self) -> None:
        self.assertEqual(self._keys(b"\x1b[1;5Aq", 2), ["UNKNOWN", "q"])

    def test_escape_does_not_swallow_following_printable_key(self) -> None:
        self.assertEqual(self._keys(b"\x1ba", 2), ["ESC", "a"])

    def test_control_tokens(self) -> None:
        self.assertEqual(
            self._keys(b"\t\r\n\x7f\x08\x03", 6),
            ["TAB", "ENTER", "ENTER", "BACKSPACE", "BACKSPACE", "CTRL_C"],
        )

    def test_multibyte_utf8_is_one_key(self) -> None:
        self.assertEqual(self._keys("é漢".encode("utf-8"), 2), ["é", "漢"])

    def test_timeout_returns_empty_string(self) -> None:
        self.assertEqual(self._keys(b""), [""])


if __name__ == "__main__":
    unittest.main()
