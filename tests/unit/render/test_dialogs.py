from __future__ import annotations

import unittest

from lazyredis.ansi import display_width, strip_ansi
from lazyredis.render.dialogs import (
    BULK_DELETE_WARNING_THRESHOLD,
    bulk_delete_lines,
    delete_confirm_lines,
    frame_dialog,
    message_lines,
)
from lazyredis.render.help import HELP_SECTIONS, help_lines
from lazyredis.ui_theme import DEFAULT_THEME, PLAIN_THEME


class DialogContentTests(unittest.TestCase):
    def test_bulk_delete_lines(self) -> None:
        lines = bulk_delete_lines("user", ":", 2)
        self.assertEqual(lines[0], "Delete ALL keys under this folder?")
        self.assertIn("Folder: user", lines)
        self.assertIn("Pattern: user:*", lines)
        self.assertIn("Keys to delete: 2", lines)
        self.assertEqual(lines[-1], "Press 'y' to confirm, 'n' or ESC to cancel")
        self.assertFalse(any(line.startswith("WARNING") for line in lines))

    def test_bulk_delete_warns_above_threshold(self) -> None:
        self.assertFalse(
            any("WARNING" in line for line in bulk_delete_lines("a", "/", BULK_DELETE_WARNING_THRESHOLD))
        )
        lines = bulk_delete_lines("a", "/", BULK_DELETE_WARNING_THRESHOLD + 1)
        self.assertEqual(lines[1], "WARNING: This will delete 1001 keys!")
        self.assertIn("Pattern: a/*", lines)

    def test_delete_confirm_lines(self) -> None:
        lines = delete_confirm_lines("session:9")
        self.assertIn("Key: session:9", lines)
        self.assertEqual(lines[-1], "Type 'yes' to confirm deletion:")

    def test_message_lines(self) -> None:
        self.assertEqual(message_lines("a\nb"), ["a", "b", "", "Press any key to close"])
        self.assertEqual(message_lines(""), ["", "", "Press any key to close"])


class FrameDialogTests(unittest.TestCase):
    def test_every_line_is_exactly_width(self) -> None:
        framed = frame_dialog("Delete Folder", ["short", "x" * 80], 30, DEFAULT_THEME, danger=True)
        self.assertEqual(len(framed), 4)
        self.assertEqual({display_width(line) for line in framed}, {30})
        self.assertIn(DEFAULT_THEME.dialog_danger, framed[0])

    def test_plain_box_shape(self) -> None:
        framed = [strip_ansi(line) for line in frame_dialog("T", ["hi"], 12, PLAIN_THEME)]
        self.assertEqual(framed, ["┌─ T " + "─" * 6 + "┐", "│ hi" + " " * 7 + "│", "└" + "─" * 10 + "┘"])


class HelpTests(unittest.TestCase):
    def test_every_section_heading_is_listed(self) -> None:
        lines = [strip_ansi(line) for line in help_lines(PLAIN_THEME)]
        for heading, bindings in HELP_SECTIONS:
            self.assertIn(heading, lines)
            for keys, description in bindings:
                self.assertTrue(any(keys in line and description in line for line in lines))
        self.assertEqual(lines[-1], "Press any key to close")


if __name__ == "__main__":
    unittest.main()
