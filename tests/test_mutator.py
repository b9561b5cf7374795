#!/usr/bin/env python3
"""
test_mutator.py - In-place value edits

Run with: python -m unittest tests.test_mutator
"""

import sys
import os
import unittest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kvdoc.mutator import clear, find_value, format_line, format_value, update
from kvdoc.scanner import parse


TEXT = "\n".join([
    'WeaponData',
    '{',
    '    "fire_rate"    13.5 // rpm',
    '    "printname"    "#WPN"',
    '}',
    '',
])


class TestFormatValue(unittest.TestCase):
    def test_decimal_numerals_are_bare(self) -> None:
        for value in ("15", "-2", "0.25", ".5", "-1.5"):
            self.assertEqual(format_value(value), value)

    def test_everything_else_is_quoted(self) -> None:
        for value in ("abc", "1.2.3", "1e5", "", "5.", "+3"):
            self.assertEqual(format_value(value), f'"{value}"')

    def test_padding_has_minimum_of_one_space(self) -> None:
        key = "k" * 50
        self.assertEqual(format_line("    ", key, "1"), f'    "{key}" 1')


class TestUpdate(unittest.TestCase):
    def test_replaces_value_and_keeps_trailing_comment(self) -> None:
        result = update(TEXT, "fire_rate", "15")
        lines = result.split("\n")
        self.assertEqual(lines[2], '    "fire_rate"' + " " * 27 + '15 // rpm')

    def test_comment_glued_to_bare_value_is_kept(self) -> None:
        text = 'WeaponData\n{\n    "fire_rate" 13.5//rpm\n}'
        lines = update(text, "fire_rate", "15").split("\n")
        self.assertEqual(lines[2], '    "fire_rate"' + " " * 27 + '15//rpm')
        self.assertEqual(parse(update(text, "fire_rate", "15"))["fire_rate"], 15)

    def test_only_the_edited_line_changes(self) -> None:
        before = TEXT.split("\n")
        after = update(TEXT, "fire_rate", "15").split("\n")
        self.assertEqual(len(before), len(after))
        changed = [i for i, (a, b) in enumerate(zip(before, after)) if a != b]
        self.assertEqual(changed, [2])

    def test_update_is_idempotent(self) -> None:
        once = update(TEXT, "fire_rate", "5")
        self.assertEqual(update(once, "fire_rate", "5"), once)

    def test_string_values_are_quoted(self) -> None:
        result = update(TEXT, "printname", "#WPN_X")
        self.assertIn('"printname"' + " " * 27 + '"#WPN_X"', result)
        self.assertEqual(parse(result)["printname"], "#WPN_X")

    def test_custom_column_width(self) -> None:
        result = update(TEXT, "fire_rate", "15", column_width=20)
        self.assertEqual(result.split("\n")[2], '    "fire_rate"' + " " * 7 + '15 // rpm')

    def test_insert_before_final_closing_brace(self) -> None:
        result = update(TEXT, "ammo_clip_size", "30")
        lines = result.split("\n")
        self.assertEqual(lines[4], '    "ammo_clip_size"' + " " * 22 + '30')
        self.assertEqual(lines[5], "}")
        self.assertEqual(lines[:4], TEXT.split("\n")[:4])
        self.assertEqual(parse(result)["ammo_clip_size"], 30)

    def test_insert_uses_last_closing_brace(self) -> None:
        text = 'WeaponData\n{\n    Mods\n    {\n    }\n}'
        lines = update(text, "k", "v").split("\n")
        self.assertEqual(lines[-2], '    "k"' + " " * 35 + '"v"')
        self.assertEqual(lines[4], "    }")

    def test_insert_without_closing_brace_is_no_op(self) -> None:
        text = '"a" "1"'
        self.assertEqual(update(text, "b", "2"), text)

    def test_insert_before_brace_on_first_line_is_no_op(self) -> None:
        text = "}\n"
        self.assertEqual(update(text, "b", "2"), text)

    def test_keys_are_case_sensitive(self) -> None:
        result = update(TEXT, "Fire_Rate", "1")
        self.assertEqual(parse(result)["fire_rate"], 13.5)
        self.assertEqual(parse(result)["Fire_Rate"], 1)

    def test_key_with_regex_characters(self) -> None:
        text = 'WeaponData\n{\n    "a.b"    "1"\n    "aXb"    "2"\n}'
        result = update(text, "a.b", "9")
        self.assertEqual(parse(result).values(), {"a.b": 9, "aXb": "2"})

    def test_first_duplicate_is_rewritten(self) -> None:
        text = 'WeaponData\n{\n    "k" "1"\n    "k" "2"\n}'
        result = update(text, "k", "5")
        lines = result.split("\n")
        self.assertTrue(lines[2].endswith("5"))
        self.assertEqual(lines[3], '    "k" "2"')
        # Parsing still reports the last line
        self.assertEqual(parse(result)["k"], "2")


class TestFindValue(unittest.TestCase):
    def test_typed_like_the_scanner(self) -> None:
        self.assertEqual(find_value(TEXT, "fire_rate"), 13.5)
        self.assertEqual(find_value(TEXT, "printname"), "#WPN")
        self.assertIsNone(find_value(TEXT, "missing"))

    def test_reads_the_line_update_rewrites(self) -> None:
        text = 'WeaponData\n{\n    "k" "1"\n    "k" "2"\n}'
        self.assertEqual(find_value(text, "k"), "1")
        self.assertEqual(parse(text)["k"], "2")

class TestClear(unittest.TestCase):
    def test_clear_present_key_writes_empty_string(self) -> None:
        result = clear(TEXT, "printname")
        self.assertIn('"printname"' + " " * 27 + '""', result)
        self.assertEqual(parse(result)["printname"], "")

    def test_clear_absent_key_is_no_op(self) -> None:
        self.assertEqual(clear(TEXT, "missing"), TEXT)
        self.assertEqual(update(TEXT, "missing", ""), TEXT)


if __name__ == "__main__":
    unittest.main()
