#!/usr/bin/env python3
"""
test_scanner.py - Flat parse of weapon KeyValue text

Run with: python -m unittest tests.test_scanner
"""

import sys
import os
import unittest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from kvdoc.scanner import detect_ui_blocks, find_duplicate_keys, parse, parse_base_weapon, scan_lines
from kvdoc import mutator


SAMPLE = "\n".join([
    '#base "_base_assault_rifle.txt"',
    '',
    'WeaponData',
    '{',
    '    // General',
    '    "printname"            "#WPN_R301"',
    '    "fire_rate"            13.5',
    '    "ammo_clip_size"       28 // magazine',
    '    "damage_near_value"    "14"',
    '    "fire_mode"            automatic',
    '    garbage line here',
    '}',
    '',
])


class TestParse(unittest.TestCase):
    def setUp(self) -> None:
        self.doc = parse(SAMPLE)

    def test_bare_numerals_become_numbers(self) -> None:
        self.assertEqual(self.doc["fire_rate"], 13.5)
        self.assertIsInstance(self.doc["fire_rate"], float)
        self.assertEqual(self.doc["ammo_clip_size"], 28)
        self.assertIsInstance(self.doc["ammo_clip_size"], int)

    def test_quoted_numerals_stay_strings(self) -> None:
        self.assertEqual(self.doc["damage_near_value"], "14")
        self.assertFalse(self.doc.properties["damage_near_value"].is_numeric)

    def test_bare_words_are_strings(self) -> None:
        self.assertEqual(self.doc["fire_mode"], "automatic")

    def test_source_lines_are_one_based(self) -> None:
        self.assertEqual(self.doc.properties["printname"].source_line, 6)
        self.assertEqual(self.doc.properties["fire_mode"].source_line, 10)

    def test_headers_comments_and_garbage_are_skipped(self) -> None:
        self.assertEqual(
            list(self.doc.values().keys()),
            ["printname", "fire_rate", "ammo_clip_size", "damage_near_value", "fire_mode"],
        )
        self.assertNotIn("WeaponData", self.doc)

    def test_base_weapon_and_line_count(self) -> None:
        self.assertEqual(self.doc.base_weapon, "_base_assault_rifle")
        self.assertEqual(self.doc.line_count, 13)

    def test_glued_inline_comment_is_stripped(self) -> None:
        doc = parse('"fire_rate" 13.5//rpm')
        self.assertEqual(doc["fire_rate"], 13.5)

    def test_quoted_value_ignores_trailing_comment(self) -> None:
        doc = parse('"printname" "#WPN" // name')
        self.assertEqual(doc["printname"], "#WPN")

    def test_duplicate_keys_last_wins(self) -> None:
        text = "\n".join(['WeaponData', '{', '    "k" "1"', '', '', '', '    "k" "2"', '}'])
        doc = parse(text)
        self.assertEqual(doc["k"], "2")
        self.assertEqual(doc.properties["k"].source_line, 7)
        self.assertEqual(find_duplicate_keys(text), {"k": [3, 7]})

    def test_malformed_braces_never_raise(self) -> None:
        doc = parse('{\n{\n"a" "1"\n}}}\n"b"')
        self.assertEqual(doc.values(), {"a": "1"})

    def test_empty_text(self) -> None:
        doc = parse("")
        self.assertEqual(len(doc), 0)
        self.assertEqual(doc.mods, [])
        self.assertIsNone(doc.crosshair_data)
        self.assertIsNone(doc.base_weapon)

    def test_get_with_default(self) -> None:
        self.assertEqual(self.doc.get("missing", 7), 7)
        self.assertEqual(self.doc.get("fire_rate"), 13.5)


class TestRoundTrip(unittest.TestCase):
    def test_no_op_update_reparses_to_equal_document(self) -> None:
        before = parse(SAMPLE)
        after = parse(mutator.update(SAMPLE, "fire_rate", "13.5"))
        self.assertEqual(before, after)

    def test_documents_with_different_values_differ(self) -> None:
        self.assertNotEqual(parse(SAMPLE), parse(mutator.update(SAMPLE, "fire_rate", "14")))


class TestScanLines(unittest.TestCase):
    def test_line_kinds(self) -> None:
        kinds = [line.kind for line in scan_lines(SAMPLE)]
        self.assertEqual(kinds, [
            "directive", "blank", "header", "brace", "comment",
            "keyvalue", "keyvalue", "keyvalue", "keyvalue", "keyvalue",
            "other", "brace", "blank",
        ])

    def test_keyvalue_line_carries_raw_value(self) -> None:
        lines = list(scan_lines(SAMPLE))
        self.assertEqual(lines[8].key, "damage_near_value")
        self.assertEqual(lines[8].value, "14")
        self.assertTrue(lines[8].quoted)
        self.assertFalse(lines[6].quoted)


class TestDirectivesAndUiBlocks(unittest.TestCase):
    def test_base_weapon_without_directive(self) -> None:
        self.assertIsNone(parse_base_weapon('WeaponData\n{\n}'))

    def test_ui_blocks_detected_by_name(self) -> None:
        text = 'WeaponData\n{\n    UiData1\n    {\n    }\n    "UiData2"\n    {\n    }\n}'
        self.assertEqual(detect_ui_blocks(text), ("UiData1", "UiData2"))
        self.assertEqual(detect_ui_blocks(SAMPLE), ())


if __name__ == "__main__":
    unittest.main()
