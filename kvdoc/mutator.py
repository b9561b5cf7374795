"""
mutator.py - In-place value edits on weapon KeyValue text.

update() always returns a modified copy of the original text: the line that
holds the key is rewritten, or one new line is inserted before the final
closing brace. Every other byte is left as it was.

Only the FIRST line defining a key is rewritten, while parse() reports the
LAST one. Files with duplicate keys can therefore hide an edit; use
scanner.find_duplicate_keys() to surface them.
"""

import logging
import re

from kvdoc.scanner import coerce_value, split_lines

logger = logging.getLogger(__name__)

KEY_COLUMN_WIDTH = 40
INSERT_INDENT = "    "

# Values written without quotes
BARE_VALUE_RE = re.compile(r'^-?\d*\.?\d+$')


def format_value(value: str) -> str:
    """Quote a value unless it is a plain decimal numeral."""
    if BARE_VALUE_RE.match(value):
        return value
    return f'"{value}"'


def _key_line_pattern(key: str) -> "re.Pattern[str]":
    # A bare value stops at "//" so a glued comment stays in the trailing group
    return re.compile(rf'^(\s*)"{re.escape(key)}"\s+("[^"]*"|(?:(?!//)\S)+)(.*)$')


def format_line(indent: str, key: str, value: str, column_width: int = KEY_COLUMN_WIDTH) -> str:
    """Render `indent"key"<pad>value` with the value aligned on column_width."""
    padding = " " * max(1, column_width - len(key) - len(indent))
    return f'{indent}"{key}"{padding}{format_value(value)}'


def update(text: str, key: str, new_value: str, column_width: int = KEY_COLUMN_WIDTH,
           insert_indent: str = INSERT_INDENT) -> str:
    """
    Set `key` to `new_value` in the raw text.

    Args:
        text: Full weapon file content
        key: Property key (case-sensitive, without quotes)
        new_value: New value as typed by the user; "" clears the value
        column_width: Column the value is aligned on
        insert_indent: Indent of a newly inserted line

    Returns:
        The edited text (unchanged if the key is absent and new_value is ""
        or the text has no closing brace to insert before)
    """
    lines = split_lines(text)
    pattern = _key_line_pattern(key)

    for index, line in enumerate(lines):
        match = pattern.match(line)
        if match:
            indent, trailing = match.group(1), match.group(3)
            lines[index] = format_line(indent, key, new_value, column_width) + trailing
            logger.debug("Updated '%s' on line %d", key, index + 1)
            return "\n".join(lines)

    if not new_value:
        return text

    closing_index = _last_closing_brace(lines)
    if closing_index <= 0:
        logger.debug("No closing brace to insert '%s' before", key)
        return text

    lines.insert(closing_index, format_line(insert_indent, key, new_value, column_width))
    logger.debug("Inserted '%s' before line %d", key, closing_index + 1)
    return "\n".join(lines)


def find_value(text: str, key: str):
    """Typed value on the line update() would rewrite, or None if no line holds the key."""
    pattern = _key_line_pattern(key)
    for line in split_lines(text):
        match = pattern.match(line)
        if match:
            raw = match.group(2)
            if raw.startswith('"'):
                return coerce_value(raw[1:-1], True)
            return coerce_value(raw, False)
    return None


def clear(text: str, key: str, column_width: int = KEY_COLUMN_WIDTH) -> str:
    """Empty a key's value; absent keys are left absent."""
    return update(text, key, "", column_width=column_width)


def _last_closing_brace(lines) -> int:
    for index in range(len(lines) - 1, -1, -1):
        if lines[index].strip() == "}":
            return index
    return -1
