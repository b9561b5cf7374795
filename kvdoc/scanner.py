"""
scanner.py - Line scanner and flat parser for weapon KeyValue text.

The scanner is tolerant: it classifies each line on its own, never tracks
brace depth and never raises. Malformed braces only produce a partial model.

Format reminder:
    #base "_base_assault_rifle.txt"

    WeaponData
    {
        // General
        "printname"                   "#WPN_CUSTOM_AR"
        "fire_rate"                   13.5
    }
"""

import logging
import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from kvdoc.model import Property, Value, WeaponDocument

logger = logging.getLogger(__name__)

# Leading quoted key, whitespace, then a quoted string or a bare token
KEY_VALUE_RE = re.compile(r'^"([^"]+)"\s+(?:"([^"]*)"|(\S+))')

# Bare tokens that count as numbers: 12, -3, 0.25, .5, 7.
NUMBER_RE = re.compile(r'^[+-]?(?:\d+\.?\d*|\.\d+)$')

BASE_DIRECTIVE_RE = re.compile(r'^#base\s+"([^"]+)"')

# Structural headers that are never data keys
SECTION_HEADERS = ("WeaponData", "Mods")
UI_BLOCK_NAMES = ("UiData1", "UiData2")


@dataclass(frozen=True)
class ScannedLine:
    """Classification of one source line (number is 1-based)."""
    number: int
    kind: str
    key: Optional[str] = None
    value: Optional[str] = None
    quoted: bool = False


def split_lines(text: str) -> List[str]:
    """Split on LF only so CR characters stay with their line."""
    return text.split("\n")


def strip_inline_comment(token: str) -> str:
    """Drop a trailing // comment from a bare value token."""
    index = token.find("//")
    return token if index < 0 else token[:index]


def coerce_value(raw: str, quoted: bool) -> Value:
    """Apply the typing rule: numeric only when unquoted and a full decimal."""
    if quoted or not NUMBER_RE.match(raw):
        return raw
    if "." in raw:
        return float(raw)
    return int(raw)


def match_key_value(stripped: str) -> Optional[Tuple[str, str, bool]]:
    """
    Match a trimmed line as a key/value pair.

    Returns:
        (key, raw_value, quoted) or None when the line is not a pair
    """
    match = KEY_VALUE_RE.match(stripped)
    if not match:
        return None
    key = match.group(1)
    if match.group(2) is not None:
        return key, match.group(2), True
    return key, strip_inline_comment(match.group(3)), False


def classify_line(number: int, line: str) -> ScannedLine:
    stripped = line.strip()
    if not stripped:
        return ScannedLine(number, "blank")
    if stripped.startswith("//"):
        return ScannedLine(number, "comment")
    if stripped in ("{", "}"):
        return ScannedLine(number, "brace")
    if stripped in SECTION_HEADERS:
        return ScannedLine(number, "header", key=stripped)
    if stripped.startswith("#"):
        return ScannedLine(number, "directive")

    pair = match_key_value(stripped)
    if pair is None:
        return ScannedLine(number, "other")
    key, raw_value, quoted = pair
    return ScannedLine(number, "keyvalue", key=key, value=raw_value, quoted=quoted)


def scan_lines(text: str) -> Iterator[ScannedLine]:
    """Yield a ScannedLine for every line of text."""
    for index, line in enumerate(split_lines(text)):
        yield classify_line(index + 1, line)


def parse_properties(text: str) -> Dict[str, Property]:
    """Flat pass: every key/value line lands in one map, last occurrence wins."""
    properties: Dict[str, Property] = {}
    skipped = 0

    for scanned in scan_lines(text):
        if scanned.kind == "other":
            skipped += 1
            continue
        if scanned.kind != "keyvalue":
            continue
        properties[scanned.key] = Property(
            key=scanned.key,
            value=coerce_value(scanned.value, scanned.quoted),
            source_line=scanned.number,
        )

    if skipped:
        logger.debug("Skipped %d unrecognized lines", skipped)
    return properties


def find_duplicate_keys(text: str) -> Dict[str, List[int]]:
    """
    Keys defined on more than one line, with all of their line numbers.

    parse() keeps the last of these lines while update() rewrites the first,
    so a non-empty result means an edit may not show up in the parsed model.
    """
    seen: Dict[str, List[int]] = {}
    for scanned in scan_lines(text):
        if scanned.kind == "keyvalue":
            seen.setdefault(scanned.key, []).append(scanned.number)
    return {key: lines for key, lines in seen.items() if len(lines) > 1}


def parse_base_weapon(text: str) -> Optional[str]:
    """Base weapon named by the first #base directive, without its .txt suffix."""
    for line in split_lines(text):
        match = BASE_DIRECTIVE_RE.match(line.strip())
        if match:
            name = match.group(1)
            return name[:-4] if name.lower().endswith(".txt") else name
    return None


def detect_ui_blocks(text: str) -> Tuple[str, ...]:
    """Names of the UI data blocks present in the text (detected by name only)."""
    present = set()
    for line in split_lines(text):
        stripped = line.strip().strip('"')
        if stripped in UI_BLOCK_NAMES:
            present.add(stripped)
    return tuple(name for name in UI_BLOCK_NAMES if name in present)


def parse(text: str) -> WeaponDocument:
    """
    Build a fresh WeaponDocument from raw text.

    Args:
        text: Full weapon file content

    Returns:
        WeaponDocument with the flat property map and the special block parses
    """
    # Local import: kvdoc.blocks imports this module
    from kvdoc.blocks import parse_mods_block, parse_rui_crosshair_data

    return WeaponDocument(
        properties=parse_properties(text),
        mods=parse_mods_block(text),
        crosshair_data=parse_rui_crosshair_data(text),
        base_weapon=parse_base_weapon(text),
        ui_blocks=detect_ui_blocks(text),
        line_count=len(split_lines(text)),
    )
