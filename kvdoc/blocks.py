"""
blocks.py - Parsers for the nested special blocks of a weapon file.

Two blocks get a typed parse on top of the flat property map:

    Mods                              RUI_CrosshairData
    {                                 {
        gold                              DefaultArgs
        {                                 {
        }                                     isFiring    weapon_is_firing
        survival_finite_ammo              }
        {                                 Crosshair_1
            "uses_ammo_pool" "1"          {
        }                                     "ui"            "ui/crosshair_tri"
    }                                         "base_spread"   "0"
                                              Args
                                              {
                                                  isFiring    weapon_is_firing
                                              }
                                          }
                                      }

Brace depth is tracked locally inside each parser. Nothing here raises on
malformed input; a broken block yields fewer entries.
"""

import logging
import re
from typing import List, Optional, Tuple

from kvdoc.model import CrosshairData, CrosshairEntry, ModEntry
from kvdoc.scanner import match_key_value, split_lines

logger = logging.getLogger(__name__)

MOD_NAME_RE = re.compile(r'^"?([^\s"{}]+)"?$')
CROSSHAIR_NAME_RE = re.compile(r'^"?(Crosshair_(\d+))"?$')

# Mods state machine
SEEKING_NAME = "SEEKING_NAME"
IN_MOD = "IN_MOD"


def _is_header(stripped: str, name: str) -> bool:
    return stripped == name or stripped == f'"{name}"'


def _is_skippable(stripped: str) -> bool:
    return not stripped or stripped.startswith("//")


def _extract_block(lines: List[str], header_index: int) -> Optional[Tuple[List[str], int]]:
    """
    Body of the block whose header sits at header_index.

    Returns:
        (body_lines, index_after_block) or None if no `{` line follows the
        header. An unclosed block takes the rest of the text.
    """
    i = header_index + 1
    while i < len(lines) and not lines[i].strip():
        i += 1
    if i >= len(lines) or lines[i].strip() != "{":
        return None

    depth = 1
    body: List[str] = []
    i += 1
    while i < len(lines):
        stripped = lines[i].strip()
        if stripped == "{":
            depth += 1
        elif stripped == "}":
            depth -= 1
            if depth == 0:
                return body, i + 1
        body.append(lines[i])
        i += 1
    return body, len(lines)


def _split_arg_line(stripped: str) -> Optional[Tuple[str, str]]:
    """`key value...` with the remainder joined by single spaces, quotes stripped."""
    tokens = stripped.split()
    if len(tokens) < 2:
        return None
    return tokens[0].strip('"'), " ".join(tokens[1:]).strip('"')


# ============================================================================
# MODS
# ============================================================================

def _find_mods_body(lines: List[str]) -> Optional[List[str]]:
    """
    Lines of the first Mods block.

    The block ends at the first line starting with `}` in column 0, which is
    the outer closing brace in a conventionally indented file.
    """
    for index, line in enumerate(lines):
        if not _is_header(line.strip(), "Mods"):
            continue
        j = index + 1
        while j < len(lines) and not lines[j].strip():
            j += 1
        if j >= len(lines) or lines[j].strip() != "{":
            continue

        body = []
        for body_line in lines[j + 1:]:
            if body_line.startswith("}"):
                break
            body.append(body_line)
        return body
    return None


def parse_mods_block(text: str) -> List[ModEntry]:
    """
    Parse the Mods block into ModEntry values, in source order.

    Args:
        text: Full weapon file content

    Returns:
        List of ModEntry (empty when the file has no Mods block)
    """
    body = _find_mods_body(split_lines(text))
    if body is None:
        return []

    mods: List[ModEntry] = []
    state = SEEKING_NAME
    depth = 0
    pending_name: Optional[str] = None
    current: Optional[ModEntry] = None

    for line in body:
        stripped = line.strip()
        if _is_skippable(stripped):
            continue

        if stripped == "{}":
            if depth == 0 and pending_name is not None:
                mods.append(ModEntry(name=pending_name))
                pending_name = None
            continue

        if stripped == "{":
            depth += 1
            if depth == 1 and pending_name is not None:
                current = ModEntry(name=pending_name)
                pending_name = None
                state = IN_MOD
            continue

        if stripped == "}":
            depth -= 1
            if depth < 0:
                # Closing brace of the Mods block itself
                break
            if depth == 0 and current is not None:
                mods.append(current)
                current = None
                state = SEEKING_NAME
            continue

        if depth == 0:
            match = MOD_NAME_RE.match(stripped)
            if match:
                pending_name = match.group(1)
            else:
                logger.debug("Ignoring line in Mods block: %r", stripped)
            continue

        if depth == 1 and state == IN_MOD:
            pair = match_key_value(stripped)
            if pair is not None:
                key, raw_value, _quoted = pair
                current.properties[key] = raw_value

    if current is not None:
        # Body was cut at a column-0 brace before this mod closed
        mods.append(current)

    return mods


# ============================================================================
# RUI CROSSHAIR DATA
# ============================================================================

def _parse_args_lines(lines: List[str]) -> dict:
    args = {}
    for line in lines:
        stripped = line.strip()
        if _is_skippable(stripped) or stripped in ("{", "}"):
            continue
        pair = _split_arg_line(stripped)
        if pair is not None:
            args[pair[0]] = pair[1]
    return args


def _parse_crosshair(name: str, lines: List[str]) -> CrosshairEntry:
    entry = CrosshairEntry(name=name)
    in_args = False
    args_pending = False

    for line in lines:
        stripped = line.strip()
        if _is_skippable(stripped):
            continue

        if _is_header(stripped, "Args"):
            args_pending = True
            continue
        if stripped == "{":
            if args_pending:
                in_args = True
                args_pending = False
            continue
        if stripped == "}":
            in_args = False
            continue

        if in_args:
            pair = _split_arg_line(stripped)
            if pair is not None:
                entry.args[pair[0]] = pair[1]
            continue

        kv = match_key_value(stripped)
        if kv is None:
            continue
        key, raw_value, _quoted = kv
        if key == "ui":
            entry.ui = raw_value
        elif key == "base_spread":
            entry.base_spread = raw_value

    return entry


def parse_rui_crosshair_data(text: str) -> Optional[CrosshairData]:
    """
    Parse the RUI_CrosshairData block.

    Args:
        text: Full weapon file content

    Returns:
        CrosshairData, or None when the file has no RUI_CrosshairData block
    """
    lines = split_lines(text)

    block = None
    for index, line in enumerate(lines):
        if _is_header(line.strip(), "RUI_CrosshairData"):
            block = _extract_block(lines, index)
            if block is not None:
                break
    if block is None:
        return None

    body, _end = block
    data = CrosshairData()

    for index, line in enumerate(body):
        if _is_header(line.strip(), "DefaultArgs"):
            default_block = _extract_block(body, index)
            if default_block is not None:
                data.default_args = _parse_args_lines(default_block[0])
                break

    crosshairs: List[CrosshairEntry] = []
    index = 0
    while index < len(body):
        match = CROSSHAIR_NAME_RE.match(body[index].strip())
        if match:
            crosshair_block = _extract_block(body, index)
            if crosshair_block is not None:
                crosshair_lines, index = crosshair_block
                crosshairs.append(_parse_crosshair(match.group(1), crosshair_lines))
                continue
        index += 1

    data.crosshairs = sorted(crosshairs, key=lambda entry: entry.index)
    return data
