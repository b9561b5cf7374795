#!/usr/bin/env python3
"""
shared/edit_log.py - Edit-by-edit audit logging

Contains:
- EditLogger: Appends one line per weapon file edit to a plain text log

The log is opt-in. When disabled every method returns immediately, so the
editor core stays free of side effects unless a caller asks for the file.
"""

import logging
import time

__all__ = ['EditLogger']

logger = logging.getLogger(__name__)


class EditLogger:
    """
    Plain text audit log of property edits and raw text edits.
    One line per edit: [HH:MM:SS] <file> <ACTION> <details>
    """

    def __init__(self, output_file="weapon_edits.log", enabled=False):
        self.output_file = output_file
        self.enabled = enabled
        self.edit_count = 0

        if self.enabled:
            # Clear existing log file
            with open(self.output_file, 'w', encoding='utf-8') as f:
                f.write("=== WEAPON EDIT LOG ===\n")
                f.write("SET: property value replaced or inserted\n")
                f.write("CLEAR: property value emptied\n")
                f.write("RAW: text replaced from the raw editor\n")
                f.write("=" * 80 + "\n\n")
            logger.info("Edit logging enabled: %s", self.output_file)

    def log_property_edit(self, file_name, key, old_value, new_value):
        """Log a property edit made through the mutator."""
        if new_value == "":
            self._write(file_name, "CLEAR", f"{key}: {self._show(old_value)}")
        else:
            self._write(file_name, "SET", f"{key}: {self._show(old_value)} -> {self._show(new_value)}")

    def log_raw_edit(self, file_name, old_line_count, new_line_count):
        """Log a raw text replacement with its line count delta."""
        self._write(file_name, "RAW", f"lines {old_line_count} -> {new_line_count}")

    def _write(self, file_name, action, message):
        if not self.enabled:
            return

        self.edit_count += 1
        try:
            with open(self.output_file, 'a', encoding='utf-8') as f:
                timestamp = time.strftime("%H:%M:%S", time.localtime())
                f.write(f"[{timestamp}] {file_name} {action} {message}\n")
        except OSError as e:
            logger.warning("Edit logging error: %s", e)

    @staticmethod
    def _show(value):
        if value is None:
            return "<absent>"
        return repr(value)
