"""
Validation helpers for the project's own configuration files.

Weapon text is parsed tolerantly and never raises, but the JSON tables that
ship with the editor (recoil patterns, property catalog, templates) are
validated strictly on load so a broken table fails immediately.
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence, TypeVar


T = TypeVar("T")


class ConfigurationError(RuntimeError):
    """Raised when a required configuration entry is missing or malformed."""


def require_present(value: T | None, name: str) -> T:
    """
    Ensure that a value is present (not None).

    Use this for values loaded from JSON or passed in by callers where
    None means the table is incomplete.
    """
    if value is None:
        raise ConfigurationError(f"Required value '{name}' is missing.")
    return value


def require_key(mapping: Mapping[str, Any], key: str) -> Any:
    """
    Ensure that a key exists in a mapping and return its value.

    Raises ConfigurationError instead of KeyError so callers can catch a
    single exception type for every table problem.
    """
    if key not in mapping:
        raise ConfigurationError(f"Required key '{key}' is missing from mapping.")
    return mapping[key]


def require_type(value: Any, expected: type | tuple, name: str) -> Any:
    """Ensure a value has the expected type (bool is never accepted as a number)."""
    if isinstance(value, bool) and bool not in _as_tuple(expected):
        raise ConfigurationError(
            f"'{name}' must be {_type_names(expected)}, got bool"
        )
    if not isinstance(value, expected):
        raise ConfigurationError(
            f"'{name}' must be {_type_names(expected)}, got {type(value).__name__}"
        )
    return value


def require_number_list(values: Any, length: int, name: str) -> Sequence[float]:
    """Ensure a value is a list of exactly `length` numbers."""
    require_type(values, list, name)
    if len(values) != length:
        raise ConfigurationError(
            f"'{name}' must contain {length} numbers, got {len(values)}"
        )
    for index, item in enumerate(values):
        require_type(item, (int, float), f"{name}[{index}]")
    return values


def _as_tuple(expected: type | tuple) -> tuple:
    return expected if isinstance(expected, tuple) else (expected,)


def _type_names(expected: type | tuple) -> str:
    return " or ".join(t.__name__ for t in _as_tuple(expected))
