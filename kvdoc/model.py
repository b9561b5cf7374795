"""
model.py - Document model types for weapon KeyValue files.

A WeaponDocument is rebuilt from text on every load and every edit; it never
carries identity across edits.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

Value = Union[str, int, float]


@dataclass(frozen=True)
class Property:
    """One key/value pair and the 1-based line it was read from."""
    key: str
    value: Value
    source_line: int

    @property
    def is_numeric(self) -> bool:
        return not isinstance(self.value, str)


@dataclass
class ModEntry:
    """An entry of the Mods block. Empty properties means all defaults."""
    name: str
    properties: Dict[str, str] = field(default_factory=dict)


@dataclass
class CrosshairEntry:
    """One Crosshair_<N> block of RUI_CrosshairData."""
    name: str
    ui: Optional[str] = None
    base_spread: Optional[str] = None
    args: Dict[str, str] = field(default_factory=dict)

    @property
    def index(self) -> int:
        """Numeric suffix of the block name (Crosshair_3 -> 3)."""
        return int(self.name.rsplit("_", 1)[1])


@dataclass
class CrosshairData:
    default_args: Dict[str, str] = field(default_factory=dict)
    crosshairs: List[CrosshairEntry] = field(default_factory=list)


@dataclass(eq=False)
class WeaponDocument:
    """
    Flat key -> Property map plus the typed sub-parses of the special blocks.

    Two documents compare equal when their key/value pairs are equal; source
    line numbers and block parses are derived data.
    """
    properties: Dict[str, Property] = field(default_factory=dict)
    mods: List[ModEntry] = field(default_factory=list)
    crosshair_data: Optional[CrosshairData] = None
    base_weapon: Optional[str] = None
    ui_blocks: Tuple[str, ...] = ()
    line_count: int = 0

    def get(self, key: str, default: Any = None) -> Any:
        prop = self.properties.get(key)
        return default if prop is None else prop.value

    def values(self) -> Dict[str, Value]:
        """Plain key -> value mapping, in first-seen key order."""
        return {key: prop.value for key, prop in self.properties.items()}

    def __getitem__(self, key: str) -> Value:
        return self.properties[key].value

    def __contains__(self, key: object) -> bool:
        return key in self.properties

    def __len__(self) -> int:
        return len(self.properties)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, WeaponDocument):
            return NotImplemented
        return self.values() == other.values()

    __hash__ = None
