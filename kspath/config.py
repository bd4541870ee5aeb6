"""Configuration classes for kspath components."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional, Union

from kspath.lib.algorithms.base import SearchMode


def parse_search_mode(value: Union[SearchMode, str, int]) -> SearchMode:
    """
    Convert a mode given as enum, name or number into a SearchMode.

    Names are case-insensitive ("vanilla", "BIDIR", ...).

    Raises:
        ValueError: If the value does not name a known mode.
    """
    if isinstance(value, SearchMode):
        return value
    if isinstance(value, str):
        try:
            return SearchMode[value.strip().upper()]
        except KeyError:
            pass
    elif isinstance(value, int) and not isinstance(value, bool):
        try:
            return SearchMode(value)
        except ValueError:
            pass
    valid = ", ".join(m.name.lower() for m in SearchMode)
    raise ValueError(f"Unknown search mode {value!r}; expected one of: {valid}")


@dataclass
class SearchConfig:
    """Configuration for path searches."""

    # Strategy used by shortest_path() when no mode is passed
    mode: SearchMode = SearchMode.BIDIR

    # Number of paths requested by the `ksp` command when -k is not given
    k: int = 3

    # Edge attribute holding the edge weight in graph documents
    cost_attr: str = "cost"

    def __post_init__(self) -> None:
        self.mode = parse_search_mode(self.mode)
        if isinstance(self.k, bool) or not isinstance(self.k, int) or self.k < 0:
            raise ValueError(f"k must be a non-negative integer, got {self.k!r}")
        if not isinstance(self.cost_attr, str) or not self.cost_attr:
            raise ValueError("cost_attr must be a non-empty string")

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> SearchConfig:
        """
        Build a config from a mapping such as the `search:` section of a
        graph document.

        Raises:
            ValueError: If the mapping has unknown keys or invalid values.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("'search' section must be a mapping")
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in data if key not in known)
        if unknown:
            raise ValueError(f"Unknown search config keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.name.lower(),
            "k": self.k,
            "cost_attr": self.cost_attr,
        }


# Global configuration instance
SEARCH_CONFIG = SearchConfig()
