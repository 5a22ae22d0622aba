"""
Listing configuration.

``ListingConfig`` controls how ``format_listing`` renders a disassembly. It
can be built in code, from a dict, or from a YAML file.
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

logger = logging.getLogger(__name__)


@dataclass
class ListingConfig:
    """Rendering options for a disassembly listing."""
    hex_offsets: bool = True
    offset_width: int = 4
    uppercase: bool = False  # hex digits in offsets, bytes and operands
    show_bytes: bool = False

    def __post_init__(self):
        for name in ("hex_offsets", "uppercase", "show_bytes"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(f"{name} must be true or false, got {value!r}")
        if isinstance(self.offset_width, bool) or not isinstance(self.offset_width, int):
            raise ValueError(f"offset_width must be an integer, got {self.offset_width!r}")
        if self.offset_width < 0:
            raise ValueError(f"offset_width must be >= 0, got {self.offset_width}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ListingConfig":
        """Build a config from a mapping, ignoring keys it does not know."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown listing options: %s", ", ".join(unknown))
        return cls(**{key: value for key, value in data.items() if key in known})

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "ListingConfig":
        """Load a config from a YAML file. An empty file gives the defaults."""
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError(f"Listing config {path} must contain a mapping")
        logger.debug("Loaded listing config from %s", path)
        return cls.from_dict(data)
