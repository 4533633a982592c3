"""UI configuration models for the outline panel.

Typed view over the ``outline`` configuration section. Values come from the
YAML files loaded by :class:`outline_toolkit.config.ConfigManager`; anything
missing or malformed falls back to the defaults declared here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutlineSettings:
    """Tunables for the outline engine and its Tk front-end."""

    reveal_delay_ms: int = 50
    update_delay_ms: int = 300
    untitled_label: str = "(Untitled)"
    default_expanded: bool = True
    skip_code_blocks: bool = True
    max_heading_level: int = 6

    def __post_init__(self):
        """Validate numeric settings after initialization."""
        if self.reveal_delay_ms < 0 or self.update_delay_ms < 0:
            raise ValueError("Delays cannot be negative")
        if not 1 <= self.max_heading_level <= 6:
            raise ValueError("max_heading_level must be between 1 and 6")

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]]) -> "OutlineSettings":
        """Create settings from a configuration mapping.

        Unknown keys are ignored. A value of the wrong type (or one rejected
        by validation) is dropped with a warning and the default is used.
        """
        defaults = cls()
        values = {}
        for f in fields(cls):
            if not config or f.name not in config:
                continue
            raw = config[f.name]
            default = getattr(defaults, f.name)
            try:
                if isinstance(default, bool):
                    if not isinstance(raw, bool):
                        raise TypeError(f"expected bool, got {type(raw).__name__}")
                    value = raw
                elif isinstance(default, int):
                    if isinstance(raw, bool):
                        raise TypeError("expected int, got bool")
                    value = int(raw)
                else:
                    value = str(raw)
                cls(**{f.name: value})
            except (TypeError, ValueError) as exc:
                logger.warning("Ignoring outline setting %s=%r: %s", f.name, raw, exc)
                continue
            values[f.name] = value
        return cls(**values)


DEFAULT_OUTLINE_SETTINGS = OutlineSettings()
