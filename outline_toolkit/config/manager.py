"""Configuration loading and access helpers.

Two YAML sections ship with *outline_toolkit*: ``outline`` (panel settings,
see :class:`outline_toolkit.core.models.OutlineSettings`) and ``logging``
(a ``logging.config.dictConfig`` schema). Each section is the packaged file
updated key by key with the user's copy of the same file.

User files live in ``$OUTLINE_TOOLKIT_CONFIG_DIR`` when set, otherwise:
On Windows: ``%LOCALAPPDATA%\\OutlineToolkit\\config\\*.yml``
On Unix: ``~/.outline_toolkit/*.yml``

They are seeded from the packaged defaults on first run. Missing PyYAML
leaves every section empty so typed defaults apply.
"""

from __future__ import annotations

import importlib.resources as pkg_resources
import logging
import os
from pathlib import Path
from typing import Any, Dict, Tuple

logger = logging.getLogger(__name__)

__all__ = ["ConfigManager"]

Section = Dict[str, Any]


def _get_user_config_dir() -> Path:
    override = os.environ.get("OUTLINE_TOOLKIT_CONFIG_DIR", "").strip()
    if override:
        return Path(override)
    if os.name == 'nt':
        base = os.environ.get('LOCALAPPDATA') or str(Path.home() / "AppData" / "Local")
        return Path(base) / "OutlineToolkit" / "config"
    return Path.home() / ".outline_toolkit"


def _read_packaged(filename: str) -> str:
    return pkg_resources.files(__package__).joinpath(filename).read_text(encoding="utf-8")


class _Singleton(type):
    _instance: "ConfigManager" | None = None

    def __call__(cls, *args, **kwargs):
        if cls._instance is None:
            cls._instance = super().__call__(*args, **kwargs)
        return cls._instance


class ConfigManager(metaclass=_Singleton):
    """Process-wide lazy loader exposing configuration sections as dicts.

    The first instantiation reads every section; later calls return the same
    instance. Tests (and a future settings dialog) call :meth:`reset` to force
    a reload from disk.
    """

    SECTIONS = {
        "outline": "outline.yml",
        "logging": "logging.yml",
    }

    def __init__(self) -> None:
        self.user_config_dir: Path = _get_user_config_dir()
        self._data: Dict[str, Section] = {}
        self._load_all()

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance so the next call reloads from disk."""
        cls._instance = None

    # ------------------------------------------------------------------
    # Public helpers
    # ------------------------------------------------------------------
    def get(self, section: str) -> Section:
        """Return a section by name; unknown names give an empty mapping."""
        return self._data.get(section, {})

    def get_outline_config(self) -> Section:
        return self.get("outline")

    def get_logging_config(self) -> Section:
        return self.get("logging")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def _load_all(self) -> None:
        try:
            import yaml  # type: ignore
        except ModuleNotFoundError:
            logger.warning("PyYAML not installed – outline settings use built-in defaults")
            self._data = {name: {} for name in self.SECTIONS}
            return

        self._seed_user_dir()
        summary = []
        for name, filename in self.SECTIONS.items():
            section, status = self._load_section(yaml, filename)
            self._data[name] = section
            summary.append(f"{name}: {status}")
        logger.info("Config startup: %s", " | ".join(summary))

    def _load_section(self, yaml: Any, filename: str) -> Tuple[Section, str]:
        section: Section = {}
        status = "missing"
        try:
            section.update(yaml.safe_load(_read_packaged(filename)) or {})
            status = "loaded"
        except OSError:
            logger.error("Missing packaged config %s", filename)
        except yaml.YAMLError as exc:
            logger.error("Invalid packaged config %s: %s", filename, exc)
            status = "invalid"

        user_path = self.user_config_dir / filename
        if not user_path.exists():
            return section, status
        try:
            overrides = yaml.safe_load(user_path.read_text(encoding="utf-8")) or {}
            if not isinstance(overrides, dict):
                raise ValueError(f"expected a mapping, got {type(overrides).__name__}")
        except (OSError, ValueError, yaml.YAMLError) as exc:
            logger.error("Could not parse user config %s: %s", user_path, exc)
            return section, status
        section.update(overrides)
        return section, f"{status}+overrides"

    def _seed_user_dir(self) -> None:
        """Copy packaged files the user does not have yet."""
        try:
            self.user_config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error("Could not create user config directory %s: %s", self.user_config_dir, exc)
            return
        for filename in self.SECTIONS.values():
            target = self.user_config_dir / filename
            if target.exists():
                continue
            try:
                target.write_text(_read_packaged(filename), encoding="utf-8")
                logger.info("Created user config: %s", target)
            except OSError as exc:
                logger.warning("Could not copy default config %s: %s", filename, exc)
