"""Central logging configuration for Outline Toolkit.

Call :func:`setup_logging` once at application start-up. Library code only
creates module loggers and never configures handlers itself.

Environment:
    OUTLINE_LOG_DIR        directory for ``app.log`` (default ``logs``)
    OUTLINE_DEBUG_REVEAL   truthy -> DEBUG for the controller and reveal coordinator
    OUTLINE_DEBUG_MODULES  comma-separated logger names forced to DEBUG
"""

from __future__ import annotations

import logging
import logging.config
import os
from typing import Any, Dict, List, Optional

from outline_toolkit.config import ConfigManager

__all__ = ["setup_logging"]

_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
_TRUTHY = {'1', 'true', 'yes', 'on'}
_REVEAL_LOGGERS = (
    'outline_toolkit.ui.controllers.outline_controller',
    'outline_toolkit.ui.tabs.outline.reveal_coordinator',
)


def setup_logging(log_dir: Optional[str] = None) -> Optional[str]:
    """Configure logging from the ``logging`` YAML section.

    Parameters
    ----------
    log_dir : str, optional
        Overrides ``$OUTLINE_LOG_DIR``.

    Returns
    -------
    str or None
        Path of the log file in use, or None when only console logging
        could be set up.
    """
    log_dir = log_dir or os.environ.get("OUTLINE_LOG_DIR", "logs")
    log_file: Optional[str] = os.path.join(log_dir, "app.log")

    try:
        os.makedirs(log_dir, exist_ok=True)
        config = _with_log_file(ConfigManager().get_logging_config(), log_file)
        if config is None:
            log_file = None
            _setup_minimal_logging()
        else:
            logging.config.dictConfig(config)
            logging.getLogger("outline_toolkit").info("===== Logging initialised from config files =====")
    except (ValueError, TypeError, AttributeError, ImportError, OSError) as exc:
        # dictConfig reports every schema problem as one of these
        print(f"Error loading logging config: {exc}")
        log_file = None
        _setup_minimal_logging()

    for name in _debug_targets():
        _enable_debug(name)
    return log_file


def _with_log_file(config: Dict[str, Any], log_file: str) -> Optional[Dict[str, Any]]:
    """Return ``config`` with the file handler pointed at ``log_file``.

    None means the section is unusable (missing, empty or without a schema
    version) and the caller should fall back.
    """
    if not isinstance(config, dict) or not config.get("version"):
        return None
    file_handler = config.get("handlers", {}).get("file")
    if isinstance(file_handler, dict):
        file_handler["filename"] = log_file
    return config


def _setup_minimal_logging() -> None:
    """Console-only logging when the configured setup is unavailable."""
    logging.config.dictConfig({
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {'simple': {'format': _FORMAT}},
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'root': {'level': 'INFO', 'handlers': ['console']},
    })
    logging.error("===== Logging initialised with minimal fallback (config error) =====")


def _debug_targets() -> List[str]:
    targets: List[str] = []
    if os.environ.get('OUTLINE_DEBUG_REVEAL', '').strip().lower() in _TRUTHY:
        targets.extend(_REVEAL_LOGGERS)
    extra = os.environ.get('OUTLINE_DEBUG_MODULES', '')
    targets.extend(name.strip() for name in extra.split(',') if name.strip())
    return targets


def _enable_debug(name: str) -> None:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    # Handlers inherited through propagation may filter at INFO
    if not any(h.level <= logging.DEBUG for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setLevel(logging.DEBUG)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    logger.info("Debug override active for logger '%s'", name)
