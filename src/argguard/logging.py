# ===== MODULE DOCSTRING ===== #
"""
Package logger for argguard.

Every argguard module logs through the single ``_log`` defined here. Checks
themselves never log on success; the logger reports how registries are
assembled (seed count, generated checks, whether validation is disabled)
and, at DEBUG, where failures were traced back to.

The initial level comes from ``ARGGUARD_LOG_LEVEL`` (a level name such as
``debug``), defaulting to WARNING.

Usage:
    from argguard.logging import set_verbosity

    set_verbosity('debug')   # or logging.DEBUG
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import Final, List, Mapping, Optional, Union
import logging
import os
import sys

## ===== LOCAL ===== ##
from .config import LOG_LEVEL_ENV_VAR

# ===== GLOBALS ===== #

## ===== CONSTANTS ===== ##
LOG_FORMAT: Final[str] = '%(levelname)s:%(name)s: %(message)s'

# Accepted level names, lowercase
_LEVELS_BY_NAME: Final[Mapping[str, int]] = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
    'critical': logging.CRITICAL,
}

## ===== LOGGER SETUP ===== ##
_log: Final[logging.Logger] = logging.getLogger('argguard')

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'logger',
    'log_registry_built',
    'resolve_level',
    'set_verbosity',
]

# ===== FUNCTIONS ===== #

def resolve_level(level: Union[int, str]) -> int:
    """Turn a level constant or a case-insensitive level name into a level.

    Raises:
        ValueError: If ``level`` is neither a standard level nor its name.
    """
    if isinstance(level, str):
        resolved = _LEVELS_BY_NAME.get(level.strip().lower())
    else:
        resolved = level if level in _LEVELS_BY_NAME.values() else None
    if resolved is None:
        raise ValueError(
            f"Unknown argguard log level {level!r}; "
            f"expected one of {sorted(_LEVELS_BY_NAME, key=_LEVELS_BY_NAME.get)}"
        )
    return resolved

def set_verbosity(level: Union[int, str]) -> None:
    """Set the argguard logger level.

    Args:
        level: ``logging.DEBUG`` style constant or a name such as ``'debug'``.

    Raises:
        ValueError: If the level is not recognized.
    """
    _log.setLevel(resolve_level(level))
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug(f"TRACE logging.set_verbosity: argguard verbosity set to {logging.getLevelName(_log.level)}")

def log_registry_built(seed_count: int, check_count: int, entry_count: int, disabled: bool) -> None:
    """Report a freshly built registry.

    DEBUG gets the counts; INFO is emitted only for a disabled registry, since
    that silently turns every check into a no-op.
    """
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug(
            f"TRACE registry.build_registry: Built {check_count} checks from {seed_count} seeds, "
            f"{entry_count} entries total (disabled={disabled})"
        )
    if disabled:
        _log.info("argguard registry built with validation disabled; every check is a no-op")

def _initial_level(environ: Optional[Mapping[str, str]] = None) -> int:
    raw = (os.environ if environ is None else environ).get(LOG_LEVEL_ENV_VAR, '')
    if not raw.strip():
        return logging.WARNING
    try:
        return resolve_level(raw)
    except ValueError:
        return logging.WARNING

if not _log.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    _log.addHandler(_handler)
    _log.setLevel(_initial_level())

## ===== PUBLIC API ALIAS ===== ##
logger = _log
