# ===== MODULE DOCSTRING ===== #
"""Configuration constants and the runtime switch for argguard.

The only runtime setting is the global disable switch. It is read from the
``ARGGUARD_NDEBUG`` environment variable exactly once, when the default
registry is built at import time. Registries built explicitly take a
:class:`GuardConfig` instead of looking at the environment.
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import Final, FrozenSet, List, Mapping, Optional, Tuple
import dataclasses
import os
import re

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'GuardConfig',
    'load_config',
    'LOG_LEVEL_ENV_VAR',
    'NDEBUG_ENV_VAR',
    'UUID_PATTERN',
]

## ===== ENVIRONMENT ===== ##
NDEBUG_ENV_VAR: Final[str] = 'ARGGUARD_NDEBUG'
LOG_LEVEL_ENV_VAR: Final[str] = 'ARGGUARD_LOG_LEVEL'
# Values of NDEBUG_ENV_VAR that leave validation switched on
_FALSY_ENV_VALUES: Final[FrozenSet[str]] = frozenset({'', '0', 'false', 'no', 'off'})

## ===== PATTERNS ===== ##
UUID_PATTERN: Final[re.Pattern] = re.compile(
    r'^[a-fA-F0-9]{8}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{12}$'
)

## ===== MESSAGES ===== ##
TYPE_REQUIRED: Final[str] = '{name} ({expected}) is required'
ARRAY_TYPE_REQUIRED: Final[str] = '{name} ([{expected}]) required'

## ===== INTERNALS ===== ##
# Frames from these packages are skipped when locating the caller
_INTERNAL_MODULE_PREFIXES: Final[Tuple[str, ...]] = ('argguard', 'unittest')

# ===== CLASSES ===== #

@dataclasses.dataclass(frozen=True)
class GuardConfig:
    """Immutable settings a registry is built with.

    Attributes:
        disabled (bool): When True every check and assertion produced by the
            registry returns immediately without looking at its arguments.
    """
    disabled: bool = False

# ===== FUNCTIONS ===== #

def load_config(environ: Optional[Mapping[str, str]] = None) -> GuardConfig:
    """Build a GuardConfig from the process environment.

    Args:
        environ: Mapping to read instead of ``os.environ``.

    Returns:
        A GuardConfig, disabled when ``ARGGUARD_NDEBUG`` is set to anything
        other than an empty string, ``0``, ``false``, ``no`` or ``off`` (any case).
    """
    if environ is None:
        environ = os.environ
    raw = environ.get(NDEBUG_ENV_VAR, '')
    return GuardConfig(disabled=raw.strip().lower() not in _FALSY_ENV_VALUES)
