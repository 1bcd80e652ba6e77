# ===== MODULE DOCSTRING ===== #
"""
argguard: cheap argument checks for function entry points.

Usage:
    import argguard

    def connect(host, port, options=None):
        argguard.string(host, 'host')
        argguard.number(port, 'port')
        argguard.optional_object(options, 'options')

    argguard.array_of_uuid(ids, 'ids')
    argguard.guard(ids, 'ids must not be empty')

Every check raises :class:`ValidationFailure` on a mismatch. Setting the
``ARGGUARD_NDEBUG`` environment variable before import turns all checks of
the default registry into no-ops. Use :func:`build_registry` for a
registry with explicit settings or extra seed checks.
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import Any, Final, List

## ===== LOCAL ===== ##
from .checks import SeedCheck, normalize, denormalize
from .config import GuardConfig, load_config
from .error_utils import FailureDetail, RegistryError, ValidationFailure
from .logging import logger, set_verbosity
from .registry import CheckKind, Registry, build_registry

# ===== GLOBALS ===== #

## ===== DEFAULT REGISTRY ===== ##
guard: Final[Registry] = build_registry(load_config())

## ===== EXPORTS ===== ##
__all__: List[str] = [
    'CheckKind',
    'FailureDetail',
    'GuardConfig',
    'Registry',
    'RegistryError',
    'SeedCheck',
    'ValidationFailure',
    'build_registry',
    'denormalize',
    'guard',
    'load_config',
    'logger',
    'normalize',
    'set_verbosity',
] + list(guard)

# ===== FUNCTIONS ===== #

def __getattr__(name: str) -> Any:
    # Checks and assertions of the default registry, e.g. argguard.string
    try:
        return guard[name]
    except KeyError:
        raise AttributeError(f"module 'argguard' has no attribute '{name}'") from None

def __dir__() -> List[str]:
    return sorted(set(globals()) | set(guard))
