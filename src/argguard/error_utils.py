# ===== MODULE DOCSTRING ===== #
"""Error types raised by argguard checks, and message formatting helpers."""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from typing import (
    Optional, Final,
    Dict, List, Any
)
import dataclasses
import inspect
import logging

## ===== LOCAL ===== ##
from .config import (
    TYPE_REQUIRED, ARRAY_TYPE_REQUIRED,
    _INTERNAL_MODULE_PREFIXES
)
from .logging import _log

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'FailureDetail',
    'RegistryError',
    'ValidationFailure',
    '_get_caller_info',
    '_type_name',
    'format_array_required',
    'format_type_required',
]

# ===== CLASSES ===== #

@dataclasses.dataclass(frozen=True)
class FailureDetail:
    """Machine-readable description of a failed check.

    Attributes:
        message (str): The formatted human-readable message.
        actual (Optional[str]): Runtime type name of the value that was checked.
        expected (Optional[str]): Type name the check required.
        operator (Optional[str]): Tag of the primitive test that failed
            (``===``, ``instanceof``, ``test``, ``isfinite`` or ``sequence``).
    """
    message: str
    actual: Optional[str] = None
    expected: Optional[str] = None
    operator: Optional[str] = None

class ValidationFailure(AssertionError, TypeError):
    """Raised when an argument fails a check or a re-exported assertion fails.

    Subclasses both AssertionError and TypeError so callers can catch it as
    either. Only ``message`` is required, which lets ``unittest`` raise it
    as its failure exception.
    """
    def __init__(
        self,
        message: str = '',
        actual: Optional[str] = None,
        expected: Optional[str] = None,
        operator: Optional[str] = None,
        caller: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.detail = FailureDetail(message=message, actual=actual, expected=expected, operator=operator)
        self.caller = caller if caller is not None else _get_caller_info()

    @property
    def message(self) -> str:
        return self.detail.message

    @property
    def actual(self) -> Optional[str]:
        return self.detail.actual

    @property
    def expected(self) -> Optional[str]:
        return self.detail.expected

    @property
    def operator(self) -> Optional[str]:
        return self.detail.operator

class RegistryError(ValueError):
    """Raised when a registry cannot be built or a check name is unknown."""

# ===== FUNCTIONS ===== #

def _type_name(value: Any) -> str:
    """Runtime class name of ``value``, e.g. ``'int'`` or ``'NoneType'``."""
    return type(value).__name__

def format_type_required(name: str, expected: str) -> str:
    return TYPE_REQUIRED.format(name=name, expected=expected)

def format_array_required(name: str, expected: str) -> str:
    return ARRAY_TYPE_REQUIRED.format(name=name, expected=expected)

def _get_caller_info() -> Dict[str, Any]:
    """Get information about the frame that called into argguard.

    Searches up the stack for the first frame whose module is not part of
    argguard (or of unittest, which drives the generic assertions).

    Returns:
        A dictionary containing filename, lineno and function name of the
        caller frame, or empty values if unavailable.
    """
    frame = inspect.currentframe()
    try:
        search_frame = frame.f_back if frame is not None else None
        while search_frame is not None:
            module_name = search_frame.f_globals.get('__name__', '')
            if not _is_internal_module(module_name):
                code = search_frame.f_code
                if _log.isEnabledFor(logging.DEBUG):
                    _log.debug(f"TRACE error_utils._get_caller_info: Found caller frame: {code.co_filename}:{search_frame.f_lineno} in {code.co_name}")
                return {
                    'filename': code.co_filename or '',
                    'lineno': search_frame.f_lineno or 0,
                    'function': code.co_name or '',
                }
            search_frame = search_frame.f_back
        return {'filename': '', 'lineno': 0, 'function': ''}
    finally:
        # Break the reference cycle between this frame and its locals
        del frame
        if 'search_frame' in locals():
            del search_frame

def _is_internal_module(module_name: str) -> bool:
    for prefix in _INTERNAL_MODULE_PREFIXES:
        if module_name == prefix or module_name.startswith(prefix + '.'):
            return True
    return False
