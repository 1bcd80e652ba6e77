# ===== MODULE DOCSTRING ===== #
"""
General-purpose assertions re-exported by argguard registries.

The assertions are driven by the standard library's ``unittest.TestCase``
methods, run on a private case whose failure exception is
:class:`~argguard.error_utils.ValidationFailure`. A few (``ok``,
``strict_equal``, ``if_error``, ``fail`` ...) have no direct ``TestCase``
counterpart and are written here.

:func:`build_assertions` wraps every entry of the static assertion table
with the registry's disable switch.
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from types import MappingProxyType
from typing import (
    Any, Callable, Dict, Final,
    List, Mapping, Optional, Tuple, Type
)
import functools
import logging
import unittest

## ===== LOCAL ===== ##
from .error_utils import ValidationFailure, _type_name
from .config import GuardConfig
from .logging import _log

# ===== GLOBALS ===== #

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'ASSERTION_NAMES',
    'build_assertions',
]

# ===== CLASSES ===== #

class _AssertionCase(unittest.TestCase):
    """TestCase used only for its assert* methods."""
    failureException = ValidationFailure
    longMessage = True

    def runTest(self) -> None:
        pass

_CASE: Final[_AssertionCase] = _AssertionCase()

# ===== FUNCTIONS ===== #

## ===== HAND-WRITTEN ASSERTIONS ===== ##
def ok(value: Any, message: Optional[str] = None) -> None:
    """Fail unless ``value`` is truthy."""
    if not value:
        raise ValidationFailure(
            message or f"{value!r} == True",
            actual=repr(value),
            expected='True',
            operator='=='
        )

def strict_equal(actual: Any, expected: Any, message: Optional[str] = None) -> None:
    """Fail unless both values have the same type and compare equal."""
    if type(actual) is not type(expected) or actual != expected:
        raise ValidationFailure(
            message or f"{actual!r} === {expected!r}",
            actual=_type_name(actual),
            expected=_type_name(expected),
            operator='==='
        )

def not_strict_equal(actual: Any, expected: Any, message: Optional[str] = None) -> None:
    if type(actual) is type(expected) and actual == expected:
        raise ValidationFailure(
            message or f"{actual!r} !== {expected!r}",
            actual=_type_name(actual),
            expected=_type_name(expected),
            operator='!=='
        )

def throws(block: Callable[[], Any], error: Type[BaseException] = Exception, message: Optional[str] = None) -> None:
    """Fail unless calling ``block`` raises ``error``."""
    with _CASE.assertRaises(error, msg=message):
        block()

def does_not_throw(block: Callable[[], Any], error: Type[BaseException] = Exception, message: Optional[str] = None) -> None:
    """Fail if calling ``block`` raises ``error``; the raised exception is chained."""
    try:
        block()
    except error as exc:
        raise ValidationFailure(
            message or f"Got unwanted exception: {exc!r}",
            actual=_type_name(exc),
            operator='does_not_throw'
        ) from exc

def if_error(value: Any) -> None:
    """Raise ``value`` if it is an exception, fail if it is any other truthy value."""
    if isinstance(value, BaseException):
        raise value
    if value:
        raise ValidationFailure(
            f"if_error got unwanted value: {value!r}",
            actual=_type_name(value),
            operator='if_error'
        )

def fail(
    actual: Any = None,
    expected: Any = None,
    message: Optional[str] = None,
    operator: Optional[str] = None
) -> None:
    """Unconditionally raise a ValidationFailure."""
    raise ValidationFailure(
        message or f"{actual!r} {operator or '!='} {expected!r}",
        actual=None if actual is None else repr(actual),
        expected=None if expected is None else repr(expected),
        operator=operator
    )

## ===== ASSERTION TABLE ===== ##
# Exported name -> TestCase method
_TESTCASE_ASSERTIONS: Final[Tuple[Tuple[str, str], ...]] = (
    ('equal', 'assertEqual'),
    ('not_equal', 'assertNotEqual'),
    # == already compares containers element-wise; assertEqual adds diffs
    ('deep_equal', 'assertEqual'),
    ('not_deep_equal', 'assertNotEqual'),
    ('is_in', 'assertIn'),
    ('not_in', 'assertNotIn'),
    ('is_none', 'assertIsNone'),
    ('is_not_none', 'assertIsNotNone'),
    ('is_instance', 'assertIsInstance'),
    ('almost_equal', 'assertAlmostEqual'),
    ('matches', 'assertRegex'),
)

_LOCAL_ASSERTIONS: Final[Tuple[Tuple[str, Callable[..., None]], ...]] = (
    ('ok', ok),
    ('strict_equal', strict_equal),
    ('not_strict_equal', not_strict_equal),
    ('throws', throws),
    ('does_not_throw', does_not_throw),
    ('if_error', if_error),
    ('fail', fail),
)

ASSERTION_NAMES: Final[Tuple[str, ...]] = tuple(
    name for name, _ in _LOCAL_ASSERTIONS + _TESTCASE_ASSERTIONS
)

def _wrap(name: str, assertion: Callable[..., Any], disabled: bool) -> Callable[..., None]:
    @functools.wraps(assertion)
    def wrapper(*args: Any, **kwargs: Any) -> None:
        if disabled:
            return
        assertion(*args, **kwargs)
    wrapper.__name__ = name
    wrapper.__qualname__ = name
    return wrapper

def build_assertions(config: GuardConfig) -> Mapping[str, Callable[..., None]]:
    """Produce the re-exported assertions for a registry.

    Args:
        config: Registry settings; a disabled config yields no-op assertions.

    Returns:
        A read-only mapping of assertion name to callable.
    """
    assertions: Dict[str, Callable[..., None]] = {}
    for name, func in _LOCAL_ASSERTIONS:
        assertions[name] = _wrap(name, func, config.disabled)
    for name, method_name in _TESTCASE_ASSERTIONS:
        assertions[name] = _wrap(name, getattr(_CASE, method_name), config.disabled)
    if _log.isEnabledFor(logging.DEBUG):
        _log.debug(f"TRACE assertions.build_assertions: Built {len(assertions)} assertions (disabled={config.disabled})")
    return MappingProxyType(assertions)
