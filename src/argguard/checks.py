# ===== MODULE DOCSTRING ===== #
"""
Seed checks for argguard.

A seed check is a hand-written validator for one primitive or domain shape.
Every seed has the signature ``check(value, name=None) -> None`` and raises
:class:`~argguard.error_utils.ValidationFailure` when ``value`` does not
match. ``name`` is only used as the label in the failure message and
defaults to the expected type name.

The seeds provided here:
- bool, string, number, object, func (type tests, operator ``===``)
- buffer, date, regexp, stream (class tests, operator ``instanceof``)
- uuid (string with an 8-4-4-4-12 hex pattern, operator ``test``)

Derived checks (array-of and optional) are generated from these by
:mod:`argguard.registry`; nothing in this module knows about them.
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from types import MappingProxyType
from typing import (
    Any, Callable, Final, List,
    Mapping, Optional, Tuple, Type
)
import dataclasses
import datetime
import numbers
import math
import io
import re

## ===== LOCAL ===== ##
from .config import UUID_PATTERN
from .error_utils import (
    ValidationFailure, _type_name,
    format_type_required
)

# ===== GLOBALS ===== #

## ===== TYPE ALIASES ===== ##
Check = Callable[..., None]

## ===== NAME ALIASES ===== ##
# Short registry name -> long name used in messages
TYPE_ALIASES: Final[Mapping[str, str]] = MappingProxyType({
    'func': 'function',
    'bool': 'boolean',
})
_REVERSE_ALIASES: Final[Mapping[str, str]] = MappingProxyType(
    {long: short for short, long in TYPE_ALIASES.items()}
)

## ===== TYPE GROUPS ===== ##
_PRIMITIVE_TYPES: Final[Tuple[Type, ...]] = (type(None), bool, numbers.Number, str, bytes)
_BUFFER_TYPES: Final[Tuple[Type, ...]] = (bytes, bytearray, memoryview)

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'Check',
    'DEFAULT_SEEDS',
    'SeedCheck',
    'TYPE_ALIASES',
    'check_bool',
    'check_buffer',
    'check_date',
    'check_func',
    'check_number',
    'check_object',
    'check_regexp',
    'check_stream',
    'check_string',
    'check_uuid',
    'denormalize',
    'normalize',
]

# ===== CLASSES ===== #

@dataclasses.dataclass(frozen=True)
class SeedCheck:
    """A named seed check the registry derives its families from.

    Attributes:
        name (str): Short registry name, e.g. ``'bool'``.
        check (Check): The validator, ``check(value, name=None) -> None``.
    """
    name: str
    check: Check

    @property
    def expected(self) -> str:
        """Type name shown in failure messages (``'boolean'`` for ``'bool'``)."""
        return normalize(self.name)

# ===== FUNCTIONS ===== #

## ===== NAME NORMALIZATION ===== ##
def normalize(name: str) -> str:
    """Map a short check name to its long form (``func`` -> ``function``)."""
    return TYPE_ALIASES.get(name, name)

def denormalize(name: str) -> str:
    """Map a long type name back to its registry name (``boolean`` -> ``bool``)."""
    return _REVERSE_ALIASES.get(name, name)

## ===== PRIMITIVE TESTS ===== ##
def _assert_type(value: Any, matches: bool, expected: str, name: Optional[str]) -> None:
    if not matches:
        raise ValidationFailure(
            format_type_required(name or expected, expected),
            actual=_type_name(value),
            expected=expected,
            operator='==='
        )

def _assert_instance(value: Any, cls: Any, expected: str, name: Optional[str]) -> None:
    if not isinstance(value, cls):
        raise ValidationFailure(
            format_type_required(name or expected, expected),
            actual=_type_name(value),
            expected=expected,
            operator='instanceof'
        )

def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a number here
    return isinstance(value, numbers.Real) and not isinstance(value, bool)

def _is_object(value: Any) -> bool:
    return not isinstance(value, _PRIMITIVE_TYPES) and not callable(value)

## ===== SEED CHECKS ===== ##
def check_bool(value: Any, name: Optional[str] = None) -> None:
    _assert_type(value, isinstance(value, bool), 'boolean', name)

def check_string(value: Any, name: Optional[str] = None) -> None:
    _assert_type(value, isinstance(value, str), 'string', name)

def check_number(value: Any, name: Optional[str] = None) -> None:
    """Require a real, finite number. ``bool``, NaN and infinities fail."""
    _assert_type(value, _is_number(value), 'number', name)
    # Rationals are always finite; math.isfinite overflows on very large ones
    if not isinstance(value, numbers.Rational) and not math.isfinite(value):
        raise ValidationFailure(
            format_type_required(name or 'number', 'number'),
            actual=_type_name(value),
            expected='number',
            operator='isfinite'
        )

def check_object(value: Any, name: Optional[str] = None) -> None:
    """Require a non-primitive, non-callable value (containers, instances)."""
    _assert_type(value, _is_object(value), 'object', name)

def check_func(value: Any, name: Optional[str] = None) -> None:
    _assert_type(value, callable(value), 'function', name)

def check_buffer(value: Any, name: Optional[str] = None) -> None:
    _assert_instance(value, _BUFFER_TYPES, 'buffer', name)

def check_date(value: Any, name: Optional[str] = None) -> None:
    _assert_instance(value, datetime.date, 'date', name)

def check_regexp(value: Any, name: Optional[str] = None) -> None:
    _assert_instance(value, re.Pattern, 'regexp', name)

def check_stream(value: Any, name: Optional[str] = None) -> None:
    _assert_instance(value, io.IOBase, 'stream', name)

def check_uuid(value: Any, name: Optional[str] = None) -> None:
    """Require a string in canonical 8-4-4-4-12 hex form, in any case.

    A non-string fails with ``expected='uuid'`` rather than ``'string'``, so
    the error always names the check that was called.
    """
    _assert_type(value, isinstance(value, str), 'uuid', name)
    if UUID_PATTERN.fullmatch(value) is None:
        raise ValidationFailure(
            format_type_required(name or 'uuid', 'uuid'),
            actual='str',
            expected='uuid',
            operator='test'
        )

# ===== PUBLIC API EXPORTS ===== #

DEFAULT_SEEDS: Final[Tuple[SeedCheck, ...]] = (
    SeedCheck('bool', check_bool),
    SeedCheck('buffer', check_buffer),
    SeedCheck('date', check_date),
    SeedCheck('func', check_func),
    SeedCheck('number', check_number),
    SeedCheck('object', check_object),
    SeedCheck('regexp', check_regexp),
    SeedCheck('stream', check_stream),
    SeedCheck('string', check_string),
    SeedCheck('uuid', check_uuid),
)
