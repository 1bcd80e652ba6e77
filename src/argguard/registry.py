# ===== MODULE DOCSTRING ===== #
"""
Registry of argguard checks.

:func:`build_registry` takes a set of seed checks and a
:class:`~argguard.config.GuardConfig` and produces a frozen
:class:`Registry`. For every seed ``k`` it generates one check per
:class:`CheckKind`:

- ``k``                    the seed itself
- ``array_of_k``           a sequence whose elements all pass ``k``
- ``optional_k``           ``None`` or a value passing ``k``
- ``optional_array_of_k``  ``None`` or a value passing ``array_of_k``

The registry also carries the generic assertions of
:mod:`argguard.assertions`. Every generated callable returns immediately
when the registry was built with ``disabled=True``.

Usage:
    from argguard.registry import build_registry

    guard = build_registry()
    guard.string(name, 'name')
    guard.optional_array_of_number(weights, 'weights')
    guard(len(items) > 0, 'items must not be empty')
"""

# ===== IMPORTS ===== #

## ===== STANDARD LIBRARY ===== ##
from collections.abc import Sequence
from types import MappingProxyType
from typing import (
    Any, Callable, Dict, Final, Iterable, Iterator,
    List, Mapping, Optional, Tuple
)
import enum

## ===== LOCAL ===== ##
from .assertions import build_assertions
from .checks import (
    DEFAULT_SEEDS, Check, SeedCheck,
    normalize, denormalize
)
from .config import GuardConfig
from .logging import log_registry_built
from .error_utils import (
    RegistryError, ValidationFailure,
    _type_name, format_array_required
)

# ===== GLOBALS ===== #

## ===== SEQUENCE RULES ===== ##
# Sequences that are never treated as arrays of elements
_NON_ARRAY_SEQUENCES: Final[Tuple[type, ...]] = (str, bytes, bytearray, memoryview)

## ===== EXPORTS ===== ##
__all__: Final[List[str]] = [
    'CheckKind',
    'Registry',
    'build_registry',
]

# ===== CLASSES ===== #

class CheckKind(enum.Enum):
    """Families of checks generated for each seed; the value is the name prefix."""
    SEED = ''
    ARRAY_OF = 'array_of_'
    OPTIONAL = 'optional_'
    OPTIONAL_ARRAY_OF = 'optional_array_of_'

    def check_name(self, seed_name: str) -> str:
        return self.value + seed_name

class Registry(Mapping):
    """Read-only mapping of check and assertion names to callables.

    Entries are also reachable as attributes (``registry.string``), and
    calling the registry itself asserts that its first argument is truthy.
    ``ValidationFailure`` is available unwrapped as a class attribute.
    """
    ValidationFailure = ValidationFailure

    def __init__(
        self,
        entries: Mapping[str, Callable[..., None]],
        table: Mapping[Tuple[CheckKind, str], Check],
        config: GuardConfig
    ):
        self._entries = entries
        self._table = table
        self._config = config

    @property
    def config(self) -> GuardConfig:
        return self._config

    @property
    def seed_names(self) -> Tuple[str, ...]:
        return tuple(seed for kind, seed in self._table if kind is CheckKind.SEED)

    def dispatch(self, kind: CheckKind, seed_name: str) -> Check:
        """Look up the check generated for ``seed_name`` in family ``kind``.

        Raises:
            RegistryError: If no seed of that name was registered.
        """
        try:
            return self._table[(kind, seed_name)]
        except KeyError:
            raise RegistryError(f"No {kind.name.lower()} check for seed '{seed_name}'") from None

    def __call__(self, value: Any, message: Optional[str] = None) -> None:
        self._entries['ok'](value, message)

    def __getattr__(self, name: str) -> Callable[..., None]:
        # Only reached when normal attribute lookup fails
        entries = self.__dict__.get('_entries')
        if entries is not None and name in entries:
            return entries[name]
        raise AttributeError(f"'{type(self).__name__}' object has no attribute '{name}'")

    def __dir__(self) -> List[str]:
        return sorted(set(super().__dir__()) | set(self._entries))

    def __getitem__(self, name: str) -> Callable[..., None]:
        return self._entries[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<Registry checks={len(self._table)} disabled={self._config.disabled}>"

# ===== FUNCTIONS ===== #

## ===== ARRAY VALIDATION ===== ##
def _is_array(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, _NON_ARRAY_SEQUENCES)

def _validate_array(value: Any, expected: str, name: Optional[str], seeds: Mapping[str, SeedCheck]) -> None:
    """Check that ``value`` is a sequence and every element passes the seed.

    ``expected`` is the long type name; the element check is found by
    mapping it back to its short registry name. Elements are checked in
    order and the first failure propagates unchanged.
    """
    label = name or expected
    if not _is_array(value):
        raise ValidationFailure(
            format_array_required(label, expected),
            actual=_type_name(value),
            expected='array',
            operator='sequence'
        )
    element_check = seeds[denormalize(expected)].check
    for element in value:
        element_check(element, label)

## ===== CHECK FACTORIES ===== ##
def _seed_factory(seed: SeedCheck, seeds: Mapping[str, SeedCheck], disabled: bool) -> Check:
    check = seed.check

    def run(value: Any, name: Optional[str] = None) -> None:
        if disabled:
            return
        check(value, name)
    return run

def _array_factory(seed: SeedCheck, seeds: Mapping[str, SeedCheck], disabled: bool) -> Check:
    expected = seed.expected

    def run(value: Any, name: Optional[str] = None) -> None:
        if disabled:
            return
        _validate_array(value, expected, name, seeds)
    return run

def _optional_factory(seed: SeedCheck, seeds: Mapping[str, SeedCheck], disabled: bool) -> Check:
    check = seed.check

    def run(value: Any, name: Optional[str] = None) -> None:
        if disabled or value is None:
            return
        check(value, name)
    return run

def _optional_array_factory(seed: SeedCheck, seeds: Mapping[str, SeedCheck], disabled: bool) -> Check:
    # Delegates to the array rule for the element seed, not to array_of_<k>
    expected = normalize(seed.name)

    def run(value: Any, name: Optional[str] = None) -> None:
        if disabled or value is None:
            return
        _validate_array(value, expected, name, seeds)
    return run

_FACTORIES: Final[Mapping[CheckKind, Callable[[SeedCheck, Mapping[str, SeedCheck], bool], Check]]] = MappingProxyType({
    CheckKind.SEED: _seed_factory,
    CheckKind.ARRAY_OF: _array_factory,
    CheckKind.OPTIONAL: _optional_factory,
    CheckKind.OPTIONAL_ARRAY_OF: _optional_array_factory,
})

## ===== BUILDER ===== ##
def _validate_seed(seed: SeedCheck) -> None:
    if not seed.name.isidentifier() or seed.name != seed.name.lower() or seed.name.startswith('_'):
        raise RegistryError(f"Seed name '{seed.name}' must be a lowercase identifier without a leading underscore")
    if not callable(seed.check):
        raise RegistryError(f"Seed '{seed.name}' check is not callable")
    if denormalize(normalize(seed.name)) != seed.name:
        raise RegistryError(f"Seed '{seed.name}' does not round-trip through the type alias table")

def _add_entry(entries: Dict[str, Callable[..., None]], name: str, func: Callable[..., None]) -> None:
    if name in entries:
        raise RegistryError(f"Check name '{name}' is generated more than once")
    if hasattr(Registry, name):
        raise RegistryError(f"Check name '{name}' collides with a Registry attribute")
    entries[name] = func

def build_registry(config: Optional[GuardConfig] = None, seeds: Optional[Iterable[SeedCheck]] = None) -> Registry:
    """Build a frozen registry of checks and assertions.

    Args:
        config: Registry settings. Defaults to ``GuardConfig()`` (enabled);
            the environment is not consulted here.
        seeds: Seed checks to derive from. Defaults to the built-in seeds.

    Returns:
        The populated Registry.

    Raises:
        RegistryError: If a seed name is invalid, or two entries (seed,
            derived or assertion) end up with the same name.
    """
    if config is None:
        config = GuardConfig()
    seed_list = list(DEFAULT_SEEDS if seeds is None else seeds)

    seed_map: Dict[str, SeedCheck] = {}
    for seed in seed_list:
        _validate_seed(seed)
        if seed.name in seed_map:
            raise RegistryError(f"Seed '{seed.name}' is registered more than once")
        seed_map[seed.name] = seed
    frozen_seeds = MappingProxyType(seed_map)

    entries: Dict[str, Callable[..., None]] = {}
    table: Dict[Tuple[CheckKind, str], Check] = {}
    for kind in CheckKind:
        factory = _FACTORIES[kind]
        for seed in seed_list:
            check_name = kind.check_name(seed.name)
            func = factory(seed, frozen_seeds, config.disabled)
            func.__name__ = check_name
            func.__qualname__ = check_name
            _add_entry(entries, check_name, func)
            table[(kind, seed.name)] = func

    for name, assertion in build_assertions(config).items():
        _add_entry(entries, name, assertion)

    log_registry_built(len(seed_list), len(table), len(entries), config.disabled)

    return Registry(MappingProxyType(entries), MappingProxyType(table), config)
