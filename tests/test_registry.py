import datetime
import io
import re

import pytest

from argguard.checks import DEFAULT_SEEDS, SeedCheck
from argguard.config import GuardConfig
from argguard.error_utils import RegistryError, ValidationFailure
from argguard.registry import CheckKind, Registry, build_registry

VALID_UUID = "123e4567-e89b-12d3-a456-426614174000"

# One valid and one invalid sample per seed
SAMPLES = {
    'bool': (True, 'yes'),
    'buffer': (b'\x00', 'bytes'),
    'date': (datetime.date(2021, 5, 4), '2021-05-04'),
    'func': (len, 'len'),
    'number': (42, '42'),
    'object': ({'a': 1}, 1),
    'regexp': (re.compile(r'\d+'), r'\d+'),
    'stream': (io.StringIO(), 'stream'),
    'string': ('text', 7),
    'uuid': (VALID_UUID, 'not-a-uuid'),
}

EXPECTED = {seed.name: seed.expected for seed in DEFAULT_SEEDS}

def _counting_seed(name, log):
    """Seed accepting even ints that records every value it sees."""
    def check(value, label=None):
        log.append(value)
        if not isinstance(value, int) or value % 2:
            raise ValidationFailure(f"{label or name} (even) is required", actual=type(value).__name__, expected=name, operator='===')
    return SeedCheck(name, check)

class TestRegistryShape:
    def test_every_kind_is_generated_for_every_seed(self, registry):
        for seed in DEFAULT_SEEDS:
            for kind in CheckKind:
                assert kind.check_name(seed.name) in registry

    def test_derived_names(self, registry):
        assert 'array_of_bool' in registry
        assert 'optional_func' in registry
        assert 'optional_array_of_uuid' in registry

    def test_attribute_and_item_access_agree(self, registry):
        assert registry.string is registry['string']
        assert registry.optional_array_of_number is registry['optional_array_of_number']

    def test_dispatch_table(self, registry):
        assert registry.dispatch(CheckKind.ARRAY_OF, 'bool') is registry.array_of_bool
        assert registry.dispatch(CheckKind.SEED, 'uuid') is registry.uuid

    def test_dispatch_unknown_seed(self, registry):
        with pytest.raises(RegistryError, match="No array_of check for seed 'missing'"):
            registry.dispatch(CheckKind.ARRAY_OF, 'missing')

    def test_unknown_attribute(self, registry):
        with pytest.raises(AttributeError):
            registry.array_of_nothing

    def test_mapping_is_read_only(self, registry):
        with pytest.raises(TypeError):
            registry['string'] = print
        with pytest.raises(TypeError):
            registry._entries['string'] = print

    def test_generated_checks_are_named(self, registry):
        assert registry.optional_array_of_func.__name__ == 'optional_array_of_func'

    def test_seed_names(self, registry):
        assert registry.seed_names == tuple(seed.name for seed in DEFAULT_SEEDS)

    def test_exposes_failure_type_unwrapped(self, registry):
        assert registry.ValidationFailure is ValidationFailure
        assert Registry.ValidationFailure is ValidationFailure

    def test_repr(self, registry):
        assert repr(registry) == "<Registry checks=40 disabled=False>"

class TestArrayOf:
    @pytest.mark.parametrize("seed", sorted(SAMPLES))
    def test_all_valid_elements_pass(self, registry, seed):
        valid, _ = SAMPLES[seed]
        registry[f'array_of_{seed}']([valid, valid])
        registry[f'array_of_{seed}']((valid,))
        registry[f'array_of_{seed}']([])

    @pytest.mark.parametrize("seed", sorted(SAMPLES))
    def test_invalid_element_fails_with_seed_error(self, registry, seed):
        valid, invalid = SAMPLES[seed]
        with pytest.raises(ValidationFailure) as excinfo:
            registry[f'array_of_{seed}']([valid, invalid], 'items')
        assert excinfo.value.expected == EXPECTED[seed]
        assert excinfo.value.message == f"items ({EXPECTED[seed]}) is required"

    @pytest.mark.parametrize("seed", sorted(SAMPLES))
    def test_non_sequence_fails_before_iteration(self, registry, seed):
        with pytest.raises(ValidationFailure) as excinfo:
            registry[f'array_of_{seed}']("not an array", 'items')
        e = excinfo.value
        assert e.expected == 'array'
        assert e.actual == 'str'
        assert e.operator == 'sequence'
        assert e.message == f"items ([{EXPECTED[seed]}]) required"

    @pytest.mark.parametrize("value", [None, {'a': 1}, {1, 2}, b'ab', bytearray(b'ab'), memoryview(b'ab'), iter([1])])
    def test_non_array_values(self, registry, value):
        with pytest.raises(ValidationFailure) as excinfo:
            registry.array_of_number(value)
        assert excinfo.value.expected == 'array'

    def test_default_label_is_long_type_name(self, registry):
        with pytest.raises(ValidationFailure) as excinfo:
            registry.array_of_bool(True)
        assert excinfo.value.message == "boolean ([boolean]) required"
        with pytest.raises(ValidationFailure) as excinfo:
            registry.array_of_bool([True, 1])
        assert excinfo.value.message == "boolean (boolean) is required"

    def test_buffer_is_not_an_array_of_bytes(self, registry):
        with pytest.raises(ValidationFailure) as excinfo:
            registry.optional_array_of_number(memoryview(b'ab'), 'samples')
        assert excinfo.value.actual == 'memoryview'
        assert excinfo.value.message == "samples ([number]) required"

    def test_bool_and_func_round_trip(self, registry):
        registry.array_of_bool([True, False])
        registry.array_of_func([len, print])
        registry.optional_array_of_bool([False])
        registry.optional_array_of_func([len])
        with pytest.raises(ValidationFailure) as excinfo:
            registry.array_of_func([len, 'print'], 'callbacks')
        assert excinfo.value.message == "callbacks (function) is required"
        with pytest.raises(ValidationFailure) as excinfo:
            registry.optional_array_of_bool([0], 'flags')
        assert excinfo.value.message == "flags (boolean) is required"

    def test_first_failure_stops_iteration(self):
        seen = []
        registry = build_registry(GuardConfig(), seeds=[_counting_seed('even', seen)])
        with pytest.raises(ValidationFailure):
            registry.array_of_even([2, 3, 4, 5])
        assert seen == [2, 3]

    def test_non_array_never_reaches_element_check(self):
        seen = []
        registry = build_registry(GuardConfig(), seeds=[_counting_seed('even', seen)])
        with pytest.raises(ValidationFailure):
            registry.array_of_even("2468")
        assert seen == []

class TestOptional:
    @pytest.mark.parametrize("seed", sorted(SAMPLES))
    def test_none_always_passes(self, registry, seed):
        registry[f'optional_{seed}'](None)
        registry[f'optional_array_of_{seed}'](None)

    @pytest.mark.parametrize("seed", sorted(SAMPLES))
    def test_valid_value_passes(self, registry, seed):
        valid, _ = SAMPLES[seed]
        registry[f'optional_{seed}'](valid)
        registry[f'optional_array_of_{seed}']([valid])

    @pytest.mark.parametrize("seed", sorted(SAMPLES))
    def test_invalid_value_fails_like_base_check(self, registry, seed):
        _, invalid = SAMPLES[seed]
        with pytest.raises(ValidationFailure) as base:
            registry[seed](invalid, 'arg')
        with pytest.raises(ValidationFailure) as optional:
            registry[f'optional_{seed}'](invalid, 'arg')
        assert optional.value.detail == base.value.detail

    def test_optional_array_fails_like_array(self, registry):
        with pytest.raises(ValidationFailure) as base:
            registry.array_of_string([1], 'names')
        with pytest.raises(ValidationFailure) as optional:
            registry.optional_array_of_string([1], 'names')
        assert optional.value.detail == base.value.detail
        with pytest.raises(ValidationFailure) as excinfo:
            registry.optional_array_of_string('names')
        assert excinfo.value.expected == 'array'

    def test_false_and_empty_values_are_not_absent(self, registry):
        with pytest.raises(ValidationFailure):
            registry.optional_string(False)
        with pytest.raises(ValidationFailure):
            registry.optional_number('')

class TestDisabled:
    @pytest.mark.parametrize("name", [
        'string', 'number', 'uuid', 'array_of_bool', 'array_of_func',
        'optional_date', 'optional_array_of_stream',
    ])
    def test_checks_are_no_ops(self, disabled_registry, name):
        assert disabled_registry[name](object(), 'ignored') is None
        assert disabled_registry[name]("not an array") is None

    def test_every_entry_is_a_no_op(self, disabled_registry):
        for name in disabled_registry:
            assert disabled_registry[name](float('nan'), 'x') is None

    def test_bare_call_is_no_op(self, disabled_registry):
        disabled_registry(False, 'never raised')

    def test_custom_seed_is_not_called(self):
        seen = []
        registry = build_registry(GuardConfig(disabled=True), seeds=[_counting_seed('even', seen)])
        registry.even(3)
        registry.array_of_even([1, 3])
        registry.optional_even(5)
        assert seen == []
        assert registry.config.disabled is True

class TestBuilder:
    def test_defaults_to_enabled_config(self):
        registry = build_registry()
        assert registry.config == GuardConfig()
        with pytest.raises(ValidationFailure):
            registry.string(1)

    def test_custom_seeds_get_all_families(self):
        registry = build_registry(seeds=[_counting_seed('even', [])])
        assert {'even', 'array_of_even', 'optional_even', 'optional_array_of_even'} <= set(registry)
        assert 'string' not in registry

    def test_duplicate_seed_is_rejected(self):
        with pytest.raises(RegistryError, match="more than once"):
            build_registry(seeds=[_counting_seed('even', []), _counting_seed('even', [])])

    def test_derived_name_collision_is_rejected(self):
        seeds = [_counting_seed('even', []), _counting_seed('array_of_even', [])]
        with pytest.raises(RegistryError, match="'array_of_even' is generated more than once"):
            build_registry(seeds=seeds)

    def test_collision_with_assertion_is_rejected(self):
        with pytest.raises(RegistryError, match="'ok'"):
            build_registry(seeds=[_counting_seed('ok', [])])

    def test_collision_with_registry_attribute_is_rejected(self):
        with pytest.raises(RegistryError, match="collides with a Registry attribute"):
            build_registry(seeds=[_counting_seed('keys', [])])

    def test_long_alias_name_is_rejected(self):
        with pytest.raises(RegistryError, match="round-trip"):
            build_registry(seeds=[_counting_seed('boolean', [])])

    @pytest.mark.parametrize("name", ['Even', '_even', 'even-number', ''])
    def test_invalid_seed_names(self, name):
        with pytest.raises(RegistryError):
            build_registry(seeds=[_counting_seed(name, [])])

    def test_non_callable_seed(self):
        with pytest.raises(RegistryError, match="not callable"):
            build_registry(seeds=[SeedCheck('even', None)])
