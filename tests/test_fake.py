from unittest.mock import MagicMock

import pytest
from hypothesis import given, settings, strategies as st
from hypothesis_jsonschema import from_schema
from jsonschema import validate

from swaggerman.convert import SwaggerToPostman
from swaggerman.exceptions import SchemaError
from swaggerman.fake import FakeData

# Flat property maps: {"<name>": {"type": "string" | "integer"}}
flat_properties = from_schema({
    'type': 'object',
    'additionalProperties': {
        'type': 'object',
        'required': ['type'],
        'properties': {'type': {'enum': ['string', 'integer']}},
        'additionalProperties': False,
    },
})

property_names = st.text(min_size=1, max_size=8)
leaf_nodes = st.sampled_from([{'type': 'string'}, {'type': 'integer'}])
schema_nodes = st.recursive(
    leaf_nodes,
    lambda children: st.one_of(
        st.builds(lambda items: {'type': 'array', 'items': items}, children),
        st.builds(
            lambda props: {'type': 'object', 'properties': props},
            st.dictionaries(property_names, children, max_size=4),
        ),
    ),
    max_leaves=10,
)
object_schemas = st.builds(
    lambda props: {'type': 'object', 'properties': props},
    st.dictionaries(property_names, schema_nodes, max_size=5),
)


@pytest.fixture(scope='module')
def converter():
    return SwaggerToPostman(spec={'paths': {}}, fake=FakeData(seed=99))


def assert_matches(value, node):
    if node['type'] == 'string':
        assert isinstance(value, str)
    elif node['type'] == 'integer':
        assert isinstance(value, int) and not isinstance(value, bool)
    elif node['type'] == 'array':
        assert isinstance(value, list) and len(value) == 1
        assert_matches(value[0], node['items'])
    elif node['type'] == 'object':
        assert isinstance(value, dict)
        assert set(value) == set(node['properties'])
        for k, v in node['properties'].items():
            assert_matches(value[k], v)


@given(flat_properties)
def test_flat_properties(converter, properties):
    schema = {'type': 'object', 'properties': properties}
    data = converter.fake_data_from_schema(schema)
    assert set(data) == set(properties)
    validate(instance=data, schema=schema)


@settings(max_examples=50)
@given(object_schemas)
def test_nested_properties(converter, schema):
    data = converter.fake_data_from_schema(schema)
    assert_matches(data, schema)
    validate(instance=data, schema=schema)


@given(st.dictionaries(property_names, schema_nodes, max_size=3), property_names)
def test_missing_type_always_fails(converter, properties, bad_key):
    properties = {**properties, bad_key: {'format': 'date'}}
    with pytest.raises(SchemaError) as excinfo:
        converter.fake_data_from_schema({'properties': properties})
    assert excinfo.value.key == bad_key


@pytest.mark.parametrize("node", [
    {'type': 'boolean'},
    {'type': 'number'},
    {'$ref': '#/components/schemas/Pet'},
    {},
    'string',
])
def test_unknown_kinds_fail(converter, node):
    with pytest.raises(SchemaError) as excinfo:
        converter.fake_data_from_schema({'properties': {'weird': node}})
    assert "weird" in str(excinfo.value)


def test_array_items_without_type_fail(converter):
    with pytest.raises(SchemaError):
        converter.fake_data_from_schema({'properties': {
            'tags': {'type': 'array', 'items': {'$ref': '#/components/schemas/Tag'}},
        }})


def test_array_without_items_is_skipped(converter):
    assert converter.fake_data_from_schema({'properties': {
        'tags': {'type': 'array'},
        'name': {'type': 'string'},
    }}).keys() == {'name'}


def test_object_without_properties(converter):
    assert converter.fake_data_from_schema({'properties': {
        'extra': {'type': 'object'},
    }}) == {'extra': {}}


def test_key_order_follows_schema(converter):
    properties = {k: {'type': 'integer'} for k in ['zeta', 'alpha', 'mid']}
    assert list(converter.fake_data_from_schema({'properties': properties})) == [
        'zeta', 'alpha', 'mid',
    ]


def test_seed_is_deterministic():
    a, b = FakeData(seed=5), FakeData(seed=5)
    assert [a.word(), a.product_name(), a.integer()] == [
        b.word(), b.product_name(), b.integer(),
    ]


def test_word_and_product_name():
    fake = FakeData(seed=8)
    word = fake.word()
    assert word and ' ' not in word
    assert fake.product_name().strip()


def test_integer_range():
    fake = FakeData(seed=8, int_min=3, int_max=5)
    for _ in range(20):
        assert 3 <= fake.integer() <= 5


def test_injected_faker():
    faker = MagicMock()
    faker.word.return_value = 'omega'
    faker.catch_phrase.return_value = 'Fresh Steel Chair'
    faker.random_int.return_value = 7
    fake = FakeData(seed=1, int_min=2, int_max=9, faker=faker)
    assert fake.word() == 'omega'
    assert fake.product_name() == 'Fresh Steel Chair'
    assert fake.integer() == 7
    faker.random_int.assert_called_once_with(min=2, max=9)
    faker.seed_instance.assert_not_called()


def test_from_settings():
    from swaggerman import Settings
    fake = FakeData.from_settings(Settings(fake_data_seed=11, fake_int_min=1, fake_int_max=1))
    assert fake.integer() == 1
    expected = FakeData(seed=11, int_min=1, int_max=1)
    expected.integer()
    assert fake.word() == expected.word()
