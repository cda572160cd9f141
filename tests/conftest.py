import json
import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from swaggerman.convert import SwaggerToPostman, load_spec
from swaggerman.fake import FakeData

tests_dir_path = Path(__file__).parent.absolute()
data_path = tests_dir_path / 'data'
PETSTORE = str(data_path / 'petstore-swagger.json')
POSTMAN_SCHEMA = str(data_path / 'collection_2_1_0.json')
STUB_WORD = 'alpha'
STUB_PRODUCT = 'Awesome Bamboo Bacon'
STUB_INT = 42


def get_test_data():
    return sorted(
        str(data_path / f) for f in os.listdir(data_path)
        if f.endswith(('.json', '.yaml', '.yml'))
        and f != os.path.basename(POSTMAN_SCHEMA)
    )


def pytest_addoption(parser):
    parser.addoption(
        "--test_file",
        help="Execute tests against OpenAPI Schema at path",
    )


def pytest_generate_tests(metafunc):
    if "spec_file" in metafunc.fixturenames:
        if metafunc.config.getoption("test_file"):
            files = [metafunc.config.getoption("test_file")]
        else:
            files = get_test_data()
        metafunc.parametrize("spec_file", files)


@pytest.fixture
def petstore_path():
    return PETSTORE


@pytest.fixture
def petstore_dict():
    with open(PETSTORE) as f:
        return json.load(f)


@pytest.fixture
def fake():
    return FakeData(seed=1234)


@pytest.fixture
def stub_fake():
    """Placeholders with one fixed value per kind."""
    faker = MagicMock()
    faker.word.return_value = STUB_WORD
    faker.catch_phrase.return_value = STUB_PRODUCT
    faker.random_int.return_value = STUB_INT
    return FakeData(faker=faker)


@pytest.fixture
def petstore(stub_fake):
    return SwaggerToPostman(spec=load_spec(PETSTORE), fake=stub_fake)


@pytest.fixture
def make_converter(stub_fake):
    def _make(paths, schemas=None, fake=None, **spec):
        return SwaggerToPostman(
            spec={
                'paths': paths,
                'components': {'schemas': schemas or {}},
                **spec,
            },
            fake=fake or stub_fake,
        )
    return _make


@pytest.fixture(scope='session')
def postman_schema():
    with open(POSTMAN_SCHEMA) as f:
        return json.load(f)
