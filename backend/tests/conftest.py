"""
Shared fixtures for declaration validation tests
"""

import copy

import pytest

from customs_sim import create_app
from customs_sim.models.customs import DeclarationRecord
from customs_sim.samples import BASE_DECLARATION
from customs_sim.services.rule_tables import load_rule_tables, reset_rule_tables
from customs_sim.validation import create_validator


@pytest.fixture(scope="session")
def tables():
    """Packaged rule tables"""
    return load_rule_tables()


@pytest.fixture
def engine(tables):
    return create_validator(tables)


@pytest.fixture
def clean_data():
    """A declaration that passes every check, as the form submits it"""
    return copy.deepcopy(BASE_DECLARATION)


@pytest.fixture
def make_record(clean_data):
    """Build a DeclarationRecord from the clean declaration with overrides.

    ``goods`` replaces the goods lines; ``line`` updates the first goods line.
    """
    def _make(goods=None, line=None, **changes):
        data = copy.deepcopy(clean_data)
        data.update(changes)
        if goods is not None:
            data["goods"] = goods
        if line:
            data["goods"][0].update(line)
        return DeclarationRecord.model_validate(data)

    return _make


@pytest.fixture
def clean_record(make_record):
    return make_record()


@pytest.fixture(autouse=True)
def fresh_rule_tables():
    """Each test starts with the configured rule tables reloaded"""
    reset_rule_tables()
    yield
    reset_rule_tables()


@pytest.fixture
def app():
    return create_app({"TESTING": True})


@pytest.fixture
def client(app):
    return app.test_client()
