import pytest
from dbenum.mapping import clear_resolver_cache


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear the enum resolver cache before and after each test to ensure test isolation."""
    clear_resolver_cache()
    yield
    clear_resolver_cache()


pytest_plugins = [
    'tests.fixtures.enums',
    'tests.fixtures.records',
    'tests.fixtures.sqlite',
]
