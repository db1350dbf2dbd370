from typing import Iterator

import pytest
from stubglobals import ConfigStore, SlotRegistry, set_registry
from stubglobals.language import RequestContext


@pytest.fixture
def registry() -> SlotRegistry:
    return SlotRegistry()


@pytest.fixture
def default_registry() -> Iterator[SlotRegistry]:
    """Swap in a fresh process-wide registry for the duration of a test."""
    registry = SlotRegistry()
    previous = set_registry(registry)
    yield registry
    set_registry(previous)


@pytest.fixture
def config() -> ConfigStore:
    return ConfigStore({"language_code": "en", "unstub": {"recursion_limit": 2}})


@pytest.fixture(autouse=True)
def _reset_request_context() -> Iterator[None]:
    yield
    RequestContext.reset_main()
