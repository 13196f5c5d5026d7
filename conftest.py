import pytest
from django.core.cache import cache

from infrastructure.container import container
from infrastructure.events import get_event_bus


@pytest.fixture(autouse=True)
def _isolate_services():
    """Fresh service instances, an empty event log and a cold cache for every test."""
    container.reset()
    get_event_bus().clear_published()
    cache.clear()
    yield
    container.reset()
