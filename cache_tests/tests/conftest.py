import pytest

from aged_cache import AgedCache, ManualClock


@pytest.fixture
def clock():
    return ManualClock(start=0)


@pytest.fixture
def cache(clock):
    return AgedCache(clock)
