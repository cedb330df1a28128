import pytest

from fakes import FakeGeocoder, FakeRepository, make_records


@pytest.fixture
def geocoder() -> FakeGeocoder:
    return FakeGeocoder()


@pytest.fixture
def repository() -> FakeRepository:
    return FakeRepository(make_records(12))
