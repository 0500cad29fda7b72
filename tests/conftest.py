import pytest

from helpers import FakeClock, FakeJMAPServer


@pytest.fixture
def server() -> FakeJMAPServer:
    return FakeJMAPServer()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
