import pytest

from src.routing.tests.fakes import FakeQuoterClient


@pytest.fixture
def quoter_client():
    return FakeQuoterClient(rates={3000: 2, 500: 3, 10000: 5})
