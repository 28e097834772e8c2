"""
Pytest configuration and shared fixtures
"""
import mongomock
import pytest

from people_mongodb.people_data import PEOPLE_DATA
from people_mongodb.person_tasks import create_many_people


@pytest.fixture
def client():
    """Fresh in-memory client per test"""
    c = mongomock.MongoClient()
    yield c
    c.close()


@pytest.fixture
def people(client):
    """Empty people collection"""
    return client["test_people_db"]["people"]


@pytest.fixture
def seeded_people(people):
    """People collection seeded with the sample data"""
    create_many_people(people, PEOPLE_DATA)
    return people
