"""
Pytest Fixtures for the accounting API
"""
import os

import mongomock
import pytest
from fastapi.testclient import TestClient

os.environ["ENVIRONMENT"] = "testing"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from main import app
from database import DocumentStore, get_store

DB = "accounting-test"


@pytest.fixture
def store() -> DocumentStore:
    """Store over an in-memory MongoDB"""
    return DocumentStore(mongomock.MongoClient())


@pytest.fixture
def client(store: DocumentStore):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_spending():
    return {
        "amount": -100,
        "currency": "USD",
        "dateOfSpending": "2025-08-08",
        "description": "Test spending",
        "categoryId": 1,
    }


@pytest.fixture
def sample_source():
    return {"name": "Main account", "type": "bank", "description": "Checking"}
