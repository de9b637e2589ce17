# tests/conftest.py
import sys
import os
import pytest

# Put the project root (parent of 'tests') on sys.path before importing app modules
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from app_web import create_app
from models import GuestStore


# --- Fixture for the datastore: fresh in-memory SQLite per test ---
@pytest.fixture(scope='function')
def store():
    guest_store = GuestStore('sqlite:///:memory:')
    yield guest_store
    guest_store.dispose()


# --- Fixture for Flask Test Client ---
@pytest.fixture
def app(store):
    app = create_app({'TESTING': True}, store=store)
    yield app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client
