"""
Root pytest configuration for backend tests.

Provides:
- backend/ on sys.path so `from api.pipeline import ...` works
- Shared fixtures (auth_service, item_store, external_items, app, client)
"""

import sys
from pathlib import Path
from unittest.mock import Mock

# Add backend directory to Python path so imports like
# `from api.pipeline import ...` and `from services.item_store import ...` work
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

import pytest


@pytest.fixture
def auth_service():
    """Authentication service that always returns the default test user."""
    from services.auth_service import StaticAuthenticationService

    return StaticAuthenticationService()


@pytest.fixture
def item_store():
    from services.item_store import ItemStore

    return ItemStore()


@pytest.fixture
def external_items():
    """Stand-in for ExternalItemsClient (no network)."""
    client = Mock()
    client.fetch_items.return_value = {"posts": []}
    return client


@pytest.fixture
def app(auth_service, item_store, external_items):
    """Create test Flask application."""
    from app import create_app

    app = create_app(
        auth_service=auth_service,
        item_store=item_store,
        external_items=external_items,
    )
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()
