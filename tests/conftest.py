"""Shared pytest fixtures for doxygen-generator tests."""

import pytest

from doxygen_generator.config import StyleOptions
from doxygen_generator.server import create_app


@pytest.fixture
def style():
    """Default style: no @brief, aligned names, inferred directions."""
    return StyleOptions()


@pytest.fixture
def app(style):
    app = create_app(style)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """
    Flask test client for the HTTP API.

    Example:
        def test_health(client):
            assert client.get("/api/health").status_code == 200
    """
    return app.test_client()
