"""Unit tests for health endpoint

The health check reports service metadata without touching the database.
"""

import pytest
from fastapi.testclient import TestClient

from casebook import __version__
from casebook.config import Settings
from casebook.main import create_app


@pytest.mark.unit
class TestHealthCheck:
    """Test health check endpoint"""

    def test_health_returns_service_metadata(self):
        """Happy path: health check reports name, version and driver"""
        app = create_app(Settings(service_name="casebook-test", database_url="sqlite+aiosqlite:///:memory:"))
        client = TestClient(app)

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "service": "casebook-test",
            "version": __version__,
            "database": "sqlite+aiosqlite",
        }

    def test_settings_parse_cors_origins(self):
        settings = Settings(cors_origins="http://a.test, http://b.test")
        assert settings.cors_origins_list == ["http://a.test", "http://b.test"]
        assert Settings(cors_origins="*").cors_origins_list == ["*"]
