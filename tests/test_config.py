"""
Tests for settings and the database engine they configure.
"""

from jobboard.core.config import settings
from jobboard.core.database import engine


class TestDatabaseSettings:

    def test_url_names_psycopg2_driver(self):
        assert settings.DATABASE_URL.startswith("postgresql+psycopg2://")

    def test_engine_loads_psycopg2(self):
        assert engine.dialect.name == "postgresql"
        assert engine.dialect.driver == "psycopg2"
