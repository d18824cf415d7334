"""Tests for shared/repository.py."""

from typing import Optional
from unittest.mock import MagicMock

from shared.repository import BaseRepository


class TestBaseRepository:
    """Tests for BaseRepository base class."""

    def test_init_stores_db_client(self):
        """Should store the data client in _db attribute."""
        mock_db = MagicMock()
        repo = BaseRepository(mock_db)
        assert repo._db is mock_db

    def test_generic_type_parameter(self):
        """Should work with generic type parameter."""

        class MockModel:
            pass

        class TestRepository(BaseRepository[MockModel]):
            def get_by_id(self, id: str) -> Optional[MockModel]:
                return None

        mock_db = MagicMock()
        repo = TestRepository(mock_db)
        assert repo._db is mock_db
        assert repo.get_by_id("x") is None
