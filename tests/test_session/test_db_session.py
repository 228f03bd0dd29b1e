from __future__ import annotations

from sqlalchemy.orm import Session
from unittest.mock import Mock, patch

from catalog.db.session import SessionLocal, _connect_args, engine, get_db


class TestDatabaseSession:
    """Test database session functionality."""

    def test_session_local_configuration(self):
        """Test that SessionLocal is properly configured."""
        assert hasattr(SessionLocal, "__call__")
        assert SessionLocal.kw.get("autoflush") is False
        assert SessionLocal.kw.get("expire_on_commit") is False

    def test_engine_uses_configured_url(self):
        assert engine is not None
        assert engine.url.get_backend_name() == "sqlite"

    def test_sqlite_connect_args(self):
        assert _connect_args("sqlite+pysqlite:///:memory:") == {"check_same_thread": False}

    def test_postgres_connect_args(self):
        assert _connect_args("postgresql+psycopg://u:p@localhost/db") == {}

    @patch("catalog.db.session.SessionLocal")
    def test_get_db_yields_and_closes(self, mock_session_local):
        mock_db = Mock(spec=Session)
        mock_session_local.return_value = mock_db

        generator = get_db()
        session = next(generator)

        mock_session_local.assert_called_once()
        assert session is mock_db
        mock_db.close.assert_not_called()

        try:
            next(generator)
        except StopIteration:
            pass

        mock_db.close.assert_called_once()

    @patch("catalog.db.session.SessionLocal")
    def test_get_db_closes_on_error(self, mock_session_local):
        mock_db = Mock(spec=Session)
        mock_session_local.return_value = mock_db

        generator = get_db()
        next(generator)
        try:
            generator.throw(RuntimeError("request failed"))
        except RuntimeError:
            pass

        mock_db.close.assert_called_once()
