"""Database manager for SQLite connections, units of work and path management."""

import sqlite3
import threading
from contextlib import contextmanager
from config import Config, get_migrations_dir
from errors import LoadFailed, StoreError

REQUIRED_TABLES = ("categories", "financial_decisions")


class DatabaseManager:
    """Manages database connections and transactions.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        """Initialize the database manager.

        Args:
            config: Config object containing database configuration.
        """
        self.config = config
        self._local = threading.local()

    def _open(self) -> sqlite3.Connection:
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path)
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Inside an open transaction on the current thread, the transaction's
        connection is yielded so reads see its pending writes.

        Yields:
            sqlite3.Connection: Database connection.
        """
        active = getattr(self._local, "conn", None)
        if active is not None:
            yield active
            return

        conn = self._open()
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self):
        """Run a unit of work that commits or rolls back as a whole.

        Nested calls on the same thread join the outer unit of work; only the
        outermost call commits.

        Yields:
            sqlite3.Connection: Connection bound to the unit of work.

        Raises:
            StoreError: If any statement or the commit fails. Nothing is persisted.
        """
        active = getattr(self._local, "conn", None)
        if active is not None:
            yield active
            return

        with self.connect() as conn:
            self._local.conn = conn
            try:
                yield conn
                conn.commit()
            except sqlite3.Error as e:
                conn.rollback()
                raise StoreError(str(e)) from e
            except BaseException:
                conn.rollback()
                raise
            finally:
                self._local.conn = None

    def verify(self) -> None:
        """Check that the store can be opened and has its schema.

        Raises:
            LoadFailed: If the database cannot be opened or migrations are missing.
        """
        try:
            with self.connect() as conn:
                cursor = conn.execute(
                    "SELECT name FROM sqlite_master WHERE type = 'table'"
                )
                tables = {row[0] for row in cursor.fetchall()}
        except (sqlite3.Error, OSError) as e:
            raise LoadFailed(str(e)) from e

        missing = [t for t in REQUIRED_TABLES if t not in tables]
        if missing:
            raise LoadFailed(
                f"missing tables {', '.join(missing)}; "
                "run 'python -m cli migrate apply'"
            )

    def get_db_path(self):
        """Get the current database path.

        Returns:
            Path: Path to the database file.
        """
        return self.config.db_path

    def get_migrations_dir(self):
        """Get the migrations directory path.

        Returns:
            Path: Path to the migrations directory.
        """
        return get_migrations_dir()
