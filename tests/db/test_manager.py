import pytest

from db.manager import DatabaseManager
from db.migrator import apply_pending_migrations, get_pending_migrations
from errors import LoadFailed, StoreError


class TestTransactions:
    """Tests for the unit-of-work behaviour of DatabaseManager."""

    def test_commit(self, db_manager_with_schema):
        with db_manager_with_schema.transaction() as conn:
            conn.execute("INSERT INTO categories (id, name) VALUES ('c1', 'Housing')")

        with db_manager_with_schema.connect() as conn:
            count = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        assert count == 1

    def test_rollback_on_store_error(self, db_manager_with_schema):
        """A failing statement rolls back earlier writes and raises StoreError."""
        with pytest.raises(StoreError):
            with db_manager_with_schema.transaction() as conn:
                conn.execute("INSERT INTO categories (id, name) VALUES ('c1', 'Housing')")
                conn.execute("INSERT INTO categories (id, name) VALUES ('c1', 'Dup')")

        with db_manager_with_schema.connect() as conn:
            count = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        assert count == 0

    def test_rollback_on_other_exception(self, db_manager_with_schema):
        with pytest.raises(RuntimeError):
            with db_manager_with_schema.transaction() as conn:
                conn.execute("INSERT INTO categories (id, name) VALUES ('c1', 'Housing')")
                raise RuntimeError("boom")

        with db_manager_with_schema.connect() as conn:
            count = conn.execute("SELECT COUNT(*) FROM categories").fetchone()[0]
        assert count == 0

    def test_nested_transaction_joins_outer(self, db_manager_with_schema):
        with db_manager_with_schema.transaction() as outer:
            with db_manager_with_schema.transaction() as inner:
                assert inner is outer
            with db_manager_with_schema.connect() as conn:
                assert conn is outer

    def test_check_constraint_enforced(self, db_manager_with_schema):
        with pytest.raises(StoreError):
            with db_manager_with_schema.transaction() as conn:
                conn.execute(
                    "INSERT INTO financial_decisions (id, title, success_rating) "
                    "VALUES ('d1', 'Bad', 11)"
                )

    def test_foreign_keys_enabled(self, db_manager_with_schema):
        with db_manager_with_schema.connect() as conn:
            assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1


class TestVerify:
    def test_verify_with_schema(self, db_manager_with_schema):
        db_manager_with_schema.verify()

    def test_verify_without_migrations(self, test_config):
        db_manager = DatabaseManager(test_config)

        with pytest.raises(LoadFailed, match="migrate apply"):
            db_manager.verify()


class TestMigrations:
    def test_pending_then_applied(self, test_config):
        db_manager = DatabaseManager(test_config)

        pending = get_pending_migrations(db_manager)
        assert pending == [
            "001_create_categories.sql",
            "002_create_financial_decisions.sql",
        ]

        assert apply_pending_migrations(db_manager) == pending
        assert get_pending_migrations(db_manager) == []
        assert apply_pending_migrations(db_manager) == []

    def test_tables_created(self, db_manager_with_schema):
        with db_manager_with_schema.connect() as conn:
            tables = {
                row[0]
                for row in conn.execute(
                    "SELECT name FROM sqlite_master WHERE type = 'table'"
                )
            }
        assert {"categories", "financial_decisions", "schema_migrations"} <= tables

    def test_db_path(self, db_manager_with_schema, test_config):
        assert db_manager_with_schema.get_db_path() == test_config.db_path
        assert test_config.db_path.exists()
