"""Schema migrations: ordered .sql files tracked in a schema_migrations table."""

from typing import List, Set
from logger import get_logger

logger = get_logger()


def init_schema_migrations_table(conn) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            migration_file TEXT PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    conn.commit()


def get_applied_migrations(conn) -> Set[str]:
    cursor = conn.execute(
        "SELECT migration_file FROM schema_migrations ORDER BY migration_file"
    )
    return {row[0] for row in cursor.fetchall()}


def get_available_migrations(db_manager) -> List[str]:
    migrations_dir = db_manager.get_migrations_dir()
    if not migrations_dir.exists():
        return []
    return sorted(path.name for path in migrations_dir.glob("*.sql"))


def apply_migration(conn, migration_file: str, db_manager) -> None:
    """Run one migration script and record it as applied.

    Raises:
        sqlite3.Error: If the script fails. The failure is logged first.
    """
    migration_path = db_manager.get_migrations_dir() / migration_file

    with open(migration_path, "r") as f:
        sql = f.read()

    try:
        conn.executescript(sql)
        conn.execute(
            "INSERT INTO schema_migrations (migration_file) VALUES (?)",
            (migration_file,),
        )
        conn.commit()
        logger.info(f"Applied migration: {migration_file}")
    except Exception as e:
        conn.rollback()
        logger.error(f"Error applying migration {migration_file}: {e}")
        raise


def get_pending_migrations(db_manager) -> List[str]:
    with db_manager.connect() as conn:
        init_schema_migrations_table(conn)
        applied = get_applied_migrations(conn)
    return [m for m in get_available_migrations(db_manager) if m not in applied]


def apply_pending_migrations(db_manager) -> List[str]:
    """Apply every migration not yet recorded, in file-name order.

    Returns:
        Names of the migrations that were applied.
    """
    pending = get_pending_migrations(db_manager)
    if not pending:
        return []

    with db_manager.connect() as conn:
        for migration in pending:
            apply_migration(conn, migration, db_manager)
    return pending
