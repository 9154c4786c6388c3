"""Base services container for dependency injection."""

from config import Config
from db.manager import DatabaseManager
from errors import DeleteFailed, StoreError
from logger import get_logger

logger = get_logger()


class Services:
    """Container for all application services.

    This class provides a centralized way to access all services and makes
    it easy to inject a test database manager. The database manager is the
    store handle every service shares.

    Args:
        config: Application configuration object.
        db_manager: Optional database manager for testing. If provided, its
                    database is used instead of the one in config.
    """

    def __init__(self, config: Config, db_manager=None):
        """Initialize services with configuration.

        Args:
            config: Config object containing application configuration.
            db_manager: Optional database manager for dependency injection (testing).
                       If None, creates DatabaseManager from config.
        """
        self.config = config
        self.db_manager = db_manager or DatabaseManager(config)

        # Lazy import to avoid circular dependencies
        from services.categories import CategoryService
        from services.decisions import DecisionService
        from services.backup import BackupService
        from services.reports import ReportService

        self.categories = CategoryService(self.db_manager)
        self.decisions = DecisionService(self.db_manager)
        self.backup = BackupService(
            self.db_manager, self.categories, self.decisions, config.export_dir
        )
        self.reports = ReportService(self.decisions, config.export_dir)

    def reset_all_data(self) -> None:
        """Permanently delete every decision and category in one unit of work.

        Raises:
            DeleteFailed: If the store rejects the delete. Nothing is removed.
        """
        try:
            with self.db_manager.transaction():
                decisions = self.decisions.delete_all()
                categories = self.categories.delete_all()
        except StoreError as e:
            raise DeleteFailed(e.message) from e

        logger.info(f"Deleted {decisions} decisions and {categories} categories")
