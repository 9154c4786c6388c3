"""Application error types.

Every error carries a human-readable message. The string form adds a prefix
describing the failed operation, which is what the CLI shows to the user.
"""


class AppError(Exception):
    """Base class for all Quandary errors."""

    prefix = "Error: "

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}{self.message}"


class LoadFailed(AppError):
    """The persistent store could not be opened or is missing its schema."""

    prefix = "Failed to load data: "


class SaveFailed(AppError):
    prefix = "Failed to save: "


class DeleteFailed(AppError):
    prefix = "Failed to delete: "


class ExportFailed(AppError):
    prefix = "Failed to export: "


class ImportFailed(AppError):
    prefix = "Failed to import: "


class ValidationFailed(AppError):
    """Input rejected before any write was attempted."""

    prefix = "Validation error: "


class StoreError(AppError):
    """A unit of work failed and was rolled back.

    The underlying ``sqlite3.Error`` is chained as ``__cause__``.
    """

    prefix = "Store error: "
