class CatalogError(Exception):
    """Base class for failures that abort a catalog build."""

    def __init__(self, message: str, operation: str) -> None:
        super().__init__(message)
        self.operation = operation


class StoreError(CatalogError):
    """Raised when listing objects from the store fails."""


class ResolutionError(CatalogError):
    """Raised when a presigned URL cannot be generated for a key."""

    def __init__(self, message: str, operation: str, key: str) -> None:
        super().__init__(message, operation)
        self.key = key
