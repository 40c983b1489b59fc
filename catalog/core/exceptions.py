from typing import Optional


class CatalogError(Exception):
    pass


class ValidationError(CatalogError):

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class NotFoundError(CatalogError):

    def __init__(self, entity: str, identifier: str):
        self.entity = entity
        self.identifier = identifier
        self.message = f"{entity} not found"
        super().__init__(f"{self.message}: {identifier}")


class StorageError(CatalogError):
    """I/O or parse failure in the collection store."""

    def __init__(self, message: str, collection: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.collection = collection
