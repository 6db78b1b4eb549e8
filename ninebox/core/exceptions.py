"""
Custom Exceptions - Nine-Box Talent Review
ninebox/core/exceptions.py

Custom exception classes for repository operations.
"""


class RepositoryException(Exception):
    """Base exception for repository operations."""

    pass


class EntityNotFoundException(RepositoryException):
    """Entity not found in the document store."""

    def __init__(self, entity_type: str, entity_id: str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with ID {entity_id} not found")


class DuplicateEntityException(RepositoryException):
    """Duplicate entity violation."""

    def __init__(self, message: str = "Entity already exists"):
        self.message = message
        super().__init__(message)


class DatabaseConnectionException(RepositoryException):
    """Document store file could not be read or written."""

    def __init__(self, message: str = "Document store unavailable"):
        self.message = message
        super().__init__(message)


class CorruptDocumentException(RepositoryException):
    """Document store file exists but is not a valid document."""

    def __init__(self, message: str = "Document store is corrupt"):
        self.message = message
        super().__init__(message)
