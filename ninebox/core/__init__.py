"""
Core Package - Nine-Box Talent Review
ninebox/core/__init__.py

Core infrastructure: dependencies, errors, exceptions, security.
"""

from ninebox.core.exceptions import (
    CorruptDocumentException,
    DatabaseConnectionException,
    DuplicateEntityException,
    EntityNotFoundException,
    RepositoryException,
)

__all__ = [
    # Exceptions
    "CorruptDocumentException",
    "DatabaseConnectionException",
    "DuplicateEntityException",
    "EntityNotFoundException",
    "RepositoryException",
]
