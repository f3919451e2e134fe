"""
Exceptions raised by the import alias checker.
"""

from typing import Optional


class ImportAliasError(Exception):
    """Base exception for the import alias checker."""


class ExtractionError(ImportAliasError):
    """Raised when the imports of a source file cannot be determined."""

    def __init__(self, filepath: str, cause: Optional[BaseException] = None):
        self.filepath = filepath
        self.cause = cause
        message = f"failed to determine imports in file {filepath}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
