"""
Name: Domain Service Interfaces

Responsibilities:
  - Define contracts for external services (attachment file storage)

Collaborators:
  - Implementations in infrastructure.storage

Constraints:
  - Pure interfaces (Protocol), no implementation
"""

from typing import Protocol


class FileStorage(Protocol):
    """R: Interface for storing leave attachments."""

    def save(self, original_filename: str, content: bytes) -> str:
        """
        R: Store bytes under a generated name.

        Returns:
            Generated filename (uuid + original extension)
        """
        ...

    def load(self, filename: str) -> bytes:
        """
        R: Read a stored file.

        Raises:
            NotFoundError: If no file with that name exists
            ValidationError: If the name contains path separators
        """
        ...
