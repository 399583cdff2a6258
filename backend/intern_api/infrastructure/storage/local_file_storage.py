"""
Name: Local File Storage

Responsibilities:
  - Store leave attachments on the local filesystem
  - Generate collision-free names (uuid + original extension when it is
    plain ASCII letters and digits, otherwise no extension)
  - Refuse names that could escape the upload directory

Collaborators:
  - config.py: UPLOAD_DIR
  - application.use_cases.leave_attachments
"""

from __future__ import annotations

import os
import re
import uuid
from pathlib import Path

from ...exceptions import NotFoundError, ValidationError
from ...logger import logger

_SAFE_EXTENSION = re.compile(r"\.[A-Za-z0-9]{1,16}")


class LocalFileStorage:
    """R: FileStorage backed by a directory."""

    def __init__(self, upload_dir: str | Path):
        self.upload_dir = Path(upload_dir)

    def _ensure_dir(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _check_name(filename: str) -> None:
        if not filename or "/" in filename or "\\" in filename or filename in {".", ".."}:
            raise ValidationError("Invalid filename")

    def save(self, original_filename: str, content: bytes) -> str:
        extension = os.path.splitext(os.path.basename(original_filename or ""))[1]
        if not _SAFE_EXTENSION.fullmatch(extension):
            extension = ""
        filename = f"{uuid.uuid4()}{extension}"
        self._ensure_dir()
        (self.upload_dir / filename).write_bytes(content)
        logger.info(
            "Attachment stored",
            extra={"stored_name": filename, "size_bytes": len(content)},
        )
        return filename

    def load(self, filename: str) -> bytes:
        self._check_name(filename)
        path = self.upload_dir / filename
        if not path.is_file():
            raise NotFoundError(f"File not found: {filename}")
        return path.read_bytes()
