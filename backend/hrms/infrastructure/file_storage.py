"""Local File Store - FileStore Protocol over a directory on disk.

Invariants:
    - Files live at <root>/<category>/<uuid4><ext>; store() returns "category/<uuid4><ext>"
    - Category is reduced to [A-Za-z0-9_-] before touching the filesystem
    - resolve() never returns a path outside root (ValidationError otherwise)
    - OS failures surface as StorageError

Design Decisions:
    - Random filenames: original names are never trusted as paths
    - No transactional coupling with the record store (see services/document_associator.py)
"""

import logging
import os
import re
import uuid
from pathlib import Path

from hrms.core.errors import StorageError, ValidationError

logger = logging.getLogger(__name__)


def safe_category(category: str) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9_-]+", "_", (category or "").strip())
    return cleaned.strip("_") or "others"


def file_extension(filename: str | None) -> str:
    return os.path.splitext(filename or "")[1].lower()


class LocalFileStore:
    """Stores uploaded documents under a single root directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root).resolve()

    def store(self, data: bytes, category: str, filename: str | None = None) -> str:
        """Write bytes under category, return the relative path."""
        folder = safe_category(category)
        name = f"{uuid.uuid4()}{file_extension(filename)}"
        target = self.root / folder / name
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.exception(f"Failed to write document {target}: {e}")
            raise StorageError("Could not save the file", "file_write") from e
        logger.info(f"Stored document {folder}/{name}", extra={"path": str(target)})
        return f"{folder}/{name}"

    def delete(self, path: str) -> bool:
        target = self.resolve(path)
        if not target.is_file():
            return False
        try:
            target.unlink()
        except OSError as e:
            logger.error(f"Error deleting document {target}: {e}")
            raise StorageError("Could not delete the file", "file_delete") from e
        logger.info(f"Deleted document {path}")
        return True

    def resolve(self, path: str) -> Path:
        """Absolute location of a stored path, confined to root."""
        if not path or not path.strip():
            raise ValidationError.single("file_path", "File path is required")
        target = (self.root / path.strip().lstrip("/\\")).resolve()
        if target != self.root and self.root not in target.parents:
            raise ValidationError.single("file_path", "File path is outside the upload directory")
        return target
