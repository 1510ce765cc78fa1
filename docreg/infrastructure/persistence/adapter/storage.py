import asyncio
import logging
import os
import tempfile
from pathlib import Path

from docreg.domain.document.model.name import INTERNAL_EXTENSION
from docreg.domain.document.port.storage import ObjectStoragePort
from docreg.domain.shared.error import (
    ConfigurationError,
    ConflictError,
    InvalidNameError,
    NotFoundError,
    StorageError,
)

logger = logging.getLogger(__name__)

TEMP_PREFIX = "."


def safe_path(base_dir: Path, filename: str) -> Path:
    """Resolve filename within base_dir, rejecting path traversal attempts."""
    safe_name = Path(filename).name
    if not safe_name or safe_name != filename or safe_name.startswith(TEMP_PREFIX):
        raise InvalidNameError(f"Invalid filename: {filename}")
    target = base_dir / safe_name
    if not target.resolve().is_relative_to(base_dir.resolve()):
        raise InvalidNameError(f"Invalid filename: {filename}")
    return target


class LocalObjectStorageAdapter(ObjectStoragePort):
    """Local filesystem implementation of ObjectStoragePort.

    Objects are plain files directly under ``base_path``. New content is
    always written to a hidden temp file first and then moved into place,
    so readers see either the old or the new bytes, never a partial file.
    """

    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path).expanduser()
        try:
            self.base_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot create storage directory {self.base_path}: {e}"
            ) from e

    def _path(self, name: str) -> Path:
        return safe_path(self.base_path, name)

    def _write_temp(self, content: bytes) -> Path:
        fd, tmp_path = tempfile.mkstemp(dir=self.base_path, prefix=TEMP_PREFIX)
        try:
            with open(fd, "wb") as f:
                f.write(content)
        except Exception:
            Path(tmp_path).unlink(missing_ok=True)
            raise
        return Path(tmp_path)

    def _create_exclusive(self, target: Path, content: bytes) -> None:
        tmp = self._write_temp(content)
        try:
            # link() fails if target exists: create and existence check are one step
            os.link(tmp, target)
        finally:
            tmp.unlink(missing_ok=True)

    def _write(self, target: Path, content: bytes) -> None:
        tmp = self._write_temp(content)
        try:
            tmp.replace(target)
        except Exception:
            tmp.unlink(missing_ok=True)
            raise

    def _list_names(self) -> list[str]:
        return sorted(
            entry.name
            for entry in os.scandir(self.base_path)
            if entry.is_file(follow_symlinks=False)
            and entry.name.endswith(INTERNAL_EXTENSION)
            and not entry.name.startswith(TEMP_PREFIX)
        )

    async def exists(self, name: str) -> bool:
        target = self._path(name)
        return await asyncio.to_thread(target.is_file)

    async def create_exclusive(self, name: str, content: bytes) -> None:
        target = self._path(name)
        try:
            await asyncio.to_thread(self._create_exclusive, target, content)
        except FileExistsError:
            raise ConflictError("Failed: file with provided name already exist!") from None
        except OSError as e:
            logger.error("Failed to create file: %s", name, exc_info=True)
            raise StorageError(f"Failed to create file: {name}", name=name) from e

    async def write(self, name: str, content: bytes) -> None:
        target = self._path(name)
        try:
            await asyncio.to_thread(self._write, target, content)
        except OSError as e:
            logger.error("Failed to write file: %s", name, exc_info=True)
            raise StorageError(f"Failed to write file: {name}", name=name) from e

    async def read(self, name: str) -> bytes:
        target = self._path(name)
        try:
            return await asyncio.to_thread(target.read_bytes)
        except FileNotFoundError:
            raise NotFoundError(f"File not found: {name}") from None
        except OSError as e:
            logger.error("Failed to read file: %s", name, exc_info=True)
            raise StorageError(f"Failed to read file: {name}", name=name) from e

    async def delete(self, name: str) -> None:
        target = self._path(name)
        try:
            await asyncio.to_thread(target.unlink)
        except FileNotFoundError:
            raise NotFoundError(f"File not found: {name}") from None
        except OSError as e:
            logger.error("Failed to delete file: %s", name, exc_info=True)
            raise StorageError(f"Failed to delete file: {name}", name=name) from e

    async def list_names(self) -> list[str]:
        try:
            return await asyncio.to_thread(self._list_names)
        except OSError as e:
            raise StorageError(f"Failed to list files in {self.base_path}") from e
