import asyncio
import logging
import os
from pathlib import Path
from uuid import uuid4

from docreg.domain.document.model.value import IndexNamespace
from docreg.domain.document.port.index import IndexStoragePort
from docreg.domain.shared.error import ConfigurationError, NotFoundError, StorageError
from docreg.infrastructure.persistence.adapter.storage import TEMP_PREFIX, safe_path

logger = logging.getLogger(__name__)


class SymlinkIndexAdapter(IndexStoragePort):
    """Index namespaces as directories of symbolic links.

    Layout under ``base_path`` (the object store root)::

        index-by-customer/<customer>/<name> -> ../../<name>
        index-by-type/<type>/<name>         -> ../../<name>
        index-by-date/<yyyy-mm-dd>/<name>   -> ../../<name>

    Links are relative, so the whole store can be moved as one directory.
    Every membership change is a single directory-entry operation.
    """

    def __init__(self, base_path: str | Path) -> None:
        self.base_path = Path(base_path).expanduser()
        for namespace in IndexNamespace:
            directory = self.base_path / namespace.directory
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ConfigurationError(f"Cannot create index directory {directory}: {e}") from e

    def _namespace_dir(self, namespace: IndexNamespace) -> Path:
        return self.base_path / namespace.directory

    def _key_dir(self, namespace: IndexNamespace, key: str) -> Path:
        return safe_path(self._namespace_dir(namespace), key)

    @staticmethod
    def _link_target(name: str) -> str:
        return os.path.join(os.pardir, os.pardir, name)

    def _add_member(self, key_dir: Path, name: str) -> None:
        key_dir.mkdir(parents=True, exist_ok=True)
        link = safe_path(key_dir, name)
        target = self._link_target(name)
        try:
            os.symlink(target, link)
        except FileExistsError:
            if link.is_symlink() and os.readlink(link) == target:
                return
            # Stale entry: swap in a fresh link in one rename
            tmp = key_dir / f"{TEMP_PREFIX}{name}.{uuid4().hex}"
            os.symlink(target, tmp)
            try:
                os.replace(tmp, link)
            except OSError:
                tmp.unlink(missing_ok=True)
                raise

    @staticmethod
    def _list_entries(directory: Path, *, dirs: bool) -> list[str]:
        try:
            entries = list(os.scandir(directory))
        except FileNotFoundError:
            return []
        return sorted(
            entry.name
            for entry in entries
            if not entry.name.startswith(TEMP_PREFIX)
            and (entry.is_dir(follow_symlinks=False) if dirs else entry.is_symlink())
        )

    async def add_member(self, namespace: IndexNamespace, key: str, name: str) -> None:
        key_dir = self._key_dir(namespace, key)
        try:
            await asyncio.to_thread(self._add_member, key_dir, name)
        except OSError as e:
            logger.error(
                "Failed to create index entry %s/%s/%s", namespace, key, name, exc_info=True
            )
            raise StorageError(
                f"Failed to create index entry: {key_dir}",
                name=name,
                namespace=namespace.value,
                key=key,
            ) from e

    async def remove_member(self, namespace: IndexNamespace, key: str, name: str) -> None:
        link = safe_path(self._key_dir(namespace, key), name)
        try:
            await asyncio.to_thread(link.unlink)
        except FileNotFoundError:
            raise NotFoundError(f"Index entry not found: {namespace}/{key}/{name}") from None
        except OSError as e:
            logger.error(
                "Failed to remove index entry %s/%s/%s", namespace, key, name, exc_info=True
            )
            raise StorageError(
                f"Failed to remove index entry: {link}",
                name=name,
                namespace=namespace.value,
                key=key,
            ) from e

    async def list_members(self, namespace: IndexNamespace, key: str) -> list[str]:
        key_dir = self._key_dir(namespace, key)
        try:
            return await asyncio.to_thread(self._list_entries, key_dir, dirs=False)
        except OSError as e:
            logger.error("Failed to list files by index: %s/%s", namespace, key, exc_info=True)
            raise StorageError(
                f"Failed to get files by index: {namespace}",
                namespace=namespace.value,
                key=key,
            ) from e

    async def list_keys(self, namespace: IndexNamespace) -> list[str]:
        try:
            return await asyncio.to_thread(
                self._list_entries, self._namespace_dir(namespace), dirs=True
            )
        except OSError as e:
            raise StorageError(
                f"Failed to list index keys: {namespace}", namespace=namespace.value
            ) from e
