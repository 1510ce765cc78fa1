"""DocumentService - stores canonical documents and keeps their indexes in step."""

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import field
from typing import Any

from docreg.domain.document.model.name import to_external_name, to_internal_name
from docreg.domain.document.model.value import (
    DocumentKey,
    IndexNamespace,
    ReconcileReport,
    StoredDocument,
)
from docreg.domain.document.port import (
    ContentConverterPort,
    IndexStoragePort,
    ObjectStoragePort,
)
from docreg.domain.document.util.lock import KeyedLock
from docreg.domain.shared.error import (
    ConflictError,
    DocregError,
    InvalidNameError,
    NotFoundError,
    StorageError,
)
from docreg.domain.shared.service import Service

logger = logging.getLogger(__name__)


class DocumentService(Service):
    """Orchestrates the object store and the customer/type/date indexes.

    Every mutation of a document runs under that document's lock, so ingest,
    replace and remove of the same name are serialized while different names
    proceed in parallel. Reads never take a lock.

    Once the object itself has been written, index failures are not rolled
    back: the document stays stored, the failure is logged with its
    namespace and key, and ``reconcile`` repairs the indexes later.
    """

    objects: ObjectStoragePort
    indexes: IndexStoragePort
    converter: ContentConverterPort
    locks: KeyedLock = field(default_factory=KeyedLock)

    async def ingest(self, name: str, content: bytes) -> StoredDocument:
        """Store a new document.

        Raises:
            InvalidNameError: If the name does not decompose into a key.
            ConflictError: If a document with this name already exists.
            InvalidContentError: If the content cannot be converted.
            StorageError: If writing the object or an index entry fails.
        """
        key = DocumentKey.parse(name)
        internal_name = to_internal_name(name)
        # Shielded so a disconnecting caller cannot leave a half-indexed document
        return await _shielded(self._ingest(key, internal_name, content))

    async def _ingest(self, key: DocumentKey, internal_name: str, content: bytes) -> StoredDocument:
        async with self.locks.hold(internal_name):
            if await self.objects.exists(internal_name):
                raise ConflictError("Failed: file with provided name already exist!")
            payload = await self.converter.convert(content)
            await self.objects.create_exclusive(internal_name, payload)
            await self._index(key, internal_name)

        logger.info("Successfully uploaded file: %s", internal_name)
        return StoredDocument(
            name=to_external_name(internal_name),
            internal_name=internal_name,
            content=payload,
        )

    async def replace(self, name: str, content: bytes) -> StoredDocument:
        """Create or overwrite a document. Never conflicts."""
        key = DocumentKey.parse(name)
        internal_name = to_internal_name(name)
        payload = await self.converter.convert(content)
        return await _shielded(self._replace(key, internal_name, payload))

    async def _replace(
        self, key: DocumentKey, internal_name: str, payload: bytes
    ) -> StoredDocument:
        async with self.locks.hold(internal_name):
            await self.objects.write(internal_name, payload)
            await self._index(key, internal_name)

        logger.info("Successfully updated file: %s", internal_name)
        return StoredDocument(
            name=to_external_name(internal_name),
            internal_name=internal_name,
            content=payload,
        )

    async def fetch_by_name(self, name: str) -> StoredDocument:
        internal_name = to_internal_name(name)
        try:
            content = await self.objects.read(internal_name)
        except NotFoundError:
            raise NotFoundError(f"File not found: {name}") from None
        return StoredDocument(
            name=to_external_name(internal_name),
            internal_name=internal_name,
            content=content,
        )

    async def fetch_by_index(self, namespace: IndexNamespace, key: str) -> list[str]:
        """External names of the documents filed under ``key``; empty if none."""
        members = await self.indexes.list_members(namespace, key)
        if not members:
            logger.info("No files found for %s index key: %s", namespace, key)
        return [to_external_name(member) for member in members]

    async def remove(self, name: str) -> None:
        """Delete a document and its three index entries.

        Raises:
            NotFoundError: If no document with this name is stored.
        """
        key = DocumentKey.parse(name)
        internal_name = to_internal_name(name)
        await _shielded(self._remove(key, internal_name, name))

    async def _remove(self, key: DocumentKey, internal_name: str, name: str) -> None:
        async with self.locks.hold(internal_name):
            try:
                await self.objects.delete(internal_name)
            except NotFoundError:
                raise NotFoundError(f"File not found: {name}") from None
            await self._unindex(key, internal_name)

        logger.info("Successfully deleted file: %s", internal_name)

    async def reconcile(self) -> ReconcileReport:
        """Bring the indexes back in line with the object store.

        Re-creates missing entries for every stored document and prunes
        entries that point at absent documents or sit under the wrong key.
        """
        indexed = 0
        pruned = 0
        skipped: list[str] = []

        for internal_name in await self.objects.list_names():
            try:
                key = DocumentKey.from_internal_name(internal_name)
            except InvalidNameError:
                logger.warning("Skipping stored object with unparseable name: %s", internal_name)
                skipped.append(internal_name)
                continue

            async with self.locks.hold(internal_name):
                if not await self.objects.exists(internal_name):
                    continue
                for namespace, index_key in key.index_keys().items():
                    members = await self.indexes.list_members(namespace, index_key)
                    if internal_name not in members:
                        await self.indexes.add_member(namespace, index_key, internal_name)
                        logger.info(
                            "Restored index entry %s/%s/%s", namespace, index_key, internal_name
                        )
                        indexed += 1

        for namespace in IndexNamespace:
            for index_key in await self.indexes.list_keys(namespace):
                for member in await self.indexes.list_members(namespace, index_key):
                    if await self._prune(namespace, index_key, member):
                        pruned += 1

        logger.info(
            "Reconcile finished: indexed=%d pruned=%d skipped=%d", indexed, pruned, len(skipped)
        )
        return ReconcileReport(indexed=indexed, pruned=pruned, skipped=skipped)

    async def _prune(self, namespace: IndexNamespace, index_key: str, member: str) -> bool:
        """Remove ``member`` from ``index_key`` if it should not be there."""
        try:
            misfiled = DocumentKey.from_internal_name(member).index_key(namespace) != index_key
        except InvalidNameError:
            misfiled = True

        if not misfiled and await self.objects.exists(member):
            return False

        async with self.locks.hold(member):
            # Re-check: an ingest may have completed while we waited
            if not misfiled and await self.objects.exists(member):
                return False
            try:
                await self.indexes.remove_member(namespace, index_key, member)
            except NotFoundError:
                return False

        logger.info("Pruned index entry %s/%s/%s", namespace, index_key, member)
        return True

    async def _index(self, key: DocumentKey, internal_name: str) -> None:
        failures: list[tuple[IndexNamespace, str, DocregError]] = []
        for namespace, index_key in key.index_keys().items():
            try:
                await self.indexes.add_member(namespace, index_key, internal_name)
            except (StorageError, InvalidNameError) as e:
                logger.error(
                    "Index entry not created, needs repair: name=%s namespace=%s key=%s: %s",
                    internal_name,
                    namespace,
                    index_key,
                    e.message,
                )
                failures.append((namespace, index_key, e))

        if failures:
            namespace, index_key, first = failures[0]
            raise StorageError(
                f"Stored {internal_name} but failed to update {len(failures)} index(es)",
                name=internal_name,
                namespace=namespace.value,
                key=index_key,
            ) from first

    async def _unindex(self, key: DocumentKey, internal_name: str) -> None:
        failures: list[tuple[IndexNamespace, str, DocregError]] = []
        for namespace, index_key in key.index_keys().items():
            try:
                await self.indexes.remove_member(namespace, index_key, internal_name)
            except NotFoundError:
                logger.warning(
                    "Index entry already absent: name=%s namespace=%s key=%s",
                    internal_name,
                    namespace,
                    index_key,
                )
            except (StorageError, InvalidNameError) as e:
                logger.error(
                    "Index entry not removed, needs repair: name=%s namespace=%s key=%s: %s",
                    internal_name,
                    namespace,
                    index_key,
                    e.message,
                )
                failures.append((namespace, index_key, e))

        if failures:
            namespace, index_key, first = failures[0]
            raise StorageError(
                f"Deleted {internal_name} but failed to update {len(failures)} index(es)",
                name=internal_name,
                namespace=namespace.value,
                key=index_key,
            ) from first


async def _shielded[T](coro: Coroutine[Any, Any, T]) -> T:
    """Await ``coro`` in its own task that outlives a cancelled caller.

    If the caller is cancelled, the task keeps running and its outcome is
    logged once it finishes.
    """
    task = asyncio.ensure_future(coro)
    try:
        return await asyncio.shield(task)
    except asyncio.CancelledError:
        task.add_done_callback(_log_detached_outcome)
        raise


def _log_detached_outcome(task: asyncio.Future) -> None:
    if task.cancelled():
        logger.warning("Detached document mutation was cancelled")
        return
    exc = task.exception()
    if exc is not None:
        logger.error(
            "Document mutation failed after its caller went away: %s",
            exc,
            exc_info=exc,
        )
    else:
        logger.info("Document mutation completed after its caller went away")
