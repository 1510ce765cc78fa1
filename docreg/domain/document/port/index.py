from abc import abstractmethod
from typing import Protocol

from docreg.domain.document.model.value import IndexNamespace
from docreg.domain.shared.port import Port


class IndexStoragePort(Port, Protocol):
    """Secondary namespaces mapping an index key to a set of member names.

    Members are non-owning references to objects in the ObjectStoragePort.
    """

    @abstractmethod
    async def add_member(self, namespace: IndexNamespace, key: str, name: str) -> None:
        """Reference ``name`` from ``key``. Adding an existing member is a no-op."""
        ...

    @abstractmethod
    async def remove_member(self, namespace: IndexNamespace, key: str, name: str) -> None:
        """Drop the reference. Raises NotFoundError if it does not exist."""
        ...

    @abstractmethod
    async def list_members(self, namespace: IndexNamespace, key: str) -> list[str]:
        """Member names in stable order; empty for an unknown key."""
        ...

    @abstractmethod
    async def list_keys(self, namespace: IndexNamespace) -> list[str]: ...
