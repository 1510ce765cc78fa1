from abc import abstractmethod
from typing import Protocol

from docreg.domain.shared.port import Port


class ObjectStoragePort(Port, Protocol):
    """Flat namespace of canonical JSON objects keyed by internal name."""

    @abstractmethod
    async def exists(self, name: str) -> bool: ...

    @abstractmethod
    async def create_exclusive(self, name: str, content: bytes) -> None:
        """Store a new object. Raises ConflictError if the name is already taken."""
        ...

    @abstractmethod
    async def write(self, name: str, content: bytes) -> None:
        """Create or overwrite an object."""
        ...

    @abstractmethod
    async def read(self, name: str) -> bytes:
        """Return the object's bytes. Raises NotFoundError if absent."""
        ...

    @abstractmethod
    async def delete(self, name: str) -> None:
        """Remove an object. Raises NotFoundError if absent."""
        ...

    @abstractmethod
    async def list_names(self) -> list[str]: ...
