from abc import abstractmethod
from typing import Protocol

from docreg.domain.shared.port import Port


class ContentConverterPort(Port, Protocol):
    @abstractmethod
    async def convert(self, raw: bytes) -> bytes:
        """Turn an uploaded document into canonical JSON bytes.

        Raises InvalidContentError if the input cannot be parsed.
        """
        ...
