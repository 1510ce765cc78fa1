"""Command and CommandHandler base classes."""

from abc import abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

from docreg.domain.shared.service import AutoDataclassMeta


class Command(BaseModel): ...


class Result(BaseModel): ...


C = TypeVar("C", bound=Command)
R = TypeVar("R", bound=Result)


class CommandHandler(Generic[C, R], metaclass=AutoDataclassMeta):
    """Base class for command handlers. Subclasses are automatically dataclasses.

    Dependencies are declared as annotated fields and injected by dishka:
        class MyHandler(CommandHandler[MyCmd, MyResult]):
            document_service: DocumentService
    """

    @abstractmethod
    async def run(self, cmd: C) -> R: ...
