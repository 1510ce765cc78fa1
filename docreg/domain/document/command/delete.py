import logfire

from docreg.domain.document.service.document import DocumentService
from docreg.domain.shared.command import Command, CommandHandler, Result


class DeleteDocument(Command):
    name: str


class DocumentDeleted(Result):
    name: str


class DeleteDocumentHandler(CommandHandler[DeleteDocument, DocumentDeleted]):
    document_service: DocumentService

    async def run(self, cmd: DeleteDocument) -> DocumentDeleted:
        with logfire.span("DeleteDocument", name=cmd.name):
            await self.document_service.remove(cmd.name)
            return DocumentDeleted(name=cmd.name)
