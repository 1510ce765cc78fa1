import logfire

from docreg.domain.document.service.document import DocumentService
from docreg.domain.shared.command import Command, CommandHandler, Result


class ReplaceDocument(Command):
    name: str
    content: bytes


class DocumentReplaced(Result):
    name: str
    internal_name: str
    content: bytes


class ReplaceDocumentHandler(CommandHandler[ReplaceDocument, DocumentReplaced]):
    document_service: DocumentService

    async def run(self, cmd: ReplaceDocument) -> DocumentReplaced:
        with logfire.span("ReplaceDocument", name=cmd.name):
            doc = await self.document_service.replace(cmd.name, cmd.content)
            return DocumentReplaced(
                name=doc.name,
                internal_name=doc.internal_name,
                content=doc.content,
            )
