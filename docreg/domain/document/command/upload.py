import logfire

from docreg.domain.document.service.document import DocumentService
from docreg.domain.shared.command import Command, CommandHandler, Result


class UploadDocument(Command):
    name: str
    content: bytes


class DocumentUploaded(Result):
    name: str
    internal_name: str
    content: bytes


class UploadDocumentHandler(CommandHandler[UploadDocument, DocumentUploaded]):
    document_service: DocumentService

    async def run(self, cmd: UploadDocument) -> DocumentUploaded:
        with logfire.span("UploadDocument", name=cmd.name):
            doc = await self.document_service.ingest(cmd.name, cmd.content)
            return DocumentUploaded(
                name=doc.name,
                internal_name=doc.internal_name,
                content=doc.content,
            )
