from docreg.domain.document.service.document import DocumentService
from docreg.domain.shared.query import Query, QueryHandler, Result


class GetDocument(Query):
    name: str


class DocumentContent(Result):
    name: str
    internal_name: str
    content: bytes


class GetDocumentHandler(QueryHandler[GetDocument, DocumentContent]):
    document_service: DocumentService

    async def run(self, query: GetDocument) -> DocumentContent:
        doc = await self.document_service.fetch_by_name(query.name)
        return DocumentContent(
            name=doc.name,
            internal_name=doc.internal_name,
            content=doc.content,
        )
