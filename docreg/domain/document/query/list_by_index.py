from docreg.domain.document.model.value import IndexNamespace
from docreg.domain.document.service.document import DocumentService
from docreg.domain.shared.query import Query, QueryHandler, Result


class ListByIndex(Query):
    namespace: IndexNamespace
    key: str


class DocumentNameList(Result):
    files: list[str]


class ListByIndexHandler(QueryHandler[ListByIndex, DocumentNameList]):
    document_service: DocumentService

    async def run(self, query: ListByIndex) -> DocumentNameList:
        files = await self.document_service.fetch_by_index(query.namespace, query.key)
        return DocumentNameList(files=files)
