from dishka import Scope, provide

from docreg.domain.document.command.delete import DeleteDocumentHandler
from docreg.domain.document.command.reconcile import ReconcileIndexesHandler
from docreg.domain.document.command.replace import ReplaceDocumentHandler
from docreg.domain.document.command.upload import UploadDocumentHandler
from docreg.domain.document.port import (
    ContentConverterPort,
    IndexStoragePort,
    ObjectStoragePort,
)
from docreg.domain.document.query.get_document import GetDocumentHandler
from docreg.domain.document.query.list_by_index import ListByIndexHandler
from docreg.domain.document.service.document import DocumentService
from docreg.util.di.base import Provider


class DocumentProvider(Provider):
    # APP-scoped: the service owns the process-wide per-document lock table
    @provide(scope=Scope.APP)
    def get_document_service(
        self,
        objects: ObjectStoragePort,
        indexes: IndexStoragePort,
        converter: ContentConverterPort,
    ) -> DocumentService:
        return DocumentService(objects=objects, indexes=indexes, converter=converter)

    # Command Handlers
    upload_handler = provide(UploadDocumentHandler, scope=Scope.REQUEST)
    replace_handler = provide(ReplaceDocumentHandler, scope=Scope.REQUEST)
    delete_handler = provide(DeleteDocumentHandler, scope=Scope.REQUEST)
    reconcile_handler = provide(ReconcileIndexesHandler, scope=Scope.REQUEST)

    # Query Handlers
    get_document_handler = provide(GetDocumentHandler, scope=Scope.REQUEST)
    list_by_index_handler = provide(ListByIndexHandler, scope=Scope.REQUEST)
