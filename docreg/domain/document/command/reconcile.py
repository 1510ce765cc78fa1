import logfire

from docreg.domain.document.model.value import ReconcileReport
from docreg.domain.document.service.document import DocumentService
from docreg.domain.shared.command import Command, CommandHandler, Result


class ReconcileIndexes(Command):
    pass


class IndexesReconciled(Result):
    report: ReconcileReport


class ReconcileIndexesHandler(CommandHandler[ReconcileIndexes, IndexesReconciled]):
    document_service: DocumentService

    async def run(self, cmd: ReconcileIndexes) -> IndexesReconciled:
        with logfire.span("ReconcileIndexes"):
            report = await self.document_service.reconcile()
            return IndexesReconciled(report=report)
