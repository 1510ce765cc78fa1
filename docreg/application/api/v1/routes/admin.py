"""Administrative REST routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from docreg.domain.document.command.reconcile import ReconcileIndexes, ReconcileIndexesHandler
from docreg.domain.document.model.value import ReconcileReport

router = APIRouter(prefix="/admin", tags=["Admin"], route_class=DishkaRoute)


@router.post("/reconcile", response_model=ReconcileReport)
async def reconcile_indexes(
    handler: FromDishka[ReconcileIndexesHandler],
) -> ReconcileReport:
    """Repair the customer, type and date indexes in place.

    Runs inside the server so every fix takes the same per-document locks
    as concurrent uploads and deletes.
    """
    result = await handler.run(ReconcileIndexes())
    return result.report
