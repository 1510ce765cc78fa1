"""Administrative commands."""

import asyncio

import cyclopts

from docreg.application.di import create_container
from docreg.cli.commands.documents import api_request
from docreg.cli.console import get_console
from docreg.config import Config, configure_logging
from docreg.domain.document.command.reconcile import (
    ReconcileIndexes,
    ReconcileIndexesHandler,
)
from docreg.domain.document.model.value import ReconcileReport

app = cyclopts.App(name="admin", help="Administrative commands")


async def _reconcile_offline(config: Config) -> ReconcileReport:
    container = create_container(config)
    try:
        async with container() as request_container:
            handler = await request_container.get(ReconcileIndexesHandler)
            result = await handler.run(ReconcileIndexes())
            return result.report
    finally:
        await container.close()


def _plural(count: int) -> str:
    return "entry" if count == 1 else "entries"


@app.command
def reconcile(*, offline: bool = False) -> None:
    """Repair the customer, type and date indexes.

    Re-creates index entries missing for stored documents and removes
    entries that point at documents which no longer exist.

    Args:
        offline: Work directly on the configured storage instead of asking
            the server. Only use this while the server is stopped.
    """
    console = get_console()

    if offline:
        config = Config()
        configure_logging(config.logging)
        console.info(f"Reconciling indexes in {config.storage.root}")
        report = asyncio.run(_reconcile_offline(config))
    else:
        response = api_request("POST", "/admin/reconcile")
        report = ReconcileReport.model_validate(response.json())

    console.success(f"Restored {report.indexed} index {_plural(report.indexed)}")
    console.success(f"Pruned {report.pruned} dangling {_plural(report.pruned)}")
    for name in report.skipped:
        console.warning(f"Skipped {name}: name is not customer_type_yyyy-mm-dd")
