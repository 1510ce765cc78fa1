"""Server commands."""

import cyclopts
import logfire
import uvicorn

from docreg.config import Config

app = cyclopts.App(name="server", help="Server management commands")


@app.command
def start(
    host: str = "0.0.0.0",
    port: int = 8000,
) -> None:
    """Start the docreg server in the foreground.

    Storage location and logging come from DOCREG_* environment variables
    or the YAML file named by DOCREG_CONFIG_FILE.

    Args:
        host: Host to bind to.
        port: Port to listen on.
    """
    config = Config()
    logfire.configure(
        service_name="docreg",
        service_version=config.server.version,
        send_to_logfire="if-token-present",
        console=False,
    )
    uvicorn.run(
        "docreg.application.api.rest.app:create_app",
        factory=True,
        host=host,
        port=port,
        log_config=None,  # create_app configures logging
    )
