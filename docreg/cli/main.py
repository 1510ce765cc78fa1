"""Main CLI application using Cyclopts.

Document commands are a thin HTTP client over the REST API. ``admin``
commands work directly on the configured storage.
"""

import cyclopts

from docreg.cli.commands import admin, documents, server

app = cyclopts.App(
    name="docreg",
    help="Document Registry - CLI",
)

app.command(server.app, name="server")
app.command(documents.app, name="documents")
app.command(admin.app, name="admin")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
