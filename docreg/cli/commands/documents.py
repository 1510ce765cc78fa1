"""Document commands (thin HTTP client over the REST API)."""

import os
import sys
import time
from collections.abc import Callable
from pathlib import Path

import cyclopts
import httpx

from docreg.cli.console import get_console
from docreg.domain.document.model.value import IndexNamespace

app = cyclopts.App(name="documents", help="Upload, fetch, list and delete documents")


def get_server_url() -> str:
    """Get server URL from config or environment."""
    return os.environ.get("DOCREG_SERVER", "http://localhost:8000")


def with_retry[T](
    fn: Callable[[], T],
    retries: int = 3,
    exceptions: tuple[type[Exception], ...] = (Exception,),
) -> T:
    """Retry a function on transient errors with exponential backoff.

    Args:
        fn: Zero-argument callable to retry.
        retries: Max retry attempts (total attempts = retries + 1).
        exceptions: Exception types to catch and retry on.

    Returns:
        Result of fn() on success.

    Raises:
        The last exception if all retries fail.
    """
    last_error: Exception | None = None
    for attempt in range(retries + 1):
        try:
            return fn()
        except exceptions as e:
            last_error = e
            if attempt < retries:
                time.sleep(0.2 * (attempt + 1))  # Backoff: 0.2, 0.4, 0.6s
    raise last_error  # type: ignore[misc]


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        return str(body.get("message") or body.get("detail") or body)
    return str(body)


def api_request(method: str, path: str, **kwargs) -> httpx.Response:
    """Send a request to the server, exiting with a readable error on failure.

    Only requests that cannot have taken effect (connection failures) are retried.
    """
    console = get_console()
    server_url = get_server_url()
    url = f"{server_url}/api/v1{path}"

    try:
        response = with_retry(
            lambda: httpx.request(method, url, **kwargs),
            exceptions=(httpx.ConnectError,),
        )
        response.raise_for_status()
        return response
    except httpx.ConnectError:
        console.error(
            f"Could not connect to server at {server_url}",
            hint="Is the server running? Start it with: docreg server start",
        )
        sys.exit(1)
    except httpx.HTTPStatusError as e:
        console.error(f"Server error: {e.response.status_code} - {_error_message(e.response)}")
        sys.exit(1)
    except httpx.ReadError:
        console.error("Connection lost while reading response")
        sys.exit(1)


def _send_file(method: str, path: Path) -> httpx.Response:
    console = get_console()
    if not path.is_file():
        console.error(f"File not found: {path}")
        sys.exit(1)
    files = {"file": (path.name, path.read_bytes(), "application/xml")}
    return api_request(method, "/documents", files=files)


@app.command
def upload(path: Path, /) -> None:
    """Upload a new XML document.

    Args:
        path: XML file named customer_type_yyyy-mm-dd.xml
    """
    _send_file("POST", path)
    get_console().success(f"Uploaded {path.name}")


@app.command
def replace(path: Path, /) -> None:
    """Replace a document, creating it if it does not exist.

    Args:
        path: XML file named customer_type_yyyy-mm-dd.xml
    """
    _send_file("PUT", path)
    get_console().success(f"Replaced {path.name}")


@app.command
def get(name: str, /, output: Path | None = None) -> None:
    """Fetch a stored document as JSON.

    Args:
        name: Document name, e.g. acme_report_2025-12-09.xml
        output: Write the JSON to this file instead of printing it.
    """
    response = api_request("GET", f"/documents/{name}")
    console = get_console()
    if output is not None:
        output.write_bytes(response.content)
        console.success(f"Saved {name} to {output}")
    else:
        console.print_json(response.text)


@app.command(name="list")
def list_documents(namespace: IndexNamespace, key: str, /) -> None:
    """List documents by customer, type or date.

    Args:
        namespace: Index to query (customer, type or date).
        key: Customer name, document type, or yyyy-mm-dd date.
    """
    response = api_request("GET", f"/documents/by-{namespace.value}/{key}")
    names = response.json().get("files", [])
    get_console().document_list(names, title=f"{namespace.value} = {key}")


@app.command
def delete(name: str, /) -> None:
    """Delete a document and its index entries.

    Args:
        name: Document name, e.g. acme_report_2025-12-09.xml
    """
    api_request("DELETE", f"/documents/{name}")
    get_console().success(f"Deleted {name}")
