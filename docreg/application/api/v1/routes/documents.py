"""Document REST routes."""

import datetime as dt
import re

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response, UploadFile

from docreg.domain.document.command.delete import DeleteDocument, DeleteDocumentHandler
from docreg.domain.document.command.replace import ReplaceDocument, ReplaceDocumentHandler
from docreg.domain.document.command.upload import UploadDocument, UploadDocumentHandler
from docreg.domain.document.model.name import validate_external_name
from docreg.domain.document.model.value import IndexNamespace
from docreg.domain.document.query.get_document import GetDocument, GetDocumentHandler
from docreg.domain.document.query.list_by_index import (
    DocumentNameList,
    ListByIndex,
    ListByIndexHandler,
)

router = APIRouter(prefix="/documents", tags=["Documents"], route_class=DishkaRoute)

JSON_MEDIA_TYPE = "application/json"


@router.post("", status_code=201)
async def upload_document(
    file: UploadFile,
    handler: FromDishka[UploadDocumentHandler],
) -> Response:
    """Upload an XML document named ``customer_type_yyyy-mm-dd.xml``.

    The content is converted to JSON and stored; a document with the same
    name must not already exist.
    """
    name = validate_external_name(file.filename)
    content = await file.read()
    result = await handler.run(UploadDocument(name=name, content=content))
    return _attachment(result.content, result.internal_name, status_code=201)


@router.put("", status_code=202)
async def replace_document(
    file: UploadFile,
    handler: FromDishka[ReplaceDocumentHandler],
) -> Response:
    """Replace an existing document, creating it if it does not exist."""
    name = validate_external_name(file.filename)
    content = await file.read()
    result = await handler.run(ReplaceDocument(name=name, content=content))
    return _attachment(result.content, result.internal_name, status_code=202)


@router.get("/by-customer/{customer}", response_model=DocumentNameList)
async def list_by_customer(
    customer: str,
    handler: FromDishka[ListByIndexHandler],
) -> DocumentNameList:
    return await handler.run(ListByIndex(namespace=IndexNamespace.CUSTOMER, key=customer))


@router.get("/by-type/{doc_type}", response_model=DocumentNameList)
async def list_by_type(
    doc_type: str,
    handler: FromDishka[ListByIndexHandler],
) -> DocumentNameList:
    return await handler.run(ListByIndex(namespace=IndexNamespace.TYPE, key=doc_type))


@router.get("/by-date/{date}", response_model=DocumentNameList)
async def list_by_date(
    date: dt.date,
    handler: FromDishka[ListByIndexHandler],
) -> DocumentNameList:
    return await handler.run(ListByIndex(namespace=IndexNamespace.DATE, key=date.isoformat()))


@router.get("/{name}")
async def download_document(
    name: str,
    handler: FromDishka[GetDocumentHandler],
) -> Response:
    result = await handler.run(GetDocument(name=name))
    return _attachment(result.content, result.internal_name)


@router.delete("/{name}", status_code=204)
async def delete_document(
    name: str,
    handler: FromDishka[DeleteDocumentHandler],
) -> Response:
    await handler.run(DeleteDocument(name=name))
    return Response(status_code=204)


def _attachment(content: bytes, filename: str, status_code: int = 200) -> Response:
    return Response(
        content=content,
        status_code=status_code,
        media_type=JSON_MEDIA_TYPE,
        headers={
            "Content-Disposition": f'attachment; filename="{_sanitize_header_filename(filename)}"'
        },
    )


def _sanitize_header_filename(filename: str) -> str:
    """Strip characters that could break Content-Disposition headers."""
    return re.sub(r'[\r\n"]', "_", filename)
