from docreg.domain.document.port.converter import ContentConverterPort
from docreg.domain.document.port.index import IndexStoragePort
from docreg.domain.document.port.storage import ObjectStoragePort

__all__ = [
    "ContentConverterPort",
    "IndexStoragePort",
    "ObjectStoragePort",
]
