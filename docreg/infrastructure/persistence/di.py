from dishka import provide

from docreg.config import Config
from docreg.domain.document.port import (
    ContentConverterPort,
    IndexStoragePort,
    ObjectStoragePort,
)
from docreg.infrastructure.persistence.adapter.converter import XmlToJsonConverter
from docreg.infrastructure.persistence.adapter.index import SymlinkIndexAdapter
from docreg.infrastructure.persistence.adapter.storage import LocalObjectStorageAdapter
from docreg.util.di.base import Provider


class PersistenceProvider(Provider):
    @provide
    def get_object_storage(self, config: Config) -> ObjectStoragePort:
        return LocalObjectStorageAdapter(base_path=config.storage.root)

    @provide
    def get_index_storage(self, config: Config) -> IndexStoragePort:
        return SymlinkIndexAdapter(base_path=config.storage.root)

    @provide
    def get_converter(self) -> ContentConverterPort:
        return XmlToJsonConverter()
