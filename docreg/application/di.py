from dishka import AsyncContainer, Scope, from_context, make_async_container

from docreg.config import Config
from docreg.domain.document.util.di.provider import DocumentProvider
from docreg.infrastructure.persistence.di import PersistenceProvider
from docreg.util.di.base import Provider


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    # Pydantic Settings populates from env vars at runtime
    config = config or Config()

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        DocumentProvider(),
        context={Config: config},
    )
