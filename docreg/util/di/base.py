from dishka import Provider as DishkaProvider
from dishka import Scope


class Provider(DishkaProvider):
    """Base for docreg DI providers.

    Factories default to the APP scope; per-request handlers opt into
    ``Scope.REQUEST`` explicitly.
    """

    scope = Scope.APP
