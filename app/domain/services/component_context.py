import logging
from typing import Optional, Type, TypeVar
from app.domain.errors import ServiceNotInitialisedError

log = logging.getLogger(__name__)

T = TypeVar("T")


class ComponentContext:
    """Type-keyed registry of the service's live components.

    Bootstrap fills it; request handlers and gateway callbacks read from it.
    A lookup by a base class (a port, say) finds a registered subclass.
    """

    def __init__(self):
        self._components: dict[type, object] = {}

    def add(self, *components: object) -> None:
        for component in components:
            log.debug("Registering component %s", component.__class__.__name__)
            self._components[component.__class__] = component

    def get(self, cls: Type[T]) -> Optional[T]:
        found = self._components.get(cls)
        if found is not None:
            return found
        for component in self._components.values():
            if isinstance(component, cls):
                return component
        return None

    def require(self, cls: Type[T]) -> T:
        found = self.get(cls)
        if found is None:
            log.error("Component %s requested before bootstrap provided it", cls.__name__)
            raise ServiceNotInitialisedError()
        return found

    def clear(self) -> None:
        self._components.clear()

    def __len__(self) -> int:
        return len(self._components)


context = ComponentContext()
