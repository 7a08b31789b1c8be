# launchpad_indexer/core/container.py

from typing import Any, Callable, Dict, List, Tuple, Type, TypeVar
import inspect

from .logging import IndexerLogger, log_with_context, DEBUG, ERROR

T = TypeVar('T')

Provider = Callable[['IndexerContainer'], Any]


class IndexerContainer:
    """
    Service registry for the indexer.

    Every registration is a singleton: the first get() builds the service
    through its provider and later calls return the same object.
    """

    def __init__(self, config):
        self._config = config
        self._providers: Dict[Type, Provider] = {}
        self._instances: Dict[Type, Any] = {}
        self._building: List[Type] = []

        self._logger = IndexerLogger.get_logger('core.container')

    @property
    def config(self):
        return self._config

    def register_singleton(self, interface: Type[T], implementation: Type[T]) -> 'IndexerContainer':
        """Build ``implementation`` from its annotated constructor parameters"""
        self._providers[interface] = lambda c: c._inject(implementation)
        return self

    def register_factory(self, interface: Type[T], factory_func: Callable[['IndexerContainer'], T]) -> 'IndexerContainer':
        self._providers[interface] = factory_func
        return self

    def register_instance(self, interface: Type[T], instance: T) -> 'IndexerContainer':
        self._providers[interface] = lambda c: instance
        self._instances[interface] = instance
        return self

    def is_built(self, service_type: Type) -> bool:
        return service_type in self._instances

    def get(self, service_type: Type[T]) -> T:
        if service_type in self._instances:
            return self._instances[service_type]

        if service_type not in self._providers:
            raise ValueError(f"Service {service_type.__name__} not registered")
        if service_type in self._building:
            chain = " -> ".join(t.__name__ for t in self._building + [service_type])
            raise ValueError(f"Circular dependency detected: {chain}")

        self._building.append(service_type)
        try:
            instance = self._providers[service_type](self)
        except Exception as e:
            log_with_context(self._logger, ERROR, "Failed to build service",
                             service_type=service_type.__name__,
                             error=str(e),
                             exception_type=type(e).__name__)
            raise
        finally:
            self._building.pop()

        self._instances[service_type] = instance
        log_with_context(self._logger, DEBUG, "Service built",
                         service_type=service_type.__name__,
                         instance_type=type(instance).__name__)
        return instance

    def _inject(self, implementation: Type[T]) -> T:
        kwargs = dict(self._resolve_params(implementation))
        return implementation(**kwargs)

    def _resolve_params(self, implementation: Type) -> List[Tuple[str, Any]]:
        resolved = []
        for name, param in inspect.signature(implementation.__init__).parameters.items():
            if name == 'self':
                continue
            if param.annotation in self._providers:
                resolved.append((name, self.get(param.annotation)))
            elif name == 'config':
                resolved.append((name, self._config))
        return resolved
