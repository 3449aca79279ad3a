# ref_indexer/core/container.py

from typing import Any, Callable, Dict, List, Optional, Type, TypeVar
import inspect
import logging

from msgspec import Struct

from .logging import IndexerLogger, log_with_context

T = TypeVar('T')

ServiceFactory = Callable[['IndexerContainer'], Any]


class ServiceRegistration(Struct):
    implementation: Optional[type] = None
    factory: Optional[ServiceFactory] = None
    singleton: bool = True

    @property
    def source_name(self) -> str:
        if self.factory is not None:
            return getattr(self.factory, '__name__', repr(self.factory))
        return self.implementation.__name__


class IndexerContainer:
    """
    Wires the indexer's services.

    Classes are built by constructor injection: a parameter annotated with a
    registered type receives that service, and a parameter named ``config``
    receives the indexer config. Factories receive the container itself.
    """

    def __init__(self, config):
        self._config = config
        self._registrations: Dict[type, ServiceRegistration] = {}
        self._instances: Dict[type, Any] = {}
        self._resolving: List[type] = []

        self._logger = IndexerLogger.get_logger('core.container')

    @property
    def config(self):
        return self._config

    def register_singleton(self, interface: Type[T], implementation: Type[T]) -> 'IndexerContainer':
        return self._register(interface, ServiceRegistration(implementation=implementation))

    def register_transient(self, interface: Type[T], implementation: Type[T]) -> 'IndexerContainer':
        return self._register(interface, ServiceRegistration(implementation=implementation, singleton=False))

    def register_factory(self, interface: Type[T], factory: Callable[['IndexerContainer'], T]) -> 'IndexerContainer':
        """Factories are resolved once and cached like singletons"""
        return self._register(interface, ServiceRegistration(factory=factory))

    def _register(self, interface: type, registration: ServiceRegistration) -> 'IndexerContainer':
        self._registrations[interface] = registration
        self._instances.pop(interface, None)

        log_with_context(self._logger, logging.DEBUG, "Service registered",
                         service_type=interface.__name__,
                         source=registration.source_name,
                         singleton=registration.singleton)
        return self

    def get(self, service_type: Type[T]) -> T:
        if service_type in self._instances:
            return self._instances[service_type]

        registration = self._registrations.get(service_type)
        if registration is None:
            log_with_context(self._logger, logging.ERROR, "Service not registered",
                             service_type=service_type.__name__)
            raise ValueError(f"Service {service_type.__name__} not registered")

        if service_type in self._resolving:
            path = " -> ".join(t.__name__ for t in self._resolving + [service_type])
            log_with_context(self._logger, logging.ERROR, "Circular dependency detected",
                             service_type=service_type.__name__,
                             circular_path=path)
            raise ValueError(f"Circular dependency detected: {path}")

        self._resolving.append(service_type)
        try:
            if registration.factory is not None:
                instance = registration.factory(self)
            else:
                instance = self._build(registration.implementation)
        except Exception as e:
            log_with_context(self._logger, logging.ERROR, "Failed to create service instance",
                             service_type=service_type.__name__,
                             error=str(e),
                             exception_type=type(e).__name__)
            raise
        finally:
            self._resolving.pop()

        if registration.singleton:
            self._instances[service_type] = instance

        log_with_context(self._logger, logging.DEBUG, "Service instance created",
                         service_type=service_type.__name__,
                         instance_type=type(instance).__name__)
        return instance

    def _build(self, implementation: type):
        kwargs = {}

        for name, param in inspect.signature(implementation.__init__).parameters.items():
            if name == 'self' or param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                continue

            if param.annotation in self._registrations:
                kwargs[name] = self.get(param.annotation)
            elif name == 'config':
                kwargs[name] = self._config
            elif param.default is param.empty:
                raise ValueError(
                    f"Cannot resolve parameter '{name}' of {implementation.__name__}"
                )

        return implementation(**kwargs)

    def has_service(self, service_type: type) -> bool:
        return service_type in self._registrations

    def is_resolved(self, service_type: type) -> bool:
        """True once a cached instance of the service exists"""
        return service_type in self._instances

    def get_service_info(self) -> dict:
        return {
            'registered_services': len(self._registrations),
            'cached_instances': len(self._instances),
            'services': {
                service_type.__name__: {
                    'source': registration.source_name,
                    'is_factory': registration.factory is not None,
                    'is_singleton': registration.singleton,
                    'is_cached': service_type in self._instances,
                }
                for service_type, registration in self._registrations.items()
            },
        }
