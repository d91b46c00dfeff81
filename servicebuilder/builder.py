"""
ServiceContainerBuilder

This module provides the container that builds services on demand from
their definitions. It is the heart of the ServiceBuilder package,
responsible for:

- Storing and managing service definitions
- Mapping class identifiers to classes or factory callables
- Building services lazily, caching shared ones
- Detecting circular references

Built services live in the base ServiceContainer; this class only adds
what is needed to create them the first time they are requested.
"""

import logging
import threading
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional, Union

from .container import ServiceContainer
from .definition import Definition
from .exceptions import (
    CircularReferenceError,
    DefinitionNotFoundError,
    ServiceNotFoundError,
    UnknownClassError,
)
from .instantiator import FileLoader, Instantiator
from .lifecycle import ServiceState
from .parameters import ParameterBag
from .resolver import resolve_services, resolve_value

logger = logging.getLogger(__name__)


class ServiceContainerBuilder(ServiceContainer):
    """Container building services from definitions.

    This class stores definitions and resolves them with support for:

    - ``%parameter%`` placeholders in classes, arguments and files
    - ServiceReference markers resolved to other services
    - Shared services (built once) and non-shared services (built per call)
    - Factory methods, method calls and configurators
    - Circular reference detection

    Attributes:
        _definitions: Dictionary mapping service ids to Definition objects
        _loading: Ids currently being built, in build order
        _classes: Class identifiers mapped to classes or factory callables
        _instantiator: Engine creating instances from definitions
        _lock: Re-entrant lock held for a whole build tree

    Example::

        container = ServiceContainerBuilder(
            parameters={"mailer.transport": "sendmail"},
            classes={"Mailer": Mailer, "NewsletterManager": NewsletterManager},
        )
        container.register("mailer", "Mailer").add_argument("%mailer.transport%")
        container.register("newsletter", "NewsletterManager") \\
            .add_method_call("set_mailer", [ServiceReference("mailer")])

        newsletter = container.get_service("newsletter")
    """

    def __init__(
        self,
        parameters: Union[ParameterBag, Mapping[str, Any], None] = None,
        classes: Optional[Mapping[str, Any]] = None,
        file_loader: Optional[FileLoader] = None,
    ):
        """Initialize an empty builder.

        Args:
            parameters: Initial parameters, as a mapping or a ParameterBag
            classes: Initial class registry, identifier -> class or callable
            file_loader: Callable loading a definition's ``file``; defaults
                to executing the path as a Python module
        """
        super().__init__(parameters)
        self._definitions: Dict[str, Definition] = {}
        self._loading: Dict[str, None] = {}
        self._classes: Dict[str, Any] = dict(classes or {})
        self._instantiator = Instantiator(self, file_loader)
        self._lock = threading.RLock()

    # Definitions

    def register(self, service_id: str, class_: Any) -> Definition:
        """Register a new definition and return it for fluent configuration.

        Any existing definition under ``service_id`` is replaced.

        Example::

            container.register("mailer", "Mailer") \\
                .add_argument("%mailer.transport%") \\
                .set_shared(False)
        """
        return self.set_definition(service_id, Definition(class_))

    def set_definition(self, service_id: str, definition: Definition) -> Definition:
        logger.debug("Registering definition %s -> %r", service_id, definition.class_)
        self._definitions[service_id] = definition
        return definition

    def set_definitions(self, definitions: Mapping[str, Definition]) -> None:
        for service_id, definition in definitions.items():
            self.set_definition(service_id, definition)

    def get_definitions(self) -> Dict[str, Definition]:
        """Return a snapshot of the definition table.

        The returned dict is a copy; adding or removing keys does not affect
        the container. The Definition objects themselves are shared.
        """
        return dict(self._definitions)

    def has_definition(self, service_id: str) -> bool:
        return service_id in self._definitions

    def get_definition(self, service_id: str) -> Definition:
        """Return the definition registered under ``service_id``.

        Raises:
            DefinitionNotFoundError: When no definition exists for the id
        """
        try:
            return self._definitions[service_id]
        except KeyError:
            registered = ", ".join(self._definitions) or "None"
            raise DefinitionNotFoundError(
                f'The service definition "{service_id}" does not exist.\n'
                f"Registered definitions: {registered}",
                service_id=service_id,
            ) from None

    # Class registry

    def register_class(self, name: str, target: Callable[..., Any]) -> None:
        """Map a class identifier to a class or factory callable."""
        self._classes[name] = target

    def has_class(self, name: str) -> bool:
        return self.find_class(name) is not None

    def find_class(self, name: str) -> Optional[Any]:
        """Look up a class identifier.

        The registry is searched first, then the modules loaded from
        definition files, most recent first.
        """
        if name in self._classes:
            return self._classes[name]
        for module in reversed(self._instantiator.loaded_modules):
            target = getattr(module, name, None)
            if target is not None:
                return target
        return None

    def get_class(self, class_: Any) -> Any:
        """Return the class or factory a definition's resolved ``class_`` denotes.

        Non-string values are classes or callables already and are returned
        unchanged.

        Raises:
            UnknownClassError: When a string identifier is not registered
        """
        if not isinstance(class_, str):
            return class_
        target = self.find_class(class_)
        if target is None:
            registered = ", ".join(self._classes) or "None"
            raise UnknownClassError(
                f'The class "{class_}" is not registered.\n'
                f"Registered classes: {registered}\n"
                f'Hint: container.register_class("{class_}", {class_})',
                class_name=class_,
            )
        return target

    # Services

    def has_service(self, service_id: str) -> bool:
        return service_id in self._definitions or super().has_service(service_id)

    def get_service(self, service_id: str) -> Any:
        """Return a service, building it from its definition if needed.

        Args:
            service_id: The service identifier

        Returns:
            The service instance. Shared services are cached and returned
            again on later calls; non-shared services are built every time.

        Raises:
            ServiceNotFoundError: When neither a built service nor a
                definition exists for the id
            CircularReferenceError: When the service requires itself
        """
        with self._lock:
            try:
                return super().get_service(service_id)
            except ServiceNotFoundError:
                pass

            if service_id in self._loading:
                path = " -> ".join([*self._loading, service_id])
                raise CircularReferenceError(
                    f'The service "{service_id}" has a circular reference to itself.\n'
                    f"Path: {path}",
                    service_id=service_id,
                    path=[*self._loading, service_id],
                )

            definition = self.get_definition(service_id)

            self._loading[service_id] = None
            logger.debug("Building service %s", service_id)
            try:
                with definition.building():
                    service = self._instantiator.create(definition)
                if definition.shared:
                    super().set_service(service_id, service)
            finally:
                del self._loading[service_id]

            logger.debug("Built service %s (shared=%s)", service_id, definition.shared)
            return service

    def get_services(self) -> Dict[str, Any]:
        """Return every service, building all definitions.

        Calling this method should be avoided outside diagnostics and tests
        as it creates every service defined in the container. Services built
        from definitions take precedence over pre-existing entries.
        """
        with self._lock:
            services = super().get_services()
            for service_id in list(self._definitions):
                services[service_id] = self.get_service(service_id)
            return services

    def get_service_ids(self) -> List[str]:
        ids = super().get_service_ids()
        return ids + [service_id for service_id in self._definitions if service_id not in ids]

    def service_state(self, service_id: str) -> ServiceState:
        if service_id in self._loading:
            return ServiceState.BUILDING
        if super().has_service(service_id):
            return ServiceState.BUILT
        return ServiceState.UNBUILT

    def is_loading(self, service_id: str) -> bool:
        return service_id in self._loading

    @property
    def loading(self) -> FrozenSet[str]:
        return frozenset(self._loading)

    # Resolution

    def resolve_value(self, value: Any) -> Any:
        """Replace ``%name%`` placeholders in ``value`` by parameter values."""
        return resolve_value(value, self._parameters)

    def resolve_services(self, value: Any) -> Any:
        """Replace ServiceReference markers in ``value`` by built services."""
        return resolve_services(value, self)
