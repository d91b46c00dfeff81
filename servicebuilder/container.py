"""
ServiceContainer

Base container holding parameters and already-built service instances.
It knows nothing about definitions; ServiceContainerBuilder layers lazy
building on top of it.
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from .exceptions import ServiceNotFoundError
from .parameters import ParameterBag


class ServiceContainer:
    """Registry of parameters and built services.

    Attributes:
        _parameters: ParameterBag with case-insensitive names
        _services: Built service instances keyed by service id

    Example::

        container = ServiceContainer({"mailer.transport": "smtp"})
        container.set_service("mailer", Mailer())
        container.get_service("mailer")
    """

    def __init__(self, parameters: Union[ParameterBag, Mapping[str, Any], None] = None):
        if isinstance(parameters, ParameterBag):
            self._parameters = parameters
        else:
            self._parameters = ParameterBag(parameters)
        self._services: Dict[str, Any] = {}

    # Parameters

    def has_parameter(self, name: str) -> bool:
        return self._parameters.has(name)

    def get_parameter(self, name: str) -> Any:
        return self._parameters.get(name)

    def set_parameter(self, name: str, value: Any) -> None:
        self._parameters.set(name, value)

    def get_parameters(self) -> Dict[str, Any]:
        return self._parameters.all()

    def set_parameters(self, parameters: Mapping[str, Any]) -> None:
        """Replace every parameter with the given mapping."""
        self._parameters.clear()
        self._parameters.add(parameters)

    def add_parameters(self, parameters: Mapping[str, Any]) -> None:
        """Merge parameters into the existing ones."""
        self._parameters.add(parameters)

    @property
    def parameters(self) -> ParameterBag:
        return self._parameters

    # Services

    def set_service(self, service_id: str, service: Any) -> None:
        self._services[service_id] = service

    def has_service(self, service_id: str) -> bool:
        return service_id in self._services

    def get_service(self, service_id: str) -> Any:
        """Return a built service.

        Raises:
            ServiceNotFoundError: When no service is registered under the id
        """
        try:
            return self._services[service_id]
        except KeyError:
            raise ServiceNotFoundError(
                f'The service "{service_id}" does not exist.',
                service_id=service_id,
            ) from None

    def get_service_ids(self) -> List[str]:
        return list(self._services)

    def get_services(self) -> Dict[str, Any]:
        return dict(self._services)

    def __contains__(self, service_id: object) -> bool:
        return isinstance(service_id, str) and self.has_service(service_id)
