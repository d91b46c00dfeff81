# Public API
import logging

from .builder import ServiceContainerBuilder
from .container import ServiceContainer
from .definition import Definition
from .exceptions import (
    CircularReferenceError,
    DefinitionLockedError,
    DefinitionNotFoundError,
    InvalidConfiguratorError,
    ParameterNotFoundError,
    ServiceBuilderError,
    ServiceNotFoundError,
    UndefinedParameterError,
    UnknownClassError,
)
from .instantiator import Instantiator, load_python_file
from .lifecycle import ServiceState
from .parameters import ParameterBag
from .reference import InvalidBehavior, ServiceReference
from .resolver import resolve_services, resolve_value

__all__ = [
    "ServiceContainer",
    "ServiceContainerBuilder",
    "Definition",
    "ParameterBag",
    "ServiceReference",
    "InvalidBehavior",
    "ServiceState",
    "Instantiator",
    "load_python_file",
    "resolve_value",
    "resolve_services",
    # Exceptions
    "ServiceBuilderError",
    "ServiceNotFoundError",
    "DefinitionNotFoundError",
    "ParameterNotFoundError",
    "UndefinedParameterError",
    "CircularReferenceError",
    "InvalidConfiguratorError",
    "UnknownClassError",
    "DefinitionLockedError",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())

try:
    from importlib.metadata import PackageNotFoundError, version
    __version__ = version("servicebuilder")
except PackageNotFoundError:
    # Fallback for development
    __version__ = '0.0.0'
