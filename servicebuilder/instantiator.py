"""
Instantiator

This module turns one Definition into one service instance. It is the
engine behind ServiceContainerBuilder.get_service():

- Loads the definition's file, once
- Resolves the class identifier through the class registry
- Resolves constructor arguments (placeholders first, then references)
- Instantiates through a factory method or the class itself
- Applies method calls in registration order
- Runs the configurator

There is no rollback: a failure in any step propagates, and side effects
of earlier steps (a loaded file, applied method calls) remain.
"""

import hashlib
import importlib.util
import logging
import os
from types import ModuleType
from typing import Any, Callable, List, Optional, Set, TYPE_CHECKING

from .definition import Definition
from .exceptions import InvalidConfiguratorError
from .reference import ValueKind, kind_of

if TYPE_CHECKING:
    from .builder import ServiceContainerBuilder

logger = logging.getLogger(__name__)

FileLoader = Callable[[str], Optional[ModuleType]]


def load_python_file(path: str) -> ModuleType:
    """Execute a Python source file as an anonymous module and return it.

    The module name is derived from the absolute path so that two files
    with the same basename do not collide.
    """
    digest = hashlib.sha1(path.encode('utf-8')).hexdigest()[:12]
    name = f"_servicebuilder_file_{digest}"
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f'Cannot load "{path}": not a Python source file.')
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def has_explicit_constructor(cls: Any) -> bool:
    """Whether ``cls`` accepts constructor arguments.

    Plain callables always do. A class inheriting both ``__init__`` and
    ``__new__`` from ``object`` does not.
    """
    if not isinstance(cls, type):
        return True
    return cls.__init__ is not object.__init__ or cls.__new__ is not object.__new__


class Instantiator:
    """Builds service instances for a ServiceContainerBuilder.

    Attributes:
        _container: Owning builder, used for value resolution, class lookup
            and nested service builds
        _file_loader: Callable executing a file path, returning the loaded
            module (or None)
        _loaded_files: Absolute paths already loaded
        _modules: Modules returned by the file loader, in load order
    """

    def __init__(
        self,
        container: 'ServiceContainerBuilder',
        file_loader: Optional[FileLoader] = None,
    ):
        self._container = container
        self._file_loader: FileLoader = file_loader or load_python_file
        self._loaded_files: Set[str] = set()
        self._modules: List[ModuleType] = []

    @property
    def loaded_modules(self) -> List[ModuleType]:
        return list(self._modules)

    def create(self, definition: Definition) -> Any:
        """Create the service described by ``definition``.

        Args:
            definition: The definition to build

        Returns:
            The new service instance

        Raises:
            UndefinedParameterError: A placeholder names an unknown parameter
            UnknownClassError: The class identifier is not registered
            InvalidConfiguratorError: The configurator is not callable
            CircularReferenceError: Propagated from nested builds
        """
        container = self._container
        # The build sees the definition as it was when the build started
        file = definition.file
        constructor = definition.constructor
        configurator = definition.configurator
        method_calls = [(method, list(args)) for method, args in definition.method_calls]
        arguments = list(definition.arguments)

        if file is not None:
            self.load_file(container.resolve_value(file))

        cls = container.get_class(container.resolve_value(definition.class_))
        arguments = self._resolve(arguments)

        if constructor is not None:
            service = getattr(cls, constructor)(*arguments)
        elif has_explicit_constructor(cls):
            service = cls(*arguments)
        else:
            if arguments:
                logger.warning(
                    "%s has no constructor, ignoring %d argument(s)",
                    getattr(cls, '__name__', cls), len(arguments),
                )
            service = cls()

        for method, call_arguments in method_calls:
            getattr(service, method)(*self._resolve(call_arguments))

        if configurator is not None:
            self._configure(service, configurator)

        return service

    def load_file(self, path: str) -> None:
        """Load ``path`` through the file loader unless already loaded."""
        path = os.path.abspath(path)
        if path in self._loaded_files:
            return
        logger.debug("Loading service file %s", path)
        module = self._file_loader(path)
        self._loaded_files.add(path)
        if module is not None:
            self._modules.append(module)

    def _resolve(self, value: Any) -> Any:
        return self._container.resolve_services(self._container.resolve_value(value))

    def _configure(self, service: Any, configurator: Any) -> None:
        container = self._container
        if kind_of(configurator) is ValueKind.SEQUENCE:
            if len(configurator) != 2 or not isinstance(configurator[1], str):
                configurator = None
            else:
                target, method = configurator
                if kind_of(target) is ValueKind.REFERENCE:
                    target = container.get_service(target.id)
                else:
                    target = self._as_class(container.resolve_value(target))
                configurator = getattr(target, method, None)
        elif kind_of(configurator) is ValueKind.REFERENCE:
            configurator = container.get_service(configurator.id)
        elif isinstance(configurator, str):
            configurator = self._as_class(container.resolve_value(configurator))

        if not callable(configurator):
            class_name = type(service).__name__
            raise InvalidConfiguratorError(
                f'The configure callable for class "{class_name}" is not a callable.',
                class_name=class_name,
            )

        configurator(service)

    def _as_class(self, value: Any) -> Any:
        if isinstance(value, str):
            return self._container.find_class(value)
        return value
