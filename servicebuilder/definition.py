"""
Definition

Data class describing how to build one service
"""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple, Union

from .exceptions import DefinitionLockedError


# A configurator is either a callable or a (target, method_name) pair
Configurator = Union[Callable[[Any], Any], Tuple[Any, str], str]
MethodCall = Tuple[str, List[Any]]


@dataclass
class Definition:
    """Service definition.

    Attributes:
        class_: Class identifier, class object or factory callable. Strings
            may contain ``%placeholders%`` and are looked up in the class
            registry after resolution.
        arguments: Positional constructor arguments. Each item may be a
            placeholder string, a nested list/dict or a ServiceReference.
        method_calls: ``(method_name, arguments)`` pairs applied in order
            after construction.
        configurator: Optional callable invoked with the built instance.
        file: Optional path to a Python file loaded once before building.
        constructor: Optional name of a static factory method on the class.
        shared: Whether the built instance is cached by the container.

    Setters return the definition itself so registration reads fluently::

        container.register("mailer", "Mailer") \\
            .add_argument("%mailer.transport%") \\
            .add_method_call("set_logger", [ServiceReference("logger")])

    A definition cannot be modified while its own service is being built;
    doing so raises DefinitionLockedError.
    """
    class_: Any
    arguments: List[Any] = field(default_factory=list)
    method_calls: List[MethodCall] = field(default_factory=list)
    configurator: Optional[Configurator] = None
    file: Optional[str] = None
    constructor: Optional[str] = None
    shared: bool = True
    # Build counter, kept out of the dataclass fields and out of copies
    _build_depth = 0

    def __setattr__(self, name: str, value: Any) -> None:
        if name != '_build_depth' and getattr(self, '_build_depth', 0):
            raise DefinitionLockedError(
                f"Cannot set '{name}' on the definition of {self.class_!r} "
                f"while its service is being built."
            )
        super().__setattr__(name, value)

    def __getstate__(self):
        state = dict(self.__dict__)
        state.pop('_build_depth', None)
        return state

    @property
    def is_building(self) -> bool:
        return self._build_depth > 0

    @contextmanager
    def building(self) -> Iterator['Definition']:
        """Lock the definition against mutation for the duration of a build."""
        self._build_depth += 1
        try:
            yield self
        finally:
            self._build_depth -= 1

    def set_class(self, class_: Any) -> 'Definition':
        self.class_ = class_
        return self

    def set_arguments(self, arguments: Sequence[Any]) -> 'Definition':
        self.arguments = list(arguments)
        return self

    def add_argument(self, argument: Any) -> 'Definition':
        self._ensure_not_building()
        self.arguments.append(argument)
        return self

    def set_method_calls(self, calls: Sequence[MethodCall]) -> 'Definition':
        self.method_calls = [(method, list(args)) for method, args in calls]
        return self

    def add_method_call(self, method: str, arguments: Optional[Sequence[Any]] = None) -> 'Definition':
        self._ensure_not_building()
        self.method_calls.append((method, list(arguments or [])))
        return self

    def has_method_call(self, method: str) -> bool:
        return any(call[0] == method for call in self.method_calls)

    def set_configurator(self, configurator: Optional[Configurator]) -> 'Definition':
        self.configurator = configurator
        return self

    def set_file(self, file: Optional[str]) -> 'Definition':
        self.file = file
        return self

    def set_constructor(self, method: Optional[str]) -> 'Definition':
        self.constructor = method
        return self

    def set_shared(self, shared: bool) -> 'Definition':
        self.shared = shared
        return self

    def _ensure_not_building(self) -> None:
        if self._build_depth:
            raise DefinitionLockedError(
                f"Cannot modify the definition of {self.class_!r} "
                f"while its service is being built."
            )
