"""
ServiceBuilder Exceptions

Custom exception hierarchy for the ServiceBuilder container
"""

from typing import Optional, Sequence


class ServiceBuilderError(Exception):
    """
    Base exception for all ServiceBuilder errors.

    All ServiceBuilder-specific exceptions inherit from this class.
    You can catch this to handle any container error generically.

    Example:
        >>> try:
        ...     mailer = container.get_service("mailer")
        ... except ServiceBuilderError as e:
        ...     print(f"DI error: {e}")
    """

    pass


class ServiceNotFoundError(ServiceBuilderError):
    """
    Raised when a service is neither built nor defined.

    This error occurs when calling ``get_service(id)`` for an id that has
    no definition and was never set on the container with ``set_service()``.

    Common causes:
        - Typo in the service id
        - Definitions not loaded before the first lookup
        - A ``ServiceReference`` pointing at a service that was never registered

    Solution:
        Register a definition (or a ready-made instance) first::

            container.register("mailer", "Mailer")
            # or
            container.set_service("mailer", Mailer())
    """

    def __init__(self, message: str, service_id: Optional[str] = None):
        super().__init__(message)
        self.service_id = service_id


class DefinitionNotFoundError(ServiceNotFoundError):
    """
    Raised when a service definition does not exist.

    This error occurs when calling ``get_definition(id)`` for an id that
    was never registered. It is a ``ServiceNotFoundError``, so callers that
    only care about "missing" can catch the parent class.
    """

    pass


class ParameterNotFoundError(ServiceBuilderError):
    """
    Raised when a parameter is read from the parameter store but is not set.

    Parameter names are case-insensitive: ``Mailer.Transport`` and
    ``mailer.transport`` address the same parameter.
    """

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        self.name = name


class UndefinedParameterError(ParameterNotFoundError):
    """
    Raised when a ``%name%`` placeholder references an unknown parameter.

    Common causes:
        - Forgetting to set the parameter before building services
        - A literal percent sign in a value that should have been escaped

    Solution:
        Define the parameter, or escape the text with doubled percents::

            container.set_parameter("mailer.transport", "smtp")

            # "%%literal%%" resolves to "%literal%" without any lookup
            container.register("report", "Report").add_argument("%%done%%")
    """

    pass


class CircularReferenceError(ServiceBuilderError):
    """
    Raised when a service requires itself to be built, directly or indirectly.

    Example of a circular reference::

        container.register("a", "A").add_argument(ServiceReference("b"))
        container.register("b", "B").add_argument(ServiceReference("a"))

        container.get_service("a")  # CircularReferenceError

    Solution:
        1. Refactor to remove the cycle
        2. Inject one side later through a method call on a third service
        3. Use a configurator to wire the back-reference after construction
    """

    def __init__(
        self,
        message: str,
        service_id: Optional[str] = None,
        path: Sequence[str] = (),
    ):
        super().__init__(message)
        self.service_id = service_id
        self.path = list(path)


class InvalidConfiguratorError(ServiceBuilderError):
    """
    Raised when a definition's configurator does not resolve to a callable.

    Common causes:
        - A ``(target, "method")`` pair where the target has no such method
        - A configurator string that is neither callable nor a registered class

    Solution:
        Pass a callable, or a pair of a target and an existing method name::

            definition.set_configurator(lambda mailer: mailer.warm_up())
            definition.set_configurator((ServiceReference("configurator"), "configure"))
    """

    def __init__(self, message: str, class_name: Optional[str] = None):
        super().__init__(message)
        self.class_name = class_name


class UnknownClassError(ServiceBuilderError):
    """
    Raised when a definition names a class identifier that is not registered.

    Class identifiers are plain strings mapped to classes or factory
    callables at the composition root.

    Solution:
        Register the class before building the service::

            container.register_class("Mailer", Mailer)
    """

    def __init__(self, message: str, class_name: Optional[str] = None):
        super().__init__(message)
        self.class_name = class_name


class DefinitionLockedError(ServiceBuilderError):
    """
    Raised when a definition is mutated while its service is being built.

    Definitions may be freely changed after registration and between builds,
    but not from inside a constructor, method call or configurator that runs
    as part of building that same definition.
    """

    pass
