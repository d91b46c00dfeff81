"""
Resolvers

Two recursive passes applied to definition values before they reach a
constructor, a method call or a configurator:

1. ``resolve_value`` replaces ``%name%`` placeholders with parameter values.
2. ``resolve_services`` replaces ServiceReference markers with built services.

Placeholders cannot expand into references, so the parameter pass always
runs first.
"""

import re
from typing import Any, Protocol

from .exceptions import UndefinedParameterError
from .reference import InvalidBehavior, ValueKind, kind_of

# A string that is exactly one placeholder keeps the parameter's native type
_WHOLE_PLACEHOLDER = re.compile(r'^%([^%]+)%$')
# %name% or the %%escape%% form anywhere inside a larger string
_EMBEDDED_PLACEHOLDER = re.compile(r'(%{1,2})([^%]+)\1')


class ParameterSource(Protocol):
    def has(self, name: str) -> bool: ...

    def get(self, name: str) -> Any: ...


class ServiceSource(Protocol):
    def has_service(self, service_id: str) -> bool: ...

    def get_service(self, service_id: str) -> Any: ...


def resolve_value(value: Any, parameters: ParameterSource) -> Any:
    """Replace parameter placeholders by their values.

    Lists, tuples and mappings are resolved recursively; mapping keys are
    resolved too. A string that is exactly ``%name%`` is replaced by the raw
    parameter value. Placeholders embedded in a larger string are replaced
    by the text form of the value, and ``%%text%%`` yields ``%text%``.

    Args:
        value: Any value taken from a definition
        parameters: Store providing ``has(name)`` and ``get(name)``

    Returns:
        The value with every placeholder substituted

    Raises:
        UndefinedParameterError: When a placeholder names an unknown parameter

    Example::

        resolve_value("%debug%", bag)           # True
        resolve_value("debug=%debug%", bag)     # "debug=true"
        resolve_value("%%debug%%", bag)         # "%debug%"
    """
    kind = kind_of(value)
    if kind is ValueKind.SEQUENCE:
        resolved = [resolve_value(item, parameters) for item in value]
        return tuple(resolved) if isinstance(value, tuple) else resolved
    if kind is ValueKind.MAPPING:
        return {
            resolve_value(key, parameters): resolve_value(item, parameters)
            for key, item in value.items()
        }
    if kind is ValueKind.PLAIN and isinstance(value, str):
        match = _WHOLE_PLACEHOLDER.match(value)
        if match:
            return _lookup(match.group(1), parameters)

        def replace(m: 're.Match[str]') -> str:
            if m.group(1) == '%%':
                return f'%{m.group(2)}%'
            return to_text(_lookup(m.group(2), parameters))

        return _EMBEDDED_PLACEHOLDER.sub(replace, value)
    return value


def resolve_services(value: Any, container: ServiceSource) -> Any:
    """Replace ServiceReference markers by the services they point to.

    Lists, tuples and mapping values are resolved recursively; mapping keys
    are left untouched. Each reference is fetched with
    ``container.get_service``, which builds it on demand.

    Args:
        value: A value already passed through ``resolve_value``
        container: Provides ``has_service(id)`` and ``get_service(id)``

    Returns:
        The value with every reference replaced by a service instance
    """
    kind = kind_of(value)
    if kind is ValueKind.SEQUENCE:
        resolved = [resolve_services(item, container) for item in value]
        return tuple(resolved) if isinstance(value, tuple) else resolved
    if kind is ValueKind.MAPPING:
        return {key: resolve_services(item, container) for key, item in value.items()}
    if kind is ValueKind.REFERENCE:
        if (value.invalid_behavior is InvalidBehavior.NULL
                and not container.has_service(value.id)):
            return None
        return container.get_service(value.id)
    return value


def to_text(value: Any) -> str:
    """Text form of a parameter value inside a larger string."""
    if value is True:
        return 'true'
    if value is False:
        return 'false'
    if value is None:
        return ''
    return str(value)


def _lookup(name: str, parameters: ParameterSource) -> Any:
    name = name.lower()
    if not parameters.has(name):
        raise UndefinedParameterError(
            f'The parameter "{name}" must be defined.', name=name
        )
    return parameters.get(name)
