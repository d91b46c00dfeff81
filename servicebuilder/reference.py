"""
ServiceReference

Marker values placed inside definition arguments to say "substitute the
built instance of service ``id`` here", and the classification of
resolvable values used by the resolver pipeline.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping


class InvalidBehavior(Enum):
    """What to do when a referenced service does not exist."""
    EXCEPTION = "EXCEPTION"
    NULL = "NULL"


@dataclass(frozen=True)
class ServiceReference:
    """Reference to another service by id.

    Attributes:
        id: Target service id
        invalid_behavior: Policy applied when the target is missing.
            ``EXCEPTION`` (default) propagates the not-found error,
            ``NULL`` substitutes ``None``.

    Example::

        container.register("newsletter", "NewsletterManager").add_argument(
            ServiceReference("mailer")
        )
    """
    id: str
    invalid_behavior: InvalidBehavior = InvalidBehavior.EXCEPTION

    def __str__(self) -> str:
        return self.id


class ValueKind(Enum):
    """Shape of a value as seen by the resolvers."""
    PLAIN = "PLAIN"
    REFERENCE = "REFERENCE"
    SEQUENCE = "SEQUENCE"
    MAPPING = "MAPPING"


def kind_of(value: Any) -> ValueKind:
    """Classify ``value`` for the resolver pipeline.

    Only lists and tuples count as sequences; strings, bytes and arbitrary
    iterables are plain values.
    """
    if isinstance(value, ServiceReference):
        return ValueKind.REFERENCE
    if isinstance(value, Mapping):
        return ValueKind.MAPPING
    if isinstance(value, (list, tuple)):
        return ValueKind.SEQUENCE
    return ValueKind.PLAIN
