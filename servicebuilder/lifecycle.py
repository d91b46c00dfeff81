"""
ServiceState Enum

Defines the build state of a service inside a container
"""

from enum import Enum


class ServiceState(Enum):
    """Build state of a service id.

    UNBUILT -> BUILDING -> BUILT for shared services.
    BUILDING -> UNBUILT when a build fails or the service is not shared.
    """
    UNBUILT = "UNBUILT"
    BUILDING = "BUILDING"
    BUILT = "BUILT"
