"""
Test Configuration and Utilities

Common base classes and helper functions for ServiceBuilder tests
"""

import unittest
from typing import Any, Mapping, Optional

from servicebuilder import ServiceContainerBuilder

from fixtures import (
    Connection,
    Counter,
    Mailer,
    MailerConfigurator,
    NewsletterManager,
    Plain,
    Recorder,
)

FIXTURE_CLASSES = {
    "Mailer": Mailer,
    "NewsletterManager": NewsletterManager,
    "Plain": Plain,
    "Recorder": Recorder,
    "Counter": Counter,
    "Connection": Connection,
    "MailerConfigurator": MailerConfigurator,
}


def create_builder(parameters: Optional[Mapping[str, Any]] = None) -> ServiceContainerBuilder:
    """
    Create a builder with every fixture class registered under its name.

    Example:
        >>> container = create_builder({"mailer.transport": "smtp"})
        >>> container.register("mailer", "Mailer").add_argument("%mailer.transport%")
    """
    return ServiceContainerBuilder(parameters=parameters, classes=FIXTURE_CLASSES)


class ServiceBuilderTestCase(unittest.TestCase):
    """
    Base test case class for ServiceBuilder tests.

    Provides a fresh builder per test with fixture classes registered.
    """

    parameters: Mapping[str, Any] = {}

    def setUp(self):
        """Create a fresh container before each test"""
        Counter.instances = 0
        self.container = create_builder(dict(self.parameters))
