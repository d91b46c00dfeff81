"""
Test Fixtures

Common test classes used across test modules
"""


class Mailer:
    """Mailer configured through its constructor"""

    def __init__(self, transport="sendmail"):
        self.transport = transport


class NewsletterManager:
    """Manager wired through a method call"""

    def __init__(self, mailer=None):
        self.mailer = mailer
        self.name = None
        self.configured_by = None

    def set_mailer(self, mailer):
        self.mailer = mailer

    def set_name(self, name):
        self.name = name


class Plain:
    """Class without an explicit constructor"""
    pass


class Recorder:
    """Stores every constructor argument"""

    def __init__(self, *args):
        self.args = args
        self.calls = []

    def record(self, *args):
        self.calls.append(args)


class Counter:
    """Counts how many instances were created"""

    instances = 0

    def __init__(self):
        Counter.instances += 1


class Connection:
    """Built through a static factory method"""

    def __init__(self, dsn, options=None):
        self.dsn = dsn
        self.options = options

    @classmethod
    def create(cls, dsn, options=None):
        connection = cls(dsn, options)
        connection.via_factory = True
        return connection


class MailerConfigurator:
    """Configurator service"""

    def __init__(self, transport="smtp"):
        self.transport = transport
        self.configured = []

    def configure(self, mailer):
        mailer.transport = self.transport
        self.configured.append(mailer)


def configure_newsletter(manager):
    """Plain function configurator"""
    manager.configured_by = "function"
