"""
Resolver Tests

Tests for %placeholder% substitution and ServiceReference substitution.
"""

import unittest

from servicebuilder import (
    InvalidBehavior,
    ParameterBag,
    ServiceContainer,
    ServiceNotFoundError,
    ServiceReference,
    UndefinedParameterError,
    resolve_services,
    resolve_value,
)


class CountingBag(ParameterBag):
    """ParameterBag recording every lookup"""

    def __init__(self, parameters=None):
        super().__init__(parameters)
        self.lookups = []

    def has(self, name):
        self.lookups.append(name)
        return super().has(name)


class TestResolveValue(unittest.TestCase):
    """Test placeholder substitution."""

    def setUp(self):
        self.parameters = CountingBag({
            "foo": True,
            "port": 8080,
            "app_name": "demo",
            "hosts": ["a", "b"],
            "nothing": None,
        })

    def test_whole_placeholder_keeps_native_type(self):
        """A string that is exactly one placeholder keeps the value's type."""
        self.assertIs(resolve_value("%foo%", self.parameters), True)
        self.assertEqual(resolve_value("%port%", self.parameters), 8080)
        self.assertEqual(resolve_value("%hosts%", self.parameters), ["a", "b"])

    def test_embedded_placeholder_is_coerced_to_text(self):
        """Embedded placeholders always produce a string."""
        self.assertEqual(resolve_value("x=%foo%", self.parameters), "x=true")
        self.assertEqual(
            resolve_value("http://localhost:%port%/%app_name%", self.parameters),
            "http://localhost:8080/demo",
        )

    def test_none_embeds_as_empty_text(self):
        self.assertEqual(resolve_value("[%nothing%]", self.parameters), "[]")

    def test_placeholder_names_are_case_insensitive(self):
        self.assertEqual(resolve_value("%APP_NAME%", self.parameters), "demo")
        self.assertEqual(resolve_value("name: %App_Name%", self.parameters), "name: demo")

    def test_escaped_placeholder_is_literal(self):
        """%%text%% yields %text% without any parameter lookup."""
        self.assertEqual(resolve_value("%%literal%%", self.parameters), "%literal%")
        self.assertEqual(self.parameters.lookups, [])

    def test_escape_mixed_with_placeholder(self):
        self.assertEqual(
            resolve_value("%%app_name%% is %app_name%", self.parameters),
            "%app_name% is demo",
        )

    def test_missing_parameter_raises(self):
        with self.assertRaises(UndefinedParameterError) as ctx:
            resolve_value("%missing%", self.parameters)

        self.assertEqual(ctx.exception.name, "missing")
        self.assertIn('"missing"', str(ctx.exception))

    def test_missing_embedded_parameter_raises(self):
        with self.assertRaises(UndefinedParameterError):
            resolve_value("prefix %Missing% suffix", self.parameters)

    def test_nested_structures_are_resolved(self):
        value = {"%app_name%": ["%port%", ("x=%foo%", 3)], "plain": {"deep": "%foo%"}}

        resolved = resolve_value(value, self.parameters)

        self.assertEqual(
            resolved,
            {"demo": [8080, ("x=true", 3)], "plain": {"deep": True}},
        )
        self.assertIsInstance(resolved["demo"][1], tuple)

    def test_other_values_are_unchanged(self):
        marker = object()
        reference = ServiceReference("mailer")

        self.assertIs(resolve_value(marker, self.parameters), marker)
        self.assertIs(resolve_value(reference, self.parameters), reference)
        self.assertIsNone(resolve_value(None, self.parameters))
        self.assertEqual(resolve_value(42, self.parameters), 42)

    def test_string_without_placeholder_is_unchanged(self):
        self.assertEqual(resolve_value("100% sure", self.parameters), "100% sure")


class TestResolveServices(unittest.TestCase):
    """Test ServiceReference substitution."""

    def setUp(self):
        self.container = ServiceContainer()
        self.mailer = object()
        self.container.set_service("mailer", self.mailer)

    def test_reference_is_replaced_by_service(self):
        self.assertIs(resolve_services(ServiceReference("mailer"), self.container), self.mailer)

    def test_nested_references(self):
        value = {"%key%": [ServiceReference("mailer"), "text"]}

        resolved = resolve_services(value, self.container)

        self.assertIs(resolved["%key%"][0], self.mailer)
        self.assertEqual(resolved["%key%"][1], "text")

    def test_mapping_keys_are_untouched(self):
        reference = ServiceReference("mailer")
        resolved = resolve_services({"k": reference}, self.container)
        self.assertEqual(list(resolved), ["k"])

    def test_missing_reference_raises(self):
        with self.assertRaises(ServiceNotFoundError):
            resolve_services(ServiceReference("unknown"), self.container)

    def test_null_policy_yields_none(self):
        reference = ServiceReference("unknown", InvalidBehavior.NULL)
        self.assertIsNone(resolve_services([reference], self.container)[0])

    def test_reference_text_form_is_its_id(self):
        self.assertEqual(str(ServiceReference("mailer")), "mailer")
