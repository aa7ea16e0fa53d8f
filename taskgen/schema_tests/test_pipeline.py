"""
Integration tests for the whole schema pipeline.

Runs the saved Npm@1 reference page through extraction, schema building and
rendering.
"""

import unittest
from ..schema import EmitOptions, MissingParameterTable, generate
from .helpers import HEADER, load_fixture, make_page


class TestNpmPage(unittest.TestCase):
    """End-to-end tests on the Npm@1 page."""

    @classmethod
    def setUpClass(cls):
        cls.code, cls.schema = generate(load_fixture(), HEADER)

    def test_schema_reference(self):
        """The schema carries the task reference and the header's URL."""
        self.assertEqual(self.schema.reference, "Npm@1")
        self.assertEqual(self.schema.source_url, HEADER.source_url)

    def test_banner(self):
        """The file starts with the auto-generated banner."""
        self.assertTrue(self.code.startswith(
            "// <auto-generated>\n"
            "//     Generated by taskgen v0.1.0 on Sun, 18 Oct 2026 12:00:00 +0000\n"
            f"//     Source: {HEADER.source_url}\n"
            "//     Source Task: Npm v1\n"
            "// </auto-generated>\n"
        ))

    def test_class(self):
        """The task model is a record named after the task."""
        self.assertIn("public record class NpmTask : AzureDevOpsTask", self.code)
        self.assertIn('public NpmTask() : base("Npm@1")', self.code)
        self.assertIn("/// Npm@1 - npm v1 task", self.code)

    def test_enums(self):
        """Each enumerated input has its own enum, in order."""
        positions = [self.code.index(f"public enum {name}\n") for name in ("Command", "CustomRegistry", "PublishRegistry")]
        self.assertEqual(positions, sorted(positions))
        self.assertLess(positions[-1], self.code.index("public record class"))
        for literal in ("ci", "install", "publish", "custom", "useNpmrc", "useFeed", "useExternalRegistry"):
            self.assertIn(f'[YamlMember(Alias = "{literal}")]', self.code)

    def test_accessors(self):
        """Each property reads and writes its documented input name."""
        for getter in (
            'GetEnum("command", Command.Install)',
            'GetString("workingDir")',
            'GetBool("verbose", false)',
            'GetString("customCommand")',
            'GetEnum("customRegistry", CustomRegistry.UseNpmrc)',
            'GetEnum("publishRegistry", PublishRegistry.UseExternalRegistry)',
            'GetString("customFeed")',
        ):
            self.assertIn(f"get => {getter};", self.code)
        self.assertEqual(self.code.count("[YamlIgnore]"), 7)

    def test_conditions_stay_in_docs(self):
        """The 'Use when' clause is kept in the property's doc comment."""
        self.assertIn("    /// Use when command = install || command = ci || command = publish. Verbose logging\n", self.code)

    def test_same_input_same_output(self):
        """Generating twice from the same page gives identical text."""
        code, _ = generate(load_fixture(), HEADER)
        self.assertEqual(code, self.code)

    def test_options(self):
        """Rendering options change the output but not the schema."""
        code, schema = generate(load_fixture(), HEADER, EmitOptions(namespace="Pipelines.Tasks"))
        self.assertIn("namespace Pipelines.Tasks;", code)
        self.assertEqual(schema, self.schema)


class TestFailures(unittest.TestCase):
    """Tests for pages that cannot be generated."""

    def test_missing_table_generates_nothing(self):
        """A page without a parameter table raises instead of rendering."""
        with self.assertRaises(MissingParameterTable):
            generate(make_page(None), HEADER)

    def test_empty_table_still_renders(self):
        """A table with no rows gives a class with no properties."""
        code, schema = generate(make_page([]), HEADER)
        self.assertEqual(schema.parameters, ())
        self.assertIn("public record class DemoTask : AzureDevOpsTask", code)
        self.assertNotIn("[YamlIgnore]", code)
