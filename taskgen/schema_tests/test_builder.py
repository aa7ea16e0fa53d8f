"""
Unit tests for schema/builder.py module.

Tests duplicate handling, parameter order and enum synthesis.
"""

import unittest
from ..schema import extract_schema
from ..schema.builder import build_enum, build_schema
from ..schema.extractor import ExtractedFields, RawRow
from ..schema.naming import TYPE_SCOPE, NameRegistry
from ..schema.schema import DiagnosticLevel, ParamKind, Parameter
from .helpers import NPM_URL, load_fixture


def _fields(*rows, hints=None):
    return ExtractedFields(name="Demo", version="2", rows=tuple(RawRow(*row) for row in rows), hints=hints or {})


def _warnings(schema):
    return [d.message for d in schema.diagnostics if d.level == DiagnosticLevel.WARNING]


class TestBuildSchema(unittest.TestCase):
    """Tests for build_schema."""

    def test_duplicate_label_last_row_wins(self):
        """Two rows with the same label leave one parameter, from the last row."""
        schema = build_schema(_fields(
            ("customFeed", "(Optional) first"),
            ("customFeed", "(Optional) second"),
        ))
        self.assertEqual(len(schema.parameters), 1)
        self.assertEqual(schema.parameters[0].description, "(Optional) second")
        self.assertEqual(_warnings(schema), ["'customFeed' is documented more than once; keeping the last row"])

    def test_duplicate_keeps_first_position(self):
        """The kept row takes the position of the first occurrence."""
        schema = build_schema(_fields(
            ("a", "(Optional) x"),
            ("Custom-Feed", "(Optional) old"),
            ("b", "(Optional) y"),
            ("customFeed ", "(Optional) new"),
        ))
        self.assertEqual([p.raw_name for p in schema.parameters], ["a", "customFeed", "b"])
        self.assertEqual(
            _warnings(schema),
            ["'Custom-Feed' and 'customFeed' name the same input; keeping 'customFeed'"],
        )

    def test_replaced_row_drops_its_diagnostics(self):
        """Only the kept row's diagnostics are reported, after the duplicate warning."""
        schema = build_schema(_fields(
            ("Custom-Feed", "Feed to use."),
            ("customFeed ", "(Optional) Feed to use for restore."),
        ))
        self.assertEqual([(d.level, d.parameter) for d in schema.diagnostics], [
            (DiagnosticLevel.WARNING, "customFeed"),
        ])

        schema = build_schema(_fields(
            ("customFeed", "(Optional) Feed to use."),
            ("customFeed", "Feed to use for restore."),
        ))
        self.assertEqual([d.level for d in schema.diagnostics], [DiagnosticLevel.WARNING, DiagnosticLevel.INFO])

    def test_order_is_table_order(self):
        """Parameters appear in table order."""
        schema = build_schema(_fields(*[(name, "(Optional) text") for name in "zyxw"]))
        self.assertEqual([p.raw_name for p in schema.parameters], ["z", "y", "x", "w"])

    def test_empty_table(self):
        """A table with no rows gives zero parameters and a warning."""
        schema = build_schema(_fields())
        self.assertEqual(schema.parameters, ())
        self.assertEqual(len(_warnings(schema)), 1)

    def test_only_enums_get_enum_refs(self):
        """enum_ref is set exactly for ENUM parameters."""
        schema = build_schema(_fields(
            ("mode", "(Required) `fast` or `slow`."),
            ("path", "(Optional) Where to look."),
            ("clean", "(Optional) Select this option to clean."),
        ))
        for param in schema.parameters:
            self.assertEqual(param.enum_ref is not None, param.kind == ParamKind.ENUM, param.raw_name)
        self.assertEqual([e.synthetic_name for e in schema.enums], ["Mode"])

    def test_hints_match_by_normalized_name(self):
        """Snippet hints are looked up regardless of label spelling."""
        schema = build_schema(_fields(
            ("Build-Mode", "How to build."),
            hints={"buildMode": "'debug' | 'release'. Required. Default: release."},
        ))
        param = schema.parameters[0]
        self.assertEqual(param.kind, ParamKind.ENUM)
        self.assertTrue(param.required)
        self.assertEqual(param.default_value, "release")

    def test_source_url_passes_through(self):
        """The source URL is stored unchanged."""
        self.assertEqual(build_schema(_fields(), source_url=NPM_URL).source_url, NPM_URL)

    def test_schema_is_frozen(self):
        """A built schema cannot be modified."""
        schema = build_schema(_fields(("a", "b")))
        with self.assertRaises(Exception):
            schema.name = "Other"

    def test_schema_needs_reference(self):
        """An empty task name is rejected."""
        with self.assertRaises(ValueError):
            build_schema(ExtractedFields(name="", version="1"))


class TestBuildEnum(unittest.TestCase):
    """Tests for build_enum."""

    def test_literals_are_kept_verbatim(self):
        """Identifiers are sanitized but literal values are not."""
        param = Parameter("publish-registry", kind=ParamKind.ENUM, literals=("useExternalRegistry", "use-feed", "6.0"))
        enum = build_enum(param, NameRegistry())
        self.assertEqual(enum.synthetic_name, "PublishRegistry")
        self.assertEqual([m.literal_value for m in enum.members], ["useExternalRegistry", "use-feed", "6.0"])
        self.assertEqual([m.identifier for m in enum.members], ["UseExternalRegistry", "UseFeed", "_60"])
        self.assertEqual(enum.owner, "publish-registry")

    def test_member_collisions(self):
        """Literals that sanitize alike get numbered identifiers."""
        param = Parameter("mode", kind=ParamKind.ENUM, literals=("use-feed", "useFeed", "USE_FEED"))
        enum = build_enum(param, NameRegistry())
        self.assertEqual([m.identifier for m in enum.members], ["UseFeed", "UseFeed2", "UseFeed3"])

    def test_enum_names_are_unique(self):
        """Two parameters that sanitize to the same name get distinct enum types."""
        names = NameRegistry()
        first = build_enum(Parameter("mode", kind=ParamKind.ENUM, literals=("a", "b")), names)
        second = build_enum(Parameter("Mode ", kind=ParamKind.ENUM, literals=("a", "b")), names)
        self.assertEqual((first.synthetic_name, second.synthetic_name), ("Mode", "Mode2"))
        self.assertEqual(names.names(TYPE_SCOPE), ("Mode", "Mode2"))


class TestFixtureSchema(unittest.TestCase):
    """Tests the schema built from the saved Npm@1 page."""

    @classmethod
    def setUpClass(cls):
        cls.schema = extract_schema(load_fixture(), NPM_URL)
        cls.params = {p.raw_name: p for p in cls.schema.parameters}

    def test_parameters(self):
        """Seven parameters after merging the duplicated feed row."""
        self.assertEqual(list(self.params), [
            "command", "workingDir", "verbose", "customCommand",
            "customRegistry", "publishRegistry", "customFeed",
        ])

    def test_command(self):
        """command is a required enum whose default comes from the snippet."""
        command = self.params["command"]
        self.assertEqual(command.kind, ParamKind.ENUM)
        self.assertEqual(command.literals, ("ci", "install", "publish", "custom"))
        self.assertTrue(command.required)
        self.assertEqual(command.default_value, "install")

    def test_kinds(self):
        """Every parameter gets the expected kind."""
        self.assertEqual({name: p.kind for name, p in self.params.items()}, {
            "command": ParamKind.ENUM,
            "workingDir": ParamKind.STRING,
            "verbose": ParamKind.BOOLEAN,
            "customCommand": ParamKind.STRING,
            "customRegistry": ParamKind.ENUM,
            "publishRegistry": ParamKind.ENUM,
            "customFeed": ParamKind.STRING,
        })

    def test_nothing_else_is_required(self):
        """Conditional and unmarked inputs are optional."""
        self.assertEqual([name for name, p in self.params.items() if p.required], ["command"])

    def test_enum_defaults(self):
        """Enum defaults come from the description, then the snippet."""
        self.assertEqual(self.params["customRegistry"].default_value, "useNpmrc")
        self.assertEqual(self.params["publishRegistry"].default_value, "useExternalRegistry")

    def test_enums(self):
        """One enum per ENUM parameter, in parameter order."""
        self.assertEqual([e.synthetic_name for e in self.schema.enums], ["Command", "CustomRegistry", "PublishRegistry"])

    def test_diagnostics(self):
        """The duplicated row is a warning; the unmarked input is a note."""
        self.assertEqual(_warnings(self.schema), [
            "'Custom-Feed' and 'customFeed' name the same input; keeping 'customFeed'",
        ])
        notes = [d.parameter for d in self.schema.diagnostics if d.level == DiagnosticLevel.INFO]
        self.assertEqual(notes, ["workingDir"])
