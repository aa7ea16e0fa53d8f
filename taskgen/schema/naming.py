"""
Identifier Sanitizer.

Maps arbitrary documentation text (parameter labels, enum literals, task
names) to C# identifiers that are legal, correctly cased and unique.

Usage
-----
A NameRegistry is created for one generation run and handed down the call
chain. Names are unique per scope: all type names of a run share one scope,
the properties of the task model share another, and every enum gets its own
member scope.

    from taskgen.schema.naming import NameRegistry, Casing, TYPE_SCOPE

    names = NameRegistry()
    names.sanitize("Custom-Feed", Casing.PASCAL, TYPE_SCOPE)   # "CustomFeed"
    names.sanitize("customFeed ", Casing.PASCAL, TYPE_SCOPE)   # "CustomFeed2"

Nothing is shared between registries, so batch generation over several pages
never leaks identifiers from one schema into the next.
"""

import re
import unicodedata
from enum import Enum
from typing import Dict, Iterable, Tuple


class Casing(Enum):
    """Casing styles identifiers can be rendered in."""
    PASCAL = "pascal"
    CAMEL = "camel"


TYPE_SCOPE = "types"
PROPERTY_SCOPE = "properties"

# Used when the input text has no identifier characters at all
PLACEHOLDER_STEM = "Value"

# https://learn.microsoft.com/dotnet/csharp/language-reference/keywords
CSHARP_KEYWORDS = frozenset("""
    abstract as base bool break byte case catch char checked class const continue
    decimal default delegate do double else enum event explicit extern false
    finally fixed float for foreach goto if implicit in int interface internal is
    lock long namespace new null object operator out override params private
    protected public readonly ref return sbyte sealed short sizeof stackalloc
    static string struct switch this throw true try typeof uint ulong unchecked
    unsafe ushort using virtual void volatile while
""".split())

# Members every record class already has
RECORD_MEMBERS = ("Equals", "GetHashCode", "ToString", "GetType", "EqualityContract", "Deconstruct")

_ILLEGAL_RE = re.compile(r"[^0-9A-Za-z]+")
_ACRONYM_BOUNDARY_RE = re.compile(r"([A-Z]+)([A-Z][a-z])")
_CAMEL_BOUNDARY_RE = re.compile(r"([a-z0-9])([A-Z])")


def member_scope(enum_name: str) -> str:
    """Scope holding the member names of one enum."""
    return f"enum:{enum_name}"


def split_words(text: str) -> Tuple[str, ...]:
    """
    Split text into words on every boundary style.

    Recognizes camelCase, PascalCase (including acronyms), snake_case,
    kebab-case, dotted and space separated text. Characters that cannot
    appear in an identifier are dropped; accented letters keep their base.

    Examples:
        "useFeed"         -> ("use", "Feed")
        "XMLHttpRequest"  -> ("XML", "Http", "Request")
        "Custom-Feed"     -> ("Custom", "Feed")
        "publish_registry"-> ("publish", "registry")
    """
    text = unicodedata.normalize("NFKD", text or "")
    text = _ILLEGAL_RE.sub(" ", text)
    text = _ACRONYM_BOUNDARY_RE.sub(r"\1 \2", text)
    text = _CAMEL_BOUNDARY_RE.sub(r"\1 \2", text)
    return tuple(text.split())


def normalize_key(text: str) -> str:
    """Casing- and punctuation-insensitive key, used to spot duplicate labels."""
    return "".join(split_words(text)).lower()


def to_identifier(text: str, casing: Casing = Casing.PASCAL) -> str:
    """
    Re-case text as an identifier stem, without uniqueness or keyword handling.

    A stem starting with a digit is prefixed with an underscore; text with no
    usable characters becomes the placeholder stem.
    """
    words = split_words(text)
    if not words:
        words = (PLACEHOLDER_STEM,)

    capitalized = [w[:1].upper() + w[1:].lower() for w in words]
    if casing == Casing.CAMEL:
        capitalized[0] = capitalized[0].lower()

    ident = "".join(capitalized)
    if ident[0].isdigit():
        ident = f"_{ident}"
    return ident


def escape_keyword(ident: str) -> str:
    """Prefix C# keywords with '@' so they can be used as identifiers."""
    if ident in CSHARP_KEYWORDS:
        return f"@{ident}"
    return ident


class NameRegistry:
    """
    Registry of the identifiers handed out during one generation run.

    Attributes:
        _scopes: Mapping of scope name to the identifiers taken in it,
                 in the order they were taken.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._scopes: Dict[str, Dict[str, None]] = {}

    def _taken(self, scope: str) -> Dict[str, None]:
        return self._scopes.setdefault(scope, {})

    def reserve(self, names: Iterable[str], scope: str) -> None:
        """
        Mark names as taken in scope without sanitizing them.

        Used for identifiers that exist before generation starts, such as the
        enclosing class name or inherited members.
        """
        taken = self._taken(scope)
        for name in names:
            taken[name] = None

    def is_taken(self, name: str, scope: str) -> bool:
        return name in self._scopes.get(scope, {})

    def names(self, scope: str) -> Tuple[str, ...]:
        """Identifiers taken in scope, in first-seen order."""
        return tuple(self._scopes.get(scope, {}))

    def sanitize(self, raw_text: str, casing: Casing, scope: str) -> str:
        """
        Turn raw_text into a fresh identifier in scope and register it.

        Collisions get a numeric suffix in first-seen order: Foo, Foo2, Foo3.
        Keywords are escaped with '@' rather than dropped.

        Args:
            raw_text: Arbitrary human text
            casing: Casing style of the result
            scope: Scope the identifier must be unique in

        Returns:
            The registered identifier.
        """
        return self.claim(to_identifier(raw_text, casing), scope)

    def claim(self, stem: str, scope: str) -> str:
        """Register an already well-formed identifier, suffixing it if taken."""
        taken = self._taken(scope)

        candidate, suffix = escape_keyword(stem), 1
        while candidate in taken:
            suffix += 1
            candidate = escape_keyword(f"{stem}{suffix}")

        taken[candidate] = None
        return candidate
