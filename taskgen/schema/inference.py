"""
Type Inferencer.

Classifies a task input from the free text that documents it.

The decision policy is an explicit, ordered rule list (RULES); the first rule
that recognizes the text wins, and STRING is the fallback. Classification is
a pure function of the text (classify), so every rule can be unit tested
without a page.

Before any rule runs, conditional-use clauses ("Use when command = ci ...",
"Required when ...") and default-value phrases are removed from the text they
look at, so that the literals of a condition or a default never read as an
enumeration. The Parameter keeps the description verbatim.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from .errors import format_param, info, warning
from .extractor import RawRow
from .schema import Diagnostic, ParamKind, Parameter


@dataclass(frozen=True)
class TypeGuess:
    """Tagged result of classification: STRING, BOOLEAN, or ENUM with its literals."""
    kind: ParamKind
    literals: Tuple[str, ...] = ()


STRING = TypeGuess(ParamKind.STRING)
BOOLEAN = TypeGuess(ParamKind.BOOLEAN)


_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+|\n")

# Sentences that only state when an input applies
_CONDITION_RE = re.compile(r"^\(?\s*(?:use|used|required|optional|available|applies)\s+(?:only\s+)?(?:when|if)\b", re.IGNORECASE)

# Leading "(Required)" / "(Optional)" markers and bare "Required." sentences
_MARKER_PREFIX_RE = re.compile(r"^\s*\((?:required|optional)\)\s*", re.IGNORECASE)
_MARKER_ONLY_RE = re.compile(r"^\s*\(?(?:required|optional)\)?\s*[.;]?\s*$", re.IGNORECASE)

# "Default value: install", "default is `ci`", "Defaults to true", "Default: $(BuildConfiguration)."
DEFAULT_RE = re.compile(
    r"\bdefault(?:s\s+to|(?:\s+value)?\s*(?:is\b|:|=))\s*(?P<value>`[^`]*`|'[^']*'|\"[^\"]*\"|[^\s,;]+)",
    re.IGNORECASE,
)

REQUIRED_MARK_RE = re.compile(r"\(required\)|(?:^|[.;]\s*)required\s*(?:[.;)]|$)", re.IGNORECASE | re.MULTILINE)
OPTIONAL_MARK_RE = re.compile(r"\(optional\)|(?:^|[.;]\s*)optional\s*(?:[.;)]|$)", re.IGNORECASE | re.MULTILINE)
CONDITIONAL_REQUIRED_RE = re.compile(r"\brequired\s+(?:when|if)\b", re.IGNORECASE)

_Q = r"[`'\"]?"
BOOLEAN_CUE_RE = re.compile(
    r"\bboolean\b"
    rf"|\b{_Q}true{_Q}\s*(?:/|\|\|?|,|\bor\b)\s*{_Q}false\b"
    rf"|\b{_Q}false{_Q}\s*(?:/|\|\|?|,|\bor\b)\s*{_Q}true\b"
    r"|\b(?:select|check|tick|set)\s+(?:this\s+(?:option|box|checkbox|check\s+box)|to\s+true)\b"
    r"|\b(?:select|check)\s+(?:if|to\s+(?:enable|disable|use|print|include|skip|run|publish|add|fail))\b"
    r"|\bif\s+(?:set\s+to\s+)?true\b"
    r"|\btoggles?\b",
    re.IGNORECASE,
)

# A description that is nothing but the name of a switchable behavior: "Verbose logging"
TOGGLE_PHRASE_RE = re.compile(r"^(?:enable\s+|disable\s+)?[A-Za-z]+\s+(?:logging|output|diagnostics)\s*\.?$", re.IGNORECASE)

# A code-formatted or quoted literal without whitespace
_QUOTED_TOKEN = r"(?:`[^`\s]+`|'[^'\s]+'|\"[^\"\s]+\")"
_SEPARATOR = r"\s*(?:,\s*(?:(?:or|and)\s+)?|\|\|?\s*|/\s*|(?:or|and)\s+)"
QUOTED_RUN_RE = re.compile(rf"{_QUOTED_TOKEN}(?:{_SEPARATOR}{_QUOTED_TOKEN})+", re.IGNORECASE)
QUOTED_TOKEN_RE = re.compile(_QUOTED_TOKEN)

# Runs introduced like this are examples, not the set of allowed values
_EXAMPLE_LEAD_RE = re.compile(r"(?:e\.g\.|i\.e\.|for example|such as|like)\s*[:,]?\s*$", re.IGNORECASE)

# A whole sentence that is just a bare word list: "ci, install, publish, or custom."
_BARE = r"[A-Za-z0-9_$][\w.$\-]*"
BARE_COMMA_LIST_RE = re.compile(rf"^{_BARE}(?:\s*,\s*{_BARE})+\s*,?\s*(?:or|and)\s+{_BARE}\s*\.?$", re.IGNORECASE)
BARE_PIPE_LIST_RE = re.compile(rf"^{_BARE}(?:\s*\|\s*{_BARE})+\s*\.?$")
_BARE_SPLIT_RE = re.compile(r"\s*(?:,|\||\bor\b|\band\b)\s*", re.IGNORECASE)


def _unquote(token: str) -> str:
    token = token.strip()
    if len(token) >= 2 and token[0] == token[-1] and token[0] in "`'\"":
        return token[1:-1]
    return token


def _distinct(tokens) -> Tuple[str, ...]:
    """Drop empty and repeated tokens; first occurrence wins."""
    return tuple(dict.fromkeys(t for t in tokens if t))


def sentences(text: str) -> List[str]:
    return [s.strip() for s in _SENTENCE_SPLIT_RE.split(text or "") if s.strip()]


def strip_conditions(text: str) -> str:
    """
    Remove the parts of a description that are not about the value itself.

    Drops conditional-use sentences, bare required/optional markers and
    default-value phrases; the "(Required)" prefix of a sentence is removed
    but the rest of the sentence is kept.
    """
    kept = []
    for sentence in sentences(text):
        if _CONDITION_RE.match(sentence) or _MARKER_ONLY_RE.match(sentence):
            continue
        sentence = _MARKER_PREFIX_RE.sub("", sentence)
        sentence = DEFAULT_RE.sub("", sentence).strip()
        if sentence and sentence not in (".", ","):
            kept.append(sentence)
    return "\n".join(kept)


def find_default(text: str) -> Optional[str]:
    """Return the value of the first default-value phrase in text, if any."""
    match = DEFAULT_RE.search(text or "")
    if match is None:
        return None

    value = match.group("value")
    if value[:1] not in "`'\"":
        value = value.rstrip(".")
    value = _unquote(value)
    return value if value else None


def find_required(text: str) -> Optional[bool]:
    """
    Read an explicit required/optional marker.

    Returns:
        True for "(Required)" or "Required.", False for "(Optional)",
        "Optional." or a conditional "Required when ...", None otherwise.
    """
    if not text:
        return None
    if REQUIRED_MARK_RE.search(text):
        return True
    if OPTIONAL_MARK_RE.search(text) or CONDITIONAL_REQUIRED_RE.search(text):
        return False
    return None


def boolean_rule(body: str, default: Optional[str]) -> Optional[TypeGuess]:
    """Rule 1: explicit true/false toggle phrasing, or a true/false default."""
    if BOOLEAN_CUE_RE.search(body) or TOGGLE_PHRASE_RE.match(body.strip()):
        return BOOLEAN
    if default is not None and default.lower() in ("true", "false"):
        return BOOLEAN
    return None


def _quoted_literals(body: str) -> Optional[Tuple[str, ...]]:
    for match in QUOTED_RUN_RE.finditer(body):
        if _EXAMPLE_LEAD_RE.search(body[:match.start()]):
            continue
        return _distinct(_unquote(t) for t in QUOTED_TOKEN_RE.findall(match.group(0)))
    return None


def _bare_literals(body: str) -> Optional[Tuple[str, ...]]:
    lines = sentences(body)
    if not lines:
        return None

    first = lines[0]
    if BARE_COMMA_LIST_RE.match(first) or BARE_PIPE_LIST_RE.match(first):
        return _distinct(t.rstrip(".") for t in _BARE_SPLIT_RE.split(first))
    return None


def enum_rule(body: str, default: Optional[str]) -> Optional[TypeGuess]:  # pylint: disable=unused-argument
    """
    Rule 2: an enumerable set of literal tokens.

    Either a run of quoted or code-formatted tokens joined by commas, pipes,
    slashes or "or", or a leading sentence that is nothing but a bare word
    list. A set with fewer than two distinct literals is not an enumeration.
    """
    literals = _quoted_literals(body)
    if literals is None:
        literals = _bare_literals(body)

    if literals is None or len(literals) < 2:
        return None
    return TypeGuess(ParamKind.ENUM, literals)


RULES: Tuple[Tuple[str, Callable[[str, Optional[str]], Optional[TypeGuess]]], ...] = (
    ("boolean", boolean_rule),
    ("enum", enum_rule),
)


def classify(text: str) -> TypeGuess:
    """
    Classify a description; the first matching rule in RULES wins.

    Args:
        text: Free text documenting one input

    Returns:
        TypeGuess for BOOLEAN, ENUM (with literals) or STRING.
    """
    body = strip_conditions(text)
    default = find_default(text)
    for _, rule in RULES:
        guess = rule(body, default)
        if guess is not None:
            return guess
    return STRING


def _coerce_default(
    name: str,
    guess: TypeGuess,
    value: Optional[str],
    diagnostics: List[Diagnostic],
) -> Optional[Union[str, bool]]:
    """Turn a default phrase's value into a literal matching the inferred kind."""
    if value is None:
        return None

    if guess.kind == ParamKind.BOOLEAN:
        if value.lower() in ("true", "false"):
            return value.lower() == "true"
        diagnostics.append(warning(f"{format_param(name)} default '{value}' is not a boolean; ignoring it", name))
        return None

    if guess.kind == ParamKind.ENUM:
        if value in guess.literals:
            return value
        for literal in guess.literals:
            if literal.lower() == value.lower():
                return literal
        diagnostics.append(warning(f"{format_param(name)} default '{value}' is not one of {list(guess.literals)}; ignoring it", name))
        return None

    return value


def infer_parameter(
    row: RawRow,
    hint: str = "",
    diagnostics: Optional[List[Diagnostic]] = None,
) -> Parameter:
    """
    Classify one parameter table row.

    The row's description is classified first; the YAML snippet hint is
    consulted only for what the description leaves open (type, required
    marker, default). Ambiguity never fails: the fallback is an optional
    STRING parameter.

    Args:
        row: Raw (label, description) row from the parameter table
        hint: Doc comment for the same input from the YAML snippet
        diagnostics: List that fallback decisions and warnings are appended to

    Returns:
        A Parameter without enum_ref (the builder names enums).
    """
    if diagnostics is None:
        diagnostics = []

    name = row.label.strip()

    guess = classify(row.description)
    if guess.kind == ParamKind.STRING and hint:
        guess = classify(hint)

    required = find_required(row.notes)
    if required is None:
        required = find_required(row.description)
    if required is None:
        required = find_required(hint)
    if required is None:
        required = False
        diagnostics.append(info(f"{format_param(name)} has no required/optional marker; treating it as optional", name))

    default = find_default(row.description)
    if default is None:
        default = find_default(hint)

    return Parameter(
        raw_name=name,
        description=row.description,
        kind=guess.kind,
        required=required,
        default_value=_coerce_default(name, guess, default, diagnostics),
        literals=guess.literals,
    )
