"""
Fuzzy Matching for Configuration Suggestions.

Provides "did you mean?" functionality for typo detection using rapidfuzz
for fast string matching.

Primary use case: When users mistype a key in a taskgen YAML configuration
file, suggest the correct key (e.g., "base_clas" -> "Did you mean 'base_class'?").
"""

from typing import List, Iterable

from rapidfuzz import process, fuzz

# Minimum similarity score (0-100) to consider a match
MIN_SIMILARITY_SCORE = 60

# Maximum number of suggestions to return
MAX_SUGGESTIONS = 3


def suggest_similar(
    unknown: str,
    valid_options: Iterable[str],
    min_score: int = MIN_SIMILARITY_SCORE,
    max_suggestions: int = MAX_SUGGESTIONS,
) -> List[str]:
    """
    Find similar strings from valid_options that match the unknown string.

    Args:
        unknown: The unknown/misspelled string to match.
        valid_options: Iterable of valid strings to match against.
        min_score: Minimum similarity score (0-100) to include a match.
        max_suggestions: Maximum number of suggestions to return.

    Returns:
        List of similar valid options, sorted by similarity (best first).
        Empty list if no good matches found.
    """
    if not unknown:
        return []

    # rapidfuzz needs an indexable sequence
    options_list = list(valid_options)
    if not options_list:
        return []

    # process.extract returns list of (match, score, index) tuples
    matches = process.extract(
        unknown,
        options_list,
        scorer=fuzz.WRatio,
        limit=max_suggestions,
        score_cutoff=min_score,
    )

    return [match[0] for match in matches]


def format_suggestion(suggestions: List[str]) -> str:
    """Format a "did you mean?" suggestion message."""
    if not suggestions:
        return ""

    if len(suggestions) == 1:
        return f"Did you mean '{suggestions[0]}'?"
    quoted = [f"'{s}'" for s in suggestions]
    return f"Did you mean one of: {', '.join(quoted)}?"


def invalid_key_error(
    context: str,
    invalid_key: str,
    valid_keys: Iterable[str],
) -> str:
    """
    Create an error message for an invalid key with suggestions.

    Args:
        context: Description of what the key is for (e.g., "configuration").
        invalid_key: The invalid key that was used.
        valid_keys: The set of valid keys.

    Returns:
        Error message with valid keys listed and "did you mean?" if applicable.
    """
    valid_set = set(valid_keys)
    suggestion_text = format_suggestion(suggest_similar(invalid_key, valid_set))

    base_msg = f"Invalid {context} key '{invalid_key}'. Valid keys are: {sorted(valid_set)}"

    if suggestion_text:
        return f"{base_msg}. {suggestion_text}"
    return base_msg
