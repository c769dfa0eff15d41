import re
from collections.abc import Sequence

from repo_scan.core.errors import InvalidPatternError
from repo_scan.models import CompiledPattern, Query

_ESCAPED_STAR = re.escape("*")
_ESCAPED_QUESTION = re.escape("?")


def wildcard_to_regex(pattern: str) -> str:
    """Translate a ``*``/``?`` wildcard pattern into an unanchored regex.

    Everything except the two wildcards is matched literally.
    """
    escaped = re.escape(pattern)
    return escaped.replace(_ESCAPED_STAR, ".*").replace(_ESCAPED_QUESTION, ".")


def compile_pattern(pattern: str) -> CompiledPattern:
    expression = wildcard_to_regex(pattern)
    try:
        regex = re.compile(expression)
    except re.error as exc:
        raise InvalidPatternError(pattern, str(exc)) from exc
    return CompiledPattern(original=pattern, regex=regex)


def compile_patterns(queries: Sequence[Query]) -> tuple[list[CompiledPattern], frozenset[str]]:
    """Compile every query in order and collect the union of their extensions."""
    patterns: list[CompiledPattern] = []
    extensions: set[str] = set()
    for query in queries:
        patterns.append(compile_pattern(query.pattern))
        extensions.update(query.extensions)
    return patterns, frozenset(extensions)
