from repo_scan.models import CompiledPattern, MatchSpan


def find_matches(line: str, pattern: CompiledPattern) -> list[MatchSpan]:
    """Return all non-overlapping matches of *pattern* in *line*, left to right.

    Offsets are code-point indices into *line*. Empty matches are dropped;
    ``finditer`` already steps past them so the scan always moves forward.
    """
    spans: list[MatchSpan] = []
    for match in pattern.regex.finditer(line):
        start, end = match.span()
        if start == end:
            continue
        spans.append(MatchSpan(pattern=pattern.original, start=start, end=end))
    return spans
