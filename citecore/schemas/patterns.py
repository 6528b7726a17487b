"""Resolved pattern schema."""

from dataclasses import dataclass

from citecore.ids.canonical import pattern_id


def anchor(pattern: str) -> str:
    """Anchor a pattern for fullmatch semantics without double-anchoring.

    A pattern already anchored at both ends is returned unchanged. Otherwise
    any single anchor is dropped and the body is wrapped in a non-capturing
    group, so a top-level alternation cannot escape the anchors. A trailing
    escaped ``\\$`` is a literal dollar sign, not an anchor.

    Examples:
        >>> anchor("A")
        '^(?:A)$'
        >>> anchor("^A$")
        '^A$'
        >>> anchor("a|b")
        '^(?:a|b)$'
    """
    starts = pattern.startswith("^")
    ends = pattern.endswith("$") and not pattern.endswith("\\$")
    if starts and ends:
        return pattern
    body = pattern[1:] if starts else pattern
    body = body[:-1] if ends else body
    return f"^(?:{body})$"


@dataclass(frozen=True)
class ResolvedPattern:
    """A fully resolved regex for one (series, edition, template) triple.

    Attributes:
        series_key: Top-level key of the owning series
        edition: Edition abbreviation (series key for laws and journals)
        index: Position of the template in its regex list
        template: The original template, placeholders intact
        pattern: Expanded pattern with PCRE-style named groups, unanchored
        kind: Kind of the owning series
    """

    series_key: str
    edition: str
    index: int
    template: str
    pattern: str
    kind: str

    @property
    def id(self) -> str:
        return pattern_id(self.series_key, self.edition, self.index)

    @property
    def anchored(self) -> str:
        """Pattern anchored at both ends exactly once."""
        return anchor(self.pattern)
