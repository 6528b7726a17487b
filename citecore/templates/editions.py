"""Edition alternation expansion.

A reporter template names its abbreviation with an ``$edition`` placeholder.
Expansion replaces the placeholder with a non-capturing alternation of every
known spelling of that edition. ``$reporter`` is accepted as a synonym when
the variable table does not define it.
"""

import re
from typing import Iterable, Mapping

EDITION_PLACEHOLDER = "edition"
REPORTER_PLACEHOLDER = "reporter"
EXPANSION_PLACEHOLDERS = (EDITION_PLACEHOLDER, REPORTER_PLACEHOLDER)

_REGEX_SPECIAL_RE = re.compile(r"[.*+?^${}()|\[\]\\]")


def _placeholder_re(placeholder: str) -> re.Pattern:
    name = re.escape(placeholder)
    return re.compile(rf"\$(?:\{{{name}\}}|{name}(?!\w))")


def escape_regex(text: str) -> str:
    """Escape regex metacharacters for literal use.

    Unlike ``re.escape`` this leaves spaces and other punctuation alone, so
    escaped abbreviations stay readable and engine-neutral.

    Examples:
        >>> escape_regex("A. 2d")
        'A\\\\. 2d'
    """
    return _REGEX_SPECIAL_RE.sub(lambda m: "\\" + m.group(0), text)


def has_placeholder(template: str, placeholder: str = EDITION_PLACEHOLDER) -> bool:
    """Return True if template contains ``$placeholder`` or ``${placeholder}``."""
    return _placeholder_re(placeholder).search(template) is not None


def _unique(strings: Iterable[str]) -> list[str]:
    seen = set()
    unique = []
    for s in strings:
        if s not in seen:
            seen.add(s)
            unique.append(s)
    return unique


def substitute_edition(
    template: str,
    edition_strings: Iterable[str],
    placeholder: str = EDITION_PLACEHOLDER,
) -> str:
    """Replace the edition placeholder with an alternation of edition_strings.

    Args:
        template: Regex template, possibly containing the placeholder
        edition_strings: Literal spellings, in the order they should appear
        placeholder: Placeholder name without the leading ``$``

    Returns:
        The template with every placeholder occurrence replaced by
        ``(?:s1|s2|...)``. Duplicates are dropped, keeping first-seen order.
    """
    alternation = "(?:" + "|".join(escape_regex(s) for s in _unique(edition_strings)) + ")"
    return _placeholder_re(placeholder).sub(lambda _: alternation, template)


def substitute_editions(
    template: str,
    edition: str,
    variations: Mapping[str, str],
    placeholder: str = EDITION_PLACEHOLDER,
) -> list[str]:
    """Expand the edition placeholder for one edition and its variations.

    The edition strings are ``edition`` followed by every variation whose
    target is ``edition``, in the mapping's iteration order.

    Args:
        template: Regex template
        edition: Canonical edition abbreviation (e.g., "A.2d")
        variations: Mapping of variation spelling -> edition abbreviation

    Returns:
        One-element list holding the expanded pattern, or ``[template]``
        unchanged when it contains no placeholder.

    Examples:
        >>> substitute_editions("$edition ${page}", "A.", {"A. 2d": "A.2d"})
        ['(?:A\\\\.) ${page}']
    """
    if not has_placeholder(template, placeholder):
        return [template]

    edition_strings = [edition]
    edition_strings.extend(v for v, target in variations.items() if target == edition)
    return [substitute_edition(template, edition_strings, placeholder)]
