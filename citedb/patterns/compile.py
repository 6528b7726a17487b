"""Compile resolved patterns with fullmatch semantics.

Resolved patterns use ``(?<name>...)`` named groups, which the ``regex``
package accepts alongside Python's ``(?P<name>...)``.
"""

from typing import Any

import regex

from citecore.schemas.patterns import anchor


class PatternCompileError(ValueError):
    """A resolved pattern failed to compile.

    Attributes:
        pattern: The anchored pattern that was compiled
    """

    def __init__(self, pattern: str, message: str) -> None:
        self.pattern = pattern
        super().__init__(f"Failed to compile pattern {pattern!r}: {message}")


def compile_regex(pattern: str) -> regex.Pattern:
    """Compile a pattern anchored at both ends, Unicode-aware.

    Args:
        pattern: Resolved pattern, anchored or not

    Returns:
        Compiled pattern

    Raises:
        PatternCompileError: If the engine rejects the pattern
    """
    anchored = anchor(pattern)
    try:
        return regex.compile(anchored, regex.UNICODE | regex.VERSION0)
    except regex.error as e:
        raise PatternCompileError(anchored, str(e)) from e


def fullmatch_groups(compiled: regex.Pattern, text: str) -> dict[str, Any] | None:
    """Return the named groups of a full match, or None if text does not match."""
    match = compiled.fullmatch(text)
    if match is None:
        return None
    return match.groupdict()
