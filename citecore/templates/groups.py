"""Named capture group syntax conversion.

Source templates use Python's ``(?P<name>...)``; PCRE-style engines expect
``(?<name>...)``.
"""

import re

PYTHON_GROUP_RE = re.compile(r"\(\?P<([^>]+)>")


def convert_named_groups(pattern: str) -> str:
    """Convert Python named groups to PCRE named groups.

    Examples:
        >>> convert_named_groups(r"(?P<volume>\\d+) (?P<page>\\d+)")
        '(?<volume>\\\\d+) (?<page>\\\\d+)'
    """
    return PYTHON_GROUP_RE.sub(r"(?<\1>", pattern)
