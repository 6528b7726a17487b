"""Recursive placeholder substitution for regex templates.

Templates reference other patterns with ``$name`` or ``${name}``. A referenced
value may itself contain placeholders, so substitution is repeated until the
text stops changing.
"""

import re
from typing import Mapping

DEFAULT_MAX_DEPTH = 100

PLACEHOLDER_RE = re.compile(r"\$(?:\{(?P<braced>\w+)\}|(?P<named>\w+))")


def _substitute_once(template: str, variables: Mapping[str, str]) -> str:
    """Replace every known placeholder in one pass; unknown ones stay verbatim."""

    def replace(match: re.Match) -> str:
        name = match.group("braced") or match.group("named")
        if name in variables:
            return variables[name]
        return match.group(0)

    return PLACEHOLDER_RE.sub(replace, template)


def substitute_until_fixed(
    template: str,
    variables: Mapping[str, str],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[str, bool]:
    """Substitute until a fixed point is reached or max_depth passes have run.

    Args:
        template: Text containing placeholders
        variables: Mapping of placeholder name to replacement text
        max_depth: Maximum number of substitution passes

    Returns:
        Tuple of (substituted text, converged). ``converged`` is False when the
        depth bound was exhausted, which means the variables reference each
        other in a cycle.
    """
    value = template
    for _ in range(max_depth):
        new_value = _substitute_once(value, variables)
        if new_value == value:
            return value, True
        value = new_value
    return value, False


def recursive_substitute(
    template: str,
    variables: Mapping[str, str],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> str:
    """Recursively substitute values in ``template`` from ``variables``.

    Never raises on cycles: the partially substituted text is returned once
    ``max_depth`` passes have run.

    Examples:
        >>> recursive_substitute("$a $b $c", {"a": "$b", "b": "$c", "c": "foo"})
        'foo foo foo'
        >>> recursive_substitute("${page} $missing", {"page": "\\\\d+"})
        '\\\\d+ $missing'
    """
    value, _ = substitute_until_fixed(template, variables, max_depth)
    return value
