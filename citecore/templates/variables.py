"""Variable store for regex templates.

Processes the contents of a regex variables document before templates are
resolved against it:

- Strip keys ending in '#', which are treated as comments
- Flatten nested dicts, so {"page": {"": "A", "foo": "B"}} becomes
  {"page": "A", "page_foo": "B"}
- Add optional variants for each key, so {"page": "\\d+"} also gets
  {"page_optional": "(?:\\d+ ?)?"}
- Resolve nested references
"""

from types import MappingProxyType
from typing import Any, Mapping

from citecore.diagnostics import CIRCULAR_REFERENCE, Diagnostics
from citecore.templates.substitute import DEFAULT_MAX_DEPTH, substitute_until_fixed

COMMENT_SUFFIX = "#"
OPTIONAL_SUFFIX = "_optional"


def flatten_variables(doc: Mapping[str, Any], parent_key: str = "") -> dict[str, str]:
    """Flatten a nested variables document into a single-level dict.

    Args:
        doc: Nested mapping of mappings and leaf values
        parent_key: Key path of ``doc`` within the outer document

    Returns:
        Dict of underscore-joined key path -> stringified leaf value
    """
    items: dict[str, str] = {}
    for key, value in doc.items():
        if key.endswith(COMMENT_SUFFIX):
            continue

        new_key = "_".join(k for k in (parent_key, key) if k)
        if isinstance(value, Mapping):
            items.update(flatten_variables(value, new_key))
        else:
            items[new_key] = str(value)
    return items


def add_optional_variants(table: Mapping[str, str]) -> dict[str, str]:
    """Return ``table`` plus a ``<key>_optional`` entry for every key."""
    optional = {f"{k}{OPTIONAL_SUFFIX}": f"(?:{v} ?)?" for k, v in table.items()}
    return {**table, **optional}


def process_variables(
    doc: Mapping[str, Any],
    diagnostics: Diagnostics | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Mapping[str, str]:
    """Build the resolved, read-only variable table from a variables document.

    Optional variants are generated from the flattened values before any
    substitution, then every entry is resolved against the whole table. An
    entry that does not converge within ``max_depth`` passes keeps its
    unresolved value and a CIRCULAR_REFERENCE diagnostic is emitted.

    Args:
        doc: Raw nested variables document
        diagnostics: Sink for circular reference reports
        max_depth: Substitution pass limit per entry

    Returns:
        Read-only mapping of variable name -> resolved regex fragment
    """
    if diagnostics is None:
        diagnostics = Diagnostics()

    processed = add_optional_variants(flatten_variables(doc))

    resolved: dict[str, str] = {}
    for key, value in processed.items():
        new_value, converged = substitute_until_fixed(value, processed, max_depth)
        if converged:
            resolved[key] = new_value
        else:
            diagnostics.emit(
                CIRCULAR_REFERENCE,
                f"Circular reference detected for variable '{key}': {value}",
                key=key,
            )
            resolved[key] = value

    return MappingProxyType(resolved)
