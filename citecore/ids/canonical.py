"""Canonical ID generation for resolved patterns.

ID Schemes:
- Resolved pattern: pattern::<series_key>::<edition>::<index>

Canonicalization rules:
- Replace spaces with underscores
- Remove periods from abbreviations
- Lowercase all characters
"""


def canonicalize_abbreviation(abbreviation: str) -> str:
    """Canonicalize a reporter abbreviation for use in IDs.

    Args:
        abbreviation: Raw abbreviation (e.g., "A. 2d")

    Returns:
        Canonicalized abbreviation (e.g., "a_2d")

    Examples:
        >>> canonicalize_abbreviation("A. 2d")
        'a_2d'
        >>> canonicalize_abbreviation("F. Supp. 3d")
        'f_supp_3d'
    """
    return abbreviation.strip().replace(" ", "_").replace(".", "").lower()


def pattern_id(series_key: str, edition: str, index: int) -> str:
    """Generate canonical resolved-pattern ID.

    Args:
        series_key: Top-level key of the series (e.g., "A.")
        edition: Edition abbreviation (e.g., "A.2d")
        index: Position of the template within the edition's regexes

    Returns:
        Canonical pattern ID (e.g., "pattern::a::a2d::0")

    Examples:
        >>> pattern_id("A.", "A.2d", 0)
        'pattern::a::a2d::0'
    """
    return (
        f"pattern::{canonicalize_abbreviation(series_key)}"
        f"::{canonicalize_abbreviation(edition)}::{index}"
    )
