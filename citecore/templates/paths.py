"""Dotted-path lookup into converted regex data.

Converted regex data keeps the nested shape of the variables document, e.g.
``{"page": {"": "\\d+", "with_roman": "..."}}``. A path such as
``"page.with_roman"`` walks that structure.
"""

from typing import Any, Mapping

PATH_SEPARATOR = "."


class TemplatePathError(KeyError):
    """A dotted template path does not exist in the converted regex data.

    Attributes:
        path: The full dotted path that was requested
        segment: The first segment that could not be resolved
    """

    def __init__(self, path: str, segment: str, reason: str = "not found") -> None:
        self.path = path
        self.segment = segment
        self.reason = reason
        super().__init__(path)

    def __str__(self) -> str:
        return f"Template path '{self.path}': segment '{self.segment}' {self.reason}"


def get_pattern_from_data(data: Mapping[str, Any], path: str) -> str:
    """Look up a converted pattern by dotted path.

    Args:
        data: Converted regex data (nested mappings of strings)
        path: Dotted path, e.g. "full_cite.paragraph"

    Returns:
        The pattern string. A path ending on a nested mapping returns that
        mapping's "" entry.

    Raises:
        TemplatePathError: If any segment is missing or the path does not end
            on a pattern string
    """
    node: Any = data
    for segment in path.split(PATH_SEPARATOR):
        if not isinstance(node, Mapping) or segment not in node:
            raise TemplatePathError(path, segment)
        node = node[segment]

    if isinstance(node, Mapping):
        if "" not in node:
            raise TemplatePathError(path, path.split(PATH_SEPARATOR)[-1], "has no default pattern")
        node = node[""]

    if not isinstance(node, str):
        raise TemplatePathError(path, path.split(PATH_SEPARATOR)[-1], "is not a pattern string")
    return node
