"""Convert a regex variables document to PCRE-ready form.

The output keeps the nested shape of the input (comment keys dropped) with
every leaf fully resolved and its named groups converted, so individual
patterns can be looked up by dotted path.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from citecore.diagnostics import Diagnostics
from citecore.templates.groups import convert_named_groups
from citecore.templates.variables import COMMENT_SUFFIX, process_variables

logger = logging.getLogger(__name__)


def convert_regex_data(
    doc: Mapping[str, Any],
    diagnostics: Diagnostics | None = None,
) -> dict[str, Any]:
    """Resolve and convert every leaf of a variables document.

    Args:
        doc: Raw nested variables document
        diagnostics: Sink for circular reference reports

    Returns:
        Nested dict of the same shape with PCRE-ready pattern strings
    """
    table = process_variables(doc, diagnostics)

    def convert(node: Mapping[str, Any], parent_key: str) -> dict[str, Any]:
        out: dict[str, Any] = {}
        for key, value in node.items():
            if key.endswith(COMMENT_SUFFIX):
                continue
            flat_key = "_".join(k for k in (parent_key, key) if k)
            if isinstance(value, Mapping):
                out[key] = convert(value, flat_key)
            else:
                out[key] = convert_named_groups(table[flat_key])
        return out

    return convert(doc, "")


def convert_regexes(
    input_path: Path | str,
    output_path: Path | str,
    diagnostics: Diagnostics | None = None,
) -> dict[str, Any]:
    """Convert a regexes.json file and write the result.

    Args:
        input_path: Path to the source variables document
        output_path: Path to write the converted JSON

    Returns:
        The converted data
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    with open(input_path, "r", encoding="utf-8") as f:
        raw = f.read()

    converted = convert_regex_data(json.loads(raw), diagnostics)
    output = json.dumps(converted, indent=4, ensure_ascii=False)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(output)

    logger.info(
        "Converted %s (%d bytes) -> %s (%d bytes)",
        input_path,
        len(raw),
        output_path,
        len(output),
    )
    return converted
