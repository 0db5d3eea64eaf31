"""Utility for rendering YAML frontmatter."""

from typing import Any

import yaml

# Wide enough that PyYAML never folds a long description.
_NO_WRAP = 2**31 - 1


def render_frontmatter(fields: dict[str, Any]) -> str:
    """Render ``fields`` as a ``---`` delimited YAML block, skipping empty values."""
    data = {k: v for k, v in fields.items() if v not in (None, "")}
    body = yaml.safe_dump(
        data, sort_keys=False, allow_unicode=True, default_flow_style=False, width=_NO_WRAP
    )
    return f"---\n{body}---\n"
