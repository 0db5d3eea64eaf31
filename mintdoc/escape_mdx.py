"""Utilities for emitting prose and code that MDX will not read as JSX."""

import re

MDX_SPECIAL_RE = re.compile(r"[{}<>]")
# Fenced blocks first so their backticks are not taken for inline spans.
CODE_SPAN_RE = re.compile(r"(```[\s\S]*?```|`[^`\n]+`)")
_REPLACEMENTS = {"{": "\\{", "}": "\\}", "<": "&lt;", ">": "&gt;"}


def escape_mdx(text: str) -> str:
    """Escape braces and angle brackets outside of code spans and fences."""
    if not text:
        return ""
    parts = CODE_SPAN_RE.split(text)
    # Odd indices are the captured code segments.
    for i in range(0, len(parts), 2):
        parts[i] = MDX_SPECIAL_RE.sub(lambda m: _REPLACEMENTS[m.group(0)], parts[i])
    return "".join(parts)


def md_inline_code(text: str) -> str:
    """Wrap ``text`` in backticks, widening the delimiter when needed."""
    if not text:
        return ""
    ticks = "`"
    while ticks in text:
        ticks += "`"
    pad = " " if text.startswith("`") or text.endswith("`") else ""
    return f"{ticks}{pad}{text}{pad}{ticks}"
