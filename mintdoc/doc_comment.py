"""Parsing of structured documentation comments attached to API items."""

import re
from dataclasses import dataclass, field

BLOCK_TAG_RE = re.compile(r"^@(?P<tag>[A-Za-z]+)\b\s*(?P<rest>.*)$")
PARAM_RE = re.compile(r"^(?P<name>[\w$.\[\]]+)\s*(?:-\s*)?(?P<desc>.*)$", re.DOTALL)
MODIFIER_TAGS = {
    "alpha",
    "beta",
    "public",
    "internal",
    "experimental",
    "virtual",
    "override",
    "sealed",
    "readonly",
    "packageDocumentation",
    "eventProperty",
}


@dataclass
class DocComment:
    """The sections of a documentation comment, each as raw TSDoc text."""

    summary: str = ""
    remarks: str = ""
    returns: str = ""
    deprecated: str | None = None
    params: dict[str, str] = field(default_factory=dict)
    type_params: dict[str, str] = field(default_factory=dict)
    examples: list[str] = field(default_factory=list)
    throws: list[str] = field(default_factory=list)
    see: list[str] = field(default_factory=list)
    modifiers: set[str] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        """Check if the comment has no content at all."""
        return not (
            self.summary
            or self.remarks
            or self.returns
            or self.params
            or self.examples
            or self.deprecated is not None
        )


def strip_comment_delimiters(text: str) -> list[str]:
    """Remove ``/**``, ``*/`` and leading ``*`` gutters, returning body lines."""
    body = text.strip()
    if body.startswith("/**"):
        body = body[3:]
    if body.endswith("*/"):
        body = body[:-2]
    lines = []
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("*"):
            stripped = stripped[1:]
            if stripped.startswith(" "):
                stripped = stripped[1:]
        lines.append(stripped.rstrip())
    return lines


def _flush(doc: DocComment, tag: str, buffer: list[str]) -> None:
    text = "\n".join(buffer).strip()
    if tag == "summary":
        doc.summary = text
    elif tag == "remarks":
        doc.remarks = text
    elif tag == "returns":
        doc.returns = text
    elif tag == "deprecated":
        doc.deprecated = text
    elif tag == "example":
        doc.examples.append(text)
    elif tag == "throws":
        doc.throws.append(text)
    elif tag == "see":
        doc.see.append(text)
    elif tag in {"param", "typeParam"}:
        m = PARAM_RE.match(text)
        if m:
            target = doc.params if tag == "param" else doc.type_params
            target[m.group("name")] = m.group("desc").strip()


def parse_doc_comment(text: str | None) -> DocComment:
    """Split a TSDoc comment into its summary and block-tag sections.

    Inline tags such as ``{@link Foo | text}`` are left in place; they are
    resolved at render time.
    """
    doc = DocComment()
    if not text:
        return doc

    tag = "summary"
    buffer: list[str] = []
    in_fence = False
    for line in strip_comment_delimiters(text):
        if line.lstrip().startswith("```"):
            in_fence = not in_fence
        m = None if in_fence else BLOCK_TAG_RE.match(line)
        if m:
            name = m.group("tag")
            if name in MODIFIER_TAGS:
                doc.modifiers.add(name)
                continue
            _flush(doc, tag, buffer)
            tag = name
            arg = m.group("rest")
            buffer = [arg] if arg else []
            continue
        buffer.append(line)
    _flush(doc, tag, buffer)
    return doc
