"""Logic for deriving the title, icon and description of a generated page."""

import re

from mintdoc.api_item import ApiItem
from mintdoc.api_item_kind import ApiItemKind
from mintdoc.normalize_display_name import normalize_display_name
from mintdoc.rewrite_links import LINK_TAG_RE, reference_from_link_target
from mintdoc.unscoped_package_name import unscoped_package_name

MODEL_TITLE = "API Reference"

KIND_TITLE_SUFFIX: dict[ApiItemKind, str] = {
    ApiItemKind.CLASS: "class",
    ApiItemKind.INTERFACE: "interface",
    ApiItemKind.FUNCTION: "function",
    ApiItemKind.METHOD: "method",
    ApiItemKind.PROPERTY: "property",
    ApiItemKind.ENUM: "enum",
    ApiItemKind.TYPE_ALIAS: "type",
    ApiItemKind.VARIABLE: "variable",
    ApiItemKind.NAMESPACE: "namespace",
}

PAGE_ICONS: dict[ApiItemKind, str] = {
    ApiItemKind.MODEL: "book",
    ApiItemKind.PACKAGE: "package",
    ApiItemKind.NAMESPACE: "folder",
    ApiItemKind.CLASS: "box",
    ApiItemKind.INTERFACE: "square-dashed",
    ApiItemKind.FUNCTION: "function",
    ApiItemKind.METHOD: "function",
    ApiItemKind.CONSTRUCTOR: "function",
    ApiItemKind.PROPERTY: "variable",
    ApiItemKind.ENUM: "list",
    ApiItemKind.TYPE_ALIAS: "type",
    ApiItemKind.VARIABLE: "variable",
}
DEFAULT_PAGE_ICON = "file"

BLOCK_TAG_RE = re.compile(
    r"@(?:param|returns?|throws?|example|remarks?|see|alpha|beta|deprecated|internal"
    r"|public|private|protected|readonly|virtual|override|sealed|event|eventProperty"
    r"|typeParam|enum|namespace|package|module|class|interface|function|method"
    r"|property|constructor|variable|typedef|callback|extends|implements)"
    r"(?:\s+\{[^}]*\})?(?:\s+[^\n@]*)?",
    re.IGNORECASE,
)
BRACES_RE = re.compile(r"\{[^}]*\}")
INLINE_CODE_RE = re.compile(r"`([^`]+)`")
BOLD_RE = re.compile(r"(\*\*|__)(.*?)\1")
ITALIC_RE = re.compile(r"\*(.*?)\*")
# Underscore emphasis never opens or closes inside a word: my_func_name
UNDERSCORE_ITALIC_RE = re.compile(r"(?<!\w)_(.+?)_(?!\w)")
MD_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
HTML_TAG_RE = re.compile(r"<([^>]+)>")
WHITESPACE_RE = re.compile(r"\s+")


def scoped_name_within_package(item: ApiItem) -> str:
    """Return the dotted name of ``item`` below its package, e.g. ``Ns.Foo.bar``."""
    parts: list[str] = []
    current: ApiItem | None = item
    while current is not None and current.kind not in {
        ApiItemKind.PACKAGE,
        ApiItemKind.MODEL,
    }:
        name = normalize_display_name(current.display_name.strip())
        if current.kind != ApiItemKind.ENTRY_POINT and name:
            parts.append(name)
        current = current.parent
    parts.reverse()
    return ".".join(parts) or normalize_display_name(item.display_name) or "unknown"


def is_type_member(item: ApiItem) -> bool:
    """Check if ``item`` is a member of a class or interface."""
    parent = item.parent
    return parent is not None and parent.kind in {
        ApiItemKind.CLASS,
        ApiItemKind.INTERFACE,
    }


def page_title(item: ApiItem) -> str:
    """Return the page title, e.g. ``Foo class`` or ``mylib package``."""
    if item.kind == ApiItemKind.MODEL:
        return MODEL_TITLE
    if item.kind == ApiItemKind.PACKAGE:
        return f"{unscoped_package_name(item.display_name)} package"
    if is_type_member(item):
        return normalize_display_name(item.display_name) or "unknown"

    scoped = scoped_name_within_package(item)
    suffix = KIND_TITLE_SUFFIX.get(item.kind)
    return f"{scoped} {suffix}" if suffix else scoped


def page_icon(item: ApiItem) -> str:
    """Return the page icon name for the item's kind."""
    return PAGE_ICONS.get(item.kind, DEFAULT_PAGE_ICON)


def _link_text(m: re.Match) -> str:
    if m.group("text"):
        return m.group("text")
    ref = reference_from_link_target(m.group("target"))
    return ref.member_names[-1] if ref.member_names else m.group("target").strip()


def plain_text(text: str) -> str:
    """Reduce TSDoc/Markdown prose to a single plain-text line."""
    if not text:
        return ""
    text = LINK_TAG_RE.sub(_link_text, text)
    text = BLOCK_TAG_RE.sub("", text)
    text = BRACES_RE.sub("", text)
    text = INLINE_CODE_RE.sub(r"\1", text)
    text = BOLD_RE.sub(r"\2", text)
    text = ITALIC_RE.sub(r"\1", text)
    text = UNDERSCORE_ITALIC_RE.sub(r"\1", text)
    text = MD_LINK_RE.sub(r"\1", text)
    text = HTML_TAG_RE.sub(r"&lt;\1&gt;", text)
    return WHITESPACE_RE.sub(" ", text).strip()


def page_description(item: ApiItem) -> str:
    """Return a one-line description from the doc summary, with a fallback."""
    description = plain_text(item.doc.summary)
    if description:
        return description
    if item.kind == ApiItemKind.MODEL:
        return f"{MODEL_TITLE} documentation"
    name = normalize_display_name(item.display_name) or str(item.kind)
    return f"{name} API documentation"
