"""Logic for rendering API pages as Mintlify MDX."""

from typing import Protocol

from mintdoc.api_item import ApiItem
from mintdoc.api_item_kind import ApiItemKind
from mintdoc.escape_mdx import escape_mdx, md_inline_code
from mintdoc.frontmatter import render_frontmatter
from mintdoc.link_resolver import LinkResolver, relative_href
from mintdoc.md_codeblock import md_codeblock
from mintdoc.md_table import md_table
from mintdoc.normalize_display_name import normalize_display_name
from mintdoc.rewrite_links import rewrite_links
from mintdoc.template_data import MemberGroup, PageData

SIGNATURE_LANG = "typescript"

# Kinds whose page shows no declaration signature.
_NO_SIGNATURE_KINDS = {
    ApiItemKind.MODEL,
    ApiItemKind.PACKAGE,
    ApiItemKind.NAMESPACE,
}
_CALLABLE_KINDS = {
    ApiItemKind.FUNCTION,
    ApiItemKind.METHOD,
    ApiItemKind.CONSTRUCTOR,
}
_TYPED_VALUE_KINDS = {ApiItemKind.PROPERTY, ApiItemKind.VARIABLE}
_SIGNATURE_MEMBER_KINDS = {ApiItemKind.CONSTRUCTOR, ApiItemKind.METHOD}


class PageRenderer(Protocol):
    """Renders the complete text of one page."""

    def render(self, data: PageData) -> str:
        """Return the page content; raise on failure."""
        ...


def prose(text: str, links: LinkResolver) -> str:
    """Render TSDoc prose as MDX, resolving inline links."""
    return rewrite_links(text, links.link_for_target, escape_mdx).strip()


def first_paragraph(text: str) -> str:
    """Return the text up to the first blank line."""
    return text.strip().split("\n\n", 1)[0].strip()


class MarkdownPageRenderer:
    """Default renderer producing Mintlify-flavoured MDX."""

    def render(self, data: PageData) -> str:
        """Render a page: frontmatter, breadcrumb, docs, signature and member tables."""
        item = data.item
        links = data.links
        parts = [
            render_frontmatter(
                {
                    "title": data.page.title,
                    "icon": data.page.icon,
                    "description": data.page.description,
                }
            )
        ]

        parts.extend(_render_breadcrumb(data))
        parts.extend(_render_release_notices(item, links))

        summary = prose(item.doc.summary, links)
        if summary:
            parts += [summary, ""]

        if item.kind not in _NO_SIGNATURE_KINDS and item.excerpt_text:
            parts += [md_codeblock(SIGNATURE_LANG, item.excerpt_text), ""]

        parts.extend(_render_parameters(item, links))
        parts.extend(_render_returns(item, links))
        parts.extend(_render_throws(item, links))

        remarks = prose(item.doc.remarks, links)
        if remarks:
            parts += ["## Remarks", "", remarks, ""]

        parts.extend(_render_examples(item, links))

        for group in data.member_groups:
            parts.extend(_render_member_group(group, links))

        parts.extend(_render_see_also(item, links))

        return "\n".join(parts).rstrip() + "\n"


def _render_breadcrumb(data: PageData) -> list[str]:
    """Render the breadcrumb trail; the current page is not linked."""
    trail = data.page.breadcrumb
    if len(trail) < 2:  # noqa: PLR2004
        return []
    crumbs = []
    for i, entry in enumerate(trail):
        name = escape_mdx(normalize_display_name(entry.name))
        last = i == len(trail) - 1
        if entry.path and not last and entry.path != data.page.output_path:
            href = relative_href(data.page.output_path, entry.path)
            crumbs.append(f"[{name}]({href})")
        else:
            crumbs.append(name)
    return [" &gt; ".join(crumbs), ""]


def _render_release_notices(item: ApiItem, links: LinkResolver) -> list[str]:
    """Render deprecation and pre-release warnings."""
    parts = []
    if item.doc.deprecated is not None:
        reason = prose(item.doc.deprecated, links)
        text = "**Deprecated.**" + (f" {reason}" if reason else "")
        parts += ["<Warning>", text, "</Warning>", ""]

    release = item.release_tag.lower()
    if release == "beta" or "beta" in item.doc.modifiers:
        parts += [
            "<Note>",
            "This API is in beta and may change without notice.",
            "</Note>",
            "",
        ]
    elif release == "alpha" or "alpha" in item.doc.modifiers:
        parts += [
            "<Note>",
            "This API is in alpha and is not recommended for production use.",
            "</Note>",
            "",
        ]
    return parts


def _render_parameters(item: ApiItem, links: LinkResolver) -> list[str]:
    """Render the parameters table."""
    if item.kind not in _CALLABLE_KINDS or not item.parameters:
        return []
    rows: list[list[str]] = []
    for p in item.parameters:
        name = md_inline_code(p.name + ("?" if p.is_optional else ""))
        ptype = links.render_tokens(p.type_tokens) if p.type_tokens else ""
        pdesc = prose(item.doc.params.get(p.name, ""), links)
        rows.append([name, ptype, pdesc])
    return ["## Parameters", "", md_table(["Name", "Type", "Description"], rows), ""]


def _render_returns(item: ApiItem, links: LinkResolver) -> list[str]:
    """Render the return value or declared type section."""
    if item.kind in _CALLABLE_KINDS and item.kind != ApiItemKind.CONSTRUCTOR:
        label = "Returns"
    elif item.kind in _TYPED_VALUE_KINDS:
        label = "Type"
    else:
        return []

    rtype = links.render_tokens(item.type_tokens) if item.type_tokens else ""
    rdesc = prose(item.doc.returns, links) if label == "Returns" else ""
    if not rtype and not rdesc:
        return []

    parts = [f"## {label}", ""]
    if rtype:
        parts += [rtype, ""]
    if rdesc:
        parts += [rdesc, ""]
    return parts


def _render_throws(item: ApiItem, links: LinkResolver) -> list[str]:
    """Render the list of documented exceptions."""
    if not item.doc.throws:
        return []
    parts = ["## Exceptions", ""]
    parts.extend(f"- {prose(t, links)}" for t in item.doc.throws)
    parts.append("")
    return parts


def _render_examples(item: ApiItem, links: LinkResolver) -> list[str]:
    """Render examples, numbering them when there is more than one."""
    examples = [e for e in item.doc.examples if e.strip()]
    if not examples:
        return []
    parts = ["## Examples" if len(examples) > 1 else "## Example", ""]
    for i, example in enumerate(examples, start=1):
        if len(examples) > 1:
            parts += [f"### Example {i}", ""]
        parts += [prose(example, links), ""]
    return parts


def _modifiers(member: ApiItem) -> str:
    flags = []
    if member.is_static:
        flags.append("static")
    if member.is_abstract:
        flags.append("abstract")
    if member.is_readonly:
        flags.append("readonly")
    if member.is_optional:
        flags.append("optional")
    if member.doc.deprecated is not None:
        flags.append("deprecated")
    return ", ".join(md_inline_code(f) for f in flags)


def _member_summary(member: ApiItem, links: LinkResolver) -> str:
    return prose(first_paragraph(member.doc.summary), links)


def _render_member_group(group: MemberGroup, links: LinkResolver) -> list[str]:
    """Render one member group as a table."""
    kind = group.kind
    rows: list[list[str]] = []
    if kind == ApiItemKind.ENUM_MEMBER:
        headers = ["Member", "Value", "Description"]
        for m in group.items:
            rows.append(
                [
                    md_inline_code(m.display_name),
                    md_inline_code(m.initializer),
                    _member_summary(m, links),
                ]
            )
    elif kind == ApiItemKind.PROPERTY:
        headers = ["Property", "Modifiers", "Type", "Description"]
        for m in group.items:
            rows.append(
                [
                    links.link_for_item(m),
                    _modifiers(m),
                    links.render_tokens(m.type_tokens) if m.type_tokens else "",
                    _member_summary(m, links),
                ]
            )
    elif kind in _SIGNATURE_MEMBER_KINDS:
        headers = [kind.value, "Modifiers", "Description"]
        for m in group.items:
            rows.append(
                [
                    links.link_for_item(m, _member_label(m)),
                    _modifiers(m),
                    _member_summary(m, links),
                ]
            )
    else:
        headers = ["Name", "Description"]
        for m in group.items:
            rows.append([links.link_for_item(m), _member_summary(m, links)])

    return [f"## {group.title}", "", md_table(headers, rows), ""]


def _member_label(member: ApiItem) -> str:
    name = normalize_display_name(member.display_name)
    params = ", ".join(
        p.name + ("?" if p.is_optional else "") for p in member.parameters
    )
    return f"{name}({params})"


def _render_see_also(item: ApiItem, links: LinkResolver) -> list[str]:
    """Render the see also section."""
    see = [s for s in item.doc.see if s.strip()]
    if not see:
        return []
    parts = ["## See also", ""]
    parts.extend(f"- {prose(s, links)}" for s in see)
    parts.append("")
    return parts
