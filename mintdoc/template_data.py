"""Data handed to the page renderer for one item."""

from dataclasses import dataclass, field

from mintdoc.api_item import ApiItem
from mintdoc.api_item_kind import ApiItemKind
from mintdoc.link_resolver import LinkResolver
from mintdoc.page_descriptor import PageDescriptor

MEMBER_GROUP_TITLES: dict[ApiItemKind, str] = {
    ApiItemKind.PACKAGE: "Packages",
    ApiItemKind.CLASS: "Classes",
    ApiItemKind.ENUM: "Enumerations",
    ApiItemKind.FUNCTION: "Functions",
    ApiItemKind.INTERFACE: "Interfaces",
    ApiItemKind.NAMESPACE: "Namespaces",
    ApiItemKind.VARIABLE: "Variables",
    ApiItemKind.TYPE_ALIAS: "Type Aliases",
    ApiItemKind.CONSTRUCTOR: "Constructors",
    ApiItemKind.PROPERTY: "Properties",
    ApiItemKind.METHOD: "Methods",
    ApiItemKind.ENUM_MEMBER: "Members",
}

_DECLARATION_KINDS = [
    ApiItemKind.CLASS,
    ApiItemKind.ENUM,
    ApiItemKind.FUNCTION,
    ApiItemKind.INTERFACE,
    ApiItemKind.NAMESPACE,
    ApiItemKind.VARIABLE,
    ApiItemKind.TYPE_ALIAS,
]

# Which member kinds each container lists, in display order.
MEMBER_GROUP_ORDER: dict[ApiItemKind, list[ApiItemKind]] = {
    ApiItemKind.MODEL: [ApiItemKind.PACKAGE],
    ApiItemKind.PACKAGE: _DECLARATION_KINDS,
    ApiItemKind.NAMESPACE: _DECLARATION_KINDS,
    ApiItemKind.CLASS: [
        ApiItemKind.CONSTRUCTOR,
        ApiItemKind.PROPERTY,
        ApiItemKind.METHOD,
    ],
    ApiItemKind.INTERFACE: [
        ApiItemKind.CONSTRUCTOR,
        ApiItemKind.PROPERTY,
        ApiItemKind.METHOD,
        ApiItemKind.FUNCTION,
    ],
    ApiItemKind.ENUM: [ApiItemKind.ENUM_MEMBER],
}


@dataclass
class MemberGroup:
    """Members of one kind, listed under a heading."""

    kind: ApiItemKind
    title: str
    items: list[ApiItem] = field(default_factory=list)


@dataclass
class PageData:
    """Everything the renderer needs for one page."""

    item: ApiItem
    page: PageDescriptor
    links: LinkResolver
    member_groups: list[MemberGroup] = field(default_factory=list)


def visible_members(item: ApiItem) -> list[ApiItem]:
    """Return the members of ``item``, looking through entry points."""
    found: list[ApiItem] = []
    for member in item.members:
        if member.kind == ApiItemKind.ENTRY_POINT:
            found.extend(visible_members(member))
        else:
            found.append(member)
    return found


def categorize_members(item: ApiItem) -> list[MemberGroup]:
    """Group the members of ``item`` by kind; empty groups are omitted."""
    order = MEMBER_GROUP_ORDER.get(item.kind)
    if not order:
        return []
    groups = {kind: MemberGroup(kind, MEMBER_GROUP_TITLES[kind]) for kind in order}
    for member in visible_members(item):
        group = groups.get(member.kind)
        if group is not None:
            group.items.append(member)
    return [groups[kind] for kind in order if groups[kind].items]
