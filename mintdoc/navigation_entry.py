"""Data model for navigation entries and their categories."""

from dataclasses import dataclass

from mintdoc.api_item_kind import ApiItemKind


@dataclass(frozen=True)
class CategoryInfo:
    """Display name and icon of a navigation category."""

    name: str
    icon: str


FALLBACK_CATEGORY = CategoryInfo("Miscellaneous", "file-text")

CATEGORY_INFO: dict[ApiItemKind, CategoryInfo] = {
    ApiItemKind.CLASS: CategoryInfo("Classes", "box"),
    ApiItemKind.INTERFACE: CategoryInfo("Interfaces", "plug"),
    ApiItemKind.FUNCTION: CategoryInfo("Functions", "function"),
    ApiItemKind.METHOD: CategoryInfo("Methods", "function"),
    ApiItemKind.CONSTRUCTOR: CategoryInfo("Methods", "function"),
    ApiItemKind.PROPERTY: CategoryInfo("Properties", "variable"),
    ApiItemKind.ENUM: CategoryInfo("Enumerations", "list"),
    ApiItemKind.TYPE_ALIAS: CategoryInfo("Type Aliases", "file-code"),
    ApiItemKind.VARIABLE: CategoryInfo("Variables", "variable"),
    ApiItemKind.NAMESPACE: CategoryInfo("Namespaces", "folder"),
    ApiItemKind.PACKAGE: CategoryInfo("Packages", "package"),
}

CATEGORY_ICONS: dict[str, str] = {info.name: info.icon for info in CATEGORY_INFO.values()}
CATEGORY_ICONS[FALLBACK_CATEGORY.name] = FALLBACK_CATEGORY.icon


def category_for_kind(kind: ApiItemKind) -> str:
    """Return the navigation category name for an item kind."""
    return CATEGORY_INFO.get(kind, FALLBACK_CATEGORY).name


@dataclass(frozen=True)
class NavigationEntry:
    """One page in the navigation, optionally nested under its owner's page."""

    page_path: str  # docs.json-relative, no extension, e.g. reference/mylib/Foo
    category: str
    display_name: str
    parent_page: str | None = None
