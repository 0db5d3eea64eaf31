"""Data model for a generated page and its breadcrumb trail."""

from collections.abc import Callable
from dataclasses import dataclass, field

from mintdoc.api_item import ApiItem
from mintdoc.api_item_kind import is_wrapper_kind
from mintdoc.normalize_display_name import normalize_display_name


@dataclass(frozen=True)
class BreadcrumbEntry:
    """One step of a breadcrumb; ``path`` is the output path of that page."""

    name: str
    path: str | None = None


@dataclass
class PageDescriptor:
    """Metadata for one output page."""

    output_path: str
    title: str
    icon: str
    description: str
    breadcrumb: list[BreadcrumbEntry] = field(default_factory=list)
    parent_path: str | None = None  # set only for member pages under a container page
    size: int = 0


def build_breadcrumb(
    item: ApiItem, path_for_item: Callable[[ApiItem], str | None]
) -> list[BreadcrumbEntry]:
    """Walk from the root down to ``item``.

    The model root, wrapper items and ancestors with an empty display name
    are left out.
    """
    trail: list[BreadcrumbEntry] = []
    for ancestor in item.get_hierarchy():
        if is_wrapper_kind(ancestor.kind):
            continue
        name = normalize_display_name(ancestor.display_name.strip())
        if not name:
            continue
        trail.append(BreadcrumbEntry(name=name, path=path_for_item(ancestor)))
    return trail
