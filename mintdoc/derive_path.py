"""Derivation of validated output paths from an item's identity chain."""

from pathlib import PurePosixPath, PureWindowsPath

from mintdoc.api_item import ApiItem
from mintdoc.api_item_kind import ApiItemKind, has_inline_listing, is_wrapper_kind
from mintdoc.errors import ErrorCode, ValidationError
from mintdoc.normalize_display_name import normalize_display_name
from mintdoc.sanitizer import DEFAULT_MAX_SEGMENT_LENGTH, Sanitizer
from mintdoc.unscoped_package_name import unscoped_package_name

PAGE_SUFFIX = ".mdx"
INDEX_PAGE = "index" + PAGE_SUFFIX


def _is_inline_listing_member(item: ApiItem) -> bool:
    parent = item.parent
    return parent is not None and has_inline_listing(parent.kind)


def _segment_name(item: ApiItem) -> str:
    if item.kind == ApiItemKind.PACKAGE:
        return unscoped_package_name(item.display_name.strip())

    name = normalize_display_name(item.display_name.strip())
    if not name:
        name = f"unnamed-{str(item.kind).lower()}"
    # Overloads beyond the first: myMethod, myMethod_1, myMethod_2
    if item.overload_index > 1:
        name += f"_{item.overload_index - 1}"
    return name


def derive_path(
    item: ApiItem,
    *,
    max_segment_length: int = DEFAULT_MAX_SEGMENT_LENGTH,
    sanitizer: Sanitizer | None = None,
) -> str:
    """Return the ``/``-separated output path of ``item``, relative to the output folder.

    Each ancestor contributes one validated segment; the model root, wrapper
    kinds and members of inline listings contribute none. The joined path is
    validated again as a whole.
    """
    if item.kind == ApiItemKind.MODEL:
        return INDEX_PAGE

    sanitizer = sanitizer or Sanitizer(max_segment_length)
    resource = item.describe()
    parts: list[str] = []
    for ancestor in item.get_hierarchy():
        if is_wrapper_kind(ancestor.kind) or _is_inline_listing_member(ancestor):
            continue
        parts.append(sanitizer.normalize(_segment_name(ancestor), resource=resource))

    if not parts:
        msg = "Unable to derive an output path: no usable path segments"
        raise ValidationError(
            msg,
            ErrorCode.INVALID_FILENAME,
            resource=resource,
            operation="derive_path",
        )

    path = "/".join(parts) + PAGE_SUFFIX
    if (
        ".." in PurePosixPath(path).parts
        or ".." in path
        or PurePosixPath(path).is_absolute()
        or PureWindowsPath(path).is_absolute()
    ):
        msg = f'Derived path "{path}" escapes the output folder'
        raise ValidationError(
            msg,
            ErrorCode.PATH_TRAVERSAL,
            resource=resource,
            operation="derive_path",
            data={"path": path},
        )
    return path


def page_owner(item: ApiItem) -> ApiItem | None:
    """Return the item whose page documents ``item``.

    Members of inline listings live on their owner's page and an entry point
    is represented by its package.
    """
    current: ApiItem | None = item
    while current is not None and (
        current.kind == ApiItemKind.ENTRY_POINT or _is_inline_listing_member(current)
    ):
        current = current.parent
    return current
