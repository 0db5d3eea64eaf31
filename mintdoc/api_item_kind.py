"""Kinds of nodes in the API-surface tree and predicates over them."""

from enum import StrEnum


class ApiItemKind(StrEnum):
    """Node kind, using the spelling of the ``kind`` field in ``*.api.json``."""

    MODEL = "Model"
    PACKAGE = "Package"
    ENTRY_POINT = "EntryPoint"
    NAMESPACE = "Namespace"
    CLASS = "Class"
    INTERFACE = "Interface"
    FUNCTION = "Function"
    METHOD = "Method"
    CONSTRUCTOR = "Constructor"
    PROPERTY = "Property"
    ENUM = "Enum"
    ENUM_MEMBER = "EnumMember"
    TYPE_ALIAS = "TypeAlias"
    VARIABLE = "Variable"


# Extractor kinds that are folded onto the closest kind above.
KIND_ALIASES: dict[str, ApiItemKind] = {
    "MethodSignature": ApiItemKind.METHOD,
    "PropertySignature": ApiItemKind.PROPERTY,
    "ConstructSignature": ApiItemKind.CONSTRUCTOR,
    "CallSignature": ApiItemKind.FUNCTION,
    "IndexSignature": ApiItemKind.PROPERTY,
}

CONTAINER_KINDS = frozenset(
    {
        ApiItemKind.MODEL,
        ApiItemKind.PACKAGE,
        ApiItemKind.ENTRY_POINT,
        ApiItemKind.NAMESPACE,
        ApiItemKind.CLASS,
        ApiItemKind.INTERFACE,
        ApiItemKind.ENUM,
    }
)

def parse_kind(raw: str) -> ApiItemKind:
    """Map a raw ``kind`` string onto :class:`ApiItemKind`."""
    if raw in KIND_ALIASES:
        return KIND_ALIASES[raw]
    return ApiItemKind(raw)


def is_wrapper_kind(kind: ApiItemKind) -> bool:
    """Check if the kind is a pure container that never gets its own page."""
    return kind in {ApiItemKind.MODEL, ApiItemKind.ENTRY_POINT}


def has_inline_listing(kind: ApiItemKind) -> bool:
    """Check if the kind renders its members on its own page."""
    return kind == ApiItemKind.ENUM


def is_container_kind(kind: ApiItemKind) -> bool:
    """Check if the kind may own members."""
    return kind in CONTAINER_KINDS
