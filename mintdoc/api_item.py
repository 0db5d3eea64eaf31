"""Data model for nodes of the API-surface tree."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field

from mintdoc.api_item_kind import ApiItemKind, is_container_kind
from mintdoc.declaration_reference import DeclarationReference
from mintdoc.doc_comment import DocComment


@dataclass(frozen=True)
class ExcerptToken:
    """One token of a declaration excerpt; references carry a target."""

    kind: str  # Content / Reference
    text: str
    reference: DeclarationReference | None = None


@dataclass(frozen=True)
class Parameter:
    """A parameter of a function, method or constructor."""

    name: str
    type_tokens: tuple[ExcerptToken, ...] = ()
    is_optional: bool = False

    @property
    def type_text(self) -> str:
        """The parameter type as plain text."""
        return "".join(t.text for t in self.type_tokens).strip()


@dataclass(eq=False)
class ApiItem:
    """Represents a documented declaration (class, method, etc.).

    Items compare by identity. ``parent`` is a weak back-reference that exists
    only for walking up the tree; the model owns every node through
    ``members``.
    """

    kind: ApiItemKind
    display_name: str
    members: list[ApiItem] = field(default_factory=list)
    overload_index: int = 1
    release_tag: str = "Public"
    doc: DocComment = field(default_factory=DocComment)
    excerpt_tokens: list[ExcerptToken] = field(default_factory=list)
    canonical_reference: DeclarationReference | None = None
    parameters: list[Parameter] = field(default_factory=list)
    type_tokens: list[ExcerptToken] = field(default_factory=list)
    initializer: str = ""
    is_optional: bool = False
    is_static: bool = False
    is_readonly: bool = False
    is_abstract: bool = False
    _parent: weakref.ReferenceType[ApiItem] | None = field(
        default=None, init=False, repr=False
    )

    def __post_init__(self) -> None:
        """Claim any members passed to the constructor."""
        for member in self.members:
            member._parent = weakref.ref(self)  # noqa: SLF001

    @property
    def parent(self) -> ApiItem | None:
        """The owning item, or ``None`` for the root or a detached item."""
        return self._parent() if self._parent is not None else None

    def add_member(self, member: ApiItem) -> ApiItem:
        """Append a child item and point its back-reference at this item."""
        if not is_container_kind(self.kind):
            msg = f"{self.kind} items cannot own members"
            raise TypeError(msg)
        member._parent = weakref.ref(self)  # noqa: SLF001
        self.members.append(member)
        return member

    def get_hierarchy(self) -> list[ApiItem]:
        """Return the ancestor chain from the root down to this item."""
        chain: list[ApiItem] = []
        current: ApiItem | None = self
        while current is not None:
            chain.append(current)
            current = current.parent
        chain.reverse()
        return chain

    def identity_key(self) -> tuple[tuple[str, str, int], ...]:
        """Return a structural identity, unique among items of one tree."""
        return tuple(
            (str(a.kind), a.display_name, a.overload_index)
            for a in self.get_hierarchy()
        )

    @property
    def package(self) -> ApiItem | None:
        """The nearest enclosing package, including this item itself."""
        for ancestor in reversed(self.get_hierarchy()):
            if ancestor.kind == ApiItemKind.PACKAGE:
                return ancestor
        return None

    @property
    def type_text(self) -> str:
        """The declared, return or property type as plain text."""
        return "".join(t.text for t in self.type_tokens).strip()

    @property
    def excerpt_text(self) -> str:
        """The declaration signature as plain text."""
        return "".join(t.text for t in self.excerpt_tokens).strip()

    def find_members_by_name(self, name: str) -> list[ApiItem]:
        """Return direct members with the given display name, looking through entry points."""
        found: list[ApiItem] = []
        for member in self.members:
            if member.kind == ApiItemKind.ENTRY_POINT:
                found.extend(member.find_members_by_name(name))
            elif member.display_name == name:
                found.append(member)
        return found

    def describe(self) -> str:
        """Return a human-readable identity used in errors and logs."""
        if self.canonical_reference is not None:
            return str(self.canonical_reference)
        names = [
            a.display_name or f"<{a.kind}>"
            for a in self.get_hierarchy()
            if a.kind not in {ApiItemKind.MODEL, ApiItemKind.ENTRY_POINT}
        ]
        return ".".join(names) or str(self.kind)
