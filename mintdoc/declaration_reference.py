"""Structural cross-reference descriptors."""

import re
from dataclasses import dataclass

# Foo:member(2) -> ("Foo", "member", "2")
_SEGMENT_RE = re.compile(r"^(?P<name>.*?)(?::(?P<meaning>[A-Za-z]+)(?:\((?P<overload>\d+)\))?)?$")
_MEMBER_SPLIT_RE = re.compile(r"[.#~]")


@dataclass(frozen=True)
class DeclarationReference:
    """A reference to a declaration, compared by its structural fields only.

    ``package_name`` is ``None`` for references relative to the current
    package. ``member_names`` is the ordered chain of member segments below
    the package. ``overload_index`` selects one overload of the final segment.
    """

    package_name: str | None
    member_names: tuple[str, ...] = ()
    overload_index: int | None = None
    meaning: str | None = None

    @classmethod
    def parse(cls, text: str) -> "DeclarationReference":
        """Parse a canonical reference such as ``@scope/pkg!Ns.Foo#bar:member(2)``."""
        text = text.strip()
        package_name: str | None = None
        body = text
        if "!" in text:
            package_name, body = text.split("!", 1)
            package_name = package_name or None

        meaning: str | None = None
        overload: int | None = None
        names: list[str] = []
        for segment in _MEMBER_SPLIT_RE.split(body):
            m = _SEGMENT_RE.match(segment)
            if not m or not m.group("name"):
                continue
            names.append(m.group("name"))
            # Only the last segment's selector survives.
            meaning = m.group("meaning")
            overload = int(m.group("overload")) if m.group("overload") else None
        return cls(
            package_name=package_name,
            member_names=tuple(names),
            overload_index=overload,
            meaning=meaning,
        )

    def __str__(self) -> str:
        members = ".".join(self.member_names)
        text = f"{self.package_name or ''}!{members}"
        if self.meaning:
            text += f":{self.meaning}"
            if self.overload_index is not None:
                text += f"({self.overload_index})"
        return text
