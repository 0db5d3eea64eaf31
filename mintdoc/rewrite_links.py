"""Logic for rewriting inline ``{@link}`` tags to Markdown links."""

import re
from collections.abc import Callable

from mintdoc.declaration_reference import DeclarationReference

LINK_TAG_RE = re.compile(
    r"\{@link(?:code|plain)?\s+(?P<target>[^}|]+?)\s*(?:\|\s*(?P<text>[^}]*?)\s*)?\}"
)  # {@link Target | text}
INHERIT_DOC_RE = re.compile(r"\{@inheritDoc(?:\s+[^}]*)?\}")
URL_RE = re.compile(r"^[a-z][a-z0-9+.-]*://", re.IGNORECASE)


def reference_from_link_target(target: str) -> DeclarationReference:
    """Parse a link destination into a reference.

    Accepts canonical references (``pkg!Foo.bar``) as well as the older TSDoc
    spelling ``pkg#Foo.bar`` and trailing call parentheses ``Foo.bar()``.
    """
    target = target.strip()
    if target.endswith("()"):
        target = target[:-2]
    if "!" not in target and "#" in target:
        package, _, rest = target.partition("#")
        if package:
            target = f"{package}!{rest}"
    return DeclarationReference.parse(target)


def _unchanged(text: str) -> str:
    return text


def rewrite_links(
    text: str,
    link_for_target: Callable[[str, str | None], str],
    escape: Callable[[str], str] = _unchanged,
) -> str:
    """Rewrite ``{@link}`` tags in ``text``.

    URLs become plain Markdown links; every other target is handed to
    ``link_for_target(target, link_text)``, which returns the Markdown to
    insert. ``escape`` is applied to the prose between tags only.
    """
    if not text:
        return ""

    text = INHERIT_DOC_RE.sub("", text)
    out: list[str] = []
    pos = 0
    for m in LINK_TAG_RE.finditer(text):
        out.append(escape(text[pos : m.start()]))
        target = m.group("target").strip()
        link_text = m.group("text") or None
        if URL_RE.match(target):
            # {@link https://example.com | docs} -> [docs](https://example.com)
            out.append(f"[{escape(link_text or target)}]({target})")
        else:
            out.append(link_for_target(target, link_text))
        pos = m.end()
    out.append(escape(text[pos:]))
    return "".join(out)
