"""Logic for turning references into links relative to the page being rendered."""

import logging
import posixpath
from collections.abc import Callable, Iterable

from mintdoc.api_item import ApiItem, ExcerptToken
from mintdoc.declaration_reference import DeclarationReference
from mintdoc.derive_path import PAGE_SUFFIX
from mintdoc.escape_mdx import escape_mdx, md_inline_code
from mintdoc.normalize_display_name import normalize_display_name
from mintdoc.resolution_result import ResolveResult
from mintdoc.rewrite_links import reference_from_link_target

Resolver = Callable[[DeclarationReference, ApiItem | None], ResolveResult]

logger = logging.getLogger(__name__)


def relative_href(from_path: str, to_path: str) -> str:
    """Return a link from one output page to another, without the extension."""
    # reference/Foo.mdx -> reference/Foo/bar.mdx => ./Foo/bar
    # reference/Foo/bar.mdx -> reference/Foo.mdx => ../Foo
    target = to_path.removesuffix(PAGE_SUFFIX)
    base = posixpath.dirname(from_path) or "."
    target_dir = posixpath.dirname(target) or "."
    rel = posixpath.join(
        posixpath.relpath(target_dir, base), posixpath.basename(target)
    )
    if not rel.startswith("."):
        rel = "./" + rel
    return rel


class LinkResolver:
    """Resolves references seen while rendering one page.

    ``resolve`` is normally the cache-wrapped model resolver.
    ``path_for_item`` returns the output path of the page documenting an
    item, or ``None`` when the item has no page.
    """

    def __init__(
        self,
        resolve: Resolver,
        path_for_item: Callable[[ApiItem], str | None],
        context: ApiItem | None,
        current_path: str,
    ) -> None:
        """Initialize the resolver for the page at ``current_path``."""
        self._resolve = resolve
        self._path_for_item = path_for_item
        self.context = context
        self.current_path = current_path

    def resolve_reference(self, reference: DeclarationReference) -> ApiItem | None:
        """Return the referenced item, or ``None`` if it cannot be resolved."""
        result = self._resolve(reference, self.context)
        if not result.ok:
            logger.debug(
                "Unresolved reference %s on %s: %s",
                reference,
                self.current_path,
                result.error_message,
            )
            return None
        return result.resolved_item

    def href_for_item(self, item: ApiItem) -> str | None:
        """Return a relative link to the page documenting ``item``."""
        path = self._path_for_item(item)
        if path is None:
            return None
        return relative_href(self.current_path, path)

    def link_for_item(self, item: ApiItem, text: str | None = None) -> str:
        """Render a Markdown link to ``item``, or inline code without a page."""
        label = text or normalize_display_name(item.display_name)
        href = self.href_for_item(item)
        if href is None:
            return md_inline_code(label)
        return f"[{escape_mdx(label)}]({href})"

    def link_for_reference(
        self, reference: DeclarationReference, text: str | None = None
    ) -> str:
        """Render a link for ``reference``, degrading to inline code when unresolved."""
        item = self.resolve_reference(reference)
        if item is None:
            fallback = text or ".".join(reference.member_names) or str(reference)
            return md_inline_code(fallback)
        return self.link_for_item(item, text)

    def link_for_target(self, target: str, text: str | None = None) -> str:
        """Render a link for the destination of an inline ``{@link}`` tag."""
        reference = reference_from_link_target(target)
        if not reference.member_names and not reference.package_name:
            return md_inline_code(text or target)
        return self.link_for_reference(reference, text or None)

    def render_tokens(self, tokens: Iterable[ExcerptToken]) -> str:
        """Render a type excerpt, linking tokens that reference documented items.

        Excerpts without any resolvable reference are rendered as one code span.
        """
        tokens = list(tokens)
        pieces: list[str] = []
        linked = False
        for token in tokens:
            item = (
                self.resolve_reference(token.reference)
                if token.reference is not None
                else None
            )
            href = self.href_for_item(item) if item is not None else None
            if href is not None:
                pieces.append(f"[{escape_mdx(token.text)}]({href})")
                linked = True
            else:
                pieces.append(escape_mdx(token.text))
        if not linked:
            return md_inline_code("".join(t.text for t in tokens).strip())
        return "".join(pieces).strip()
