"""The generation engine: walks the API tree and writes one page per item."""

import logging
from pathlib import Path

from mintdoc.api_item import ApiItem
from mintdoc.api_item_kind import ApiItemKind, has_inline_listing
from mintdoc.api_model import ApiModel
from mintdoc.api_resolution_cache import ApiResolutionCache
from mintdoc.derive_path import derive_path, page_owner
from mintdoc.errors import (
    DocumentationError,
    ErrorCode,
    FileSystemError,
    RenderError,
    ValidationError,
)
from mintdoc.link_resolver import LinkResolver
from mintdoc.navigation_manager import NavigationManager
from mintdoc.output_file_for_page import output_file_for_page
from mintdoc.page_descriptor import PageDescriptor, build_breadcrumb
from mintdoc.page_metadata import page_description, page_icon, page_title
from mintdoc.page_renderer import MarkdownPageRenderer, PageRenderer
from mintdoc.resource_budget import ResourceBudget
from mintdoc.sanitizer import Sanitizer
from mintdoc.template_data import PageData, categorize_members

logger = logging.getLogger(__name__)

PROGRESS_EVERY = 50


def produces_page(item: ApiItem) -> bool:
    """Check if ``item`` is written as its own page.

    Entry points never are; members of an inline listing appear on their
    owner's page instead. The model root yields the site index.
    """
    if item.kind == ApiItemKind.ENTRY_POINT:
        return False
    parent = item.parent
    return parent is None or not has_inline_listing(parent.kind)


class Documenter:
    """Writes the pages for one API model and records their navigation.

    The cache, navigation manager and budget are per-run collaborators; they
    are created here unless injected.
    """

    def __init__(
        self,
        model: ApiModel,
        output_folder: Path,
        *,
        renderer: PageRenderer | None = None,
        cache: ApiResolutionCache | None = None,
        navigation: NavigationManager | None = None,
        budget: ResourceBudget | None = None,
    ) -> None:
        """Initialize the engine for ``model`` writing under ``output_folder``."""
        self.model = model
        self.output_folder = Path(output_folder)
        self.renderer = renderer if renderer is not None else MarkdownPageRenderer()
        self.cache = cache if cache is not None else ApiResolutionCache()
        self.navigation = (
            navigation
            if navigation is not None
            else NavigationManager(output_folder=self.output_folder)
        )
        self.budget = budget if budget is not None else ResourceBudget()
        self.sanitizer = Sanitizer(self.budget.limits.max_segment_length)
        self.resolve = self.cache.wrap(model.resolve_declaration_reference)
        self.pages: list[PageDescriptor] = []
        self._paths: dict[ApiItem, str | None] = {}
        self._claimed: dict[str, ApiItem] = {}

    @property
    def total_output_size(self) -> int:
        """Bytes written so far in this run."""
        return self.budget.total_output_bytes

    def path_for_item(self, item: ApiItem) -> str | None:
        """Return the output path of the page documenting ``item``, if any."""
        if item in self._paths:
            return self._paths[item]
        owner = page_owner(item)
        path: str | None = None
        if owner is not None:
            try:
                path = derive_path(owner, sanitizer=self.sanitizer)
            except ValidationError as e:
                logger.debug("No linkable page for %s: %s", item.describe(), e)
        self._paths[item] = path
        return path

    def generate(self, root: ApiItem | None = None) -> list[PageDescriptor]:
        """Write every page below ``root`` and then merge the navigation manifest.

        Any budget, validation or rendering failure aborts the run before the
        manifest is touched.
        """
        root = root if root is not None else self.model.root
        self.budget.restart()
        self.cache.clear()
        self.navigation.clear()
        self.pages = []
        self._paths.clear()
        self._claimed.clear()

        self.output_folder.mkdir(parents=True, exist_ok=True)
        logger.info("Writing documentation to %s", self.output_folder)
        self._visit(root, None)

        stats = self.cache.get_stats()
        logger.info(
            "Resolution cache: %d hits, %d misses (%.1f%% hit rate, %d/%d entries)",
            stats.hit_count,
            stats.miss_count,
            stats.hit_rate * 100,
            stats.size,
            stats.max_size,
        )
        self.navigation.generate_navigation()
        logger.info(
            "Generated %d pages (%d bytes) in %.1fs",
            len(self.pages),
            self.total_output_size,
            self.budget.elapsed,
        )
        return self.pages

    def _visit(self, item: ApiItem, owner_path: str | None) -> None:
        self.budget.check_time(item)

        page: PageDescriptor | None = None
        if produces_page(item):
            page = self._write_page(item, owner_path)

        if has_inline_listing(item.kind) or not item.members:
            return

        # Members nest under this page in the navigation, except below the root.
        child_owner = (
            page.output_path
            if page is not None and item.kind != ApiItemKind.MODEL
            else None
        )
        with self.budget.descend(item):
            for member in item.members:
                self._visit(member, child_owner)

    def _render(self, item: ApiItem, page: PageDescriptor) -> str:
        links = LinkResolver(self.resolve, self.path_for_item, item, page.output_path)
        data = PageData(
            item=item,
            page=page,
            links=links,
            member_groups=categorize_members(item),
        )
        try:
            return self.renderer.render(data)
        except DocumentationError:
            raise
        except Exception as e:
            msg = f"Failed to render page for {item.describe()}"
            raise RenderError(
                msg,
                resource=item.describe(),
                operation="render",
                cause=e,
                data={"path": page.output_path},
            ) from e

    def _claim_path(self, item: ApiItem, output_path: str) -> None:
        """Reserve ``output_path`` for ``item``; two items never share a page."""
        other = self._claimed.get(output_path)
        if other is not None:
            msg = (
                f'Output path "{output_path}" of {item.kind} {item.describe()} '
                f"is already used by {other.kind} {other.describe()}"
            )
            raise ValidationError(
                msg,
                ErrorCode.INVALID_FILENAME,
                resource=item.describe(),
                operation="claim_path",
                data={"path": output_path, "claimed_by": other.describe()},
            )
        self._claimed[output_path] = item

    def _write_page(self, item: ApiItem, owner_path: str | None) -> PageDescriptor:
        output_path = derive_path(item, sanitizer=self.sanitizer)
        self._claim_path(item, output_path)
        page = PageDescriptor(
            output_path=output_path,
            title=page_title(item),
            icon=page_icon(item),
            description=page_description(item),
            breadcrumb=build_breadcrumb(item, self.path_for_item),
            parent_path=owner_path,
        )
        content = self._render(item, page)

        size = len(content.encode("utf-8"))
        self.budget.check_output(item, size, output_path)
        out_file = output_file_for_page(self.output_folder, output_path)
        try:
            out_file.write_text(content, encoding="utf-8", newline="\n")
        except OSError as e:
            msg = f"Failed to write documentation file: {out_file}"
            raise FileSystemError(
                msg, resource=str(out_file), operation="write_page", cause=e
            ) from e
        self.budget.record_output(size)
        page.size = size
        self.pages.append(page)

        if item.kind != ApiItemKind.MODEL:
            self.navigation.add_api_item(item, output_path, owner_path)

        if len(self.pages) % PROGRESS_EVERY == 0:
            logger.info("  ... wrote %d pages", len(self.pages))
        return page
