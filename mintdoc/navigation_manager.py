"""Logic for building the site navigation and merging it into ``docs.json``."""

import contextlib
import copy
import json
import logging
import os
from collections import defaultdict
from pathlib import Path
from typing import Any

from mintdoc.api_item import ApiItem
from mintdoc.errors import ErrorCode, NavigationError, ValidationError
from mintdoc.manifest_shape import FlatManifest, TabbedManifest, detect_manifest_shape
from mintdoc.navigation_entry import (
    CATEGORY_ICONS,
    FALLBACK_CATEGORY,
    NavigationEntry,
    category_for_kind,
)
from mintdoc.normalize_display_name import normalize_display_name

logger = logging.getLogger(__name__)

MAX_MANIFEST_BYTES = 10 * 1024 * 1024
DEFAULT_TAB_NAME = "API Reference"
DEFAULT_GROUP_NAME = "API"


def _sort_key(entry: NavigationEntry) -> tuple[str, str]:
    return (entry.display_name.casefold(), entry.page_path)


class NavigationManager:
    """Accumulates navigation entries for one run and persists them."""

    def __init__(
        self,
        docs_json_path: Path | None = None,
        output_folder: Path | None = None,
        *,
        tab_name: str = DEFAULT_TAB_NAME,
        group_name: str = DEFAULT_GROUP_NAME,
        enable_menu: bool = False,
    ) -> None:
        """Initialize the manager; no entries until pages are registered."""
        self.docs_json_path = docs_json_path
        self.output_folder = output_folder or Path()
        self.tab_name = tab_name or DEFAULT_TAB_NAME
        self.group_name = group_name or DEFAULT_GROUP_NAME
        self.enable_menu = enable_menu
        self._entries: list[NavigationEntry] = []
        self._keys: set[tuple[str, str]] = set()

    @property
    def entries(self) -> list[NavigationEntry]:
        """Registered entries in registration order."""
        return list(self._entries)

    def clear(self) -> None:
        """Forget all entries; called at the start of a run."""
        self._entries.clear()
        self._keys.clear()

    def add_entry(self, entry: NavigationEntry) -> bool:
        """Register ``entry`` unless one with the same page and category exists."""
        key = (entry.page_path, entry.category)
        if key in self._keys:
            return False
        self._keys.add(key)
        self._entries.append(entry)
        return True

    def page_path_for_file(self, filename: str) -> str:
        """Convert an output-relative file name into a docs.json-relative page path."""
        base = self.docs_json_path.parent if self.docs_json_path else self.output_folder
        full = self.output_folder / filename
        rel = os.path.relpath(full.resolve(), base.resolve())
        rel = rel.replace("\\", "/")
        return rel.removesuffix(".mdx")

    def add_api_item(
        self, item: ApiItem, filename: str, parent_filename: str | None = None
    ) -> None:
        """Register the page written for ``item`` under its kind's category."""
        display_name = normalize_display_name(item.display_name.strip())
        if not display_name and parent_filename is None:
            # Nothing to show in the sidebar; the page is still reachable by link
            logger.debug("Leaving unnamed %s out of the navigation", item.kind)
            return
        try:
            entry = NavigationEntry(
                page_path=self.page_path_for_file(filename),
                category=category_for_kind(item.kind),
                display_name=display_name,
                parent_page=(
                    self.page_path_for_file(parent_filename) if parent_filename else None
                ),
            )
        except (OSError, ValueError) as e:
            msg = f"Failed to add API item to navigation: {item.describe()}"
            raise NavigationError(
                msg, resource=item.describe(), operation="add_api_item", cause=e
            ) from e
        self.add_entry(entry)

    def get_stats(self) -> dict[str, Any]:
        """Return a summary of the accumulated navigation."""
        return {
            "total_items": len(self._entries),
            "tab_name": self.tab_name,
            "group_name": self.group_name,
            "docs_json_path": str(self.docs_json_path) if self.docs_json_path else None,
        }

    # -----------------------------
    # Synthesis
    # -----------------------------

    def _node(
        self,
        entry: NavigationEntry,
        children: dict[str, list[NavigationEntry]],
    ) -> str | dict[str, Any]:
        owned = children.get(entry.page_path)
        if not owned:
            return entry.page_path
        return {
            "group": entry.display_name or "Unknown",
            "pages": [entry.page_path]
            + [self._node(c, children) for c in sorted(owned, key=_sort_key)],
        }

    def synthesize(self) -> list[dict[str, Any]]:
        """Build the category groups, nesting member pages under their owners."""
        pages = {e.page_path for e in self._entries}
        children: dict[str, list[NavigationEntry]] = defaultdict(list)
        top_level: list[NavigationEntry] = []
        for entry in self._entries:
            if (
                entry.parent_page
                and entry.parent_page in pages
                and entry.parent_page != entry.page_path
            ):
                children[entry.parent_page].append(entry)
            else:
                top_level.append(entry)

        by_category: dict[str, list[NavigationEntry]] = defaultdict(list)
        for entry in top_level:
            by_category[entry.category].append(entry)

        groups: list[dict[str, Any]] = []
        for category in sorted(by_category):
            items = sorted(by_category[category], key=_sort_key)
            groups.append(
                {
                    "group": category,
                    "icon": CATEGORY_ICONS.get(category, FALLBACK_CATEGORY.icon),
                    "pages": [self._node(e, children) for e in items],
                }
            )
        return groups

    def group_entry(self) -> dict[str, Any]:
        """Wrap the synthesized categories into this run's named group."""
        group: dict[str, Any] = {"group": self.group_name}
        if self.enable_menu:
            group["icon"] = "code"
        group["pages"] = self.synthesize()
        return group

    # -----------------------------
    # Merging
    # -----------------------------

    def _replace_or_append(self, groups: list[Any], new_group: dict[str, Any]) -> None:
        for i, existing in enumerate(groups):
            if isinstance(existing, dict) and existing.get("group") == new_group["group"]:
                groups[i] = new_group
                logger.info('Updated existing "%s" group', new_group["group"])
                return
        groups.append(new_group)
        logger.info('Added new "%s" group', new_group["group"])

    def merge_into(self, existing_manifest: Any) -> dict[str, Any]:
        """Return a copy of ``existing_manifest`` with this run's group merged in.

        Unrelated groups, tabs and top-level keys are preserved untouched.
        """
        document = (
            copy.deepcopy(existing_manifest) if isinstance(existing_manifest, dict) else {}
        )
        shape = detect_manifest_shape(document)
        new_group = self.group_entry()

        if isinstance(shape, TabbedManifest):
            tab = next(
                (
                    t
                    for t in shape.tabs
                    if isinstance(t, dict) and t.get("tab") == self.tab_name
                ),
                None,
            )
            if tab is None:
                tab = {"tab": self.tab_name, "groups": []}
                shape.tabs.append(tab)
            if not isinstance(tab.get("groups"), list):
                tab["groups"] = []
            self._replace_or_append(tab["groups"], new_group)
        elif isinstance(shape, FlatManifest):
            self._replace_or_append(shape.groups, new_group)
        return document

    # -----------------------------
    # Persistence
    # -----------------------------

    def _read_existing(self, path: Path) -> Any:
        if not path.exists():
            return {}
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable manifest %s (%s); starting fresh", path, e)
            return {}

    def serialize(self, document: dict[str, Any]) -> str:
        """Render and validate the manifest text that will be written."""
        text = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
        size = len(text.encode("utf-8"))
        if size > MAX_MANIFEST_BYTES:
            msg = f"Generated manifest exceeds maximum size of {MAX_MANIFEST_BYTES} bytes"
            raise ValidationError(
                msg,
                resource=str(self.docs_json_path),
                operation="validate_manifest",
                data={"size": size},
            )
        reparsed = json.loads(text)
        if not isinstance(reparsed, dict) or "navigation" not in reparsed:
            msg = "Generated manifest has no navigation section"
            raise ValidationError(
                msg, resource=str(self.docs_json_path), operation="validate_manifest"
            )
        return text

    def generate_navigation(self) -> dict[str, Any] | None:
        """Merge this run's navigation into ``docs.json`` with a single write.

        Returns the written document, or ``None`` when there is nothing to do.
        """
        if self.docs_json_path is None or not self._entries:
            return None

        path = self.docs_json_path
        logger.info("Generating navigation in %s", path)
        document = self.merge_into(self._read_existing(path))
        text = self.serialize(document)

        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(text, encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            msg = f"Failed to write navigation manifest: {path}"
            raise NavigationError(
                msg,
                ErrorCode.DOCS_JSON_WRITE_ERROR,
                resource=str(path),
                operation="generate_navigation",
                cause=e,
            ) from e
        logger.info("Generated navigation for %d pages", len(self._entries))
        return document
