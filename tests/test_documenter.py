"""Tests for the generation engine."""

import itertools
import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from conftest import build_sample_model

from mintdoc.api_item import ApiItem
from mintdoc.api_item_kind import ApiItemKind
from mintdoc.api_model import ApiModel
from mintdoc.api_resolution_cache import ApiResolutionCache
from mintdoc.documenter import Documenter
from mintdoc.errors import BudgetError, ErrorCode, RenderError, ValidationError
from mintdoc.navigation_manager import NavigationManager
from mintdoc.resource_budget import ResourceBudget, ResourceLimits

EXPECTED_PAGES = {
    "index.mdx",
    "widgets.mdx",
    "widgets/Widget.mdx",
    "widgets/Widget/constructor.mdx",
    "widgets/Widget/name.mdx",
    "widgets/Widget/render.mdx",
    "widgets/Widget/render_1.mdx",
    "widgets/Gadget.mdx",
    "widgets/Gadget/id.mdx",
    "widgets/createWidget.mdx",
    "widgets/Color.mdx",
    "widgets/util.mdx",
    "widgets/util/helper.mdx",
}


def _documenter(
    tmp_path: Path, limits: ResourceLimits | None = None, **kwargs: object
) -> Documenter:
    out = tmp_path / "reference"
    return Documenter(
        build_sample_model(),
        out,
        navigation=NavigationManager(tmp_path / "docs.json", out),
        budget=ResourceBudget(limits),
        **kwargs,  # type: ignore[arg-type]
    )


def _package_model(*members: ApiItem) -> ApiModel:
    entry = ApiItem(kind=ApiItemKind.ENTRY_POINT, display_name="", members=list(members))
    model = ApiModel()
    model.add_package(
        ApiItem(kind=ApiItemKind.PACKAGE, display_name="mylib", members=[entry])
    )
    return model


def _written(tmp_path: Path) -> dict[str, bytes]:
    out = tmp_path / "reference"
    return {
        p.relative_to(out).as_posix(): p.read_bytes()
        for p in sorted(out.rglob("*.mdx"))
    }


def test_generate_writes_one_page_per_item(tmp_path: Path) -> None:
    """Verify the page set: wrappers skipped, enum members inline, model as index."""
    documenter = _documenter(tmp_path)
    pages = documenter.generate()

    assert {p.output_path for p in pages} == EXPECTED_PAGES
    assert set(_written(tmp_path)) == EXPECTED_PAGES
    assert documenter.total_output_size == sum(p.size for p in pages)


def test_pages_are_written_in_pre_order(tmp_path: Path) -> None:
    """Verify that an owner is always written before its members."""
    paths = [p.output_path for p in _documenter(tmp_path).generate()]
    assert paths[0] == "index.mdx"
    assert paths.index("widgets/Widget.mdx") < paths.index("widgets/Widget/name.mdx")
    assert paths.index("widgets/util.mdx") < paths.index("widgets/util/helper.mdx")


def test_member_pages_record_their_owner(tmp_path: Path) -> None:
    """Verify parent_path is set only below paged containers."""
    pages = {p.output_path: p for p in _documenter(tmp_path).generate()}

    assert pages["widgets/Widget/name.mdx"].parent_path == "widgets/Widget.mdx"
    assert pages["widgets/util/helper.mdx"].parent_path == "widgets/util.mdx"
    assert pages["widgets/Widget.mdx"].parent_path is None
    assert pages["widgets.mdx"].parent_path is None


def test_page_metadata_and_breadcrumb(tmp_path: Path) -> None:
    """Verify title, icon, description and breadcrumb of a member page."""
    pages = {p.output_path: p for p in _documenter(tmp_path).generate()}

    widget = pages["widgets/Widget.mdx"]
    assert widget.title == "Widget class"
    assert widget.icon == "box"
    assert widget.description == "A widget. Pair it with Gadget."

    ctor = pages["widgets/Widget/constructor.mdx"]
    assert ctor.title == "constructor"
    assert [(b.name, b.path) for b in ctor.breadcrumb] == [
        ("@acme/widgets", "widgets.mdx"),
        ("Widget", "widgets/Widget.mdx"),
        ("constructor", "widgets/Widget/constructor.mdx"),
    ]
    assert pages["index.mdx"].title == "API Reference"
    assert pages["widgets.mdx"].title == "widgets package"


def test_rendered_content_resolves_links(tmp_path: Path) -> None:
    """Verify that inline links and excerpt references become relative links."""
    _documenter(tmp_path).generate()
    files = _written(tmp_path)

    widget = files["widgets/Widget.mdx"].decode("utf-8")
    assert widget.startswith("---\ntitle: Widget class\n")
    assert "A widget. Pair it with [Gadget](./Gadget)." in widget
    assert "[render(target)](./Widget/render_1)" in widget

    create = files["widgets/createWidget.mdx"].decode("utf-8")
    assert "[Widget](./Widget)" in create

    color = files["widgets/Color.mdx"].decode("utf-8")
    assert '| `Red` | `"red"` |' in color


def test_navigation_is_merged_after_the_walk(tmp_path: Path) -> None:
    """Verify the manifest groups, nesting and that the model has no entry."""
    (tmp_path / "docs.json").write_text(
        json.dumps({"navigation": [{"group": "Guides", "pages": ["intro"]}]}),
        encoding="utf-8",
    )
    _documenter(tmp_path).generate()

    manifest = json.loads((tmp_path / "docs.json").read_text(encoding="utf-8"))
    guides, api = manifest["navigation"]
    assert guides == {"group": "Guides", "pages": ["intro"]}
    assert api["group"] == "API"

    categories = {g["group"]: g for g in api["pages"]}
    assert sorted(categories) == [
        "Classes",
        "Enumerations",
        "Functions",
        "Interfaces",
        "Namespaces",
        "Packages",
    ]
    assert categories["Classes"]["pages"] == [
        {
            "group": "Widget",
            "pages": [
                "reference/widgets/Widget",
                "reference/widgets/Widget/constructor",
                "reference/widgets/Widget/name",
                "reference/widgets/Widget/render",
                "reference/widgets/Widget/render_1",
            ],
        }
    ]
    assert categories["Packages"]["pages"] == ["reference/widgets"]
    assert "reference/index" not in json.dumps(manifest)


def test_rerun_is_byte_identical(tmp_path: Path) -> None:
    """Verify that regenerating an unchanged tree changes nothing on disk."""
    _documenter(tmp_path).generate()
    first_pages = _written(tmp_path)
    first_manifest = (tmp_path / "docs.json").read_bytes()

    _documenter(tmp_path).generate()

    assert _written(tmp_path) == first_pages
    assert (tmp_path / "docs.json").read_bytes() == first_manifest
    assert b"\r\n" not in b"".join(first_pages.values())


def test_recursion_budget_aborts_without_manifest(tmp_path: Path) -> None:
    """Verify a too-deep tree fails with RECURSION_LIMIT and writes no manifest."""
    documenter = _documenter(tmp_path, ResourceLimits(max_recursion_depth=3))

    with pytest.raises(BudgetError) as exc:
        documenter.generate()

    assert exc.value.code == ErrorCode.RECURSION_LIMIT
    assert "Widget" in str(exc.value)
    assert not (tmp_path / "docs.json").exists()


def test_recursion_budget_at_exact_depth_passes(tmp_path: Path) -> None:
    """Verify that the deepest level of the sample tree fits a limit of four."""
    pages = _documenter(tmp_path, ResourceLimits(max_recursion_depth=4)).generate()
    assert len(pages) == len(EXPECTED_PAGES)


def test_file_size_budget_aborts_without_manifest(tmp_path: Path) -> None:
    """Verify a page over the per-file limit fails before it is written."""
    documenter = _documenter(tmp_path, ResourceLimits(max_file_size_bytes=10))

    with pytest.raises(BudgetError) as exc:
        documenter.generate()

    assert exc.value.code == ErrorCode.FILE_SIZE_LIMIT
    assert _written(tmp_path) == {}
    assert not (tmp_path / "docs.json").exists()


def test_total_size_budget_aborts_without_manifest(tmp_path: Path) -> None:
    """Verify cumulative output over the limit fails the run."""
    documenter = _documenter(tmp_path, ResourceLimits(max_total_output_bytes=600))

    with pytest.raises(BudgetError) as exc:
        documenter.generate()

    assert exc.value.code == ErrorCode.TOTAL_SIZE_LIMIT
    assert documenter.total_output_size <= 600
    assert not (tmp_path / "docs.json").exists()


def test_time_budget_aborts(tmp_path: Path) -> None:
    """Verify that exceeding the wall-clock allowance fails the run."""
    ticks = itertools.count(step=100)
    out = tmp_path / "reference"
    documenter = Documenter(
        build_sample_model(),
        out,
        navigation=NavigationManager(tmp_path / "docs.json", out),
        budget=ResourceBudget(
            ResourceLimits(max_processing_seconds=150), clock=lambda: next(ticks)
        ),
    )

    with pytest.raises(BudgetError) as exc:
        documenter.generate()

    assert exc.value.code == ErrorCode.TIME_LIMIT
    assert not (tmp_path / "docs.json").exists()


def test_render_failure_is_fatal(tmp_path: Path) -> None:
    """Verify that a renderer exception aborts the run as a RenderError."""
    renderer = MagicMock()
    renderer.render.side_effect = RuntimeError("template exploded")
    documenter = _documenter(tmp_path, renderer=renderer)

    with pytest.raises(RenderError) as exc:
        documenter.generate()

    assert isinstance(exc.value.__cause__, RuntimeError)
    assert exc.value.resource == "Model"
    assert not (tmp_path / "docs.json").exists()


def test_cache_is_used_for_repeated_references(tmp_path: Path) -> None:
    """Verify that references are resolved through the injected cache."""
    cache = ApiResolutionCache(100)
    _documenter(tmp_path, cache=cache).generate()

    stats = cache.get_stats()
    assert stats.miss_count > 0
    assert stats.hit_count > 0


def test_injected_empty_cache_is_kept(tmp_path: Path) -> None:
    """Verify that an empty or disabled cache passed in is not replaced."""
    cache = ApiResolutionCache(enabled=False)
    documenter = _documenter(tmp_path, cache=cache)
    assert documenter.cache is cache

    documenter.generate()

    stats = cache.get_stats()
    assert stats.enabled is False
    assert len(cache) == 0


def test_items_deriving_the_same_path_are_rejected(tmp_path: Path) -> None:
    """Verify that a class and an interface of the same name cannot share a page."""
    model = _package_model(
        ApiItem(kind=ApiItemKind.CLASS, display_name="Foo"),
        ApiItem(kind=ApiItemKind.INTERFACE, display_name="Foo"),
    )
    documenter = Documenter(model, tmp_path / "reference")

    with pytest.raises(ValidationError) as exc:
        documenter.generate()

    assert exc.value.code == ErrorCode.INVALID_FILENAME
    assert exc.value.data["path"] == "mylib/Foo.mdx"
    assert "Class mylib.Foo" in exc.value.message
    assert "Interface mylib.Foo" in exc.value.message
    assert not (tmp_path / "docs.json").exists()


def test_overload_suffix_cannot_shadow_a_named_item(tmp_path: Path) -> None:
    """Verify that overload 2 of run collides with a variable called run_1."""
    model = _package_model(
        ApiItem(kind=ApiItemKind.FUNCTION, display_name="run", overload_index=1),
        ApiItem(kind=ApiItemKind.VARIABLE, display_name="run_1"),
        ApiItem(kind=ApiItemKind.FUNCTION, display_name="run", overload_index=2),
    )
    documenter = Documenter(model, tmp_path / "reference")

    with pytest.raises(ValidationError) as exc:
        documenter.generate()

    assert exc.value.code == ErrorCode.INVALID_FILENAME
    assert exc.value.data == {"path": "mylib/run_1.mdx", "claimed_by": "mylib.run_1"}


def test_unnamed_overloads_get_distinct_pages(tmp_path: Path) -> None:
    """Verify that nameless overloads do not overwrite each other."""
    model = _package_model(
        ApiItem(kind=ApiItemKind.FUNCTION, display_name="", overload_index=1),
        ApiItem(kind=ApiItemKind.FUNCTION, display_name="", overload_index=2),
    )
    pages = Documenter(model, tmp_path / "reference").generate()

    assert [p.output_path for p in pages] == [
        "index.mdx",
        "mylib.mdx",
        "mylib/unnamed-function.mdx",
        "mylib/unnamed-function_1.mdx",
    ]


def test_unnamed_items_stay_out_of_the_sidebar(tmp_path: Path) -> None:
    """Verify that a nameless namespace gets a page but no navigation entry."""
    model = _package_model(
        ApiItem(
            kind=ApiItemKind.NAMESPACE,
            display_name="  ",
            members=[ApiItem(kind=ApiItemKind.FUNCTION, display_name="helper")],
        )
    )
    out = tmp_path / "reference"
    documenter = Documenter(
        model, out, navigation=NavigationManager(tmp_path / "docs.json", out)
    )
    pages = {p.output_path: p for p in documenter.generate()}

    assert "mylib/unnamed-namespace.mdx" in pages
    helper = pages["mylib/unnamed-namespace/helper.mdx"]
    assert [b.name for b in helper.breadcrumb] == ["mylib", "helper"]

    nav_pages = {e.page_path: e.display_name for e in documenter.navigation.entries}
    assert "reference/mylib/unnamed-namespace" not in nav_pages
    assert all(name.strip() for name in nav_pages.values())
