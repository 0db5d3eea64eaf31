"""Tests for output path derivation."""

import pytest
from conftest import build_sample_model, find

from mintdoc.api_item import ApiItem
from mintdoc.api_item_kind import ApiItemKind
from mintdoc.api_model import ApiModel
from mintdoc.derive_path import INDEX_PAGE, derive_path, page_owner
from mintdoc.errors import ErrorCode, ValidationError


def _class_in_package(
    class_name: str, package_name: str = "mylib"
) -> tuple[ApiModel, ApiItem]:
    cls = ApiItem(kind=ApiItemKind.CLASS, display_name=class_name)
    entry = ApiItem(kind=ApiItemKind.ENTRY_POINT, display_name="", members=[cls])
    model = ApiModel()
    model.add_package(
        ApiItem(kind=ApiItemKind.PACKAGE, display_name=package_name, members=[entry])
    )
    # Callers hold the model; parents are weak references.
    return model, cls


def test_model_maps_to_index() -> None:
    """Verify that the model root is the site index page."""
    model = build_sample_model()
    assert derive_path(model.root) == INDEX_PAGE


def test_scope_is_stripped_from_package() -> None:
    """Verify that @scope/name contributes only the unscoped name."""
    model = build_sample_model()
    assert derive_path(model.packages[0]) == "widgets.mdx"
    assert derive_path(find(model, "Widget")) == "widgets/Widget.mdx"


def test_entry_point_and_model_contribute_no_segment() -> None:
    """Verify that wrapper items are skipped while walking the chain."""
    model = build_sample_model()
    assert derive_path(find(model, "util", "helper")) == "widgets/util/helper.mdx"


def test_constructor_name_is_normalized() -> None:
    """Verify that (constructor) becomes constructor."""
    model = build_sample_model()
    assert derive_path(find(model, "Widget", "(constructor)")) == (
        "widgets/Widget/constructor.mdx"
    )


def test_overloads_get_distinct_stable_paths() -> None:
    """Verify that sibling overloads never share a path, run after run."""
    first_model = build_sample_model()
    second_model = build_sample_model()
    first_run = [derive_path(m) for m in find(first_model, "Widget").members]
    second_run = [derive_path(m) for m in find(second_model, "Widget").members]

    assert "widgets/Widget/render.mdx" in first_run
    assert "widgets/Widget/render_1.mdx" in first_run
    assert len(set(first_run)) == len(first_run)
    assert first_run == second_run


def test_case_is_preserved_and_unsafe_characters_replaced() -> None:
    """Verify that accepted segments keep their case and lose hostile characters."""
    _model, cls = _class_in_package("My$Class")
    assert derive_path(cls) == "mylib/My_Class.mdx"


@pytest.mark.parametrize(
    "name",
    [
        "..",
        "a..b",
        "/etc",
        "\\windows",
        "a//b",
        "~root",
        "CON",
        "con",
        "Lpt1",
        "a\x00b",
        "<T>",
    ],
)
def test_dangerous_segments_are_rejected(name: str) -> None:
    """Verify that traversal, separators, control characters and device names fail."""
    _model, cls = _class_in_package(name)
    with pytest.raises(ValidationError) as exc:
        derive_path(cls)
    assert exc.value.code == ErrorCode.INVALID_FILENAME


def test_over_length_segment_is_rejected() -> None:
    """Verify that a segment longer than the cap fails."""
    _model, cls = _class_in_package("A" * 201)
    with pytest.raises(ValidationError, match="exceeds"):
        derive_path(cls)
    _model, cls = _class_in_package("A" * 200)
    assert derive_path(cls).endswith(".mdx")


def test_segment_cap_is_configurable() -> None:
    """Verify that the segment cap can be lowered."""
    _model, cls = _class_in_package("LongName")
    with pytest.raises(ValidationError):
        derive_path(cls, max_segment_length=4)


def test_dangerous_package_name_is_rejected() -> None:
    """Verify that package names are validated like any other segment."""
    _model, cls = _class_in_package("Fine", package_name="@scope/..")
    with pytest.raises(ValidationError):
        derive_path(cls)


def test_empty_display_name_uses_fallback_segment() -> None:
    """Verify that a nameless page-producing item still gets a path."""
    _model, cls = _class_in_package("   ")
    assert derive_path(cls) == "mylib/unnamed-class.mdx"


def test_item_with_no_segments_is_rejected() -> None:
    """Verify that a lone entry point yields a validation error."""
    entry = ApiItem(kind=ApiItemKind.ENTRY_POINT, display_name="")
    with pytest.raises(ValidationError, match="no usable path segments"):
        derive_path(entry)


def test_enum_members_live_on_the_enum_page() -> None:
    """Verify that inline-listing members resolve to their owner's page."""
    model = build_sample_model()
    red = find(model, "Color", "Red")
    assert page_owner(red) is find(model, "Color")
    assert page_owner(model.packages[0].members[0]) is model.packages[0]


def test_unnamed_overloads_keep_their_suffix() -> None:
    """Verify that the fallback segment still carries the overload suffix."""
    first = ApiItem(kind=ApiItemKind.FUNCTION, display_name="", overload_index=1)
    second = ApiItem(kind=ApiItemKind.FUNCTION, display_name=" ", overload_index=2)
    entry = ApiItem(kind=ApiItemKind.ENTRY_POINT, display_name="", members=[first, second])
    model = ApiModel()
    model.add_package(ApiItem(kind=ApiItemKind.PACKAGE, display_name="mylib", members=[entry]))

    assert derive_path(first) == "mylib/unnamed-function.mdx"
    assert derive_path(second) == "mylib/unnamed-function_1.mdx"
